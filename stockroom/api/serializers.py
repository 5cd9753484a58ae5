"""
Stockroom API serializers.

Keys are camelCase to match the web client (productId, imageURL, ...).
"""

from datetime import datetime, time

from django.utils.dateparse import parse_date
from rest_framework import serializers

from stockroom.models import Stock, StockMovement


class DateBoundField(serializers.DateTimeField):
    """
    Datetime filter bound that also accepts a plain date.

    A date expands to the start of that day, or to its last instant with
    end_of_day=True, so "endDate=2024-05-31" includes the whole day.
    """

    def __init__(self, *, end_of_day=False, **kwargs):
        self.end_of_day = end_of_day
        super().__init__(**kwargs)

    def to_internal_value(self, value):
        if isinstance(value, str):
            try:
                day = parse_date(value.strip())
            except ValueError:
                # Well-formed but impossible, e.g. 2024-02-30
                self.fail('invalid', format='YYYY-MM-DD')
            if day is not None:
                bound = datetime.combine(day, time.max if self.end_of_day else time.min)
                return self.enforce_timezone(bound)
        return super().to_internal_value(value)


class StockRequestSerializer(serializers.Serializer):
    """Body of /api/stock/import and /api/stock/export."""

    productId = serializers.IntegerField()
    # Positivity is enforced by the stock engine (INVALID_QUANTITY)
    quantity = serializers.IntegerField()
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class MovementFilterSerializer(serializers.Serializer):
    """Optional filters for /api/stock/movements."""

    startDate = DateBoundField(required=False, allow_null=True, default=None)
    endDate = DateBoundField(required=False, allow_null=True, default=None, end_of_day=True)
    productId = serializers.IntegerField(required=False, allow_null=True, default=None)
    categoryId = serializers.IntegerField(required=False, allow_null=True, default=None)


class MovementSerializer(serializers.ModelSerializer):
    """Movement DTO with product name/image and actor username."""

    productId = serializers.IntegerField(source='product_id', read_only=True)
    product = serializers.SerializerMethodField()
    user = serializers.SerializerMethodField()

    class Meta:
        model = StockMovement
        fields = ['id', 'type', 'quantity', 'date', 'notes', 'productId', 'product', 'user']
        read_only_fields = fields

    def get_product(self, obj):
        return {
            'id': obj.product_id,
            'name': obj.product.name,
            'imageURL': obj.product.image_url,
        }

    def get_user(self, obj):
        return {'username': obj.user.username if obj.user_id else None}


class StockSummarySerializer(serializers.ModelSerializer):
    """Balance per product for /api/stock/summary."""

    productId = serializers.IntegerField(source='product_id', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)
    product = serializers.SerializerMethodField()

    class Meta:
        model = Stock
        fields = ['id', 'productId', 'quantity', 'updatedAt', 'product']
        read_only_fields = fields

    def get_product(self, obj):
        product = obj.product
        category = product.category
        return {
            'id': product.pk,
            'name': product.name,
            'sku': product.sku,
            'imageURL': product.image_url,
            'categoryId': product.category_id,
            'category': {'id': category.pk, 'name': category.name} if category else None,
        }


class SummaryFilterSerializer(serializers.Serializer):
    """Optional filter for /api/stock/summary and /api/stock/current."""

    categoryId = serializers.IntegerField(required=False, allow_null=True, default=None)
