"""
Catalog API serializers.

Output serializers render model instances; input serializers only parse
and type-check. Business rules (required name, unique SKU, existing
category) are enforced by stockroom.catalog.
"""

from rest_framework import serializers

from catalog.models import Category, Product


class CategorySerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Category
        fields = ['id', 'name', 'description', 'createdAt', 'updatedAt']
        read_only_fields = fields


class ProductSerializer(serializers.ModelSerializer):
    """Product DTO including the current stock quantity."""

    imageURL = serializers.CharField(source='image_url', read_only=True)
    categoryId = serializers.IntegerField(source='category_id', read_only=True)
    category = CategorySerializer(read_only=True)
    quantity = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Product
        fields = [
            'id',
            'name',
            'description',
            'sku',
            'imageURL',
            'categoryId',
            'category',
            'quantity',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields

    def get_quantity(self, obj):
        return getattr(obj, 'current_quantity', 0)


class CategoryInputSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)


class ProductInputSerializer(serializers.Serializer):
    name = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    sku = serializers.CharField(required=False, allow_blank=True)
    imageURL = serializers.URLField(required=False, allow_blank=True)
    categoryId = serializers.IntegerField(required=False, allow_null=True)

    # camelCase to service keyword arguments
    field_map = {
        'name': 'name',
        'description': 'description',
        'sku': 'sku',
        'imageURL': 'image_url',
        'categoryId': 'category_id',
    }

    def to_service_kwargs(self) -> dict:
        return {
            self.field_map[key]: value
            for key, value in self.validated_data.items()
        }
