"""
StockMovement model: Immutable ledger of quantity changes.
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import Case, F, IntegerField, Q, Sum, When
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockroom.models.enums import MovementType


class MovementQuerySet(models.QuerySet):
    """QuerySet with ledger filters and aggregates."""

    def imports(self):
        return self.filter(type=MovementType.IMPORT)

    def exports(self):
        return self.filter(type=MovementType.EXPORT)

    def between(self, start=None, end=None):
        """Inclusive date range; each bound is optional."""
        qs = self
        if start is not None:
            qs = qs.filter(date__gte=start)
        if end is not None:
            qs = qs.filter(date__lte=end)
        return qs

    def for_category(self, category_id):
        return self.filter(product__category_id=category_id)

    def signed_total(self) -> int:
        """Sum of imports minus sum of exports."""
        return self.aggregate(
            t=Coalesce(
                Sum(
                    Case(
                        When(type=MovementType.EXPORT, then=-F('quantity')),
                        default=F('quantity'),
                        output_field=IntegerField(),
                    )
                ),
                0,
            )
        )['t']


class StockMovement(models.Model):
    """
    Immutable record of a stock change.

    Rules:
    - NEVER update() or delete() a single movement
    - Corrections are new movements in the opposite direction
    - Updates Stock.quantity atomically on save()

    This is the ONLY model that changes quantity.
    """

    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Product'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='stock_movements',
        verbose_name=_('User'),
    )
    type = models.CharField(
        max_length=10,
        choices=MovementType.choices,
        verbose_name=_('Type'),
    )
    quantity = models.PositiveIntegerField(
        verbose_name=_('Quantity'),
        help_text=_('Always positive; direction comes from type'),
    )
    date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Date'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Notes'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Stock movement')
        verbose_name_plural = _('Stock movements')
        ordering = ['-date', '-id']
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name='movement_quantity_positive',
            ),
        ]
        indexes = [
            models.Index(fields=['product', 'date'], name='stockroom_mv_product_date_idx'),
        ]

    @property
    def delta(self) -> int:
        """Signed quantity: positive for import, negative for export."""
        if self.type == MovementType.EXPORT:
            return -self.quantity
        return self.quantity

    def save(self, *args, **kwargs):
        """Save movement and update the stock balance atomically."""
        if self.pk:
            raise ValueError(
                "Stock movements are immutable. "
                "To correct one, record a new movement in the opposite direction."
            )

        if self.type not in MovementType.values:
            raise ValueError(f"Unknown movement type: {self.type!r}")
        if not self.quantity or self.quantity <= 0:
            raise ValueError("Movement quantity must be positive")

        with transaction.atomic():
            super().save(*args, **kwargs)

            # Import here to avoid circular import
            from stockroom.models.stock import Stock

            updated = Stock.objects.filter(product_id=self.product_id).update(
                quantity=F('quantity') + self.delta,
                updated_at=timezone.now(),
            )
            if not updated:
                raise ValueError(f"No stock row for product {self.product_id}")

    def delete(self, *args, **kwargs):
        """Prevent deletion. Movements are immutable."""
        raise ValueError(
            "Stock movements are immutable. "
            "To reverse one, record a new movement in the opposite direction."
        )

    def __str__(self) -> str:
        sign = '+' if self.delta > 0 else ''
        return f"{sign}{self.delta} | {self.product_id} | {self.notes}"
