"""
Stock model: Current balance per product.
"""

import logging

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger('stockroom')


class StockManager(models.Manager):
    """Manager with helper methods for Stock queries."""

    def for_product(self, product_id):
        return self.filter(product_id=product_id)

    def locked(self, product_id):
        """Row-locked stock for a product. Must run inside transaction.atomic()."""
        return self.select_for_update().filter(product_id=product_id).first()

    def with_product(self):
        return self.select_related('product', 'product__category')


class Stock(models.Model):
    """
    On-hand quantity of a product.

    One row per product. quantity is a cache of the movement ledger:
    - Updated atomically by StockMovement.save()
    - balance() reads it directly instead of summing movements
    - recalculate() rebuilds it from the ledger (check_ledger --fix)
    """

    product = models.OneToOneField(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='stock',
        verbose_name=_('Product'),
    )

    # Balance cache (updated atomically by StockMovement)
    quantity = models.IntegerField(
        default=0,
        verbose_name=_('Quantity'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockManager()

    class Meta:
        verbose_name = _('Stock')
        verbose_name_plural = _('Stocks')
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gte=0),
                name='stock_quantity_non_negative',
            ),
        ]

    def recalculate(self) -> int:
        """
        Reset quantity to imports minus exports and return it.

        Caller should hold the row lock (Stock.objects.locked) so no
        movement lands between the sum and the write.
        """
        from stockroom.models.movement import StockMovement

        total = StockMovement.objects.filter(product_id=self.product_id).signed_total()

        if total != self.quantity:
            old = self.quantity
            self.quantity = total
            self.save(update_fields=['quantity', 'updated_at'])

            logger.warning(
                f"Stock {self.pk} recalculated: {old} → {total} "
                f"(diff: {total - old})"
            )

        return total

    def __str__(self) -> str:
        return f"{self.product}: {self.quantity}"
