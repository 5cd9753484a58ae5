"""
Catalog models: Category and Product.
"""

from django.db import models
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """Product grouping. Products refer to it by id, it does not own them."""

    name = models.CharField(max_length=100, verbose_name=_('Name'))
    description = models.TextField(blank=True, default='', verbose_name=_('Description'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('Category')
        verbose_name_plural = _('Categories')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class ProductQuerySet(models.QuerySet):

    def with_quantity(self):
        """Annotate the current stock balance (0 when no stock row exists)."""
        return self.annotate(current_quantity=Coalesce('stock__quantity', 0))


class Product(models.Model):
    """
    Tracked item.

    A zero-quantity Stock row is provisioned with every product
    (see stockroom.services.catalog).
    """

    name = models.CharField(max_length=200, verbose_name=_('Name'))
    description = models.TextField(blank=True, default='', verbose_name=_('Description'))
    sku = models.CharField(max_length=64, unique=True, verbose_name=_('SKU'))
    image_url = models.URLField(max_length=500, blank=True, default='', verbose_name=_('Image URL'))
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Category'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering = ['name']

    def __str__(self) -> str:
        return f"{self.name} ({self.sku})"
