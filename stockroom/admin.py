"""
Stockroom Admin.

Provides read-only views for production debugging:
- Stock: read-only (product, quantity)
- StockMovement: read-only audit trail (date, type, quantity, user, notes)

Balances only change through stockroom.stock, so nothing here can add,
change or delete rows.
"""

import logging

from django.contrib import admin
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from stockroom.models import Stock, StockMovement

logger = logging.getLogger(__name__)


class ReadOnlyAdmin(admin.ModelAdmin):

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =========================================================================
# STOCK ADMIN (read-only)
# =========================================================================

@admin.register(Stock)
class StockAdmin(ReadOnlyAdmin):
    """Stock admin, read-only. Stock only changes via Stock service."""

    list_display = ['product', 'quantity', 'ledger_display', 'updated_at']
    search_fields = ['product__name', 'product__sku']
    readonly_fields = ['product', 'quantity', 'created_at', 'updated_at']
    list_select_related = ['product']
    ordering = ['product__name']
    actions = ['recalculate_stocks']

    @admin.display(description=_('Ledger total'))
    def ledger_display(self, obj):
        return StockMovement.objects.filter(product_id=obj.product_id).signed_total()

    @admin.action(description=_('Recalculate selected balances from movements'))
    def recalculate_stocks(self, request, queryset):
        fixed = 0
        for product_id in queryset.values_list('product_id', flat=True):
            with transaction.atomic():
                stock = Stock.objects.locked(product_id)
                before = stock.quantity
                if stock.recalculate() != before:
                    fixed += 1
        logger.info("admin.recalculate_stocks", extra={"checked": queryset.count(), "fixed": fixed})
        self.message_user(request, _('{count} balance(s) corrected.').format(count=fixed))


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(ReadOnlyAdmin):
    """StockMovement admin, read-only. Immutable audit trail."""

    list_display = ['date', 'product', 'type', 'quantity', 'user', 'notes']
    list_filter = ['type', 'date', 'product__category']
    search_fields = ['product__name', 'product__sku', 'notes']
    readonly_fields = ['product', 'user', 'type', 'quantity', 'date', 'notes', 'created_at']
    list_select_related = ['product', 'user']
    date_hierarchy = 'date'
