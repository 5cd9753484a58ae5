"""
Catalog Admin.

Product and category edits go through the admin forms directly; deletions
are routed through the catalog service so the stock ledger and deletion
policies are respected.
"""

from django.contrib import admin, messages
from django.http import HttpResponseRedirect
from django.urls import reverse

from catalog.models import Category, Product
from stockroom.exceptions import CatalogError


class CatalogDeleteAdmin(admin.ModelAdmin):
    """Deletes through stockroom.catalog; policy refusals become error messages."""

    actions = ['delete_via_catalog']

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions

    def delete_view(self, request, object_id, extra_context=None):
        try:
            return super().delete_view(request, object_id, extra_context)
        except CatalogError as exc:
            self.message_user(request, exc.message, messages.ERROR)
            opts = self.model._meta
            return HttpResponseRedirect(reverse(
                f'admin:{opts.app_label}_{opts.model_name}_change',
                args=[object_id],
                current_app=self.admin_site.name,
            ))

    def delete_from_catalog(self, obj):
        raise NotImplementedError

    def delete_model(self, request, obj):
        self.delete_from_catalog(obj)

    @admin.action(description='Delete selected')
    def delete_via_catalog(self, request, queryset):
        for obj in queryset:
            try:
                self.delete_from_catalog(obj)
            except CatalogError as exc:
                self.message_user(request, f"{obj}: {exc.message}", messages.ERROR)


@admin.register(Category)
class CategoryAdmin(CatalogDeleteAdmin):
    list_display = ['name', 'description', 'updated_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def delete_from_catalog(self, obj):
        from stockroom import catalog
        catalog.delete_category(obj.pk)


@admin.register(Product)
class ProductAdmin(CatalogDeleteAdmin):
    list_display = ['name', 'sku', 'category', 'updated_at']
    list_filter = ['category']
    search_fields = ['name', 'sku']
    readonly_fields = ['created_at', 'updated_at']
    list_select_related = ['category']

    def save_model(self, request, obj, form, change):
        from stockroom.models import Stock

        super().save_model(request, obj, form, change)
        if not change:
            Stock.objects.get_or_create(product=obj)

    def get_deleted_objects(self, objs, request):
        # Stock rows and movements are removed (or the delete refused) by
        # PRODUCT_DELETE_POLICY, not by admin delete permissions
        from stockroom.models import Stock, StockMovement

        deleted, model_count, perms_needed, protected = super().get_deleted_objects(objs, request)
        ledger = {str(Stock._meta.verbose_name), str(StockMovement._meta.verbose_name)}
        perms_needed = {name for name in perms_needed if str(name) not in ledger}
        return deleted, model_count, perms_needed, []

    def delete_from_catalog(self, obj):
        from stockroom import catalog
        catalog.delete_product(obj.pk)
