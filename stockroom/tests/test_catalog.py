"""
Tests for catalog management (stockroom.catalog).
"""

import pytest
from django.core.exceptions import ImproperlyConfigured

from catalog.models import Category, Product
from stockroom import catalog, stock, CatalogError
from stockroom.models import Stock, StockMovement


pytestmark = pytest.mark.django_db


class TestCategories:

    def test_create_and_list(self, db):
        catalog.create_category('Tools')
        catalog.create_category('Electrical', 'Cables and plugs')

        assert [c.name for c in catalog.list_categories()] == ['Electrical', 'Tools']

    def test_name_required(self, db):
        with pytest.raises(CatalogError) as exc:
            catalog.create_category('   ')

        assert exc.value.code == 'NAME_REQUIRED'

    def test_update(self, category):
        updated = catalog.update_category(category.pk, description='Fasteners')

        assert updated.name == 'Hardware'
        assert updated.description == 'Fasteners'

    def test_get_missing(self, db):
        with pytest.raises(CatalogError) as exc:
            catalog.get_category(12345)

        assert exc.value.code == 'CATEGORY_NOT_FOUND'
        assert exc.value.status_code == 404

    def test_delete_detaches_products(self, category, product):
        """Default policy: products survive with no category."""
        catalog.delete_category(category.pk)

        assert not Category.objects.filter(pk=category.pk).exists()
        assert Product.objects.get(pk=product.pk).category_id is None

    def test_delete_rejected_while_in_use(self, category, product, stockroom_config):
        stockroom_config(CATEGORY_DELETE_POLICY='reject')

        with pytest.raises(CatalogError) as exc:
            catalog.delete_category(category.pk)

        assert exc.value.code == 'CATEGORY_IN_USE'
        assert exc.value.status_code == 409
        assert Category.objects.filter(pk=category.pk).exists()

    def test_reject_policy_allows_empty_category(self, other_category, stockroom_config):
        stockroom_config(CATEGORY_DELETE_POLICY='reject')

        catalog.delete_category(other_category.pk)

        assert not Category.objects.filter(pk=other_category.pk).exists()

    def test_unknown_policy(self, category, stockroom_config):
        stockroom_config(CATEGORY_DELETE_POLICY='shrug')

        with pytest.raises(ImproperlyConfigured):
            catalog.delete_category(category.pk)


class TestProducts:

    def test_create_provisions_zero_stock(self, category):
        """A new product starts with a stock row at quantity 0."""
        product = catalog.create_product('Nut M6', sku='NUT-006', category_id=category.pk)

        assert Stock.objects.get(product=product).quantity == 0
        assert product.current_quantity == 0
        assert stock.balance(product.pk) == 0

    def test_sku_required(self, db):
        with pytest.raises(CatalogError) as exc:
            catalog.create_product('Nut M6', sku='')

        assert exc.value.code == 'SKU_REQUIRED'

    def test_sku_unique(self, product):
        with pytest.raises(CatalogError) as exc:
            catalog.create_product('Another screw', sku=product.sku)

        assert exc.value.code == 'SKU_TAKEN'
        assert Product.objects.count() == 1

    def test_unknown_category(self, db):
        with pytest.raises(CatalogError) as exc:
            catalog.create_product('Nut M6', sku='NUT-006', category_id=999)

        assert exc.value.code == 'CATEGORY_NOT_FOUND'
        assert not Product.objects.exists()
        assert not Stock.objects.exists()

    def test_list_includes_quantity(self, product, other_product):
        stock.import_stock(product.pk, 4)

        quantities = {p.pk: p.current_quantity for p in catalog.list_products()}

        assert quantities == {product.pk: 4, other_product.pk: 0}

    def test_update_keeps_stock(self, product, other_category):
        stock.import_stock(product.pk, 4)

        updated = catalog.update_product(
            product.pk, name='Screw 6mm zinc', category_id=other_category.pk
        )

        assert updated.name == 'Screw 6mm zinc'
        assert updated.sku == 'SCR-006'
        assert updated.category_id == other_category.pk
        assert updated.current_quantity == 4

    def test_update_sku_collision(self, product, other_product):
        with pytest.raises(CatalogError) as exc:
            catalog.update_product(other_product.pk, sku=product.sku)

        assert exc.value.code == 'SKU_TAKEN'

    def test_delete_cascades_history(self, product, other_product):
        """Default policy: stock row and movements go with the product."""
        stock.import_stock(product.pk, 10)
        stock.export_stock(product.pk, 2)
        stock.import_stock(other_product.pk, 1)

        catalog.delete_product(product.pk)

        assert not Product.objects.filter(pk=product.pk).exists()
        assert not Stock.objects.filter(product_id=product.pk).exists()
        assert not StockMovement.objects.filter(product_id=product.pk).exists()
        assert stock.balance(other_product.pk) == 1

    def test_delete_protected_by_history(self, product, stockroom_config):
        stockroom_config(PRODUCT_DELETE_POLICY='protect')
        stock.import_stock(product.pk, 10)

        with pytest.raises(CatalogError) as exc:
            catalog.delete_product(product.pk)

        assert exc.value.code == 'PRODUCT_HAS_MOVEMENTS'
        assert stock.balance(product.pk) == 10

    def test_protect_allows_unused_product(self, product, stockroom_config):
        stockroom_config(PRODUCT_DELETE_POLICY='protect')

        catalog.delete_product(product.pk)

        assert not Product.objects.filter(pk=product.pk).exists()

    def test_delete_missing(self, db):
        with pytest.raises(CatalogError) as exc:
            catalog.delete_product(777)

        assert exc.value.code == 'PRODUCT_NOT_FOUND'
