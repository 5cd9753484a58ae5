"""
Catalog management: Products and categories.

Product creation and deletion touch the ledger (stock row, movement
history), so they live next to the stock services and share their
transactions.

Deletion policies (settings STOCKROOM):
    CATEGORY_DELETE_POLICY
        "detach": products keep existing with category=None (default)
        "reject": CatalogError('CATEGORY_IN_USE') while products reference it
    PRODUCT_DELETE_POLICY
        "cascade": movements and stock row are removed with the product (default)
        "protect": CatalogError('PRODUCT_HAS_MOVEMENTS') if any movement exists
"""

import logging

from django.core.exceptions import ImproperlyConfigured
from django.db import IntegrityError, transaction

from catalog.models import Category, Product
from stockroom.adapters import get_ledger_store
from stockroom.conf import (
    CATEGORY_DELETE_POLICIES,
    PRODUCT_DELETE_POLICIES,
    stockroom_settings,
)
from stockroom.exceptions import CatalogError
from stockroom.models import Stock, StockMovement

logger = logging.getLogger('catalog')

CATEGORY_FIELDS = ('name', 'description')
PRODUCT_FIELDS = ('name', 'description', 'sku', 'image_url', 'category_id')


def _clean(value) -> str:
    return (value or '').strip()


def _check_category(category_id):
    if category_id is not None and not Category.objects.filter(pk=category_id).exists():
        raise CatalogError('CATEGORY_NOT_FOUND', category_id=category_id)


def _check_sku(sku: str, exclude_pk=None):
    if not sku:
        raise CatalogError('SKU_REQUIRED')
    qs = Product.objects.filter(sku=sku)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise CatalogError('SKU_TAKEN', sku=sku)


def _policy(name: str, allowed: tuple) -> str:
    value = getattr(stockroom_settings, name)
    if value not in allowed:
        raise ImproperlyConfigured(
            f"STOCKROOM['{name}'] must be one of {allowed}, got {value!r}"
        )
    return value


class CatalogManager:
    """Product and category CRUD with referential checks."""

    # ══════════════════════════════════════════════════════════════
    # CATEGORIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_categories(cls):
        return Category.objects.all()

    @classmethod
    def get_category(cls, category_id: int) -> Category:
        category = Category.objects.filter(pk=category_id).first()
        if category is None:
            raise CatalogError('CATEGORY_NOT_FOUND', category_id=category_id)
        return category

    @classmethod
    def create_category(cls, name: str, description: str = '') -> Category:
        name = _clean(name)
        if not name:
            raise CatalogError('NAME_REQUIRED')

        category = Category.objects.create(name=name, description=description or '')
        logger.info("catalog.category.created", extra={"category_id": category.pk})
        return category

    @classmethod
    def update_category(cls, category_id: int, **fields) -> Category:
        category = cls.get_category(category_id)

        for field in CATEGORY_FIELDS:
            if field in fields:
                setattr(category, field, fields[field] or '')

        category.name = _clean(category.name)
        if not category.name:
            raise CatalogError('NAME_REQUIRED')

        category.save()
        return category

    @classmethod
    def delete_category(cls, category_id: int) -> None:
        """
        Delete a category without leaving dangling product references.

        Raises:
            CatalogError('CATEGORY_NOT_FOUND')
            CatalogError('CATEGORY_IN_USE'): With the "reject" policy
        """
        policy = _policy('CATEGORY_DELETE_POLICY', CATEGORY_DELETE_POLICIES)

        with transaction.atomic():
            category = Category.objects.select_for_update().filter(pk=category_id).first()
            if category is None:
                raise CatalogError('CATEGORY_NOT_FOUND', category_id=category_id)

            products = Product.objects.filter(category_id=category_id)
            in_use = products.count()

            if in_use and policy == 'reject':
                raise CatalogError('CATEGORY_IN_USE', category_id=category_id, products=in_use)

            detached = products.update(category=None)
            category.delete()

        logger.info(
            "catalog.category.deleted",
            extra={"category_id": category_id, "detached_products": detached},
        )

    # ══════════════════════════════════════════════════════════════
    # PRODUCTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_products(cls):
        """Products with category and current_quantity annotation."""
        return Product.objects.select_related('category').with_quantity()

    @classmethod
    def get_product(cls, product_id: int) -> Product:
        product = cls.list_products().filter(pk=product_id).first()
        if product is None:
            raise CatalogError('PRODUCT_NOT_FOUND', product_id=product_id)
        return product

    @classmethod
    def create_product(cls, name: str, sku: str, description: str = '',
                       category_id: int | None = None, image_url: str = '') -> Product:
        """
        Register a product and its zero-quantity stock row in one unit.

        Raises:
            CatalogError('NAME_REQUIRED' | 'SKU_REQUIRED' | 'SKU_TAKEN' | 'CATEGORY_NOT_FOUND')
        """
        name, sku = _clean(name), _clean(sku)
        if not name:
            raise CatalogError('NAME_REQUIRED')
        _check_sku(sku)
        _check_category(category_id)

        store = get_ledger_store()
        try:
            with transaction.atomic():
                product = Product.objects.create(
                    name=name,
                    sku=sku,
                    description=description or '',
                    category_id=category_id,
                    image_url=image_url or '',
                )
                store.create_stock(product.pk)
        except IntegrityError as exc:
            # Lost a race on the unique SKU
            raise CatalogError('SKU_TAKEN', sku=sku) from exc

        logger.info(
            "catalog.product.created",
            extra={"product_id": product.pk, "sku": sku},
        )
        return cls.get_product(product.pk)

    @classmethod
    def update_product(cls, product_id: int, **fields) -> Product:
        """Update descriptive fields. Identity and stock are untouched."""
        product = Product.objects.filter(pk=product_id).first()
        if product is None:
            raise CatalogError('PRODUCT_NOT_FOUND', product_id=product_id)

        for field in PRODUCT_FIELDS:
            if field in fields:
                value = fields[field]
                if field != 'category_id':
                    value = value or ''
                setattr(product, field, value)

        product.name = _clean(product.name)
        product.sku = _clean(product.sku)
        if not product.name:
            raise CatalogError('NAME_REQUIRED')
        _check_sku(product.sku, exclude_pk=product.pk)
        _check_category(product.category_id)

        try:
            with transaction.atomic():
                product.save()
        except IntegrityError as exc:
            raise CatalogError('SKU_TAKEN', sku=product.sku) from exc

        return cls.get_product(product.pk)

    @classmethod
    def delete_product(cls, product_id: int) -> None:
        """
        Delete a product together with its stock row.

        Raises:
            CatalogError('PRODUCT_NOT_FOUND')
            CatalogError('PRODUCT_HAS_MOVEMENTS'): With the "protect" policy
        """
        policy = _policy('PRODUCT_DELETE_POLICY', PRODUCT_DELETE_POLICIES)

        with transaction.atomic():
            product = Product.objects.select_for_update().filter(pk=product_id).first()
            if product is None:
                raise CatalogError('PRODUCT_NOT_FOUND', product_id=product_id)

            # Wait for in-flight imports/exports on this product
            Stock.objects.locked(product_id)

            movements = StockMovement.objects.filter(product_id=product_id)
            history = movements.count()

            if history and policy == 'protect':
                raise CatalogError(
                    'PRODUCT_HAS_MOVEMENTS', product_id=product_id, movements=history
                )

            # QuerySet.delete() bypasses StockMovement.delete()
            movements.delete()
            product.delete()

        logger.info(
            "catalog.product.deleted",
            extra={"product_id": product_id, "movements_removed": history},
        )
