"""
Django ORM ledger store.

Default implementation of the LedgerStore protocol.

Usage:
    from stockroom.adapters import get_ledger_store

    store = get_ledger_store()
    with store.atomic():
        stock = store.get_stock(product_id, lock=True)

Settings:
    STOCKROOM = {
        "LEDGER_STORE": "stockroom.adapters.django_store.DjangoLedgerStore",
    }
"""

from __future__ import annotations

import logging
import threading

from django.core.exceptions import ImproperlyConfigured
from django.db import transaction
from django.utils.module_loading import import_string

from catalog.models import Product
from stockroom.conf import stockroom_settings
from stockroom.models import Stock, StockMovement
from stockroom.protocols.store import LedgerStore

logger = logging.getLogger(__name__)


class DjangoLedgerStore:
    """
    LedgerStore backed by the Django ORM.

    Locking:
        get_stock(lock=True) issues SELECT ... FOR UPDATE. On SQLite, where
        row locks do not exist, the project opens transactions with
        BEGIN IMMEDIATE so writers serialize at the start of atomic().
    """

    using: str | None = None

    def atomic(self):
        return transaction.atomic(using=self.using)

    def product_exists(self, product_id: int, lock: bool = False) -> bool:
        qs = Product.objects.filter(pk=product_id)
        if lock:
            return qs.select_for_update().values_list('pk', flat=True).first() is not None
        return qs.exists()

    def get_stock(self, product_id: int, lock: bool = False) -> Stock | None:
        if lock:
            return Stock.objects.locked(product_id)
        return Stock.objects.for_product(product_id).first()

    def create_stock(self, product_id: int) -> Stock:
        stock, created = Stock.objects.get_or_create(
            product_id=product_id,
            defaults={'quantity': 0},
        )
        if created:
            logger.debug("Provisioned stock row for product %s", product_id)
        return stock

    def append_movement(self, product_id: int, user_id: int | None, type: str,
                        quantity: int, notes: str = '') -> StockMovement:
        return StockMovement.objects.create(
            product_id=product_id,
            user_id=user_id,
            type=type,
            quantity=quantity,
            notes=notes or '',
        )

    def movements(self, start=None, end=None, product_id=None, category_id=None):
        qs = StockMovement.objects.select_related(
            'product', 'product__category', 'user'
        ).between(start, end)

        if product_id is not None:
            qs = qs.filter(product_id=product_id)

        if category_id is not None:
            qs = qs.for_category(category_id)

        return qs.order_by('-date', '-id')

    def stocks(self, category_id=None):
        qs = Stock.objects.with_product()
        if category_id is not None:
            qs = qs.filter(product__category_id=category_id)
        return qs.order_by('product__name', 'product_id')

    def ledger_total(self, product_id: int) -> int:
        return StockMovement.objects.filter(product_id=product_id).signed_total()


# Cached store instance
_lock = threading.Lock()
_ledger_store: LedgerStore | None = None


def get_ledger_store() -> LedgerStore:
    """
    Return the configured ledger store.

    Raises:
        ImproperlyConfigured: If LEDGER_STORE cannot be imported or does not
            implement LedgerStore
    """
    global _ledger_store

    if _ledger_store is None:
        with _lock:
            if _ledger_store is None:  # double-checked
                store_path = stockroom_settings.LEDGER_STORE

                try:
                    store_class = import_string(store_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import ledger store '{store_path}': {e}"
                    ) from e

                store = store_class()
                if not isinstance(store, LedgerStore):
                    raise ImproperlyConfigured(
                        f"'{store_path}' does not implement LedgerStore"
                    )
                _ledger_store = store
                logger.debug("Loaded ledger store: %s", store_path)

    return _ledger_store


def reset_ledger_store() -> None:
    """Reset the cached store. Useful for testing."""
    global _ledger_store
    _ledger_store = None
