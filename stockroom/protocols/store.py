"""
Ledger Store Protocol: Interface the stock engine persists through.

Stockroom defines this protocol; the Django ORM adapter implements it
(stockroom.adapters.django_store). Any backend that can run a closure under
commit-or-rollback semantics and lock a single stock row can implement it.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stockroom.models import Stock, StockMovement


@runtime_checkable
class LedgerStore(Protocol):
    """
    Protocol for stock ledger persistence.

    Implementations should provide:
    - A scoped transaction (atomic)
    - Stock row lookup, locking and provisioning
    - Append-only movement writes that update the balance in the same unit
    - Read-only movement and balance queries
    """

    def atomic(self) -> AbstractContextManager:
        """
        Scoped transaction.

        Everything executed inside the block commits together on normal exit
        and rolls back together if an exception escapes.
        """
        ...

    def product_exists(self, product_id: int, lock: bool = False) -> bool:
        """
        Whether the product is registered in the catalog.

        With lock=True the product row stays locked until the surrounding
        atomic() block ends, so it cannot be deleted meanwhile.
        """
        ...

    def get_stock(self, product_id: int, lock: bool = False) -> Stock | None:
        """
        Stock row for a product.

        Args:
            product_id: Product PK
            lock: Hold a row lock until the surrounding atomic() block ends

        Returns:
            Stock or None if the product has no stock row
        """
        ...

    def create_stock(self, product_id: int) -> Stock:
        """Provision a zero-quantity stock row (no-op if it already exists)."""
        ...

    def append_movement(self, product_id: int, user_id: int | None, type: str,
                        quantity: int, notes: str = '') -> StockMovement:
        """
        Append a movement and apply it to the balance.

        Must be called inside atomic() with the stock row locked.
        """
        ...

    def movements(self, start: datetime | None = None, end: datetime | None = None,
                  product_id: int | None = None, category_id: int | None = None) -> Any:
        """Movements matching all given filters, most recent first."""
        ...

    def stocks(self, category_id: int | None = None) -> Any:
        """All stock rows with their products."""
        ...

    def ledger_total(self, product_id: int) -> int:
        """Signed sum of a product's movements."""
        ...
