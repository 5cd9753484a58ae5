"""
Stock queries: Read-only operations.

All methods are classmethods on StockLedger and use no locking.
"""

from datetime import datetime

from stockroom.adapters import get_ledger_store
from stockroom.exceptions import StockError


class StockQueries:
    """Read-only stock query methods."""

    @classmethod
    def balance(cls, product_id: int) -> int:
        """
        Current on-hand quantity, an O(1) cache read.

        Raises:
            StockError('PRODUCT_NOT_FOUND'): If the product does not exist
        """
        store = get_ledger_store()
        stock = store.get_stock(product_id)
        if stock is not None:
            return stock.quantity
        if not store.product_exists(product_id):
            raise StockError('PRODUCT_NOT_FOUND', product_id=product_id)
        return 0

    @classmethod
    def movements(cls, start: datetime | None = None, end: datetime | None = None,
                  product_id: int | None = None, category_id: int | None = None):
        """
        Movement history, most recent first.

        Filters are optional and combine with AND. Date bounds are inclusive
        and independent: a start-only filter applies only the lower bound.

        Raises:
            StockError('INVALID_FILTER'): If start is after end
        """
        if start is not None and end is not None and start > end:
            raise StockError('INVALID_FILTER', start=start, end=end)

        return get_ledger_store().movements(
            start=start, end=end, product_id=product_id, category_id=category_id
        )

    @classmethod
    def summary(cls, category_id: int | None = None):
        """All stock balances with product and category, ordered by product name."""
        return get_ledger_store().stocks(category_id=category_id)

    @classmethod
    def ledger_total(cls, product_id: int) -> int:
        """Sum of imports minus sum of exports for a product."""
        return get_ledger_store().ledger_total(product_id)
