"""
Stock movements: State-changing operations (import, export).

All methods run inside the ledger store's atomic() block with the
product's stock row locked.
"""

import logging

from django.db import DatabaseError

from stockroom.adapters import get_ledger_store
from stockroom.exceptions import StockError
from stockroom.models.enums import MovementType
from stockroom.models.movement import StockMovement

logger = logging.getLogger('stockroom')


def validate_quantity(quantity) -> int:
    """Reject anything that is not a positive integer."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise StockError('INVALID_QUANTITY', requested=quantity)
    return quantity


class StockMovements:
    """State-changing stock movement methods."""

    @classmethod
    def import_stock(cls, product_id: int, quantity: int, user_id: int | None = None,
                     notes: str = '') -> StockMovement:
        """
        Stock entry.

        Provisions the stock row if the product has none, then appends an
        import movement that raises the balance.

        The returned movement carries balance_after, the balance as of this
        movement, computed while the stock row was locked.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity is not a positive integer
            StockError('PRODUCT_NOT_FOUND'): If the product does not exist
            StockError('STORAGE_ERROR'): If the transaction failed (rolled back)

        Concurrency:
            - Runs under store.atomic()
            - Locks the product row, so a concurrent delete_product waits
              until the import commits (or finds the product gone)
            - Locks the stock row before appending
            - StockMovement.save() updates quantity with an F() expression
        """
        validate_quantity(quantity)
        store = get_ledger_store()

        try:
            with store.atomic():
                if not store.product_exists(product_id, lock=True):
                    raise StockError('PRODUCT_NOT_FOUND', product_id=product_id)

                locked_stock = store.get_stock(product_id, lock=True)
                if locked_stock is None:
                    store.create_stock(product_id)
                    locked_stock = store.get_stock(product_id, lock=True)

                movement = store.append_movement(
                    product_id, user_id, MovementType.IMPORT, quantity, notes
                )
                movement.balance_after = locked_stock.quantity + quantity
        except DatabaseError as exc:
            cls._storage_error('import', product_id, quantity, exc)

        logger.info(
            "stock.import",
            extra={
                "product_id": product_id,
                "qty": quantity,
                "user_id": user_id,
                "movement_id": movement.pk,
            },
        )
        return movement

    @classmethod
    def export_stock(cls, product_id: int, quantity: int, user_id: int | None = None,
                     notes: str = '') -> StockMovement:
        """
        Stock exit.

        The returned movement carries balance_after, like import_stock.

        Raises:
            StockError('INVALID_QUANTITY'): If quantity is not a positive integer
            StockError('PRODUCT_NOT_FOUND'): If the product has no stock row
            StockError('INSUFFICIENT_STOCK'): If quantity > current balance
            StockError('STORAGE_ERROR'): If the transaction failed (rolled back)

        Concurrency:
            - Runs under store.atomic()
            - Locks the stock row, then checks the balance after the lock
            - Check and append happen in the same unit
        """
        validate_quantity(quantity)
        store = get_ledger_store()

        try:
            with store.atomic():
                locked_stock = store.get_stock(product_id, lock=True)

                if locked_stock is None:
                    raise StockError('PRODUCT_NOT_FOUND', product_id=product_id)

                if locked_stock.quantity < quantity:
                    logger.info(
                        "stock.export.rejected",
                        extra={
                            "product_id": product_id,
                            "qty": quantity,
                            "available": locked_stock.quantity,
                        },
                    )
                    raise StockError(
                        'INSUFFICIENT_STOCK',
                        available=locked_stock.quantity,
                        requested=quantity,
                    )

                movement = store.append_movement(
                    product_id, user_id, MovementType.EXPORT, quantity, notes
                )
                movement.balance_after = locked_stock.quantity - quantity
        except DatabaseError as exc:
            cls._storage_error('export', product_id, quantity, exc)

        logger.info(
            "stock.export",
            extra={
                "product_id": product_id,
                "qty": quantity,
                "user_id": user_id,
                "movement_id": movement.pk,
            },
        )
        return movement

    @staticmethod
    def _storage_error(operation: str, product_id: int, quantity: int, exc: Exception):
        logger.error(
            "stock.storage_error",
            extra={
                "operation": operation,
                "product_id": product_id,
                "qty": quantity,
                "error": str(exc),
            },
        )
        raise StockError('STORAGE_ERROR', product_id=product_id) from exc
