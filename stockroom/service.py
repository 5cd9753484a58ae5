"""
Stock Service: The single public interface for all stock operations.

Usage:
    from stockroom import stock, StockError

    stock.import_stock(product.pk, 10, user_id=user.pk, notes='Purchase #12')
    stock.export_stock(product.pk, 4, user_id=user.pk)
    stock.balance(product.pk)  # 6
    stock.movements(product_id=product.pk)  # [export 4, import 10]
"""

from stockroom.services.movements import StockMovements
from stockroom.services.queries import StockQueries


class StockLedger(StockQueries, StockMovements):
    """
    Single interface for all stock operations.

    Parameter convention: (product_id, quantity, user_id, notes)

    IMPORTANT: All state-changing methods run in one atomic transaction
    with the product's stock row locked. See each method's docstring.
    """
