"""
Stockroom: Stock ledger for a small inventory backend.

Usage:
    from stockroom import stock, catalog, StockError

    product = catalog.create_product('Parafuso 6mm', sku='PAR-006')
    stock.import_stock(product.pk, 10, user_id=user.pk, notes='Compra #12')
    stock.export_stock(product.pk, 4, user_id=user.pk)
    stock.balance(product.pk)  # 6
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'stock':
        from stockroom.service import StockLedger
        return StockLedger
    elif name == 'catalog':
        from stockroom.services.catalog import CatalogManager
        return CatalogManager
    elif name == 'StockError':
        from stockroom.exceptions import StockError
        return StockError
    elif name == 'CatalogError':
        from stockroom.exceptions import CatalogError
        return CatalogError
    elif name == 'Stock':
        from stockroom.models.stock import Stock
        return Stock
    elif name == 'StockMovement':
        from stockroom.models.movement import StockMovement
        return StockMovement
    elif name == 'MovementType':
        from stockroom.models.enums import MovementType
        return MovementType
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'stock',
    'catalog',
    'StockError',
    'CatalogError',
    'Stock',
    'StockMovement',
    'MovementType',
]

__version__ = '0.1.0'
