"""
Stock services: Modular organization of stockroom operations.

Re-exports all public classes:
    from stockroom.services import StockQueries, StockMovements, CatalogManager
"""

from stockroom.services.catalog import CatalogManager
from stockroom.services.movements import StockMovements
from stockroom.services.queries import StockQueries

__all__ = [
    'CatalogManager',
    'StockQueries',
    'StockMovements',
]
