"""
Stockroom Models.

Core models for stock tracking:
- Stock: Balance cache, one row per product
- StockMovement: Immutable ledger of imports and exports
"""

from stockroom.models.enums import MovementType
from stockroom.models.movement import StockMovement
from stockroom.models.stock import Stock

__all__ = [
    'MovementType',
    'Stock',
    'StockMovement',
]
