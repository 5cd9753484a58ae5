"""
Stockroom Protocols.

Defines interfaces for storage integration.
"""

from stockroom.protocols.store import LedgerStore

__all__ = [
    "LedgerStore",
]
