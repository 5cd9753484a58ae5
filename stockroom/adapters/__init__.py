"""
Stockroom Adapters.

Implementations of protocols for storage backends.
"""

from stockroom.adapters.django_store import (
    DjangoLedgerStore,
    get_ledger_store,
    reset_ledger_store,
)

__all__ = [
    "DjangoLedgerStore",
    "get_ledger_store",
    "reset_ledger_store",
]
