"""
Stockroom configuration.

Usage in settings.py:
    STOCKROOM = {
        "LEDGER_STORE": "stockroom.adapters.django_store.DjangoLedgerStore",
        "TOKEN_SECRET": os.getenv("JWT_SECRET", SECRET_KEY),
        "TOKEN_TTL_SECONDS": 24 * 60 * 60,
        "CATEGORY_DELETE_POLICY": "detach",
        "PRODUCT_DELETE_POLICY": "cascade",
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings

CATEGORY_DELETE_POLICIES = ('detach', 'reject')
PRODUCT_DELETE_POLICIES = ('cascade', 'protect')


@dataclass
class StockroomSettings:
    """Stockroom configuration settings."""

    # Ledger store backend (dotted path)
    LEDGER_STORE: str = "stockroom.adapters.django_store.DjangoLedgerStore"

    # Bearer token signing (empty secret = Django SECRET_KEY)
    TOKEN_SECRET: str = ""
    TOKEN_SALT: str = "stockroom.accounts.token"
    TOKEN_TTL_SECONDS: int = 24 * 60 * 60

    # "detach" nulls product.category, "reject" refuses while referenced
    CATEGORY_DELETE_POLICY: str = "detach"

    # "cascade" removes movements with the product, "protect" keeps history
    PRODUCT_DELETE_POLICY: str = "cascade"


def get_stockroom_settings() -> StockroomSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "STOCKROOM", {})
    return StockroomSettings(**{
        k: v for k, v in user_settings.items()
        if k in StockroomSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_stockroom_settings(), name)


stockroom_settings = _LazySettings()
