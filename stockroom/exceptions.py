"""
Exceptions for Stockroom.

All domain errors are BaseError subclasses with a structured code for
programmatic handling. Each code maps to a kind and an HTTP status, so the
request layer never has to parse messages.
"""

from typing import Any

VALIDATION = 'validation'
NOT_FOUND = 'not_found'
BUSINESS = 'business'
STORAGE = 'storage'
AUTH = 'auth'


class BaseError(Exception):
    """
    Structured domain error.

    Usage:
        raise StockError('INSUFFICIENT_STOCK', available=6, requested=10)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages: dict[str, str] = {}
    _kinds: dict[str, str] = {}
    _status_codes: dict[str, int] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    @property
    def kind(self) -> str:
        return self._kinds.get(self.code, VALIDATION)

    @property
    def status_code(self) -> int:
        return self._status_codes.get(self.kind, 400)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'error': self.message,
            'code': self.code,
            'data': {
                k: v if isinstance(v, (int, float, bool, type(None))) else str(v)
                for k, v in self.data.items()
            },
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r})"


class StockError(BaseError):
    """
    Stock engine errors.

    Usage:
        try:
            stock.export_stock(product.pk, 10, user_id=user.pk)
        except StockError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.available} left")
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantity must be a positive integer',
        'PRODUCT_NOT_FOUND': 'Product not found in stock',
        'INSUFFICIENT_STOCK': 'Insufficient stock',
        'INVALID_FILTER': 'Invalid movement filter',
        'STORAGE_ERROR': 'Stock operation failed, nothing was recorded',
    }

    _kinds = {
        'INVALID_QUANTITY': VALIDATION,
        'INVALID_FILTER': VALIDATION,
        'PRODUCT_NOT_FOUND': NOT_FOUND,
        'INSUFFICIENT_STOCK': BUSINESS,
        'STORAGE_ERROR': STORAGE,
    }

    # Stock endpoints report unknown products as bad input
    _status_codes = {
        VALIDATION: 400,
        NOT_FOUND: 400,
        BUSINESS: 400,
        STORAGE: 500,
    }

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)


class CatalogError(BaseError):
    """Product and category management errors."""

    _default_messages = {
        'NAME_REQUIRED': 'Name is required',
        'SKU_REQUIRED': 'SKU is required',
        'SKU_TAKEN': 'SKU already in use',
        'CATEGORY_NOT_FOUND': 'Category not found',
        'PRODUCT_NOT_FOUND': 'Product not found',
        'CATEGORY_IN_USE': 'Category is referenced by products',
        'PRODUCT_HAS_MOVEMENTS': 'Product has stock movements',
    }

    _kinds = {
        'NAME_REQUIRED': VALIDATION,
        'SKU_REQUIRED': VALIDATION,
        'SKU_TAKEN': VALIDATION,
        'CATEGORY_NOT_FOUND': NOT_FOUND,
        'PRODUCT_NOT_FOUND': NOT_FOUND,
        'CATEGORY_IN_USE': BUSINESS,
        'PRODUCT_HAS_MOVEMENTS': BUSINESS,
    }

    _status_codes = {
        VALIDATION: 400,
        NOT_FOUND: 404,
        BUSINESS: 409,
        STORAGE: 500,
    }


class AuthError(BaseError):
    """
    Credential and token errors.

    INVALID_CREDENTIALS is raised for both unknown users and wrong passwords.
    """

    _default_messages = {
        'INVALID_CREDENTIALS': 'Invalid credentials',
        'INVALID_TOKEN': 'Invalid token',
        'TOKEN_EXPIRED': 'Token expired',
        'INVALID_REGISTRATION': 'Username, password and a valid email are required',
        'USERNAME_TAKEN': 'Username already registered',
        'EMAIL_TAKEN': 'Email already registered',
    }

    _kinds = {
        'INVALID_CREDENTIALS': AUTH,
        'INVALID_TOKEN': AUTH,
        'TOKEN_EXPIRED': AUTH,
        'INVALID_REGISTRATION': VALIDATION,
        'USERNAME_TAKEN': VALIDATION,
        'EMAIL_TAKEN': VALIDATION,
    }

    _status_codes = {
        VALIDATION: 400,
        AUTH: 401,
    }
