"""
Pytest fixtures for Stockroom tests.
"""

import pytest
from django.contrib.auth import get_user_model
from django.db import DatabaseError
from rest_framework.test import APIClient

from accounts.authenticator import Authenticator
from stockroom import catalog
from stockroom.adapters import django_store
from stockroom.adapters.django_store import DjangoLedgerStore


User = get_user_model()


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        email='testuser@example.com',
        password='testpass123'
    )


@pytest.fixture
def category(db):
    """Create a test category."""
    return catalog.create_category('Hardware', 'Screws, nuts and bolts')


@pytest.fixture
def other_category(db):
    return catalog.create_category('Paint')


@pytest.fixture
def product(db, category):
    """Create a product (with its zero stock row) in `category`."""
    return catalog.create_product(
        'Screw 6mm',
        sku='SCR-006',
        category_id=category.pk,
        image_url='https://img.example.com/scr-006.png',
    )


@pytest.fixture
def other_product(db, other_category):
    return catalog.create_product('White paint 1L', sku='PNT-001', category_id=other_category.pk)


@pytest.fixture
def token(user):
    return Authenticator.issue_token(user.pk)


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def api_client(token):
    """API client sending `Authorization: Bearer <token>`."""
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')
    return client


class FailingLedgerStore(DjangoLedgerStore):
    """Writes the movement, then fails before the transaction commits."""

    def append_movement(self, *args, **kwargs):
        super().append_movement(*args, **kwargs)
        raise DatabaseError('disk I/O error')


@pytest.fixture
def failing_store(monkeypatch):
    """Install FailingLedgerStore as the cached ledger store."""
    store = FailingLedgerStore()
    monkeypatch.setattr(django_store, '_ledger_store', store)
    return store


@pytest.fixture
def stockroom_config(settings):
    """Override STOCKROOM keys: stockroom_config(PRODUCT_DELETE_POLICY='protect')."""
    def _override(**values):
        settings.STOCKROOM = {**settings.STOCKROOM, **values}
    return _override
