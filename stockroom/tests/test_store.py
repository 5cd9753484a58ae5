"""
Tests for ledger store loading.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured

from stockroom.adapters import DjangoLedgerStore, get_ledger_store, reset_ledger_store
from stockroom.protocols import LedgerStore


@pytest.fixture
def fresh_store():
    reset_ledger_store()
    yield
    reset_ledger_store()


class TestLedgerStoreLoading:

    def test_default_store(self, fresh_store):
        store = get_ledger_store()

        assert isinstance(store, DjangoLedgerStore)
        assert isinstance(store, LedgerStore)
        assert get_ledger_store() is store

    def test_unimportable_path(self, fresh_store, stockroom_config):
        stockroom_config(LEDGER_STORE='stockroom.adapters.nowhere.Store')

        with pytest.raises(ImproperlyConfigured):
            get_ledger_store()

    def test_class_without_protocol(self, fresh_store, stockroom_config):
        stockroom_config(LEDGER_STORE='builtins.object')

        with pytest.raises(ImproperlyConfigured):
            get_ledger_store()
