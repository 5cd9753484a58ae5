"""
HTTP tests for /api/auth, /api/stock and the catalog endpoints.
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from stockroom import stock
from stockroom.models import StockMovement


pytestmark = pytest.mark.django_db


class TestAuthEndpoints:

    def test_register_then_login(self, anon_client):
        response = anon_client.post('/api/auth/register', {
            'username': 'ana', 'password': 's3cret-pass', 'email': 'ana@example.com',
        }, format='json')
        assert response.status_code == 200
        assert response.json() == {'message': 'Registration successful'}

        response = anon_client.post('/api/auth/login', {
            'username': 'ana', 'password': 's3cret-pass',
        }, format='json')
        body = response.json()

        assert response.status_code == 200
        assert body['message'] == 'Login successful'
        assert body['user']['username'] == 'ana'
        assert body['user']['lastLoginAt'] is not None
        assert 'password' not in body['user']
        assert body['token']

    def test_login_wrong_password(self, anon_client, user):
        response = anon_client.post('/api/auth/login', {
            'username': 'testuser', 'password': 'nope',
        }, format='json')

        assert response.status_code == 401
        assert response.json()['code'] == 'INVALID_CREDENTIALS'

    def test_register_missing_fields(self, anon_client):
        response = anon_client.post('/api/auth/register', {'username': 'ana'}, format='json')

        assert response.status_code == 400

    def test_logout(self, api_client):
        response = api_client.post('/api/auth/logout')

        assert response.status_code == 200


class TestAuthentication:

    def test_missing_token(self, anon_client):
        response = anon_client.get('/api/stock/summary')

        assert response.status_code == 401
        assert response.json()['code'] == 'NOT_AUTHENTICATED'

    def test_bad_token(self, anon_client):
        anon_client.credentials(HTTP_AUTHORIZATION='Bearer forged.token.value')

        response = anon_client.get('/api/products')

        assert response.status_code == 401
        assert response.json()['error'] == 'Invalid token'

    def test_expired_token(self, api_client, stockroom_config):
        stockroom_config(TOKEN_TTL_SECONDS=-1)

        response = api_client.get('/api/products')

        assert response.status_code == 401
        assert response.json()['error'] == 'Token expired'

    def test_malformed_header(self, anon_client):
        anon_client.credentials(HTTP_AUTHORIZATION='Bearer')

        response = anon_client.get('/api/products')

        assert response.status_code == 401


class TestStockEndpoints:

    def test_import(self, api_client, product, user):
        response = api_client.post('/api/stock/import', {
            'productId': product.pk, 'quantity': 10, 'notes': 'Purchase #12',
        }, format='json')
        body = response.json()

        assert response.status_code == 200
        assert body['message'] == 'Stock imported successfully'
        assert body['balance'] == 10
        assert body['movement']['type'] == 'import'
        assert body['movement']['quantity'] == 10
        assert body['movement']['user'] == {'username': user.username}
        assert StockMovement.objects.get().user_id == user.pk

    def test_export(self, api_client, product):
        stock.import_stock(product.pk, 10)

        response = api_client.post('/api/stock/export', {
            'productId': product.pk, 'quantity': 4,
        }, format='json')

        assert response.status_code == 200
        assert response.json()['message'] == 'Stock exported successfully'
        assert response.json()['balance'] == 6

    def test_balance_comes_from_the_locked_operation(self, api_client, product, monkeypatch):
        """The reported balance is the one the movement produced, not a later read."""
        from stockroom.service import StockLedger

        stock.import_stock(product.pk, 10)
        monkeypatch.setattr(StockLedger, 'balance', classmethod(lambda cls, product_id: -1))

        response = api_client.post('/api/stock/export', {
            'productId': product.pk, 'quantity': 3,
        }, format='json')

        assert response.json()['balance'] == 7

    def test_export_insufficient(self, api_client, product):
        stock.import_stock(product.pk, 6)

        response = api_client.post('/api/stock/export', {
            'productId': product.pk, 'quantity': 10,
        }, format='json')
        body = response.json()

        assert response.status_code == 400
        assert body['code'] == 'INSUFFICIENT_STOCK'
        assert body['data'] == {'available': 6, 'requested': 10}
        assert stock.balance(product.pk) == 6

    @pytest.mark.parametrize('payload,code', [
        ({'productId': None, 'quantity': 5}, 'INVALID_INPUT'),
        ({'productId': 'abc', 'quantity': 5}, 'INVALID_INPUT'),
        ({'quantity': 'many'}, 'INVALID_INPUT'),
        ({'quantity': 0}, 'INVALID_QUANTITY'),
        ({'quantity': -3}, 'INVALID_QUANTITY'),
    ])
    def test_import_bad_input(self, api_client, product, payload, code):
        payload = {'productId': product.pk, **payload}

        response = api_client.post('/api/stock/import', payload, format='json')

        assert response.status_code == 400
        assert response.json()['code'] == code
        assert not StockMovement.objects.exists()

    def test_import_unknown_product(self, api_client, db):
        response = api_client.post('/api/stock/import', {
            'productId': 99999, 'quantity': 1,
        }, format='json')

        assert response.status_code == 400
        assert response.json()['code'] == 'PRODUCT_NOT_FOUND'

    def test_storage_failure(self, api_client, product, failing_store):
        response = api_client.post('/api/stock/import', {
            'productId': product.pk, 'quantity': 1,
        }, format='json')

        assert response.status_code == 500
        assert response.json()['code'] == 'STORAGE_ERROR'
        assert not StockMovement.objects.exists()

    def test_movements_get_and_post(self, api_client, product, other_product, other_category):
        stock.import_stock(product.pk, 10)
        stock.import_stock(other_product.pk, 3)
        stock.export_stock(product.pk, 4)

        listed = api_client.get('/api/stock/movements').json()
        by_product = api_client.get('/api/stock/movements', {'productId': product.pk}).json()
        by_category = api_client.post(
            '/api/stock/movements', {'categoryId': other_category.pk}, format='json'
        ).json()

        assert [m['quantity'] for m in listed] == [4, 3, 10]
        assert [(m['type'], m['quantity']) for m in by_product] == [('export', 4), ('import', 10)]
        assert by_product[0]['product'] == {
            'id': product.pk,
            'name': product.name,
            'imageURL': product.image_url,
        }
        assert [m['productId'] for m in by_category] == [other_product.pk]

    def test_movements_date_only_end_includes_whole_day(self, api_client, product):
        movement = stock.import_stock(product.pk, 2)
        today = timezone.localdate()
        StockMovement.objects.filter(pk=movement.pk).update(
            date=timezone.now().replace(hour=23, minute=30)
        )

        response = api_client.get('/api/stock/movements', {
            'startDate': today.isoformat(), 'endDate': today.isoformat(),
        })

        assert response.status_code == 200
        assert [m['id'] for m in response.json()] == [movement.pk]

    @pytest.mark.parametrize('bound', ['startDate', 'endDate'])
    def test_movements_impossible_date(self, api_client, db, bound):
        """A well-formed but nonexistent day is rejected as input, not a crash."""
        response = api_client.get('/api/stock/movements', {bound: '2024-02-30'})

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_INPUT'

    def test_movements_inverted_range(self, api_client, db):
        today = timezone.localdate()

        response = api_client.get('/api/stock/movements', {
            'startDate': today.isoformat(),
            'endDate': (today - timedelta(days=3)).isoformat(),
        })

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_FILTER'

    def test_summary_and_current(self, api_client, product, other_product, category):
        stock.import_stock(product.pk, 7)

        summary = api_client.get('/api/stock/summary').json()
        current = api_client.get('/api/stock/current', {'categoryId': category.pk}).json()

        assert [(row['productId'], row['quantity']) for row in summary] == [
            (product.pk, 7),
            (other_product.pk, 0),
        ]
        assert len(current) == 1
        assert current[0]['product']['sku'] == 'SCR-006'
        assert current[0]['product']['category'] == {'id': category.pk, 'name': 'Hardware'}

    @pytest.mark.parametrize('category_id', ['x', '\u00b2', '-'])
    def test_summary_bad_category(self, api_client, db, category_id):
        """Non-integer categoryId is a 400, including unicode digits int() rejects."""
        response = api_client.get('/api/stock/summary', {'categoryId': category_id})

        assert response.status_code == 400
        assert response.json()['code'] == 'INVALID_INPUT'

    def test_summary_empty_category_means_all(self, api_client, product, other_product):
        response = api_client.get('/api/stock/current', {'categoryId': ''})

        assert response.status_code == 200
        assert len(response.json()) == 2


class TestCatalogEndpoints:

    def test_category_crud(self, api_client):
        created = api_client.post('/api/categories', {'name': 'Tools'}, format='json')
        assert created.status_code == 201
        pk = created.json()['id']

        updated = api_client.put(f'/api/categories/{pk}', {'description': 'Hand tools'}, format='json')
        assert updated.json()['description'] == 'Hand tools'
        assert api_client.get(f'/api/categories/{pk}').json()['name'] == 'Tools'

        deleted = api_client.delete(f'/api/categories/{pk}')
        assert deleted.json() == {'message': 'Category deleted successfully'}
        assert api_client.get(f'/api/categories/{pk}').status_code == 404

    def test_product_create_provisions_stock(self, api_client, category):
        response = api_client.post('/api/products', {
            'name': 'Nut M6',
            'sku': 'NUT-006',
            'categoryId': category.pk,
            'imageURL': 'https://img.example.com/nut.png',
        }, format='json')
        body = response.json()

        assert response.status_code == 201
        assert body['quantity'] == 0
        assert body['categoryId'] == category.pk
        assert body['category']['name'] == 'Hardware'
        assert body['imageURL'] == 'https://img.example.com/nut.png'
        assert stock.balance(body['id']) == 0

    def test_product_duplicate_sku(self, api_client, product):
        response = api_client.post('/api/products', {
            'name': 'Clone', 'sku': product.sku,
        }, format='json')

        assert response.status_code == 400
        assert response.json()['code'] == 'SKU_TAKEN'

    def test_product_list_and_detail(self, api_client, product):
        stock.import_stock(product.pk, 5)

        listed = api_client.get('/api/products').json()
        detail = api_client.get(f'/api/products/{product.pk}').json()

        assert [(p['id'], p['quantity']) for p in listed] == [(product.pk, 5)]
        assert detail['sku'] == 'SCR-006'
        assert detail['quantity'] == 5

    def test_product_update(self, api_client, product):
        response = api_client.put(f'/api/products/{product.pk}', {
            'name': 'Screw 6mm zinc', 'categoryId': None,
        }, format='json')

        assert response.status_code == 200
        assert response.json()['name'] == 'Screw 6mm zinc'
        assert response.json()['categoryId'] is None

    def test_product_delete(self, api_client, product):
        stock.import_stock(product.pk, 5)

        response = api_client.delete(f'/api/products/{product.pk}')

        assert response.json() == {'message': 'Product deleted successfully'}
        assert api_client.get(f'/api/products/{product.pk}').status_code == 404

    def test_category_delete_rejected(self, api_client, category, product, stockroom_config):
        stockroom_config(CATEGORY_DELETE_POLICY='reject')

        response = api_client.delete(f'/api/categories/{category.pk}')

        assert response.status_code == 409
        assert response.json()['code'] == 'CATEGORY_IN_USE'
