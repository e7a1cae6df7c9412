"""
Tests for the REST API.

This module drives the Flask application through its test client and
checks the effect of each endpoint on the backing transaction store.
"""

import unittest
from decimal import Decimal
from unittest.mock import Mock, patch

from expense_tracker.api.rest_api import create_app, run_server
from expense_tracker.config.settings import Settings
from expense_tracker.model.store import TransactionStore
from expense_tracker.model.transaction import Transaction, Category


class TestRestApi(unittest.TestCase):
    """Test cases for the REST endpoints."""

    def setUp(self):
        """Set up test fixtures."""
        self.store = TransactionStore()
        self.app = create_app(self.store, Settings())
        self.app.testing = True
        self.client = self.app.test_client()

    def _add(self, amount: str, category: str):
        return self.client.post('/transactions', json={'amount': amount, 'category': category})

    def test_health(self):
        """Test health check endpoint."""
        response = self.client.get('/health')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['status'], 'healthy')

    def test_store_exposed_on_app(self):
        """Test the backing store is reachable from the app config."""
        self.assertIs(self.app.config['TRANSACTION_STORE'], self.store)

    def test_create_app_without_store(self):
        """Test a fresh store is created when none is given."""
        app = create_app(settings=Settings())
        self.assertIsInstance(app.config['TRANSACTION_STORE'], TransactionStore)

    def test_add_transaction(self):
        """Test adding a transaction through the API."""
        response = self._add('12.50', 'Food')

        self.assertEqual(response.status_code, 201)
        data = response.get_json()
        self.assertEqual(data['amount'], '12.50')
        self.assertEqual(data['category'], 'food')
        self.assertEqual(data['index'], 0)

        transactions = self.store.get_transactions()
        self.assertEqual(len(transactions), 1)
        self.assertEqual(transactions[0].amount, Decimal('12.50'))
        self.assertEqual(transactions[0].category, Category.FOOD)

    def test_add_transaction_invalid(self):
        """Test invalid transaction requests are rejected."""
        bad_requests = [
            {'category': 'food'},
            {'amount': '10'},
            {'amount': '0', 'category': 'food'},
            {'amount': '1000.01', 'category': 'food'},
            {'amount': '1.234', 'category': 'food'},
            {'amount': 'ten', 'category': 'food'},
            {'amount': '10', 'category': 'rent'},
        ]
        for body in bad_requests:
            with self.subTest(body=body):
                response = self.client.post('/transactions', json=body)
                self.assertEqual(response.status_code, 400)
                self.assertIn('error', response.get_json())

        self.assertEqual(self.store.get_transactions(), ())

    def test_add_transaction_requires_json_object(self):
        """Test non-object bodies are rejected."""
        response = self.client.post('/transactions', data='not json', content_type='text/plain')
        self.assertEqual(response.status_code, 400)

        response = self.client.post('/transactions', json=[1, 2])
        self.assertEqual(response.status_code, 400)

    def test_list_transactions(self):
        """Test listing transactions with their indices and filter result."""
        self._add('5', 'food')
        self._add('7', 'travel')
        self.store.set_matched_filter_indices([1])

        response = self.client.get('/transactions')

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data['count'], 2)
        self.assertEqual([t['index'] for t in data['transactions']], [0, 1])
        self.assertEqual([t['category'] for t in data['transactions']], ['food', 'travel'])
        self.assertEqual(data['matched_filter_indices'], [1])

    def test_remove_transaction(self):
        """Test removing a transaction by index."""
        self._add('5', 'food')
        self._add('7', 'travel')
        first = self.store.get_transactions()[0]

        response = self.client.delete('/transactions/0')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['transaction']['transaction_id'], first.transaction_id)
        self.assertEqual(len(self.store.get_transactions()), 1)
        self.assertEqual(self.store.get_transactions()[0].category, Category.TRAVEL)

    def test_remove_transaction_out_of_range(self):
        """Test removing a missing index returns 404."""
        self._add('5', 'food')

        response = self.client.delete('/transactions/1')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(len(self.store.get_transactions()), 1)

    def test_filter_by_category(self):
        """Test filtering by category."""
        self._add('5', 'food')
        self._add('7', 'travel')
        self._add('9', 'food')

        response = self.client.post('/filter', json={'category': 'food'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['matched_filter_indices'], [0, 2])
        self.assertEqual(self.store.get_matched_filter_indices(), [0, 2])

    def test_filter_by_amount(self):
        """Test filtering by amount."""
        self._add('5', 'food')
        self._add('7.5', 'travel')

        response = self.client.post('/filter', json={'amount': '7.50'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['matched_filter_indices'], [1])

    def test_filter_by_indices(self):
        """Test setting indices directly and reading them back."""
        self._add('5', 'food')
        self._add('7', 'travel')

        response = self.client.post('/filter', json={'indices': [1, 0]})
        self.assertEqual(response.status_code, 200)

        response = self.client.get('/filter')
        self.assertEqual(response.get_json(), {'matched_filter_indices': [1, 0], 'count': 2})

    def test_filter_out_of_range_index(self):
        """Test out-of-range indices are rejected and the filter is kept."""
        self._add('5', 'food')
        self._add('7', 'travel')
        self.store.set_matched_filter_indices([0])

        response = self.client.post('/filter', json={'indices': [2]})

        self.assertEqual(response.status_code, 400)
        self.assertIn('error', response.get_json())
        self.assertEqual(self.store.get_matched_filter_indices(), [0])

    def test_filter_invalid_requests(self):
        """Test malformed filter requests."""
        bad_requests = [
            {},
            {'category': 'food', 'amount': '5'},
            {'indices': 'all'},
            {'indices': [0, 'x']},
            {'category': 'rent'},
            {'amount': '-2'},
        ]
        for body in bad_requests:
            with self.subTest(body=body):
                response = self.client.post('/filter', json=body)
                self.assertEqual(response.status_code, 400)

    def test_clear_filter(self):
        """Test clearing the filter."""
        self._add('5', 'food')
        self.store.set_matched_filter_indices([0])

        response = self.client.delete('/filter')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.store.get_matched_filter_indices(), [])

    def test_add_clears_filter(self):
        """Test adding through the API invalidates the filter."""
        self._add('5', 'food')
        self.client.post('/filter', json={'category': 'food'})

        self._add('6', 'food')

        self.assertEqual(self.client.get('/filter').get_json()['matched_filter_indices'], [])

    def test_listener_notified_by_requests(self):
        """Test API mutations reach store listeners."""
        listener = Mock()
        self.store.register(listener)

        self._add('5', 'food')
        self.client.post('/filter', json={'indices': [0]})
        self.client.delete('/transactions/0')

        self.assertEqual(listener.update.call_count, 3)
        listener.update.assert_called_with(self.store)

    def test_listener_failure_returns_500(self):
        """Test an unexpected listener error is reported as a server error."""
        listener = Mock()
        listener.update.side_effect = RuntimeError("view failed")
        self.store.register(listener)

        response = self._add('5', 'food')

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {'error': 'Internal server error'})

    def test_unknown_endpoint(self):
        """Test unknown routes return JSON 404."""
        response = self.client.get('/missing')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {'error': 'Endpoint not found'})

    def test_method_not_allowed(self):
        """Test wrong methods return JSON 405."""
        response = self.client.put('/filter')

        self.assertEqual(response.status_code, 405)
        self.assertEqual(response.get_json(), {'error': 'Method not allowed'})

    def test_cors_disabled(self):
        """Test CORS headers are omitted when disabled."""
        with patch.dict('os.environ', {'ENABLE_CORS': 'false'}):
            settings = Settings()
        client = create_app(TransactionStore(), settings).test_client()

        response = client.get('/health', headers={'Origin': 'http://example.com'})

        self.assertNotIn('Access-Control-Allow-Origin', response.headers)

    def test_cors_enabled(self):
        """Test CORS headers are sent by default."""
        response = self.client.get('/health', headers={'Origin': 'http://example.com'})

        self.assertIn('Access-Control-Allow-Origin', response.headers)


class TestRunServer(unittest.TestCase):
    """Test cases for serving the API."""

    def test_run_server_uses_settings(self):
        """Test the server is started single-threaded on the configured address."""
        with patch.dict('os.environ', {'REST_HOST': '0.0.0.0', 'REST_PORT': '8123'}, clear=True):
            settings = Settings()
        store = TransactionStore()

        with patch('flask.Flask.run') as mock_run:
            app = run_server(store, settings)

        self.assertIs(app.config['TRANSACTION_STORE'], store)
        mock_run.assert_called_once_with(
            host='0.0.0.0',
            port=8123,
            debug=False,
            threaded=False,
            use_reloader=False
        )


class TestRestApiWithExistingData(unittest.TestCase):
    """Test cases for an API wrapped around a pre-populated store."""

    def test_existing_transactions_listed(self):
        """Test transactions added directly to the store are served."""
        store = TransactionStore()
        transaction = Transaction(amount=Decimal('20'), category=Category.ENTERTAINMENT)
        store.add_transaction(transaction)
        client = create_app(store, Settings()).test_client()

        data = client.get('/transactions').get_json()

        self.assertEqual(data['transactions'][0]['transaction_id'], transaction.transaction_id)


if __name__ == '__main__':
    unittest.main()
