"""
REST API for the expense tracker.

This module provides HTTP endpoints for adding, listing and removing
transactions and for filtering them, all backed by a TransactionStore.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import Flask, request, jsonify
from flask_cors import CORS

from ..config.settings import Settings, get_settings
from ..model.filters import apply_filter
from ..model.store import TransactionStore
from ..model.transaction import Transaction
from .validators import validate_transaction_request, validate_filter_request

logger = logging.getLogger(__name__)

API_VERSION = '1.0.0'


def create_app(store: Optional[TransactionStore] = None, settings: Optional[Settings] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        store: Transaction store backing the API (a new one if omitted)
        settings: Settings to use (the global settings if omitted)

    Returns:
        Configured Flask application
    """
    settings = settings or get_settings()
    if store is None:
        store = TransactionStore()

    app = Flask(__name__)
    app.config['TRANSACTION_STORE'] = store

    if settings.enable_cors:
        CORS(app, origins=settings.cors_origins)

    register_routes(app, store)

    logger.info("REST API initialized")
    return app


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _store_snapshot(store: TransactionStore) -> Dict[str, Any]:
    transactions = store.get_transactions()
    return {
        'transactions': [
            dict(transaction.to_dict(), index=index)
            for index, transaction in enumerate(transactions)
        ],
        'count': len(transactions),
        'matched_filter_indices': store.get_matched_filter_indices(),
    }


def register_routes(app: Flask, store: TransactionStore) -> None:
    """Register all API routes."""

    @app.route('/health', methods=['GET'])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'timestamp': _timestamp(),
            'version': API_VERSION
        })

    @app.route('/transactions', methods=['GET'])
    def list_transactions():
        """List all transactions together with the current filter result."""
        try:
            return jsonify(_store_snapshot(store)), 200

        except Exception as e:
            logger.error(f"Error listing transactions: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

    @app.route('/transactions', methods=['POST'])
    def add_transaction():
        """
        Add a new transaction.

        Request body:
        {
            "amount": "12.50",
            "category": "food"
        }
        """
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'error': 'Request body must be a JSON object'}), 400

            is_valid, error, validated_data = validate_transaction_request(data)
            if not is_valid:
                return jsonify({'error': error}), 400

            transaction = Transaction(
                amount=validated_data['amount'],
                category=validated_data['category']
            )
            store.add_transaction(transaction)

            logger.info(f"Transaction added: {transaction.transaction_id}")
            response_data = dict(transaction.to_dict(), index=len(store) - 1)
            return jsonify(response_data), 201

        except Exception as e:
            logger.error(f"Error adding transaction: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

    @app.route('/transactions/<int:index>', methods=['DELETE'])
    def remove_transaction(index: int):
        """Remove the transaction at the given position."""
        try:
            transactions = store.get_transactions()
            if index >= len(transactions):
                return jsonify({'error': 'Transaction not found'}), 404

            transaction = transactions[index]
            store.remove_transaction(transaction)

            logger.info(f"Transaction removed: {transaction.transaction_id}")
            return jsonify({
                'message': 'Transaction removed successfully',
                'transaction': transaction.to_dict()
            }), 200

        except Exception as e:
            logger.error(f"Error removing transaction: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

    @app.route('/filter', methods=['GET'])
    def get_filter():
        """Get the current matched filter indices."""
        indices = store.get_matched_filter_indices()
        return jsonify({'matched_filter_indices': indices, 'count': len(indices)}), 200

    @app.route('/filter', methods=['POST'])
    def set_filter():
        """
        Filter transactions.

        Request body, exactly one of:
        {"indices": [0, 2]}
        {"category": "food"}
        {"amount": "12.50"}
        """
        try:
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                return jsonify({'error': 'Request body must be a JSON object'}), 400

            is_valid, error, validated_data = validate_filter_request(data)
            if not is_valid:
                return jsonify({'error': error}), 400

            if 'filter' in validated_data:
                indices = apply_filter(store, validated_data['filter'])
            else:
                indices = validated_data['indices']
                store.set_matched_filter_indices(indices)

            return jsonify({'matched_filter_indices': indices, 'count': len(indices)}), 200

        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Error applying filter: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

    @app.route('/filter', methods=['DELETE'])
    def clear_filter():
        """Clear the matched filter indices."""
        try:
            store.set_matched_filter_indices([])
            return jsonify({'matched_filter_indices': [], 'count': 0}), 200

        except Exception as e:
            logger.error(f"Error clearing filter: {str(e)}")
            return jsonify({'error': 'Internal server error'}), 500

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Endpoint not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error(f"Internal server error: {str(error)}")
        return jsonify({'error': 'Internal server error'}), 500


def run_server(store: Optional[TransactionStore] = None, settings: Optional[Settings] = None) -> Flask:
    """
    Run the REST API server until interrupted.

    The server handles one request at a time so the store is never
    accessed concurrently.

    Args:
        store: Transaction store backing the API
        settings: Settings providing host, port and debug mode

    Returns:
        The application that was served
    """
    settings = settings or get_settings()
    app = create_app(store, settings)
    logger.info(f"Starting REST API server on {settings.rest_host}:{settings.rest_port}")
    app.run(
        host=settings.rest_host,
        port=settings.rest_port,
        debug=settings.debug,
        threaded=False,
        use_reloader=False
    )
    return app
