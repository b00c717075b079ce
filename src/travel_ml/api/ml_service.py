"""
Travel ML Service - Flask API exposing the retraining backend

Callables are served at ``POST /callable/<name>`` with a JSON body of
``{"data": {...}}``. The authenticated caller id is read from the header
named by ``TRAVEL_ML_CALLER_HEADER`` (set by the upstream auth gateway).
Platform triggers are served under ``/triggers``.
"""

import logging
from typing import Optional

from flask import Flask, current_app, jsonify, request
from flask_cors import CORS

from travel_ml import config
from travel_ml.api.callables import CALLABLES, on_pending_place_created, scheduled_place_verification
from travel_ml.errors import CallableError
from travel_ml.store.base import DocumentStore
from travel_ml.store.json_store import JsonFileDocumentStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _store() -> DocumentStore:
    return current_app.config['STORE']


def create_app(store: Optional[DocumentStore] = None) -> Flask:
    """
    Build the Flask app.

    Args:
        store: Document store to serve (JSON file store at STORE_PATH if None)
    """
    app = Flask(__name__)
    CORS(app)
    app.config['STORE'] = store if store is not None else JsonFileDocumentStore(config.STORE_PATH)
    logger.info(f"Serving callables {sorted(CALLABLES)} from {type(app.config['STORE']).__name__}")

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint."""
        return jsonify({'status': 'healthy', 'callables': sorted(CALLABLES)})

    @app.route('/callable/<name>', methods=['POST'])
    def call(name: str):
        handler = CALLABLES.get(name)
        if handler is None:
            error = CallableError(CallableError.NOT_FOUND, f"Unknown callable: {name}")
            return jsonify(error.to_dict()), error.http_status

        body = request.get_json(silent=True) or {}
        if not isinstance(body, dict):
            error = CallableError(CallableError.INVALID_ARGUMENT, 'Request body must be a JSON object')
            return jsonify(error.to_dict()), error.http_status
        caller = request.headers.get(config.CALLER_HEADER) or None

        try:
            result = handler(_store(), body.get('data'), caller)
        except CallableError as e:
            return jsonify(e.to_dict()), e.http_status

        return jsonify({'result': result})

    @app.route('/triggers/pending-place-created', methods=['POST'])
    def pending_place_created():
        body = request.get_json(silent=True) or {}
        place_id = body.get('placeId') if isinstance(body, dict) else None
        if not isinstance(place_id, str):
            place_id = None
        snapshot = _store().get(config.PENDING_COLLECTION, place_id) if place_id else None
        if snapshot is None:
            error = CallableError(CallableError.NOT_FOUND, f"Place not found: {place_id}")
            return jsonify(error.to_dict()), error.http_status

        result = on_pending_place_created(_store(), snapshot)
        return jsonify({
            'triggered': bool(result and result.triggered),
            'retrain': result.to_dict() if result else None,
        })

    @app.route('/triggers/scheduled-verification', methods=['POST'])
    def scheduled_verification():
        # The age cutoff always uses the server clock.
        verified = scheduled_place_verification(_store())
        return jsonify({'verified': verified})

    return app


if __name__ == '__main__':
    create_app().run(host=config.HOST, port=config.PORT, debug=False)
