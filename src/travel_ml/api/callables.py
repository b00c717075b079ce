"""
Callable and Trigger Handlers

Entry points invoked by clients (callables) and by the platform (document
triggers and the daily schedule). Callables return a JSON-serialisable
payload or raise ``CallableError``; triggers never raise, they log and
return.

Callables take ``(store, data, caller)`` where ``caller`` is the
authenticated user id, or None for anonymous calls.
"""

import logging
from typing import Any, Dict, Optional

from travel_ml import config
from travel_ml.errors import CallableError
from travel_ml.models.model_registry import ModelRegistry
from travel_ml.monitoring.stats import get_model_stats as compute_model_stats
from travel_ml.store.base import DocumentSnapshot, DocumentStore
from travel_ml.training.retraining import RetrainingOrchestrator, RetrainResult
from travel_ml.verification.gate import auto_verify_places, verify_place as record_verification

logger = logging.getLogger(__name__)


def manual_retrain(
    store: DocumentStore,
    data: Optional[Dict[str, Any]] = None,
    caller: Optional[str] = None,
    orchestrator: Optional[RetrainingOrchestrator] = None,
) -> Dict[str, Any]:
    """Retrain on every pending place, regardless of the automatic threshold."""
    logger.info("Manual retraining triggered")
    orchestrator = orchestrator or RetrainingOrchestrator(store)

    try:
        pending = orchestrator.get_pending_places()
        if not pending:
            return {'success': False, 'message': 'No pending places to train'}

        orchestrator.retrain(pending)
    except Exception as e:
        logger.error(f"Manual retrain error: {e}")
        raise CallableError(CallableError.INTERNAL, 'Retraining failed') from e

    return {
        'success': True,
        'message': f"Model retrained with {len(pending)} new places",
    }


def get_model_stats(
    store: DocumentStore,
    data: Optional[Dict[str, Any]] = None,
    caller: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        return compute_model_stats(store).to_dict()
    except Exception as e:
        logger.error(f"Error getting model stats: {e}")
        raise CallableError(CallableError.INTERNAL, 'Failed to get stats') from e


def verify_place(
    store: DocumentStore,
    data: Optional[Dict[str, Any]],
    caller: Optional[str],
) -> Dict[str, Any]:
    """
    Approve or reject a pending place (admin callable).

    Expected data:
    {
        "placeId": "abc123",
        "approved": true,
        "reason": "Verified on site"
    }
    """
    if not caller:
        raise CallableError(CallableError.UNAUTHENTICATED, 'Must be authenticated')

    data = {} if data is None else data
    if not isinstance(data, dict):
        raise CallableError(CallableError.INVALID_ARGUMENT, 'data must be an object')

    place_id = data.get('placeId')
    if not place_id or not isinstance(place_id, str):
        raise CallableError(CallableError.INVALID_ARGUMENT, 'placeId is required')

    approved = data.get('approved')
    if not isinstance(approved, bool):
        raise CallableError(CallableError.INVALID_ARGUMENT, 'approved must be a boolean')

    try:
        record_verification(store, place_id, approved, data.get('reason'), caller)
    except Exception as e:
        logger.error(f"Error verifying place: {e}")
        raise CallableError(CallableError.INTERNAL, 'Verification failed') from e

    return {
        'success': True,
        'message': 'Place approved' if approved else 'Place rejected',
    }


def get_model_download_url(
    store: DocumentStore,
    data: Optional[Dict[str, Any]] = None,
    caller: Optional[str] = None,
) -> Dict[str, Any]:
    try:
        return ModelRegistry(store).download_info()
    except Exception as e:
        logger.error(f"Error generating download URL: {e}")
        raise CallableError(CallableError.INTERNAL, 'Failed to generate URL') from e


CALLABLES = {
    'manualRetrain': manual_retrain,
    'getModelStats': get_model_stats,
    'verifyPlace': verify_place,
    'getModelDownloadUrl': get_model_download_url,
}


def on_pending_place_created(
    store: DocumentStore,
    snapshot: DocumentSnapshot,
    orchestrator: Optional[RetrainingOrchestrator] = None,
) -> Optional[RetrainResult]:
    """Document trigger for a new pending place. Never raises."""
    try:
        logger.info(f"New place added: {snapshot.get('name')}")
        orchestrator = orchestrator or RetrainingOrchestrator(store)
        return orchestrator.check_and_retrain()
    except Exception as e:
        logger.error(f"Error in checkModelRetraining: {e}")
        return None


def scheduled_place_verification(store: DocumentStore, now_ms: Optional[int] = None) -> int:
    """
    Daily job (02:00 Asia/Colombo) auto-verifying aged pending places.

    Returns the number of places approved; 0 when the run fails.
    """
    logger.info(
        f"Running scheduled place verification ({config.VERIFICATION_SCHEDULE} "
        f"{config.VERIFICATION_TIMEZONE})..."
    )
    try:
        return auto_verify_places(store, now_ms=now_ms).verified_count
    except Exception as e:
        logger.error(f"Scheduled verification failed: {e}")
        return 0
