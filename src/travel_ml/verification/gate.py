"""
Place Verification

Manual review decisions and the daily auto-verification job for submitted
places. Auto-verification only ever approves: places that miss the quality
bar stay unverified and are picked up again on the next run.

Usage:
    verify_place(store, 'abc123', approved=True, reason='Looks good', verified_by=uid)
    result = auto_verify_places(store)
"""

import logging
from dataclasses import asdict, dataclass, field
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional

from travel_ml import config
from travel_ml.models.model_registry import current_time_ms, utc_now_iso
from travel_ml.store.base import DocumentStore

logger = logging.getLogger(__name__)

AUTO_VERIFY_REASON = 'Auto-verified by system'


@dataclass
class AutoVerificationResult:
    """Outcome of one auto-verification run."""
    checked: int
    verified_ids: List[str] = field(default_factory=list)

    @property
    def verified_count(self) -> int:
        return len(self.verified_ids)

    def to_dict(self) -> Dict[str, Any]:
        result = asdict(self)
        result['verified_count'] = self.verified_count
        return result


def verify_place(
    store: DocumentStore,
    place_id: str,
    approved: bool,
    reason: Optional[str],
    verified_by: str,
) -> None:
    """
    Record a reviewer's decision on a pending place.

    Raises:
        DocumentNotFoundError: if the place does not exist
    """
    store.update(config.PENDING_COLLECTION, place_id, {
        'verified': approved,
        'verificationReason': reason or '',
        'verifiedBy': verified_by,
        'verifiedAt': utc_now_iso(),
    })
    logger.info(f"Place {place_id} {'approved' if approved else 'rejected'} by {verified_by}")


def meets_auto_verification_criteria(place: Mapping[str, Any]) -> bool:
    """
    Heuristic quality bar: a real cost, at least one activity, and a
    caption longer than 20 characters.
    """
    cost = place.get('cost')
    if isinstance(cost, bool) or not isinstance(cost, Real) or not cost > config.AUTO_VERIFY_MIN_COST:
        return False

    activities = place.get('activities')
    if not activities or isinstance(activities, str):
        return False

    caption = place.get('caption')
    if not isinstance(caption, str) or not len(caption) > config.AUTO_VERIFY_MIN_CAPTION_LENGTH:
        return False

    return True


def auto_verify_places(
    store: DocumentStore,
    now_ms: Optional[int] = None,
    limit: int = config.AUTO_VERIFY_BATCH_LIMIT,
) -> AutoVerificationResult:
    """
    Approve unverified places older than 24 hours that meet the quality bar.

    Approvals are written in a single atomic batch.

    Args:
        store: Document store holding pending places
        now_ms: Current time in epoch milliseconds (wall clock if None)
        limit: Maximum places examined per run

    Returns:
        AutoVerificationResult
    """
    now_ms = current_time_ms() if now_ms is None else now_ms
    cutoff = now_ms - config.AUTO_VERIFY_MIN_AGE_MS

    candidates = store.query(
        config.PENDING_COLLECTION,
        [('verified', '==', False), ('addedAt', '<=', cutoff)],
        limit=limit,
    )

    result = AutoVerificationResult(checked=len(candidates))
    batch = store.batch()
    verified_at = utc_now_iso()

    for doc in candidates:
        if not meets_auto_verification_criteria(doc.data):
            continue
        batch.update(config.PENDING_COLLECTION, doc.id, {
            'verified': True,
            'verificationReason': AUTO_VERIFY_REASON,
            'verifiedBy': config.SYSTEM_VERIFIER,
            'verifiedAt': verified_at,
        })
        result.verified_ids.append(doc.id)

    if result.verified_ids:
        batch.commit()
        logger.info(f"Auto-verified {result.verified_count} places")

    return result
