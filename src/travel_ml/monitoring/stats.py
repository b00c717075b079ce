"""
Model Training Statistics

Summarises how many submitted places are waiting for a retraining batch
and whether the backlog is large enough to warrant one.

The backlog threshold here (10) is deliberately separate from the automatic
retrain trigger threshold (1).
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from travel_ml import config
from travel_ml.models.model_registry import ModelRegistry
from travel_ml.store.base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass
class ModelStats:
    """Training backlog and current model version."""
    total_places: int
    pending_places: int
    trained_places: int
    last_model_update: Optional[str]
    model_version: Optional[int]
    needs_retraining: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalPlaces': self.total_places,
            'pendingPlaces': self.pending_places,
            'trainedPlaces': self.trained_places,
            'lastModelUpdate': self.last_model_update,
            'modelVersion': self.model_version,
            'needsRetraining': self.needs_retraining,
        }


def get_model_stats(
    store: DocumentStore,
    needs_retraining_threshold: int = config.NEEDS_RETRAINING_THRESHOLD,
) -> ModelStats:
    """
    Compute place counts and retraining need from the store.

    ``trained_places`` is everything not pending, so places missing a
    ``trained`` field count as trained.
    """
    total = store.count(config.PENDING_COLLECTION)
    pending = store.count(config.PENDING_COLLECTION, [('trained', '==', False)])
    metadata = ModelRegistry(store).get_metadata()

    stats = ModelStats(
        total_places=total,
        pending_places=pending,
        trained_places=total - pending,
        last_model_update=metadata.lastUpdated if metadata else None,
        model_version=metadata.version if metadata else None,
        needs_retraining=pending >= needs_retraining_threshold,
    )
    logger.debug(f"Model stats: {stats.to_dict()}")
    return stats
