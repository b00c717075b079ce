"""
Model Registry for the Travel Recommendation Model

Keeps the shared model metadata document and the client reload signal in
the document store. Versions are wall-clock epoch milliseconds, bumped past
the stored version when the clock has not advanced, so every retrain gets a
strictly larger version.

Usage:
    registry = ModelRegistry(store)
    metadata = registry.record_training(total_places=12, training_data_size=9)
    registry.publish_reload_signal()
"""

import logging
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

from travel_ml import config
from travel_ml.store.base import DocumentStore

logger = logging.getLogger(__name__)


class ModelStatus(Enum):
    """Model metadata status."""
    UPDATED = 'updated'


@dataclass
class ModelMetadata:
    """Shared metadata describing the latest retrained model."""
    version: int
    lastUpdated: str
    totalPlaces: int
    trainingDataSize: int
    status: str = ModelStatus.UPDATED.value

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ModelMetadata':
        return cls(
            version=int(data['version']),
            lastUpdated=data.get('lastUpdated'),
            totalPlaces=int(data.get('totalPlaces', 0)),
            trainingDataSize=int(data.get('trainingDataSize', 0)),
            status=data.get('status', ModelStatus.UPDATED.value),
        )


@dataclass
class ReloadSignal:
    """Flag read by client apps to pull the latest model."""
    shouldReload: bool
    lastUpdate: str
    version: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ReloadSignal':
        return cls(
            shouldReload=bool(data.get('shouldReload', False)),
            lastUpdate=data.get('lastUpdate'),
            version=int(data.get('version', 0)),
        )


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def current_time_ms() -> int:
    return int(time.time() * 1000)


class ModelRegistry:
    """
    Registry for the shared travel recommendation model metadata.

    Provides functionality for:
    - Issuing monotonic version tokens
    - Recording a completed training run
    - Publishing the client reload signal
    - Describing the model download
    """

    def __init__(
        self,
        store: DocumentStore,
        clock: Callable[[], int] = current_time_ms,
    ):
        """
        Initialize the registry.

        Args:
            store: Document store holding ml_models and app_config
            clock: Returns the current time in epoch milliseconds
        """
        self.store = store
        self.clock = clock

    def get_metadata(self) -> Optional[ModelMetadata]:
        """Return the current model metadata, or None before the first retrain."""
        snapshot = self.store.get(config.MODELS_COLLECTION, config.MODEL_ID)
        if snapshot is None:
            return None
        return ModelMetadata.from_dict(snapshot.data)

    def get_reload_signal(self) -> Optional[ReloadSignal]:
        snapshot = self.store.get(config.APP_CONFIG_COLLECTION, config.RELOAD_DOC_ID)
        if snapshot is None:
            return None
        return ReloadSignal.from_dict(snapshot.data)

    def next_version(self) -> int:
        """Wall-clock version token, strictly greater than any stored version."""
        version = self.clock()

        latest = 0
        metadata = self.get_metadata()
        if metadata:
            latest = metadata.version
        signal = self.get_reload_signal()
        if signal:
            latest = max(latest, signal.version)

        return max(version, latest + 1)

    def record_training(
        self,
        total_places: int,
        training_data_size: int,
        status: str = ModelStatus.UPDATED.value,
    ) -> ModelMetadata:
        """
        Write metadata for a finished training run.

        Args:
            total_places: Number of place documents in the pending collection
            training_data_size: Samples used in this run
            status: Metadata status string

        Returns:
            ModelMetadata that was written
        """
        metadata = ModelMetadata(
            version=self.next_version(),
            lastUpdated=utc_now_iso(),
            totalPlaces=total_places,
            trainingDataSize=training_data_size,
            status=status,
        )
        self.store.set(config.MODELS_COLLECTION, config.MODEL_ID, metadata.to_dict())

        logger.info(f"Recorded model version {metadata.version} ({training_data_size} samples)")
        return metadata

    def publish_reload_signal(self) -> ReloadSignal:
        """Tell client apps that a new model is available."""
        signal = ReloadSignal(
            shouldReload=True,
            lastUpdate=utc_now_iso(),
            version=self.next_version(),
        )
        self.store.set(config.APP_CONFIG_COLLECTION, config.RELOAD_DOC_ID, signal.to_dict())

        logger.info(f"Published reload signal for version {signal.version}")
        return signal

    def download_info(self) -> Dict[str, Any]:
        """
        Describe where clients can download the model.

        The URL is a fixed placeholder until signed URLs are generated.
        """
        metadata = self.get_metadata()
        return {
            'downloadUrl': config.DOWNLOAD_URL,
            'version': metadata.version if metadata else self.clock(),
            'lastUpdated': metadata.lastUpdated if metadata else None,
            'size': config.MODEL_SIZE_BYTES,
        }
