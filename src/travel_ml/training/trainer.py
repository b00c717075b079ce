"""
Training Step for the Travel Recommendation Model

Stand-in for the real training service: the prepared dataset is summarised,
a fixed delay simulates the training job, and the shared model metadata is
refreshed with a new version. No model weights are produced here.

Usage:
    trainer = PlaceModelTrainer(ModelRegistry(store))
    run = trainer.train(samples, total_places=store.count(PENDING_COLLECTION))
"""

import hashlib
import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from travel_ml import config
from travel_ml.models.model_registry import ModelMetadata, ModelRegistry
from travel_ml.training.training_set import TrainingSample, samples_to_arrays, samples_to_frame

logger = logging.getLogger(__name__)


@dataclass
class TrainingRun:
    """Summary of one (simulated) training run."""
    version: int
    training_samples: int
    total_places: int
    data_hash: str
    duration_seconds: float
    label_counts: Dict[int, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PlaceModelTrainer:
    """
    Simulated trainer for the travel recommendation classifier.

    A production deployment would send the dataset to a training service,
    retrain, and upload the artifact. This trainer only waits and records
    metadata so the rest of the pipeline can run end to end.
    """

    def __init__(
        self,
        registry: ModelRegistry,
        delay_seconds: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize the trainer.

        Args:
            registry: Registry that receives the new model metadata
            delay_seconds: Simulated training time (config default if None)
            sleep: Blocking sleep used for the simulated training time
        """
        self.registry = registry
        self.delay_seconds = config.TRAINING_DELAY_SECONDS if delay_seconds is None else delay_seconds
        self.sleep = sleep

    def train(self, samples: List[TrainingSample], total_places: int) -> TrainingRun:
        """
        Run the simulated training step and record the new model version.

        Args:
            samples: Prepared training samples
            total_places: Number of place documents in the pending collection

        Returns:
            TrainingRun describing the recorded version
        """
        logger.info("Simulating model training...")
        started = time.monotonic()

        X, y = samples_to_arrays(samples)
        data_hash = self._compute_hash(X, y)
        df = samples_to_frame(samples)
        label_counts = {int(k): int(v) for k, v in df['label'].value_counts().sort_index().items()}
        logger.info(f"Training data: X {X.shape}, labels {label_counts}, hash {data_hash}")

        self.sleep(self.delay_seconds)

        metadata: ModelMetadata = self.registry.record_training(
            total_places=total_places,
            training_data_size=len(samples),
        )

        run = TrainingRun(
            version=metadata.version,
            training_samples=len(samples),
            total_places=total_places,
            data_hash=data_hash,
            duration_seconds=time.monotonic() - started,
            label_counts=label_counts,
        )
        logger.info("Model training simulation completed")
        return run

    def _compute_hash(self, X: np.ndarray, y: np.ndarray) -> str:
        """Compute SHA256 hash of the feature matrix and label vector."""
        digest = hashlib.sha256()
        digest.update(np.ascontiguousarray(X, dtype=np.float64).tobytes())
        digest.update(np.ascontiguousarray(y, dtype=np.int64).tobytes())
        return digest.hexdigest()[:16]
