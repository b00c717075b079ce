"""
Retraining Orchestrator

Runs the retraining pipeline over the pending place batch:

    prepare_training_data -> train -> mark_trained -> notify

Each step yields a ``StepResult``. A failure in any of the first three steps
aborts the run with ``RetrainingError``; a failed notification is logged and
the run still counts as successful.

Every originally pending place is marked ``trained`` once the batch is
processed, including places skipped from the training set because review
rejected them. ``trained`` means "batch processed", not "used for training".

The pending-count check and the batch read/write are not atomic, so two
concurrent triggers can both retrain the same batch.

Usage:
    orchestrator = RetrainingOrchestrator(store)
    result = orchestrator.check_and_retrain()
    if result.triggered:
        print(result.version)
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from travel_ml import config
from travel_ml.errors import RetrainingError
from travel_ml.models.model_registry import ModelRegistry, utc_now_iso
from travel_ml.store.base import DocumentSnapshot, DocumentStore
from travel_ml.training.trainer import PlaceModelTrainer
from travel_ml.training.training_set import TrainingSample, prepare_training_data

logger = logging.getLogger(__name__)

PENDING_FILTER = [('trained', '==', False)]


@dataclass
class StepResult:
    """Outcome of one pipeline step."""
    name: str
    ok: bool
    detail: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class RetrainResult:
    """Outcome of a retraining run (or of a check that did not trigger one)."""
    triggered: bool
    pending_count: int
    training_samples: int = 0
    version: Optional[int] = None
    notified: bool = False
    steps: List[StepResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RetrainingOrchestrator:
    """
    Decides when to retrain and drives the retraining pipeline.

    All shared state lives in the document store passed in; the orchestrator
    itself holds no state between runs.
    """

    def __init__(
        self,
        store: DocumentStore,
        registry: Optional[ModelRegistry] = None,
        trainer: Optional[PlaceModelTrainer] = None,
        threshold: int = config.AUTO_RETRAIN_THRESHOLD,
    ):
        """
        Initialize the orchestrator.

        Args:
            store: Document store holding pending places and model metadata
            registry: Model registry (built on ``store`` if None)
            trainer: Training step (simulated trainer if None)
            threshold: Pending places needed before an automatic retrain
        """
        self.store = store
        self.registry = registry or ModelRegistry(store)
        self.trainer = trainer or PlaceModelTrainer(self.registry)
        self.threshold = threshold

    def get_pending_places(self) -> List[DocumentSnapshot]:
        """Places not yet processed by a retraining batch."""
        return self.store.query(config.PENDING_COLLECTION, PENDING_FILTER)

    def check_and_retrain(self) -> RetrainResult:
        """
        Retrain when the pending batch has reached the automatic threshold.

        Raises:
            RetrainingError: if a fatal pipeline step fails
        """
        pending = self.get_pending_places()
        logger.info(f"Total pending places: {len(pending)}")

        if len(pending) < self.threshold:
            return RetrainResult(triggered=False, pending_count=len(pending))

        logger.info("Triggering model retraining...")
        return self.retrain(pending)

    def retrain(self, pending_docs: Sequence[DocumentSnapshot]) -> RetrainResult:
        """
        Run the full pipeline over ``pending_docs``.

        Args:
            pending_docs: Snapshot of the pending batch

        Returns:
            RetrainResult with per-step outcomes

        Raises:
            RetrainingError: if preparing, training or marking fails
        """
        logger.info("Starting model retraining process...")
        result = RetrainResult(triggered=True, pending_count=len(pending_docs))

        try:
            samples: List[TrainingSample] = self._run_step(
                result, 'prepare_training_data',
                lambda: prepare_training_data(pending_docs),
                lambda s: {'samples': len(s)},
            )
            result.training_samples = len(samples)
            logger.info(f"Prepared {len(samples)} training samples")

            run = self._run_step(
                result, 'train',
                lambda: self.trainer.train(samples, total_places=self._total_places_count()),
                lambda r: {'version': r.version, 'data_hash': r.data_hash},
            )
            result.version = run.version

            self._run_step(
                result, 'mark_trained',
                lambda: self._mark_places_as_trained(pending_docs),
                lambda n: {'marked': n},
            )
        except RetrainingError as e:
            logger.error(f"Model retraining failed: {e}")
            raise

        result.notified = self._notify_clients(result)
        logger.info("Model retraining completed successfully")
        return result

    def _run_step(
        self,
        result: RetrainResult,
        name: str,
        action: Callable[[], Any],
        describe: Callable[[Any], Dict[str, Any]],
    ) -> Any:
        try:
            value = action()
        except Exception as e:
            result.steps.append(StepResult(name=name, ok=False, error=str(e)))
            raise RetrainingError(name, e) from e
        result.steps.append(StepResult(name=name, ok=True, detail=describe(value)))
        return value

    def _mark_places_as_trained(self, pending_docs: Sequence[DocumentSnapshot]) -> int:
        """Mark the whole batch as processed in one atomic write."""
        trained_at = utc_now_iso()
        batch = self.store.batch()
        for doc in pending_docs:
            batch.update(config.PENDING_COLLECTION, doc.id, {
                'trained': True,
                'trainedAt': trained_at,
            })
        count = batch.commit()
        logger.info(f"Marked {count} places as trained")
        return count

    def _notify_clients(self, result: RetrainResult) -> bool:
        """Publish the reload signal. Failures are logged, never raised."""
        logger.info("Notifying clients about model update...")
        try:
            signal = self.registry.publish_reload_signal()
        except Exception as e:
            logger.error(f"Error notifying clients: {e}")
            result.steps.append(StepResult(name='notify', ok=False, error=str(e)))
            return False

        result.steps.append(StepResult(name='notify', ok=True, detail={'version': signal.version}))
        logger.info("Clients notified successfully")
        return True

    def _total_places_count(self) -> int:
        try:
            return self.store.count(config.PENDING_COLLECTION)
        except Exception as e:
            logger.error(f"Error getting total places count: {e}")
            return 0
