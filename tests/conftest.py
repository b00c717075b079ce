from __future__ import annotations

import pytest

from travel_ml import config
from travel_ml.errors import BatchCommitError
from travel_ml.models.model_registry import ModelRegistry
from travel_ml.store.memory import InMemoryDocumentStore
from travel_ml.training.retraining import RetrainingOrchestrator
from travel_ml.training.trainer import PlaceModelTrainer

NOW_MS = 1_760_000_000_000
DAY_MS = 24 * 60 * 60 * 1000


class FailingBatchStore(InMemoryDocumentStore):
    """Store whose atomic batches always fail to commit."""

    def commit_batch(self, writes):
        raise BatchCommitError("simulated commit failure")


class FailingSetStore(InMemoryDocumentStore):
    """Store that refuses single-document writes to one collection."""

    def __init__(self, failing_collection: str):
        super().__init__()
        self.failing_collection = failing_collection

    def set(self, collection, doc_id, data):
        if collection == self.failing_collection:
            raise RuntimeError(f"{collection} unavailable")
        super().set(collection, doc_id, data)


def make_place(**overrides) -> dict:
    place = {
        "name": "Sigiriya Rock",
        "cost": 30,
        "duration": 2,
        "type": "historical",
        "activities": ["climbing", "explore"],
        "caption": "Ancient rock fortress with heritage frescoes",
        "verified": True,
        "trained": False,
        "addedAt": NOW_MS - 2 * DAY_MS,
    }
    place.update(overrides)
    return place


@pytest.fixture()
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture()
def add_place(store):
    def _add(doc_id: str | None = None, **overrides) -> str:
        return store.add(config.PENDING_COLLECTION, make_place(**overrides), doc_id=doc_id)

    return _add


@pytest.fixture()
def orchestrator_factory():
    """Orchestrators that never sleep during the simulated training step."""

    def _build(store, **kwargs) -> RetrainingOrchestrator:
        registry = ModelRegistry(store)
        trainer = PlaceModelTrainer(registry, delay_seconds=0, sleep=lambda _s: None)
        return RetrainingOrchestrator(store, registry=registry, trainer=trainer, **kwargs)

    return _build


@pytest.fixture(autouse=True)
def no_training_delay(monkeypatch):
    monkeypatch.setattr(config, "TRAINING_DELAY_SECONDS", 0.0)
