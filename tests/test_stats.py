from __future__ import annotations

from travel_ml import config
from travel_ml.monitoring.stats import get_model_stats


def test_stats_with_one_pending_place(store, add_place) -> None:
    for i in range(11):
        add_place(f"trained-{i:02d}", trained=True)
    add_place("pending-00")

    stats = get_model_stats(store).to_dict()

    assert stats == {
        "totalPlaces": 12,
        "pendingPlaces": 1,
        "trainedPlaces": 11,
        "lastModelUpdate": None,
        "modelVersion": None,
        "needsRetraining": False,
    }


def test_backlog_of_ten_needs_retraining(store, add_place) -> None:
    for i in range(10):
        add_place(f"pending-{i:02d}")

    stats = get_model_stats(store)

    assert stats.pending_places == 10
    assert stats.needs_retraining is True


def test_stats_report_model_metadata(store) -> None:
    store.set(config.MODELS_COLLECTION, config.MODEL_ID, {
        "version": 1_760_000_000_123,
        "lastUpdated": "2025-10-09T08:00:00+00:00",
        "totalPlaces": 4,
        "trainingDataSize": 3,
        "status": "updated",
    })

    stats = get_model_stats(store)

    assert stats.model_version == 1_760_000_000_123
    assert stats.last_model_update == "2025-10-09T08:00:00+00:00"
    assert stats.total_places == 0
