from __future__ import annotations

import pytest

from conftest import FailingBatchStore, NOW_MS, make_place
from travel_ml import config
from travel_ml.api import callables
from travel_ml.errors import CallableError


def test_manual_retrain_without_pending_places(store) -> None:
    assert callables.manual_retrain(store) == {
        "success": False,
        "message": "No pending places to train",
    }


def test_manual_retrain_processes_every_pending_place(store, add_place) -> None:
    add_place("p1")
    add_place("p2", verified=False)

    result = callables.manual_retrain(store)

    assert result == {"success": True, "message": "Model retrained with 2 new places"}
    assert store.count(config.PENDING_COLLECTION, [("trained", "==", False)]) == 0


def test_manual_retrain_failure_is_internal_error() -> None:
    store = FailingBatchStore()
    store.add(config.PENDING_COLLECTION, make_place(), doc_id="p1")

    with pytest.raises(CallableError) as excinfo:
        callables.manual_retrain(store)

    assert excinfo.value.code == "internal"
    assert excinfo.value.message == "Retraining failed"


def test_get_model_stats_payload(store, add_place) -> None:
    add_place("p1")

    stats = callables.get_model_stats(store)

    assert stats["pendingPlaces"] == 1
    assert stats["needsRetraining"] is False


def test_verify_place_requires_caller(store, add_place) -> None:
    add_place("p1", verified=False)
    before = store.get(config.PENDING_COLLECTION, "p1").to_dict()

    with pytest.raises(CallableError) as excinfo:
        callables.verify_place(store, {"placeId": "p1", "approved": True}, None)

    assert excinfo.value.code == "unauthenticated"
    assert store.get(config.PENDING_COLLECTION, "p1").to_dict() == before


def test_verify_place_messages(store, add_place) -> None:
    add_place("p1", verified=False)

    approved = callables.verify_place(store, {"placeId": "p1", "approved": True, "reason": "ok"}, "uid-1")
    rejected = callables.verify_place(store, {"placeId": "p1", "approved": False}, "uid-1")

    assert approved == {"success": True, "message": "Place approved"}
    assert rejected == {"success": True, "message": "Place rejected"}
    assert store.get(config.PENDING_COLLECTION, "p1").get("verifiedBy") == "uid-1"


def test_verify_place_argument_errors(store) -> None:
    with pytest.raises(CallableError) as missing_id:
        callables.verify_place(store, {"approved": True}, "uid-1")
    with pytest.raises(CallableError) as unknown_place:
        callables.verify_place(store, {"placeId": "nope", "approved": True}, "uid-1")

    assert missing_id.value.code == "invalid-argument"
    assert unknown_place.value.code == "internal"
    assert unknown_place.value.message == "Verification failed"


def test_download_url_payload(store) -> None:
    payload = callables.get_model_download_url(store)

    assert payload["downloadUrl"].endswith("travel_model.tflite")
    assert payload["lastUpdated"] is None
    assert payload["size"] == 1024 * 1024


def test_place_created_trigger_retrains(store, add_place) -> None:
    add_place("p1")

    result = callables.on_pending_place_created(store, store.get(config.PENDING_COLLECTION, "p1"))

    assert result.triggered is True
    assert store.get(config.PENDING_COLLECTION, "p1").get("trained") is True


def test_place_created_trigger_swallows_failures() -> None:
    store = FailingBatchStore()
    store.add(config.PENDING_COLLECTION, make_place(), doc_id="p1")

    result = callables.on_pending_place_created(store, store.get(config.PENDING_COLLECTION, "p1"))

    assert result is None
    assert store.get(config.PENDING_COLLECTION, "p1").get("trained") is False


def test_scheduled_verification_swallows_failures() -> None:
    store = FailingBatchStore()
    store.add(config.PENDING_COLLECTION, make_place(verified=False), doc_id="p1")

    assert callables.scheduled_place_verification(store, now_ms=NOW_MS) == 0
    assert store.get(config.PENDING_COLLECTION, "p1").get("verified") is False


def test_scheduled_verification_counts_approvals(store, add_place) -> None:
    add_place("p1", verified=False)
    add_place("p2", verified=False, cost=5)

    assert callables.scheduled_place_verification(store, now_ms=NOW_MS) == 1


@pytest.mark.parametrize("data", [
    {"placeId": "p1", "approved": "false"},
    {"placeId": "p1", "approved": 0},
    {"placeId": "p1"},
])
def test_verify_place_requires_boolean_approval(store, add_place, data) -> None:
    add_place("p1", verified=False)
    before = store.get(config.PENDING_COLLECTION, "p1").to_dict()

    with pytest.raises(CallableError) as excinfo:
        callables.verify_place(store, data, "uid-1")

    assert excinfo.value.code == "invalid-argument"
    assert store.get(config.PENDING_COLLECTION, "p1").to_dict() == before


@pytest.mark.parametrize("data", [["p1"], "p1", 42])
def test_verify_place_rejects_non_object_data(store, data) -> None:
    with pytest.raises(CallableError) as excinfo:
        callables.verify_place(store, data, "uid-1")

    assert excinfo.value.code == "invalid-argument"


def test_verify_place_checks_auth_before_payload_shape(store) -> None:
    with pytest.raises(CallableError) as excinfo:
        callables.verify_place(store, ["p1"], None)

    assert excinfo.value.code == "unauthenticated"
