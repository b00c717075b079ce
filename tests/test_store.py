from __future__ import annotations

import json
import threading

import pytest

from conftest import NOW_MS, make_place
from travel_ml import config
from travel_ml.errors import BatchCommitError, DocumentNotFoundError
from travel_ml.store.json_store import JsonFileDocumentStore
from travel_ml.store.memory import InMemoryDocumentStore
from travel_ml.verification.gate import auto_verify_places


def test_query_filters_skip_documents_missing_the_field() -> None:
    store = InMemoryDocumentStore({
        "places": {
            "a": {"trained": False, "addedAt": 5},
            "b": {"trained": True, "addedAt": 1},
            "c": {"addedAt": 2},
        }
    })

    assert [d.id for d in store.query("places", [("trained", "==", False)])] == ["a"]
    assert [d.id for d in store.query("places", [("addedAt", "<=", 2)])] == ["b", "c"]
    assert store.count("places") == 3
    assert store.count("places", [("trained", "!=", True)]) == 1


def test_query_limit_and_unknown_operator() -> None:
    store = InMemoryDocumentStore({"places": {f"p{i}": {"n": i} for i in range(4)}})

    assert len(store.query("places", limit=2)) == 2
    with pytest.raises(ValueError):
        store.query("places", [("n", "in", [1])])


def test_snapshots_are_copies() -> None:
    store = InMemoryDocumentStore()
    store.set("places", "a", {"activities": ["hiking"]})

    snapshot = store.get("places", "a")
    snapshot.data["activities"].append("spa")

    assert store.get("places", "a").get("activities") == ["hiking"]


def test_update_missing_document_raises() -> None:
    with pytest.raises(DocumentNotFoundError):
        InMemoryDocumentStore().update("places", "nope", {"trained": True})


def test_batch_is_all_or_nothing() -> None:
    store = InMemoryDocumentStore({"places": {"a": {"trained": False}}})
    batch = store.batch()
    batch.update("places", "a", {"trained": True})
    batch.update("places", "missing", {"trained": True})

    with pytest.raises(BatchCommitError):
        batch.commit()

    assert store.get("places", "a").get("trained") is False


def test_batch_commit_applies_every_write() -> None:
    store = InMemoryDocumentStore({"places": {"a": {"trained": False}}})
    batch = store.batch()
    batch.update("places", "a", {"trained": True})
    batch.set("places", "b", {"trained": False})

    assert batch.commit() == 2
    assert store.get("places", "a").get("trained") is True
    assert store.get("places", "b").get("trained") is False
    with pytest.raises(BatchCommitError):
        batch.commit()


def test_json_store_persists_across_instances(tmp_path) -> None:
    path = tmp_path / "data" / "store.json"
    store = JsonFileDocumentStore(str(path))
    doc_id = store.add("places", {"name": "Ella", "trained": False})
    batch = store.batch()
    batch.update("places", doc_id, {"trained": True})
    batch.commit()

    reopened = JsonFileDocumentStore(str(path))

    assert reopened.get("places", doc_id).to_dict() == {"name": "Ella", "trained": True}
    assert json.loads(path.read_text())["collections"]["places"][doc_id]["name"] == "Ella"
    assert not path.with_suffix(".json.tmp").exists()


def test_json_store_instances_sharing_a_file_keep_each_others_writes(tmp_path) -> None:
    path = str(tmp_path / "store.json")
    service = JsonFileDocumentStore(path)
    scheduler = JsonFileDocumentStore(path)

    service.set(config.PENDING_COLLECTION, "p1", make_place(verified=False))
    assert auto_verify_places(scheduler, now_ms=NOW_MS).verified_ids == ["p1"]
    service.set(config.PENDING_COLLECTION, "p2", make_place(verified=False))

    reopened = JsonFileDocumentStore(path)
    assert reopened.get(config.PENDING_COLLECTION, "p1").get("verified") is True
    assert reopened.get(config.PENDING_COLLECTION, "p2") is not None
    assert service.get(config.PENDING_COLLECTION, "p1").get("verifiedBy") == config.SYSTEM_VERIFIER


def test_json_store_concurrent_adds_are_all_kept(tmp_path) -> None:
    path = str(tmp_path / "store.json")
    stores = [JsonFileDocumentStore(path) for _ in range(4)]

    def _add_many(store: JsonFileDocumentStore, worker: int) -> None:
        for i in range(10):
            store.add("places", {"worker": worker, "n": i})

    threads = [threading.Thread(target=_add_many, args=(s, w)) for w, s in enumerate(stores)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert JsonFileDocumentStore(path).count("places") == 40
