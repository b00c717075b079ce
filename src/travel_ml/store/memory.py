"""In-memory document store, used by tests and embedded callers."""

from typing import Any, Dict, Optional

from travel_ml.store.base import DocumentStore


class InMemoryDocumentStore(DocumentStore):
    """Document store that lives only as long as the process."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Dict[str, Any]]]] = None):
        super().__init__()
        for collection, docs in (initial or {}).items():
            for doc_id, data in docs.items():
                self._collection(collection)[doc_id] = dict(data)

    def _persist(self) -> None:
        pass
