"""
Document Store Contract

Minimal document-database surface the backend depends on: keyed documents
grouped in collections, equality/range queries, and atomic write batches.

Query semantics follow document databases: a document that lacks the
filtered field never matches, so ``('trained', '==', False)`` skips
documents without a ``trained`` field.

Usage:
    store = InMemoryDocumentStore()
    doc_id = store.add('pending_training_places', {'name': 'Sigiriya'})
    pending = store.query('pending_training_places', [('trained', '==', False)])
    batch = store.batch()
    batch.update('pending_training_places', doc_id, {'trained': True})
    batch.commit()
"""

import copy
import logging
import operator
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from travel_ml.errors import BatchCommitError, DocumentNotFoundError

logger = logging.getLogger(__name__)

Filter = Tuple[str, str, Any]

_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    '==': operator.eq,
    '!=': operator.ne,
    '<': operator.lt,
    '<=': operator.le,
    '>': operator.gt,
    '>=': operator.ge,
}


@dataclass
class DocumentSnapshot:
    """Point-in-time copy of a stored document."""
    id: str
    data: Dict[str, Any]
    collection: str = ''

    @property
    def exists(self) -> bool:
        return self.data is not None

    def get(self, field_name: str, default: Any = None) -> Any:
        return self.data.get(field_name, default)

    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self.data)


@dataclass
class _Write:
    kind: str
    collection: str
    doc_id: str
    data: Dict[str, Any] = field(default_factory=dict)


def matches(data: Dict[str, Any], filters: Iterable[Filter]) -> bool:
    """Check a document against ``(field, op, value)`` filters."""
    for field_name, op, value in filters:
        if op not in _OPERATORS:
            raise ValueError(f"Unsupported query operator: {op}")
        if field_name not in data:
            return False
        try:
            if not _OPERATORS[op](data[field_name], value):
                return False
        except TypeError:
            # Mixed types never compare as matching.
            return False
    return True


class WriteBatch:
    """Collects writes and applies them all at once on ``commit``."""

    def __init__(self, store: 'DocumentStore'):
        self._store = store
        self._writes: List[_Write] = []
        self._committed = False

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> 'WriteBatch':
        self._writes.append(_Write('set', collection, doc_id, copy.deepcopy(data)))
        return self

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> 'WriteBatch':
        self._writes.append(_Write('update', collection, doc_id, copy.deepcopy(fields)))
        return self

    def __len__(self) -> int:
        return len(self._writes)

    def commit(self) -> int:
        """Apply every queued write, or none of them. Returns the write count."""
        if self._committed:
            raise BatchCommitError("Batch already committed")
        self._store.commit_batch(self._writes)
        self._committed = True
        return len(self._writes)


class DocumentStore(ABC):
    """
    Collection/document store backed by an in-process dictionary.

    Subclasses decide how (and whether) the dictionary is persisted by
    implementing ``_persist``, and may widen ``_transaction`` to reload
    shared state and lock it against other processes.
    """

    def __init__(self):
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._lock = threading.RLock()

    @abstractmethod
    def _persist(self) -> None:
        """Make the current state durable."""

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Serialise a read or read-modify-write against other threads."""
        with self._lock:
            yield

    def _collection(self, collection: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(collection, {})

    def get(self, collection: str, doc_id: str) -> Optional[DocumentSnapshot]:
        with self._transaction():
            data = self._collections.get(collection, {}).get(doc_id)
            if data is None:
                return None
            return DocumentSnapshot(id=doc_id, data=copy.deepcopy(data), collection=collection)

    def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        with self._transaction():
            self._collection(collection)[doc_id] = copy.deepcopy(data)
            self._persist()

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        with self._transaction():
            docs = self._collection(collection)
            if doc_id not in docs:
                raise DocumentNotFoundError(collection, doc_id)
            docs[doc_id].update(copy.deepcopy(fields))
            self._persist()

    def add(self, collection: str, data: Dict[str, Any], doc_id: Optional[str] = None) -> str:
        doc_id = doc_id or uuid.uuid4().hex[:20]
        self.set(collection, doc_id, data)
        return doc_id

    def query(
        self,
        collection: str,
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> List[DocumentSnapshot]:
        with self._transaction():
            docs = self._collections.get(collection, {})
            results = [
                DocumentSnapshot(id=doc_id, data=copy.deepcopy(data), collection=collection)
                for doc_id, data in sorted(docs.items())
                if matches(data, filters)
            ]
        if limit is not None:
            results = results[:limit]
        return results

    def count(self, collection: str, filters: Sequence[Filter] = ()) -> int:
        with self._transaction():
            docs = self._collections.get(collection, {})
            return sum(1 for data in docs.values() if matches(data, filters))

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    def commit_batch(self, writes: Sequence[_Write]) -> None:
        """Apply writes atomically: validate against a copy, then swap it in."""
        with self._transaction():
            staged = copy.deepcopy(self._collections)
            for write in writes:
                docs = staged.setdefault(write.collection, {})
                if write.kind == 'set':
                    docs[write.doc_id] = copy.deepcopy(write.data)
                elif write.kind == 'update':
                    if write.doc_id not in docs:
                        raise BatchCommitError(
                            f"Batch rejected, document not found: {write.collection}/{write.doc_id}"
                        )
                    docs[write.doc_id].update(copy.deepcopy(write.data))
                else:
                    raise BatchCommitError(f"Unknown write kind: {write.kind}")

            previous = self._collections
            self._collections = staged
            try:
                self._persist()
            except Exception as e:
                self._collections = previous
                raise BatchCommitError(f"Failed to persist batch: {e}") from e
        logger.debug(f"Committed batch of {len(writes)} writes")
