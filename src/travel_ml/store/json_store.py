"""
JSON File Document Store

Persists every collection in a single JSON file. Writes go to a temporary
file first and replace the original, so a crash mid-write never leaves a
truncated store behind.

Several processes (the HTTP service, the scheduled CLI job) may share one
file. Every operation holds an exclusive ``fcntl.flock`` on ``<path>.lock``
and reloads the file before reading or modifying it, so one process never
overwrites documents another process wrote.

Usage:
    store = JsonFileDocumentStore('./data/store.json')
    store.set('app_config', 'ml_model', {'shouldReload': False})
"""

import fcntl
import json
import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

from travel_ml.store.base import DocumentStore

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(DocumentStore):
    """Document store persisted to a JSON file on local disk."""

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: Location of the JSON file. Created on first write.
        """
        super().__init__()
        self.path = Path(path)
        self.lock_path = self.path.with_suffix(self.path.suffix + '.lock')
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._depth = 0
        with self._transaction():
            doc_count = sum(len(docs) for docs in self._collections.values())
        logger.info(f"Initialized JSON document store at: {path} ({doc_count} documents)")

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Hold the thread lock and the file lock, reloading on entry."""
        with self._lock:
            if self._depth:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            with open(self.lock_path, 'a') as lock_file:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
                self._depth = 1
                try:
                    self._load()
                    yield
                finally:
                    self._depth = 0
                    fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _load(self) -> None:
        """Load collections from disk."""
        if not self.path.exists():
            return

        with open(self.path, 'r') as f:
            data = json.load(f)

        self._collections = data.get('collections', {})
        logger.debug(f"Loaded {len(self._collections)} collections from {self.path}")

    def _persist(self) -> None:
        """Write collections to disk atomically."""
        data = {
            'collections': self._collections,
            'updated_at': datetime.now(timezone.utc).isoformat(),
        }

        tmp_path = self.path.with_suffix(self.path.suffix + '.tmp')
        with open(tmp_path, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)
