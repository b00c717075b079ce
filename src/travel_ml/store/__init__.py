# Document Store Module
"""
Document store adapters for pending places, model metadata and app config.
"""

from travel_ml.store.base import DocumentSnapshot, DocumentStore, WriteBatch
from travel_ml.store.json_store import JsonFileDocumentStore
from travel_ml.store.memory import InMemoryDocumentStore

__all__ = [
    'DocumentSnapshot',
    'DocumentStore',
    'WriteBatch',
    'InMemoryDocumentStore',
    'JsonFileDocumentStore',
]
