"""
Error types shared across the travel place retraining backend.

Callable handlers surface failures to clients as ``CallableError`` with a
short status code; store adapters raise ``StoreError`` subclasses; the
retraining pipeline wraps fatal step failures in ``RetrainingError``.
"""

from typing import Any, Dict, Optional


class CallableError(Exception):
    """Error returned to a callable client as a structured failure payload."""

    UNAUTHENTICATED = 'unauthenticated'
    INVALID_ARGUMENT = 'invalid-argument'
    NOT_FOUND = 'not-found'
    INTERNAL = 'internal'

    HTTP_STATUS = {
        UNAUTHENTICATED: 401,
        INVALID_ARGUMENT: 400,
        NOT_FOUND: 404,
        INTERNAL: 500,
    }

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def http_status(self) -> int:
        return self.HTTP_STATUS.get(self.code, 500)

    def to_dict(self) -> Dict[str, Any]:
        return {'error': {'status': self.code, 'message': self.message}}


class StoreError(Exception):
    """Base class for document store failures."""


class DocumentNotFoundError(StoreError):
    """Raised when updating a document that does not exist."""

    def __init__(self, collection: str, doc_id: str):
        super().__init__(f"Document not found: {collection}/{doc_id}")
        self.collection = collection
        self.doc_id = doc_id


class BatchCommitError(StoreError):
    """Raised when an atomic batch cannot be applied. Nothing was written."""


class RetrainingError(Exception):
    """A fatal step of the retraining pipeline failed."""

    def __init__(self, step: str, cause: Optional[BaseException] = None):
        message = f"Retraining step '{step}' failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.step = step
        self.cause = cause
