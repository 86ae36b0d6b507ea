"""docstore: store, list, search and fetch small text documents over HTTP."""

from .exceptions import DocstoreError, EmptyBatchError, NotFoundError, StoreError, ValidationError

__version__ = "0.1.0"

__all__ = [
    "DocstoreError",
    "ValidationError",
    "EmptyBatchError",
    "NotFoundError",
    "StoreError",
]
