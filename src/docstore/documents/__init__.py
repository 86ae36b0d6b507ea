"""Documents: upload, list, search, fetch and delete small text files.

- ``store``: persistence primitives over the ``documents`` table
- ``search``: the content-substring predicate used by the store
- ``service``: request-shaped orchestration, the only thing routes call
- ``router``: the ``/files`` HTTP surface
"""

from .router import router
from .service import DocumentService
from .store import DocumentStore

__all__ = ["router", "DocumentService", "DocumentStore"]
