from __future__ import annotations

from typing import Any


class DocstoreError(Exception):
    """Base error for the document service.

    Subclasses carry the HTTP status, a machine-readable code and a short title so
    the API boundary can render them without knowing about each type.
    """

    status_code: int = 500
    code: str = "DOCSTORE_ERROR"
    title: str = "Internal Server Error"

    def __init__(self, detail: str | None = None, *, extra: dict[str, Any] | None = None):
        self.detail = detail or self.title
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_problem(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "title": self.title,
            "status": self.status_code,
            "detail": self.detail,
            "code": self.code,
        }
        if self.extra:
            body.update(self.extra)
        return body


class ValidationError(DocstoreError):
    status_code = 400
    code = "VALIDATION_ERROR"
    title = "Bad Request"


class EmptyBatchError(ValidationError):
    code = "EMPTY_BATCH"

    def __init__(self, detail: str | None = None, **kwargs: Any):
        super().__init__(detail or "No files to upload", **kwargs)


class NotFoundError(DocstoreError):
    status_code = 404
    code = "NOT_FOUND"
    title = "Not Found"

    def __init__(self, detail: str | None = None, **kwargs: Any):
        super().__init__(detail or "File not found", **kwargs)


class StoreError(DocstoreError):
    """Storage I/O or connectivity failure. The detail stays in the logs."""

    status_code = 500
    code = "STORE_ERROR"
    title = "Internal Server Error"

    public_detail = "Internal storage error"

    def to_problem(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status_code,
            "detail": self.public_detail,
            "code": self.code,
        }


__all__ = [
    "DocstoreError",
    "ValidationError",
    "EmptyBatchError",
    "NotFoundError",
    "StoreError",
]
