from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from docstore.exceptions import DocstoreError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


def _http_extra(request: Request, status: int) -> dict:
    return {"http_method": request.method, "path": request.url.path, "status_code": status}


async def handle_docstore_error(request: Request, exc: DocstoreError) -> JSONResponse:
    extra = _http_extra(request, exc.status_code)
    if isinstance(exc, StoreError):
        logger.error(
            "Storage failure on %s %s: %s", request.method, request.url.path, exc.detail,
            exc_info=exc, extra=extra,
        )
    elif isinstance(exc, NotFoundError):
        logger.debug("%s %s: %s", request.method, request.url.path, exc.detail, extra=extra)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.detail, extra=extra)
    return JSONResponse(status_code=exc.status_code, content=exc.to_problem())


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s: malformed request body", request.method, request.url.path, extra=_http_extra(request, 400))
    return JSONResponse(
        status_code=400,
        content={
            "title": "Bad Request",
            "status": 400,
            "detail": "Malformed request payload.",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocstoreError, handle_docstore_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation)  # type: ignore[arg-type]
