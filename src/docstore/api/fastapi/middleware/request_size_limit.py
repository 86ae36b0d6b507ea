from __future__ import annotations

import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class _BodyTooLarge(Exception):
    pass


def _too_large_response() -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "title": "Payload Too Large",
            "status": 413,
            "detail": "Request body exceeds allowed size.",
            "code": "PAYLOAD_TOO_LARGE",
        },
    )


class RequestSizeLimitMiddleware:
    """
    Reject bodies larger than ``max_bytes`` with a 413 Problem+JSON.

    A declared ``Content-Length`` over the limit is refused before the body is
    read. Bodies without one (chunked uploads) are counted as they stream in, and
    the request is abandoned as soon as the count passes the limit.
    """

    def __init__(self, app: ASGIApp, max_bytes: int = 50 * 1024 * 1024) -> None:
        self.app = app
        self.max_bytes = max_bytes

    def _log_rejection(self, scope: Scope, size: int) -> None:
        method, path = scope.get("method", ""), scope.get("path", "")
        logger.info(
            "Rejected %s %s: %d bytes over limit %d",
            method,
            path,
            size,
            self.max_bytes,
            extra={"http_method": method, "path": path, "status_code": 413},
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        length = None
        for key, value in scope.get("headers", []):
            if key == b"content-length":
                try:
                    length = int(value)
                except ValueError:
                    length = None
                break
        if length is not None and length > self.max_bytes:
            self._log_rejection(scope, length)
            await _too_large_response()(scope, receive, send)
            return

        received = 0
        exceeded = False
        started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    exceeded = True
                    raise _BodyTooLarge()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal started
            # whatever the app answers after the limit trips is replaced by the 413
            if exceeded and not started:
                return
            if message["type"] == "http.response.start":
                started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except _BodyTooLarge:
            if started:
                raise

        if exceeded and not started:
            self._log_rejection(scope, received)
            await _too_large_response()(scope, receive, send)
