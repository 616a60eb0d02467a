# filmoteka/middleware/request_id.py
from __future__ import annotations

"""
# Filmoteka: Request ID + access log middleware (ASGI)

- Reuses a client-supplied `X-Request-ID` when it is a valid UUIDv4.
- Generates UUIDv4 when absent/invalid.
- Injects into `request.state.request_id` and the response header.
- Binds `request_id` into the **loguru** context for the whole request.
- Logs one line when the request starts and one when it finishes
  (status + latency in ms).
- Pure ASGI middleware (no BaseHTTPMiddleware pitfalls).

## Env / Config
- `REQUEST_ID_HEADER_NAME` (default: `X-Request-ID`)
- `REQUEST_ID_TRUST_CLIENT_IDS` ("true"/"false"; default: "true")

## Usage
    from filmoteka.middleware.request_id import RequestIDMiddleware, get_request_id
    app.add_middleware(RequestIDMiddleware)
"""

import os
import re
import time
import uuid

from loguru import logger
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

HEADER_NAME = os.getenv("REQUEST_ID_HEADER_NAME", "X-Request-ID")
TRUST_CLIENT_IDS = os.getenv("REQUEST_ID_TRUST_CLIENT_IDS", "true").lower() == "true"

_UUID_V4_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$")


class RequestIDMiddleware:
    """Per-request correlation ID plus start/finish access logging."""

    def __init__(self, app: ASGIApp, header_name: str = HEADER_NAME) -> None:
        self.app = app
        self.header_name = header_name

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            return await self.app(scope, receive, send)

        req_id = self._choose_request_id(Headers(scope=scope))
        scope.setdefault("state", {})["request_id"] = req_id

        method = scope.get("method", "-")
        path = scope.get("path", "-")
        status_code = 500
        started = time.perf_counter()

        async def _send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                name_bytes = self.header_name.encode("latin-1")
                headers = [(k, v) for (k, v) in message.get("headers", []) if k.lower() != name_bytes.lower()]
                headers.append((name_bytes, req_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        with logger.contextualize(request_id=req_id):
            logger.info("Start {} {}", method, path)
            try:
                await self.app(scope, receive, _send_wrapper)
            finally:
                elapsed_ms = (time.perf_counter() - started) * 1000
                logger.info("End {} {} -> {} in {:.1f} ms", method, path, status_code, elapsed_ms)

    def _choose_request_id(self, headers: Headers) -> str:
        """Return a safe request id from headers or generate a UUIDv4."""
        if TRUST_CLIENT_IDS:
            incoming = (headers.get(self.header_name) or "").strip()
            if incoming and _UUID_V4_RE.fullmatch(incoming):
                return incoming.lower()
        return str(uuid.uuid4())


def get_request_id(request) -> str:
    """Current request id from `request.state` ("" when absent)."""
    return getattr(getattr(request, "state", object()), "request_id", "") or ""


__all__ = ["RequestIDMiddleware", "get_request_id"]
