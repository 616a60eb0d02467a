from __future__ import annotations

"""
Problem+JSON exception handlers (RFC 7807).

`filmoteka.main.create_app` installs these. Every error body carries
`type/title/detail/status/instance` and, when `RequestIDMiddleware` ran,
`request_id`. Anything unhandled becomes a 500 and is logged with its
traceback.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from filmoteka.core.exceptions import AppException
from filmoteka.middleware.request_id import get_request_id

PROBLEM_JSON = "application/problem+json"


def _problem_response(
    request: Request,
    status_code: int,
    title: str,
    detail: str,
    *,
    extra: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "detail": detail,
        "status": status_code,
        "instance": str(request.url),
    }
    if extra:
        body.update(extra)
    request_id = get_request_id(request)
    if request_id:
        body["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=body, headers=headers, media_type=PROBLEM_JSON)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:  # type: ignore
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_problem(instance=str(request.url), request_id=get_request_id(request)),
        headers=exc.headers,
        media_type=PROBLEM_JSON,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # type: ignore
    # routing misses (404/405) land here
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return _problem_response(
        request,
        exc.status_code,
        "HTTPError",
        detail,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # type: ignore
    errors = jsonable_encoder(exc.errors())
    logger.info("Rejected request {} {}: {}", request.method, request.url.path, errors)
    return _problem_response(
        request,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Validation error",
        "Validation error",
        extra={"errors": errors},
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # type: ignore
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal Server Error",
        "An unexpected error occurred.",
    )


__all__ = [
    "app_exception_handler",
    "http_exception_handler",
    "validation_exception_handler",
    "global_exception_handler",
]
