"""
Error rendering for the HTTP layer.

All failures leave the API as {"error": <message>} with the status of the
failure. Route handlers wrap their body in internal_error_boundary so that
anything other than an ApiError becomes a logged 500.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tcgbackend.models.failure import STANDARD_MESSAGES, ApiError, FailureKind, InternalError

logger = logging.getLogger(__name__)


@contextmanager
def internal_error_boundary(action: str) -> Iterator[None]:
    """Convert unexpected exceptions raised while performing `action` to InternalError."""
    try:
        yield
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Unexpected failure while %s", action)
        raise InternalError() from e


async def api_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ApiError)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, StarletteHTTPException)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=exc.headers,
    )


async def request_validation_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Malformed JSON bodies and unparsable path parameters are client errors."""
    assert isinstance(exc, RequestValidationError)
    errors = exc.errors()
    message = STANDARD_MESSAGES[FailureKind.INVALID_INPUT]
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()))
        message = f"{message}: {location} {errors[0].get('msg', '')}".strip()
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=InternalError().to_dict(),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on an application."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
