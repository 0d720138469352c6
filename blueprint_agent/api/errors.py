"""Exception handlers mapping errors to JSON responses."""

from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from blueprint_agent.core.errors import BlueprintError
from blueprint_agent.core.logging import get_logger

logger = get_logger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register service-wide exception handlers on a FastAPI app.

    Every error body carries ``error`` (human readable) and ``code`` (stable).
    """

    @app.exception_handler(BlueprintError)
    async def _blueprint_error_handler(request: Request, exc: BlueprintError) -> Response:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_public_dict())

    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 404:
            payload: dict[str, Any] = {"error": "Not found", "code": "http.404"}
        else:
            payload = {"error": exc.detail, "code": f"http.{exc.status_code}"}
        headers = dict(exc.headers or {})
        return JSONResponse(status_code=exc.status_code, content=payload, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
        payload = {
            "error": "Invalid request body",
            "code": "request.invalid",
            "detail": jsonable_errors(exc),
        }
        return JSONResponse(status_code=400, content=payload)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "code": "internal.unhandled"},
        )


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Trim pydantic error entries to JSON-safe fields."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
