from collections.abc import Mapping, Sequence
from typing import Any
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from catalog.core.logging import get_logger
from catalog.core.templates import templates


class ErrorBody(BaseModel):
    """Structured error body."""
    type: str
    message: str
    details: dict[str, object] | None = None


class ErrorEnvelope(BaseModel):
    error: ErrorBody
    meta: dict[str, object]


def _build_meta(request: Request) -> dict[str, object]:
    """Collect metadata for error responses."""
    return {
        "request_id": getattr(request.state, "correlation_id", "-"),
        "path": request.url.path,
        "method": request.method,
    }


def _wants_json(request: Request) -> bool:
    accept = request.headers.get("accept", "")
    return "application/json" in accept and "text/html" not in accept


def _serialize_validation_errors(errors: Sequence[Mapping[Any, Any]]) -> list[dict[str, object]]:
    """Keep only the JSON-safe parts of each validation error."""
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": str(error.get("msg", "")),
            "type": str(error.get("type", "")),
        }
        for error in errors
    ]


def render_error(
    request: Request,
    status_code: int,
    body: ErrorBody,
) -> Response:
    """Render the generic error view, or the JSON envelope for JSON clients."""
    envelope = ErrorEnvelope(error=body, meta=_build_meta(request))
    if _wants_json(request):
        return JSONResponse(status_code=status_code, content=envelope.model_dump())
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "title": "Error",
            "status_code": status_code,
            "error": envelope.error,
            "meta": envelope.meta,
        },
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        logger = get_logger(__name__, request)
        logger.warning("HTTP error %s on %s", exc.status_code, request.url.path)
        message = exc.detail if isinstance(exc.detail, str) and exc.detail else "HTTP error"
        error_type = "not_found" if exc.status_code == HTTP_404_NOT_FOUND else "http_error"
        return render_error(
            request, exc.status_code, ErrorBody(type=error_type, message=message)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> Response:
        logger = get_logger(__name__, request)
        errors = exc.errors()
        # A malformed id in the path cannot name any record
        if any((err.get("loc") or ("",))[0] == "path" for err in errors):
            logger.info("Malformed path parameter")
            return render_error(
                request,
                HTTP_404_NOT_FOUND,
                ErrorBody(type="not_found", message="Not found"),
            )
        logger.info("Validation error")
        return render_error(
            request,
            HTTP_422_UNPROCESSABLE_CONTENT,
            ErrorBody(
                type="validation_error",
                message="Invalid request payload",
                details={"errors": _serialize_validation_errors(errors)},
            ),
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> Response:
        logger = get_logger(__name__, request)
        logger.exception("Database error", exc_info=exc)
        return render_error(
            request,
            HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorBody(type="database_error", message="Database error"),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        logger = get_logger(__name__, request)
        logger.exception("Unhandled server error", exc_info=exc)
        return render_error(
            request,
            HTTP_500_INTERNAL_SERVER_ERROR,
            ErrorBody(type="server_error", message="Internal Server Error"),
        )
