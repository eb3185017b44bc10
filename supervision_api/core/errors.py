from __future__ import annotations

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from supervision_api.schemas.error import ErrorObject, ErrorResponse
from supervision_api.schemas.validation import ROOT_FIELD, Violation

logger = logging.getLogger(__name__)


class ValidationFailure(ValueError):
    """
    Client-caused: one or more declared constraints were not met.
    Rendered as 400 Bad Request with the ordered violation list.
    """

    def __init__(self, message: str = "Validation failed", violations: list[Violation] | None = None):
        super().__init__(message)
        self.message = message
        self.violations: list[Violation] = list(violations or [])

    def __repr__(self) -> str:
        return f"ValidationFailure({self.message!r}, violations={len(self.violations)})"


class ShapeConfigurationError(TypeError):
    """
    Developer-caused: the shape handed to the validator is not a shape.
    Never reported to the client as a validation failure.
    """


def _status_code_name(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return "INTERNAL_SERVER_ERROR"


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list | dict | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorObject(code=code, message=message, details=details),
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def validation_failure_handler(request: Request, exc: ValidationFailure) -> JSONResponse:
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "BAD_REQUEST",
        exc.message,
        details=[v.model_dump() for v in exc.violations],
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Path, query and body errors raised by FastAPI itself, in the same 400 envelope."""
    violations = [
        Violation(
            field=".".join(str(p) for p in err["loc"][1:]) or ROOT_FIELD,
            code="json" if err["type"] == "json_invalid" else err["type"],
            message=err["msg"],
        )
        for err in exc.errors()
    ]
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "BAD_REQUEST",
        "Validation failed",
        details=[v.model_dump() for v in violations],
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail = exc.detail
    details = None
    if isinstance(detail, dict):
        message = str(detail.get("message") or _status_code_name(exc.status_code))
        details = detail.get("errors") or detail.get("details")
    else:
        message = str(detail)
    response = error_response(request, exc.status_code, _status_code_name(exc.status_code), message, details)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def configuration_error_handler(request: Request, exc: ShapeConfigurationError) -> JSONResponse:
    logger.error("Shape configuration error on %s: %s", request.url.path, exc, exc_info=exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "Internal server error",
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationFailure, validation_failure_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ShapeConfigurationError, configuration_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
