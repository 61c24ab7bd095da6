"""Error taxonomy and the FastAPI handlers that render it."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.request_context import REQUEST_ID_HEADER, request_id_scope
from .schemas.system import ErrorDetails, ErrorResponse

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for failures that map onto a client-visible response."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "application_error"
    default_message: str = "Request could not be processed."

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details
        self.headers = dict(headers) if headers else None


class ValidationFailedError(ApplicationError):
    """Payload violated one or more field rules; ``details`` lists them per field."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_failed"
    default_message = "The given data was invalid."

    def __init__(self, errors: Mapping[str, list[str]], message: str | None = None) -> None:
        super().__init__(message, details={"errors": {key: list(value) for key, value in errors.items()}})
        self.errors = dict(errors)


class UnauthenticatedError(ApplicationError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Could not validate credentials."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenError(ApplicationError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "This action is unauthorized."


class NotFoundError(ApplicationError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found."


class ParentNotFoundError(NotFoundError):
    """The project a task would be created under does not exist."""

    code = "parent_not_found"
    default_message = "Parent project not found."


class ConflictError(ApplicationError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    default_message = "The request conflicts with existing data."


_HTTP_STATUS_CODE_MAP: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "bad_request",
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def _error_details(request: Request, details: Any | None) -> ErrorDetails | None:
    request_id = getattr(request.state, "request_id", None)
    if details is None and not request_id:
        return None
    if details is None:
        details = {}
    elif not isinstance(details, Mapping):
        details = {"detail": details}
    return ErrorDetails.model_validate({**details, "request_id": request_id})


def _error_response(
    request: Request,
    *,
    status_code: int,
    code: str,
    message: str,
    details: Any | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    payload = ErrorResponse(
        code=code,
        message=message,
        details=_error_details(request, details),
    )
    response = JSONResponse(status_code=status_code, content=payload.model_dump(mode="json", exclude_none=True))
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def field_errors_from_pydantic(errors: list[Mapping[str, Any]], *, skip: int = 0) -> dict[str, list[str]]:
    """Group pydantic error entries by dotted field location.

    ``skip`` drops leading location parts such as ``"body"`` emitted by FastAPI.
    """

    grouped: dict[str, list[str]] = {}
    for error in errors:
        location = [str(part) for part in error.get("loc", ())][skip:]
        field = ".".join(location) or "body"
        grouped.setdefault(field, []).append(str(error.get("msg", "Invalid value.")))
    return grouped


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(request: Request, exc: ApplicationError) -> JSONResponse:
        with request_id_scope(getattr(request.state, "request_id", None)):
            log = logger.error if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning
            log(
                "Application error encountered",
                extra={"code": exc.code, "status_code": exc.status_code, "path": request.url.path},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                code=exc.code,
                message=exc.message,
                details=exc.details,
                headers=exc.headers,
            )

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        with request_id_scope(getattr(request.state, "request_id", None)):
            errors = field_errors_from_pydantic(list(exc.errors()), skip=1)
            logger.warning("Request validation failed", extra={"fields": sorted(errors)})
            return _error_response(
                request,
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                code=ValidationFailedError.code,
                message=ValidationFailedError.default_message,
                details={"errors": errors},
            )

    @app.exception_handler(IntegrityError)
    async def _handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
        with request_id_scope(getattr(request.state, "request_id", None)):
            logger.error("Database integrity error encountered.", exc_info=exc)
            return _error_response(
                request,
                status_code=status.HTTP_409_CONFLICT,
                code="db_integrity_error",
                message="Database integrity violation.",
            )

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        with request_id_scope(getattr(request.state, "request_id", None)):
            code = _HTTP_STATUS_CODE_MAP.get(exc.status_code, "http_error")
            if isinstance(exc.detail, str):
                message, details = exc.detail, None
            else:
                try:
                    message = HTTPStatus(exc.status_code).phrase
                except ValueError:
                    message = "Error"
                details = exc.detail
            logger.warning(
                "HTTP exception raised",
                extra={"code": code, "status_code": exc.status_code, "path": request.url.path},
            )
            return _error_response(
                request,
                status_code=exc.status_code,
                code=code,
                message=message,
                details=details,
                headers=exc.headers,
            )

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
        with request_id_scope(getattr(request.state, "request_id", None)):
            logger.exception("Unhandled application error.")
            return _error_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                code="server_error",
                message="Internal server error.",
            )


__all__ = [
    "ApplicationError",
    "ConflictError",
    "ForbiddenError",
    "NotFoundError",
    "ParentNotFoundError",
    "UnauthenticatedError",
    "ValidationFailedError",
    "field_errors_from_pydantic",
    "register_exception_handlers",
]
