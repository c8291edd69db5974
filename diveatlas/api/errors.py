"""Traduction des erreurs en réponses JSON uniformes.

Toute réponse d'erreur porte un champ `error` (message lisible), un `code` stable et le
`trace_id` de la requête; les erreurs de validation ajoutent `details` (messages par champ).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from diveatlas.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_CONFLICT,
    HTTP_FORBIDDEN,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_NOT_FOUND,
    HTTP_UNAUTHORIZED,
)
from diveatlas.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
    PermissionDenied,
    ValidationFailed,
    field_errors,
)

log = structlog.get_logger(__name__)


class ErrorCodes:
    """Codes stables exposés dans le champ `code` de l'enveloppe."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


_STATUS_CODES = {
    400: ErrorCodes.BAD_REQUEST,
    401: ErrorCodes.UNAUTHORIZED,
    403: ErrorCodes.FORBIDDEN,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
    409: ErrorCodes.CONFLICT,
    422: ErrorCodes.VALIDATION_ERROR,
    500: ErrorCodes.INTERNAL_ERROR,
    503: ErrorCodes.SERVICE_UNAVAILABLE,
}

_DOMAIN_STATUS: list[tuple[type[DomainError], int, str]] = [
    (NotFoundError, HTTP_NOT_FOUND, ErrorCodes.NOT_FOUND),
    (ConflictError, HTTP_CONFLICT, ErrorCodes.CONFLICT),
    (ValidationFailed, HTTP_BAD_REQUEST, ErrorCodes.VALIDATION_ERROR),
    (PermissionDenied, HTTP_FORBIDDEN, ErrorCodes.FORBIDDEN),
]


@dataclass
class ErrorEnvelope:
    """Contenu d'une réponse d'erreur avant sérialisation."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None


class APIError(HTTPException):
    """Erreur HTTP levée par la couche API (authentification, identité)."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code = code
        self.message = message
        self.details = details


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Réponse JSON `{error, code, trace_id, details?}`."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(
        status_code=status_code,
        content={
            "error": envelope.message,
            "code": envelope.code,
            "trace_id": envelope.trace_id,
            **({"details": envelope.details} if envelope.details else {}),
        },
        headers=headers,
    )


def extract_trace_id(request: Request) -> str | None:
    """Identifiant de corrélation: en-tête X-Trace-ID, sinon l'id posé par RequestIDMiddleware."""
    trace_id = request.headers.get("X-Trace-ID")
    if trace_id:
        return trace_id
    return getattr(request.state, "request_id", None)


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    log.info("api_error", code=exc.code, status_code=exc.status_code, path=request.url.path)
    return create_error_response(
        status_code=exc.status_code,
        code=exc.code,
        message=exc.message,
        trace_id=extract_trace_id(request),
        details=exc.details,
        headers=exc.headers,
    )


def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Traduit une exception métier en réponse HTTP."""
    for exc_type, status_code, code in _DOMAIN_STATUS:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, code = HTTP_BAD_REQUEST, ErrorCodes.BAD_REQUEST
    log.info("domain_error", code=code, status_code=status_code, path=request.url.path)
    return create_error_response(
        status_code=status_code,
        code=code,
        message=exc.message,
        trace_id=extract_trace_id(request),
        details=exc.details,
    )


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Erreurs HTTP du routage (404, 405) et de Starlette."""
    code = _STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return create_error_response(
        status_code=exc.status_code,
        code=code,
        message=str(exc.detail),
        trace_id=extract_trace_id(request),
        headers=getattr(exc, "headers", None),
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Requête mal formée (corps, paramètres) -> 400 avec messages par champ."""
    return create_error_response(
        status_code=HTTP_BAD_REQUEST,
        code=ErrorCodes.VALIDATION_ERROR,
        message="Invalid request data",
        trace_id=extract_trace_id(request),
        details=field_errors(list(exc.errors())),
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    """Erreur inattendue (stockage compris): journalisée, réponse générique sans détail interne."""
    trace_id = extract_trace_id(request)
    log.error(
        "unhandled_error",
        path=request.url.path,
        trace_id=trace_id,
        exception_type=type(exc).__name__,
        exc_info=exc,
    )
    return create_error_response(
        status_code=HTTP_INTERNAL_SERVER_ERROR,
        code=ErrorCodes.INTERNAL_ERROR,
        message="Internal server error",
        trace_id=trace_id,
    )


def install_error_handlers(app: FastAPI) -> None:
    """Enregistre les handlers d'erreurs sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(SQLAlchemyError, handle_generic_exception)


def unauthorized(message: str) -> APIError:
    """401 avec l'en-tête `WWW-Authenticate: Bearer`."""
    return APIError(
        HTTP_UNAUTHORIZED,
        ErrorCodes.UNAUTHORIZED,
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def conflict(message: str, details: dict[str, Any] | None = None) -> APIError:
    return APIError(HTTP_CONFLICT, ErrorCodes.CONFLICT, message, details)
