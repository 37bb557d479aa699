"""Enveloppe d'erreur standard de l'API de compatibilité.

Toute erreur sort au format `{code, message, trace_id, details?}`:
- données de naissance manquantes ou vides -> 400 `VALIDATION_ERROR` (champs fautifs en détail);
- carte Human Design manuelle incohérente -> 400 `INVALID_CHART`;
- langue non prise en charge -> 400 `BAD_REQUEST`;
- route inconnue / méthode refusée -> 404 / 405;
- toute autre exception -> 500 `INTERNAL_ERROR`.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cosmic_match.core.http_constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_METHOD_NOT_ALLOWED,
    HTTP_NOT_FOUND,
)
from cosmic_match.domain.human_design import InvalidChartError

log = logging.getLogger(__name__)


class ErrorCodes:
    """Codes d'erreur exposés par l'API."""

    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CHART = "INVALID_CHART"
    INTERNAL_ERROR = "INTERNAL_ERROR"


STATUS_CODES: dict[int, str] = {
    HTTP_BAD_REQUEST: ErrorCodes.BAD_REQUEST,
    HTTP_NOT_FOUND: ErrorCodes.NOT_FOUND,
    HTTP_METHOD_NOT_ALLOWED: ErrorCodes.METHOD_NOT_ALLOWED,
    HTTP_INTERNAL_SERVER_ERROR: ErrorCodes.INTERNAL_ERROR,
}


@dataclass
class ErrorEnvelope:
    """Corps JSON d'une réponse d'erreur."""

    code: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] | None = None

    def to_content(self) -> dict[str, Any]:
        content = asdict(self)
        if not self.details:
            content.pop("details")
        return content


class APIError(HTTPException):
    """Erreur métier levée depuis une route, rendue avec l'enveloppe standard."""

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=message)
        self.code = code
        self.message = message
        self.trace_id = trace_id
        self.details = details


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    trace_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Construit la `JSONResponse` d'erreur standardisée."""
    envelope = ErrorEnvelope(code=code, message=message, trace_id=trace_id, details=details)
    return JSONResponse(status_code=status_code, content=envelope.to_content())


def extract_trace_id(request: Request) -> str | None:
    """Identifiant de corrélation: X-Trace-ID, puis X-Request-ID, puis l'état de la requête."""
    for header in ("X-Trace-ID", "X-Request-ID"):
        value = request.headers.get(header)
        if value:
            return value
    return getattr(request.state, "request_id", None)


def field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Liste `{field, message}` des champs refusés, chemin pointé sans le préfixe `body`.

    Exemple: `person_a.name` pour un nom manquant chez la première personne.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]


def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    trace_id = extract_trace_id(request) or exc.trace_id
    log.warning(
        "api_error",
        extra={"code": exc.code, "status_code": exc.status_code, "trace_id": trace_id},
    )
    return create_error_response(exc.status_code, exc.code, exc.message, trace_id, exc.details)


def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Erreurs de routage (404, 405...) levées par Starlette."""
    code = STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return create_error_response(
        exc.status_code, code, str(exc.detail), extract_trace_id(request)
    )


def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Données de naissance invalides: 400 plutôt que le 422 par défaut de FastAPI."""
    trace_id = extract_trace_id(request)
    fields = field_errors(exc)
    log.info("birth_data_rejected", extra={"trace_id": trace_id, "fields": fields})
    return create_error_response(
        HTTP_BAD_REQUEST,
        ErrorCodes.VALIDATION_ERROR,
        "Invalid birth data",
        trace_id,
        {"fields": fields},
    )


def handle_invalid_chart(request: Request, exc: InvalidChartError) -> JSONResponse:
    return create_error_response(
        HTTP_BAD_REQUEST, ErrorCodes.INVALID_CHART, str(exc), extract_trace_id(request)
    )


def handle_generic_exception(request: Request, exc: Exception) -> JSONResponse:
    trace_id = extract_trace_id(request)
    log.error(
        "unexpected_error",
        extra={"trace_id": trace_id, "exception_type": type(exc).__name__},
        exc_info=True,
    )
    return create_error_response(
        HTTP_INTERNAL_SERVER_ERROR,
        ErrorCodes.INTERNAL_ERROR,
        "An unexpected error occurred",
        trace_id,
    )


def bad_request(
    message: str, trace_id: str | None = None, details: dict[str, Any] | None = None
) -> APIError:
    """Erreur 400 `BAD_REQUEST` prête à être levée."""
    return APIError(HTTP_BAD_REQUEST, ErrorCodes.BAD_REQUEST, message, trace_id, details)


def register_error_handlers(app: FastAPI) -> None:
    """Branche les gestionnaires d'erreurs standardisés sur l'application."""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(InvalidChartError, handle_invalid_chart)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_generic_exception)
