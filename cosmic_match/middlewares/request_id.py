"""Middleware Starlette de corrélation des requêtes.

Réutilise l'en-tête `X-Request-ID` entrant (ou en génère un), le range dans `request.state` pour
l'enveloppe d'erreur et le lie au contexte structlog: tous les événements d'une même requête
(`compatibility_analyzed`, `request_completed`) portent alors le même `request_id`.
"""

from collections.abc import Callable
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propage un identifiant de requête de l'entrée jusqu'à la réponse."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request, call_next: Callable):
        request_id = request.headers.get(self.header_name) or uuid4().hex
        request.state.request_id = request_id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers[self.header_name] = request_id
        return response
