"""
Application principale FastAPI.

Ce module assemble tous les composants de l'application : middlewares, gestionnaires d'erreurs,
routes et métriques.

Responsabilités du module:
- Initialiser le logging structuré
- Construire l'application FastAPI avec son titre/debug
- Ajouter les middlewares (request id, timing, métriques)
- Monter les routers (santé, compatibilité, métriques)
"""

from __future__ import annotations

from fastapi import FastAPI

from cosmic_match.api.routes_analysis import router as analysis_router
from cosmic_match.api.routes_health import router as health_router
from cosmic_match.apigw.errors import register_error_handlers
from cosmic_match.app.metrics import PrometheusMiddleware, metrics_router
from cosmic_match.core.container import container
from cosmic_match.core.logging import setup_logging
from cosmic_match.middlewares.request_id import RequestIDMiddleware
from cosmic_match.middlewares.timing import TimingMiddleware


def create_app() -> FastAPI:
    """
    Construit et retourne l'application FastAPI prête à l'usage.

    Étapes:
    - Configure le logging structuré (structlog)
    - Lit les paramètres d'exécution
    - Ajoute les middlewares utiles au debug/traçabilité
    - Publie les routes de santé, d'analyse et de métriques
    """
    settings = container.settings
    setup_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
    app = FastAPI(title=settings.APP_NAME, debug=settings.APP_DEBUG)
    register_error_handlers(app)
    if settings.METRICS_ENABLED:
        app.add_middleware(PrometheusMiddleware)
        app.include_router(metrics_router)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.include_router(health_router)
    app.include_router(analysis_router)
    return app


app = create_app()


def run() -> None:
    """Lance le serveur uvicorn avec l'hôte et le port configurés."""
    import uvicorn  # noqa: PLC0415

    uvicorn.run(
        "cosmic_match.app.main:app",
        host=container.settings.APP_HOST,
        port=container.settings.APP_PORT,
    )
