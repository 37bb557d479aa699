"""Configuration de logging basée sur structlog.

Objectif du module
------------------
- Logs console colorés en développement, une ligne JSON par événement ailleurs.
- Fusionner le contexte lié par requête (`request_id`) dans chaque événement.
"""

import logging
import sys

import structlog


def resolve_level(name: str | int) -> int:
    """Convertit un nom de niveau (`"INFO"`, `"debug"`) ou un entier en niveau logging.

    Un nom inconnu retombe sur `logging.INFO`.
    """
    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str | int = logging.DEBUG, json_logs: bool = False):
    """Configure structlog une fois pour toute l'application.

    Args:
        level: Niveau minimal émis (nom ou entier).
        json_logs: `True` pour un rendu JSON (production), console sinon.
    """
    renderer = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="ISO"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolve_level(level)),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )
