"""
Endpoint de santé pour vérifier la disponibilité de l'API et du moteur.

Expose `/health` pour signaler l'état général de l'application et la configuration du score.
"""

from fastapi import APIRouter

from cosmic_match.core.container import container
from cosmic_match.domain.scoring import describe_rules

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
    """Vérifie la disponibilité de l'API et résume la configuration du moteur."""
    return {
        "status": "ok",
        "engine": container.engine_name,
        "default_lang": container.compatibility.default_lang,
        "scoring": describe_rules(container.rules),
    }
