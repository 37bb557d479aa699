"""
Routes du moteur de compatibilité.

Ce module regroupe `POST /analyze` (rapport complet pour deux personnes) et `POST /profile`
(profil cosmique d'une seule personne).
"""

from fastapi import APIRouter

from cosmic_match.api.schemas import AnalyzeRequest, ProfileRequest
from cosmic_match.apigw.errors import bad_request
from cosmic_match.app.metrics import ANALYSES_TOTAL
from cosmic_match.core.container import container
from cosmic_match.domain.entities import CosmicProfile, FullAnalysisResponse
from cosmic_match.domain.narrative import SUPPORTED_LANGUAGES, score_band

router = APIRouter(tags=["compatibility"])


def _checked_language(lang: str | None) -> str | None:
    """Refuse une langue explicitement demandée mais non prise en charge."""
    if lang is None or not lang.strip():
        return None
    if lang.strip().lower() not in SUPPORTED_LANGUAGES:
        raise bad_request(
            f"Unsupported language: {lang}",
            details={"supported": list(SUPPORTED_LANGUAGES)},
        )
    return lang


@router.post("/analyze", response_model=FullAnalysisResponse, response_model_by_alias=True)
async def analyze(payload: AnalyzeRequest):
    """
    Calcule le rapport de compatibilité de deux personnes.

    Paramètres:
    - payload: `AnalyzeRequest` avec les deux jeux de données de naissance.

    Retour:
    - `FullAnalysisResponse` (deux profils et analyse de compatibilité).
    """
    lang = _checked_language(payload.lang)
    result = await container.compatibility.analyze_async(
        payload.person_a.to_birth_data(), payload.person_b.to_birth_data(), lang
    )
    ANALYSES_TOTAL.labels(score_band(result.compatibility.score), result.lang).inc()
    return result


@router.post("/profile", response_model=CosmicProfile, response_model_by_alias=True)
def profile(payload: ProfileRequest):
    """Calcule le profil cosmique (Human Design, zodiaque, Shio) d'une personne."""
    lang = _checked_language(payload.lang)
    return container.compatibility.build_profile(payload.person.to_birth_data(), lang)
