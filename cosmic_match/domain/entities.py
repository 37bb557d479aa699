"""
Entités du domaine métier.

Ce module définit les modèles de données échangés avec le moteur de compatibilité: données de
naissance en entrée, profils cosmiques dérivés et rapport de compatibilité.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Language = Literal["id", "en"]
ChartSource = Literal["manual", "fixture", "hash"]

# Sortie JSON en camelCase (`hdType`, `personA`); les noms Python restent en snake_case
WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BirthData(BaseModel):
    """Données de naissance d'une personne.

    Les champs `hd_*` permettent de fournir une carte Human Design déjà connue; ils ne sont pris
    en compte que lorsque les trois sont renseignés.
    """

    name: str
    date: str  # YYYY-MM-DD
    time: str | None = ""  # HH:MM, "4:30" toléré
    location: str | None = ""
    hd_type: str | None = None
    hd_authority: str | None = None
    hd_profile: str | None = None

    def has_manual_chart(self) -> bool:
        """Indique si une carte complète a été saisie manuellement."""
        return bool(self.hd_type and self.hd_authority and self.hd_profile)


class CosmicProfile(BaseModel):
    """Profil dérivé d'une personne, immuable une fois construit."""

    model_config = ConfigDict(frozen=True, **WIRE_CONFIG)

    name: str
    hd_type: str
    hd_authority: str
    hd_profile: str
    hd_strategy: str
    hd_not_self_theme: str
    hd_definition: str
    hd_incarnation_cross: str
    sun_sign: str
    moon_sign: str
    shio: str
    element: str
    communication_style: str
    chart_source: ChartSource = "hash"


class CompatibilityAnalysis(BaseModel):
    """Rapport de compatibilité entre deux profils."""

    model_config = WIRE_CONFIG

    score: int = Field(ge=0, le=100)
    headline: str
    archetype: str
    summary: str
    strengths: list[str] = Field(default_factory=list)
    challenges: list[str] = Field(default_factory=list)
    communication_advice: str
    advice: str = ""


class FullAnalysisResponse(BaseModel):
    """Réponse complète: les deux profils et leur compatibilité."""

    model_config = WIRE_CONFIG

    person_a: CosmicProfile
    person_b: CosmicProfile
    compatibility: CompatibilityAnalysis
    lang: Language = "id"
