import asyncio

import structlog

from cosmic_match.domain.calendar_signs import moon_sign, shio, sun_sign
from cosmic_match.domain.entities import (
    BirthData,
    CompatibilityAnalysis,
    CosmicProfile,
    FullAnalysisResponse,
)
from cosmic_match.domain.human_design import classify
from cosmic_match.domain.narrative import (
    DEFAULT_LANGUAGE,
    communication_style,
    narrate,
    resolve_language,
    score_band,
)
from cosmic_match.domain.scoring import ScoringRules, score_pair

log = structlog.get_logger(__name__)


class CompatibilityService:
    """Service métier du rapport de compatibilité.

    Responsabilités:
    - Construire le profil cosmique de chaque personne (Human Design, zodiaque, Shio).
    - Calculer le score de la paire via `score_pair`.
    - Sélectionner le résumé narratif dans la langue demandée.

    Le calcul est pur: aucune entrée/sortie, aucun état partagé entre deux appels.
    """

    def __init__(
        self,
        rules: ScoringRules | None = None,
        default_lang: str = DEFAULT_LANGUAGE,
        delay_ms: int = 0,
    ):
        """Initialise le service.

        Paramètres:
        - rules: constantes de score (`ScoringRules()` par défaut).
        - default_lang: langue utilisée quand la requête n'en précise pas.
        - delay_ms: latence simulée par `analyze_async`, sans effet sur le résultat.
        """
        self.rules = rules or ScoringRules()
        self.default_lang = resolve_language(default_lang)
        self.delay_ms = max(0, delay_ms)

    def build_profile(self, birth: BirthData, lang: str | None = None) -> CosmicProfile:
        """Calcule le profil cosmique d'une personne.

        Lève `InvalidChartError` si une carte manuelle complète est incohérente.
        """
        language = resolve_language(lang, self.default_lang)
        chart = classify(birth)
        chinese = shio(birth.date)
        return CosmicProfile(
            name=birth.name,
            hd_type=chart.hd_type.value,
            hd_authority=chart.authority.value,
            hd_profile=chart.profile,
            hd_strategy=chart.strategy,
            hd_not_self_theme=chart.not_self_theme,
            hd_definition=chart.definition,
            hd_incarnation_cross=chart.incarnation_cross,
            sun_sign=sun_sign(birth.date),
            moon_sign=moon_sign(birth.date),
            shio=chinese.animal,
            element=chinese.element,
            communication_style=communication_style(chart.hd_type.value, language),
            chart_source=chart.source,
        )

    def analyze(
        self, a: BirthData, b: BirthData, lang: str | None = None
    ) -> FullAnalysisResponse:
        """Produit le rapport complet pour deux personnes.

        Retour: `FullAnalysisResponse` avec les deux profils et l'analyse de compatibilité.
        """
        language = resolve_language(lang, self.default_lang)
        person_a = self.build_profile(a, language)
        person_b = self.build_profile(b, language)
        pair = score_pair(person_a, person_b, language, self.rules)
        compatibility = CompatibilityAnalysis(
            score=pair.score,
            headline=pair.headline,
            archetype=pair.archetype,
            summary=narrate(pair.score, person_a, person_b, language),
            strengths=pair.strengths,
            challenges=pair.challenges,
            communication_advice=pair.communication_advice,
            advice=pair.advice,
        )
        log.info(
            "compatibility_analyzed",
            score=pair.score,
            band=score_band(pair.score),
            lang=language,
            sources=[person_a.chart_source, person_b.chart_source],
        )
        return FullAnalysisResponse(
            person_a=person_a,
            person_b=person_b,
            compatibility=compatibility,
            lang=language,
        )

    async def analyze_async(
        self, a: BirthData, b: BirthData, lang: str | None = None
    ) -> FullAnalysisResponse:
        """Variante asynchrone avec latence simulée (`delay_ms`) avant le calcul."""
        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)
        return self.analyze(a, b, lang)
