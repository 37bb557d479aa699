"""
Conteneur d'injection de dépendances et configuration application.

Instancie les composants centraux (settings, règles de score, service de compatibilité)
et expose un singleton `container` utilisé par le reste de l'application.
"""

from cosmic_match.core.settings import Settings, get_settings
from cosmic_match.domain.scoring import ScoringRules
from cosmic_match.domain.services import CompatibilityService


def build_rules(settings: Settings) -> ScoringRules:
    """Construit les règles de score à partir de la configuration.

    Les bornes sont d'abord ramenées dans [0, 100]. Lève `ValueError` si elles restent
    incohérentes ensuite.
    """
    min_score = max(0, settings.SCORE_MIN)
    max_score = min(100, settings.SCORE_MAX)
    if min_score > max_score:
        raise ValueError(
            f"SCORE_MIN ({settings.SCORE_MIN}) and SCORE_MAX ({settings.SCORE_MAX}) "
            "leave no room in [0, 100]"
        )
    return ScoringRules(
        base_score=settings.BASE_SCORE, min_score=min_score, max_score=max_score
    )


class Container:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.rules = build_rules(self.settings)
        self.compatibility = CompatibilityService(
            rules=self.rules,
            default_lang=self.settings.DEFAULT_LANG,
            delay_ms=self.settings.ANALYSIS_DELAY_MS,
        )
        self.engine_name = "deterministic-hash"


container = Container()
