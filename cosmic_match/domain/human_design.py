"""
Classification Human Design simulée.

Objectif du module
------------------
- Attribuer type, autorité, profil, définition et croix d'incarnation à partir du hash de
  naissance (voir `hashing.derive`), sans aucun calcul astronomique.
- Appliquer d'abord les cartes saisies manuellement, puis les cartes de référence (golden
  fixtures), avant le tirage générique.

Stratégie et thème du non-soi ne sont jamais tirés au hasard: ils découlent du type.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from cosmic_match.domain.entities import BirthData, ChartSource
from cosmic_match.domain.hashing import birth_hash, derive, normalize_time


class HDType(str, Enum):
    """Les cinq types Human Design."""

    GENERATOR = "Generator"
    MANIFESTING_GENERATOR = "Manifesting Generator"
    MANIFESTOR = "Manifestor"
    PROJECTOR = "Projector"
    REFLECTOR = "Reflector"


class HDAuthority(str, Enum):
    """Autorités de décision."""

    EMOTIONAL = "Emotional"
    SACRAL = "Sacral"
    SPLENIC = "Splenic"
    EGO = "Ego"
    SELF_PROJECTED = "Self-Projected"
    ENVIRONMENTAL = "Environmental"
    LUNAR = "Lunar"


PROFILES = (
    "1/3",
    "1/4",
    "2/4",
    "2/5",
    "3/5",
    "3/6",
    "4/6",
    "4/1",
    "5/1",
    "5/2",
    "6/2",
    "6/3",
)

VALID_AUTHORITIES: MappingProxyType[HDType, tuple[HDAuthority, ...]] = MappingProxyType(
    {
        HDType.GENERATOR: (HDAuthority.EMOTIONAL, HDAuthority.SACRAL),
        HDType.MANIFESTING_GENERATOR: (HDAuthority.EMOTIONAL, HDAuthority.SACRAL),
        HDType.MANIFESTOR: (HDAuthority.EMOTIONAL, HDAuthority.SPLENIC, HDAuthority.EGO),
        HDType.PROJECTOR: (
            HDAuthority.EMOTIONAL,
            HDAuthority.SPLENIC,
            HDAuthority.EGO,
            HDAuthority.SELF_PROJECTED,
            HDAuthority.ENVIRONMENTAL,
        ),
        HDType.REFLECTOR: (HDAuthority.LUNAR,),
    }
)

# Seuils cumulés sur un tirage 0..99, proches de la répartition observée dans la population
TYPE_THRESHOLDS: tuple[tuple[int, HDType], ...] = (
    (35, HDType.GENERATOR),
    (70, HDType.MANIFESTING_GENERATOR),
    (85, HDType.PROJECTOR),
    (98, HDType.MANIFESTOR),
    (100, HDType.REFLECTOR),
)

STRATEGIES: MappingProxyType[HDType, str] = MappingProxyType(
    {
        HDType.GENERATOR: "Wait to Respond",
        HDType.MANIFESTING_GENERATOR: "Wait to Respond, then Inform",
        HDType.MANIFESTOR: "Inform before Acting",
        HDType.PROJECTOR: "Wait for the Invitation",
        HDType.REFLECTOR: "Wait a Lunar Cycle",
    }
)

NOT_SELF_THEMES: MappingProxyType[HDType, str] = MappingProxyType(
    {
        HDType.GENERATOR: "Frustration",
        HDType.MANIFESTING_GENERATOR: "Frustration and Anger",
        HDType.MANIFESTOR: "Anger",
        HDType.PROJECTOR: "Bitterness",
        HDType.REFLECTOR: "Disappointment",
    }
)

NO_DEFINITION = "No Definition"
DEFINITIONS = (
    "Single Definition",
    "Split Definition",
    "Triple Split Definition",
    "Quadruple Split Definition",
)

CROSS_THEMES = (
    "the Sphinx",
    "the Vessel of Love",
    "Eden",
    "the Four Ways",
    "Explanation",
    "Contagion",
    "Planning",
    "Consciousness",
    "Tension",
    "Service",
    "the Sleeping Phoenix",
    "Penetration",
)


class InvalidChartError(ValueError):
    """Carte saisie manuellement incohérente (autorité ou profil invalide)."""


@dataclass(frozen=True)
class HumanDesignChart:
    """Tuple Human Design complet d'une personne."""

    hd_type: HDType
    authority: HDAuthority
    profile: str
    strategy: str
    not_self_theme: str
    definition: str
    incarnation_cross: str
    source: ChartSource = "hash"


@dataclass(frozen=True)
class GoldenFixture:
    """Carte de référence validée, prioritaire sur le tirage par hash."""

    date: str
    times: tuple[str, ...]
    hd_type: HDType
    authority: HDAuthority
    profile: str
    definition: str
    incarnation_cross: str

    def matches(self, date: str, time: str | None) -> bool:
        return date.strip() == self.date and normalize_time(time) in self.times


GOLDEN_FIXTURES: tuple[GoldenFixture, ...] = (
    GoldenFixture(
        date="1995-05-23",
        times=("04:30", "04:32"),
        hd_type=HDType.MANIFESTING_GENERATOR,
        authority=HDAuthority.SACRAL,
        profile="2/4",
        definition="Single Definition",
        incarnation_cross="Right Angle Cross of the Sphinx",
    ),
    GoldenFixture(
        date="1997-09-11",
        times=("09:50", "09:51"),
        hd_type=HDType.MANIFESTING_GENERATOR,
        authority=HDAuthority.EMOTIONAL,
        profile="2/4",
        definition="Split Definition",
        incarnation_cross="Right Angle Cross of Eden",
    ),
)


def type_from_roll(roll: int) -> HDType:
    """Associe un tirage 0..99 à un type selon `TYPE_THRESHOLDS`."""
    for threshold, hd_type in TYPE_THRESHOLDS:
        if roll < threshold:
            return hd_type
    return HDType.REFLECTOR


def cross_angle(profile: str) -> str:
    """Angle de la croix d'incarnation imposé par le profil."""
    if profile == "4/1":
        return "Juxtaposition"
    if profile[:1] in ("5", "6"):
        return "Left Angle"
    return "Right Angle"


def definition_for(hd_type: HDType, seed: int) -> str:
    if hd_type is HDType.REFLECTOR:
        return NO_DEFINITION
    return DEFINITIONS[derive(seed, "definition") % len(DEFINITIONS)]


def incarnation_cross_for(profile: str, seed: int) -> str:
    theme = CROSS_THEMES[derive(seed, "cross") % len(CROSS_THEMES)]
    return f"{cross_angle(profile)} Cross of {theme}"


def _chart(
    hd_type: HDType,
    authority: HDAuthority,
    profile: str,
    definition: str,
    cross: str,
    source: ChartSource,
) -> HumanDesignChart:
    return HumanDesignChart(
        hd_type=hd_type,
        authority=authority,
        profile=profile,
        strategy=STRATEGIES[hd_type],
        not_self_theme=NOT_SELF_THEMES[hd_type],
        definition=definition,
        incarnation_cross=cross,
        source=source,
    )


def _label_key(label: str) -> str:
    # "Self Projected", "self-projected" et "SELF_PROJECTED" désignent la même autorité
    return " ".join(label.replace("-", " ").replace("_", " ").split()).casefold()


def _lookup(enum_cls, label: str):
    key = _label_key(label)
    for member in enum_cls:
        if _label_key(member.value) == key:
            return member
    raise InvalidChartError(f"{label.strip()!r} is not a valid {enum_cls.__name__}")


def parse_manual_chart(
    hd_type: str, authority: str, profile: str
) -> tuple[HDType, HDAuthority, str]:
    """Valide une carte saisie manuellement.

    Type et autorité sont comparés sans tenir compte de la casse, les tirets valant des espaces.

    Raises:
        InvalidChartError: type, autorité ou profil inconnu, ou autorité incompatible avec le type.
    """
    parsed_type = _lookup(HDType, hd_type)
    parsed_authority = _lookup(HDAuthority, authority)
    if parsed_authority not in VALID_AUTHORITIES[parsed_type]:
        raise InvalidChartError(
            f"authority {parsed_authority.value!r} is not valid for type {parsed_type.value!r}"
        )
    cleaned_profile = profile.strip()
    if cleaned_profile not in PROFILES:
        raise InvalidChartError(f"unknown profile {cleaned_profile!r}")
    return parsed_type, parsed_authority, cleaned_profile


def find_fixture(date: str, time: str | None) -> GoldenFixture | None:
    """Retourne la première carte de référence correspondant à (date, heure)."""
    for fixture in GOLDEN_FIXTURES:
        if fixture.matches(date, time):
            return fixture
    return None


def classify(birth: BirthData) -> HumanDesignChart:
    """Calcule le tuple Human Design d'une personne.

    Ordre de priorité:
    - carte manuelle complète (validée);
    - carte de référence correspondant exactement à la date et à l'heure normalisée;
    - tirage déterministe à partir du hash de naissance.

    Raises:
        InvalidChartError: si une carte manuelle complète est incohérente.
    """
    seed = birth_hash(birth.date, birth.time, birth.name, birth.location)

    if birth.has_manual_chart():
        hd_type, authority, profile = parse_manual_chart(
            birth.hd_type or "", birth.hd_authority or "", birth.hd_profile or ""
        )
        return _chart(
            hd_type,
            authority,
            profile,
            definition_for(hd_type, seed),
            incarnation_cross_for(profile, seed),
            "manual",
        )

    fixture = find_fixture(birth.date, birth.time)
    if fixture is not None:
        return _chart(
            fixture.hd_type,
            fixture.authority,
            fixture.profile,
            fixture.definition,
            fixture.incarnation_cross,
            "fixture",
        )

    hd_type = type_from_roll(derive(seed, "type") % 100)
    candidates = VALID_AUTHORITIES[hd_type]
    authority = candidates[derive(seed, "authority") % len(candidates)]
    profile = PROFILES[derive(seed, "profile") % len(PROFILES)]
    return _chart(
        hd_type,
        authority,
        profile,
        definition_for(hd_type, seed),
        incarnation_cross_for(profile, seed),
        "hash",
    )
