"""
Signes calendaires: zodiaque tropical, signe lunaire simplifié et Shio chinois.

Calculs purement calendaires, sans éphémérides. Une date absente ou mal formée produit la
sentinelle `UNKNOWN` plutôt qu'une exception.
"""

import datetime as dt
from dataclasses import dataclass

UNKNOWN = "Unknown"

ZODIAC_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

# (mois, jour) de début de chaque signe, dans l'ordre de l'année civile
SUN_SIGN_STARTS: tuple[tuple[int, int, str], ...] = (
    (1, 20, "Aquarius"),
    (2, 19, "Pisces"),
    (3, 21, "Aries"),
    (4, 20, "Taurus"),
    (5, 21, "Gemini"),
    (6, 21, "Cancer"),
    (7, 23, "Leo"),
    (8, 23, "Virgo"),
    (9, 23, "Libra"),
    (10, 23, "Scorpio"),
    (11, 22, "Sagittarius"),
    (12, 22, "Capricorn"),
)

SHIO_ANIMALS = (
    "Rat",
    "Ox",
    "Tiger",
    "Rabbit",
    "Dragon",
    "Snake",
    "Horse",
    "Goat",
    "Monkey",
    "Rooster",
    "Dog",
    "Pig",
)
# Ordre aligné sur (année - 4) % 10 // 2: 1984 -> Wood
SHIO_ELEMENTS = ("Wood", "Fire", "Earth", "Metal", "Water")


@dataclass(frozen=True)
class ShioSign:
    """Animal et élément du zodiaque chinois."""

    animal: str
    element: str


def parse_birth_date(date: str | None) -> dt.date | None:
    """Lit une date ISO `YYYY-MM-DD`; retourne None si vide ou invalide."""
    if not date or not date.strip():
        return None
    try:
        return dt.date.fromisoformat(date.strip())
    except ValueError:
        return None


def sun_sign(date: str | None) -> str:
    """Signe solaire tropical déterminé par (mois, jour)."""
    parsed = parse_birth_date(date)
    if parsed is None:
        return UNKNOWN
    current = "Capricorn"  # 1er janvier -> 19 janvier
    for month, day, sign in SUN_SIGN_STARTS:
        if (parsed.month, parsed.day) >= (month, day):
            current = sign
    return current


def moon_sign(date: str | None) -> str:
    """Approximation du signe lunaire: (jour + index du mois) modulo 12.

    Le vrai signe lunaire exige des éphémérides; cette valeur est un simple repère stable.
    """
    parsed = parse_birth_date(date)
    if parsed is None:
        return UNKNOWN
    return ZODIAC_SIGNS[(parsed.day + parsed.month - 1) % len(ZODIAC_SIGNS)]


def shio(date: str | None) -> ShioSign:
    """Animal et élément chinois calculés depuis l'année de naissance."""
    parsed = parse_birth_date(date)
    if parsed is None:
        return ShioSign(animal=UNKNOWN, element=UNKNOWN)
    offset = parsed.year - 4
    # le modulo Python est déjà positif pour les années antérieures à l'an 4
    animal = SHIO_ANIMALS[offset % 12]
    element = SHIO_ELEMENTS[(offset % 10) // 2]
    return ShioSign(animal=animal, element=element)
