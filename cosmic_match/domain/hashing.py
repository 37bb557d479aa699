"""Hachage déterministe des données de naissance.

Objectif du module
------------------
- Transformer (date, heure, nom, lieu) en un entier 32 bits stable et non négatif.
- Normaliser l'heure et les textes pour que deux saisies équivalentes produisent la même valeur.
- Dériver plusieurs sous-flux décorrélés à partir d'une même graine.

Le hachage reproduit exactement une boucle `hash = hash * 31 + charCode` en arithmétique
entière signée 32 bits, sur les unités UTF-16 de la chaîne combinée.
"""

import re

FIELD_SEPARATOR = "|"
HASH_MULTIPLIER = 31

_INT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000
_NON_DIGITS = re.compile(r"\D")
# au-delà, une composante horaire est illisible
_MAX_COMPONENT_DIGITS = 4

# Sous-flux nommés: (décalage, masque XOR)
DERIVATION_STREAMS: dict[str, tuple[int, int]] = {
    "type": (0, 0x0),
    "authority": (3, 0x5A5A),
    "profile": (5, 0x3C3C),
    "definition": (9, 0x0F0F),
    "cross": (13, 0x7177),
}


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - (1 << 32) if value & _INT32_SIGN else value


def _digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def _component(digits: str) -> int | None:
    significant = digits.lstrip("0")
    if len(significant) > _MAX_COMPONENT_DIGITS:
        return None
    return int(significant or "0")


def normalize_time(time: str | None) -> str:
    """Normalise une heure de naissance au format `HH:MM`.

    Args:
        time: Heure saisie (`"4:30"`, `"04:30:15"`, `"430"`...), éventuellement vide.

    Returns:
        str: Heure sur deux chiffres `HH:MM`, ou chaîne vide si aucune heure exploitable
        (y compris une composante de plus de quatre chiffres significatifs).
    """
    if not time or not time.strip():
        return ""
    raw = time.strip()
    if ":" in raw:
        parts = raw.split(":")
        hour = _component(_digits(parts[0]))
        minute = _component(_digits(parts[1]))
        if hour is None or minute is None:
            return ""
        return f"{hour:02d}:{minute:02d}"

    digits = _digits(raw)
    if len(digits) in (3, 4):
        return f"{int(digits[:-2]):02d}:{int(digits[-2:]):02d}"
    if digits and len(digits) <= 2:
        return f"{int(digits):02d}:00"
    return ""


def normalize_text(value: str | None) -> str:
    """Met un texte libre (nom, lieu) en minuscules sans espaces superflus."""
    return (value or "").strip().lower()


def combine_fields(date: str | None, time: str | None, name: str | None, location: str | None) -> str:
    """Assemble les champs normalisés séparés par un pipe."""
    return FIELD_SEPARATOR.join(
        [
            (date or "").strip(),
            normalize_time(time),
            normalize_text(name),
            normalize_text(location),
        ]
    )


def rolling_hash(text: str) -> int:
    """Hash multiplicatif (x31) sur les unités UTF-16, avec débordement signé 32 bits.

    Returns:
        int: Valeur absolue du hash, dans [0, 2**31].
    """
    encoded = text.encode("utf-16-le")
    value = 0
    for i in range(0, len(encoded), 2):
        code_unit = int.from_bytes(encoded[i : i + 2], "little")
        value = _to_int32(value * HASH_MULTIPLIER + code_unit)
    return abs(value)


def birth_hash(
    date: str | None, time: str | None, name: str | None, location: str | None = ""
) -> int:
    """Calcule le hash déterministe d'une personne.

    Args:
        date: Date de naissance (YYYY-MM-DD).
        time: Heure de naissance, tolère les heures non complétées (`"4:30"`).
        name: Nom, insensible à la casse et aux espaces en bordure.
        location: Lieu de naissance optionnel.

    Returns:
        int: Entier non négatif stable pour ces données.
    """
    return rolling_hash(combine_fields(date, time, name, location))


def derive(seed: int, stream: str) -> int:
    """Dérive une valeur pseudo-indépendante de la graine pour un sous-flux nommé.

    Chaque sous-flux utilise sa propre plage de bits et son propre masque XOR afin que les
    attributs tirés d'une même graine ne soient pas visiblement corrélés.

    Raises:
        KeyError: si le sous-flux est inconnu.
    """
    shift, mask = DERIVATION_STREAMS[stream]
    return ((seed >> shift) ^ mask) & 0x7FFFFFFF
