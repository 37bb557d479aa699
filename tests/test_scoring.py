"""Tests pour le score de compatibilité.

Ce module vérifie la table des combinaisons de types, les ajustements de ligne et d'autorité,
les bornes du score, l'indépendance vis-à-vis de l'ordre et le dédoublonnage.
"""

from __future__ import annotations

import itertools

import pytest

from cosmic_match.domain import scoring
from cosmic_match.domain.human_design import VALID_AUTHORITIES, HDType
from cosmic_match.domain.scoring import (
    DEFAULT_COMBINATION,
    TYPE_COMBINATIONS,
    CombinationCopy,
    ScoringRules,
    TypeCombination,
    combination_key,
    is_emotional,
    leading_line,
    lookup_combination,
    score_pair,
)

# Constantes pour éviter les erreurs PLR2004 (Magic values)
SCORE_PERFECT = 100
SCORE_DEFAULT_MISMATCH = 67  # 50 + 15 - 3 + 5
SCORE_EMOTIONAL_GENERATORS = 83  # 50 + 28 + 10 - 5
SCORE_RESONANT_LINES = 87  # 50 + 32 + 5
SCORE_FLOOR = 10


def test_combination_key_is_order_independent() -> None:
    """Teste que la clé est identique quel que soit l'ordre des types."""
    assert combination_key("Projector", "Generator") == "Generator & Projector"
    assert combination_key("Generator", "Projector") == "Generator & Projector"


def test_table_keys_are_normalized() -> None:
    """Teste que toutes les clés de la table sont triées et couvrent les deux langues."""
    for key, entry in TYPE_COMBINATIONS.items():
        left, right = key.split(" & ")
        assert key == combination_key(right, left)
        assert set(entry.copy) == {"id", "en"}


def test_default_combination_is_reachable() -> None:
    """Teste que des combinaisons absentes de la table retombent sur l'entrée par défaut."""
    assert lookup_combination("Manifestor", "Reflector") is DEFAULT_COMBINATION
    assert lookup_combination("Reflector", "Reflector") is DEFAULT_COMBINATION
    assert lookup_combination("Unknown", "Generator") is DEFAULT_COMBINATION


@pytest.mark.parametrize(
    ("profile", "line"), [("2/4", 2), ("6/3", 6), (" 4 / 1", 4), ("", None), ("x/2", None)]
)
def test_leading_line(profile, line) -> None:
    """Teste l'extraction de la ligne de tête du profil."""
    assert leading_line(profile) == line


def test_is_emotional_prefix() -> None:
    """Teste la reconnaissance des variantes de l'autorité émotionnelle."""
    assert is_emotional("Emotional")
    assert is_emotional("Emotional - Solar Plexus")
    assert not is_emotional("Sacral")


def test_best_pairing_reaches_maximum(profile_factory) -> None:
    """Teste Generator/Projector, même ligne et autorités non émotionnelles."""
    a = profile_factory("Generator", "Sacral", "2/4", "A")
    b = profile_factory("Projector", "Splenic", "2/5", "B")
    result = score_pair(a, b, "en")
    assert result.score == SCORE_PERFECT
    assert result.archetype == "The Guide & The Powerhouse"
    assert result.headline == "Strategic Synergy"
    assert "Line 2 Perspective Harmony" in result.strengths
    assert "Fast, aligned decision making" in result.strengths


def test_default_entry_with_line_mismatch(profile_factory) -> None:
    """Teste l'entrée par défaut avec lignes discordantes."""
    a = profile_factory("Manifestor", "Ego", "1/3")
    b = profile_factory("Reflector", "Lunar", "5/1")
    result = score_pair(a, b, "en")
    assert result.score == SCORE_DEFAULT_MISMATCH
    assert result.archetype == "Mysterious Flow"
    assert "Line 1 and line 5 perspectives need bridging" in result.challenges


def test_emotional_pair_penalty(profile_factory) -> None:
    """Teste la pénalité lorsque les deux autorités sont émotionnelles."""
    a = profile_factory("Generator", "Emotional", "3/5")
    b = profile_factory("Generator", "Emotional - Solar Plexus", "3/6")
    result = score_pair(a, b, "en")
    assert result.score == SCORE_EMOTIONAL_GENERATORS
    assert "Both need to ride their emotional wave before deciding" in result.challenges


def test_resonant_lines_bonus(profile_factory) -> None:
    """Teste le bonus des lignes 2 et 4, autorités mixtes sans ajustement."""
    a = profile_factory("Manifesting Generator", "Sacral", "2/4")
    b = profile_factory("Projector", "Emotional", "4/6")
    result = score_pair(a, b, "id")
    assert result.score == SCORE_RESONANT_LINES
    assert "Resonansi Garis 2 & 4" in result.strengths


def test_unreadable_profile_skips_line_adjustment(profile_factory) -> None:
    """Teste qu'un profil illisible n'ajoute ni bonus ni pénalité de ligne."""
    a = profile_factory("Manifesting Generator", "Sacral", "")
    b = profile_factory("Projector", "Emotional", "4/6")
    assert score_pair(a, b, "en").score == 50 + 32  # noqa: PLR2004


def test_order_independence(profile_factory) -> None:
    """Teste que (A, B) et (B, A) donnent le même score, libellés et ensembles."""
    profiles = [
        profile_factory("Generator", "Sacral", "1/3"),
        profile_factory("Projector", "Ego", "4/6"),
        profile_factory("Manifestor", "Emotional", "6/2"),
        profile_factory("Reflector", "Lunar", "2/5"),
        profile_factory("Manifesting Generator", "Emotional", "3/5"),
    ]
    for a, b in itertools.product(profiles, repeat=2):
        forward = score_pair(a, b, "en")
        backward = score_pair(b, a, "en")
        assert forward.score == backward.score
        assert forward.archetype == backward.archetype
        assert forward.headline == backward.headline
        assert set(forward.strengths) == set(backward.strengths)
        assert set(forward.challenges) == set(backward.challenges)


def test_all_type_pairs_stay_in_bounds(profile_factory) -> None:
    """Teste les 25 combinaisons de types avec toutes les autorités valides."""
    types = [t.value for t in HDType]
    for type_a, type_b in itertools.product(types, repeat=2):
        for auth_a in VALID_AUTHORITIES[HDType(type_a)]:
            for auth_b in VALID_AUTHORITIES[HDType(type_b)]:
                for profile_a, profile_b in [("1/3", "1/4"), ("2/4", "4/6"), ("3/5", "6/2")]:
                    a = profile_factory(type_a, auth_a.value, profile_a)
                    b = profile_factory(type_b, auth_b.value, profile_b)
                    for lang in ("id", "en"):
                        result = score_pair(a, b, lang)
                        assert SCORE_FLOOR <= result.score <= SCORE_PERFECT
                        assert result.headline
                        assert result.archetype


def test_same_type_and_line_beats_mismatch(profile_factory) -> None:
    """Teste qu'une paire Generator de même ligne dépasse une paire discordante."""
    aligned = score_pair(
        profile_factory("Generator", "Emotional", "3/5"),
        profile_factory("Generator", "Sacral", "3/6"),
    )
    mismatched = score_pair(
        profile_factory("Manifestor", "Emotional", "1/3"),
        profile_factory("Projector", "Sacral", "3/5"),
    )
    assert aligned.score > mismatched.score


def test_clamping_with_custom_rules(profile_factory) -> None:
    """Teste le bornage haut et bas du score."""
    a = profile_factory("Generator", "Sacral", "2/4")
    b = profile_factory("Projector", "Splenic", "2/5")
    assert score_pair(a, b, "en", ScoringRules(base_score=90)).score == SCORE_PERFECT

    c = profile_factory("Manifestor", "Emotional", "1/3")
    d = profile_factory("Manifestor", "Emotional", "5/1")
    assert score_pair(c, d, "en", ScoringRules(base_score=-50)).score == SCORE_FLOOR


def test_strengths_and_challenges_are_deduplicated(monkeypatch, profile_factory) -> None:
    """Teste le dédoublonnage quand plusieurs règles poussent le même texte."""
    duplicated = TypeCombination(
        delta=0,
        copy={
            "en": CombinationCopy(
                archetype="Echo",
                headline="Echo",
                communication_advice="",
                strengths=("Line 2 Perspective Harmony", "Line 2 Perspective Harmony"),
                challenges=("Both need to ride their emotional wave before deciding",),
            )
        },
    )
    monkeypatch.setattr(scoring, "lookup_combination", lambda a, b: duplicated)
    a = profile_factory("Generator", "Emotional", "2/4")
    b = profile_factory("Generator", "Emotional", "2/5")
    result = score_pair(a, b, "en")
    assert result.strengths == ["Line 2 Perspective Harmony"]
    assert result.challenges == ["Both need to ride their emotional wave before deciding"]


def test_scoring_tables_are_read_only() -> None:
    """Teste que la table des combinaisons et ses textes sont immuables."""
    entry = next(iter(TYPE_COMBINATIONS.values()))
    with pytest.raises(TypeError):
        entry.copy["en"] = DEFAULT_COMBINATION.copy["en"]
    with pytest.raises(TypeError):
        DEFAULT_COMBINATION.copy["fr"] = DEFAULT_COMBINATION.copy["en"]
    with pytest.raises(TypeError):
        scoring.RULE_COPY["en"]["advice"] = ""
