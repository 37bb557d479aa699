"""Tests pour la configuration et le conteneur de dépendances."""

from __future__ import annotations

import logging

import pytest

from cosmic_match.core.container import Container, build_rules
from cosmic_match.core.logging import resolve_level
from cosmic_match.core.settings import Settings, get_settings

# Constantes pour éviter les erreurs PLR2004 (Magic values)
BASE_SCORE_DEFAULT = 50
CUSTOM_BASE = 40
CUSTOM_DELAY = 250


def test_default_settings(monkeypatch) -> None:
    """Teste les valeurs par défaut du moteur."""
    for key in ("DEFAULT_LANG", "BASE_SCORE", "ANALYSIS_DELAY_MS"):
        monkeypatch.delenv(key, raising=False)
    settings = Settings(_env_file=None)
    assert settings.DEFAULT_LANG == "id"
    assert settings.BASE_SCORE == BASE_SCORE_DEFAULT
    assert settings.ANALYSIS_DELAY_MS == 0


def test_settings_from_environment(monkeypatch) -> None:
    """Teste la lecture des paramètres depuis l'environnement."""
    monkeypatch.setenv("DEFAULT_LANG", "en")
    monkeypatch.setenv("BASE_SCORE", str(CUSTOM_BASE))
    settings = get_settings()
    assert settings.DEFAULT_LANG == "en"
    assert settings.BASE_SCORE == CUSTOM_BASE


def test_container_wires_service() -> None:
    """Teste le câblage du service à partir de la configuration."""
    settings = Settings(
        _env_file=None, DEFAULT_LANG="en", BASE_SCORE=CUSTOM_BASE, ANALYSIS_DELAY_MS=CUSTOM_DELAY
    )
    container = Container(settings=settings)
    assert container.compatibility.default_lang == "en"
    assert container.compatibility.delay_ms == CUSTOM_DELAY
    assert container.rules.base_score == CUSTOM_BASE


@pytest.mark.parametrize(("score_min", "score_max"), [(90, 20), (150, 200), (-50, -10)])
def test_build_rules_rejects_inverted_bounds(score_min, score_max) -> None:
    """Teste le refus de bornes incohérentes, avant comme après le plafonnement à [0, 100]."""
    with pytest.raises(ValueError):
        build_rules(Settings(_env_file=None, SCORE_MIN=score_min, SCORE_MAX=score_max))


def test_build_rules_caps_bounds() -> None:
    """Teste que les bornes restent dans [0, 100]."""
    rules = build_rules(Settings(_env_file=None, SCORE_MIN=-5, SCORE_MAX=150))
    assert rules.min_score == 0
    assert rules.max_score == 100  # noqa: PLR2004


def test_resolve_log_level() -> None:
    """Teste la conversion des niveaux de log configurés."""
    assert resolve_level("info") == logging.INFO
    assert resolve_level(" WARNING ") == logging.WARNING
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level("chatty") == logging.INFO
