"""Configuration de test pour pytest avec gestion des chemins.

Ce module ajoute la racine du projet au sys.path et fournit des données de naissance et des
profils réutilisables pour les tests du moteur et de l'API.
"""

import os
import sys

import pytest

# Ensure project root is on sys.path so that
# imports like `from cosmic_match...` resolve.
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cosmic_match.domain.entities import BirthData, CosmicProfile  # noqa: E402


def make_profile(
    hd_type: str = "Generator",
    authority: str = "Sacral",
    profile: str = "2/4",
    name: str = "Test",
) -> CosmicProfile:
    """Construit un profil minimal pour tester le score sans passer par le hash."""
    return CosmicProfile(
        name=name,
        hd_type=hd_type,
        hd_authority=authority,
        hd_profile=profile,
        hd_strategy="",
        hd_not_self_theme="",
        hd_definition="",
        hd_incarnation_cross="",
        sun_sign="Aries",
        moon_sign="Aries",
        shio="Rat",
        element="Wood",
        communication_style="",
    )


@pytest.fixture
def alya() -> BirthData:
    """Personne correspondant à la première carte de référence."""
    return BirthData(name="Alya", date="1995-05-23", time="04:30", location="Jakarta")


@pytest.fixture
def bima() -> BirthData:
    """Personne correspondant à la seconde carte de référence."""
    return BirthData(name="Bima", date="1997-09-11", time="09:50", location="Bandung")


@pytest.fixture
def citra() -> BirthData:
    """Personne classée par le hash générique."""
    return BirthData(name="Citra Dewi", date="1990-01-15", time="7:05", location="Surabaya")


@pytest.fixture
def profile_factory():
    """Fabrique de profils (voir `make_profile`)."""
    return make_profile
