"""
Sélection des textes narratifs.

Objectif du module
------------------
- Choisir un gabarit de résumé selon la tranche de score, puis l'interpoler avec les noms,
  types, autorités et profils des deux personnes.
- Fournir le style de communication associé à chaque type.

Les tranches sont communes à toutes les langues; seule la formulation change.
"""

from collections.abc import Mapping
from types import MappingProxyType

from cosmic_match.domain.entities import CosmicProfile

SUPPORTED_LANGUAGES = ("id", "en")
DEFAULT_LANGUAGE = "id"

# (seuil minimal, identifiant de gabarit), du plus haut au plus bas
SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (85, "soulmate"),
    (70, "productive"),
    (55, "growth"),
    (0, "learning"),
)


def _freeze(table: dict[str, dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({key: MappingProxyType(inner) for key, inner in table.items()})


SUMMARY_TEMPLATES: Mapping[str, Mapping[str, str]] = _freeze(
    {
        "id": {
            "soulmate": (
                "Hubungan antara {name_a} dan {name_b} adalah resonansi jiwa yang langka. "
                "Energi {type_a} dan {type_b} saling menguatkan, menciptakan aliran alami di mana "
                "dukungan terasa tanpa usaha. Ini adalah kemitraan yang dibangun di atas pemahaman "
                "kosmik yang mendalam."
            ),
            "productive": (
                "{name_a} dan {name_b} memiliki dinamika yang sangat produktif. Ada keseimbangan "
                "antara otoritas {authority_a} dan {authority_b} dalam memberi arahan dan energi. "
                "Tantangan kecil mungkin muncul, namun fondasi kalian cukup kuat untuk mengubah "
                "gesekan menjadi pertumbuhan kreatif."
            ),
            "growth": (
                "{name_a} ({profile_a}) dan {name_b} ({profile_b}) membawa perspektif yang sangat "
                "berbeda ke dalam hubungan ini. Meskipun membutuhkan waktu untuk sinkronisasi, "
                "perbedaan ini justru menjadi kekuatan jika kalian saling menghargai ritme unik "
                "masing-masing. Komunikasi adalah kunci evolusi kalian."
            ),
            "learning": (
                "Hubungan ini adalah ruang pembelajaran yang intens bagi {name_a} dan {name_b}. "
                "Fokuslah pada pemberian ruang bagi otonomi {type_a} dan {type_b}. Dengan "
                "kesadaran tinggi, kalian bisa melampaui hambatan komunikasi awal menjadi koneksi "
                "yang lebih dewasa."
            ),
        },
        "en": {
            "soulmate": (
                "The bond between {name_a} and {name_b} is a rare soul resonance. The {type_a} and "
                "{type_b} energies amplify each other, creating a natural flow where support feels "
                "effortless. This partnership is built on a deep cosmic understanding."
            ),
            "productive": (
                "{name_a} and {name_b} share a highly productive dynamic. Their {authority_a} and "
                "{authority_b} authorities balance direction and energy. Small challenges may "
                "arise, but the foundation is strong enough to turn friction into creative growth."
            ),
            "growth": (
                "{name_a} ({profile_a}) and {name_b} ({profile_b}) bring very different "
                "perspectives into this relationship. Syncing up takes time, yet the difference "
                "becomes a strength when each honours the other's unique rhythm. Communication is "
                "the key to your evolution."
            ),
            "learning": (
                "This relationship is an intense learning space for {name_a} and {name_b}. Focus "
                "on giving room to the autonomy of both the {type_a} and the {type_b}. With high "
                "awareness you can move past early communication hurdles into a more mature "
                "connection."
            ),
        },
    }
)

COMMUNICATION_STYLES: Mapping[str, Mapping[str, str]] = _freeze(
    {
        "id": {
            "Generator": (
                "Cenderung merespons daripada memulai. Komunikasi paling efektif jika diberikan "
                "pertanyaan pilihan atau 'ya/tidak' yang memicu respons perut (sacral)."
            ),
            "Manifesting Generator": (
                "Cepat, efisien, dan seringkali melompat langsung ke inti masalah. Membutuhkan "
                "ruang untuk mengoreksi arah di tengah percakapan karena proses berpikir yang "
                "multitasking."
            ),
            "Projector": (
                "Komunikasi berbasis pengamatan mendalam. Paling berdaya jika ditanya pendapatnya "
                "atau diakui keahliannya sebelum berbicara. Cenderung memberikan arahan strategis."
            ),
            "Manifestor": (
                "Komunikasi bersifat menginformasikan. Membutuhkan otonomi penuh dan seringkali "
                "merasa terganggu jika harus meminta izin sebelum berbicara atau bertindak."
            ),
            "Reflector": (
                "Komunikasi bersifat reflektif. Berfungsi sebagai cermin lingkungan. Membutuhkan "
                "waktu yang lama (satu siklus bulan) untuk memproses informasi besar sebelum "
                "memberikan jawaban final."
            ),
        },
        "en": {
            "Generator": (
                "Tends to respond rather than initiate. Communication works best through choice "
                "or yes/no questions that trigger a gut (sacral) response."
            ),
            "Manifesting Generator": (
                "Fast, efficient and often jumps straight to the heart of the matter. Needs room "
                "to correct course mid-conversation because of a multitasking thought process."
            ),
            "Projector": (
                "Communication rooted in deep observation. Most empowered when asked for an "
                "opinion or recognised for expertise before speaking. Tends to give strategic "
                "guidance."
            ),
            "Manifestor": (
                "Communication is about informing. Needs full autonomy and often feels disturbed "
                "when asked to seek permission before speaking or acting."
            ),
            "Reflector": (
                "Reflective communication that mirrors the environment. Needs a long time (one "
                "lunar cycle) to process big information before giving a final answer."
            ),
        },
    }
)

DEFAULT_COMMUNICATION_STYLE: Mapping[str, str] = MappingProxyType(
    {
        "id": "Gaya komunikasi yang unik dan adaptif sesuai lingkungan.",
        "en": "A unique communication style that adapts to its environment.",
    }
)


def resolve_language(lang: str | None, default: str = DEFAULT_LANGUAGE) -> str:
    """Retourne la langue demandée si elle est prise en charge, sinon `default`."""
    candidate = (lang or "").strip().lower()
    if candidate in SUPPORTED_LANGUAGES:
        return candidate
    return default if default in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def score_band(score: int) -> str:
    """Identifiant de la tranche de score (`soulmate`, `productive`, `growth`, `learning`)."""
    for threshold, band in SCORE_BANDS:
        if score >= threshold:
            return band
    return SCORE_BANDS[-1][1]


def narrate(score: int, a: CosmicProfile, b: CosmicProfile, lang: str = DEFAULT_LANGUAGE) -> str:
    """Produit le résumé narratif d'une paire pour un score donné.

    Args:
        score: Score final (déjà borné).
        a: Profil de la première personne.
        b: Profil de la seconde personne.
        lang: Langue du gabarit; une langue inconnue retombe sur la langue par défaut.

    Returns:
        str: Résumé interpolé.
    """
    template = SUMMARY_TEMPLATES[resolve_language(lang)][score_band(score)]
    return template.format(
        name_a=a.name,
        name_b=b.name,
        type_a=a.hd_type,
        type_b=b.hd_type,
        authority_a=a.hd_authority,
        authority_b=b.hd_authority,
        profile_a=a.hd_profile,
        profile_b=b.hd_profile,
    )


def communication_style(hd_type: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Style de communication associé à un type, avec repli générique."""
    language = resolve_language(lang)
    return COMMUNICATION_STYLES[language].get(hd_type, DEFAULT_COMMUNICATION_STYLE[language])
