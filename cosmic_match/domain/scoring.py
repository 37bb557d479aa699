"""
Score de compatibilité entre deux profils.

Objectif du module
------------------
- Partir d'un score de base, appliquer le delta de la combinaison de types (table
  `TYPE_COMBINATIONS`), puis les ajustements de ligne de profil et d'autorité.
- Borner le score et dédoublonner forces et défis.

La table est volontairement partielle: toute combinaison absente utilise
`DEFAULT_COMBINATION`. La clé est triée, donc (A, B) et (B, A) donnent le même résultat.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from cosmic_match.domain.entities import CosmicProfile

COMBINATION_SEPARATOR = " & "
EMOTIONAL_AUTHORITY = "Emotional"


@dataclass(frozen=True)
class CombinationCopy:
    """Textes associés à une combinaison de types, pour une langue."""

    archetype: str
    headline: str
    communication_advice: str
    strengths: tuple[str, ...]
    challenges: tuple[str, ...]


@dataclass(frozen=True)
class TypeCombination:
    """Entrée de la table: delta de score et textes par langue."""

    delta: int
    copy: Mapping[str, CombinationCopy]

    def __post_init__(self) -> None:
        object.__setattr__(self, "copy", MappingProxyType(dict(self.copy)))


@dataclass(frozen=True)
class ScoringRules:
    """Constantes du calcul, injectables pour les tests ou la configuration."""

    base_score: int = 50
    min_score: int = 10
    max_score: int = 100
    same_line_bonus: int = 10
    resonant_line_bonus: int = 5
    line_mismatch_penalty: int = 3
    emotional_pair_penalty: int = 5
    decisive_pair_bonus: int = 5
    resonant_lines: frozenset[frozenset[int]] = field(
        default_factory=lambda: frozenset(
            {frozenset({1, 4}), frozenset({2, 4}), frozenset({2, 5}), frozenset({3, 6})}
        )
    )

    def clamp(self, score: int) -> int:
        return max(self.min_score, min(self.max_score, score))


@dataclass(frozen=True)
class PairScore:
    """Résultat du score, avant sélection du résumé narratif."""

    score: int
    headline: str
    archetype: str
    strengths: list[str]
    challenges: list[str]
    communication_advice: str
    advice: str


def _freeze(table: dict[str, dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({key: MappingProxyType(inner) for key, inner in table.items()})


def combination_key(type_a: str, type_b: str) -> str:
    """Clé indépendante de l'ordre: types triés joints par `COMBINATION_SEPARATOR`."""
    return COMBINATION_SEPARATOR.join(sorted((type_a, type_b)))


def _copy(
    archetype: str, headline: str, comm: str, strengths: tuple[str, ...], challenges: tuple[str, ...]
) -> CombinationCopy:
    return CombinationCopy(archetype, headline, comm, strengths, challenges)


TYPE_COMBINATIONS: MappingProxyType[str, TypeCombination] = MappingProxyType(
    {
        combination_key("Generator", "Projector"): TypeCombination(
            delta=35,
            copy={
                "id": _copy(
                    "The Guide & The Powerhouse",
                    "Sinergi Strategis",
                    "Projector memberikan arahan, Generator memberikan tenaga. "
                    "Pastikan Projector diundang sebelum bicara.",
                    ("Visi yang terarah", "Ketahanan kerja"),
                    ("Overwhelming bagi Projector",),
                ),
                "en": _copy(
                    "The Guide & The Powerhouse",
                    "Strategic Synergy",
                    "The Projector guides, the Generator fuels. "
                    "Make sure the Projector is invited before speaking.",
                    ("Focused vision", "Work stamina"),
                    ("Overwhelming for the Projector",),
                ),
            },
        ),
        combination_key("Generator", "Manifesting Generator"): TypeCombination(
            delta=30,
            copy={
                "id": _copy(
                    "Dynamic Producers",
                    "Aliran Tanpa Henti",
                    "MG bergerak lebih cepat, Generator lebih konsisten. "
                    "Berkomunikasi melalui pertanyaan ya/tidak.",
                    ("Produktivitas luar biasa", "Pemahaman sakral"),
                    ("Frustrasi pada kecepatan",),
                ),
                "en": _copy(
                    "Dynamic Producers",
                    "Endless Flow",
                    "The MG moves faster, the Generator stays steadier. "
                    "Communicate through yes/no questions.",
                    ("Exceptional productivity", "Sacral understanding"),
                    ("Frustration over pace",),
                ),
            },
        ),
        combination_key("Manifesting Generator", "Projector"): TypeCombination(
            delta=32,
            copy={
                "id": _copy(
                    "The Multi-tasker & The Seer",
                    "Dinamika Modern",
                    "Hargai kecepatan MG, tapi gunakan pandangan Projector untuk efisiensi. "
                    "Komunikasi harus jelas.",
                    ("Inovasi cepat", "Klaritas strategi"),
                    ("Kelelahan energi",),
                ),
                "en": _copy(
                    "The Multi-tasker & The Seer",
                    "Modern Dynamics",
                    "Honour the MG's speed, but use the Projector's view for efficiency. "
                    "Keep communication explicit.",
                    ("Rapid innovation", "Strategic clarity"),
                    ("Energy burnout",),
                ),
            },
        ),
        combination_key("Manifestor", "Projector"): TypeCombination(
            delta=25,
            copy={
                "id": _copy(
                    "The Initiator & The Advisor",
                    "Pengaruh Luar Biasa",
                    "Manifestor menginformasikan langkahnya, Projector memberikan kedalaman visi. "
                    "Jangan saling mengontrol.",
                    ("Kemandirian tinggi", "Inspirasi besar"),
                    ("Perebutan otoritas",),
                ),
                "en": _copy(
                    "The Initiator & The Advisor",
                    "Remarkable Influence",
                    "The Manifestor informs, the Projector brings depth of vision. "
                    "Do not try to control each other.",
                    ("High independence", "Big inspiration"),
                    ("Power struggles",),
                ),
            },
        ),
        combination_key("Generator", "Manifestor"): TypeCombination(
            delta=20,
            copy={
                "id": _copy(
                    "Impact & Sustainability",
                    "Intensitas Tinggi",
                    "Manifestor perlu menginformasikan Generator agar tidak ada resistensi energi "
                    "di antara kalian.",
                    ("Output besar", "Aksi nyata"),
                    ("Resistensi energi",),
                ),
                "en": _copy(
                    "Impact & Sustainability",
                    "High Intensity",
                    "The Manifestor needs to inform the Generator so no energetic resistance "
                    "builds between you.",
                    ("Big output", "Concrete action"),
                    ("Energetic resistance",),
                ),
            },
        ),
        combination_key("Manifesting Generator", "Manifestor"): TypeCombination(
            delta=22,
            copy={
                "id": _copy(
                    "Twin Igniters",
                    "Percikan Inisiatif",
                    "Saling menginformasikan rencana sebelum bergerak, agar dua arah tidak bertabrakan.",
                    ("Keberanian memulai", "Kecepatan eksekusi"),
                    ("Bentrokan arah",),
                ),
                "en": _copy(
                    "Twin Igniters",
                    "Spark of Initiative",
                    "Inform each other before moving so two directions do not collide.",
                    ("Courage to start", "Speed of execution"),
                    ("Clashing directions",),
                ),
            },
        ),
        combination_key("Generator", "Generator"): TypeCombination(
            delta=28,
            copy={
                "id": _copy(
                    "The Steady Builders",
                    "Ritme yang Selaras",
                    "Ajukan pertanyaan ya/tidak dan percayai respons sakral masing-masing.",
                    ("Stamina bersama", "Ritme harian yang stabil"),
                    ("Rutinitas yang monoton",),
                ),
                "en": _copy(
                    "The Steady Builders",
                    "Matched Rhythm",
                    "Ask yes/no questions and trust each other's sacral response.",
                    ("Shared stamina", "Stable daily rhythm"),
                    ("Monotonous routines",),
                ),
            },
        ),
        combination_key("Manifesting Generator", "Manifesting Generator"): TypeCombination(
            delta=24,
            copy={
                "id": _copy(
                    "The Accelerators",
                    "Kecepatan Ganda",
                    "Sepakati jeda singkat untuk mengecek arah sebelum melompat ke hal berikutnya.",
                    ("Energi multitasking", "Adaptasi cepat"),
                    ("Langkah yang terlewat",),
                ),
                "en": _copy(
                    "The Accelerators",
                    "Double Speed",
                    "Agree on short pauses to check direction before jumping to the next thing.",
                    ("Multitasking energy", "Fast adaptation"),
                    ("Skipped steps",),
                ),
            },
        ),
        combination_key("Projector", "Projector"): TypeCombination(
            delta=12,
            copy={
                "id": _copy(
                    "The Mirror of Insight",
                    "Dua Pengamat",
                    "Bergantian mengundang dan mendengarkan; pengakuan timbal balik adalah bahan bakar kalian.",
                    ("Pemahaman mendalam", "Saling mengakui"),
                    ("Energi terbatas",),
                ),
                "en": _copy(
                    "The Mirror of Insight",
                    "Two Observers",
                    "Take turns inviting and listening; mutual recognition is your fuel.",
                    ("Deep understanding", "Mutual recognition"),
                    ("Limited energy",),
                ),
            },
        ),
        combination_key("Projector", "Reflector"): TypeCombination(
            delta=18,
            copy={
                "id": _copy(
                    "The Seer & The Mirror",
                    "Kepekaan Halus",
                    "Beri Reflector waktu satu siklus bulan; Projector sebaiknya menunggu diundang.",
                    ("Kepekaan terhadap lingkungan", "Kebijaksanaan bersama"),
                    ("Keputusan yang lambat",),
                ),
                "en": _copy(
                    "The Seer & The Mirror",
                    "Subtle Sensitivity",
                    "Give the Reflector a lunar cycle; the Projector should wait to be invited.",
                    ("Environmental sensitivity", "Shared wisdom"),
                    ("Slow decisions",),
                ),
            },
        ),
        combination_key("Manifestor", "Manifestor"): TypeCombination(
            delta=-5,
            copy={
                "id": _copy(
                    "Two Sovereigns",
                    "Dua Kekuatan Mandiri",
                    "Informasikan setiap langkah besar; otonomi penuh hanya bertahan jika saling diberi kabar.",
                    ("Kemandirian penuh",),
                    ("Perebutan kendali", "Jarak emosional"),
                ),
                "en": _copy(
                    "Two Sovereigns",
                    "Two Independent Forces",
                    "Inform each other of every big move; full autonomy only lasts with shared news.",
                    ("Full independence",),
                    ("Struggle for control", "Emotional distance"),
                ),
            },
        ),
    }
)

DEFAULT_COMBINATION = TypeCombination(
    delta=15,
    copy={
        "id": _copy(
            "Aliran Misterius",
            "Dinamika yang Unik",
            "Dibutuhkan observasi mendalam untuk memahami ritme energi pasangan yang sangat kontras.",
            ("Sudut pandang baru", "Saling melengkapi"),
            ("Ketidaksinkronan jadwal",),
        ),
        "en": _copy(
            "Mysterious Flow",
            "A Unique Dynamic",
            "Deep observation is needed to understand your partner's very contrasting energy rhythm.",
            ("Fresh perspectives", "Complementary natures"),
            ("Out-of-sync schedules",),
        ),
    },
)

RULE_COPY: Mapping[str, Mapping[str, str]] = _freeze(
    {
        "id": {
            "same_line": "Harmoni Perspektif Garis {line}",
            "resonant_lines": "Resonansi Garis {line_a} & {line_b}",
            "line_mismatch": "Perspektif garis {line_a} dan {line_b} perlu dijembatani",
            "emotional_pair": "Keduanya butuh waktu melewati gelombang emosi sebelum memutuskan",
            "decisive_pair": "Pengambilan keputusan yang cepat dan selaras",
            "advice": "Hargai tanda-tanda energi unik satu sama lain setiap hari.",
        },
        "en": {
            "same_line": "Line {line} Perspective Harmony",
            "resonant_lines": "Line {line_a} & {line_b} Resonance",
            "line_mismatch": "Line {line_a} and line {line_b} perspectives need bridging",
            "emotional_pair": "Both need to ride their emotional wave before deciding",
            "decisive_pair": "Fast, aligned decision making",
            "advice": "Honour each other's unique energy signals every day.",
        },
    }
)


def lookup_combination(type_a: str, type_b: str) -> TypeCombination:
    """Retourne l'entrée de table pour deux types, ou `DEFAULT_COMBINATION`."""
    return TYPE_COMBINATIONS.get(combination_key(type_a, type_b), DEFAULT_COMBINATION)


def leading_line(profile: str) -> int | None:
    """Ligne de tête d'un profil (`"2/4"` -> 2), None si illisible."""
    head = profile.split("/", 1)[0].strip()
    return int(head) if head.isdigit() else None


def is_emotional(authority: str) -> bool:
    # "Emotional - Solar Plexus" compte aussi comme émotionnelle
    return authority.strip().startswith(EMOTIONAL_AUTHORITY)


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def score_pair(
    a: CosmicProfile,
    b: CosmicProfile,
    lang: str = "id",
    rules: ScoringRules | None = None,
) -> PairScore:
    """Calcule le score de compatibilité de deux profils.

    Args:
        a: Profil de la première personne.
        b: Profil de la seconde personne.
        lang: Langue des textes (`id` ou `en`), déjà résolue par l'appelant.
        rules: Constantes de calcul; `ScoringRules()` par défaut.

    Returns:
        PairScore: score borné, libellés, forces et défis dédoublonnés.
    """
    rules = rules or ScoringRules()
    texts = RULE_COPY[lang]
    combination = lookup_combination(a.hd_type, b.hd_type)
    copy = combination.copy[lang]

    score = rules.base_score + combination.delta
    strengths: list[str] = list(copy.strengths)
    challenges: list[str] = list(copy.challenges)

    line_a = leading_line(a.hd_profile)
    line_b = leading_line(b.hd_profile)
    if line_a is not None and line_b is not None:
        low, high = sorted((line_a, line_b))
        if line_a == line_b:
            score += rules.same_line_bonus
            strengths.append(texts["same_line"].format(line=line_a))
        elif frozenset({line_a, line_b}) in rules.resonant_lines:
            score += rules.resonant_line_bonus
            strengths.append(texts["resonant_lines"].format(line_a=low, line_b=high))
        else:
            score -= rules.line_mismatch_penalty
            challenges.append(texts["line_mismatch"].format(line_a=low, line_b=high))

    emotional_a = is_emotional(a.hd_authority)
    emotional_b = is_emotional(b.hd_authority)
    if emotional_a and emotional_b:
        score -= rules.emotional_pair_penalty
        challenges.append(texts["emotional_pair"])
    elif not emotional_a and not emotional_b:
        score += rules.decisive_pair_bonus
        strengths.append(texts["decisive_pair"])

    return PairScore(
        score=rules.clamp(score),
        headline=copy.headline,
        archetype=copy.archetype,
        strengths=_dedupe(strengths),
        challenges=_dedupe(challenges),
        communication_advice=copy.communication_advice,
        advice=texts["advice"],
    )


def describe_rules(rules: ScoringRules) -> dict[str, Any]:
    """Vue sérialisable des constantes de score (exposée par `/health`)."""
    return {
        "base_score": rules.base_score,
        "min_score": rules.min_score,
        "max_score": rules.max_score,
        "combinations": len(TYPE_COMBINATIONS),
    }
