# Schémas Pydantic exposés par l'API (requêtes).

from pydantic import AliasChoices, BaseModel, Field, field_validator

from cosmic_match.domain.entities import BirthData

MAX_TIME_LENGTH = 32


class BirthRequest(BaseModel):
    """Données de naissance d'une personne.

    Champs:
    - name: str (obligatoire, non vide)
    - date: str (YYYY-MM-DD, obligatoire)
    - time: str (HH:MM, "4:30" accepté; optionnel)
    - location: str (ville de naissance, optionnel)
    - hd_type / hd_authority / hd_profile: carte Human Design connue (optionnel, les trois ensemble)
    """

    name: str
    date: str
    time: str | None = Field(default="", max_length=MAX_TIME_LENGTH)
    location: str | None = ""
    hd_type: str | None = Field(default=None, validation_alias=AliasChoices("hd_type", "hdType"))
    hd_authority: str | None = Field(
        default=None, validation_alias=AliasChoices("hd_authority", "hdAuthority")
    )
    hd_profile: str | None = Field(
        default=None, validation_alias=AliasChoices("hd_profile", "hdProfile")
    )

    @field_validator("name", "date")
    @classmethod
    def _required(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("must not be blank")
        return cleaned

    def to_birth_data(self) -> BirthData:
        return BirthData(**self.model_dump())


class AnalyzeRequest(BaseModel):
    """Requête d'analyse de compatibilité.

    Champs:
    - person_a / person_b: `BirthRequest` (alias camelCase `personA` / `personB` acceptés)
    - lang: "id" | "en" (optionnel, langue par défaut de la configuration sinon)
    """

    person_a: BirthRequest = Field(validation_alias=AliasChoices("person_a", "personA"))
    person_b: BirthRequest = Field(validation_alias=AliasChoices("person_b", "personB"))
    lang: str | None = None


class ProfileRequest(BaseModel):
    """Requête de profil cosmique pour une seule personne."""

    person: BirthRequest
    lang: str | None = None
