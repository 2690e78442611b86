"""Legacy flat character profile ("v1").

Created by the profile editor on first save and mutated in place by later
saves. Only ``id``, ``characterName`` and the nested groups are required;
everything else defaults to empty so older files keep loading.
"""

from enum import StrEnum

from pydantic import Field

from aimkit.schema.common import Alignment, DocumentModel, Goals

LEGACY_GENERATION = "aim-v1"


class SocialStyle(StrEnum):
    """How a character engages socially."""

    EXTROVERTED = "Extroverted"
    INTROVERTED = "Introverted"
    AMBIVERT = "Ambivert"


class Personality(DocumentModel):
    primary_traits: list[str] = Field(default_factory=list)
    secondary_traits: list[str] = Field(default_factory=list)
    alignment: Alignment | None = None
    temperament: str = ""
    motivations: list[str] = Field(default_factory=list)
    fears: list[str] = Field(default_factory=list)
    quirks: list[str] = Field(default_factory=list)


class Relationship(DocumentModel):
    name: str
    relationship: str = ""
    description: str = ""


class Backstory(DocumentModel):
    origin: str = ""
    childhood: str = ""
    formative_events: list[str] = Field(default_factory=list)
    relationships: list[Relationship] = Field(default_factory=list)
    achievements: list[str] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)


class Skill(DocumentModel):
    name: str
    level: int = Field(default=1, ge=1, le=10, description="Proficiency from 1 to 10")
    description: str = ""


class Abilities(DocumentModel):
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    special_powers: list[str] = Field(default_factory=list)
    skills: list[Skill] = Field(default_factory=list)


class Behavior(DocumentModel):
    speech_patterns: str = ""
    mannerisms: list[str] = Field(default_factory=list)
    habits: list[str] = Field(default_factory=list)
    social_style: SocialStyle | None = None
    conflict_resolution: str = ""
    decision_making: str = ""


class Appearance(DocumentModel):
    height: str | None = None
    build: str | None = None
    distinctive_features: list[str] = Field(default_factory=list)
    clothing: str = ""
    accessories: list[str] = Field(default_factory=list)


class LegacyDocument(DocumentModel):
    """Flat, single-layer character profile.

    Attributes:
        id: Opaque document identifier.
        ora_number: External subject (token) number.
        ora_name: Collection display name.
        ora_image: Image reference for the subject.
        character_name: Name the user gave the character.
        version: Integer-as-string save counter.
    """

    id: str = Field(description="Opaque document identifier")
    ora_number: str = Field(default="", description="External subject number")
    ora_name: str = Field(default="", description="Collection display name")
    ora_image: str = Field(default="", description="Image reference")
    created_at: str = Field(default="", description="ISO timestamp of creation")
    updated_at: str = Field(default="", description="ISO timestamp of last save")

    character_name: str = Field(description="Character display name")
    nickname: str | None = None
    age: int | None = None
    species: str | None = None

    personality: Personality
    backstory: Backstory
    abilities: Abilities
    behavior: Behavior
    appearance: Appearance
    goals: Goals | None = None

    tags: list[str] = Field(default_factory=list)
    notes: str = ""
    version: str = Field(default="0", description="Save counter, stored as a string")
