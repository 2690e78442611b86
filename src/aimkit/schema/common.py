"""Building blocks shared by both document generations."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DocumentModel(BaseModel):
    """Base model for stored documents.

    Python attributes are snake_case; the stored field names are camelCase.
    Stored names are part of the import/export compatibility surface, so
    always dump with ``by_alias=True``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Alignment(StrEnum):
    """Categorical character alignment."""

    LAWFUL_GOOD = "Lawful Good"
    NEUTRAL_GOOD = "Neutral Good"
    CHAOTIC_GOOD = "Chaotic Good"
    LAWFUL_NEUTRAL = "Lawful Neutral"
    TRUE_NEUTRAL = "True Neutral"
    CHAOTIC_NEUTRAL = "Chaotic Neutral"
    LAWFUL_EVIL = "Lawful Evil"
    NEUTRAL_EVIL = "Neutral Evil"
    CHAOTIC_EVIL = "Chaotic Evil"


class Goals(DocumentModel):
    """Goals and aspirations; identical shape in v1 and v2."""

    short_term: list[str] = Field(default_factory=list)
    long_term: list[str] = Field(default_factory=list)
    dreams: list[str] = Field(default_factory=list)
    current_quest: str | None = None
