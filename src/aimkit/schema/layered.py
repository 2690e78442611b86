"""Layered character profile ("v2").

Separates canonical attributes sourced from an external authority from the
user-editable persona layer. Invariant: no key of ``persona.traits_add`` may
appear in ``canonical.traits``; see :mod:`aimkit.migration.conflicts`.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import Field

from aimkit.schema.common import Alignment, DocumentModel, Goals

LAYERED_GENERATION = "aim-2"


def utc_now() -> str:
    """Current instant as an ISO 8601 UTC timestamp."""
    return datetime.now(UTC).isoformat()


class Subject(DocumentModel):
    """The real-world entity the document describes."""

    chain: str = ""
    contract: str = ""
    token_id: str = ""
    owner: str | None = None
    collection_name: str = ""


class Sources(DocumentModel):
    """Provenance of the canonical data."""

    metadata_uri: str = ""
    fetched_at: str = ""
    metadata_hash: str = ""
    image: str = ""
    opensea_url: str = ""


class Canonical(DocumentModel):
    """Immutable ground-truth attributes plus the raw payload they came from."""

    traits: dict[str, str] = Field(default_factory=dict)
    raw: Any | None = None


class Normalized(DocumentModel):
    traits: dict[str, str] = Field(default_factory=dict)
    registry_version: str | None = None
    conflicts: list[str] = Field(default_factory=list)


class Persona(DocumentModel):
    """The only user-editable layer."""

    title: str = ""
    nickname: str | None = None
    alignment: Alignment | None = None
    tone: str = ""
    tags: list[str] = Field(default_factory=list)
    lore: str = ""
    goals: Goals = Field(default_factory=Goals)
    traits_add: dict[str, str] = Field(
        default_factory=dict,
        description="Supplementary traits; never shares a key with canonical.traits",
    )


class UISettings(DocumentModel):
    crystallized_keys: list[str] = Field(default_factory=list)
    locked_keys: list[str] = Field(default_factory=list)
    highlights: list[str] | None = None
    theme: str | None = None


class Capabilities(DocumentModel):
    chat: bool | None = None
    posts: bool | None = None


class LayeredDocument(DocumentModel):
    """Two-layer character profile.

    Attributes:
        version: Fixed generation marker, always ``"aim-2"``.
        subject: What the document is about.
        sources: Where the canonical data was fetched from.
        canonical: Read-only attributes from the external authority.
        normalized: Processed canonical attributes and conflicting keys.
        persona: User-authored customization.
        ui: Presentation hints.
        capabilities: Optional feature flags.
        meta: Free-form bag; carries migration provenance markers.
    """

    version: Literal["aim-2"] = LAYERED_GENERATION
    id: str
    created_at: str = ""
    updated_at: str = ""
    subject: Subject = Field(default_factory=Subject)
    sources: Sources = Field(default_factory=Sources)
    canonical: Canonical = Field(default_factory=Canonical)
    normalized: Normalized = Field(default_factory=Normalized)
    persona: Persona = Field(default_factory=Persona)
    ui: UISettings = Field(default_factory=UISettings)
    capabilities: Capabilities | None = None
    meta: dict[str, Any] | None = None


def create_empty_layered_document(document_id: str) -> LayeredDocument:
    """Build a zero-value layered document.

    Every nested structure is present so callers can write into it by path.
    Both timestamps and ``sources.fetched_at`` are stamped to the same instant.

    Args:
        document_id: Identifier for the new document.

    Returns:
        Fresh LayeredDocument.
    """
    now = utc_now()
    return LayeredDocument(
        id=document_id,
        created_at=now,
        updated_at=now,
        subject=Subject(),
        sources=Sources(fetched_at=now),
        canonical=Canonical(),
        normalized=Normalized(),
        persona=Persona(goals=Goals()),
        ui=UISettings(),
    )


def is_layered_document(obj: Any) -> bool:
    """Check whether ``obj`` is a layered document or its stored mapping form."""
    if isinstance(obj, LayeredDocument):
        return True
    if not isinstance(obj, Mapping):
        return False
    return bool(
        obj.get("version") == LAYERED_GENERATION
        and obj.get("id")
        and obj.get("subject")
        and obj.get("canonical")
    )
