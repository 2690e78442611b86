"""Document models for both character profile generations."""

from aimkit.schema.common import Alignment, DocumentModel, Goals
from aimkit.schema.layered import (
    LAYERED_GENERATION,
    Canonical,
    Capabilities,
    LayeredDocument,
    Normalized,
    Persona,
    Sources,
    Subject,
    UISettings,
    create_empty_layered_document,
    is_layered_document,
    utc_now,
)
from aimkit.schema.legacy import (
    LEGACY_GENERATION,
    Abilities,
    Appearance,
    Backstory,
    Behavior,
    LegacyDocument,
    Personality,
    Relationship,
    Skill,
    SocialStyle,
)

__all__ = [
    "LAYERED_GENERATION",
    "LEGACY_GENERATION",
    "Abilities",
    "Alignment",
    "Appearance",
    "Backstory",
    "Behavior",
    "Canonical",
    "Capabilities",
    "DocumentModel",
    "Goals",
    "LayeredDocument",
    "LegacyDocument",
    "Normalized",
    "Persona",
    "Personality",
    "Relationship",
    "Skill",
    "SocialStyle",
    "Sources",
    "Subject",
    "UISettings",
    "create_empty_layered_document",
    "is_layered_document",
    "utc_now",
]
