"""Derive supplementary persona traits from structured legacy fields.

The produced keys are lower-case snake_case names chosen not to clash with
marketplace trait names (which are typically title-case, e.g. "Background").
That is an assumption about external data, not something checked here; the
migrator still runs the result through the conflict validator.
"""

from aimkit.migration.lore import LIST_SEPARATOR
from aimkit.schema.legacy import LegacyDocument

TRAIT_KEYS = (
    "primary_traits",
    "secondary_traits",
    "strengths",
    "special_powers",
    "social_style",
    "height",
    "build",
)


def extract_traits(doc: LegacyDocument) -> dict[str, str]:
    """Extract a sparse trait map from a legacy document.

    List fields are comma-joined, scalar fields copied as-is. Empty fields
    produce no key.
    """
    candidates: dict[str, list[str] | str | None] = {
        "primary_traits": doc.personality.primary_traits,
        "secondary_traits": doc.personality.secondary_traits,
        "strengths": doc.abilities.strengths,
        "special_powers": doc.abilities.special_powers,
        "social_style": doc.behavior.social_style,
        "height": doc.appearance.height,
        "build": doc.appearance.build,
    }

    traits: dict[str, str] = {}
    for key in TRAIT_KEYS:
        value = candidates[key]
        if not value:
            continue
        if isinstance(value, list):
            traits[key] = LIST_SEPARATOR.join(value)
        else:
            traits[key] = str(value)
    return traits
