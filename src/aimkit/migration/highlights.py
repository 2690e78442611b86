"""Pick which persona keys get emphasized ("crystallized") in the UI."""

from aimkit.schema.legacy import LegacyDocument

CRYSTALLIZABLE_KEYS = ("primary_traits", "special_powers", "alignment")


def suggest_crystallized_keys(doc: LegacyDocument) -> list[str]:
    """Suggest crystallized keys from which legacy fields are populated.

    Alignment is normally always present, but documents that skipped
    validation may lack it.
    """
    populated = {
        "primary_traits": bool(doc.personality.primary_traits),
        "special_powers": bool(doc.abilities.special_powers),
        "alignment": bool(doc.personality.alignment),
    }
    return [key for key in CRYSTALLIZABLE_KEYS if populated[key]]
