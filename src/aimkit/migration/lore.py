"""Compose the persona lore paragraph block from legacy narrative fields."""

from aimkit.schema.legacy import LegacyDocument

# Label strings and their order are read back by consumers; keep them stable.
PARAGRAPH_SEPARATOR = "\n\n"
LIST_SEPARATOR = ", "


def compose_lore(doc: LegacyDocument) -> str:
    """Build the consolidated lore string for a legacy document.

    Emits, in order and only when non-empty: origin, childhood, formative
    events, speech patterns and distinctive features, one paragraph each.

    Args:
        doc: Legacy document to read from.

    Returns:
        Blank-line separated paragraphs, or an empty string.
    """
    backstory = doc.backstory
    paragraphs = []

    if backstory.origin:
        paragraphs.append(f"Origin: {backstory.origin}")
    if backstory.childhood:
        paragraphs.append(f"Childhood: {backstory.childhood}")
    if backstory.formative_events:
        paragraphs.append(f"Key Events: {LIST_SEPARATOR.join(backstory.formative_events)}")
    if doc.behavior.speech_patterns:
        paragraphs.append(f"Speech: {doc.behavior.speech_patterns}")
    if doc.appearance.distinctive_features:
        paragraphs.append(
            f"Appearance: {LIST_SEPARATOR.join(doc.appearance.distinctive_features)}"
        )

    return PARAGRAPH_SEPARATOR.join(paragraphs)
