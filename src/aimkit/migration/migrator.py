"""Legacy ("aim-v1") to layered ("aim-2") document migration.

:func:`migrate` is the single entry point. It never raises: every outcome,
including malformed input, comes back as a :class:`MigrationResult` and
callers branch on ``result.success``.

Example:
    >>> result = migrate({"id": "a1", "characterName": "Nyx", ...})
    >>> if result.success:
    ...     store.save(result.document)
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from aimkit.migration.conflicts import resolve_conflicts
from aimkit.migration.highlights import suggest_crystallized_keys
from aimkit.migration.lore import compose_lore
from aimkit.migration.traits import extract_traits
from aimkit.schema.common import Goals
from aimkit.schema.layered import (
    Canonical,
    LayeredDocument,
    Normalized,
    Persona,
    Sources,
    Subject,
    UISettings,
    create_empty_layered_document,
    utc_now,
)
from aimkit.schema.legacy import LEGACY_GENERATION, LegacyDocument

logger = logging.getLogger(__name__)

MIGRATED_ID_PREFIX = "migrated-"
DEFAULT_CHAIN = "ethereum"
DEFAULT_CONTRACT = "unknown"
UNKNOWN_COLLECTION = "Unknown Collection"
MAX_HIGHLIGHTS = 3

WARNING_NO_TEMPERAMENT = "no personality temperament found, tone will be empty"
WARNING_LIMITED_BACKSTORY = "limited backstory data available for lore"


class MigrationOptions(BaseModel):
    """Knobs for a single migration.

    Attributes:
        preserve_original_id: Keep the legacy id instead of prefixing it
            with ``"migrated-"``.
        default_chain: Chain recorded on the subject.
        default_contract: Contract recorded on the subject.
        generate_token_id: Accepted for compatibility; has no effect. The
            token id is always the legacy subject number.
    """

    preserve_original_id: bool = False
    default_chain: str = DEFAULT_CHAIN
    default_contract: str = DEFAULT_CONTRACT
    generate_token_id: bool = False


class MigrationResult(BaseModel):
    """Outcome of one migration.

    ``document`` is set only when ``success`` is True.
    """

    success: bool
    document: LayeredDocument | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def migrate(
    doc: LegacyDocument | Mapping[str, Any],
    options: MigrationOptions | None = None,
) -> MigrationResult:
    """Migrate a legacy document into a fresh layered document.

    The input is never modified. Canonical traits are left empty: they must
    come from the external attribute source, not from user-authored content.

    Args:
        doc: Legacy document, or its stored mapping form.
        options: Migration options; defaults apply when omitted.

    Returns:
        MigrationResult with the document and advisory warnings on success,
        or a single error message on failure.
    """
    options = options or MigrationOptions()

    try:
        legacy = doc if isinstance(doc, LegacyDocument) else LegacyDocument.model_validate(doc)
        document = _build_document(legacy, options)
        warnings = _collect_warnings(legacy)
    except Exception as e:
        message = f"Migration failed: {_describe_error(e)}"
        logger.warning(message, extra={"document_id": _document_id(doc)})
        return MigrationResult(success=False, errors=[message], warnings=[])

    for warning in warnings:
        logger.debug(warning, extra={"document_id": legacy.id})
    logger.info(
        "Migrated legacy document",
        extra={
            "document_id": legacy.id,
            "migrated_id": document.id,
            "warning_count": len(warnings),
        },
    )

    return MigrationResult(success=True, document=document, errors=[], warnings=warnings)


def _build_document(legacy: LegacyDocument, options: MigrationOptions) -> LayeredDocument:
    document_id = (
        legacy.id if options.preserve_original_id else f"{MIGRATED_ID_PREFIX}{legacy.id}"
    )
    document = create_empty_layered_document(document_id)
    now = utc_now()

    document.created_at = legacy.created_at or document.created_at
    document.updated_at = now

    # generate_token_id is deliberately ignored.
    document.subject = Subject(
        chain=options.default_chain or DEFAULT_CHAIN,
        contract=options.default_contract or DEFAULT_CONTRACT,
        token_id=legacy.ora_number,
        owner=None,
        collection_name=legacy.ora_name or UNKNOWN_COLLECTION,
    )

    # Metadata URI, hash and marketplace URL are unknown until the attribute
    # source is queried.
    document.sources = Sources(
        metadata_uri="",
        fetched_at=document.created_at,
        metadata_hash="",
        image=legacy.ora_image,
        opensea_url="",
    )

    document.canonical = Canonical(traits={}, raw=None)

    traits_add, conflicts = resolve_conflicts(document.canonical.traits, extract_traits(legacy))
    document.normalized = Normalized(traits={}, conflicts=conflicts)

    goals = legacy.goals.model_copy(deep=True) if legacy.goals is not None else Goals()
    document.persona = Persona(
        title=legacy.character_name,
        nickname=legacy.nickname,
        alignment=legacy.personality.alignment,
        tone=legacy.personality.temperament or "",
        tags=list(legacy.tags),
        lore=compose_lore(legacy),
        goals=goals,
        traits_add=traits_add,
    )

    document.ui = UISettings(
        crystallized_keys=suggest_crystallized_keys(legacy),
        locked_keys=[],
        highlights=list(legacy.personality.primary_traits[:MAX_HIGHLIGHTS]),
        theme=None,
    )

    document.meta = {
        "notes": legacy.notes,
        "version": legacy.version,
        "migratedFrom": LEGACY_GENERATION,
        "migrationDate": now,
    }
    return document


def _collect_warnings(legacy: LegacyDocument) -> list[str]:
    warnings = []
    if not legacy.personality.temperament:
        warnings.append(WARNING_NO_TEMPERAMENT)
    if not legacy.backstory.origin and not legacy.backstory.childhood:
        warnings.append(WARNING_LIMITED_BACKSTORY)
    return warnings


def _describe_error(error: Exception) -> str:
    """Turn an exception into a message naming the offending field where possible."""
    if isinstance(error, ValidationError):
        details = []
        for item in error.errors():
            location = ".".join(str(part) for part in item["loc"]) or "document"
            details.append(f"{location}: {item['msg']}")
        return "; ".join(details)
    if isinstance(error, AttributeError) and error.name:
        return f"missing required field '{error.name}'"
    return str(error) or type(error).__name__


def _document_id(doc: Any) -> str:
    if isinstance(doc, LegacyDocument):
        return str(getattr(doc, "id", "<no id>"))
    if isinstance(doc, Mapping):
        return str(doc.get("id", "<no id>"))
    return "<unknown>"
