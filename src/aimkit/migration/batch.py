"""Apply :func:`~aimkit.migration.migrator.migrate` across many documents."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from aimkit.migration.migrator import MigrationOptions, MigrationResult, migrate
from aimkit.schema.legacy import LegacyDocument

logger = logging.getLogger(__name__)


class BatchSummary(BaseModel):
    success: int = 0
    failed: int = 0


class BatchMigrationResult(BaseModel):
    """Per-document results, positionally aligned with the input, plus a tally."""

    results: list[MigrationResult] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)


def migrate_all(
    docs: Iterable[LegacyDocument | Mapping[str, Any]],
    options: MigrationOptions | None = None,
) -> BatchMigrationResult:
    """Migrate each document independently, in input order.

    A failing document is recorded as a failed result; it never stops the
    rest of the batch.
    """
    batch = BatchMigrationResult()
    for doc in docs:
        result = migrate(doc, options)
        batch.results.append(result)
        if result.success:
            batch.summary.success += 1
        else:
            batch.summary.failed += 1

    logger.info(
        "Batch migration finished",
        extra={"succeeded": batch.summary.success, "failed": batch.summary.failed},
    )
    return batch
