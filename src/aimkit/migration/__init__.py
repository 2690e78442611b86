"""Legacy to layered document migration and trait conflict handling."""

from aimkit.migration.batch import BatchMigrationResult, BatchSummary, migrate_all
from aimkit.migration.conflicts import (
    add_traits,
    find_conflicts,
    remove_traits,
    resolve_conflicts,
)
from aimkit.migration.highlights import CRYSTALLIZABLE_KEYS, suggest_crystallized_keys
from aimkit.migration.lore import compose_lore
from aimkit.migration.migrator import (
    WARNING_LIMITED_BACKSTORY,
    WARNING_NO_TEMPERAMENT,
    MigrationOptions,
    MigrationResult,
    migrate,
)
from aimkit.migration.traits import TRAIT_KEYS, extract_traits

__all__ = [
    "CRYSTALLIZABLE_KEYS",
    "TRAIT_KEYS",
    "WARNING_LIMITED_BACKSTORY",
    "WARNING_NO_TEMPERAMENT",
    "BatchMigrationResult",
    "BatchSummary",
    "MigrationOptions",
    "MigrationResult",
    "add_traits",
    "compose_lore",
    "extract_traits",
    "find_conflicts",
    "migrate",
    "migrate_all",
    "remove_traits",
    "resolve_conflicts",
    "suggest_crystallized_keys",
]
