"""Settings for the aimkit command-line tools and document stores.

Loaded from environment variables (``AIM_`` prefix) and an optional ``.env``
file. The migration core never reads settings itself; callers turn them into
explicit :class:`~aimkit.migration.migrator.MigrationOptions`.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from aimkit.migration.migrator import DEFAULT_CHAIN, DEFAULT_CONTRACT, MigrationOptions

logger = logging.getLogger(__name__)


class AimSettings(BaseSettings):
    """Configuration for migrations and local document storage.

    Environment Variables:
        AIM_DEFAULT_CHAIN: Chain recorded on migrated subjects (default: ethereum)
        AIM_DEFAULT_CONTRACT: Contract recorded on migrated subjects (default: unknown)
        AIM_PRESERVE_ORIGINAL_ID: Keep legacy ids instead of prefixing them (default: false)
        AIM_STORAGE_DIR: Root directory for stored documents (default: data/aim)

    Example:
        >>> settings = AimSettings()  # Loads from environment
        >>> settings.migration_options().default_chain
        'ethereum'
    """

    model_config = SettingsConfigDict(
        env_prefix="AIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_chain: str = Field(
        default=DEFAULT_CHAIN,
        description="Chain recorded on migrated subjects",
    )
    default_contract: str = Field(
        default=DEFAULT_CONTRACT,
        description="Contract recorded on migrated subjects",
    )
    preserve_original_id: bool = Field(
        default=False,
        description="Keep legacy document ids during migration",
    )
    storage_dir: Path = Field(
        default=Path("data/aim"),
        description="Root directory for stored documents",
    )

    @field_validator("default_chain", "default_contract", mode="before")
    @classmethod
    def normalize_identifier(cls, v: object) -> object:
        """Strip whitespace; blank values fall back to defaults at migration time."""
        if isinstance(v, str):
            return v.strip()
        return v

    def migration_options(self) -> MigrationOptions:
        """Build migration options from these settings."""
        return MigrationOptions(
            preserve_original_id=self.preserve_original_id,
            default_chain=self.default_chain,
            default_contract=self.default_contract,
        )


@lru_cache
def get_settings() -> AimSettings:
    """Get cached settings singleton.

    Call ``get_settings.cache_clear()`` to reload from the environment.
    """
    settings = AimSettings()
    logger.info(
        "Loaded settings: chain=%s, contract=%s, storage_dir=%s",
        settings.default_chain,
        settings.default_contract,
        settings.storage_dir,
    )
    return settings
