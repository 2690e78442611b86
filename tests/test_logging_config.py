"""Tests for logging configuration module."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from io import StringIO
from typing import Any
from unittest.mock import patch

import pytest

from aimkit.logging_config import (
    JSONFormatter,
    TextFormatter,
    configure_logging,
    format_from_env,
    level_from_env,
    record_context,
)
from aimkit.migration.batch import migrate_all
from aimkit.migration.migrator import migrate


def _record(level: int = logging.INFO, **extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="aimkit.migration.migrator",
        level=level,
        pathname="migrator.py",
        lineno=10,
        msg="Migrated %s",
        args=("a1",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def captured() -> Iterator[StringIO]:
    """Route aimkit logs as JSON lines into a buffer."""
    stream = StringIO()
    configure_logging(level=logging.DEBUG, format_type="json", stream=stream)
    yield stream
    package_logger = logging.getLogger("aimkit")
    package_logger.handlers.clear()
    package_logger.propagate = True


def _entries(stream: StringIO) -> list[dict[str, object]]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestEnvironment:
    """Tests for LOG_LEVEL / LOG_FORMAT handling."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("DEBUG", logging.DEBUG),
            ("warn", logging.WARNING),
            ("error", logging.ERROR),
            ("NOTSET", logging.INFO),
            ("bogus", logging.INFO),
        ],
    )
    def test_level_from_env(self, value: str, expected: int) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": value}):
            assert level_from_env() == expected

    def test_level_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert level_from_env() == logging.INFO

    def test_format_from_env(self) -> None:
        with patch.dict(os.environ, {"LOG_FORMAT": "JSON"}):
            assert format_from_env() == "json"
        with patch.dict(os.environ, {"LOG_FORMAT": "xml"}):
            assert format_from_env() == "text"


class TestFormatters:
    """Tests for context rendering in both formatters."""

    def test_record_context_only_extra_fields(self) -> None:
        assert record_context(_record(document_id="a1", failed=0)) == {
            "document_id": "a1",
            "failed": 0,
        }
        assert record_context(_record()) == {}

    def test_json_puts_context_at_top_level(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(document_id="a1")))
        assert entry["message"] == "Migrated a1"
        assert entry["level"] == "INFO"
        assert entry["document_id"] == "a1"

    def test_json_context_never_replaces_core_fields(self) -> None:
        record = _record()
        record.level = "shadow"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "INFO"

    def test_text_appends_key_values(self) -> None:
        line = TextFormatter().format(_record(migrated_id="migrated-a1", document_id="a1"))
        assert line == (
            "INFO     [migration.migrator] Migrated a1 document_id=a1 migrated_id=migrated-a1"
        )


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_replaces_handlers(self) -> None:
        configure_logging(level=logging.WARNING, format_type="text")
        package_logger = configure_logging(level=logging.DEBUG, format_type="json")
        try:
            assert len(package_logger.handlers) == 1
            assert isinstance(package_logger.handlers[0].formatter, JSONFormatter)
            assert package_logger.level == logging.DEBUG
            assert package_logger.propagate is False
        finally:
            package_logger.handlers.clear()
            package_logger.propagate = True

    def test_migration_logs_document_context(
        self, legacy_payload: dict[str, Any], captured: StringIO
    ) -> None:
        migrate(legacy_payload)
        entries = _entries(captured)
        done = [e for e in entries if e["message"] == "Migrated legacy document"]
        assert len(done) == 1
        assert done[0]["document_id"] == "a1"
        assert done[0]["migrated_id"] == "migrated-a1"
        assert done[0]["warning_count"] == 0

    def test_failed_migration_logs_document_id(
        self, legacy_payload: dict[str, Any], captured: StringIO
    ) -> None:
        del legacy_payload["personality"]
        migrate(legacy_payload)
        failures = [e for e in _entries(captured) if e["level"] == "WARNING"]
        assert failures[0]["document_id"] == "a1"
        assert str(failures[0]["message"]).startswith("Migration failed")

    def test_batch_logs_tally(self, legacy_payload: dict[str, Any], captured: StringIO) -> None:
        migrate_all([legacy_payload, {"id": "broken"}])
        tally = [e for e in _entries(captured) if e["message"] == "Batch migration finished"]
        assert tally[0]["succeeded"] == 1
        assert tally[0]["failed"] == 1
