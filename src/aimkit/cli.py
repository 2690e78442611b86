"""Command-line interface for aimkit."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, TextIO

from aimkit import __version__
from aimkit.config import get_settings
from aimkit.logging_config import configure_logging
from aimkit.migration.batch import migrate_all
from aimkit.migration.migrator import MigrationOptions, MigrationResult
from aimkit.storage.document_store import (
    DocumentStoreError,
    LayeredDocumentStore,
    LegacyDocumentStore,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aimkit",
        description="Migrate legacy character profiles to the layered format",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Migrate legacy documents from a JSON file",
    )
    migrate_parser.add_argument(
        "input",
        type=Path,
        help="JSON file holding one legacy document or a list of them",
    )
    migrate_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Where to write migrated documents (default: stdout)",
    )
    _add_option_arguments(migrate_parser)

    store_parser = subparsers.add_parser(
        "migrate-store",
        help="Migrate every stored legacy document into the layered collection",
    )
    store_parser.add_argument(
        "--storage-dir",
        type=Path,
        default=None,
        help="Storage root (default: AIM_STORAGE_DIR or data/aim)",
    )
    store_parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Replace layered documents that already exist (default: skip them)",
    )
    _add_option_arguments(store_parser)

    return parser


def _add_option_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--preserve-ids",
        action="store_true",
        default=None,
        help="Keep legacy ids instead of prefixing them with 'migrated-'",
    )
    parser.add_argument("--chain", default=None, help="Chain recorded on migrated subjects")
    parser.add_argument("--contract", default=None, help="Contract recorded on migrated subjects")


def _resolve_options(parsed: argparse.Namespace) -> MigrationOptions:
    options = get_settings().migration_options()
    updates = {}
    if parsed.preserve_ids is not None:
        updates["preserve_original_id"] = parsed.preserve_ids
    if parsed.chain is not None:
        updates["default_chain"] = parsed.chain
    if parsed.contract is not None:
        updates["default_contract"] = parsed.contract
    return options.model_copy(update=updates)


def _print_details(ids: list[str], results: list[MigrationResult], out: TextIO) -> None:
    for doc_id, result in zip(ids, results, strict=True):
        for warning in result.warnings:
            print(f"  warning [{doc_id}]: {warning}", file=out)
        for error in result.errors:
            print(f"  error [{doc_id}]: {error}", file=out)


def _print_summary(migrated: int, failed: int, out: TextIO, skipped: int = 0) -> None:
    line = f"Migrated {migrated} document(s), {failed} failed"
    if skipped:
        line += f", {skipped} skipped"
    print(line, file=out)


def _run_migrate(parsed: argparse.Namespace) -> int:
    try:
        data = json.loads(parsed.input.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Could not read {parsed.input}: {e}", file=sys.stderr)
        return 2

    docs = data if isinstance(data, list) else [data]
    batch = migrate_all(docs, _resolve_options(parsed))

    migrated = [
        result.document.model_dump(mode="json", by_alias=True)
        for result in batch.results
        if result.document is not None
    ]
    payload = json.dumps(migrated, indent=2, ensure_ascii=False)
    if parsed.output is None:
        print(payload)
        report_to = sys.stderr
    else:
        parsed.output.write_text(payload + "\n", encoding="utf-8")
        report_to = sys.stdout

    ids = [str(doc.get("id", "?")) if isinstance(doc, dict) else "?" for doc in docs]
    _print_details(ids, batch.results, report_to)
    _print_summary(batch.summary.success, batch.summary.failed, report_to)
    return 0 if batch.summary.failed == 0 else 1


def _run_migrate_store(parsed: argparse.Namespace) -> int:
    storage_dir = parsed.storage_dir or get_settings().storage_dir
    legacy_store = LegacyDocumentStore(storage_dir)
    layered_store = LayeredDocumentStore(storage_dir)

    # Raw mappings, so documents that fail validation are migrated (and
    # reported) as failures instead of being dropped on load.
    doc_ids: list[str] = []
    docs: list[dict[str, Any]] = []
    unreadable = 0
    for doc_id in legacy_store.list_ids():
        try:
            docs.append(legacy_store.load_raw(doc_id))
        except DocumentStoreError as e:
            print(f"  error [{doc_id}]: {e}")
            logger.error("Unreadable legacy document", extra={"document_id": doc_id})
            unreadable += 1
            continue
        doc_ids.append(doc_id)

    batch = migrate_all(docs, _resolve_options(parsed))
    _print_details(doc_ids, batch.results, sys.stdout)

    saved = skipped = failed_saves = 0
    for doc_id, result in zip(doc_ids, batch.results, strict=True):
        document = result.document
        if document is None:
            continue
        if not parsed.overwrite and layered_store.exists(document.id):
            print(f"  skipped [{doc_id}]: {document.id} already exists")
            skipped += 1
            continue
        try:
            layered_store.save(document)
        except DocumentStoreError as e:
            print(f"  error [{doc_id}]: {e}")
            logger.error("Could not save migrated document", extra={"document_id": document.id})
            failed_saves += 1
            continue
        saved += 1

    failed = batch.summary.failed + unreadable + failed_saves
    _print_summary(saved, failed, sys.stdout, skipped=skipped)
    logger.info(
        "Store migration finished",
        extra={"saved": saved, "skipped": skipped, "failed": failed},
    )
    return 0 if failed == 0 else 1


def main(args: list[str] | None = None) -> int:
    """Run the aimkit CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 when every document migrated).
    """
    parsed = _build_parser().parse_args(args)
    configure_logging()

    if parsed.command == "migrate":
        return _run_migrate(parsed)
    return _run_migrate_store(parsed)


if __name__ == "__main__":
    sys.exit(main())
