"""Persistence layer for character profile documents.

Each document generation lives in its own collection directory under a
storage root, one ``<id>.json`` file per document::

    data/aim/aim-v1/<id>.json   legacy documents
    data/aim/aim-v2/<id>.json   layered documents

Files hold exactly the stored (camelCase) document shape, so
:meth:`DocumentStore.export_text` output can be re-imported with
:meth:`DocumentStore.import_text`.
"""

import json
import logging
from pathlib import Path
from typing import Any, ClassVar

from pydantic import ValidationError

from aimkit.migration.conflicts import find_conflicts
from aimkit.schema.common import DocumentModel
from aimkit.schema.layered import (
    LAYERED_GENERATION,
    LayeredDocument,
    is_layered_document,
    utc_now,
)
from aimkit.schema.legacy import LEGACY_GENERATION, LegacyDocument

logger = logging.getLogger(__name__)


class DocumentStoreError(Exception):
    """Exception raised when document store operations fail."""

    pass


class DocumentStore:
    """Base JSON-file store for one document collection.

    Subclasses set ``COLLECTION`` and ``MODEL`` and may override
    :meth:`_stamp`, :meth:`_check_before_save` and :meth:`_check_import`.
    """

    DEFAULT_STORAGE_DIR = "data/aim"
    STAMPED_FIELDS: ClassVar[tuple[str, ...]] = ("updated_at",)
    COLLECTION: ClassVar[str] = ""
    MODEL: ClassVar[type[DocumentModel]] = DocumentModel

    def __init__(self, storage_dir: str | Path | None = None) -> None:
        """Initialize the store.

        Args:
            storage_dir: Storage root. If not provided, uses
                DEFAULT_STORAGE_DIR relative to the current working directory.
        """
        root = Path(self.DEFAULT_STORAGE_DIR) if storage_dir is None else Path(storage_dir)
        self._collection_dir = root / self.COLLECTION

    @property
    def collection_dir(self) -> Path:
        return self._collection_dir

    def _validate_document_id(self, document_id: str) -> None:
        """Reject ids that are empty or unsafe as file names.

        Raises:
            DocumentStoreError: If the id is invalid.
        """
        if not document_id or not document_id.strip():
            raise DocumentStoreError("Document ID cannot be empty")

        if not all(c.isalnum() or c in ("_", "-", ".") for c in document_id):
            raise DocumentStoreError(
                f"Document ID '{document_id}' contains invalid characters. "
                "Only alphanumeric characters, underscores, hyphens and dots are allowed."
            )

        if ".." in document_id or document_id.startswith("."):
            raise DocumentStoreError(
                f"Document ID '{document_id}' contains invalid path characters"
            )

    def _get_document_path(self, document_id: str) -> Path:
        self._validate_document_id(document_id)
        return self._collection_dir / f"{document_id}.json"

    def _load_from_file(self, path: Path) -> Any:
        """Load and validate a document file.

        Raises:
            DocumentStoreError: If reading or parsing fails.
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            return self.MODEL.model_validate(data)
        except json.JSONDecodeError as e:
            raise DocumentStoreError(f"Invalid JSON in document file '{path}': {e}") from e
        except Exception as e:
            raise DocumentStoreError(f"Failed to load document from '{path}': {e}") from e

    def _stamp(self, document: Any) -> None:
        """Update bookkeeping fields right before a save."""
        document.updated_at = utc_now()

    def _check_before_save(self, document: Any) -> None:
        """Hook to refuse a write. Raises DocumentStoreError."""

    def _check_import(self, data: dict[str, Any]) -> None:
        """Hook for minimal required-field validation on import."""

    def list_ids(self) -> list[str]:
        """List stored document ids, sorted alphabetically."""
        if not self._collection_dir.exists():
            return []
        return [path.stem for path in sorted(self._collection_dir.glob("*.json"))]

    def list_all(self) -> list[Any]:
        """Load every readable document in the collection, sorted by id.

        Unreadable files are logged and skipped.
        """
        if not self._collection_dir.exists():
            return []

        documents = []
        for path in sorted(self._collection_dir.glob("*.json")):
            try:
                documents.append(self._load_from_file(path))
            except DocumentStoreError as e:
                logger.warning("Could not load document from %s: %s", path, e)
        return documents

    def load_raw(self, document_id: str) -> dict[str, Any]:
        """Read a stored document as a plain mapping, without schema validation.

        Lets callers report schema problems per document instead of losing
        them the way :meth:`list_all` does.

        Raises:
            DocumentStoreError: If the file is missing, not JSON, or not an object.
        """
        path = self._get_document_path(document_id)
        if not path.exists():
            raise DocumentStoreError(f"Document '{document_id}' not found in {self.COLLECTION}")
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise DocumentStoreError(f"Could not read document file '{path}': {e}") from e
        if not isinstance(data, dict):
            raise DocumentStoreError(f"Document file '{path}' does not hold a JSON object")
        return data

    def exists(self, document_id: str) -> bool:
        try:
            return self._get_document_path(document_id).exists()
        except DocumentStoreError:
            return False

    def get(self, document_id: str) -> Any:
        """Load a document by id.

        Raises:
            DocumentStoreError: If the document doesn't exist or can't be read.
        """
        path = self._get_document_path(document_id)
        if not path.exists():
            raise DocumentStoreError(f"Document '{document_id}' not found in {self.COLLECTION}")
        return self._load_from_file(path)

    def save(self, document: Any) -> Any:
        """Stamp and persist a document, replacing any previous copy.

        The passed document receives the stamped fields only once the write
        has succeeded.

        Returns:
            The saved document.

        Raises:
            DocumentStoreError: If the document is refused or the write fails.
        """
        if not isinstance(document, self.MODEL):
            raise DocumentStoreError(
                f"{type(self).__name__} stores {self.MODEL.__name__}, "
                f"got {type(document).__name__}"
            )
        path = self._get_document_path(document.id)
        self._check_before_save(document)
        staged = document.model_copy(deep=True)
        self._stamp(staged)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(
                    staged.model_dump(mode="json", by_alias=True),
                    f,
                    indent=2,
                    ensure_ascii=False,
                )
        except OSError as e:
            raise DocumentStoreError(f"Failed to save document '{document.id}': {e}") from e

        for name in self.STAMPED_FIELDS:
            setattr(document, name, getattr(staged, name))
        logger.info("Saved %s document %s", self.COLLECTION, document.id)
        return document

    def delete(self, document_id: str) -> None:
        """Delete a document.

        Raises:
            DocumentStoreError: If the document doesn't exist or delete fails.
        """
        path = self._get_document_path(document_id)
        if not path.exists():
            raise DocumentStoreError(f"Document '{document_id}' not found in {self.COLLECTION}")

        try:
            path.unlink()
        except OSError as e:
            raise DocumentStoreError(f"Failed to delete document '{document_id}': {e}") from e
        logger.info("Deleted %s document %s", self.COLLECTION, document_id)

    def export_text(self, document_id: str) -> str:
        """Serialize a stored document as pretty-printed JSON text."""
        document = self.get(document_id)
        return json.dumps(
            document.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
        )

    def import_text(self, text: str) -> Any:
        """Parse exported JSON text back into a document without saving it.

        Raises:
            DocumentStoreError: If the text is not valid JSON, lacks the
                required fields, or fails schema validation.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DocumentStoreError(f"Failed to parse {self.COLLECTION} document: {e}") from e

        if not isinstance(data, dict):
            raise DocumentStoreError(
                f"Invalid {self.COLLECTION} document format: expected an object"
            )
        self._check_import(data)

        try:
            return self.MODEL.model_validate(data)
        except ValidationError as e:
            raise DocumentStoreError(f"Invalid {self.COLLECTION} document: {e}") from e


class LegacyDocumentStore(DocumentStore):
    """Store for legacy flat documents.

    Every save bumps the string ``version`` counter.
    """

    COLLECTION = LEGACY_GENERATION
    MODEL = LegacyDocument
    STAMPED_FIELDS = ("updated_at", "version", "created_at")
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("id", "oraNumber", "characterName")

    def _stamp(self, document: LegacyDocument) -> None:
        super()._stamp(document)
        try:
            current = int(document.version or "0")
        except ValueError:
            logger.warning(
                "Document %s has non-numeric version %r, restarting count",
                document.id,
                document.version,
            )
            current = 0
        document.version = str(current + 1)
        if not document.created_at:
            document.created_at = document.updated_at

    def _check_import(self, data: dict[str, Any]) -> None:
        missing = [name for name in self.REQUIRED_FIELDS if not data.get(name)]
        if missing:
            raise DocumentStoreError(
                f"Invalid {self.COLLECTION} document format: missing {', '.join(missing)}"
            )

    def get_by_ora_number(self, ora_number: str) -> LegacyDocument | None:
        """Find the first stored document for an external subject number."""
        for document in self.list_all():
            if document.ora_number == ora_number:
                return document
        return None


class LayeredDocumentStore(DocumentStore):
    """Store for layered documents.

    Refuses to write a document whose ``persona.traitsAdd`` shares a key with
    ``canonical.traits``.
    """

    COLLECTION = LAYERED_GENERATION
    MODEL = LayeredDocument

    def _check_before_save(self, document: LayeredDocument) -> None:
        conflicts = find_conflicts(document.canonical.traits, document.persona.traits_add)
        if conflicts:
            raise DocumentStoreError(
                f"Document '{document.id}' has persona traits overriding canonical traits: "
                f"{', '.join(conflicts)}"
            )

    def _check_import(self, data: dict[str, Any]) -> None:
        if not is_layered_document(data):
            raise DocumentStoreError(
                f"Invalid {self.COLLECTION} document format: expected version "
                f"'{LAYERED_GENERATION}' with id, subject and canonical"
            )
