"""JSON-file persistence for both document generations."""

from aimkit.storage.document_store import (
    DocumentStore,
    DocumentStoreError,
    LayeredDocumentStore,
    LegacyDocumentStore,
)

__all__ = [
    "DocumentStore",
    "DocumentStoreError",
    "LayeredDocumentStore",
    "LegacyDocumentStore",
]
