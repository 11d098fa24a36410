"""In-memory session state for uploaded documents and their placed fields."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import threading
from typing import Any

from docsign.logging.logger import Log
from docsign.model.document import DocumentIdentity, SourceDocument
from docsign.model.field import PlacedField


class FieldTrackingStore:
    """Maps a document identity to its ordered list of placed fields.

    Every write replaces the whole list for one identity and the last writer
    wins; lists are never merged. Readers always see either the previous or
    the next complete list.
    """

    def __init__(self) -> None:
        self._fields: dict[DocumentIdentity, tuple[PlacedField, ...]] = {}
        self._lock = threading.Lock()

    def set_fields(self, document: SourceDocument, fields: Iterable[PlacedField]) -> None:
        snapshot = tuple(fields)
        with self._lock:
            self._fields[document.identity] = snapshot
        Log.debug(f"Stored {len(snapshot)} field(s) for {document.identity}")

    def get_fields(self, document: SourceDocument) -> list[PlacedField]:
        with self._lock:
            return list(self._fields.get(document.identity, ()))

    def remove_all(self, document: SourceDocument) -> None:
        with self._lock:
            self._fields.pop(document.identity, None)

    def has_fields(self, document: SourceDocument) -> bool:
        return len(self.get_fields(document)) > 0

    def count(self, document: SourceDocument) -> int:
        return len(self.get_fields(document))

    def fill_value(self, document: SourceDocument, field_id: str, value: str | None) -> bool:
        """Set the value of one placed field; returns False for an unknown id."""
        with self._lock:
            current = self._fields.get(document.identity, ())
            if not any(placed.id == field_id for placed in current):
                return False
            self._fields[document.identity] = tuple(
                placed.with_value(value) if placed.id == field_id else placed
                for placed in current
            )
        return True


@dataclass(slots=True)
class SigningSession:
    """Session root: owns the uploaded documents and the field store."""

    store: FieldTrackingStore = field(default_factory=FieldTrackingStore)
    documents: list[SourceDocument] = field(default_factory=list)
    previews: dict[DocumentIdentity, Any] = field(default_factory=dict)

    def add_documents(self, documents: Sequence[SourceDocument]) -> None:
        self.documents.extend(documents)

    def contains(self, document: SourceDocument) -> bool:
        return any(existing is document for existing in self.documents)

    def remove_document(self, document: SourceDocument) -> None:
        self.documents = [existing for existing in self.documents if existing is not document]
        # Another upload may share the identity key; only drop state once none does.
        if not any(existing.identity == document.identity for existing in self.documents):
            self.store.remove_all(document)
            self.previews.pop(document.identity, None)
        Log.info(f"Removed document {document.name}")

    def commit_preview(self, document: SourceDocument, preview: Any) -> bool:
        """Store a decoded preview unless the document was removed meanwhile."""
        if not self.contains(document):
            Log.debug(f"Discarding preview for removed document {document.name}")
            return False
        self.previews[document.identity] = preview
        return True

    def preview_for(self, document: SourceDocument) -> Any | None:
        return self.previews.get(document.identity)
