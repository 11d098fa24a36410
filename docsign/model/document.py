"""Source document model: uploaded bytes, kind detection and session identity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import cached_property
import hashlib
from pathlib import PurePath


class DocumentKind(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    TEXT = "text"
    WORD = "word"
    PRESENTATION = "presentation"
    SPREADSHEET = "spreadsheet"
    OTHER = "other"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def previewable(self) -> bool:
        return self in {DocumentKind.PDF, DocumentKind.IMAGE, DocumentKind.TEXT}

    @property
    def paged(self) -> bool:
        return self is DocumentKind.PDF


_DESCRIPTIONS: dict[DocumentKind, str] = {
    DocumentKind.PDF: "PDF Document",
    DocumentKind.IMAGE: "Image File",
    DocumentKind.TEXT: "Text Document",
    DocumentKind.WORD: "Word Document",
    DocumentKind.PRESENTATION: "PowerPoint Presentation",
    DocumentKind.SPREADSHEET: "Excel Spreadsheet",
    DocumentKind.OTHER: "Document",
}

ACCEPTED_FILE_TYPES: dict[str, tuple[str, ...]] = {
    "application/pdf": (".pdf",),
    "application/msword": (".doc",),
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": (".docx",),
    "text/plain": (".txt",),
    "application/rtf": (".rtf",),
    "application/vnd.oasis.opendocument.text": (".odt",),
    "application/vnd.ms-powerpoint": (".ppt",),
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": (".pptx",),
    "application/vnd.ms-excel": (".xls",),
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": (".xlsx",),
    "image/jpeg": (".jpg", ".jpeg"),
    "image/png": (".png",),
    "image/tiff": (".tiff",),
    "image/gif": (".gif",),
}


def classify(mime_type: str, filename: str) -> DocumentKind:
    mime = (mime_type or "").lower()
    suffix = PurePath(filename).suffix.lower()

    if mime == "application/pdf" or suffix == ".pdf":
        return DocumentKind.PDF
    if mime.startswith("image/"):
        return DocumentKind.IMAGE
    if mime == "text/plain" or suffix == ".txt":
        return DocumentKind.TEXT
    if "word" in mime or suffix in {".doc", ".docx", ".rtf", ".odt"} or mime in {
        "application/rtf",
        "application/vnd.oasis.opendocument.text",
    }:
        return DocumentKind.WORD
    if "presentation" in mime or "powerpoint" in mime or suffix in {".ppt", ".pptx"}:
        return DocumentKind.PRESENTATION
    if "excel" in mime or "spreadsheet" in mime or suffix in {".xls", ".xlsx"}:
        return DocumentKind.SPREADSHEET
    if suffix in {".jpg", ".jpeg", ".png", ".tiff", ".gif"}:
        return DocumentKind.IMAGE
    return DocumentKind.OTHER


def is_accepted(mime_type: str, filename: str) -> bool:
    suffix = PurePath(filename).suffix.lower()
    if mime_type in ACCEPTED_FILE_TYPES:
        return True
    return any(suffix in suffixes for suffixes in ACCEPTED_FILE_TYPES.values())


@dataclass(frozen=True, slots=True)
class DocumentIdentity:
    """Session key for an uploaded document.

    Built from name, byte size and last-modified time only. Two different
    files that agree on all three map to the same key.
    """

    name: str
    size: int
    last_modified: int

    def __str__(self) -> str:
        return f"{self.name}-{self.size}-{self.last_modified}"


@dataclass(frozen=True)
class SourceDocument:
    name: str
    data: bytes
    mime_type: str
    last_modified: int

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def identity(self) -> DocumentIdentity:
        return DocumentIdentity(name=self.name, size=self.size, last_modified=self.last_modified)

    @property
    def kind(self) -> DocumentKind:
        return classify(self.mime_type, self.name)

    @property
    def stem(self) -> str:
        return PurePath(self.name).stem

    @cached_property
    def content_digest(self) -> str:
        return hashlib.sha256(self.data).hexdigest()
