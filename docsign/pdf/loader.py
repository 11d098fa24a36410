"""Reading uploaded files into source documents."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from docsign.model.document import SourceDocument, is_accepted


class SourceLoadError(RuntimeError):
    """Raised when an uploaded file cannot be read."""


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


def load_source(path: str | Path) -> SourceDocument:
    source_path = Path(path)
    if not source_path.exists():
        raise SourceLoadError(f"File not found: {source_path}")

    mime_type = guess_mime_type(source_path)
    if not is_accepted(mime_type, source_path.name):
        raise SourceLoadError(f"Unsupported file type: {source_path.name}")

    try:
        data = source_path.read_bytes()
        modified_ms = source_path.stat().st_mtime_ns // 1_000_000
    except OSError as exc:
        raise SourceLoadError(f"Failed to read file: {source_path}") from exc

    return SourceDocument(
        name=source_path.name,
        data=data,
        mime_type=mime_type,
        last_modified=modified_ms,
    )
