"""Preview rendering helpers using PyMuPDF."""

from __future__ import annotations

from dataclasses import dataclass

import fitz

from docsign.model.document import DocumentKind, SourceDocument
from docsign.pdf.transform import PreviewGeometry


class PdfRenderError(RuntimeError):
    """Raised when a page cannot be rendered."""


@dataclass(slots=True)
class DocumentPreview:
    """Rendered preview state for one source document.

    Paged and image documents carry an open PyMuPDF handle; text documents
    carry their decoded content; opaque kinds carry neither.
    """

    kind: DocumentKind
    handle: fitz.Document | None = None
    text: str | None = None

    @property
    def page_count(self) -> int:
        if self.handle is None:
            return 1
        return self.handle.page_count

    @property
    def available(self) -> bool:
        return self.handle is not None or self.text is not None

    def close(self) -> None:
        if self.handle is not None and not self.handle.is_closed:
            self.handle.close()


def open_preview(document: SourceDocument) -> DocumentPreview:
    kind = document.kind
    if kind is DocumentKind.TEXT:
        return DocumentPreview(kind=kind, text=document.data.decode("utf-8", errors="replace"))
    if kind not in {DocumentKind.PDF, DocumentKind.IMAGE}:
        return DocumentPreview(kind=kind)

    filetype = "pdf" if kind is DocumentKind.PDF else document.name.rsplit(".", 1)[-1].lower()
    try:
        handle = fitz.open(stream=document.data, filetype=filetype)
    except Exception as exc:  # pragma: no cover
        raise PdfRenderError(f"Failed to open preview for: {document.name}") from exc
    return DocumentPreview(kind=kind, handle=handle)


def render_page_pixmap(
    handle: fitz.Document,
    page_number: int,
    preview: PreviewGeometry,
) -> fitz.Pixmap:
    """Render a 1-based page stretched to exactly the preview size."""
    if page_number < 1 or page_number > handle.page_count:
        raise PdfRenderError(f"Page out of range: {page_number}")

    try:
        page = handle.load_page(page_number - 1)
        matrix = fitz.Matrix(preview.width / page.rect.width, preview.height / page.rect.height)
        return page.get_pixmap(matrix=matrix, alpha=False, annots=False)
    except Exception as exc:  # pragma: no cover
        raise PdfRenderError(f"Failed to render page {page_number}") from exc

