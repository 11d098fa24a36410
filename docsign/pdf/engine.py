"""Paged document engine: pypdf page objects plus reportlab drawing overlays.

Drawing calls are recorded per page and rendered into a reportlab overlay
when the document is saved; each overlay is merged onto its page so the
original page content is kept underneath.
"""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO

from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.lib import colors
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas


class DocumentEngineError(RuntimeError):
    """Raised when a paged document cannot be built or serialized."""


class DocumentLoadError(DocumentEngineError):
    """Raised when source bytes cannot be opened as a paged document."""


@dataclass(frozen=True, slots=True)
class _TextOp:
    value: str
    x: float
    y: float
    font_name: str
    font_size: float
    color: colors.Color


@dataclass(frozen=True, slots=True)
class _ImageOp:
    image: ImageReader
    x: float
    y: float
    width: float
    height: float


class PdfPage:
    def __init__(self, page: PageObject) -> None:
        self._page = page
        self._ops: list[_TextOp | _ImageOp] = []

    @property
    def page_object(self) -> PageObject:
        return self._page

    @property
    def has_pending_drawing(self) -> bool:
        return bool(self._ops)

    def size(self) -> tuple[float, float]:
        """Visible page size, measured from the CropBox like the preview renderer."""
        box = self._page.cropbox
        return float(box.width), float(box.height)

    def draw_text(
        self,
        value: str,
        x: float,
        y: float,
        *,
        font_name: str = "Helvetica",
        font_size: float = 12,
        color: colors.Color = colors.black,
    ) -> None:
        self._ops.append(_TextOp(value, x, y, font_name, font_size, color))

    def draw_image(self, image: ImageReader, x: float, y: float, width: float, height: float) -> None:
        self._ops.append(_ImageOp(image, x, y, width, height))

    def flush(self) -> None:
        if not self._ops:
            return
        overlay = PdfReader(BytesIO(self._render_overlay()))
        self._page.merge_page(overlay.pages[0])
        self._ops.clear()

    def _render_overlay(self) -> bytes:
        box = self._page.cropbox
        left, bottom = float(box.left), float(box.bottom)
        width, height = self.size()

        buffer = BytesIO()
        report = canvas.Canvas(buffer, pagesize=(left + width, bottom + height))
        report.translate(left, bottom)
        for op in self._ops:
            if isinstance(op, _TextOp):
                report.setFont(op.font_name, op.font_size)
                report.setFillColor(op.color)
                report.drawString(op.x, op.y, op.value)
            else:
                report.drawImage(op.image, op.x, op.y, width=op.width, height=op.height, mask="auto")
        report.showPage()
        report.save()
        return buffer.getvalue()


class PagedDocument:
    def __init__(self, writer: PdfWriter) -> None:
        self._writer = writer
        self.pages: list[PdfPage] = [PdfPage(page) for page in writer.pages]

    @classmethod
    def load(cls, data: bytes) -> PagedDocument:
        try:
            reader = PdfReader(BytesIO(data))
            if reader.is_encrypted:
                reader.decrypt("")
            writer = PdfWriter()
            for page in reader.pages:
                writer.add_page(page)
        except Exception as exc:
            raise DocumentLoadError("Failed to open source document as PDF") from exc
        return cls(writer)

    @classmethod
    def create(cls) -> PagedDocument:
        return cls(PdfWriter())

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_blank_page(self, width: float, height: float) -> PdfPage:
        page = PdfPage(self._writer.add_blank_page(width=width, height=height))
        self.pages.append(page)
        return page

    def insert_page(self, index: int, page: PdfPage) -> PdfPage:
        """Copy ``page`` (typically from another document) to position ``index``."""
        if page.has_pending_drawing:
            raise DocumentEngineError("Save the source document before copying its pages")
        inserted = PdfPage(self._writer.insert_page(page.page_object, index))
        self.pages.insert(index, inserted)
        return inserted

    def save(self) -> bytes:
        try:
            for page in self.pages:
                page.flush()
            buffer = BytesIO()
            self._writer.write(buffer)
        except Exception as exc:
            raise DocumentEngineError("Failed to serialize document") from exc
        return buffer.getvalue()


def load(data: bytes) -> PagedDocument:
    return PagedDocument.load(data)
