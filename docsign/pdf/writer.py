"""Signed output assembly: in-place field drawing or a prepended summary page."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from reportlab.lib import colors

from docsign.config.settings import Settings
from docsign.logging.logger import Log
from docsign.model.document import SourceDocument
from docsign.model.field import PlacedField
from docsign.pdf.compositor import composite_fields
from docsign.pdf.engine import DocumentEngineError, PagedDocument, PdfPage
from docsign.pdf.images import SignatureImageError, is_image_data_url, load_signature_image
from docsign.pdf.transform import PreviewGeometry
from docsign.state.validation import SignerDetails, validate_for_finalize

PDF_CONTENT_TYPE = "application/pdf"
SIGNATURE_FALLBACK_TEXT = "Signature: [Digital Signature Applied]"


class PdfWriteError(RuntimeError):
    """Raised when output generation fails."""


@dataclass(frozen=True, slots=True)
class SignedArtifact:
    data: bytes
    filename: str
    content_type: str = PDF_CONTENT_TYPE


def signed_filename(document: SourceDocument, suffix: str = "_signed") -> str:
    return f"{document.stem}{suffix}.pdf"


def generate_signed_pdf(
    document: SourceDocument,
    fields: Sequence[PlacedField],
    signer: SignerDetails | None = None,
    settings: Settings | None = None,
) -> SignedArtifact:
    """Produce the signed artifact for ``document``.

    Raises ``SigningInputError`` before any work when input is incomplete and
    ``PdfWriteError`` when the final document cannot be serialized.
    """
    settings = settings or Settings()
    signer = validate_for_finalize(fields, signer)
    filename = signed_filename(document, settings.output_suffix)

    try:
        if document.kind.paged and fields:
            output = _positioned_output(document, fields, settings)
            if output is not None:
                return SignedArtifact(data=output, filename=filename)
        data = _summary_output(document, signer, settings)
    except DocumentEngineError as exc:
        Log.error(f"Failed to generate signed document for {document.name}: {exc}")
        raise PdfWriteError("Failed to generate signed PDF") from exc

    Log.info(f"Generated {filename} ({len(data)} bytes)")
    return SignedArtifact(data=data, filename=filename)


def _positioned_output(
    document: SourceDocument,
    fields: Sequence[PlacedField],
    settings: Settings,
) -> bytes | None:
    try:
        paged = PagedDocument.load(document.data)
    except DocumentEngineError as exc:
        Log.warning(
            f"Cannot place fields in {document.name}, using summary page: {exc}",
            document_identity=str(document.identity),
        )
        return None

    drawn = composite_fields(paged, fields, PreviewGeometry.from_settings(settings))
    Log.debug(f"Drew {drawn} of {len(fields)} field(s) into {document.name}")
    return paged.save()


def _summary_output(document: SourceDocument, signer: SignerDetails, settings: Settings) -> bytes:
    summary = build_summary_page(signer, settings)
    summary_bytes = summary.save()
    if not document.kind.paged:
        return summary_bytes

    try:
        merged = PagedDocument.load(document.data)
        merged.insert_page(0, PagedDocument.load(summary_bytes).pages[0])
        return merged.save()
    except DocumentEngineError as exc:
        Log.warning(
            f"Merging summary page into {document.name} failed, returning it alone: {exc}",
            document_identity=str(document.identity),
        )
        return summary_bytes


def build_summary_page(signer: SignerDetails, settings: Settings) -> PagedDocument:
    summary = PagedDocument.create()
    page = summary.add_blank_page(settings.summary_page_width, settings.summary_page_height)
    top = settings.summary_page_height - 72
    y_start = top - 70
    line_height = 30

    page.draw_text("Document Signature", 50, top, font_name="Helvetica-Bold", font_size=24)
    page.draw_text("Signer Information:", 50, y_start, font_name="Helvetica-Bold", font_size=16)
    page.draw_text(f"Name: {signer.name}", 50, y_start - line_height)
    page.draw_text(f"Email: {signer.email}", 50, y_start - line_height * 2)
    page.draw_text(f"Date: {signer.date}", 50, y_start - line_height * 3)

    if signer.signature:
        _draw_summary_signature(page, signer.signature, y_start, line_height)

    page.draw_text(
        f"Document signed on: {datetime.now():%Y-%m-%d %H:%M:%S}",
        50,
        50,
        font_size=10,
        color=colors.Color(0.5, 0.5, 0.5),
    )
    return summary


def _draw_summary_signature(page: PdfPage, signature: str, y_start: float, line_height: float) -> None:
    label_y = y_start - line_height * 5
    if not is_image_data_url(signature):
        page.draw_text("Signature:", 50, label_y, font_name="Helvetica-Bold")
        page.draw_text(signature, 50, label_y - line_height, font_name="Helvetica-Oblique", font_size=18)
        return

    try:
        image = load_signature_image(signature)
    except SignatureImageError as exc:
        Log.warning(f"Signature image could not be embedded in summary page: {exc}")
        page.draw_text(SIGNATURE_FALLBACK_TEXT, 50, label_y)
        return

    page.draw_text("Signature:", 50, label_y, font_name="Helvetica-Bold")
    page.draw_image(image, 50, y_start - line_height * 8, 200, 80)
