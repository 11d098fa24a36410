"""Draw filled placed fields onto the pages of a paged document."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from docsign.logging.logger import Log
from docsign.model.field import FieldKind, PlacedField
from docsign.pdf.engine import PagedDocument, PdfPage
from docsign.pdf.images import SignatureImageError, is_image_data_url, load_signature_image
from docsign.pdf.transform import PreviewGeometry, signature_box, to_output_point

SIGNATURE_PLACEHOLDER = "[Signature]"

FONT_SIZES: dict[FieldKind, float] = {
    FieldKind.SIGNATURE: 14,
    FieldKind.NAME: 14,
    FieldKind.EMAIL: 12,
    FieldKind.DATE: 12,
}


def group_by_page(fields: Iterable[PlacedField]) -> dict[int, list[PlacedField]]:
    grouped: dict[int, list[PlacedField]] = defaultdict(list)
    for field in fields:
        grouped[field.page].append(field)
    return grouped


def composite_fields(
    document: PagedDocument,
    fields: Iterable[PlacedField],
    preview: PreviewGeometry,
) -> int:
    """Draw every field whose page exists; returns how many were drawn."""
    drawn = 0
    for page_number, page_fields in sorted(group_by_page(fields).items()):
        if page_number < 1 or page_number > document.page_count:
            Log.debug(
                f"Skipping {len(page_fields)} field(s) on page {page_number}: "
                f"document has {document.page_count} page(s)"
            )
            continue

        page = document.pages[page_number - 1]
        for field in page_fields:
            if field.kind is FieldKind.SIGNATURE:
                _draw_signature(page, field, preview)
            else:
                _draw_text_field(page, field, preview)
            drawn += 1
    return drawn


def _draw_text_field(page: PdfPage, field: PlacedField, preview: PreviewGeometry) -> None:
    x, y = to_output_point(field, page.size(), preview)
    page.draw_text(field.value or "", x, y, font_size=FONT_SIZES[field.kind])


def _draw_signature(page: PdfPage, field: PlacedField, preview: PreviewGeometry) -> None:
    value = field.value or ""
    if is_image_data_url(value):
        box = signature_box(field, page.size(), preview)
        try:
            image = load_signature_image(value)
        except SignatureImageError as exc:
            Log.warning(
                f"Signature image for field {field.id} could not be decoded: {exc}",
                field_id=field.id,
                page_number=field.page,
            )
        else:
            page.draw_image(image, box.x, box.y, box.width, box.height)
            return

    x, y = to_output_point(field, page.size(), preview)
    if value and not is_image_data_url(value):
        # Typed signature.
        page.draw_text(value, x, y, font_name="Helvetica-Oblique", font_size=FONT_SIZES[field.kind])
    else:
        page.draw_text(SIGNATURE_PLACEHOLDER, x, y, font_size=FONT_SIZES[field.kind])
