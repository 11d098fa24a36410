"""Mapping between preview-space pixels and output-page points.

Preview space has its origin at the top-left with Y growing downward and a
fixed size. Output pages use PDF user space: origin bottom-left, Y growing
upward, page size taken from the page itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from docsign.config.settings import Settings
from docsign.model.field import FieldKind, PlacedField

# Distance from the placement box's top edge down to the drawing anchor.
VERTICAL_ADJUST: dict[FieldKind, float] = {
    FieldKind.SIGNATURE: 30.0,
    FieldKind.NAME: 20.0,
    FieldKind.EMAIL: 20.0,
    FieldKind.DATE: 20.0,
}

SIGNATURE_EXTRA_OFFSET = 10.0
SIGNATURE_MAX_WIDTH = 150.0
SIGNATURE_MAX_HEIGHT = 50.0


@dataclass(frozen=True, slots=True)
class PreviewGeometry:
    width: float = 600.0
    height: float = 800.0

    @classmethod
    def from_settings(cls, settings: Settings) -> PreviewGeometry:
        return cls(width=float(settings.preview_width), height=float(settings.preview_height))


@dataclass(frozen=True, slots=True)
class OutputBox:
    x: float
    y: float
    width: float
    height: float


def to_output_point(
    field: PlacedField,
    page_size: tuple[float, float],
    preview: PreviewGeometry,
) -> tuple[float, float]:
    page_w, page_h = page_size
    out_x = (field.x / preview.width) * page_w
    out_y = page_h - (field.y / preview.height) * page_h - VERTICAL_ADJUST[field.kind]
    return out_x, out_y


def scale_size(
    field: PlacedField,
    page_size: tuple[float, float],
    preview: PreviewGeometry,
) -> tuple[float, float]:
    page_w, page_h = page_size
    return (field.width / preview.width) * page_w, (field.height / preview.height) * page_h


def signature_box(
    field: PlacedField,
    page_size: tuple[float, float],
    preview: PreviewGeometry,
) -> OutputBox:
    out_x, out_y = to_output_point(field, page_size, preview)
    scaled_w, scaled_h = scale_size(field, page_size, preview)
    return OutputBox(
        x=out_x,
        y=out_y - SIGNATURE_EXTRA_OFFSET,
        width=min(scaled_w, SIGNATURE_MAX_WIDTH),
        height=min(scaled_h, SIGNATURE_MAX_HEIGHT),
    )
