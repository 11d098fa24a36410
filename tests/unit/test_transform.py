import pytest

from docsign.config.settings import Settings
from docsign.model.field import FieldKind, PlacedField
from docsign.pdf.transform import (
    SIGNATURE_MAX_HEIGHT,
    SIGNATURE_MAX_WIDTH,
    VERTICAL_ADJUST,
    PreviewGeometry,
    scale_size,
    signature_box,
    to_output_point,
)

LETTER = (612.0, 792.0)


def _field(kind: FieldKind, x: float, y: float, width: float = 100, height: float = 30) -> PlacedField:
    return PlacedField(id="f", kind=kind, x=x, y=y, page=1, width=width, height=height)


class TestToOutputPoint:
    def test_name_field_on_letter_page(self) -> None:
        x, y = to_output_point(_field(FieldKind.NAME, 100, 100), LETTER, PreviewGeometry())
        assert x == pytest.approx(102.0)
        assert y == pytest.approx(693.0 - VERTICAL_ADJUST[FieldKind.NAME])

    def test_top_left_maps_to_top_of_page(self) -> None:
        x, y = to_output_point(_field(FieldKind.EMAIL, 0, 0), LETTER, PreviewGeometry())
        assert x == 0
        assert y == pytest.approx(792.0 - VERTICAL_ADJUST[FieldKind.EMAIL])

    def test_y_axis_is_flipped(self) -> None:
        _, upper = to_output_point(_field(FieldKind.DATE, 0, 100), LETTER, PreviewGeometry())
        _, lower = to_output_point(_field(FieldKind.DATE, 0, 500), LETTER, PreviewGeometry())
        assert upper > lower

    def test_signature_adjust_is_larger(self) -> None:
        assert VERTICAL_ADJUST[FieldKind.SIGNATURE] > VERTICAL_ADJUST[FieldKind.NAME]

    def test_custom_preview_size(self) -> None:
        preview = PreviewGeometry(width=306, height=396)
        x, y = to_output_point(_field(FieldKind.NAME, 153, 198), LETTER, preview)
        assert x == pytest.approx(306.0)
        assert y == pytest.approx(396.0 - VERTICAL_ADJUST[FieldKind.NAME])


class TestSignatureBox:
    def test_scaled_box_below_cap(self) -> None:
        field = _field(FieldKind.SIGNATURE, 60, 200, width=120, height=40)
        box = signature_box(field, LETTER, PreviewGeometry())
        assert box.x == pytest.approx(61.2)
        assert box.y == pytest.approx(792 - 198 - 30 - 10)
        assert box.width == pytest.approx(122.4)
        assert box.height == pytest.approx(39.6)

    def test_large_box_is_capped(self) -> None:
        field = _field(FieldKind.SIGNATURE, 0, 0, width=500, height=300)
        box = signature_box(field, LETTER, PreviewGeometry())
        assert box.width == SIGNATURE_MAX_WIDTH
        assert box.height == SIGNATURE_MAX_HEIGHT

    def test_scale_size(self) -> None:
        width, height = scale_size(_field(FieldKind.NAME, 0, 0), (1200.0, 1600.0), PreviewGeometry())
        assert (width, height) == pytest.approx((200.0, 60.0))


class TestPreviewGeometry:
    def test_defaults(self) -> None:
        assert PreviewGeometry() == PreviewGeometry(width=600, height=800)

    def test_from_settings(self) -> None:
        preview = PreviewGeometry.from_settings(Settings(preview_width=300, preview_height=400))
        assert (preview.width, preview.height) == (300.0, 400.0)
