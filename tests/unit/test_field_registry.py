import pytest

from docsign.model.field import FieldKind, PlacedField, default_geometry, new_field_id


class TestDefaultGeometry:
    def test_signature_is_larger(self) -> None:
        assert default_geometry(FieldKind.SIGNATURE) == (120.0, 40.0)

    @pytest.mark.parametrize("kind", [FieldKind.NAME, FieldKind.EMAIL, FieldKind.DATE])
    def test_text_kinds_share_geometry(self, kind: FieldKind) -> None:
        assert default_geometry(kind) == (100.0, 30.0)

    def test_every_kind_has_geometry(self) -> None:
        for kind in FieldKind:
            width, height = default_geometry(kind)
            assert width > 0 and height > 0

    def test_unknown_kind_is_rejected_by_enum(self) -> None:
        with pytest.raises(ValueError):
            FieldKind("initials")


class TestFieldKind:
    def test_only_signature_draws_image(self) -> None:
        assert [kind for kind in FieldKind if kind.draws_image] == [FieldKind.SIGNATURE]

    def test_label(self) -> None:
        assert FieldKind.EMAIL.label == "Email"


class TestNewFieldId:
    def test_contains_kind(self) -> None:
        assert new_field_id(FieldKind.DATE).startswith("placed-date-")

    def test_same_millisecond_ids_do_not_collide(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("docsign.model.field.time.time_ns", lambda: 1_700_000_000_000_000_000)
        first = new_field_id(FieldKind.NAME)
        second = new_field_id(FieldKind.EMAIL)
        third = new_field_id(FieldKind.NAME)
        assert len({first, second, third}) == 3


class TestPlacedField:
    def _field(self, value: str | None) -> PlacedField:
        return PlacedField(
            id="placed-name-1", kind=FieldKind.NAME, x=0, y=0, page=1, width=100, height=30, value=value
        )

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_values_are_not_filled(self, value: str | None) -> None:
        assert not self._field(value).is_filled

    def test_with_value_returns_copy(self) -> None:
        original = self._field(None)
        filled = original.with_value("Jane Doe")
        assert filled.value == "Jane Doe"
        assert original.value is None
        assert filled.id == original.id
