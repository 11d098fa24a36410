"""Placeable field kinds and placed-field records."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import itertools
import time


class FieldKind(str, Enum):
    SIGNATURE = "signature"
    NAME = "name"
    EMAIL = "email"
    DATE = "date"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def draws_image(self) -> bool:
        return self is FieldKind.SIGNATURE


_DEFAULT_GEOMETRY: dict[FieldKind, tuple[float, float]] = {
    FieldKind.SIGNATURE: (120.0, 40.0),
    FieldKind.NAME: (100.0, 30.0),
    FieldKind.EMAIL: (100.0, 30.0),
    FieldKind.DATE: (100.0, 30.0),
}

_sequence = itertools.count(1)


def default_geometry(kind: FieldKind) -> tuple[float, float]:
    """Return the preview-space (width, height) a new field of ``kind`` gets."""
    return _DEFAULT_GEOMETRY[kind]


def new_field_id(kind: FieldKind) -> str:
    # The millisecond stamp alone can repeat, the process-wide sequence cannot.
    millis = time.time_ns() // 1_000_000
    return f"placed-{kind.value}-{millis}-{next(_sequence)}"


@dataclass(frozen=True, slots=True)
class PlacedField:
    id: str
    kind: FieldKind
    x: float
    y: float
    page: int
    width: float
    height: float
    value: str | None = None

    @property
    def is_filled(self) -> bool:
        return bool(self.value and self.value.strip())

    def with_value(self, value: str | None) -> PlacedField:
        return replace(self, value=value)
