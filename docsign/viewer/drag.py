"""Drag-and-drop state machine that turns pointer gestures into placed fields."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from docsign.logging.logger import Log
from docsign.model.document import SourceDocument
from docsign.model.field import FieldKind, PlacedField, default_geometry, new_field_id
from docsign.state.session import FieldTrackingStore


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    HOVERING_TARGET = "hovering_target"


@dataclass(frozen=True, slots=True)
class PreviewRect:
    x: float
    y: float
    width: float
    height: float


class DragEngine:
    """Tracks one drag gesture at a time over a document's drop surface.

    Pointer positions are given in the same coordinate system as
    ``surface_origin``; the engine subtracts the origin to get preview-space
    pixels. Committed fields are appended to the store entry of ``document``.
    """

    def __init__(
        self,
        store: FieldTrackingStore,
        document: SourceDocument,
        page_count: int = 1,
    ) -> None:
        self._store = store
        self._document = document
        self._page_count = max(1, page_count)
        self._current_page = 1
        self._state = DragState.IDLE
        self._kind: FieldKind | None = None
        self._hover_position: tuple[float, float] | None = None

    @property
    def state(self) -> DragState:
        return self._state

    @property
    def active_kind(self) -> FieldKind | None:
        return self._kind

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def fields(self) -> list[PlacedField]:
        return self._store.get_fields(self._document)

    def page_fields(self) -> list[PlacedField]:
        return [placed for placed in self.fields if placed.page == self._current_page]

    def set_page(self, page: int) -> None:
        if page < 1 or page > self._page_count:
            raise ValueError(f"Page out of range: {page} (document has {self._page_count})")
        self._current_page = page

    def begin_drag(self, kind: FieldKind) -> bool:
        # Synthetic multi-touch can deliver a second start; ignore it until the first resolves.
        if self._state is not DragState.IDLE:
            Log.debug(f"Ignoring drag start for {kind.value}: gesture already active")
            return False
        self._state = DragState.DRAGGING
        self._kind = kind
        self._hover_position = None
        return True

    def move(
        self,
        pointer: tuple[float, float],
        surface_origin: tuple[float, float],
        over_target: bool,
    ) -> None:
        if self._state is DragState.IDLE:
            return
        if over_target:
            self._state = DragState.HOVERING_TARGET
            self._hover_position = _relative(pointer, surface_origin)
        else:
            self._state = DragState.DRAGGING
            self._hover_position = None

    def hover_rect(self) -> PreviewRect | None:
        """Rectangle to draw while hovering; never persisted."""
        if self._state is not DragState.HOVERING_TARGET or self._kind is None:
            return None
        if self._hover_position is None:
            return None
        width, height = default_geometry(self._kind)
        x, y = self._hover_position
        return PreviewRect(x=x - width / 2, y=y - height / 2, width=width, height=height)

    def drop(
        self,
        pointer: tuple[float, float],
        surface_origin: tuple[float, float],
        over_target: bool,
    ) -> PlacedField | None:
        kind = self._kind
        active = self._state is not DragState.IDLE
        self._reset()
        if not active or kind is None:
            return None
        if not over_target:
            Log.debug(f"Drag of {kind.value} ended outside the drop surface")
            return None

        width, height = default_geometry(kind)
        rel_x, rel_y = _relative(pointer, surface_origin)
        placed = PlacedField(
            id=new_field_id(kind),
            kind=kind,
            x=max(0.0, rel_x - width / 2),
            y=max(0.0, rel_y - height / 2),
            page=self._current_page,
            width=width,
            height=height,
        )
        self._store.set_fields(self._document, [*self.fields, placed])
        Log.info(
            f"Placed {kind.value} field on page {placed.page} at ({placed.x:.1f}, {placed.y:.1f})"
        )
        return placed

    def cancel(self) -> None:
        self._reset()

    def remove_field(self, field_id: str) -> bool:
        current = self.fields
        remaining = [placed for placed in current if placed.id != field_id]
        if len(remaining) == len(current):
            return False
        self._store.set_fields(self._document, remaining)
        Log.info(f"Removed field {field_id}")
        return True

    def _reset(self) -> None:
        self._state = DragState.IDLE
        self._kind = None
        self._hover_position = None


def _relative(pointer: tuple[float, float], origin: tuple[float, float]) -> tuple[float, float]:
    return pointer[0] - origin[0], pointer[1] - origin[1]
