"""Preview surface that accepts dragged field tokens and shows placed fields."""

from __future__ import annotations

import fitz
from PySide6.QtCore import QMimeData, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QColor, QDrag, QImage, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QLabel, QWidget

from docsign.model.field import FieldKind, PlacedField
from docsign.pdf.transform import PreviewGeometry
from docsign.viewer.drag import DragEngine

FIELD_MIME_TYPE = "application/x-docsign-field-kind"


def pixmap_from_fitz(pix: fitz.Pixmap) -> QPixmap:
    image = QImage(pix.samples, pix.width, pix.height, pix.stride, QImage.Format_RGB888)
    return QPixmap.fromImage(image.copy())


class FieldToken(QLabel):
    """Toolbox entry that starts a drag carrying its field kind."""

    drag_started = Signal(object)
    drag_finished = Signal(bool)

    def __init__(self, kind: FieldKind) -> None:
        super().__init__(kind.label)
        self._kind = kind
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setStyleSheet(
            "QLabel { border: 2px dashed #1565c0; border-radius: 6px; padding: 6px 12px; }"
        )
        self.setCursor(Qt.CursorShape.OpenHandCursor)

    def mouseMoveEvent(self, event) -> None:  # type: ignore[override]
        if not event.buttons() & Qt.MouseButton.LeftButton:
            return

        self.drag_started.emit(self._kind)
        mime = QMimeData()
        mime.setData(FIELD_MIME_TYPE, self._kind.value.encode("ascii"))
        drag = QDrag(self)
        drag.setMimeData(mime)
        result = drag.exec(Qt.DropAction.CopyAction)
        self.drag_finished.emit(result == Qt.DropAction.CopyAction)


class PlacementCanvas(QWidget):
    fields_changed = Signal()
    field_activated = Signal(object)

    def __init__(self, preview: PreviewGeometry) -> None:
        super().__init__()
        self._preview = preview
        self._pixmap: QPixmap | None = None
        self._text: str | None = None
        self._engine: DragEngine | None = None

        self.setAcceptDrops(True)
        self.setFixedSize(int(preview.width), int(preview.height))

    @property
    def engine(self) -> DragEngine | None:
        return self._engine

    def set_surface(
        self,
        engine: DragEngine,
        pixmap: QPixmap | None = None,
        text: str | None = None,
    ) -> None:
        if self._engine is not None:
            self._engine.cancel()
        self._engine = engine
        self._pixmap = pixmap
        self._text = text
        self.update()

    def clear_surface(self) -> None:
        if self._engine is not None:
            self._engine.cancel()
        self._engine = None
        self._pixmap = None
        self._text = None
        self.update()

    def begin_drag(self, kind: FieldKind) -> None:
        if self._engine is not None:
            self._engine.begin_drag(kind)

    def cancel_drag(self) -> None:
        if self._engine is not None:
            self._engine.cancel()
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        del event
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#ffffff"))

        if self._pixmap is not None:
            painter.drawPixmap(self.rect(), self._pixmap)
        elif self._text is not None:
            painter.setPen(QColor("#212121"))
            painter.drawText(
                self.rect().adjusted(16, 16, -16, -16),
                int(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop) | int(Qt.TextFlag.TextWordWrap),
                self._text,
            )

        if self._engine is None:
            return

        hover = self._engine.hover_rect()
        if hover is not None:
            pen = QPen(QColor("#1565c0"))
            pen.setStyle(Qt.PenStyle.DashLine)
            pen.setWidth(2)
            painter.setPen(pen)
            rect = QRectF(hover.x, hover.y, hover.width, hover.height)
            painter.fillRect(rect, QColor(21, 101, 192, 40))
            painter.drawRect(rect)

        for field in self._engine.page_fields():
            rect = _field_rect(field)
            color = QColor("#2e7d32") if field.is_filled else QColor("#1565c0")
            pen = QPen(color)
            pen.setWidth(2)
            painter.setPen(pen)
            painter.fillRect(rect, QColor(color.red(), color.green(), color.blue(), 30))
            painter.drawRect(rect)
            painter.drawText(
                rect.adjusted(4, 0, -14, 0),
                Qt.AlignmentFlag.AlignVCenter | Qt.AlignmentFlag.AlignLeft,
                field.kind.label,
            )
            painter.drawText(_delete_handle_rect(rect), Qt.AlignmentFlag.AlignCenter, "x")

    def dragEnterEvent(self, event) -> None:  # type: ignore[override]
        if self._engine is None or not event.mimeData().hasFormat(FIELD_MIME_TYPE):
            event.ignore()
            return
        event.acceptProposedAction()
        self._track(event.position(), over_target=True)

    def dragMoveEvent(self, event) -> None:  # type: ignore[override]
        if self._engine is None or not event.mimeData().hasFormat(FIELD_MIME_TYPE):
            event.ignore()
            return
        event.acceptProposedAction()
        self._track(event.position(), over_target=True)

    def dragLeaveEvent(self, event) -> None:  # type: ignore[override]
        del event
        if self._engine is not None:
            self._engine.move((0.0, 0.0), (0.0, 0.0), over_target=False)
        self.update()

    def dropEvent(self, event) -> None:  # type: ignore[override]
        if self._engine is None or not event.mimeData().hasFormat(FIELD_MIME_TYPE):
            event.ignore()
            return

        pos = event.position()
        placed = self._engine.drop((pos.x(), pos.y()), (0.0, 0.0), over_target=True)
        event.acceptProposedAction()
        self.update()
        if placed is not None:
            self.fields_changed.emit()

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        if self._engine is None or event.button() != Qt.MouseButton.LeftButton:
            return

        pos = event.position()
        for field in reversed(self._engine.page_fields()):
            rect = _field_rect(field)
            if _delete_handle_rect(rect).contains(pos):
                if self._engine.remove_field(field.id):
                    self.fields_changed.emit()
                self.update()
                return
            if rect.contains(pos):
                self.field_activated.emit(field)
                return

    def _track(self, pos: QPointF, over_target: bool) -> None:
        if self._engine is not None:
            self._engine.move((pos.x(), pos.y()), (0.0, 0.0), over_target=over_target)
        self.update()


def _field_rect(field: PlacedField) -> QRectF:
    return QRectF(field.x, field.y, field.width, field.height)


def _delete_handle_rect(field_rect: QRectF) -> QRectF:
    handle_size = 12.0
    return QRectF(field_rect.right() - handle_size, field_rect.top(), handle_size, handle_size)
