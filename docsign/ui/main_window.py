"""Main application window for document preview, field placement, and signing."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog,
    QDialog,
    QHBoxLayout,
    QInputDialog,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QScrollArea,
    QSplitter,
    QToolBar,
    QVBoxLayout,
    QWidget,
)

from docsign.config.settings import Settings
from docsign.logging.logger import Log
from docsign.model.document import ACCEPTED_FILE_TYPES, SourceDocument
from docsign.model.field import FieldKind, PlacedField
from docsign.pdf.images import to_data_url
from docsign.pdf.loader import SourceLoadError, guess_mime_type, load_source
from docsign.pdf.renderer import DocumentPreview, PdfRenderError, open_preview, render_page_pixmap
from docsign.pdf.transform import PreviewGeometry
from docsign.pdf.writer import PdfWriteError, generate_signed_pdf
from docsign.state.session import SigningSession
from docsign.state.validation import SigningInputError
from docsign.ui.signer_dialog import SignerDialog
from docsign.viewer.canvas import FieldToken, PlacementCanvas, pixmap_from_fitz
from docsign.viewer.drag import DragEngine


def _file_filter() -> str:
    patterns = sorted({f"*{suffix}" for suffixes in ACCEPTED_FILE_TYPES.values() for suffix in suffixes})
    return f"Documents ({' '.join(patterns)})"


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Document Signing")
        self.resize(1100, 950)

        self._settings = settings or Settings()
        self._preview_geometry = PreviewGeometry.from_settings(self._settings)
        self._session = SigningSession()
        self._document: SourceDocument | None = None
        self._engine: DragEngine | None = None

        self.document_list = QListWidget()
        self.document_list.currentRowChanged.connect(self._on_document_selected)

        self.canvas = PlacementCanvas(self._preview_geometry)
        self.canvas.fields_changed.connect(self._on_fields_changed)
        self.canvas.field_activated.connect(self._on_field_activated)

        toolbox = QWidget()
        toolbox_layout = QHBoxLayout(toolbox)
        for kind in FieldKind:
            token = FieldToken(kind)
            token.drag_started.connect(self.canvas.begin_drag)
            token.drag_finished.connect(self._on_drag_finished)
            toolbox_layout.addWidget(token)
        toolbox_layout.addStretch(1)

        self.scroll_area = QScrollArea()
        self.scroll_area.setWidgetResizable(False)
        self.scroll_area.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.scroll_area.setWidget(self.canvas)

        workspace = QWidget()
        workspace_layout = QVBoxLayout(workspace)
        workspace_layout.addWidget(toolbox)
        workspace_layout.addWidget(self.scroll_area, 1)

        splitter = QSplitter()
        splitter.addWidget(self.document_list)
        splitter.addWidget(workspace)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 4)
        self.setCentralWidget(splitter)

        self._build_toolbar()
        self.statusBar().showMessage("Ready")

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Main Toolbar")
        toolbar.setMovable(False)
        self.addToolBar(toolbar)

        open_action = QAction("Add Documents", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self.add_documents)
        toolbar.addAction(open_action)

        remove_action = QAction("Remove Document", self)
        remove_action.triggered.connect(self.remove_current_document)
        toolbar.addAction(remove_action)

        save_action = QAction("Save Signed", self)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self.save_signed)
        toolbar.addAction(save_action)

        toolbar.addSeparator()

        prev_action = QAction("Previous", self)
        prev_action.triggered.connect(self.show_previous_page)
        toolbar.addAction(prev_action)

        next_action = QAction("Next", self)
        next_action.triggered.connect(self.show_next_page)
        toolbar.addAction(next_action)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        for document in list(self._session.documents):
            self._close_preview(document)
        self.canvas.clear_surface()
        super().closeEvent(event)

    def add_documents(self) -> None:
        file_paths, _ = QFileDialog.getOpenFileNames(
            self,
            "Add Documents",
            str(Path.home()),
            _file_filter(),
        )
        if not file_paths:
            return

        loaded: list[SourceDocument] = []
        for file_path in file_paths:
            try:
                loaded.append(load_source(file_path))
            except SourceLoadError as exc:
                QMessageBox.warning(self, "Open Failed", str(exc))
        if not loaded:
            return

        self._session.add_documents(loaded)
        self._populate_document_list()
        self.document_list.setCurrentRow(len(self._session.documents) - len(loaded))

    def remove_current_document(self) -> None:
        if self._document is None:
            return
        document = self._document
        preview = self._session.preview_for(document)
        self._session.remove_document(document)
        if preview is not None and self._session.preview_for(document) is None:
            preview.close()
        self._document = None
        self._engine = None
        self.canvas.clear_surface()
        self._populate_document_list(keep_selection=False)

    def save_signed(self) -> None:
        if self._document is None:
            QMessageBox.information(self, "No Document", "Please select at least one file.")
            return

        document = self._document
        fields = self._session.store.get_fields(document)
        signer = None
        if not fields:
            dialog = SignerDialog(self)
            if dialog.exec() != QDialog.DialogCode.Accepted:
                return
            signer = dialog.signer

        try:
            artifact = generate_signed_pdf(document, fields, signer, self._settings)
        except SigningInputError as exc:
            QMessageBox.warning(self, "Missing Information", str(exc))
            return
        except PdfWriteError:
            QMessageBox.critical(
                self, "Save Failed", "Error generating signed document. Please try again."
            )
            return

        output_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Signed PDF",
            str(Path.home() / artifact.filename),
            "PDF Files (*.pdf)",
        )
        if not output_path:
            return

        try:
            Path(output_path).write_bytes(artifact.data)
        except OSError as exc:
            QMessageBox.critical(self, "Save Failed", str(exc))
            return
        self.statusBar().showMessage(f"Saved: {output_path}")

    def show_previous_page(self) -> None:
        if self._engine is None or self._engine.current_page <= 1:
            return
        self._engine.set_page(self._engine.current_page - 1)
        self._render_current_page()

    def show_next_page(self) -> None:
        if self._engine is None or self._engine.current_page >= self._engine.page_count:
            return
        self._engine.set_page(self._engine.current_page + 1)
        self._render_current_page()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.key() == Qt.Key.Key_Escape:
            self.canvas.cancel_drag()
            event.accept()
            return
        super().keyPressEvent(event)

    def _populate_document_list(self, keep_selection: bool = True) -> None:
        row = self.document_list.currentRow() if keep_selection else -1
        self.document_list.blockSignals(True)
        self.document_list.clear()
        for document in self._session.documents:
            count = self._session.store.count(document)
            item = QListWidgetItem(f"{document.name} ({document.kind.description}, {count} field(s))")
            self.document_list.addItem(item)
        self.document_list.setCurrentRow(row if row < self.document_list.count() else -1)
        self.document_list.blockSignals(False)

    def _on_document_selected(self, row: int) -> None:
        if row < 0 or row >= len(self._session.documents):
            return

        document = self._session.documents[row]
        preview = self._session.preview_for(document)
        if preview is None:
            try:
                preview = open_preview(document)
            except PdfRenderError as exc:
                QMessageBox.critical(self, "Preview Failed", str(exc))
                return
            if not self._session.commit_preview(document, preview):
                preview.close()
                return

        self._document = document
        self._engine = DragEngine(self._session.store, document, page_count=preview.page_count)
        self._render_current_page()

    def _render_current_page(self) -> None:
        if self._document is None or self._engine is None:
            self.canvas.clear_surface()
            return

        preview: DocumentPreview | None = self._session.preview_for(self._document)
        if preview is None or not preview.available:
            self.canvas.clear_surface()
            self.statusBar().showMessage(
                f"{self._document.kind.description}: preview not available, download only"
            )
            return

        pixmap = None
        if preview.handle is not None:
            try:
                pix = render_page_pixmap(
                    preview.handle, self._engine.current_page, self._preview_geometry
                )
            except PdfRenderError as exc:
                QMessageBox.critical(self, "Render Failed", str(exc))
                return
            pixmap = pixmap_from_fitz(pix)

        self.canvas.set_surface(self._engine, pixmap=pixmap, text=preview.text)
        self.statusBar().showMessage(
            f"Page {self._engine.current_page}/{self._engine.page_count}: "
            f"{len(self._engine.page_fields())} field(s)"
        )

    def _on_drag_finished(self, accepted: bool) -> None:
        if not accepted:
            self.canvas.cancel_drag()

    def _on_fields_changed(self) -> None:
        self._populate_document_list()
        if self._engine is not None:
            self.statusBar().showMessage(
                f"Page {self._engine.current_page}: {len(self._engine.page_fields())} field(s)"
            )

    def _on_field_activated(self, field: PlacedField) -> None:
        if self._document is None:
            return

        value = self._prompt_value(field)
        if value is None:
            return
        self._session.store.fill_value(self._document, field.id, value)
        self.canvas.update()
        Log.debug(f"Filled {field.kind.value} field {field.id}")

    def _prompt_value(self, field: PlacedField) -> str | None:
        if field.kind is FieldKind.SIGNATURE:
            return self._prompt_signature()

        defaults = {FieldKind.DATE: date.today().isoformat()}
        text, ok = QInputDialog.getText(
            self,
            f"Edit {field.kind.label}",
            f"Enter your {field.kind.value}:",
            QLineEdit.EchoMode.Normal,
            field.value or defaults.get(field.kind, ""),
        )
        return text if ok else None

    def _prompt_signature(self) -> str | None:
        choice, ok = QInputDialog.getItem(
            self, "Signature", "Signature source:", ["Upload image", "Type signature"], 0, False
        )
        if not ok:
            return None
        if choice == "Type signature":
            text, ok = QInputDialog.getText(self, "Signature", "Type your signature:")
            return text if ok else None

        file_path, _ = QFileDialog.getOpenFileName(
            self, "Choose Signature Image", str(Path.home()), "Images (*.png *.jpg *.jpeg *.gif)"
        )
        if not file_path:
            return None
        path = Path(file_path)
        try:
            return to_data_url(path.read_bytes(), guess_mime_type(path))
        except OSError as exc:
            QMessageBox.warning(self, "Signature", str(exc))
            return None

    def _close_preview(self, document: SourceDocument) -> None:
        preview = self._session.preview_for(document)
        if preview is not None:
            preview.close()
