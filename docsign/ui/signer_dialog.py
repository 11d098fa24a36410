"""Dialog collecting signer details when no fields were placed."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QWidget,
)

from docsign.pdf.images import to_data_url
from docsign.pdf.loader import guess_mime_type
from docsign.state.validation import SignerDetails, SigningInputError, build_signer


class SignerDialog(QDialog):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Sign Documents")
        self.signer: SignerDetails | None = None
        self._signature = ""

        self.name_edit = QLineEdit()
        self.name_edit.setPlaceholderText("Enter your full name")
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("Enter your email")
        self.date_edit = QLineEdit(date.today().isoformat())

        self.signature_label = QLabel("No signature image")
        choose_button = QPushButton("Upload Image")
        choose_button.clicked.connect(self._choose_signature)
        signature_row = QWidget()
        signature_layout = QHBoxLayout(signature_row)
        signature_layout.setContentsMargins(0, 0, 0, 0)
        signature_layout.addWidget(self.signature_label, 1)
        signature_layout.addWidget(choose_button)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.button(QDialogButtonBox.StandardButton.Ok).setText("Complete Signing")
        buttons.accepted.connect(self._submit)
        buttons.rejected.connect(self.reject)

        layout = QFormLayout(self)
        layout.addRow("Full Name *", self.name_edit)
        layout.addRow("Email *", self.email_edit)
        layout.addRow("Date *", self.date_edit)
        layout.addRow("Signature *", signature_row)
        layout.addRow(buttons)

    def _choose_signature(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Choose Signature Image", str(Path.home()), "Images (*.png *.jpg *.jpeg *.gif)"
        )
        if not file_path:
            return
        path = Path(file_path)
        try:
            self._signature = to_data_url(path.read_bytes(), guess_mime_type(path))
        except OSError as exc:
            QMessageBox.warning(self, "Signature", str(exc))
            return
        self.signature_label.setText(path.name)

    def _submit(self) -> None:
        if not self._signature:
            QMessageBox.warning(self, "Signature", "Please upload a signature image")
            return
        try:
            self.signer = build_signer(
                self.name_edit.text(),
                self.email_edit.text(),
                self.date_edit.text(),
                self._signature,
            )
        except SigningInputError as exc:
            QMessageBox.warning(self, "Missing Information", str(exc))
            return
        self.accept()
