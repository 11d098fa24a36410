from pathlib import Path

import pytest

from docsign.model.document import DocumentKind, SourceDocument, classify, is_accepted
from docsign.pdf.loader import SourceLoadError, load_source


class TestClassify:
    @pytest.mark.parametrize(
        ("mime_type", "filename", "expected"),
        [
            ("application/pdf", "a.pdf", DocumentKind.PDF),
            ("", "a.PDF", DocumentKind.PDF),
            ("image/png", "scan.png", DocumentKind.IMAGE),
            ("", "photo.jpeg", DocumentKind.IMAGE),
            ("text/plain", "notes", DocumentKind.TEXT),
            ("application/msword", "a.doc", DocumentKind.WORD),
            ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "a.docx", DocumentKind.WORD),
            ("application/rtf", "a.rtf", DocumentKind.WORD),
            ("application/vnd.ms-powerpoint", "a.ppt", DocumentKind.PRESENTATION),
            ("", "deck.pptx", DocumentKind.PRESENTATION),
            ("application/vnd.ms-excel", "a.xls", DocumentKind.SPREADSHEET),
            ("application/zip", "a.zip", DocumentKind.OTHER),
        ],
    )
    def test_kinds(self, mime_type: str, filename: str, expected: DocumentKind) -> None:
        assert classify(mime_type, filename) is expected

    def test_only_pdf_is_paged(self) -> None:
        assert [kind for kind in DocumentKind if kind.paged] == [DocumentKind.PDF]

    def test_office_documents_are_not_previewable(self) -> None:
        assert not DocumentKind.WORD.previewable
        assert DocumentKind.TEXT.previewable

    def test_descriptions(self) -> None:
        assert DocumentKind.PDF.description == "PDF Document"
        assert DocumentKind.PRESENTATION.description == "PowerPoint Presentation"


class TestIsAccepted:
    def test_accepts_known_mime(self) -> None:
        assert is_accepted("image/gif", "x")

    def test_accepts_known_extension(self) -> None:
        assert is_accepted("application/octet-stream", "x.tiff")

    def test_rejects_unknown(self) -> None:
        assert not is_accepted("application/zip", "x.zip")


class TestSourceDocument:
    def test_identity_from_name_size_mtime(self, pdf_document: SourceDocument) -> None:
        identity = pdf_document.identity
        assert (identity.name, identity.size, identity.last_modified) == (
            "contract.pdf",
            len(pdf_document.data),
            1_700_000_000_000,
        )
        assert str(identity) == f"contract.pdf-{len(pdf_document.data)}-1700000000000"

    def test_stem(self, pdf_document: SourceDocument) -> None:
        assert pdf_document.stem == "contract"


class TestLoadSource:
    def test_reads_pdf(self, tmp_path: Path, sample_pdf_bytes: bytes) -> None:
        path = tmp_path / "lease.pdf"
        path.write_bytes(sample_pdf_bytes)

        document = load_source(path)

        assert document.name == "lease.pdf"
        assert document.data == sample_pdf_bytes
        assert document.mime_type == "application/pdf"
        assert document.kind is DocumentKind.PDF
        assert document.last_modified == path.stat().st_mtime_ns // 1_000_000

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceLoadError, match="File not found"):
            load_source(tmp_path / "missing.pdf")

    def test_unsupported_type(self, tmp_path: Path) -> None:
        path = tmp_path / "archive.zip"
        path.write_bytes(b"PK")
        with pytest.raises(SourceLoadError, match="Unsupported file type"):
            load_source(path)
