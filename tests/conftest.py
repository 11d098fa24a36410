import io
import struct
import zlib

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docsign.model.document import SourceDocument
from docsign.pdf.images import to_data_url
from docsign.state.session import FieldTrackingStore


def _pdf_bytes(page_count: int) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for number in range(1, page_count + 1):
        c.drawString(72, 720, f"Page {number} content")
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single US-letter page (612x792 points)."""
    return _pdf_bytes(1)


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    return _pdf_bytes(3)


@pytest.fixture()
def pdf_document(three_page_pdf_bytes: bytes) -> SourceDocument:
    return SourceDocument(
        name="contract.pdf",
        data=three_page_pdf_bytes,
        mime_type="application/pdf",
        last_modified=1_700_000_000_000,
    )


@pytest.fixture()
def text_document() -> SourceDocument:
    return SourceDocument(
        name="notes.txt",
        data=b"Terms and conditions",
        mime_type="text/plain",
        last_modified=1_700_000_000_000,
    )


@pytest.fixture()
def store() -> FieldTrackingStore:
    return FieldTrackingStore()


@pytest.fixture()
def signature_png_bytes() -> bytes:
    """A transparent PNG with a short black stroke."""
    image = Image.new("RGBA", (60, 20), (0, 0, 0, 0))
    for x in range(5, 55):
        image.putpixel((x, 10), (0, 0, 0, 255))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def signature_data_url(signature_png_bytes: bytes) -> str:
    return to_data_url(signature_png_bytes)


def _png_chunk(tag: bytes, payload: bytes) -> bytes:
    return struct.pack(">I", len(payload)) + tag + payload + struct.pack(">I", zlib.crc32(tag + payload))


def _png_header_only(width: int, height: int) -> bytes:
    """A PNG whose header claims the given size but carries no pixel rows."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", zlib.compress(b""))
        + _png_chunk(b"IEND", b"")
    )


@pytest.fixture()
def oversized_signature_data_url() -> str:
    return to_data_url(_png_header_only(60000, 60000))


@pytest.fixture()
def large_signature_png_bytes() -> bytes:
    """Above the signature pixel cap but below Pillow's own bomb limit."""
    return _png_header_only(5000, 5000)
