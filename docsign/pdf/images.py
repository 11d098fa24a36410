"""Decoding of signature images supplied as data URLs."""

from __future__ import annotations

import base64
import binascii
from io import BytesIO

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader

MAX_SIGNATURE_PIXELS = 4096 * 4096


class SignatureImageError(RuntimeError):
    """Raised when signature content cannot be decoded into an image."""


def is_image_data_url(value: str | None) -> bool:
    return bool(value) and value.startswith("data:image")


def decode_data_url(data_url: str) -> bytes:
    header, sep, payload = data_url.partition(",")
    if not sep or not header.startswith("data:"):
        raise SignatureImageError("Not a data URL")
    if not header.endswith(";base64"):
        raise SignatureImageError("Only base64 data URLs are supported")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SignatureImageError("Invalid base64 payload in data URL") from exc


def flatten_to_png(raw: bytes) -> bytes:
    """Composite an image onto a white background and re-encode it as PNG."""
    try:
        with Image.open(BytesIO(raw)) as source:
            width, height = source.size
            if width * height > MAX_SIGNATURE_PIXELS:
                raise SignatureImageError(f"Signature image is too large: {width}x{height}")
            rgba = source.convert("RGBA")
    except Image.DecompressionBombError as exc:
        raise SignatureImageError("Signature image is too large") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise SignatureImageError("Signature content is not a readable image") from exc

    background = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
    background.alpha_composite(rgba)
    buffer = BytesIO()
    background.convert("RGB").save(buffer, format="PNG")
    return buffer.getvalue()


def load_signature_image(data_url: str) -> ImageReader:
    png = flatten_to_png(decode_data_url(data_url))
    return ImageReader(BytesIO(png))


def to_data_url(raw: bytes, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{base64.b64encode(raw).decode('ascii')}"
