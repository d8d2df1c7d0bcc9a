"""QR code rendering for PIX payloads built by ``supermix.pix``."""

from __future__ import annotations

import base64
from io import BytesIO

import qrcode
from qrcode.image.pil import PilImage


def generate_pix_qrcode_png(payload: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Render a PIX payload as a QR code.

    Returns:
        PNG image bytes ready to be saved or embedded in a PDF.
    """
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img: PilImage = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def pix_qrcode_data_url(payload: str, *, box_size: int = 10, border: int = 2) -> str:
    """Render a PIX payload as a ``data:image/png;base64`` URL for an ``<img>`` tag."""
    png = generate_pix_qrcode_png(payload, box_size=box_size, border=border)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")
