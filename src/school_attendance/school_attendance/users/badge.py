from __future__ import annotations

import io

import qrcode

from .model import User


def render_badge_png(user: User, *, box_size: int = 10, border: int = 2) -> bytes:
    """QR image carrying the user's scanner barcode (``MAPH<userid>``)."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(user.barcode)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
