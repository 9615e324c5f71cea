from __future__ import annotations

import io
from typing import Optional

import qrcode

from ..core.constants import BADGE_CODE_PREFIX


def badge_code(registrant_id: int) -> str:
    return f"{BADGE_CODE_PREFIX}{int(registrant_id)}"


def parse_badge_code(code: str) -> Optional[int]:
    """Registrant id from a scanned badge payload, or None if it is not one of ours."""
    text = (code or "").strip().upper()
    if not text.startswith(BADGE_CODE_PREFIX):
        return None
    digits = text[len(BADGE_CODE_PREFIX):]
    return int(digits) if digits.isdigit() else None


def render_badge_png(registrant_id: int) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=2,
    )
    qr.add_data(badge_code(registrant_id))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
