from __future__ import annotations

import base64
import binascii
import io

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError

JPEG_QUALITY = 80


def decode_frame(data_url: str) -> bytes:
    """Decode a captured camera frame (data URL or bare base64) into JPEG bytes.

    Frames are normalized to RGB JPEG so the recognizer always sees one format.
    """

    if not data_url or not isinstance(data_url, str):
        raise ValidationError("Frame is missing")

    payload = data_url.partition(",")[2] if data_url.startswith("data:") else data_url
    if not payload:
        raise ValidationError("Frame is missing")
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Frame is not valid base64")

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            rgb = img.convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise ValidationError("Frame is not a readable image")

    out = io.BytesIO()
    rgb.save(out, format="JPEG", quality=JPEG_QUALITY)
    return out.getvalue()


def encode_frame(frame: bytes) -> str:
    return base64.b64encode(frame).decode("ascii")
