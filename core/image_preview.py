"""Thumbnail rendering for leaf images held in memory."""

import io
import logging
from typing import Tuple

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger("farmlens.image_preview")


def create_thumbnail(data: bytes, size: Tuple[int, int] = (128, 128)) -> bytes:
    """Create a JPEG thumbnail and return it as bytes.

    Returns b"" when the data cannot be decoded as an image.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError):
        logger.warning("Could not decode image for thumbnail (%d bytes)", len(data))
        return b""

    img.thumbnail(size, Image.Resampling.LANCZOS)
    if img.mode != "RGB":
        img = img.convert("RGB")

    buffer = io.BytesIO()
    img.save(buffer, format="JPEG", quality=80)
    return buffer.getvalue()
