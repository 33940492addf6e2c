"""Leaf image intake: type and size validation plus preview encoding."""

import base64
import logging
import mimetypes
from pathlib import Path

from core.utils import (
    ALLOWED_MIME_TYPES,
    MAX_UPLOAD_BYTES,
    ImageAsset,
    ValidationError,
    ValidationErrorKind,
    ValidationResult,
)

logger = logging.getLogger("farmlens.file_intake")


class FileIntake:
    """Validates user-selected images before they reach the inference service.

    Browsing and drag-and-drop both go through from_path(), which funnels into
    the same validate() call.
    """

    def __init__(self, allowed_types=ALLOWED_MIME_TYPES, max_bytes: int = MAX_UPLOAD_BYTES):
        self._allowed_types = tuple(allowed_types)
        self._max_bytes = max_bytes

    def validate(self, data: bytes, declared_type: str, size: int, name: str = "") -> ValidationResult:
        """Check the declared MIME type, then the byte size."""
        if declared_type not in self._allowed_types:
            logger.info("Rejected %s: unsupported type %r", name or "upload", declared_type)
            return ValidationResult(
                valid=False,
                error=ValidationError(ValidationErrorKind.UNSUPPORTED_TYPE, declared_type or ""),
            )

        if size > self._max_bytes:
            logger.info("Rejected %s: %d bytes exceeds %d", name or "upload", size, self._max_bytes)
            return ValidationResult(
                valid=False,
                error=ValidationError(ValidationErrorKind.TOO_LARGE, str(size)),
            )

        asset = ImageAsset(data=data, mime_type=declared_type, size=size, name=name)
        return ValidationResult(valid=True, asset=asset)

    def from_path(self, file_path: str) -> ValidationResult:
        """Read a local file and validate it."""
        path = Path(file_path)
        declared_type = mimetypes.guess_type(path.name)[0] or ""
        size = path.stat().st_size

        # Skip reading files that would be rejected anyway
        if declared_type not in self._allowed_types or size > self._max_bytes:
            return self.validate(b"", declared_type, size, name=path.name)

        # The size that counts is what was read, not what stat() saw
        data = path.read_bytes()
        return self.validate(data, declared_type, len(data), name=path.name)


def decode_preview(data_uri: str) -> bytes:
    """Decode a base64 data URI produced by ImageAsset.preview_uri."""
    header, _, payload = data_uri.partition(",")
    if not header.startswith("data:") or not header.endswith(";base64"):
        raise ValueError("Not a base64 data URI")
    return base64.b64decode(payload)
