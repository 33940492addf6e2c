"""Shared utilities, dataclasses, display helpers, and platform-specific paths."""

import base64
import math
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional


# --- Type aliases ---

ProgressCallback = Callable[[int, int, str], None]  # (step, total, message)


# --- Constants ---

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/jpg")
MAX_UPLOAD_BYTES = 5 * 1024 * 1024


# --- Enums ---

class ValidationErrorKind(Enum):
    UNSUPPORTED_TYPE = "unsupported_type"
    TOO_LARGE = "too_large"


class InferenceErrorReason(Enum):
    TIMEOUT = "timeout"
    TRANSPORT = "transport"
    SERVER_REJECTED = "server_rejected"


# --- Dataclasses ---

@dataclass(frozen=True)
class ImageAsset:
    """A validated leaf photograph held in memory.

    Only FileIntake constructs these, after the type and size checks pass.
    """
    data: bytes
    mime_type: str
    size: int
    name: str = ""

    @property
    def preview_uri(self) -> str:
        """Base64 data URI suitable for display."""
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    def __repr__(self) -> str:
        return f"ImageAsset(name={self.name!r}, mime_type={self.mime_type!r}, size={self.size})"


@dataclass(frozen=True)
class ValidationError:
    """Why a selected file was rejected, with the offending value for display."""
    kind: ValidationErrorKind
    value: str

    @property
    def message(self) -> str:
        from i18n import t

        if self.kind == ValidationErrorKind.UNSUPPORTED_TYPE:
            return t("validation.unsupported_type", type=self.value or "unknown")
        return t("validation.too_large", size=format_file_size(int(self.value)))


@dataclass
class ValidationResult:
    """Result of image validation."""
    valid: bool
    asset: Optional[ImageAsset] = None
    error: Optional[ValidationError] = None


@dataclass(frozen=True)
class AnalysisResult:
    """Disease classification returned by the inference service."""
    disease: str
    confidence: float
    description: str = ""
    symptoms: str = ""
    treatment: str = ""
    recommendations: str = ""

    @property
    def display_name(self) -> str:
        return display_disease_name(self.disease)

    @property
    def confidence_percent(self) -> str:
        return format_confidence(self.confidence)

    def to_dict(self) -> dict:
        """Serialize in the inference service's response shape."""
        return {
            "disease": self.disease,
            "confidence": self.confidence,
            "information": {
                "description": self.description,
                "symptoms": self.symptoms,
                "treatment": self.treatment,
            },
            "recommendations": self.recommendations,
        }


# --- Display helpers ---

def display_disease_name(label: str) -> str:
    """Replace separator underscores with spaces: Apple_Black_rot -> Apple Black rot."""
    return label.replace("_", " ")


def format_confidence(confidence: float) -> str:
    """Format a 0-1 confidence as a whole percentage, rounding halves up."""
    return f"{math.floor(confidence * 100 + 0.5)}%"


# --- Platform-specific paths ---

def get_reports_dir() -> Path:
    """Get the default directory offered when saving reports."""
    reports_dir = Path.home() / "FarmLens Reports"
    return reports_dir if reports_dir.exists() else Path.home()


# --- Asset paths ---

def get_asset_path(relative_path: str) -> str:
    """Get absolute path to an asset file, handling PyInstaller frozen apps."""
    if getattr(sys, "frozen", False):
        base = Path(sys._MEIPASS)
    else:
        base = Path(__file__).parent.parent
    return str(base / relative_path)


# --- Formatting ---

def format_file_size(size_bytes: int) -> str:
    """Format byte count as human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"
