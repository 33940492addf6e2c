"""Service endpoints and timeouts, resolved from environment and QSettings."""

import logging
import os
from dataclasses import dataclass

from PyQt6.QtCore import QSettings

logger = logging.getLogger("farmlens.config")

ORGANIZATION = "FarmLens"
APPLICATION = "FarmLens"


@dataclass
class AppConfig:
    """Where the application talks to, and how long it waits."""
    inference_url: str = ""
    profile_api_url: str = "http://localhost:5000/api/auth"
    prediction_api_url: str = "http://localhost:5000/api"
    api_token: str = ""
    request_timeout_s: float = 30.0

    @property
    def demo_mode(self) -> bool:
        return not self.inference_url


# field name -> (environment variable, QSettings key)
_SOURCES = {
    "inference_url": ("FARMLENS_INFERENCE_URL", "services/inference_url"),
    "profile_api_url": ("FARMLENS_PROFILE_API_URL", "services/profile_api_url"),
    "prediction_api_url": ("FARMLENS_PREDICTION_API_URL", "services/prediction_api_url"),
    "api_token": ("FARMLENS_API_TOKEN", "services/api_token"),
    "request_timeout_s": ("FARMLENS_REQUEST_TIMEOUT", "services/request_timeout"),
}


def get_settings() -> QSettings:
    return QSettings(ORGANIZATION, APPLICATION)


def load_config(settings: QSettings = None) -> AppConfig:
    """Build the config. Environment wins over QSettings, which wins over defaults."""
    settings = settings or get_settings()
    defaults = AppConfig()
    values = {}

    for field_name, (env_var, settings_key) in _SOURCES.items():
        raw = os.environ.get(env_var)
        if raw is None:
            raw = settings.value(settings_key, None)
        if raw is None or raw == "":
            values[field_name] = getattr(defaults, field_name)
            continue
        values[field_name] = str(raw).strip()

    try:
        values["request_timeout_s"] = float(values["request_timeout_s"])
    except (TypeError, ValueError):
        logger.warning("Invalid request timeout %r, using %.1fs", values["request_timeout_s"], defaults.request_timeout_s)
        values["request_timeout_s"] = defaults.request_timeout_s
    if values["request_timeout_s"] <= 0:
        values["request_timeout_s"] = defaults.request_timeout_s

    return AppConfig(**values)


def save_config(config: AppConfig, settings: QSettings = None):
    """Persist the config to QSettings."""
    settings = settings or get_settings()
    for field_name, (_, settings_key) in _SOURCES.items():
        settings.setValue(settings_key, getattr(config, field_name))
