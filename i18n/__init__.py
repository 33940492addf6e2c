"""Translations for FarmLens.

English and Hindi catalogs live next to this module as JSON files.
Usage: from i18n import t; t("key", name=value)
"""

import json
import logging
import sys
from collections import OrderedDict
from pathlib import Path

from core.config import get_settings

logger = logging.getLogger("farmlens.i18n")

LANGUAGES = OrderedDict([
    ("en", {"name": "English", "native_name": "English"}),
    ("hi", {"name": "Hindi", "native_name": "\u0939\u093f\u0928\u094d\u0926\u0940"}),
])

_translations: dict = {}
_fallback: dict = {}
_current_lang: str = "en"


def _get_i18n_dir() -> Path:
    """Get the directory containing translation JSON files."""
    if getattr(sys, "frozen", False):
        return Path(sys._MEIPASS) / "i18n"
    return Path(__file__).parent


def _load_json(lang_code: str) -> dict:
    path = _get_i18n_dir() / f"{lang_code}.json"
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning("No catalog for language %r", lang_code)
        return {}
    except json.JSONDecodeError as e:
        logger.error("Catalog %s is not valid JSON: %s", path, e)
        return {}


def init(language: str = None):
    """Initialize the translation system. Call once at app startup.

    Without an explicit language the saved preference is used.
    """
    global _translations, _fallback, _current_lang
    if language is None:
        language = get_settings().value("language", "en")
    _current_lang = language if language in LANGUAGES else "en"

    _fallback = _load_json("en")
    if _current_lang != "en":
        _translations = _load_json(_current_lang)
    else:
        _translations = _fallback


def t(key: str, **kwargs) -> str:
    """Translate a key with optional format arguments.

    Falls back: current language -> English -> raw key.
    """
    text = _translations.get(key) or _fallback.get(key) or key
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return text
    return text


def get_current_language() -> str:
    return _current_lang


def set_language(code: str):
    """Save language preference. Takes effect on restart."""
    get_settings().setValue("language", code)
