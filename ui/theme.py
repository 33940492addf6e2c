"""Light and dark QSS theming."""

import logging
import sys

from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from core.config import get_settings
from core.utils import get_asset_path

logger = logging.getLogger("farmlens.theme")


class ThemeManager:
    """Applies assets/styles/<theme>.qss to the application and remembers the choice."""

    LIGHT = "light"
    DARK = "dark"

    def __init__(self, app: QApplication, settings=None):
        self._app = app
        self._settings = settings or get_settings()
        saved = self._settings.value("theme", self.LIGHT)
        self._current_theme = saved if saved in (self.LIGHT, self.DARK) else self.LIGHT
        self._setup_font()

    def _setup_font(self):
        if sys.platform == "darwin":
            font = QFont(".AppleSystemUIFont", 13)
        elif sys.platform == "win32":
            font = QFont("Segoe UI", 10)
        else:
            font = QFont("Ubuntu", 10)
        font.setHintingPreference(QFont.HintingPreference.PreferNoHinting)
        self._app.setFont(font)

    def apply_theme(self, theme: str = None):
        """Load and apply a theme. Unknown names keep the current one."""
        if theme in (self.LIGHT, self.DARK):
            self._current_theme = theme
        elif theme is not None:
            logger.warning("Unknown theme %r, keeping %s", theme, self._current_theme)
        self._app.setStyleSheet(self._load_qss(f"{self._current_theme}.qss"))
        self._settings.setValue("theme", self._current_theme)

    def set_theme(self, mode: str):
        self.apply_theme(mode)

    def toggle_theme(self) -> str:
        new_theme = self.DARK if self._current_theme == self.LIGHT else self.LIGHT
        self.apply_theme(new_theme)
        return new_theme

    @property
    def current_theme(self) -> str:
        return self._current_theme

    @staticmethod
    def _load_qss(filename: str) -> str:
        qss_path = get_asset_path(f"assets/styles/{filename}")
        try:
            with open(qss_path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            logger.warning("Stylesheet %s not found", qss_path)
            return ""
