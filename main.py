"""FarmLens: leaf disease analysis and farm dashboard.

Entry point for the desktop application.
"""

import logging
import os
import sys

from PyQt6.QtWidgets import QApplication

import i18n
from core.config import APPLICATION, ORGANIZATION, load_config
from core.farm_api import create_farm_api_client
from core.inference_client import create_inference_client
from ui.theme import ThemeManager


def setup_logging():
    level_name = os.environ.get("FARMLENS_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main():
    """Application entry point."""
    if getattr(sys, "frozen", False):
        os.chdir(os.path.dirname(sys.executable))

    setup_logging()
    logger = logging.getLogger("farmlens")

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION)
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName(ORGANIZATION)

    # Initialize i18n before any UI
    i18n.init()

    theme_manager = ThemeManager(app)
    theme_manager.apply_theme()

    config = load_config()
    logger.info(
        "Starting FarmLens (inference=%s, profile=%s, prediction=%s)",
        config.inference_url or "demo",
        config.profile_api_url,
        config.prediction_api_url,
    )

    from ui.main_window import MainWindow

    window = MainWindow(
        theme_manager,
        config,
        create_inference_client(config),
        create_farm_api_client(config),
    )
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
