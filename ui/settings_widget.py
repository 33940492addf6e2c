"""Application settings tab: language, theme, and service endpoints."""

import logging

from PyQt6.QtWidgets import (
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.config import AppConfig, get_settings, load_config, save_config
from i18n import LANGUAGES, get_current_language, set_language, t
from ui.theme import ThemeManager

logger = logging.getLogger("farmlens.settings_widget")


class SettingsWidget(QWidget):
    """User-facing settings. Service changes take effect on restart."""

    def __init__(self, theme_manager: ThemeManager, settings=None, parent=None):
        super().__init__(parent)
        self._theme_manager = theme_manager
        self._settings = settings or get_settings()
        self._setup_ui()
        self._load_services()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("settings.title"))
        title.setProperty("class", "sectionTitle")
        subtitle = QLabel(t("settings.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        layout.addWidget(title)
        layout.addWidget(subtitle)

        # --- Language section ---
        layout.addWidget(self._section_header(t("settings.language")))

        lang_row = QHBoxLayout()
        self._lang_combo = QComboBox()
        current = self._settings.value("language", get_current_language())
        for code, info in LANGUAGES.items():
            self._lang_combo.addItem(f"{info['native_name']} ({info['name']})", code)
            if code == current:
                self._lang_combo.setCurrentIndex(self._lang_combo.count() - 1)
        self._lang_combo.currentIndexChanged.connect(self._on_language_changed)
        lang_row.addWidget(self._lang_combo)
        lang_row.addStretch()
        layout.addLayout(lang_row)

        lang_note = QLabel(t("settings.language_restart"))
        lang_note.setStyleSheet("font-size: 11px; color: #888; font-style: italic;")
        layout.addWidget(lang_note)

        # --- Theme section ---
        layout.addWidget(self._section_header(t("settings.theme")))

        theme_row = QHBoxLayout()
        light_btn = QPushButton(t("settings.theme_light"))
        light_btn.setProperty("class", "secondaryButton")
        light_btn.clicked.connect(lambda: self._theme_manager.set_theme(ThemeManager.LIGHT))

        dark_btn = QPushButton(t("settings.theme_dark"))
        dark_btn.setProperty("class", "secondaryButton")
        dark_btn.clicked.connect(lambda: self._theme_manager.set_theme(ThemeManager.DARK))

        theme_row.addWidget(light_btn)
        theme_row.addWidget(dark_btn)
        theme_row.addStretch()
        layout.addLayout(theme_row)

        # --- Services section ---
        layout.addWidget(self._section_header(t("settings.services")))

        services_subtitle = QLabel(t("settings.services_subtitle"))
        services_subtitle.setProperty("class", "sectionSubtitle")
        services_subtitle.setWordWrap(True)
        layout.addWidget(services_subtitle)

        form = QFormLayout()
        self._inference_edit = QLineEdit()
        self._inference_edit.setPlaceholderText(t("settings.demo_placeholder"))
        self._profile_edit = QLineEdit()
        self._prediction_edit = QLineEdit()
        self._token_edit = QLineEdit()
        self._token_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self._timeout_spin = QDoubleSpinBox()
        self._timeout_spin.setRange(1.0, 300.0)
        self._timeout_spin.setSuffix(" s")

        form.addRow(t("settings.inference_url"), self._inference_edit)
        form.addRow(t("settings.profile_api_url"), self._profile_edit)
        form.addRow(t("settings.prediction_api_url"), self._prediction_edit)
        form.addRow(t("settings.api_token"), self._token_edit)
        form.addRow(t("settings.request_timeout"), self._timeout_spin)
        layout.addLayout(form)

        save_row = QHBoxLayout()
        self._save_btn = QPushButton(t("settings.save_services"))
        self._save_btn.setObjectName("primaryButton")
        self._save_btn.clicked.connect(self._save_services)
        self._saved_label = QLabel("")
        self._saved_label.setStyleSheet("font-size: 11px; color: #888; font-style: italic;")
        save_row.addWidget(self._save_btn)
        save_row.addWidget(self._saved_label, 1)
        layout.addLayout(save_row)

        # --- About section ---
        layout.addWidget(self._section_header(t("settings.about")))
        about_text = QLabel(
            f"{t('about.description')}\n"
            f"{t('about.version', version='1.0.0')}"
        )
        about_text.setProperty("class", "sectionSubtitle")
        about_text.setWordWrap(True)
        layout.addWidget(about_text)

        layout.addStretch()
        scroll.setWidget(container)
        outer.addWidget(scroll)

    @staticmethod
    def _section_header(text: str) -> QLabel:
        header = QLabel(text)
        header.setProperty("class", "sectionTitle")
        header.setStyleSheet("font-size: 16px; margin-top: 12px;")
        return header

    def _load_services(self):
        config = load_config(self._settings)
        self._inference_edit.setText(config.inference_url)
        self._profile_edit.setText(config.profile_api_url)
        self._prediction_edit.setText(config.prediction_api_url)
        self._token_edit.setText(config.api_token)
        self._timeout_spin.setValue(config.request_timeout_s)

    def service_config(self) -> AppConfig:
        """The endpoints as currently entered in the form."""
        return AppConfig(
            inference_url=self._inference_edit.text().strip(),
            profile_api_url=self._profile_edit.text().strip() or AppConfig.profile_api_url,
            prediction_api_url=self._prediction_edit.text().strip() or AppConfig.prediction_api_url,
            api_token=self._token_edit.text().strip(),
            request_timeout_s=self._timeout_spin.value(),
        )

    def _save_services(self):
        save_config(self.service_config(), self._settings)
        logger.info("Service settings saved")
        self._saved_label.setText(t("settings.services_saved"))

    def _on_language_changed(self, index: int):
        set_language(self._lang_combo.itemData(index))

    def cleanup(self):
        pass
