"""Main application window with sidebar navigation and stacked content."""

from PyQt6.QtGui import QAction
from PyQt6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from core.config import AppConfig
from core.farm_api import FarmApiClient
from i18n import t
from ui.components.coming_soon import ComingSoonWidget
from ui.dashboard_widget import DashboardWidget
from ui.leaf_analysis_widget import LeafAnalysisWidget
from ui.predictive_widget import PredictiveWidget
from ui.settings_widget import SettingsWidget
from ui.theme import ThemeManager

DASHBOARD_TAB = 0
LEAF_TAB = 1
PREDICTIVE_TAB = 2
CHATBOT_TAB = 3
SETTINGS_TAB = 4


class MainWindow(QMainWindow):
    """Main application window with sidebar and stacked content area."""

    def __init__(
        self,
        theme_manager: ThemeManager,
        config: AppConfig,
        inference_client,
        farm_client: FarmApiClient,
    ):
        super().__init__()
        self._theme_manager = theme_manager
        self._config = config
        self._inference_client = inference_client
        self._farm_client = farm_client
        self._nav_buttons = []
        self.setWindowTitle(t("app.title"))
        self.setMinimumSize(900, 620)
        self.resize(1060, 700)
        self._setup_ui()
        self._setup_menu_bar()
        self._switch_tab(DASHBOARD_TAB)

    def _setup_ui(self):
        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QHBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self._create_sidebar())

        self._stack = QStackedWidget()
        self._stack.setObjectName("contentArea")

        self._dashboard_widget = DashboardWidget(self._farm_client)
        self._dashboard_widget.navigate_requested.connect(self._switch_tab)
        self._leaf_widget = LeafAnalysisWidget(self._inference_client)
        self._predictive_widget = PredictiveWidget(self._farm_client)
        self._chatbot_widget = ComingSoonWidget("chatbot.title", "chatbot.desc", icon="\U0001f4ac")
        self._settings_widget = SettingsWidget(self._theme_manager)

        self._stack.addWidget(self._dashboard_widget)    # 0
        self._stack.addWidget(self._leaf_widget)         # 1
        self._stack.addWidget(self._predictive_widget)   # 2
        self._stack.addWidget(self._chatbot_widget)      # 3
        self._stack.addWidget(self._settings_widget)     # 4

        main_layout.addWidget(self._stack, 1)

    def _create_sidebar(self) -> QWidget:
        sidebar = QWidget()
        sidebar.setObjectName("sidebar")
        sidebar.setFixedWidth(230)

        layout = QVBoxLayout(sidebar)
        layout.setContentsMargins(12, 16, 12, 16)
        layout.setSpacing(4)

        logo = QLabel(t("app.title"))
        logo.setObjectName("sidebarLogo")
        layout.addWidget(logo)

        subtitle = QLabel(t("app.subtitle"))
        subtitle.setObjectName("sidebarSubtitle")
        subtitle.setStyleSheet("font-size: 11px; color: #888; padding-bottom: 12px;")
        layout.addWidget(subtitle)

        if self._config.demo_mode:
            demo_label = QLabel(t("app.demo_mode"))
            demo_label.setProperty("class", "demoBadge")
            layout.addWidget(demo_label)

        section_label = QLabel(t("sidebar.farm"))
        section_label.setProperty("class", "sidebarSection")
        layout.addWidget(section_label)

        nav_items = [
            (t("sidebar.dashboard"), "\U0001f3e1"),       # 0 house with garden
            (t("sidebar.leaf_analysis"), "\U0001f343"),   # 1 leaf
            (t("sidebar.predictive"), "\U0001f4c8"),      # 2 chart
            (t("sidebar.chatbot"), "\U0001f4ac"),         # 3 speech balloon
        ]

        for i, (label, icon) in enumerate(nav_items):
            btn = QPushButton(f"  {icon}  {label}")
            btn.setProperty("class", "navButton")
            btn.clicked.connect(lambda checked, idx=i: self._switch_tab(idx))
            layout.addWidget(btn)
            self._nav_buttons.append(btn)

        layout.addStretch()

        settings_btn = QPushButton(f"  \u2699\ufe0f  {t('sidebar.settings')}")
        settings_btn.setProperty("class", "navButton")
        settings_btn.clicked.connect(lambda: self._switch_tab(SETTINGS_TAB))
        layout.addWidget(settings_btn)
        self._nav_buttons.append(settings_btn)

        return sidebar

    def _switch_tab(self, index: int):
        """Change active tab and update button styling."""
        self._stack.setCurrentIndex(index)
        for i, btn in enumerate(self._nav_buttons):
            is_active = i == index
            btn.setProperty("active", "true" if is_active else "false")
            btn.style().unpolish(btn)
            btn.style().polish(btn)

        if index == DASHBOARD_TAB:
            self._dashboard_widget.refresh()

    def _setup_menu_bar(self):
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu(t("menu.file"))
        quit_action = QAction(t("menu.quit"), self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = menu_bar.addMenu(t("menu.view"))
        toggle_theme = QAction(t("menu.toggle_dark_mode"), self)
        toggle_theme.setShortcut("Ctrl+D")
        toggle_theme.triggered.connect(self._theme_manager.toggle_theme)
        view_menu.addAction(toggle_theme)

        nav_menu = menu_bar.addMenu(t("menu.navigate"))
        nav_shortcuts = [
            (t("sidebar.dashboard"), "Ctrl+1", DASHBOARD_TAB),
            (t("sidebar.leaf_analysis"), "Ctrl+2", LEAF_TAB),
            (t("sidebar.predictive"), "Ctrl+3", PREDICTIVE_TAB),
            (t("sidebar.chatbot"), "Ctrl+4", CHATBOT_TAB),
            (t("sidebar.settings"), "Ctrl+,", SETTINGS_TAB),
        ]
        for label, shortcut, index in nav_shortcuts:
            action = QAction(label, self)
            action.setShortcut(shortcut)
            action.triggered.connect(lambda checked, i=index: self._switch_tab(i))
            nav_menu.addAction(action)

    def closeEvent(self, event):
        """Clean up all workers before closing."""
        widgets = [
            self._dashboard_widget,
            self._leaf_widget,
            self._predictive_widget,
            self._chatbot_widget,
            self._settings_widget,
        ]
        for w in widgets:
            w.cleanup()
        QApplication.processEvents()
        event.accept()
