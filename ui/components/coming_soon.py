"""Placeholder page for features that are not available yet."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from i18n import t


class ComingSoonWidget(QWidget):
    """Icon, title, and a short description, centered."""

    def __init__(self, title_key: str, desc_key: str, icon: str = "\U0001f6a7", parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._layout.setSpacing(16)

        icon_label = QLabel(icon)
        icon_label.setStyleSheet("font-size: 48px;")
        icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        title = QLabel(t(title_key))
        title.setProperty("class", "comingSoonTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)

        badge = QLabel(t("common.coming_soon"))
        badge.setProperty("class", "comingSoonBadge")
        badge.setAlignment(Qt.AlignmentFlag.AlignCenter)

        desc = QLabel(t(desc_key))
        desc.setProperty("class", "comingSoonDesc")
        desc.setWordWrap(True)
        desc.setAlignment(Qt.AlignmentFlag.AlignCenter)
        desc.setMaximumWidth(420)

        self._layout.addWidget(icon_label)
        self._layout.addWidget(title)
        self._layout.addWidget(badge)
        self._layout.addWidget(desc, alignment=Qt.AlignmentFlag.AlignHCenter)

    def cleanup(self):
        pass
