"""Inline banner for validation and service errors."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QHBoxLayout, QLabel, QWidget


class MessageBanner(QWidget):
    """Red warning strip shown above the drop zone. Hidden when empty."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("errorBanner")
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)
        layout.setSpacing(10)

        icon_label = QLabel("\u26a0")
        icon_label.setProperty("class", "errorIcon")
        icon_label.setFixedWidth(24)
        icon_label.setAlignment(Qt.AlignmentFlag.AlignTop)

        self._text_label = QLabel("")
        self._text_label.setProperty("class", "errorText")
        self._text_label.setWordWrap(True)

        layout.addWidget(icon_label)
        layout.addWidget(self._text_label, 1)

    def show_message(self, message: str):
        self._text_label.setText(message)
        self.show()

    def text(self) -> str:
        return self._text_label.text()

    def clear(self):
        self._text_label.setText("")
        self.hide()
