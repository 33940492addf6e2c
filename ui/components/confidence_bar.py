"""Horizontal confidence bar with an animated fill and percentage label."""

from PyQt6.QtCore import QEasingCurve, QPropertyAnimation, QRectF, Qt, pyqtProperty
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtWidgets import QWidget

from core.utils import format_confidence


class ConfidenceBar(QWidget):
    """Shows a 0-1 confidence as a filled bar and a whole-percent label."""

    COLOR_FILL = QColor("#22C55E")
    COLOR_TRACK = QColor("#E5E7EB")
    COLOR_TEXT = QColor("#4B5563")

    BAR_HEIGHT = 8

    def __init__(self, parent=None):
        super().__init__(parent)
        self._score = 0.0
        self._animated_score = 0.0
        self.setMinimumHeight(self.BAR_HEIGHT + 22)

        self._animation = QPropertyAnimation(self, b"animatedScore")
        self._animation.setDuration(600)
        self._animation.setEasingCurve(QEasingCurve.Type.OutCubic)

    def set_score(self, score: float):
        """Set the score (0.0 - 1.0) and animate to it."""
        self._score = max(0.0, min(1.0, score))
        self._animation.setStartValue(self._animated_score)
        self._animation.setEndValue(self._score)
        self._animation.start()

    def score(self) -> float:
        return self._score

    def text(self) -> str:
        return format_confidence(self._score)

    def _get_animated_score(self) -> float:
        return self._animated_score

    def _set_animated_score(self, value: float):
        self._animated_score = value
        self.update()

    animatedScore = pyqtProperty(float, _get_animated_score, _set_animated_score)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(Qt.PenStyle.NoPen)

        radius = self.BAR_HEIGHT / 2
        track = QRectF(0, 0, self.width(), self.BAR_HEIGHT)
        painter.setBrush(self.COLOR_TRACK)
        painter.drawRoundedRect(track, radius, radius)

        if self._animated_score > 0:
            fill = QRectF(0, 0, self.width() * self._animated_score, self.BAR_HEIGHT)
            painter.setBrush(self.COLOR_FILL)
            painter.drawRoundedRect(fill, radius, radius)

        # Label shows the target value, not the animation frame
        painter.setPen(self.COLOR_TEXT)
        label_rect = QRectF(0, self.BAR_HEIGHT + 4, self.width(), 18)
        painter.drawText(label_rect, Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignTop, self.text())
        painter.end()

    def reset(self):
        self._animation.stop()
        self._animated_score = 0.0
        self._score = 0.0
        self.update()
