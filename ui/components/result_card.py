"""Leaf analysis result card with diagnosis, treatment, and export buttons."""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.utils import AnalysisResult, ImageAsset
from i18n import t
from ui.components.confidence_bar import ConfidenceBar


class ResultCard(QWidget):
    """Displays a completed analysis with export options."""

    export_requested = pyqtSignal(str)   # "pdf" / "json" / "txt"
    analyze_another = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("resultCard")
        self._setup_ui()
        self.hide()

    def _setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(16)

        header = QLabel(t("results.title"))
        header.setObjectName("resultHeader")

        body = QGridLayout()
        body.setHorizontalSpacing(24)
        body.setVerticalSpacing(12)

        # Left column: image and details
        left_col = QVBoxLayout()
        left_col.setSpacing(8)

        self._image_label = QLabel()
        self._image_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._image_label.setFixedSize(220, 220)

        disease_caption = QLabel(t("results.disease_detected"))
        disease_caption.setProperty("class", "sectionSubtitle")
        self._disease_label = QLabel("")
        self._disease_label.setObjectName("diseaseLabel")
        self._disease_label.setWordWrap(True)

        confidence_caption = QLabel(t("results.confidence"))
        confidence_caption.setProperty("class", "sectionSubtitle")
        self._confidence_bar = ConfidenceBar()

        left_col.addWidget(self._image_label)
        left_col.addWidget(disease_caption)
        left_col.addWidget(self._disease_label)
        left_col.addWidget(confidence_caption)
        left_col.addWidget(self._confidence_bar)
        left_col.addStretch()

        # Right column: description, symptoms, treatment
        right_col = QVBoxLayout()
        right_col.setSpacing(8)
        self._description_label = self._add_section(right_col, t("results.description"))
        self._symptoms_label = self._add_section(right_col, t("results.symptoms"))
        self._treatment_label = self._add_section(right_col, t("results.treatment"))
        right_col.addStretch()

        body.addLayout(left_col, 0, 0)
        body.addLayout(right_col, 0, 1)
        body.setColumnStretch(1, 2)

        # Actions
        action_row = QHBoxLayout()
        action_row.setSpacing(8)

        self._another_btn = QPushButton(t("results.analyze_another"))
        self._another_btn.setProperty("class", "secondaryButton")
        self._another_btn.clicked.connect(self.analyze_another.emit)
        action_row.addWidget(self._another_btn)
        action_row.addStretch()

        for fmt in ("pdf", "json", "txt"):
            btn = QPushButton(t(f"results.export_{fmt}"))
            if fmt == "pdf":
                btn.setObjectName("primaryButton")
            else:
                btn.setProperty("class", "secondaryButton")
            btn.clicked.connect(lambda checked, f=fmt: self.export_requested.emit(f))
            action_row.addWidget(btn)

        layout.addWidget(header)
        layout.addLayout(body)
        layout.addLayout(action_row)

    @staticmethod
    def _add_section(layout: QVBoxLayout, title: str) -> QLabel:
        heading = QLabel(title)
        heading.setProperty("class", "sectionTitle")
        heading.setStyleSheet("font-size: 15px;")
        text = QLabel("")
        text.setWordWrap(True)
        text.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        layout.addWidget(heading)
        layout.addWidget(text)
        return text

    def show_result(self, result: AnalysisResult, asset: ImageAsset):
        pixmap = QPixmap()
        if pixmap.loadFromData(asset.data):
            self._image_label.setPixmap(pixmap.scaled(
                220, 220,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            ))
        else:
            self._image_label.setText(asset.name)

        self._disease_label.setText(result.display_name)
        self._confidence_bar.set_score(result.confidence)
        self._description_label.setText(result.description)
        self._symptoms_label.setText(result.symptoms)
        self._treatment_label.setText(result.recommendations or result.treatment)
        self.show()

    def disease_text(self) -> str:
        return self._disease_label.text()

    def confidence_text(self) -> str:
        return self._confidence_bar.text()

    def reset(self):
        """Clear results and hide."""
        self._image_label.clear()
        self._disease_label.setText("")
        self._confidence_bar.reset()
        self._description_label.setText("")
        self._symptoms_label.setText("")
        self._treatment_label.setText("")
        self.hide()
