"""Drag-and-drop / click-to-browse zone with a preview of the selected leaf."""

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QDragEnterEvent, QDropEvent, QPainter, QPen, QPixmap
from PyQt6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.file_intake import decode_preview
from core.utils import ImageAsset, format_file_size
from i18n import t


class ImageDropZone(QWidget):
    """Collects a file path from a drop or the browse dialog.

    The zone does no validation of its own: both entry points emit
    file_selected and the owner runs the same intake check for either.
    """

    file_selected = pyqtSignal(str)
    clear_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._asset = None
        self._drag_over = False
        self.setAcceptDrops(True)
        self.setObjectName("imageDropZone")
        self.setMinimumHeight(200)
        self._setup_ui()

    def _setup_ui(self):
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(20, 20, 20, 20)
        self._layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._icon_label = QLabel("\U0001f343")
        self._icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._icon_label.setProperty("class", "dropZoneIcon")

        self._text_label = QLabel(t("leaf.drop_text"))
        self._text_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._text_label.setWordWrap(True)
        self._text_label.setProperty("class", "dropZoneText")

        self._formats_label = QLabel(t("leaf.supported_formats"))
        self._formats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._formats_label.setProperty("class", "dropZoneHint")

        self._preview_label = QLabel()
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setFixedHeight(200)
        self._preview_label.hide()

        self._file_info_label = QLabel()
        self._file_info_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._file_info_label.setProperty("class", "dropZoneFileInfo")
        self._file_info_label.hide()

        self._remove_row = QWidget()
        remove_layout = QHBoxLayout(self._remove_row)
        remove_layout.setContentsMargins(0, 0, 0, 0)
        remove_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._remove_btn = QPushButton(t("leaf.remove_image"))
        self._remove_btn.setProperty("class", "removeFileButton")
        self._remove_btn.setFixedWidth(120)
        self._remove_btn.clicked.connect(self.clear_requested.emit)
        remove_layout.addWidget(self._remove_btn)
        self._remove_row.hide()

        self._layout.addWidget(self._icon_label)
        self._layout.addWidget(self._text_label)
        self._layout.addWidget(self._formats_label)
        self._layout.addWidget(self._preview_label)
        self._layout.addWidget(self._file_info_label)
        self._layout.addWidget(self._remove_row)

    def show_asset(self, asset: ImageAsset):
        """Display the validated image."""
        self._asset = asset
        self._file_info_label.setText(
            t("leaf.image_selected", name=asset.name, size=format_file_size(asset.size))
        )
        self._file_info_label.show()

        pixmap = QPixmap()
        if pixmap.loadFromData(decode_preview(asset.preview_uri)):
            scaled = pixmap.scaled(
                320, 200,
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
            self._preview_label.setPixmap(scaled)
        else:
            self._preview_label.setText(asset.name)
        self._preview_label.show()

        self._icon_label.hide()
        self._text_label.hide()
        self._formats_label.hide()
        self._remove_row.show()
        self.update()

    def clear(self):
        """Return to the placeholder."""
        self._asset = None
        self._preview_label.hide()
        self._preview_label.clear()
        self._file_info_label.hide()
        self._remove_row.hide()
        self._icon_label.show()
        self._text_label.show()
        self._formats_label.show()
        self._drag_over = False
        self.update()

    def set_locked(self, locked: bool):
        """Ignore drops and clicks, e.g. while an analysis is running."""
        self.setAcceptDrops(not locked)
        self._remove_btn.setEnabled(not locked)

    def _browse_file(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            t("common.browse"),
            "",
            f"{t('leaf.file_filter')} (*.jpg *.jpeg *.png);;{t('leaf.all_files')} (*)",
        )
        if file_path:
            self.file_selected.emit(file_path)

    # --- Drag and drop ---

    def dragEnterEvent(self, event: QDragEnterEvent):
        if event.mimeData().hasUrls():
            urls = event.mimeData().urls()
            if urls and urls[0].isLocalFile():
                event.acceptProposedAction()
                self._drag_over = True
                self.update()

    def dragLeaveEvent(self, event):
        self._drag_over = False
        self.update()

    def dropEvent(self, event: QDropEvent):
        self._drag_over = False
        urls = event.mimeData().urls()
        if urls and urls[0].isLocalFile():
            self.file_selected.emit(urls[0].toLocalFile())
        self.update()

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton and self.acceptDrops():
            self._browse_file()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if self._drag_over:
            pen = QPen(QColor("#16A34A"), 2, Qt.PenStyle.DashLine)
        elif self._asset is not None:
            pen = QPen(QColor("#86EFAC"), 2, Qt.PenStyle.SolidLine)
        else:
            pen = QPen(QColor("#9CA3AF"), 2, Qt.PenStyle.DashLine)

        pen.setDashPattern([8, 4])
        painter.setPen(pen)
        painter.drawRoundedRect(self.rect().adjusted(1, 1, -1, -1), 12, 12)
        painter.end()
