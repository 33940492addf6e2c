"""Background worker for report export."""

from PyQt6.QtCore import QThread, pyqtSignal

from core.report_exporter import REPORT_FORMATS, ReportExporter
from core.workflow import LeafWorkflow
from i18n import t


class ReportWorker(QThread):
    """Exports the workflow's current result in a background thread."""

    progress = pyqtSignal(int, int, str)
    finished = pyqtSignal(str)            # output_path
    error = pyqtSignal(str)

    def __init__(
        self,
        workflow: LeafWorkflow,
        output_path: str,
        format: str = "pdf",
        exporter: ReportExporter = None,
        parent=None,
    ):
        super().__init__(parent)
        self._workflow = workflow
        self._output_path = output_path
        self._format = format
        self._exporter = exporter or ReportExporter()

    def run(self):
        if self._format not in REPORT_FORMATS:
            self.error.emit(t("export.unknown_format", format=self._format))
            return

        try:
            success = self._workflow.export(
                self._exporter,
                self._output_path,
                self._format,
                on_progress=lambda step, total, msg: self.progress.emit(step, total, msg),
            )
        except Exception as e:
            self.error.emit(str(e))
            return

        if success:
            self.finished.emit(self._output_path)
        else:
            self.error.emit(t("export.failed", format=self._format.upper()))
