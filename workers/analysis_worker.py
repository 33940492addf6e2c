"""Background worker that performs the single inference call of an analysis."""

import logging

from PyQt6.QtCore import QThread, pyqtSignal

from core.inference_client import InferenceError
from core.utils import InferenceErrorReason
from core.workflow import AnalysisTicket

logger = logging.getLogger("farmlens.analysis_worker")


class AnalysisWorker(QThread):
    """Runs InferenceClient.analyze off the UI thread.

    Both result signals carry the ticket's request id so the workflow can
    drop completions from a superseded request.
    """

    progress = pyqtSignal(int, int, str)   # step, total, message
    finished = pyqtSignal(str, object)     # request_id, AnalysisResult
    failed = pyqtSignal(str, object)       # request_id, InferenceError

    def __init__(self, client, ticket: AnalysisTicket, parent=None):
        super().__init__(parent)
        self._client = client
        self._ticket = ticket
        self._cancelled = False

    @property
    def request_id(self) -> str:
        return self._ticket.request_id

    def run(self):
        try:
            self._on_progress(1, 2, "Uploading leaf image...")
            result = self._client.analyze(self._ticket.asset)
        except InferenceError as e:
            if not self._cancelled:
                self.failed.emit(self._ticket.request_id, e)
        except Exception as e:
            logger.exception("Unexpected error during analysis %s", self._ticket.request_id)
            if not self._cancelled:
                self.failed.emit(
                    self._ticket.request_id,
                    InferenceError(InferenceErrorReason.TRANSPORT, str(e)),
                )
        else:
            self._on_progress(2, 2, "Analysis complete")
            if not self._cancelled:
                self.finished.emit(self._ticket.request_id, result)

    def cancel(self):
        """Stop reporting. The HTTP call itself runs to completion."""
        self._cancelled = True

    def _on_progress(self, step: int, total: int, message: str):
        if not self._cancelled:
            self.progress.emit(step, total, message)
