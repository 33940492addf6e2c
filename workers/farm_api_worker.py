"""Background workers for farm backend calls made by the dashboard."""

from PyQt6.QtCore import QThread, pyqtSignal

from core.dashboard import PendingTask, derive_pending_tasks
from core.farm_api import FarmApiClient


class PendingTasksWorker(QThread):
    """Fetches analysis records and derives the pending tasks."""

    finished = pyqtSignal(object)   # List[PendingTask]
    error = pyqtSignal(str)

    def __init__(self, client: FarmApiClient, parent=None):
        super().__init__(parent)
        self._client = client

    def run(self):
        try:
            records = self._client.list_analyses()
            self.finished.emit(derive_pending_tasks(records))
        except Exception as e:
            self.error.emit(str(e))


class TaskUpdateWorker(QThread):
    """Clears one task flag on the backend."""

    finished = pyqtSignal(object)   # PendingTask
    error = pyqtSignal(str)

    def __init__(self, client: FarmApiClient, task: PendingTask, parent=None):
        super().__init__(parent)
        self._client = client
        self._task = task

    def run(self):
        try:
            self._client.update_analysis(self._task.analysis_id, self._task.flag, False)
            self.finished.emit(self._task)
        except Exception as e:
            self.error.emit(str(e))


class PredictionWorker(QThread):
    """Requests the yield and market estimates."""

    finished = pyqtSignal(object, object)   # YieldPrediction, MarketPrediction
    error = pyqtSignal(str)

    def __init__(self, client: FarmApiClient, parent=None):
        super().__init__(parent)
        self._client = client

    def run(self):
        try:
            yield_prediction = self._client.predict_yield()
            market_prediction = self._client.predict_market()
            self.finished.emit(yield_prediction, market_prediction)
        except Exception as e:
            self.error.emit(str(e))
