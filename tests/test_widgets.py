"""Rendering tests for the leaf analysis, dashboard and predictive tabs (offscreen Qt)."""

import threading
import time

from PyQt6 import sip

from core.dashboard import PendingTask
from core.farm_api import MarketPrediction, YieldPrediction
from core.inference_client import DemoInferenceClient, InferenceError
from core.utils import InferenceErrorReason
from core.workflow import WorkflowPhase
from ui.components.confidence_bar import ConfidenceBar
from ui.dashboard_widget import DashboardWidget
from ui.leaf_analysis_widget import LeafAnalysisWidget
from ui.predictive_widget import PredictiveWidget


class StubFarmClient:
    def predict_yield(self, params=None):
        return YieldPrediction(predicted_yield=4.2, unit="tons/hectare", confidence=0.8)

    def predict_market(self, params=None):
        return MarketPrediction(2150, "INR", "quintal", "rising", "Hold")

    def update_analysis(self, analysis_id, flag, value=False):
        pass


class SlowFirstClient:
    """Inference stand-in whose first call blocks for a while."""

    def __init__(self, result, delay_s=0.5):
        self.calls = 0
        self._result = result
        self._delay_s = delay_s
        self._lock = threading.Lock()

    def analyze(self, asset):
        with self._lock:
            self.calls += 1
            first = self.calls == 1
        if first:
            time.sleep(self._delay_s)
        return self._result


class TestLeafAnalysisWidget:
    def test_preview_enables_analyze(self, qapp, leaf_jpeg_path):
        widget = LeafAnalysisWidget(DemoInferenceClient(delay_s=0))
        assert not widget._analyze_btn.isEnabled()

        widget._on_file_selected(leaf_jpeg_path)

        assert widget.workflow.phase == WorkflowPhase.PREVIEWING
        assert widget._analyze_btn.isEnabled()

    def test_rejection_shows_banner(self, qapp, tmp_dir):
        path = tmp_dir / "leaf.gif"
        path.write_bytes(b"GIF89a")
        widget = LeafAnalysisWidget(DemoInferenceClient(delay_s=0))

        widget._on_file_selected(str(path))

        assert "image/gif" in widget._banner.text()
        assert widget.workflow.phase == WorkflowPhase.IDLE

    def test_missing_file_shows_banner(self, qapp, tmp_dir):
        widget = LeafAnalysisWidget(DemoInferenceClient(delay_s=0))
        widget._on_file_selected(str(tmp_dir / "gone.jpg"))
        assert widget._banner.text()

    def test_result_rendered(self, qapp, leaf_jpeg_path, sample_result):
        widget = LeafAnalysisWidget(DemoInferenceClient(delay_s=0))
        widget._on_file_selected(leaf_jpeg_path)
        ticket = widget.workflow.request_analysis()
        widget.workflow.complete(ticket.request_id, sample_result)

        assert widget._result_card.disease_text() == "Apple Black rot"
        assert widget._result_card.confidence_text() == "92%"
        assert widget._upload_section.isHidden()

    def test_failure_offers_retry(self, qapp, leaf_jpeg_path):
        widget = LeafAnalysisWidget(DemoInferenceClient(delay_s=0))
        widget._on_file_selected(leaf_jpeg_path)
        ticket = widget.workflow.request_analysis()
        widget.workflow.fail(ticket.request_id, InferenceError(InferenceErrorReason.TRANSPORT))

        assert widget._analyze_btn.isEnabled()
        assert widget._banner.text()

        widget._on_reset()
        assert widget.workflow.phase == WorkflowPhase.IDLE
        assert not widget._analyze_btn.isEnabled()

    def test_double_analyze_makes_one_call(self, qapp, leaf_jpeg_path, sample_result):
        client = SlowFirstClient(sample_result, delay_s=0.2)
        widget = LeafAnalysisWidget(client)
        widget._on_file_selected(leaf_jpeg_path)

        widget._on_analyze()
        widget._on_analyze()

        assert len(widget._workers) == 1
        widget.cleanup()
        assert client.calls == 1

    def test_cleanup_waits_for_cancelled_analysis(self, qapp, leaf_jpeg_path, sample_result):
        client = SlowFirstClient(sample_result)
        widget = LeafAnalysisWidget(client)
        widget._on_file_selected(leaf_jpeg_path)
        widget._on_analyze()
        widget._on_reset()
        widget._on_file_selected(leaf_jpeg_path)
        widget._on_analyze()
        workers = list(widget._workers)
        assert len(workers) == 2

        widget.cleanup()

        assert not any(worker.isRunning() for worker in workers)
        qapp.processEvents()
        assert widget.workflow.phase == WorkflowPhase.RESULT
        assert client.calls == 2
        sip.delete(widget)


class TestConfidenceBar:
    def test_text(self, qapp):
        bar = ConfidenceBar()
        bar.set_score(0.92)
        assert bar.text() == "92%"
        bar.reset()
        assert bar.score() == 0.0


class TestDashboardWidget:
    def test_finished_update_worker_released(self, qapp):
        task = PendingTask("irrigation_needed", "a")
        widget = DashboardWidget(StubFarmClient())
        widget._tasks = [task]

        widget._mark_done(task)
        worker = widget._update_workers[0]
        assert worker.wait(2000)
        qapp.processEvents()

        assert widget._update_workers == []
        assert widget._tasks == []


class TestPredictiveWidget:
    def test_preview_output(self, qapp):
        widget = PredictiveWidget(StubFarmClient())
        widget._on_predictions(
            StubFarmClient().predict_yield(),
            StubFarmClient().predict_market(),
        )
        text = widget.output_text()
        assert "4.2 tons/hectare" in text
        assert "rising" in text

    def test_error_output(self, qapp):
        widget = PredictiveWidget(StubFarmClient())
        widget._on_error("HTTP 503")
        assert "HTTP 503" in widget.output_text()
