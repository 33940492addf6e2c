"""Leaf disease analysis tab."""

import logging
from pathlib import Path
from typing import List

from PyQt6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.utils import get_reports_dir
from core.workflow import LeafWorkflow, WorkflowPhase, WorkflowState
from i18n import t
from ui.components.image_drop_zone import ImageDropZone
from ui.components.message_banner import MessageBanner
from ui.components.progress_widget import ProgressWidget
from ui.components.result_card import ResultCard
from workers.analysis_worker import AnalysisWorker
from workers.report_worker import ReportWorker

logger = logging.getLogger("farmlens.leaf_analysis_widget")

_TIPS = ("leaf.tip_lighting", "leaf.tip_focus", "leaf.tip_areas", "leaf.tip_objects")
_FAQ = ("accuracy", "plants", "privacy")


class LeafAnalysisWidget(QWidget):
    """Upload a leaf photo, run the analysis, and review the diagnosis.

    The widget only renders; every decision goes through its LeafWorkflow.
    """

    def __init__(self, client, parent=None):
        super().__init__(parent)
        self._client = client
        self._workflow = LeafWorkflow()
        self._workers: List[AnalysisWorker] = []
        self._report_worker: ReportWorker = None
        self._setup_ui()
        self._connect_signals()
        self._workflow.subscribe(self._render)
        self._render(self._workflow.state)

    @property
    def workflow(self) -> LeafWorkflow:
        return self._workflow

    def _setup_ui(self):
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("leaf.title"))
        title.setProperty("class", "sectionTitle")

        subtitle = QLabel(t("leaf.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        # Upload section, hidden while a result is shown
        self._upload_section = QWidget()
        upload_layout = QVBoxLayout(self._upload_section)
        upload_layout.setContentsMargins(0, 0, 0, 0)
        upload_layout.setSpacing(12)

        self._banner = MessageBanner()
        self._drop_zone = ImageDropZone()

        self._analyze_btn = QPushButton(t("leaf.analyze_button"))
        self._analyze_btn.setObjectName("primaryButton")
        self._analyze_btn.setEnabled(False)

        self._progress = ProgressWidget()

        tips_title = QLabel(t("leaf.tips_title"))
        tips_title.setProperty("class", "sectionTitle")
        tips_title.setStyleSheet("font-size: 15px;")
        tips = QLabel("\n".join(f"\u2714  {t(key)}" for key in _TIPS))
        tips.setProperty("class", "sectionSubtitle")

        upload_layout.addWidget(self._banner)
        upload_layout.addWidget(self._drop_zone)
        upload_layout.addWidget(self._analyze_btn)
        upload_layout.addWidget(self._progress)
        upload_layout.addWidget(tips_title)
        upload_layout.addWidget(tips)

        self._result_card = ResultCard()

        faq_title = QLabel(t("leaf.faq_title"))
        faq_title.setProperty("class", "sectionTitle")

        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._upload_section)
        layout.addWidget(self._result_card)
        layout.addWidget(faq_title)
        for key in _FAQ:
            question = QLabel(t(f"leaf.faq_{key}_q"))
            question.setStyleSheet("font-weight: bold;")
            answer = QLabel(t(f"leaf.faq_{key}_a"))
            answer.setProperty("class", "sectionSubtitle")
            answer.setWordWrap(True)
            layout.addWidget(question)
            layout.addWidget(answer)
        layout.addStretch()

        scroll.setWidget(container)
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.addWidget(scroll)

    def _connect_signals(self):
        self._drop_zone.file_selected.connect(self._on_file_selected)
        self._drop_zone.clear_requested.connect(self._on_reset)
        self._analyze_btn.clicked.connect(self._on_analyze)
        self._progress.cancel_clicked.connect(self._on_reset)
        self._result_card.analyze_another.connect(self._on_reset)
        self._result_card.export_requested.connect(self._on_export)

    # --- Rendering ---

    def _render(self, state: WorkflowState):
        phase = state.phase
        self._upload_section.setVisible(phase != WorkflowPhase.RESULT)
        self._drop_zone.set_locked(phase == WorkflowPhase.ANALYZING)

        if phase == WorkflowPhase.IDLE:
            self._drop_zone.clear()
            self._progress.reset()
            self._result_card.reset()
        elif state.asset is not None:
            self._drop_zone.show_asset(state.asset)

        if phase == WorkflowPhase.ANALYZING:
            self._analyze_btn.setEnabled(False)
            self._analyze_btn.setText(t("leaf.analyzing"))
            self._banner.clear()
            self._progress.start()
        elif phase == WorkflowPhase.FAILED:
            self._progress.reset()
            self._analyze_btn.setEnabled(True)
            self._analyze_btn.setText(t("leaf.retry_button"))
            self._banner.show_message(state.error.message)
        else:
            self._analyze_btn.setEnabled(phase == WorkflowPhase.PREVIEWING)
            self._analyze_btn.setText(t("leaf.analyze_button"))

        if phase == WorkflowPhase.RESULT:
            self._progress.reset()
            self._result_card.show_result(state.result, state.asset)
        elif phase == WorkflowPhase.PREVIEWING:
            self._banner.clear()
            self._result_card.reset()

    # --- Events ---

    def _on_file_selected(self, path: str):
        try:
            error = self._workflow.select_file(path)
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            self._banner.show_message(t("validation.unreadable"))
            return
        if error is not None:
            self._banner.show_message(error.message)

    def _on_analyze(self):
        ticket = self._workflow.request_analysis()
        if ticket is None:
            return

        # A cancelled worker can still be blocked in its call; keep it until it exits
        self._workers = [w for w in self._workers if w.isRunning()]
        worker = AnalysisWorker(self._client, ticket, parent=self)
        worker.progress.connect(self._progress.update_progress)
        worker.finished.connect(self._workflow.complete)
        worker.failed.connect(self._workflow.fail)
        self._workers.append(worker)
        worker.start()

    def _on_reset(self):
        for worker in self._workers:
            worker.cancel()
        self._banner.clear()
        self._workflow.reset()

    def _on_export(self, fmt: str):
        if self._workflow.phase != WorkflowPhase.RESULT:
            return
        asset = self._workflow.state.asset
        stem = Path(asset.name).stem if asset and asset.name else "leaf"
        default_path = str(get_reports_dir() / f"{stem}_report.{fmt}")
        path, _ = QFileDialog.getSaveFileName(
            self, t(f"export.save_{fmt}_title"), default_path, f"*.{fmt}"
        )
        if not path:
            return
        self._report_worker = ReportWorker(self._workflow, path, format=fmt, parent=self)
        self._report_worker.finished.connect(
            lambda p: QMessageBox.information(self, t("common.success"), t("export.success", path=p))
        )
        self._report_worker.error.connect(
            lambda e: QMessageBox.warning(self, t("common.error"), e)
        )
        self._report_worker.start()

    def cleanup(self):
        for worker in self._workers:
            worker.cancel()
        for worker in self._workers:
            if worker.isRunning() and not worker.wait(5000):
                worker.terminate()
                worker.wait(2000)
        self._workers = [w for w in self._workers if w.isRunning()]
        if self._report_worker and self._report_worker.isRunning():
            self._report_worker.wait(3000)
