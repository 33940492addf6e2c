"""Farm dashboard tab: weather, alerts, pending tasks, and quick actions."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from core.dashboard import ALERTS, TODAY_WEATHER, PendingTask, complete_task
from core.farm_api import FarmApiClient
from i18n import t
from workers.farm_api_worker import PendingTasksWorker, TaskUpdateWorker


class _TaskRow(QWidget):
    """One pending task with a done button."""

    done_clicked = pyqtSignal(object)   # PendingTask

    def __init__(self, task: PendingTask, parent=None):
        super().__init__(parent)
        self._task = task
        self.setObjectName("resultCard")
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 8, 12, 8)

        title = QLabel(t(task.title_key))
        title.setStyleSheet("font-weight: bold;")
        status = QLabel(t("dashboard.task_pending"))
        status.setStyleSheet("font-size: 11px; color: #F59E0B;")

        self._done_btn = QPushButton(t("dashboard.mark_done"))
        self._done_btn.setProperty("class", "secondaryButton")
        self._done_btn.clicked.connect(self._on_done)

        row.addWidget(title, 1)
        row.addWidget(status)
        row.addWidget(self._done_btn)

    def _on_done(self):
        self._done_btn.setEnabled(False)
        self.done_clicked.emit(self._task)


class DashboardWidget(QWidget):
    """Overview of today's conditions and the tasks raised by the last field analysis."""

    navigate_requested = pyqtSignal(int)

    def __init__(self, client: FarmApiClient, parent=None):
        super().__init__(parent)
        self._client = client
        self._tasks = []
        self._tasks_worker: PendingTasksWorker = None
        self._update_workers = []
        self._setup_ui()

    def _setup_ui(self):
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QScrollArea.Shape.NoFrame)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        title = QLabel(t("dashboard.title"))
        title.setProperty("class", "sectionTitle")
        subtitle = QLabel(t("dashboard.subtitle"))
        subtitle.setProperty("class", "sectionSubtitle")
        subtitle.setWordWrap(True)

        layout.addWidget(title)
        layout.addWidget(subtitle)
        layout.addWidget(self._create_weather_card())

        # Alerts
        alerts_header = QLabel(t("dashboard.alerts"))
        alerts_header.setProperty("class", "sectionTitle")
        alerts_header.setStyleSheet("font-size: 16px; margin-top: 12px;")
        layout.addWidget(alerts_header)
        for alert in ALERTS:
            label = QLabel(t(alert.message_key))
            label.setProperty("alertLevel", alert.level)
            label.setObjectName("alertLabel")
            label.setWordWrap(True)
            layout.addWidget(label)

        # Tasks
        tasks_header_row = QHBoxLayout()
        tasks_header = QLabel(t("dashboard.tasks"))
        tasks_header.setProperty("class", "sectionTitle")
        tasks_header.setStyleSheet("font-size: 16px; margin-top: 12px;")
        self._refresh_btn = QPushButton(t("dashboard.refresh"))
        self._refresh_btn.setProperty("class", "secondaryButton")
        self._refresh_btn.clicked.connect(self.refresh)
        tasks_header_row.addWidget(tasks_header)
        tasks_header_row.addStretch()
        tasks_header_row.addWidget(self._refresh_btn)
        layout.addLayout(tasks_header_row)

        self._tasks_status = QLabel("")
        self._tasks_status.setProperty("class", "sectionSubtitle")
        self._tasks_status.setWordWrap(True)
        layout.addWidget(self._tasks_status)

        self._tasks_layout = QVBoxLayout()
        self._tasks_layout.setSpacing(8)
        layout.addLayout(self._tasks_layout)

        # Quick actions
        actions_header = QLabel(t("dashboard.quick_actions"))
        actions_header.setProperty("class", "sectionTitle")
        actions_header.setStyleSheet("font-size: 16px; margin-top: 12px;")
        layout.addWidget(actions_header)

        actions_row = QHBoxLayout()
        leaf_btn = QPushButton(f"\U0001f343  {t('sidebar.leaf_analysis')}")
        leaf_btn.setObjectName("primaryButton")
        leaf_btn.clicked.connect(lambda: self.navigate_requested.emit(1))
        predictive_btn = QPushButton(f"\U0001f4c8  {t('sidebar.predictive')}")
        predictive_btn.setProperty("class", "secondaryButton")
        predictive_btn.clicked.connect(lambda: self.navigate_requested.emit(2))
        actions_row.addWidget(leaf_btn)
        actions_row.addWidget(predictive_btn)
        actions_row.addStretch()
        layout.addLayout(actions_row)

        layout.addStretch()
        scroll.setWidget(container)
        outer.addWidget(scroll)

    def _create_weather_card(self) -> QWidget:
        card = QWidget()
        card.setObjectName("resultCard")
        grid = QGridLayout(card)
        grid.setContentsMargins(16, 12, 16, 12)

        heading = QLabel(t("dashboard.weather"))
        heading.setProperty("class", "sectionTitle")
        heading.setStyleSheet("font-size: 16px;")
        grid.addWidget(heading, 0, 0, 1, 4)

        readings = [
            (t("dashboard.temperature"), f"{TODAY_WEATHER.temperature_c}°C"),
            (t("dashboard.humidity"), f"{TODAY_WEATHER.humidity_pct}%"),
            (t("dashboard.rainfall"), f"{TODAY_WEATHER.rainfall_mm:g} mm"),
            (t("dashboard.condition"), TODAY_WEATHER.condition),
        ]
        for col, (caption, value) in enumerate(readings):
            caption_label = QLabel(caption)
            caption_label.setStyleSheet("font-size: 11px; color: #888;")
            value_label = QLabel(value)
            value_label.setStyleSheet("font-size: 18px; font-weight: bold;")
            grid.addWidget(caption_label, 1, col)
            grid.addWidget(value_label, 2, col)
        return card

    # --- Tasks ---

    def refresh(self):
        """Reload pending tasks from the farm server."""
        if self._tasks_worker and self._tasks_worker.isRunning():
            return
        self._refresh_btn.setEnabled(False)
        self._tasks_status.setText(t("dashboard.loading"))
        self._tasks_worker = PendingTasksWorker(self._client, parent=self)
        self._tasks_worker.finished.connect(self._on_tasks_loaded)
        self._tasks_worker.error.connect(self._on_tasks_error)
        self._tasks_worker.start()

    def _on_tasks_loaded(self, tasks):
        self._refresh_btn.setEnabled(True)
        self._tasks = list(tasks)
        self._render_tasks()

    def _on_tasks_error(self, message: str):
        self._refresh_btn.setEnabled(True)
        self._tasks_status.setText(t("dashboard.load_failed", error=message))

    def _render_tasks(self):
        while self._tasks_layout.count():
            item = self._tasks_layout.takeAt(0)
            if item.widget():
                item.widget().deleteLater()

        if not self._tasks:
            self._tasks_status.setText(t("dashboard.no_tasks"))
            return

        self._tasks_status.setText("")
        for task in self._tasks:
            row = _TaskRow(task)
            row.done_clicked.connect(self._mark_done)
            self._tasks_layout.addWidget(row)

    def _mark_done(self, task: PendingTask):
        worker = TaskUpdateWorker(self._client, task, parent=self)
        worker.finished.connect(self._on_task_done)
        worker.error.connect(self._on_task_error)
        worker.finished.connect(lambda _, w=worker: self._release_worker(w))
        worker.error.connect(lambda _, w=worker: self._release_worker(w))
        self._update_workers.append(worker)
        worker.start()

    def _release_worker(self, worker: TaskUpdateWorker):
        if worker in self._update_workers:
            self._update_workers.remove(worker)
        # The signal arrives just before run() returns
        worker.wait()
        worker.deleteLater()

    def _on_task_done(self, task: PendingTask):
        self._tasks = complete_task(self._tasks, task)
        self._render_tasks()

    def _on_task_error(self, message: str):
        self._tasks_status.setText(t("dashboard.update_failed", error=message))
        self._render_tasks()

    def cleanup(self):
        workers = [self._tasks_worker] + self._update_workers
        for worker in workers:
            if worker and worker.isRunning():
                worker.wait(3000)
