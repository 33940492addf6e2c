"""Predictive analysis tab: placeholder page with a preview of the yield and market estimates."""

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from core.farm_api import FarmApiClient, MarketPrediction, YieldPrediction
from i18n import t
from ui.components.coming_soon import ComingSoonWidget
from workers.farm_api_worker import PredictionWorker


class PredictiveWidget(ComingSoonWidget):
    """Coming-soon page that can fetch a one-off estimate from the prediction service."""

    def __init__(self, client: FarmApiClient, parent=None):
        super().__init__("predictive.title", "predictive.desc", icon="\U0001f4c8", parent=parent)
        self._client = client
        self._worker: PredictionWorker = None

        self._preview_btn = QPushButton(t("predictive.preview_button"))
        self._preview_btn.setProperty("class", "secondaryButton")
        self._preview_btn.clicked.connect(self._on_preview)

        self._output = QLabel("")
        self._output.setProperty("class", "sectionSubtitle")
        self._output.setWordWrap(True)
        self._output.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._output.setMaximumWidth(420)

        self._layout.addWidget(self._preview_btn, alignment=Qt.AlignmentFlag.AlignHCenter)
        self._layout.addWidget(self._output, alignment=Qt.AlignmentFlag.AlignHCenter)

    def _on_preview(self):
        if self._worker and self._worker.isRunning():
            return
        self._preview_btn.setEnabled(False)
        self._output.setText(t("predictive.loading"))
        self._worker = PredictionWorker(self._client, parent=self)
        self._worker.finished.connect(self._on_predictions)
        self._worker.error.connect(self._on_error)
        self._worker.start()

    def _on_predictions(self, yield_prediction: YieldPrediction, market: MarketPrediction):
        self._preview_btn.setEnabled(True)
        lines = [
            t("predictive.yield", value=f"{yield_prediction.predicted_yield:g}", unit=yield_prediction.unit),
            t("predictive.price", value=f"{market.predicted_price:g}",
              currency=market.currency, unit=market.per_unit),
            t("predictive.trend", trend=market.trend),
        ]
        if market.suggested_action:
            lines.append(market.suggested_action)
        self._output.setText("\n".join(lines))

    def _on_error(self, message: str):
        self._preview_btn.setEnabled(True)
        self._output.setText(t("predictive.failed", error=message))

    def output_text(self) -> str:
        return self._output.text()

    def cleanup(self):
        if self._worker and self._worker.isRunning():
            self._worker.wait(3000)
