"""Dashboard data: pending field tasks, today's weather, and farm alerts."""

from dataclasses import dataclass
from typing import List, Sequence

from core.farm_api import AnalysisRecord


@dataclass(frozen=True)
class PendingTask:
    """A task raised by the latest field analysis."""
    flag: str          # irrigation_needed / fertilization_needed
    analysis_id: str

    @property
    def title_key(self) -> str:
        return f"dashboard.task_{self.flag}"


@dataclass(frozen=True)
class Weather:
    temperature_c: int
    humidity_pct: int
    rainfall_mm: float
    condition: str


@dataclass(frozen=True)
class Alert:
    level: str  # info / warning / success
    message_key: str


TODAY_WEATHER = Weather(temperature_c=28, humidity_pct=65, rainfall_mm=0, condition="Sunny")

ALERTS = (
    Alert("info", "dashboard.alert_fertilize"),
    Alert("warning", "dashboard.alert_pests"),
    Alert("success", "dashboard.alert_water_saved"),
)


def derive_pending_tasks(records: Sequence[AnalysisRecord]) -> List[PendingTask]:
    """Tasks from the most recent record only; earlier records are history."""
    if not records:
        return []
    latest = records[-1]
    tasks = []
    if latest.irrigation_needed:
        tasks.append(PendingTask("irrigation_needed", latest.id))
    if latest.fertilization_needed:
        tasks.append(PendingTask("fertilization_needed", latest.id))
    return tasks


def complete_task(tasks: Sequence[PendingTask], done: PendingTask) -> List[PendingTask]:
    return [task for task in tasks if task != done]
