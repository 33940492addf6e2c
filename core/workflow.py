"""Leaf analysis workflow: the state machine behind one analysis session.

States: IDLE -> PREVIEWING -> ANALYZING -> RESULT | FAILED, and reset() returns
to IDLE from anywhere. Each analysis request gets a fresh id; completions that
carry any other id are stale and dropped, so a call that resolves after a reset
cannot resurrect the old session.
"""

import logging
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from core.file_intake import FileIntake
from core.inference_client import InferenceError
from core.utils import AnalysisResult, ImageAsset, ValidationError

logger = logging.getLogger("farmlens.workflow")


class WorkflowPhase(Enum):
    IDLE = "idle"
    PREVIEWING = "previewing"
    ANALYZING = "analyzing"
    RESULT = "result"
    FAILED = "failed"


@dataclass(frozen=True)
class WorkflowState:
    """Immutable snapshot of the workflow."""
    phase: WorkflowPhase = WorkflowPhase.IDLE
    asset: Optional[ImageAsset] = None
    result: Optional[AnalysisResult] = None
    error: Optional[InferenceError] = None
    request_id: str = ""


@dataclass(frozen=True)
class AnalysisTicket:
    """Handed out when an analysis starts; the completion must quote request_id."""
    request_id: str
    asset: ImageAsset


StateListener = Callable[[WorkflowState], None]

_SELECTABLE = {WorkflowPhase.IDLE, WorkflowPhase.PREVIEWING, WorkflowPhase.FAILED}


class LeafWorkflow:
    """Coordinates intake, inference, and result display for one session."""

    def __init__(self, intake: Optional[FileIntake] = None):
        self._intake = intake or FileIntake()
        self._state = WorkflowState()
        self._lock = threading.RLock()
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> WorkflowState:
        with self._lock:
            return self._state

    @property
    def phase(self) -> WorkflowPhase:
        return self.state.phase

    def subscribe(self, listener: StateListener):
        """Register a callback invoked with each new state."""
        self._listeners.append(listener)

    # --- Events ---

    def select_file(self, file_path: str) -> Optional[ValidationError]:
        """Validate a file from disk and preview it. Returns the rejection, if any."""
        with self._lock:
            if self._state.phase not in _SELECTABLE:
                logger.debug("File selection ignored while %s", self._state.phase.value)
                return None
        validation = self._intake.from_path(file_path)
        return self._apply_validation(validation)

    def request_analysis(self) -> Optional[AnalysisTicket]:
        """Move to ANALYZING and return a ticket for the single inference call.

        Returns None when there is nothing to analyze or a call is already in
        flight. From FAILED the retained asset is analyzed again.
        """
        with self._lock:
            current = self._state
            if current.phase == WorkflowPhase.ANALYZING:
                logger.debug("Analysis already in flight (%s), ignoring request", current.request_id)
                return None
            if current.phase not in (WorkflowPhase.PREVIEWING, WorkflowPhase.FAILED):
                return None
            if current.asset is None:
                return None

            request_id = uuid.uuid4().hex
            ticket = AnalysisTicket(request_id=request_id, asset=current.asset)
            new_state = WorkflowState(
                phase=WorkflowPhase.ANALYZING,
                asset=current.asset,
                request_id=request_id,
            )
            self._state = new_state
        logger.info("Analysis %s started", request_id)
        self._notify(new_state)
        return ticket

    def complete(self, request_id: str, result: AnalysisResult) -> bool:
        """Apply a successful inference. Returns False if the request is stale."""
        with self._lock:
            if not self._is_active(request_id):
                logger.info("Discarding stale result for request %s", request_id)
                return False
            new_state = WorkflowState(
                phase=WorkflowPhase.RESULT,
                asset=self._state.asset,
                result=result,
            )
            self._state = new_state
        logger.info("Analysis %s finished: %s (%s)", request_id, result.disease, result.confidence_percent)
        self._notify(new_state)
        return True

    def fail(self, request_id: str, error: InferenceError) -> bool:
        """Apply a failed inference. Returns False if the request is stale."""
        with self._lock:
            if not self._is_active(request_id):
                logger.info("Discarding stale failure for request %s", request_id)
                return False
            new_state = WorkflowState(
                phase=WorkflowPhase.FAILED,
                asset=self._state.asset,
                error=error,
            )
            self._state = new_state
        logger.warning("Analysis %s failed: %s", request_id, error.reason.value)
        self._notify(new_state)
        return True

    def reset(self):
        """Return to IDLE, releasing the asset, result, and any active request."""
        with self._lock:
            if self._state == WorkflowState():
                return
            if self._state.phase == WorkflowPhase.ANALYZING:
                logger.info("Reset while analysis %s in flight", self._state.request_id)
            new_state = WorkflowState()
            self._state = new_state
        self._notify(new_state)

    def export(self, exporter, output_path: str, fmt: str = "pdf", on_progress=None) -> bool:
        """Write a report of the current result. Only valid in RESULT; the state is unchanged."""
        with self._lock:
            current = self._state
        if current.phase != WorkflowPhase.RESULT:
            logger.warning("Export requested while %s", current.phase.value)
            return False
        return exporter.export(current.result, current.asset, output_path, fmt, on_progress=on_progress)

    # --- Internals ---

    def _apply_validation(self, validation) -> Optional[ValidationError]:
        if not validation.valid:
            return validation.error
        with self._lock:
            # The phase may have moved on while the file was being read
            if self._state.phase not in _SELECTABLE:
                return None
            new_state = WorkflowState(phase=WorkflowPhase.PREVIEWING, asset=validation.asset)
            self._state = new_state
        self._notify(new_state)
        return None

    def _is_active(self, request_id: str) -> bool:
        return (
            self._state.phase == WorkflowPhase.ANALYZING
            and bool(request_id)
            and self._state.request_id == request_id
        )

    def _notify(self, state: WorkflowState):
        for listener in list(self._listeners):
            listener(state)
