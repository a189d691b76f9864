"""Submission lifecycle for one user session.

``AnalysisSession`` owns the only mutable state of the application: the
busy flag and the current-result slot. A UI shell keeps one session per
user (Streamlit) or builds one per request (HTTP API) and drives it with
``submit``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional

from .analysis import AnalysisResult, InputValidationError, analyze, parse_inputs
from .insight import InsightRequestor

logger = logging.getLogger(__name__)


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    ANALYZING = "analyzing"
    AWAITING_INSIGHT = "awaiting_insight"
    COMPLETE = "complete"


# States during which the submit control must stay disabled
BUSY_STATES = frozenset({
    SubmissionState.ANALYZING,
    SubmissionState.AWAITING_INSIGHT,
    SubmissionState.COMPLETE,
})


class SubmissionInProgressError(RuntimeError):
    """A submission was started while another one is still in flight."""


TransitionCallback = Callable[[SubmissionState, SubmissionState], None]


class AnalysisSession:
    """Drives Idle → Validating → (Rejected | Analyzing) → AwaitingInsight → Complete."""

    def __init__(self, requestor: InsightRequestor):
        self.requestor = requestor
        self.state = SubmissionState.IDLE
        self.result: Optional[AnalysisResult] = None
        self.last_error: str = ""
        self._observers: List[TransitionCallback] = []

    @property
    def busy(self) -> bool:
        return self.state in BUSY_STATES

    def on_transition(self, callback: TransitionCallback) -> None:
        self._observers.append(callback)

    def _enter(self, new_state: SubmissionState) -> None:
        old_state, self.state = self.state, new_state
        logger.debug("Submission state %s -> %s", old_state.value, new_state.value)
        for callback in self._observers:
            callback(old_state, new_state)

    async def submit(
        self,
        raw_target: Any,
        raw_alpha: Any,
        raw_omega: Any,
        *,
        include_insight: bool = True,
    ) -> AnalysisResult:
        """Run one full submission and publish its result.

        Raises
        ------
        SubmissionInProgressError
            If called while a previous submission is still running.
        InputValidationError
            If any raw value is unparseable. The previous result is kept.
        """
        if self.state is not SubmissionState.IDLE:
            raise SubmissionInProgressError("A submission is already in progress")

        self._enter(SubmissionState.VALIDATING)
        try:
            parsed = parse_inputs(raw_target, raw_alpha, raw_omega)
        except InputValidationError as exc:
            self.last_error = exc.message
            self._enter(SubmissionState.REJECTED)
            self._enter(SubmissionState.IDLE)
            raise

        try:
            self._enter(SubmissionState.ANALYZING)
            result = analyze(parsed.target, parsed.alpha, parsed.omega)

            if include_insight:
                self._enter(SubmissionState.AWAITING_INSIGHT)
                insight = await self.requestor.request_insight(
                    result.target, result.bound_low, result.bound_high,
                )
                result = result.with_insight(insight)

            self._enter(SubmissionState.COMPLETE)
            self.result = result
            self.last_error = ""
        finally:
            self._enter(SubmissionState.IDLE)

        return result

    def reset(self) -> None:
        """Forget the current result and error. Not allowed while busy."""
        if self.busy:
            raise SubmissionInProgressError("Cannot reset while a submission is running")
        self.result = None
        self.last_error = ""
