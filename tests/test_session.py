"""Tests for core.session -- the submission state machine."""
from __future__ import annotations

import asyncio

import pytest

from core.analysis import VALIDATION_MESSAGE, InputValidationError
from core.insight import OFFLINE_INSIGHT_TEXT, InsightRequestor
from core.providers.base import LLMProvider, LLMResponse
from core.session import (
    AnalysisSession,
    SubmissionInProgressError,
    SubmissionState as S,
)


def _record_transitions(session):
    seen = []
    session.on_transition(lambda old, new: seen.append(new))
    return seen


class _GatedProvider(LLMProvider):
    """Provider whose response waits until the test releases it."""

    provider_name = "gated"
    default_model = "gated-1"

    def __init__(self):
        self.release = asyncio.Event()
        self.started = asyncio.Event()

    async def generate_text(self, prompt, *, config=None):
        self.started.set()
        await self.release.wait()
        return LLMResponse(text="late insight", provider=self.provider_name)


class TestHappyPath:
    def test_full_transition_sequence(self, requestor):
        session = AnalysisSession(requestor)
        seen = _record_transitions(session)

        result = asyncio.run(session.submit("50", "0", "100"))

        assert seen == [S.VALIDATING, S.ANALYZING, S.AWAITING_INSIGHT, S.COMPLETE, S.IDLE]
        assert result.insight_text == "A fine insight."
        assert result.progress_percent == 50.0
        assert session.result == result
        assert session.state is S.IDLE
        assert session.busy is False

    def test_numeric_only_skips_insight(self, requestor, fake_provider):
        session = AnalysisSession(requestor)
        seen = _record_transitions(session)

        result = asyncio.run(session.submit("1", "0", "2", include_insight=False))

        assert S.AWAITING_INSIGHT not in seen
        assert result.insight_text == ""
        assert fake_provider.prompts == []

    def test_next_result_replaces_previous(self, requestor):
        session = AnalysisSession(requestor)
        asyncio.run(session.submit("1", "0", "2"))
        second = asyncio.run(session.submit("10", "10", "10"))
        assert session.result is second
        assert session.result.range == 0

    def test_failure_still_completes(self, failing_requestor):
        session = AnalysisSession(failing_requestor)
        result = asyncio.run(session.submit("3.1415", "47000", "53000"))
        assert result.insight_text == OFFLINE_INSIGHT_TEXT
        assert result.bound_low == 47000
        assert result.is_contained is False
        assert result.range == 6000
        assert session.last_error == ""


class TestRejection:
    def test_rejected_path(self, requestor, fake_provider):
        session = AnalysisSession(requestor)
        seen = _record_transitions(session)

        with pytest.raises(InputValidationError):
            asyncio.run(session.submit("abc", "0", "1"))

        assert seen == [S.VALIDATING, S.REJECTED, S.IDLE]
        assert session.last_error == VALIDATION_MESSAGE
        assert fake_provider.prompts == []

    def test_busy_never_entered(self, requestor):
        session = AnalysisSession(requestor)
        busy_seen = []
        session.on_transition(lambda old, new: busy_seen.append(session.busy))
        with pytest.raises(InputValidationError):
            asyncio.run(session.submit("", "", ""))
        assert not any(busy_seen)

    def test_previous_result_kept(self, requestor):
        session = AnalysisSession(requestor)
        first = asyncio.run(session.submit("1", "0", "2"))
        with pytest.raises(InputValidationError):
            asyncio.run(session.submit("1", "zero", "2"))
        assert session.result is first


class TestSingleFlight:
    def test_second_submit_while_awaiting_insight(self):
        async def scenario():
            provider = _GatedProvider()
            session = AnalysisSession(InsightRequestor(provider))
            first = asyncio.ensure_future(session.submit("1", "0", "2"))
            await provider.started.wait()

            assert session.state is S.AWAITING_INSIGHT
            assert session.busy is True
            with pytest.raises(SubmissionInProgressError):
                await session.submit("5", "0", "10")

            provider.release.set()
            return await first, session

        result, session = asyncio.run(scenario())
        assert result.insight_text == "late insight"
        assert session.busy is False

    def test_reset_refused_while_busy(self):
        async def scenario():
            provider = _GatedProvider()
            session = AnalysisSession(InsightRequestor(provider))
            task = asyncio.ensure_future(session.submit("1", "0", "2"))
            await provider.started.wait()
            with pytest.raises(SubmissionInProgressError):
                session.reset()
            provider.release.set()
            await task
            session.reset()
            return session

        session = asyncio.run(scenario())
        assert session.result is None


class TestReset:
    def test_reset_clears_slot(self, requestor):
        session = AnalysisSession(requestor)
        asyncio.run(session.submit("1", "0", "2"))
        session.reset()
        assert session.result is None
        assert session.last_error == ""
