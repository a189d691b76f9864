"""Shared fixtures for the Synergy Engine test suite.

Provides scripted in-process LLM providers so insight and session tests
never touch the network.
"""

from typing import List, Optional

import pytest

from core.insight import InsightRequestor
from core.providers.base import LLMConfig, LLMError, LLMProvider, LLMResponse
from core.settings import get_settings


class FakeProvider(LLMProvider):
    """Provider that returns a canned text (or raises) and records prompts."""

    provider_name = "fake"
    default_model = "fake-model-1"

    def __init__(self, text: Optional[str] = "A fine insight.", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []
        self.configs: List[LLMConfig] = []

    async def generate_text(self, prompt, *, config=None):
        self.prompts.append(prompt)
        self.configs.append(self._default_config(config))
        if self.error is not None:
            raise self.error
        return LLMResponse(
            text=self.text,
            model=self.default_model,
            provider=self.provider_name,
            input_tokens=12,
            output_tokens=34,
            latency_ms=5,
            prompt_hash="p" * 16,
            result_hash="r" * 16,
        )


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def failing_provider():
    return FakeProvider(error=LLMError("service unavailable", provider="fake"))


@pytest.fixture
def requestor(fake_provider):
    return InsightRequestor(fake_provider)


@pytest.fixture
def failing_requestor(failing_provider):
    return InsightRequestor(failing_provider)


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; clear around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def provider_factory():
    """Build a FakeProvider with custom text or error."""
    return FakeProvider
