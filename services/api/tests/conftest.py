"""Shared fixtures for API integration tests.

Uses FastAPI TestClient (in-memory, no network) so tests run without a
live server. The insight requestor dependency is overridden with a
scripted provider.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

import pytest

# Ensure project root is on sys.path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.insight import InsightRequestor  # noqa: E402
from core.providers.base import LLMError, LLMProvider, LLMResponse  # noqa: E402


class ScriptedProvider(LLMProvider):
    provider_name = "scripted"
    default_model = "scripted-1"

    def __init__(self, text: Optional[str] = "Forty-seven thousand is prime-adjacent.", fail: bool = False):
        self.text = text
        self.fail = fail
        self.calls = 0

    async def generate_text(self, prompt, *, config=None):
        self.calls += 1
        if self.fail:
            raise LLMError("upstream 503", provider=self.provider_name)
        return LLMResponse(text=self.text, provider=self.provider_name, model=self.default_model)


@pytest.fixture()
def provider():
    return ScriptedProvider()


@pytest.fixture()
def client(provider):
    """FastAPI TestClient: no network, no server startup needed."""
    from fastapi.testclient import TestClient

    from services.api.app.main import app
    from services.api.app.routers.analysis import get_requestor

    app.dependency_overrides[get_requestor] = lambda: InsightRequestor(provider)
    yield TestClient(app)
    app.dependency_overrides.clear()
