from __future__ import annotations

import json
from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from careerstory.backend.errors import ConfigurationError
from careerstory.backend.models import ProjectDraft
from careerstory.backend.storage import InMemoryProjectStore
from careerstory.backend.workspace import PitchWorkspace

VALID_REPLY = json.dumps(
    {
        "pitch": "I ship reliable systems and I learn fast from what breaks.",
        "keyStrengths": ["Performance tuning", "Owning mistakes"],
    }
)


class FakeProvider:
    """Test double for PitchProvider that records every prompt it is sent."""

    def __init__(
        self,
        reply: str = VALID_REPLY,
        *,
        configured: bool = True,
        error: Exception | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self.reply = reply
        self.configured = configured
        self.error = error
        self.on_complete = on_complete
        self.prompts: list[str] = []
        self.schemas: list[dict[str, Any]] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError("Missing PITCH_LLM_API_KEY.")

    def complete(self, prompt: str, response_schema: dict[str, Any]) -> str:
        self.prompts.append(prompt)
        self.schemas.append(response_schema)
        if self.on_complete is not None:
            self.on_complete()
        if self.error is not None:
            raise self.error
        return self.reply


def success_draft(name: str = "Site Migration", **overrides: Any) -> ProjectDraft:
    payload = {
        "name": name,
        "description": "Moved legacy site to new stack",
        "learnings": "Learned caching strategies",
        "type": "success",
    }
    payload.update(overrides)
    return ProjectDraft(**payload)


def failure_draft(name: str = "Beta Launch", **overrides: Any) -> ProjectDraft:
    payload = {
        "name": name,
        "description": "Rushed launch",
        "learnings": "Underestimated QA time",
        "type": "failure",
        "fixPlan": "Added staging gate",
    }
    payload.update(overrides)
    return ProjectDraft(**payload)


@pytest.fixture
def store() -> InMemoryProjectStore:
    return InMemoryProjectStore()


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def workspace(store: InMemoryProjectStore, provider: FakeProvider) -> PitchWorkspace:
    return PitchWorkspace(store, provider)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, workspace: PitchWorkspace) -> TestClient:
    from careerstory.backend import web

    monkeypatch.setattr(web, "workspace", workspace)
    with TestClient(web.app) as test_client:
        yield test_client
