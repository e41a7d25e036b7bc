"""Shared fixtures for AI test recorder tests."""

import pytest

from ai_test_recorder.config import AiSettings
from ai_test_recorder.recording.models import RecordedEvent, SelectorCandidate


def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "smoke: mark test as smoke test (fast, critical path - included in CI)"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove AI_RECORDER_* variables so settings fall back to defaults."""
    for name in (
        "AI_RECORDER_AI_ENDPOINT",
        "AI_RECORDER_AI_API_KEY",
        "AI_RECORDER_AI_MODEL",
        "AI_RECORDER_REQUEST_TIMEOUT_SECONDS",
        "AI_RECORDER_MAX_CANDIDATES",
        "AI_RECORDER_LOG_LEVEL",
        "AI_RECORDER_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ai_settings():
    """Configured endpoint with an API key and a default model."""
    return AiSettings(
        endpoint="https://ai.example.test/suggest",
        api_key="secret-key",
        model="gpt-test",
    )


@pytest.fixture
def sample_event():
    """A recorded click with one DOM candidate."""
    return {
        "action": "click",
        "timestamp": 1700000000000,
        "tag": "button",
        "primarySelector": "#submit",
        "selectorCandidates": [
            {"selector": "#submit", "type": "css", "score": 80, "source": "dom"},
        ],
        "iframeContext": None,
    }


@pytest.fixture
def recorded_events():
    """Click and input events in replay order."""
    return [
        RecordedEvent(action="click", primary_selector="#go"),
        RecordedEvent(action="input", primary_selector="#box", value="hi"),
    ]


@pytest.fixture
def candidate():
    """A plain CSS candidate."""
    return SelectorCandidate(selector="#login", type="css", reason="stable id")
