"""
Pytest configuration and fixtures for fetch-builder tests.
"""

import json
import os

import pytest

from fetch_builder.builder import FetchBuilder
from fetch_builder.core.backoff import BackoffScheduler
from fetch_builder.core.config_store import ConfigStore
from fetch_builder.transport import TransportResponse


class FakeTransport:
    """
    Transport that replays scripted outcomes.

    Each outcome is a TransportResponse, an exception to raise, or an async
    callable taking the request. The last outcome repeats forever.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.requests = []

    @property
    def calls(self):
        return len(self.requests)

    async def perform(self, request):
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        if callable(outcome):
            return await outcome(request)
        return outcome


class RecordingSleep:
    """Sleep replacement that records requested delays (seconds) and returns at once."""

    def __init__(self):
        self.delays = []

    async def __call__(self, seconds):
        self.delays.append(seconds)

    @property
    def delays_ms(self):
        return [round(d * 1000) for d in self.delays]


def make_response(status_code=200, body=b"", reason="", headers=None):
    """Build a TransportResponse; dict/list bodies are JSON-encoded."""
    if isinstance(body, (dict, list)):
        body = json.dumps(body).encode("utf-8")
    elif isinstance(body, str):
        body = body.encode("utf-8")
    return TransportResponse(
        status_code=status_code,
        reason_phrase=reason,
        headers=headers or {},
        content=body,
    )


@pytest.fixture
def base_url():
    """Base URL for testing."""
    return "https://api.example.com"


@pytest.fixture
def store():
    """Isolated config store (never the process-wide one)."""
    return ConfigStore()


@pytest.fixture
def sleep_recorder():
    return RecordingSleep()


@pytest.fixture
def scheduler(sleep_recorder):
    """Backoff scheduler that does not actually wait."""
    return BackoffScheduler(sleep=sleep_recorder)


@pytest.fixture
def fake_transport():
    """Factory: fake_transport(outcome, ...) -> FakeTransport."""
    return FakeTransport


@pytest.fixture
def response():
    """Factory: response(status_code, body, reason) -> TransportResponse."""
    return make_response


@pytest.fixture
def builder_factory(store, scheduler):
    """
    Factory producing builders wired to the isolated store and scheduler.

    Example:
        def test_something(builder_factory, fake_transport, response):
            transport = fake_transport(response(200, {"a": 1}))
            builder = builder_factory(transport).set_url("https://x/ok")
    """

    def factory(transport):
        return FetchBuilder(store=store, transport=transport, scheduler=scheduler)

    return factory


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No stray FETCH_BUILDER_* variables and no .env file in the working directory."""
    for name in list(os.environ):
        if name.upper().startswith("FETCH_BUILDER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
