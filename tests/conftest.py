"""Pytest configuration and fixtures."""

import os

import pytest

# Settings are read when blueprint_agent.main is imported, so the
# environment has to be in place before test modules are collected.
os.environ.setdefault("GROQ_API_KEY", "test-groq-key")
os.environ.setdefault("RESEND_API_KEY", "test-resend-key")
os.environ.setdefault("EMAIL_FROM", "Blueprints <blueprints@example.com>")
os.environ.setdefault("BLUEPRINT_ENV", "test")

from blueprint_agent.core.session_store import SessionStore  # noqa: E402
from blueprint_agent.services.conversation import ConversationController  # noqa: E402
from tests.fakes.fake_collaborators import FakeGateway, FakeRenderer, FakeSender  # noqa: E402


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return SessionStore(ttl_seconds=3600, clock=clock)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def controller(store, gateway, renderer, sender):
    return ConversationController(store=store, gateway=gateway, renderer=renderer, sender=sender)
