"""Shared fixtures: in-memory database, fake completion service, recorded metrics."""
from collections import Counter

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, create_engine
from sqlalchemy.pool import StaticPool

from cerebro.assistant import LLMAssistant
from cerebro.store import SessionTracker, SubmissionStore
from main import create_app

ADMIN_TOKEN = "test-admin-token"


class RecordingMetrics:
    """Stands in for statsd.StatsClient and keeps what was sent."""

    def __init__(self):
        self.counters = Counter()
        self.timings = []

    def incr(self, stat, count=1, rate=1):
        self.counters[stat] += count

    def timing(self, stat, delta, rate=1):
        self.timings.append((stat, delta))


class FakeAssistant(LLMAssistant):
    """Replays canned replies instead of calling the completion service."""

    def __init__(self, metrics):
        super().__init__(metrics=metrics)
        self.replies = []
        self.error = None
        self.calls = []

    def get_completion(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def metrics():
    return RecordingMetrics()


@pytest.fixture
def assistant(metrics):
    return FakeAssistant(metrics)


@pytest.fixture
def tracker(engine):
    return SessionTracker(engine)


@pytest.fixture
def store(engine):
    return SubmissionStore(engine)


@pytest.fixture
def client(engine, assistant, metrics, tmp_path):
    """Create a test client backed by the in-memory database."""
    (tmp_path / "index.html").write_text("<h1>Cerebro</h1>")
    (tmp_path / "app.js").write_text("console.log('cerebro');")
    app = create_app(
        engine=engine,
        assistant=assistant,
        metrics=metrics,
        admin_token=ADMIN_TOKEN,
        public_dir=str(tmp_path),
    )
    with TestClient(app) as client:
        yield client
