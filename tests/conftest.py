import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config, RelaySettings
from helpers import RecordingLogger, RecordingStaticSite, UpstreamRecorder


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def static_site() -> RecordingStaticSite:
    return RecordingStaticSite()


@pytest.fixture
def config() -> Config:
    return Config(relay=RelaySettings(timeout_ms=200))


@pytest.fixture
def make_client(config, logger, static_site):
    """Build a TestClient whose upstream calls go to the given handler."""
    clients: list[TestClient] = []

    def _make(upstream: UpstreamRecorder) -> TestClient:
        app = create_app(
            config,
            logger,
            static_fallback=static_site,
            transport=httpx.MockTransport(upstream),
        )
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)
