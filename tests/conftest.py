"""
Module: conftest.py
Description: Shared pytest fixtures for gateway dashboard tests.

Provides reusable fixtures for settings, storage backends, the event
store and paginator, sample push payloads and a fully wired dashboard
with the gateway collaborators mocked out.
"""

import pytest
from unittest.mock import AsyncMock

from gateway_dashboard.config.settings import Settings
from gateway_dashboard.container import build_dashboard
from gateway_dashboard.history.paginator import Paginator
from gateway_dashboard.history.projector import Projector
from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.storage.persistent import MemoryStore


@pytest.fixture
def test_settings(tmp_path):
    """
    Provide dashboard settings isolated from the environment.

    Storage lives in the test's temporary directory.
    """
    return Settings(
        _env_file=None,
        gateway_url="http://gateway.test",
        storage_path=str(tmp_path / "storage.json"),
        default_page_size="50",
        log_level="DEBUG",
    )


@pytest.fixture
def memory_store():
    """Provide an empty in-memory key/value store."""
    return MemoryStore()


@pytest.fixture
def event_store(memory_store):
    """Provide an event store with the default 50-per-page capacity."""
    return EventStore(memory_store, capacity=500)


@pytest.fixture
def paginator(event_store, memory_store):
    """Provide a paginator over the event store with default options."""
    return Paginator(event_store, memory_store)


@pytest.fixture
def projector():
    return Projector(timezone_name="UTC")


@pytest.fixture
def sample_webhook():
    """
    Provide a typical webhook:sent payload.

    Mirrors what the gateway pushes after delivering an incoming
    message to a customer webhook.
    """
    return {
        "sessionId": "sales-01",
        "event": "message.received",
        "url": "https://hooks.example.com/whatsapp",
        "success": True,
        "status": 200,
        "payload": {
            "sessionId": "sales-01",
            "from": "628123456789@s.whatsapp.net",
            "text": "Halo, apakah pesanan saya sudah dikirim?"
        },
        "response": {"ok": True},
        "timestamp": "2026-10-19T07:30:15.250Z"
    }


@pytest.fixture
def directory():
    """Provide a session directory double whose reload succeeds."""
    mock = AsyncMock()
    mock.reload.return_value = True
    return mock


@pytest.fixture
def dashboard(test_settings, memory_store, directory):
    """
    Provide a wired dashboard without a gateway connection.

    Uses the in-memory store and the mocked session directory.
    """
    dash = build_dashboard(
        test_settings,
        persistent_store=memory_store,
        directory=directory,
        connect_gateway=False,
    )
    dash.hydrate()
    return dash
