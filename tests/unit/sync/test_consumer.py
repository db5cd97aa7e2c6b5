"""
Module: test_consumer.py
Description: Unit tests for push-event routing.

Tests how every gateway push event is classified and which dashboard
state it touches, with the session directory, statistics and activity
feed mocked out.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.storage.persistent import MemoryStore
from gateway_dashboard.surface.connection import ConnectionIndicator
from gateway_dashboard.surface.qr import QrPanel
from gateway_dashboard.surface.sessions import SessionBoard
from gateway_dashboard.sync.consumer import SyncConsumer
from gateway_dashboard.utils.activity import ActivityLog


@pytest.fixture
def consumer():
    """Provide a consumer with mocked collaborators."""
    directory = AsyncMock()
    directory.reload.return_value = True
    return SyncConsumer(
        event_store=EventStore(MemoryStore(), capacity=100),
        directory=directory,
        statistics=MagicMock(),
        activity=MagicMock(),
        board=SessionBoard(),
        qr_panel=QrPanel(),
        indicator=ConnectionIndicator(),
    )


class TestDispatch:
    """Test cases for event classification."""

    @pytest.mark.asyncio
    async def test_unknown_event_ignored(self, consumer):
        """Test unknown event names are ignored without side effects."""
        assert await consumer.dispatch("session:renamed", {"sessionId": "a"}) is False

        consumer.directory.reload.assert_not_called()
        consumer.activity.log.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_payload_dropped(self, consumer):
        """Test a payload that is not an object is dropped."""
        assert await consumer.dispatch("webhook:sent", "not an object") is False
        assert await consumer.dispatch("session:status", None) is False

        assert len(consumer.event_store) == 0
        consumer.directory.reload.assert_not_called()

    def test_event_names(self, consumer):
        assert set(consumer.event_names) == {
            "session:created", "session:deleted", "session:status", "session:qr",
            "session:ready", "webhook:sent", "event:log",
        }


class TestSessionEvents:
    """Test cases for session lifecycle events."""

    @pytest.mark.asyncio
    async def test_session_created(self, consumer):
        """Test creation reloads the directory and logs a notice."""
        await consumer.dispatch("session:created", {"sessionId": "sales-02"})

        consumer.directory.reload.assert_awaited_once()
        consumer.activity.log.assert_called_once_with(
            "info", "System", "New session created: sales-02"
        )

    @pytest.mark.asyncio
    async def test_session_deleted(self, consumer):
        await consumer.dispatch("session:deleted", {"sessionId": "sales-02"})

        consumer.directory.reload.assert_awaited_once()
        consumer.activity.log.assert_called_once_with(
            "warning", "System", "Session deleted: sales-02"
        )

    @pytest.mark.asyncio
    async def test_session_status_patches_then_reloads(self, consumer):
        """Test a displayed row is patched and a full reload follows."""
        consumer.board.replace([("sales-01", "qr")], loaded_at="t")

        await consumer.dispatch("session:status", {"sessionId": "sales-01", "status": "connected"})

        assert consumer.board.row("sales-01").status == "connected"
        consumer.directory.reload.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_session_status_unknown_row(self, consumer):
        """Test an update for an undisplayed session still reloads."""
        await consumer.dispatch("session:status", {"sessionId": "ghost", "status": "connected"})

        assert "ghost" not in consumer.board
        consumer.directory.reload.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_session_qr_panel_open(self, consumer):
        """Test a QR for the open session is shown."""
        consumer.qr_panel.open("sales-01")

        await consumer.dispatch("session:qr", {"sessionId": "sales-01", "qr": "QRDATA"})

        assert consumer.qr_panel.view().qr == "QRDATA"
        consumer.activity.log.assert_called_once_with("info", "sales-01", "QR Code received")

    @pytest.mark.asyncio
    async def test_session_qr_other_session(self, consumer):
        """Test a QR for another session is logged but not shown."""
        consumer.qr_panel.open("support")

        await consumer.dispatch("session:qr", {"sessionId": "sales-01", "qr": "QRDATA"})

        assert consumer.qr_panel.view().qr is None
        consumer.activity.log.assert_called_once()

    @pytest.mark.asyncio
    async def test_session_qr_panel_closed(self, consumer):
        await consumer.dispatch("session:qr", {"sessionId": "sales-01", "qr": "QRDATA"})

        assert consumer.qr_panel.view().visible is False

    @pytest.mark.asyncio
    async def test_session_ready_closes_open_panel(self, consumer):
        """Test ready for the open session closes the panel and reloads."""
        consumer.qr_panel.open("sales-01", qr="QRDATA")

        await consumer.dispatch("session:ready", {"sessionId": "sales-01"})

        assert consumer.qr_panel.view().visible is False
        consumer.activity.log.assert_called_once_with("success", "sales-01", "sales-01 Connected!")
        consumer.directory.reload.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_session_ready_other_session(self, consumer):
        """Test ready for a session without an open panel changes nothing."""
        consumer.qr_panel.open("support")

        await consumer.dispatch("session:ready", {"sessionId": "sales-01"})

        assert consumer.qr_panel.active_session == "support"
        consumer.activity.log.assert_not_called()
        consumer.directory.reload.assert_not_called()


class TestWebhookAndLogEvents:
    """Test cases for webhook results and gateway log lines."""

    @pytest.mark.asyncio
    async def test_webhook_sent(self, consumer, sample_webhook):
        """Test a webhook result is stored and counted."""
        await consumer.dispatch("webhook:sent", sample_webhook)

        assert consumer.event_store.records[0].session_id == "sales-01"
        consumer.statistics.record_webhook.assert_called_once_with(True)

    @pytest.mark.asyncio
    async def test_webhook_sent_failure(self, consumer):
        await consumer.dispatch("webhook:sent", {"event": "message.received", "error": "timeout"})

        consumer.statistics.record_webhook.assert_called_once_with(False)
        assert consumer.event_store.records[0].error == "timeout"

    @pytest.mark.asyncio
    async def test_event_log(self, consumer):
        """Test gateway log lines go to the activity feed."""
        await consumer.dispatch("event:log", {"type": "error", "sessionId": "sales-01", "text": "Logged out"})

        consumer.activity.log.assert_called_once_with("error", "sales-01", "Logged out")

    @pytest.mark.asyncio
    async def test_event_log_non_string_fields(self, consumer):
        """Test a log line with numeric type and session id is still recorded."""
        consumer.activity = ActivityLog()

        assert await consumer.dispatch("event:log", {"type": 3, "sessionId": 7, "text": "hi"}) is True

        entry = consumer.activity.entries()[0]
        assert entry.level == "3"
        assert entry.source == "7"
        assert entry.text == "hi"

    @pytest.mark.asyncio
    async def test_event_log_defaults_level(self, consumer):
        await consumer.dispatch("event:log", {"text": "hello"})

        consumer.activity.log.assert_called_once_with("info", None, "hello")


class TestConnectionEvents:
    """Test cases for connect and disconnect handling."""

    def test_connect_disconnect(self, consumer):
        """Test the indicator follows the connection and repeats are harmless."""
        consumer.on_connect()
        consumer.on_connect()
        assert consumer.indicator.view().label == "WebSocket Connected"

        consumer.on_disconnect()
        assert consumer.indicator.connected is False
