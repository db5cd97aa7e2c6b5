"""
Module: test_transport.py
Description: Unit tests for the Socket.IO gateway transport.

The python-socketio client is replaced by a mock so connection
attempts, retries and handler registration can be observed.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock
from socketio.exceptions import ConnectionError as SocketIOConnectionError
from tenacity import wait_none

from gateway_dashboard.sync.transport import GatewayTransport


@pytest.fixture
def client():
    mock = MagicMock()
    mock.connected = False
    mock.connect = AsyncMock()
    mock.disconnect = AsyncMock()
    return mock


@pytest.fixture
def transport(client):
    transport = GatewayTransport("http://gateway.test", connect_attempts=3, client=client)
    transport.retry_wait = wait_none()
    return transport


@pytest.fixture
def consumer():
    mock = MagicMock()
    mock.event_names = ("webhook:sent", "session:status")
    mock.dispatch = AsyncMock(return_value=True)
    return mock


class TestGatewayTransport:
    """Test cases for GatewayTransport."""

    def test_initialization_invalid_url(self):
        with pytest.raises(ValueError, match="url must be a valid HTTP/HTTPS URL"):
            GatewayTransport("ws://gateway.test", client=MagicMock())

    def test_initialization_invalid_attempts(self):
        with pytest.raises(ValueError, match="connect_attempts must be positive"):
            GatewayTransport("http://gateway.test", connect_attempts=0, client=MagicMock())

    def test_bind_registers_handlers_once(self, transport, client, consumer):
        """Test handlers are registered exactly once per client."""
        assert transport.bind(consumer) is True
        assert transport.bind(consumer) is False

        names = [c.args[0] for c in client.on.call_args_list]
        assert names == ["connect", "disconnect", "connect_error", "webhook:sent", "session:status"]

    @pytest.mark.asyncio
    async def test_routed_handler_dispatches(self, transport, client, consumer):
        """Test a received push event is dispatched to the consumer."""
        transport.bind(consumer)
        handlers = {c.args[0]: c.args[1] for c in client.on.call_args_list}

        await handlers["webhook:sent"]({"success": True})
        await handlers["connect"]()
        await handlers["disconnect"]("transport close")

        consumer.dispatch.assert_awaited_once_with("webhook:sent", {"success": True})
        consumer.on_connect.assert_called_once()
        consumer.on_disconnect.assert_called_once()

    @pytest.mark.asyncio
    async def test_start_requires_binding(self, transport):
        with pytest.raises(RuntimeError):
            await transport.start()

    @pytest.mark.asyncio
    async def test_try_connect(self, transport, client, consumer):
        transport.bind(consumer)

        assert await transport.try_connect() is True
        client.connect.assert_awaited_once_with("http://gateway.test", socketio_path="socket.io")

    @pytest.mark.asyncio
    async def test_try_connect_retries(self, transport, client):
        """Test failed connection attempts are retried within a round."""
        client.connect.side_effect = [
            SocketIOConnectionError("refused"),
            SocketIOConnectionError("refused"),
            None,
        ]

        assert await transport.try_connect() is True
        assert client.connect.await_count == 3

    @pytest.mark.asyncio
    async def test_try_connect_gives_up(self, transport, client):
        """Test a round reports failure once every attempt failed."""
        client.connect.side_effect = SocketIOConnectionError("refused")

        assert await transport.try_connect() is False
        assert client.connect.await_count == 3

    @pytest.mark.asyncio
    async def test_start_returns_without_waiting(self, transport, client, consumer):
        """Test start schedules the connection instead of blocking on it."""
        transport.bind(consumer)

        task = await transport.start()

        client.connect.assert_not_called()
        assert await asyncio.wait_for(task, timeout=1) is True
        client.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_start_keeps_trying_after_failed_round(self, transport, client, consumer):
        """Test a gateway down at startup is connected once it comes back."""
        transport.retry_pause = 0
        client.connect.side_effect = [SocketIOConnectionError("refused")] * 5 + [None]
        transport.bind(consumer)

        task = await transport.start()

        assert await asyncio.wait_for(task, timeout=1) is True
        assert client.connect.await_count == 6

    @pytest.mark.asyncio
    async def test_start_when_connected(self, transport, client, consumer):
        client.connected = True
        transport.bind(consumer)

        assert await transport.start() is None
        client.connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop_cancels_pending_connect(self, transport, client, consumer):
        """Test stop abandons background attempts to an unreachable gateway."""
        transport.retry_pause = 60
        client.connect.side_effect = SocketIOConnectionError("refused")
        transport.bind(consumer)
        task = await transport.start()
        while client.connect.await_count < 3:
            await asyncio.sleep(0)

        await transport.stop()

        assert task.cancelled()
        client.disconnect.assert_not_called()

    @pytest.mark.asyncio
    async def test_stop(self, transport, client):
        client.connected = True

        await transport.stop()

        client.disconnect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_stop_when_not_connected(self, transport, client):
        await transport.stop()

        client.disconnect.assert_not_called()
