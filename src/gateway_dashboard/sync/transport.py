"""
Module: transport.py
Description: Socket.IO transport for the gateway push stream.

Owns the python-socketio client connected to the gateway. Handlers are
registered on the client exactly once, so the client's own reconnects
resubscribe transparently without duplicating deliveries. Events missed
while disconnected are not replayed.

Key Components:
- GatewayTransport.bind(): Register consumer handlers (idempotent)
- GatewayTransport.try_connect(): One round of connects with exponential backoff
- GatewayTransport.start(): Background connect, repeated until the first success
- GatewayTransport.stop(): Cancel pending connects and disconnect

Dependencies: python-socketio, tenacity, asyncio, logging, logger
"""

import asyncio
import logging
from typing import Optional

import socketio
from socketio.exceptions import ConnectionError as SocketIOConnectionError
from tenacity import (
    AsyncRetrying,
    RetryError,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from gateway_dashboard.sync.consumer import SyncConsumer
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class GatewayTransport:
    """
    Push-stream connection to the gateway.

    Attributes:
        url: Gateway base URL
        socketio_path: Socket.IO endpoint path
        connect_attempts: Attempts per round of initial connection
        client: python-socketio AsyncClient
    """

    def __init__(
        self,
        url: str,
        socketio_path: str = "socket.io",
        connect_attempts: int = 5,
        reconnection_attempts: int = 0,
        reconnection_delay: float = 1.0,
        reconnection_delay_max: float = 5.0,
        retry_pause: float = 30.0,
        client: Optional[socketio.AsyncClient] = None,
    ):
        """
        Initialize the transport.

        Args:
            url: Gateway base URL
            socketio_path: Socket.IO endpoint path
            connect_attempts: Attempts per round of initial connection
            reconnection_attempts: Reconnects after a drop (0 is unlimited)
            reconnection_delay: Initial reconnect delay in seconds
            reconnection_delay_max: Maximum reconnect delay in seconds
            retry_pause: Pause between rounds of initial connection attempts
            client: Optional preconfigured Socket.IO client

        Raises:
            ValueError: If url is not an HTTP(S) URL or attempts is not positive
        """
        if not url or not isinstance(url, str):
            raise ValueError("url must be a non-empty string")
        if not url.startswith(('http://', 'https://')):
            raise ValueError("url must be a valid HTTP/HTTPS URL")
        if connect_attempts < 1:
            raise ValueError("connect_attempts must be positive")

        self.url = url
        self.socketio_path = socketio_path
        self.connect_attempts = connect_attempts
        self.retry_wait = wait_exponential(multiplier=1, min=1, max=30)
        self.retry_pause = retry_pause
        self.client = client or socketio.AsyncClient(
            reconnection=True,
            reconnection_attempts=reconnection_attempts,
            reconnection_delay=reconnection_delay,
            reconnection_delay_max=reconnection_delay_max,
        )
        self._consumer: Optional[SyncConsumer] = None
        self._connect_task: Optional[asyncio.Task] = None

        logger.info(
            "Gateway transport initialized",
            url=url,
            socketio_path=socketio_path,
            reconnection_attempts=reconnection_attempts
        )

    @property
    def connected(self) -> bool:
        return bool(self.client.connected)

    def bind(self, consumer: SyncConsumer) -> bool:
        """
        Register the consumer's handlers on the client.

        Only the first call registers anything; later calls are no-ops.

        Returns:
            True if handlers were registered by this call
        """
        if self._consumer is not None:
            return False
        self._consumer = consumer

        async def on_connect():
            consumer.on_connect()

        async def on_disconnect(*args):
            consumer.on_disconnect()

        async def on_connect_error(data=None):
            logger.warning("Gateway connection error", url=self.url, error=str(data))

        self.client.on("connect", on_connect)
        self.client.on("disconnect", on_disconnect)
        self.client.on("connect_error", on_connect_error)

        for event in consumer.event_names:
            self.client.on(event, self._route(consumer, event))

        logger.info("Push event handlers registered", events=list(consumer.event_names))
        return True

    @staticmethod
    def _route(consumer: SyncConsumer, event: str):
        async def handler(data=None):
            await consumer.dispatch(event, data)
        return handler

    async def try_connect(self) -> bool:
        """
        One round of connection attempts with exponential backoff.

        Returns:
            True if connected, False once every attempt of the round failed
        """
        if self.connected:
            return True

        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.connect_attempts),
            wait=self.retry_wait,
            retry=retry_if_exception_type(SocketIOConnectionError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=False,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    await self.client.connect(self.url, socketio_path=self.socketio_path)
        except RetryError as e:
            logger.error(
                "Failed to connect to gateway after all retries",
                url=self.url,
                attempts=self.connect_attempts,
                error=str(e.last_attempt.exception())
            )
            return False

        logger.info("Gateway push stream connected", url=self.url)
        return True

    async def _keep_connecting(self) -> bool:
        # the client only reconnects by itself after a first successful connect
        while not await self.try_connect():
            logger.warning(
                "Gateway unreachable, retrying in background",
                url=self.url,
                pause_seconds=self.retry_pause
            )
            await asyncio.sleep(self.retry_pause)
        return True

    async def start(self) -> Optional[asyncio.Task]:
        """
        Connect to the gateway in the background.

        Returns immediately. Rounds of attempts repeat until the first
        connection succeeds; after that the Socket.IO client reconnects
        on its own.

        Returns:
            The background connect task, or None if already connected

        Raises:
            RuntimeError: If no consumer is bound
        """
        if self._consumer is None:
            raise RuntimeError("bind() a consumer before starting the transport")
        if self.connected:
            return None
        if self._connect_task is None or self._connect_task.done():
            self._connect_task = asyncio.create_task(self._keep_connecting())
        return self._connect_task

    async def stop(self) -> None:
        task, self._connect_task = self._connect_task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        if self.connected:
            await self.client.disconnect()
            logger.info("Gateway push stream closed", url=self.url)
