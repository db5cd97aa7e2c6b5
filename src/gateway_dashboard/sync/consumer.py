"""
Module: consumer.py
Description: Push-event routing for the dashboard.

Classifies every event pushed by the gateway and decides how the
dashboard catches up with it:

- webhook results feed the event store (and the statistics counters),
- session status changes patch the displayed row in place and then
  reconcile through a full session reload,
- session creation and deletion go straight to a full reload,
- QR and ready events only touch the QR panel when it is open for
  that session,
- gateway log lines go to the activity feed.

Unknown event names are ignored. Handlers never raise for bad payloads;
they log and drop them.

Dependencies: typing, logger
"""

from typing import Any, Awaitable, Callable, Dict, Mapping

from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.surface.connection import ConnectionIndicator, ConnectionState
from gateway_dashboard.surface.qr import QrPanel
from gateway_dashboard.surface.sessions import SessionBoard
from gateway_dashboard.sync.collaborators import EventLogger, SessionDirectory, StatisticsAggregator
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_CREATED = "session:created"
SESSION_DELETED = "session:deleted"
SESSION_STATUS = "session:status"
SESSION_QR = "session:qr"
SESSION_READY = "session:ready"
WEBHOOK_SENT = "webhook:sent"
EVENT_LOG = "event:log"

Handler = Callable[[Mapping[str, Any]], Awaitable[None]]


class SyncConsumer:
    """
    Routes gateway push events to the dashboard's state.

    Attributes:
        event_store: Webhook history fed by webhook:sent
        directory: Coarse session list reload
        statistics: Webhook success/failure counters
        activity: Activity feed
        board: Session rows patched by session:status
        qr_panel: QR panel matched by session:qr and session:ready
        indicator: Connection indicator
    """

    def __init__(
        self,
        event_store: EventStore,
        directory: SessionDirectory,
        statistics: StatisticsAggregator,
        activity: EventLogger,
        board: SessionBoard,
        qr_panel: QrPanel,
        indicator: ConnectionIndicator,
    ):
        self.event_store = event_store
        self.directory = directory
        self.statistics = statistics
        self.activity = activity
        self.board = board
        self.qr_panel = qr_panel
        self.indicator = indicator

        self._handlers: Dict[str, Handler] = {
            SESSION_CREATED: self.on_session_created,
            SESSION_DELETED: self.on_session_deleted,
            SESSION_STATUS: self.on_session_status,
            SESSION_QR: self.on_session_qr,
            SESSION_READY: self.on_session_ready,
            WEBHOOK_SENT: self.on_webhook_sent,
            EVENT_LOG: self.on_event_log,
        }

    @property
    def event_names(self):
        return tuple(self._handlers)

    async def dispatch(self, event: str, data: Any = None) -> bool:
        """
        Route one push event.

        Args:
            event: Push event name
            data: Event payload

        Returns:
            False if the event was ignored or dropped
        """
        handler = self._handlers.get(event)
        if handler is None:
            logger.debug("Ignoring unrecognized push event", push_event=event)
            return False

        if not isinstance(data, Mapping):
            logger.warning(
                "Dropping push event with malformed payload",
                push_event=event,
                payload_type=type(data).__name__
            )
            return False

        await handler(data)
        return True

    def on_connect(self) -> None:
        if self.indicator.set(ConnectionState.CONNECTED):
            logger.info("Connected to gateway push stream")

    def on_disconnect(self) -> None:
        if self.indicator.set(ConnectionState.DISCONNECTED):
            logger.warning("Disconnected from gateway push stream")

    async def on_session_created(self, data: Mapping[str, Any]) -> None:
        await self.directory.reload()
        self.activity.log("info", "System", f"New session created: {data.get('sessionId')}")

    async def on_session_deleted(self, data: Mapping[str, Any]) -> None:
        await self.directory.reload()
        self.activity.log("warning", "System", f"Session deleted: {data.get('sessionId')}")

    async def on_session_status(self, data: Mapping[str, Any]) -> None:
        session_id = data.get("sessionId")
        status = data.get("status")

        if session_id and status:
            if not self.board.patch_status(str(session_id), str(status)):
                logger.debug(
                    "No displayed row for session status update",
                    session_id=session_id,
                    status=status
                )

        # counts and selectors are only consistent after a full reload
        await self.directory.reload()

    async def on_session_qr(self, data: Mapping[str, Any]) -> None:
        session_id = data.get("sessionId")
        self.activity.log("info", session_id, "QR Code received")

        if not self.qr_panel.is_showing(session_id):
            logger.debug("QR panel not open for session, dropping QR", session_id=session_id)
            return

        qr = data.get("qr")
        if qr:
            self.qr_panel.show_qr(str(qr))

    async def on_session_ready(self, data: Mapping[str, Any]) -> None:
        session_id = data.get("sessionId")

        if not self.qr_panel.is_showing(session_id):
            logger.info("Session ready", session_id=session_id)
            return

        self.qr_panel.close()
        self.activity.log("success", session_id, f"{session_id} Connected!")
        await self.directory.reload()

    async def on_webhook_sent(self, data: Mapping[str, Any]) -> None:
        self.event_store.add(data)
        self.statistics.record_webhook(bool(data.get("success")))

    async def on_event_log(self, data: Mapping[str, Any]) -> None:
        self.activity.log(data.get("type") or "info", data.get("sessionId"), data.get("text"))
