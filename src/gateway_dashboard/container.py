"""
Module: container.py
Description: Application root for the gateway dashboard.

Constructs every service explicitly and wires them together. The
resulting Dashboard is owned by the FastAPI application and handed to
route handlers through a dependency; nothing is kept in module globals.

Key Components:
- Dashboard: Holds the wired services, hydrate(), start(), stop()
- build_dashboard(): Factory from Settings with optional overrides

Dependencies: dataclasses, typing, logger
"""

from dataclasses import dataclass
from typing import Optional

from gateway_dashboard.config.settings import Settings
from gateway_dashboard.history.paginator import Paginator
from gateway_dashboard.history.projector import Projector
from gateway_dashboard.history.view import WebhookHistoryView
from gateway_dashboard.services.session_directory import GatewaySessionDirectory
from gateway_dashboard.services.statistics import WebhookStats
from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.storage.persistent import JsonFileStore, PersistentStore
from gateway_dashboard.surface.connection import ConnectionIndicator
from gateway_dashboard.surface.qr import QrPanel
from gateway_dashboard.surface.sessions import SessionBoard
from gateway_dashboard.sync.collaborators import SessionDirectory
from gateway_dashboard.sync.consumer import SyncConsumer
from gateway_dashboard.sync.transport import GatewayTransport
from gateway_dashboard.utils.activity import ActivityLog
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Dashboard:
    """Wired dashboard services."""

    settings: Settings
    persistent_store: PersistentStore
    event_store: EventStore
    paginator: Paginator
    projector: Projector
    history: WebhookHistoryView
    board: SessionBoard
    qr_panel: QrPanel
    indicator: ConnectionIndicator
    activity: ActivityLog
    statistics: WebhookStats
    directory: SessionDirectory
    consumer: SyncConsumer
    transport: Optional[GatewayTransport] = None

    def hydrate(self) -> None:
        """Restore the page setting, then the history it bounds."""
        self.paginator.load()
        self.event_store.load()

    async def start(self) -> None:
        """Hydrate, connect to the push stream in the background and load the session list."""
        self.hydrate()
        if self.transport is not None:
            self.transport.bind(self.consumer)
            await self.transport.start()
        await self.directory.reload()

        logger.info(
            "Dashboard started",
            records=len(self.event_store),
            page_size=str(self.paginator.setting),
            connected=self.indicator.connected
        )

    async def stop(self) -> None:
        if self.transport is not None:
            await self.transport.stop()
        aclose = getattr(self.directory, "aclose", None)
        if aclose is not None:
            await aclose()
        logger.info("Dashboard stopped")


def build_dashboard(
    settings: Settings,
    persistent_store: Optional[PersistentStore] = None,
    directory: Optional[SessionDirectory] = None,
    transport: Optional[GatewayTransport] = None,
    connect_gateway: bool = True,
) -> Dashboard:
    """
    Build a fully wired Dashboard.

    Args:
        settings: Dashboard settings
        persistent_store: Storage backend; a JsonFileStore at settings.storage_path by default
        directory: Session directory; the HTTP directory by default
        transport: Push transport; a Socket.IO transport by default
        connect_gateway: When False no push transport is created

    Returns:
        Dashboard, not yet hydrated
    """
    if persistent_store is None:
        persistent_store = JsonFileStore(settings.storage_path, settings.storage_quota_bytes)

    event_store = EventStore(
        persistent_store,
        capacity=settings.all_capacity,
        history_key=settings.history_key,
    )
    paginator = Paginator(
        event_store,
        persistent_store,
        options=settings.page_size_options,
        default_setting=settings.default_page_size,
        page_size_key=settings.page_size_key,
        capacity_multiplier=settings.capacity_multiplier,
        all_capacity=settings.all_capacity,
    )
    projector = Projector(timezone_name=settings.display_timezone)
    history = WebhookHistoryView(event_store, paginator, projector)

    board = SessionBoard()
    qr_panel = QrPanel()
    indicator = ConnectionIndicator()
    activity = ActivityLog(limit=settings.activity_log_limit)
    statistics = WebhookStats()

    if directory is None:
        directory = GatewaySessionDirectory(
            settings.gateway_url,
            board,
            sessions_path=settings.sessions_path,
            timeout_seconds=settings.http_timeout,
        )

    consumer = SyncConsumer(
        event_store=event_store,
        directory=directory,
        statistics=statistics,
        activity=activity,
        board=board,
        qr_panel=qr_panel,
        indicator=indicator,
    )

    if transport is None and connect_gateway:
        transport = GatewayTransport(
            settings.gateway_url,
            socketio_path=settings.socketio_path,
            connect_attempts=settings.connect_retry_attempts,
            reconnection_attempts=settings.reconnection_attempts,
            reconnection_delay=settings.reconnection_delay,
            reconnection_delay_max=settings.reconnection_delay_max,
            retry_pause=settings.connect_retry_pause,
        )

    return Dashboard(
        settings=settings,
        persistent_store=persistent_store,
        event_store=event_store,
        paginator=paginator,
        projector=projector,
        history=history,
        board=board,
        qr_panel=qr_panel,
        indicator=indicator,
        activity=activity,
        statistics=statistics,
        directory=directory,
        consumer=consumer,
        transport=transport,
    )
