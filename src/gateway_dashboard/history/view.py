"""
Module: view.py
Description: Webhook history surface controller.

Glues the paginator and the projector into the rendered history page
and exposes the narrow command interface the UI calls into: row
activation, page size changes, navigation and clearing.

Dependencies: typing, logger
"""

from typing import Optional, Union

from gateway_dashboard.history.paginator import Paginator
from gateway_dashboard.history.projector import Projector
from gateway_dashboard.models.delivery import DeliveryRecord
from gateway_dashboard.models.page import ALL, serialize_page_setting
from gateway_dashboard.models.response import DeliveryDetail, PageView
from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

EMPTY_MESSAGE = "No webhook history yet. Webhooks will appear here in real-time."

NAVIGATION = ("first", "prev", "next", "last")


class WebhookHistoryView:
    """
    Rendered state of the webhook history table.

    Re-renders whenever the paginator requests it and keeps the last
    rendered page, so readers never trigger work proportional to the
    history size.
    """

    def __init__(self, event_store: EventStore, paginator: Paginator, projector: Projector):
        self._store = event_store
        self._paginator = paginator
        self._projector = projector
        self._version = 0
        self._page: Optional[PageView] = None
        self._paginator.subscribe(self.render)

    @property
    def page(self) -> PageView:
        if self._page is None:
            self.render()
        return self._page

    def render(self) -> PageView:
        start = self._paginator.window_start()
        rows = [
            self._projector.project_row(record, start + offset)
            for offset, record in enumerate(self._paginator.window_slice())
        ]
        self._version += 1
        self._page = PageView(
            version=self._version,
            rows=rows,
            pager=self._paginator.pager_state(),
            page_size=serialize_page_setting(self._paginator.setting),
            page_size_options=[str(o) for o in self._paginator.options] + [ALL],
            capacity=self._store.capacity,
            empty_message=EMPTY_MESSAGE if not rows else None,
        )
        return self._page

    def on_row_activated(self, record: DeliveryRecord, position: Optional[int] = None) -> DeliveryDetail:
        return self._projector.project_detail(record, position)

    def on_position_activated(self, position: int) -> DeliveryDetail:
        """
        Detail view of the record at an absolute position.

        Raises:
            IndexError: If no record exists at that position
        """
        return self.on_row_activated(self._store.get(position), position)

    def on_page_size_changed(self, setting: Union[int, str]) -> PageView:
        """
        Apply a page size chosen in the UI.

        Raises:
            ValueError: If the setting is not allowed
        """
        self._paginator.set_page_size(setting)
        return self.page

    def on_goto_page(self, page: int) -> PageView:
        self._paginator.goto_page(page)
        return self.page

    def on_navigate(self, direction: str) -> PageView:
        """
        Apply a first/prev/next/last pager command.

        Raises:
            ValueError: If the direction is unknown
        """
        if direction not in NAVIGATION:
            raise ValueError(f"direction must be one of: {', '.join(NAVIGATION)}")
        getattr(self._paginator, direction)()
        return self.page

    def on_clear(self) -> PageView:
        self._store.clear()
        logger.info("Webhook history cleared from dashboard")
        return self.page
