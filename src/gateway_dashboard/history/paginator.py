"""
Module: paginator.py
Description: Page windowing over the webhook delivery history.

Derives the page count and the current page window from the event
store's length and the page size setting, owns navigation state and
keeps the store's capacity in line with the page setting.

Key Components:
- Paginator: set_page_size(), total_pages(), goto_page(), window_slice()
- Navigation helpers: first(), prev(), next(), last()
- Render listeners: notified whenever the visible window may have changed

Dependencies: math, typing, logger
"""

import math
from typing import Callable, Iterable, List, Optional, Union

from gateway_dashboard.models.delivery import DeliveryRecord
from gateway_dashboard.models.page import (
    ALL,
    DEFAULT_ALL_CAPACITY,
    DEFAULT_CAPACITY_MULTIPLIER,
    PageSetting,
    capacity_for,
    parse_page_setting,
    serialize_page_setting,
)
from gateway_dashboard.models.response import PagerState
from gateway_dashboard.storage.event_store import EventStore
from gateway_dashboard.storage.persistent import PersistenceFailure, PersistentStore
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

RenderListener = Callable[[], None]


class Paginator:
    """
    Navigation state over an EventStore.

    Invariant: ``0 <= current_page < total_pages()``, re-clamped after
    every change to the records or to the page setting.

    Attributes:
        options: Allowed fixed page sizes
        page_size_key: Persistent store key of the page setting
    """

    def __init__(
        self,
        event_store: EventStore,
        persistent_store: PersistentStore,
        options: Iterable[int] = (10, 25, 50, 100),
        default_setting: Union[int, str] = 50,
        page_size_key: str = "webhook_page_size",
        capacity_multiplier: int = DEFAULT_CAPACITY_MULTIPLIER,
        all_capacity: int = DEFAULT_ALL_CAPACITY,
    ):
        """
        Initialize the paginator and align the store's capacity.

        Args:
            event_store: History to paginate
            persistent_store: Backend for the page setting
            options: Allowed fixed page sizes
            default_setting: Setting used until one is loaded or chosen
            page_size_key: Key of the persisted page setting
            capacity_multiplier: Records retained per page of a fixed size
            all_capacity: Retention ceiling for ALL

        Raises:
            ValueError: If default_setting is not a valid page setting
        """
        self.options = sorted(set(options))
        self.page_size_key = page_size_key
        self.capacity_multiplier = capacity_multiplier
        self.all_capacity = all_capacity

        self._store = event_store
        self._persistent_store = persistent_store
        self._default = parse_page_setting(default_setting, self.options)
        self._setting: PageSetting = self._default
        self._current_page = 0
        self._listeners: List[RenderListener] = []

        self._store.set_capacity(self._capacity())
        self._store.subscribe(self._on_records_changed)

    @property
    def setting(self) -> PageSetting:
        return self._setting

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        """Effective window size; the whole history when the setting is ALL."""
        if self._setting == ALL:
            return len(self._store)
        return int(self._setting)

    def subscribe(self, listener: RenderListener) -> None:
        """Register a callable invoked whenever a re-render is requested."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def load(self) -> PageSetting:
        """
        Hydrate the persisted page setting.

        Invalid or unreadable values fall back to the default.

        Returns:
            The active page setting
        """
        stored: Optional[str] = None
        try:
            stored = self._persistent_store.get(self.page_size_key)
        except PersistenceFailure as e:
            logger.error(
                "Failed to load page size from storage",
                key=self.page_size_key,
                error=str(e)
            )

        setting = self._default
        if stored is not None:
            try:
                setting = parse_page_setting(stored, self.options)
            except ValueError as e:
                logger.warning(
                    "Ignoring invalid stored page size",
                    key=self.page_size_key,
                    stored=stored,
                    error=str(e)
                )

        self._setting = setting
        self._current_page = 0
        self._store.set_capacity(self._capacity())
        self._request_render()
        return setting

    def set_page_size(self, setting: Union[int, str]) -> PageSetting:
        """
        Change the page setting.

        Persists the setting, recomputes the store capacity (evicting at
        once if needed), returns to the first page and requests a render.

        Args:
            setting: One of the allowed sizes, a decimal string, or "all"

        Returns:
            The parsed page setting

        Raises:
            ValueError: If the setting is not allowed
        """
        parsed = parse_page_setting(setting, self.options)

        try:
            self._persistent_store.set(self.page_size_key, serialize_page_setting(parsed))
        except PersistenceFailure as e:
            logger.error(
                "Failed to save page size to storage",
                key=self.page_size_key,
                error=str(e)
            )

        self._setting = parsed
        self._current_page = 0
        self._store.set_capacity(self._capacity())

        logger.info(
            "Page size changed",
            page_size=serialize_page_setting(parsed),
            capacity=self._store.capacity
        )
        self._request_render()
        return parsed

    def total_pages(self) -> int:
        if self._setting == ALL:
            return 1
        return max(1, math.ceil(len(self._store) / int(self._setting)))

    def goto_page(self, page: int) -> int:
        """
        Move to a page, clamped into ``[0, total_pages() - 1]``.

        Returns:
            The resulting page index
        """
        last_page = self.total_pages() - 1
        self._current_page = min(max(page, 0), last_page)
        self._request_render()
        return self._current_page

    def first(self) -> int:
        return self.goto_page(0)

    def last(self) -> int:
        return self.goto_page(self.total_pages() - 1)

    def prev(self) -> int:
        if self._current_page > 0:
            return self.goto_page(self._current_page - 1)
        return self._current_page

    def next(self) -> int:
        if self._current_page < self.total_pages() - 1:
            return self.goto_page(self._current_page + 1)
        return self._current_page

    def window_start(self) -> int:
        return self._current_page * self.page_size

    def window_slice(self) -> List[DeliveryRecord]:
        """Records visible on the current page, newest first."""
        start = self.window_start()
        end = min(start + self.page_size, len(self._store))
        return self._store.slice(start, end)

    def pager_state(self) -> PagerState:
        total_pages = self.total_pages()
        return PagerState(
            page=self._current_page + 1,
            total_pages=total_pages,
            is_first=self._current_page == 0,
            is_last=self._current_page >= total_pages - 1,
            total=len(self._store),
        )

    def _capacity(self) -> int:
        return capacity_for(self._setting, self.capacity_multiplier, self.all_capacity)

    def _on_records_changed(self, store: EventStore) -> None:
        last_page = self.total_pages() - 1
        if self._current_page > last_page:
            self._current_page = last_page
        self._request_render()

    def _request_render(self) -> None:
        for listener in list(self._listeners):
            listener()
