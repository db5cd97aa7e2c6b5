"""
Module: event_store.py
Description: Bounded, persisted webhook delivery history.

Keeps the newest-first sequence of delivery records for the current
dashboard process, evicts the oldest records once capacity is exceeded,
and mirrors the whole sequence into the persistent store after every
mutation.

Key Components:
- EventStore: add(), clear(), set_capacity(), load()
- Change listeners: notified after every mutation
- Best-effort persistence: failures are logged, memory stays authoritative

Dependencies: json, typing, logger
"""

import json
from typing import Any, Callable, List, Mapping, Tuple

from gateway_dashboard.models.delivery import DeliveryRecord
from gateway_dashboard.storage.persistent import PersistenceFailure, PersistentStore
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

ChangeListener = Callable[["EventStore"], None]


class EventStore:
    """
    Newest-first webhook delivery history with oldest-first eviction.

    Records are only ever prepended; insertion order is the sole
    ordering. After every insertion the sequence is truncated from the
    tail so that ``len(store) <= capacity`` always holds.

    Attributes:
        capacity: Maximum number of retained records
        history_key: Persistent store key holding the JSON array

    Example:
        >>> store = EventStore(MemoryStore(), capacity=500)
        >>> store.add({"event": "message.received", "success": True})
        >>> len(store)
        1
    """

    def __init__(
        self,
        persistent_store: PersistentStore,
        capacity: int,
        history_key: str = "webhook_history"
    ):
        """
        Initialize an empty event store.

        Args:
            persistent_store: Backend for the history snapshot
            capacity: Maximum number of retained records
            history_key: Key of the history snapshot

        Raises:
            ValueError: If capacity is not positive or history_key is empty
        """
        _validate_capacity(capacity)
        if not history_key or not isinstance(history_key, str):
            raise ValueError("history_key must be a non-empty string")

        self._persistent_store = persistent_store
        self._records: List[DeliveryRecord] = []
        self._listeners: List[ChangeListener] = []
        self.capacity = capacity
        self.history_key = history_key

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> Tuple[DeliveryRecord, ...]:
        """Snapshot of the retained records, newest first."""
        return tuple(self._records)

    def slice(self, start: int, end: int) -> List[DeliveryRecord]:
        return self._records[start:end]

    def get(self, position: int) -> DeliveryRecord:
        """
        Record at an absolute position (0 is the newest).

        Raises:
            IndexError: If no record exists at that position
        """
        if position < 0 or position >= len(self._records):
            raise IndexError(f"no record at position {position}")
        return self._records[position]

    def subscribe(self, listener: ChangeListener) -> None:
        """Register a callable invoked after every mutation."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def load(self) -> int:
        """
        Hydrate records from the persistent store.

        Absent or corrupt snapshots yield an empty store; entries that
        cannot be parsed are skipped. Nothing is raised.

        Returns:
            Number of records hydrated
        """
        try:
            stored = self._persistent_store.get(self.history_key)
        except PersistenceFailure as e:
            logger.error(
                "Failed to load webhook history from storage",
                key=self.history_key,
                error=str(e)
            )
            stored = None

        records: List[DeliveryRecord] = []
        if stored:
            try:
                entries = json.loads(stored)
            except json.JSONDecodeError as e:
                logger.error(
                    "Corrupt webhook history in storage",
                    key=self.history_key,
                    error=str(e)
                )
                entries = []

            if not isinstance(entries, list):
                logger.error(
                    "Webhook history in storage is not a list",
                    key=self.history_key,
                    found_type=type(entries).__name__
                )
                entries = []

            for entry in entries:
                try:
                    records.append(DeliveryRecord.from_raw(entry))
                except ValueError as e:
                    logger.warning(
                        "Skipping unreadable webhook history entry",
                        key=self.history_key,
                        error=str(e)
                    )

        self._records = records
        if self._truncate():
            self._persist()

        logger.info(
            "Webhook history hydrated",
            key=self.history_key,
            records=len(self._records),
            capacity=self.capacity
        )
        self._notify()
        return len(self._records)

    def add(self, raw: Mapping[str, Any]) -> DeliveryRecord:
        """
        Record a webhook delivery.

        Assigns a timestamp when the input has none, prepends the record,
        evicts the oldest records beyond capacity, then persists.

        Args:
            raw: Delivery record in the gateway's wire format

        Returns:
            The stored DeliveryRecord

        Raises:
            ValueError: If raw is not a mapping
        """
        record = DeliveryRecord.from_raw(raw)

        self._records.insert(0, record)
        evicted = self._truncate()
        self._persist()

        logger.debug(
            "Webhook delivery recorded",
            session_id=record.resolved_session_id,
            webhook_event=record.event,
            success=record.success,
            records=len(self._records),
            evicted=evicted
        )

        self._notify()
        return record

    def clear(self) -> None:
        """Drop every record and the persisted snapshot. Never raises."""
        self._records = []
        try:
            self._persistent_store.remove(self.history_key)
        except PersistenceFailure as e:
            logger.error(
                "Failed to remove webhook history from storage",
                key=self.history_key,
                error=str(e)
            )

        logger.info("Webhook history cleared", key=self.history_key)
        self._notify()

    def set_capacity(self, capacity: int) -> None:
        """
        Change capacity and evict immediately if the history now exceeds it.

        Raises:
            ValueError: If capacity is not a positive integer
        """
        _validate_capacity(capacity)
        previous = self.capacity
        self.capacity = capacity

        evicted = self._truncate()
        if evicted:
            self._persist()

        logger.info(
            "Webhook history capacity changed",
            previous=previous,
            capacity=capacity,
            evicted=evicted
        )
        self._notify()

    def _truncate(self) -> int:
        """Evict from the tail down to capacity. Returns the number evicted."""
        overflow = len(self._records) - self.capacity
        if overflow <= 0:
            return 0
        del self._records[self.capacity:]
        return overflow

    def _persist(self) -> None:
        try:
            snapshot = json.dumps(
                [record.to_wire() for record in self._records],
                ensure_ascii=False
            )
            self._persistent_store.set(self.history_key, snapshot)
        except (PersistenceFailure, TypeError, ValueError) as e:
            logger.error(
                "Failed to save webhook history to storage",
                key=self.history_key,
                records=len(self._records),
                error=str(e),
                error_type=type(e).__name__
            )

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def _validate_capacity(capacity: int) -> None:
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise ValueError("capacity must be a positive integer")
