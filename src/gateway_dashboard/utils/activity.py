"""
Module: activity.py
Description: Dashboard activity feed.

Bounded, newest-first feed of operator-facing log lines (session
lifecycle notices, gateway log events, QR progress). Every entry is
also written to the structured application log.

Key Components:
- ActivityLog.log(level, source, text)
- ActivityLog.entries(): newest-first snapshot

Dependencies: collections, datetime, logger
"""

from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Optional

from gateway_dashboard.models.response import ActivityEntry
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

LEVELS = {
    "debug": "debug",
    "info": "info",
    "success": "info",
    "warning": "warning",
    "warn": "warning",
    "error": "error",
}


class ActivityLog:
    """Bounded activity feed mirrored into structlog."""

    def __init__(self, limit: int = 200):
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._entries: Deque[ActivityEntry] = deque(maxlen=limit)

    def __len__(self) -> int:
        return len(self._entries)

    def log(self, level: str, source: Optional[str], text: Optional[str]) -> ActivityEntry:
        level = str(level or "info").lower()
        entry = ActivityEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=level,
            source=str(source) if source else "System",
            text="" if text is None else str(text),
        )
        self._entries.appendleft(entry)

        method = getattr(logger, LEVELS.get(level, "info"))
        method("Dashboard activity", activity_level=level, source=entry.source, text=entry.text)
        return entry

    def entries(self, limit: Optional[int] = None) -> List[ActivityEntry]:
        items = list(self._entries)
        return items if limit is None else items[:limit]
