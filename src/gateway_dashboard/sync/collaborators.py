"""
Module: collaborators.py
Description: Interfaces the sync consumer depends on.

The consumer only needs these narrow capabilities; the dashboard wires
in GatewaySessionDirectory, WebhookStats and ActivityLog.
"""

from typing import Optional, Protocol


class SessionDirectory(Protocol):
    async def reload(self) -> bool:
        """Refetch and redraw the session list and its aggregates."""
        ...


class StatisticsAggregator(Protocol):
    def record_webhook(self, success: bool) -> None:
        ...


class EventLogger(Protocol):
    def log(self, level: str, source: Optional[str], text: Optional[str]):
        ...
