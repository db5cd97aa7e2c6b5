"""
Module: statistics.py
Description: Webhook delivery counters.

Receives the success/failure signal of every webhook delivery pushed by
the gateway and keeps the counters shown on the dashboard.

Key Components:
- WebhookStats: record_webhook(), view(), reset()

Dependencies: logger
"""

from gateway_dashboard.models.response import StatsView
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


class WebhookStats:
    """In-process webhook delivery counters."""

    def __init__(self):
        self.total = 0
        self.success = 0
        self.failed = 0

    def record_webhook(self, success: bool) -> None:
        """
        Count one webhook delivery.

        Args:
            success: Whether the delivery succeeded
        """
        self.total += 1
        if success:
            self.success += 1
        else:
            self.failed += 1

        logger.debug(
            "Webhook delivery counted",
            success=bool(success),
            total=self.total,
            failed=self.failed
        )

    def reset(self) -> None:
        self.total = self.success = self.failed = 0

    def view(self) -> StatsView:
        return StatsView(total=self.total, success=self.success, failed=self.failed)
