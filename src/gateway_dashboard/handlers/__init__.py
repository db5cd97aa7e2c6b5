"""
Module: handlers
Description: Package initialization for API route handlers.

This package contains the FastAPI routers of the dashboard:
- webhooks: Webhook history page, detail, paging and clearing
- sessions: Session list and QR panel
- status: Connection indicator, counters and activity feed
"""

__all__ = []
