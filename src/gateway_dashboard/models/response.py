"""
Module: response.py
Description: View and API response models for the gateway dashboard.

Defines the presentational models produced by the projector, the
paginator and the surfaces. These models structure the JSON responses
returned by the dashboard API.

Key Components:
- DeliveryRow / DeliveryDetail: Webhook history row and detail view
- PagerState / PageView: Pager widget data and the rendered page
- SessionRow / SessionBoardView: Session list and aggregates
- QrPanelView, ConnectionView, StatsView, ActivityEntry

Dependencies: pydantic, typing
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class DeliveryRow(BaseModel):
    """
    One row of the webhook history table.

    Attributes:
        position: Absolute index of the record in the store (newest is 0)
        session_id: Resolved session id or the sentinel
        event: Event label or the sentinel
        url: Target URL or the sentinel
        status_label: "HTTP {status}", "Success" or "Failed"
        tone: "success" or "error"
        time: Rendered timestamp
    """

    position: int = Field(..., ge=0, description="Absolute record position")
    session_id: str = Field(..., description="Resolved session id")
    event: str = Field(..., description="Delivery event label")
    url: str = Field(..., description="Target URL")
    status_label: str = Field(..., description="Status badge text")
    tone: str = Field(..., description="Badge tone (success or error)")
    time: str = Field(..., description="Rendered delivery time")


class DeliveryDetail(BaseModel):
    """Full detail view of a single delivery record."""

    position: Optional[int] = Field(default=None, description="Absolute record position")
    session_id: str = Field(..., description="Resolved session id")
    event: str = Field(..., description="Delivery event label")
    status_label: str = Field(..., description="Status text")
    tone: str = Field(..., description="Status tone (success or error)")
    time: str = Field(..., description="Rendered delivery time with seconds")
    url: str = Field(..., description="Target URL")
    payload_text: str = Field(..., description="Pretty-printed request payload")
    response_text: str = Field(..., description="Normalized response body")


class PagerState(BaseModel):
    """
    Pager widget data.

    Attributes:
        page: 1-based current page number
        total_pages: Number of pages (at least 1)
        is_first: Whether first/prev controls are disabled
        is_last: Whether next/last controls are disabled
        total: Number of retained records
    """

    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=1)
    is_first: bool
    is_last: bool
    total: int = Field(..., ge=0)


class PageView(BaseModel):
    """Rendered webhook history page."""

    version: int = Field(..., ge=0, description="Increments on every re-render")
    rows: List[DeliveryRow] = Field(default_factory=list)
    pager: PagerState
    page_size: str = Field(..., description="Current page setting as persisted")
    page_size_options: List[str] = Field(default_factory=list)
    capacity: int = Field(..., ge=1, description="Retention capacity")
    empty_message: Optional[str] = Field(
        default=None,
        description="Placeholder text when the history is empty"
    )


class SessionRow(BaseModel):
    """One session in the session list."""

    session_id: str
    status: str
    status_class: str = Field(..., description="CSS-style status class, e.g. status-connected")


class SessionBoardView(BaseModel):
    """Session list with derived aggregates."""

    sessions: List[SessionRow] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    by_status: Dict[str, int] = Field(default_factory=dict)
    loaded_at: Optional[str] = Field(default=None, description="Last successful reload time")


class QrPanelView(BaseModel):
    """State of the QR pairing panel."""

    visible: bool = False
    session_id: Optional[str] = None
    qr: Optional[str] = None
    waiting: bool = Field(default=False, description="Spinner shown until a QR arrives")


class ConnectionView(BaseModel):
    """Push connection indicator."""

    connected: bool
    label: str


class StatsView(BaseModel):
    """Webhook delivery counters."""

    total: int = 0
    success: int = 0
    failed: int = 0


class StatusResponse(BaseModel):
    """Combined connection and statistics status."""

    connection: ConnectionView
    webhooks: StatsView


class ActivityEntry(BaseModel):
    """One line of the activity feed."""

    timestamp: str
    level: str
    source: str
    text: str

