"""
Module: request.py
Description: API request models for the gateway dashboard.

Defines request models for the dashboard's command endpoints. These
models handle input validation before commands reach the core.

Key Components:
- PageSizeRequest: Body of PUT /webhooks/page-size
- GotoPageRequest: Body of PUT /webhooks/page
- OpenQrPanelRequest: Body of PUT /sessions/{session_id}/qr

Dependencies: pydantic, typing
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageSizeRequest(BaseModel):
    """
    Request model for changing the webhook history page size.

    Attributes:
        page_size: Fixed page size or "all"; checked against the
            configured options by the history view
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    page_size: Union[int, str] = Field(
        ...,
        description="Page size (one of the configured options) or 'all'"
    )

    @field_validator('page_size')
    @classmethod
    def validate_page_size(cls, v: Union[int, str]) -> Union[int, str]:
        if isinstance(v, str) and not v:
            raise ValueError("page_size must be a non-empty string")
        return v


class GotoPageRequest(BaseModel):
    """Request model for jumping to a 0-based page index."""

    page: int = Field(..., description="0-based page index; clamped into range")


class OpenQrPanelRequest(BaseModel):
    """Request model for opening the QR panel for a session."""

    qr: Optional[str] = Field(default=None, description="QR payload already known, if any")
