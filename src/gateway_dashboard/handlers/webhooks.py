"""
Module: webhooks.py
Description: Webhook history handlers.

Implements the webhook history endpoints the dashboard UI calls:
- GET /webhooks: Current page of the history
- GET /webhooks/{position}: Detail view of one delivery
- PUT /webhooks/page-size: Change the page size
- PUT /webhooks/page: Jump to a page
- POST /webhooks/navigate/{direction}: First/prev/next/last
- DELETE /webhooks: Clear the history

Dependencies: FastAPI, logger
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as status_codes

from gateway_dashboard.container import Dashboard
from gateway_dashboard.handlers.dependencies import get_dashboard
from gateway_dashboard.models.request import GotoPageRequest, PageSizeRequest
from gateway_dashboard.models.response import DeliveryDetail, PageView
from gateway_dashboard.utils.logger import get_logger

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = get_logger(__name__)


@router.get("", response_model=PageView)
async def get_page(dashboard: Dashboard = Depends(get_dashboard)) -> PageView:
    """
    Current page of the webhook history.

    Returns the page rendered after the last change; reading it never
    touches the full history.
    """
    return dashboard.history.page


@router.put("/page-size", response_model=PageView)
async def change_page_size(
    request: PageSizeRequest,
    dashboard: Dashboard = Depends(get_dashboard)
) -> PageView:
    """
    Change the page size.

    Raises:
        HTTPException: 400 if the page size is not one of the options
    """
    try:
        return dashboard.history.on_page_size_changed(request.page_size)
    except ValueError as e:
        logger.warning("Rejected page size", page_size=str(request.page_size), error=str(e))
        raise HTTPException(
            status_code=status_codes.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.put("/page", response_model=PageView)
async def goto_page(
    request: GotoPageRequest,
    dashboard: Dashboard = Depends(get_dashboard)
) -> PageView:
    """Jump to a 0-based page; out-of-range pages are clamped."""
    return dashboard.history.on_goto_page(request.page)


@router.post("/navigate/{direction}", response_model=PageView)
async def navigate(direction: str, dashboard: Dashboard = Depends(get_dashboard)) -> PageView:
    """
    Apply a pager command.

    Raises:
        HTTPException: 400 if direction is not first, prev, next or last
    """
    try:
        return dashboard.history.on_navigate(direction)
    except ValueError as e:
        raise HTTPException(
            status_code=status_codes.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.delete("", response_model=PageView)
async def clear_history(dashboard: Dashboard = Depends(get_dashboard)) -> PageView:
    return dashboard.history.on_clear()


@router.get("/{position}", response_model=DeliveryDetail)
async def get_delivery(position: int, dashboard: Dashboard = Depends(get_dashboard)) -> DeliveryDetail:
    """
    Detail view of the delivery at an absolute position (0 is newest).

    Raises:
        HTTPException: 404 if no delivery exists at that position
    """
    try:
        return dashboard.history.on_position_activated(position)
    except IndexError:
        raise HTTPException(
            status_code=status_codes.HTTP_404_NOT_FOUND,
            detail=f"No webhook delivery at position {position}"
        )
