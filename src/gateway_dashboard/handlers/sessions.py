"""
Module: sessions.py
Description: Session panel handlers.

Implements the session endpoints the dashboard UI calls:
- GET /sessions: Session rows and aggregates
- POST /sessions/reload: Force a session list reload
- GET /sessions/qr: QR panel state
- PUT /sessions/{session_id}/qr: Open the QR panel for a session
- DELETE /sessions/qr: Close the QR panel

Dependencies: FastAPI, logger
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as status_codes

from gateway_dashboard.container import Dashboard
from gateway_dashboard.handlers.dependencies import get_dashboard
from gateway_dashboard.models.request import OpenQrPanelRequest
from gateway_dashboard.models.response import QrPanelView, SessionBoardView
from gateway_dashboard.utils.logger import get_logger

router = APIRouter(prefix="/sessions", tags=["sessions"])
logger = get_logger(__name__)


@router.get("", response_model=SessionBoardView)
async def list_sessions(dashboard: Dashboard = Depends(get_dashboard)) -> SessionBoardView:
    return dashboard.board.view()


@router.post("/reload", response_model=SessionBoardView)
async def reload_sessions(dashboard: Dashboard = Depends(get_dashboard)) -> SessionBoardView:
    """
    Refetch the session list from the gateway.

    Raises:
        HTTPException: 502 if the gateway could not be reached
    """
    if not await dashboard.directory.reload():
        raise HTTPException(
            status_code=status_codes.HTTP_502_BAD_GATEWAY,
            detail="Failed to reload sessions from gateway"
        )
    return dashboard.board.view()


@router.get("/qr", response_model=QrPanelView)
async def get_qr_panel(dashboard: Dashboard = Depends(get_dashboard)) -> QrPanelView:
    return dashboard.qr_panel.view()


@router.put("/{session_id}/qr", response_model=QrPanelView)
async def open_qr_panel(
    session_id: str,
    request: Optional[OpenQrPanelRequest] = None,
    dashboard: Dashboard = Depends(get_dashboard)
) -> QrPanelView:
    """Open the QR panel for a session; QR pushes for it will be shown."""
    dashboard.qr_panel.open(session_id, request.qr if request else None)
    logger.info("QR panel opened", session_id=session_id)
    return dashboard.qr_panel.view()


@router.delete("/qr", response_model=QrPanelView)
async def close_qr_panel(dashboard: Dashboard = Depends(get_dashboard)) -> QrPanelView:
    dashboard.qr_panel.close()
    return dashboard.qr_panel.view()
