"""
Module: status.py
Description: Connection status and activity feed handlers.

- GET /status: Push connection indicator and webhook counters
- GET /activity: Activity feed, newest first
"""

from typing import List

from fastapi import APIRouter, Depends, Query

from gateway_dashboard.container import Dashboard
from gateway_dashboard.handlers.dependencies import get_dashboard
from gateway_dashboard.models.response import ActivityEntry, StatusResponse

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status(dashboard: Dashboard = Depends(get_dashboard)) -> StatusResponse:
    return StatusResponse(
        connection=dashboard.indicator.view(),
        webhooks=dashboard.statistics.view(),
    )


@router.get("/activity", response_model=List[ActivityEntry])
async def get_activity(
    limit: int = Query(default=50, ge=1, le=1000),
    dashboard: Dashboard = Depends(get_dashboard)
) -> List[ActivityEntry]:
    return dashboard.activity.entries(limit)
