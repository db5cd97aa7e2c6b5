"""
Module: dependencies.py
Description: FastAPI dependencies shared by the dashboard routers.
"""

from fastapi import Request

from gateway_dashboard.container import Dashboard


def get_dashboard(request: Request) -> Dashboard:
    """
    Dependency to get the Dashboard owned by the running application.

    Returns:
        The Dashboard attached to ``app.state`` at startup
    """
    return request.app.state.dashboard
