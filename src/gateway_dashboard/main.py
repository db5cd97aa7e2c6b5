"""
Module: main.py
Description: FastAPI application entry point for the gateway dashboard.

Builds the dashboard services, attaches them to the application and
registers all routes and error handlers. The lifespan hydrates local
storage, subscribes to the gateway push stream and loads the session
list; shutdown closes the connections.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gateway_dashboard.config.settings import Settings, settings as default_settings
from gateway_dashboard.container import Dashboard, build_dashboard
from gateway_dashboard.handlers.sessions import router as sessions_router
from gateway_dashboard.handlers.status import router as status_router
from gateway_dashboard.handlers.webhooks import router as webhooks_router
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(
    dashboard: Optional[Dashboard] = None,
    settings: Optional[Settings] = None
) -> FastAPI:
    """
    Create the dashboard application.

    Args:
        dashboard: Prebuilt dashboard; built from settings when omitted
        settings: Settings used when building the dashboard

    Returns:
        Configured FastAPI application
    """
    settings = settings or (dashboard.settings if dashboard else default_settings)
    dashboard = dashboard or build_dashboard(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting gateway dashboard",
            version=settings.app_version,
            gateway_url=settings.gateway_url
        )
        await dashboard.start()
        yield
        logger.info("Shutting down gateway dashboard")
        await dashboard.stop()

    app = FastAPI(
        title=settings.app_name,
        description="Webhook history and live session view for a messaging gateway",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.dashboard = dashboard

    # local dashboard UI only
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(webhooks_router)
    app.include_router(sessions_router)
    app.include_router(status_router)

    @app.get("/health")
    async def health_check():
        """Liveness check with the push connection state."""
        return {
            "status": "ok",
            "message": "Gateway dashboard is healthy",
            "version": settings.app_version,
            "connected": dashboard.indicator.connected,
        }

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Log HTTP exceptions and return structured error responses."""
        logger.warning(
            "HTTP exception occurred",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.status_code,
                    "message": exc.detail,
                    "type": "http_exception"
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Log unexpected exceptions and return a generic error response."""
        logger.error(
            "Unhandled exception occurred",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            method=request.method
        )

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": 500,
                    "message": "Internal server error",
                    "type": "internal_error"
                }
            }
        )

    return app
