"""
Module: session_directory.py
Description: Gateway session directory client.

Refetches the gateway's session list over HTTP and redraws the session
board with it. This is the coarse reload path: it replaces every row
and recomputes the aggregates, reconciling any targeted patches made in
between.

Key Components:
- GatewaySessionDirectory.reload(): GET the session list, rebuild the board
- parse_sessions(): Best-effort extraction of (session_id, status) pairs

Dependencies: httpx, datetime, typing, logger
"""

from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

import httpx

from gateway_dashboard.surface.sessions import SessionBoard
from gateway_dashboard.utils.logger import get_logger

logger = get_logger(__name__)


def parse_sessions(body: Any) -> List[Tuple[str, str]]:
    """
    Extract ``(session_id, status)`` pairs from a session list response.

    Accepts a bare list or an object wrapping it under ``sessions`` or
    ``data``. Entries without an id are skipped; a missing status is
    reported as ``unknown``.
    """
    if isinstance(body, dict):
        body = body.get("sessions", body.get("data"))
    if not isinstance(body, list):
        raise ValueError("session list response must be a list")

    sessions = []
    for entry in body:
        if not isinstance(entry, dict):
            continue
        session_id = entry.get("id") or entry.get("sessionId")
        if not session_id:
            continue
        sessions.append((str(session_id), str(entry.get("status") or "unknown")))
    return sessions


class GatewaySessionDirectory:
    """
    HTTP-backed session directory.

    Attributes:
        sessions_url: Absolute URL of the gateway's session list
        board: Session board redrawn on every successful reload
    """

    def __init__(
        self,
        base_url: str,
        board: SessionBoard,
        sessions_path: str = "/api/sessions",
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the session directory.

        Args:
            base_url: Gateway base URL
            board: Session board to redraw
            sessions_path: Path of the session list endpoint
            timeout_seconds: HTTP timeout in seconds
            client: Optional preconfigured HTTP client

        Raises:
            ValueError: If base_url is not an HTTP(S) URL
        """
        if not base_url or not isinstance(base_url, str):
            raise ValueError("base_url must be a non-empty string")
        if not base_url.startswith(('http://', 'https://')):
            raise ValueError("base_url must be a valid HTTP/HTTPS URL")

        self.sessions_url = base_url.rstrip('/') + '/' + sessions_path.lstrip('/')
        self.board = board
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=timeout_seconds)
        )

        logger.info(
            "Session directory initialized",
            sessions_url=self.sessions_url,
            timeout_seconds=timeout_seconds
        )

    async def reload(self) -> bool:
        """
        Refetch the session list and redraw the board.

        Failures are logged and leave the previous snapshot in place.

        Returns:
            True if the board was redrawn
        """
        try:
            response = await self._client.get(self.sessions_url)
            response.raise_for_status()
            sessions = parse_sessions(response.json())

        except httpx.TimeoutException:
            logger.warning("Session list request timed out", sessions_url=self.sessions_url)
            return False

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Session list request failed",
                sessions_url=self.sessions_url,
                status_code=e.response.status_code,
                response=e.response.text[:500]
            )
            return False

        except httpx.HTTPError as e:
            logger.warning(
                "Session list network error",
                sessions_url=self.sessions_url,
                error=str(e)
            )
            return False

        except ValueError as e:
            logger.warning(
                "Unreadable session list response",
                sessions_url=self.sessions_url,
                error=str(e)
            )
            return False

        self.board.replace(sessions, loaded_at=datetime.now(timezone.utc).isoformat())
        logger.info("Session list reloaded", sessions=len(sessions))
        return True

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
