"""
Module: sessions.py
Description: Session list surface.

Holds the displayed session rows keyed by session id together with the
aggregates derived from them. Rows can be patched in place when a
status update arrives, or replaced wholesale by a directory reload.

Dependencies: typing
"""

from collections import Counter
from typing import Dict, Iterable, Optional, Tuple

from gateway_dashboard.models.response import SessionBoardView, SessionRow


def status_class(status: str) -> str:
    return f"status-{status}"


class SessionBoard:
    """Displayed session rows, in gateway order."""

    def __init__(self):
        self._rows: Dict[str, SessionRow] = {}
        self._loaded_at: Optional[str] = None

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._rows

    def row(self, session_id: str) -> Optional[SessionRow]:
        return self._rows.get(session_id)

    def replace(self, sessions: Iterable[Tuple[str, str]], loaded_at: str) -> None:
        """Rebuild every row from ``(session_id, status)`` pairs."""
        self._rows = {
            session_id: SessionRow(
                session_id=session_id,
                status=status,
                status_class=status_class(status),
            )
            for session_id, status in sessions
        }
        self._loaded_at = loaded_at

    def patch_status(self, session_id: str, status: str) -> bool:
        """
        Replace the status of one displayed row in place.

        Returns:
            False when no row is displayed for the session
        """
        current = self._rows.get(session_id)
        if current is None:
            return False
        self._rows[session_id] = current.model_copy(
            update={"status": status, "status_class": status_class(status)}
        )
        return True

    def view(self) -> SessionBoardView:
        rows = list(self._rows.values())
        return SessionBoardView(
            sessions=rows,
            total=len(rows),
            by_status=dict(Counter(row.status for row in rows)),
            loaded_at=self._loaded_at,
        )
