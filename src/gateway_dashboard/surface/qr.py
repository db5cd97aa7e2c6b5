"""
Module: qr.py
Description: QR pairing panel surface.

The panel is opened by the operator for one session while that session
pairs with the messaging network. The open session id is the "active
session" marker push events are matched against.

Dependencies: typing
"""

from typing import Optional

from gateway_dashboard.models.response import QrPanelView


class QrPanel:
    """Pairing panel showing the latest QR code of one session."""

    def __init__(self):
        self._session_id: Optional[str] = None
        self._qr: Optional[str] = None

    @property
    def active_session(self) -> Optional[str]:
        return self._session_id

    def is_showing(self, session_id: Optional[str]) -> bool:
        return self._session_id is not None and self._session_id == session_id

    def open(self, session_id: str, qr: Optional[str] = None) -> None:
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        self._session_id = session_id
        self._qr = qr

    def show_qr(self, qr: str) -> None:
        self._qr = qr

    def close(self) -> None:
        self._session_id = None
        self._qr = None

    def view(self) -> QrPanelView:
        return QrPanelView(
            visible=self._session_id is not None,
            session_id=self._session_id,
            qr=self._qr,
            waiting=self._session_id is not None and self._qr is None,
        )
