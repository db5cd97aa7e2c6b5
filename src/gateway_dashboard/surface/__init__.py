"""
Package: surface
Description: Presentational state of the dashboard panels.

- sessions: Session rows keyed by id, patched in place or rebuilt on reload
- qr: QR pairing panel carrying the active session marker
- connection: Push connection indicator
"""

from .connection import ConnectionIndicator, ConnectionState
from .qr import QrPanel
from .sessions import SessionBoard

__all__ = ["ConnectionIndicator", "ConnectionState", "QrPanel", "SessionBoard"]
