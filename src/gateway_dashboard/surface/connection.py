"""
Module: connection.py
Description: Push connection indicator.

Dependencies: enum
"""

from enum import Enum

from gateway_dashboard.models.response import ConnectionView


class ConnectionState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


LABELS = {
    ConnectionState.CONNECTED: "WebSocket Connected",
    ConnectionState.DISCONNECTED: "WebSocket Disconnected",
}


class ConnectionIndicator:
    """Single visible connection status; setting the same state twice is harmless."""

    def __init__(self):
        self.state = ConnectionState.DISCONNECTED

    @property
    def connected(self) -> bool:
        return self.state is ConnectionState.CONNECTED

    def set(self, state: ConnectionState) -> bool:
        """Apply a state. Returns True when the state actually changed."""
        changed = state is not self.state
        self.state = state
        return changed

    def view(self) -> ConnectionView:
        return ConnectionView(connected=self.connected, label=LABELS[self.state])
