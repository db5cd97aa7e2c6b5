"""
Module: test_surfaces.py
Description: Unit tests for the session board, QR panel and connection indicator.
"""

import pytest

from gateway_dashboard.surface.connection import ConnectionIndicator, ConnectionState
from gateway_dashboard.surface.qr import QrPanel
from gateway_dashboard.surface.sessions import SessionBoard, status_class


class TestSessionBoard:
    """Test cases for SessionBoard."""

    def test_replace_and_view(self):
        """Test a reload rebuilds rows and aggregates."""
        board = SessionBoard()
        board.replace(
            [("sales-01", "connected"), ("support", "qr"), ("ops", "connected")],
            loaded_at="2026-10-19T07:30:00+00:00"
        )

        view = board.view()

        assert view.total == 3
        assert view.by_status == {"connected": 2, "qr": 1}
        assert [row.session_id for row in view.sessions] == ["sales-01", "support", "ops"]
        assert view.sessions[1].status_class == "status-qr"
        assert view.loaded_at == "2026-10-19T07:30:00+00:00"

    def test_patch_status(self):
        """Test a displayed row is patched in place."""
        board = SessionBoard()
        board.replace([("sales-01", "qr")], loaded_at="t")

        assert board.patch_status("sales-01", "connected") is True

        row = board.row("sales-01")
        assert row.status == "connected"
        assert row.status_class == status_class("connected")

    def test_patch_status_missing_row(self):
        """Test patching an undisplayed session is a no-op."""
        board = SessionBoard()

        assert board.patch_status("ghost", "connected") is False
        assert "ghost" not in board
        assert len(board) == 0


class TestQrPanel:
    """Test cases for QrPanel."""

    def test_closed_by_default(self):
        view = QrPanel().view()

        assert view.visible is False
        assert view.waiting is False

    def test_open_waits_for_qr(self):
        """Test an opened panel shows a spinner until a QR arrives."""
        panel = QrPanel()
        panel.open("sales-01")

        assert panel.is_showing("sales-01")
        assert not panel.is_showing("support")
        assert panel.view().waiting is True

        panel.show_qr("data:image/png;base64,AAA")
        view = panel.view()
        assert view.waiting is False
        assert view.qr == "data:image/png;base64,AAA"

    def test_close(self):
        panel = QrPanel()
        panel.open("sales-01", qr="abc")

        panel.close()

        assert panel.active_session is None
        assert not panel.is_showing(None)
        assert panel.view().visible is False

    def test_open_requires_session(self):
        with pytest.raises(ValueError):
            QrPanel().open("")


class TestConnectionIndicator:
    """Test cases for ConnectionIndicator."""

    def test_states(self):
        """Test labels follow the connection state."""
        indicator = ConnectionIndicator()
        assert indicator.view().label == "WebSocket Disconnected"

        assert indicator.set(ConnectionState.CONNECTED) is True
        assert indicator.connected is True
        assert indicator.view().label == "WebSocket Connected"

    def test_set_is_idempotent(self):
        indicator = ConnectionIndicator()
        indicator.set(ConnectionState.CONNECTED)

        assert indicator.set(ConnectionState.CONNECTED) is False
        assert indicator.view().connected is True
