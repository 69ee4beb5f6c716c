"""Shared Flask extensions."""
from __future__ import annotations

from flask_socketio import SocketIO


# Threading mode keeps emits synchronous from the popup scheduler thread.
socketio = SocketIO(async_mode="threading", cors_allowed_origins="*")


__all__ = ["socketio"]
