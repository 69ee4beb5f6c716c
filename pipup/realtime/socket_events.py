"""Socket.IO events for display clients."""
from __future__ import annotations

import logging

from flask import current_app, request
from flask_socketio import emit, join_room

from ..extensions import socketio

logger = logging.getLogger(__name__)


@socketio.on("connect")
def on_connect():
    emit("server_hello", {"ok": True, "message": "Socket connected"})


@socketio.on("join_display")
def on_join_display(data=None):
    room = current_app.config["DISPLAY_ROOM"]
    join_room(room)
    logger.info("Display client %s joined room %s", request.sid, room)
    emit("joined", {"ok": True, "room": room})


@socketio.on("disconnect")
def on_disconnect(*args):
    logger.debug("Display client %s disconnected", request.sid)
