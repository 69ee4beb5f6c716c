"""Display surfaces popups are rendered onto."""
from __future__ import annotations

import logging
import uuid
from typing import NamedTuple, Optional, Protocol

from flask_socketio import SocketIO

from ..services.popup_schemas import Position, PopupProps

logger = logging.getLogger(__name__)


class Placement(NamedTuple):
    vertical: str
    horizontal: str


PLACEMENTS = {
    Position.TopRight: Placement("top", "end"),
    Position.TopLeft: Placement("top", "start"),
    Position.BottomRight: Placement("bottom", "end"),
    Position.BottomLeft: Placement("bottom", "start"),
    Position.Center: Placement("center", "center"),
}


def placement_for(position: Position) -> Placement:
    return PLACEMENTS[position]


class DisplaySurface(Protocol):
    def create(self) -> None: ...

    def render(self, props: PopupProps, placement: Placement) -> None: ...

    def destroy(self) -> None: ...


class SocketIOSurface:
    """Shows a popup on every display client in the display room."""

    def __init__(self, socketio: SocketIO, room: str = "display") -> None:
        self._socketio = socketio
        self._room = room
        self.popup_id: Optional[str] = None
        self._rendered = False

    def create(self) -> None:
        self.popup_id = uuid.uuid4().hex

    def render(self, props: PopupProps, placement: Placement) -> None:
        if self.popup_id is None:
            raise RuntimeError("surface must be created before rendering")
        payload = {
            "id": self.popup_id,
            "placement": placement._asdict(),
            **props.to_payload(),
        }
        self._socketio.emit("popup", payload, to=self._room)
        self._rendered = True
        logger.debug("Popup %s sent to room %s", self.popup_id, self._room)

    def destroy(self) -> None:
        if self._rendered:
            self._socketio.emit("popup_dismissed", {"id": self.popup_id}, to=self._room)
            logger.debug("Popup %s dismissed", self.popup_id)
        self._rendered = False


__all__ = ["Placement", "PLACEMENTS", "placement_for", "DisplaySurface", "SocketIOSurface"]
