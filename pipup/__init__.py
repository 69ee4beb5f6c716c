"""Application factory."""
from __future__ import annotations

from functools import partial

from flask import Flask
from dotenv import load_dotenv

load_dotenv()

from .api.popup_routes import bp as popup_bp
from .config import Config
from .extensions import socketio
from .logging_conf import configure_logging
from .realtime import socket_events  # noqa: F401
from .realtime.display_surface import SocketIOSurface
from .realtime.popup_manager import PopupManager, SurfaceFactory


def create_app(overrides: dict | None = None, surface_factory: SurfaceFactory | None = None):
    # No static folder: every path other than the control routes is an error.
    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    configure_logging(app)
    socketio.init_app(app, cors_allowed_origins=app.config["SOCKETIO_CORS_ALLOWED_ORIGINS"])

    app.register_blueprint(popup_bp)

    if surface_factory is None:
        surface_factory = partial(SocketIOSurface, socketio, room=app.config["DISPLAY_ROOM"])

    manager = PopupManager(surface_factory)
    manager.start()
    app.extensions["popup_manager"] = manager

    return app


__all__ = ["create_app"]
