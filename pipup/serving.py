"""Development-grade threaded server for the popup endpoint."""
from __future__ import annotations

import logging

from flask import Flask
from werkzeug.serving import WSGIRequestHandler

from .extensions import socketio

logger = logging.getLogger(__name__)


class TimeoutRequestHandler(WSGIRequestHandler):
    """Request handler whose socket reads give up after ``timeout`` seconds."""

    timeout = 5.0


def request_handler_for(app: Flask) -> type[TimeoutRequestHandler]:
    class _Handler(TimeoutRequestHandler):
        timeout = app.config["SOCKET_READ_TIMEOUT"]

    return _Handler


def run_server(app: Flask) -> int:
    """Serve ``app`` until interrupted; a port that cannot be bound is fatal."""
    host, port = app.config["HOST"], app.config["PORT"]
    logger.info("Popup server starting on %s:%s", host, port)
    try:
        socketio.run(
            app,
            host=host,
            port=port,
            use_reloader=False,
            allow_unsafe_werkzeug=True,
            request_handler=request_handler_for(app),
        )
    except OSError as exc:
        logger.critical("Failed to bind %s:%s: %s", host, port, exc)
        return 1
    except SystemExit as exc:
        # Werkzeug reports a busy or forbidden port itself and exits.
        if not exc.code:
            return 0
        logger.critical("Failed to bind %s:%s (server exited with %s)", host, port, exc.code)
        return 1
    finally:
        app.extensions["popup_manager"].shutdown()
    return 0


__all__ = ["TimeoutRequestHandler", "request_handler_for", "run_server"]
