"""Popup control routes."""
from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, request

from ..realtime.popup_manager import current_popup_manager
from ..services.request_decoder import DecodeFailure, decode_popup_request

logger = logging.getLogger(__name__)

bp = Blueprint("popup", __name__)


def ok(message: str | None = None) -> Response:
    return Response(message or "", status=200, mimetype="text/plain")


def invalid_request(message: str | None = None) -> Response:
    return Response(f"invalid request: {message}", status=400, mimetype="text/plain")


@bp.route("/cancel", methods=["POST"], provide_automatic_options=False)
def cancel():
    current_popup_manager().cancel()
    return ok()


@bp.route("/notify", methods=["POST"], provide_automatic_options=False)
def notify():
    popup = decode_popup_request(request)
    if isinstance(popup, DecodeFailure):
        logger.warning("Rejected popup from %s: %s (%s)", request.remote_addr, popup.reason, popup.detail)
        return invalid_request("Failed to parse popup data")

    logger.info("Received popup: %s", popup)
    manager = current_popup_manager()
    if current_app.config["NOTIFY_WAIT_FOR_RENDER"]:
        try:
            shown = manager.show(popup, wait=True, timeout=current_app.config["RENDER_TIMEOUT"])
        except TimeoutError:
            shown = False
        if not shown:
            logger.error("Popup was not rendered: %s", popup)
            return Response(f"render failed: {popup}", status=500, mimetype="text/plain")
    else:
        manager.show(popup)
    return ok(str(popup))


@bp.app_errorhandler(404)
def unknown_uri(error):
    if request.method != "POST":
        return invalid_request("Invalid method")
    return invalid_request(f"Unknown URI: {request.path}")


@bp.app_errorhandler(405)
def invalid_method(error):
    return invalid_request("Invalid method")


__all__ = ["bp", "ok", "invalid_request"]
