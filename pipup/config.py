"""Environment-driven configuration."""
from __future__ import annotations

import os


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    ENV = os.getenv("ENV", "dev")
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    HOST = os.getenv("PIPUP_HOST", "0.0.0.0")
    PORT = int(os.getenv("PIPUP_PORT", "7979"))
    SOCKET_READ_TIMEOUT = float(os.getenv("SOCKET_READ_TIMEOUT", "5"))
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))

    SOCKETIO_CORS_ALLOWED_ORIGINS = os.getenv("SOCKETIO_CORS_ALLOWED_ORIGINS", "*")
    DISPLAY_ROOM = os.getenv("DISPLAY_ROOM", "display")

    NOTIFY_WAIT_FOR_RENDER = _env_bool("NOTIFY_WAIT_FOR_RENDER")
    RENDER_TIMEOUT = float(os.getenv("RENDER_TIMEOUT", "5"))


__all__ = ["Config"]
