"""Popup defaults and wire constants."""
from __future__ import annotations

DEFAULT_DURATION = 30
DEFAULT_BACKGROUND_COLOR = "#CC000000"
DEFAULT_TITLE_SIZE = 16.0
DEFAULT_TITLE_COLOR = "#ffffff"
DEFAULT_MESSAGE_SIZE = 12.0
DEFAULT_MESSAGE_COLOR = "#ffffff"
DEFAULT_MEDIA_WIDTH = 480

APPLICATION_JSON = "application/json"
MULTIPART_FORM_DATA = "multipart/form-data"

# Names accepted by the display in addition to #RRGGBB / #AARRGGBB.
NAMED_COLORS = frozenset(
    {
        "black",
        "darkgray",
        "darkgrey",
        "gray",
        "grey",
        "lightgray",
        "lightgrey",
        "white",
        "red",
        "green",
        "blue",
        "yellow",
        "cyan",
        "magenta",
        "aqua",
        "fuchsia",
        "lime",
        "maroon",
        "navy",
        "olive",
        "purple",
        "silver",
        "teal",
    }
)

MULTIPART_FIELDS = [
    "duration",
    "position",
    "backgroundColor",
    "title",
    "titleSize",
    "titleColor",
    "message",
    "messageSize",
    "messageColor",
    "imageWidth",
]


__all__ = [
    "DEFAULT_DURATION",
    "DEFAULT_BACKGROUND_COLOR",
    "DEFAULT_TITLE_SIZE",
    "DEFAULT_TITLE_COLOR",
    "DEFAULT_MESSAGE_SIZE",
    "DEFAULT_MESSAGE_COLOR",
    "DEFAULT_MEDIA_WIDTH",
    "APPLICATION_JSON",
    "MULTIPART_FORM_DATA",
    "NAMED_COLORS",
    "MULTIPART_FIELDS",
]
