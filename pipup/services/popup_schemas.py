"""Pydantic schemas for popup requests."""
from __future__ import annotations

import base64
import io
import logging
import math
import re
from enum import IntEnum
from typing import Any, Optional

from PIL import Image
from pydantic import BaseModel, ConfigDict, ValidationInfo, field_serializer, field_validator
from pydantic.alias_generators import to_camel

from ..constants import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_DURATION,
    DEFAULT_MEDIA_WIDTH,
    DEFAULT_MESSAGE_COLOR,
    DEFAULT_MESSAGE_SIZE,
    DEFAULT_TITLE_COLOR,
    DEFAULT_TITLE_SIZE,
    NAMED_COLORS,
)

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

_POSITIVE_DEFAULTS = {
    "duration": float(DEFAULT_DURATION),
    "title_size": DEFAULT_TITLE_SIZE,
    "message_size": DEFAULT_MESSAGE_SIZE,
}

_COLOR_DEFAULTS = {
    "background_color": DEFAULT_BACKGROUND_COLOR,
    "title_color": DEFAULT_TITLE_COLOR,
    "message_color": DEFAULT_MESSAGE_COLOR,
}


def parse_float(value: Any) -> Optional[float]:
    """Finite float from a number or numeric string, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_int(value: Any) -> Optional[int]:
    """Integer from an int or integer string, else None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _format_number(value: float) -> str:
    return f"{value:g}"


class Position(IntEnum):
    """Screen corner (or center) a popup is anchored to; values are wire ordinals."""

    TopRight = 0
    TopLeft = 1
    BottomRight = 2
    BottomLeft = 3
    Center = 4

    @classmethod
    def from_ordinal(cls, index: int) -> "Position":
        if not 0 <= index < len(cls):
            raise ValueError(f"position index out of range: {index}")
        return cls(index)


class BitmapMedia(BaseModel):
    """Decoded image shown below the popup text."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    image: Image.Image
    width: int = DEFAULT_MEDIA_WIDTH

    @field_validator("width", mode="before")
    @classmethod
    def _positive_width(cls, value):
        number = parse_int(value)
        if number is None or number <= 0:
            return DEFAULT_MEDIA_WIDTH
        return number

    def to_data_uri(self) -> str:
        buffer = io.BytesIO()
        self.image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"

    def __str__(self) -> str:
        w, h = self.image.size
        return f"Bitmap(size={w}x{h}, width={self.width})"


class PopupProps(BaseModel):
    """Normalized popup request.

    Every optional field resolves to a documented default, so an instance is
    always complete. Field names are snake_case; the wire form uses the
    camelCase aliases (``backgroundColor``, ``titleSize``, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        arbitrary_types_allowed=True,
    )

    duration: float = float(DEFAULT_DURATION)
    position: Position = Position.TopRight
    background_color: str = DEFAULT_BACKGROUND_COLOR
    title: Optional[str] = None
    title_size: float = DEFAULT_TITLE_SIZE
    title_color: str = DEFAULT_TITLE_COLOR
    message: Optional[str] = None
    message_size: float = DEFAULT_MESSAGE_SIZE
    message_color: str = DEFAULT_MESSAGE_COLOR
    media: Optional[BitmapMedia] = None

    @field_validator("duration", "title_size", "message_size", mode="before")
    @classmethod
    def _positive_or_default(cls, value, info: ValidationInfo):
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float, str))):
            raise ValueError(f"{info.field_name} must be a number, got {type(value).__name__}")
        number = parse_float(value)
        if number is None or number <= 0:
            return _POSITIVE_DEFAULTS[info.field_name]
        return number

    @field_validator("position", mode="before")
    @classmethod
    def _resolve_position(cls, value):
        if isinstance(value, Position):
            return value
        if isinstance(value, str):
            try:
                return Position[value.strip()]
            except KeyError:
                raise ValueError(f"unknown position: {value!r}") from None
        if isinstance(value, int) and not isinstance(value, bool):
            return Position.from_ordinal(value)
        raise ValueError(f"position must be a name or ordinal, got {type(value).__name__}")

    @field_validator("background_color", "title_color", "message_color", mode="before")
    @classmethod
    def _color_or_default(cls, value, info: ValidationInfo):
        default = _COLOR_DEFAULTS[info.field_name]
        if value is None:
            return default
        if not isinstance(value, str):
            raise ValueError("color must be a string")
        candidate = value.strip()
        if _HEX_COLOR.match(candidate) or candidate.lower() in NAMED_COLORS:
            return candidate
        logger.warning("Invalid %s %r, using %s", info.field_name, value, default)
        return default

    @field_serializer("position")
    def _position_name(self, value: Position) -> str:
        return value.name

    def to_payload(self) -> dict:
        """Wire-form dict for display clients (camelCase keys, position by name)."""
        payload = self.model_dump(by_alias=True, exclude={"media"})
        if self.media is not None:
            payload["media"] = {"image": self.media.to_data_uri(), "width": self.media.width}
        else:
            payload["media"] = None
        return payload

    def __str__(self) -> str:
        fields = [
            ("duration", _format_number(self.duration)),
            ("position", self.position.name),
            ("backgroundColor", self.background_color),
            ("title", self.title),
            ("titleSize", _format_number(self.title_size)),
            ("titleColor", self.title_color),
            ("message", self.message),
            ("messageSize", _format_number(self.message_size)),
            ("messageColor", self.message_color),
            ("media", self.media),
        ]
        return "PopupProps(" + ", ".join(f"{name}={value}" for name, value in fields) + ")"


__all__ = ["Position", "BitmapMedia", "PopupProps", "parse_float", "parse_int"]
