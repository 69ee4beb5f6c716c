"""Turn inbound /notify requests into popup descriptors."""
from __future__ import annotations

import io
import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

from flask import Request
from PIL import Image, UnidentifiedImageError
from werkzeug.exceptions import HTTPException

from ..constants import APPLICATION_JSON, MULTIPART_FIELDS, MULTIPART_FORM_DATA
from .popup_schemas import BitmapMedia, Position, PopupProps, parse_int

logger = logging.getLogger(__name__)

# Errors a malformed, truncated or oversized body can surface while reading or validating.
_DECODE_ERRORS = (
    ValueError,
    OverflowError,
    RecursionError,
    OSError,
    HTTPException,
    UnidentifiedImageError,
    Image.DecompressionBombError,
)


@dataclass(frozen=True)
class DecodeFailure:
    reason: str
    detail: str = ""


DecodeResult = Union[PopupProps, DecodeFailure]


def decode_popup_request(request: Request) -> DecodeResult:
    """Pick a decoder from the content-type header; JSON when none is given."""
    content_type = request.headers.get("content-type") or APPLICATION_JSON
    if content_type.startswith(APPLICATION_JSON):
        return parse_json_popup(request)
    if content_type.startswith(MULTIPART_FORM_DATA):
        return parse_multipart_popup(request)

    logger.error("Invalid content-type: %s", content_type)
    return DecodeFailure("unsupported content-type", content_type)


def parse_json_popup(request: Request) -> DecodeResult:
    try:
        length = request.content_length or 0
        raw = request.stream.read(length) if length > 0 else b""
        if len(raw) != length:
            raise ValueError(f"body truncated: expected {length} bytes, got {len(raw)}")

        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        if payload.pop("media", None) is not None:
            logger.debug("Ignoring media in JSON popup; images are sent as multipart")

        return PopupProps.model_validate(payload)
    except _DECODE_ERRORS as exc:
        logger.error(
            "Failed to parse JSON (content-type=%s): %s",
            request.headers.get("content-type"),
            exc,
        )
        return DecodeFailure("malformed JSON popup", str(exc))


def parse_multipart_popup(request: Request) -> DecodeResult:
    try:
        params = {name: request.form.get(name) for name in MULTIPART_FIELDS}

        index = parse_int(params["position"])
        position = Position.from_ordinal(index if index is not None else 0)

        media = _decode_image(request, params["imageWidth"])

        return PopupProps(
            duration=params["duration"],
            position=position,
            background_color=params["backgroundColor"],
            title=params["title"],
            title_size=params["titleSize"],
            title_color=params["titleColor"],
            message=params["message"],
            message_size=params["messageSize"],
            message_color=params["messageColor"],
            media=media,
        )
    except _DECODE_ERRORS as exc:
        logger.error(
            "Failed to parse multipart data (content-type=%s): %s",
            request.headers.get("content-type"),
            exc,
        )
        return DecodeFailure("malformed multipart popup", str(exc))


def _decode_image(request: Request, width: Optional[str]) -> Optional[BitmapMedia]:
    upload = request.files.get("image")
    if upload is None:
        return None

    data = upload.read()
    if not data and not upload.filename:
        # Browsers send an empty part when no file was picked.
        return None

    image = Image.open(io.BytesIO(data))
    image.load()
    return BitmapMedia(image=image, width=width)


__all__ = [
    "DecodeFailure",
    "DecodeResult",
    "decode_popup_request",
    "parse_json_popup",
    "parse_multipart_popup",
]
