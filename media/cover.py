"""Cover art resolution: embedded artwork as data URIs with a placeholder fallback."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Sequence

from config.settings import DEFAULT_PICTURE_MIME, PLACEHOLDER_COVER
from library.errors import CoverEncodingFailure
from metadata.types import EmbeddedPicture

logger = logging.getLogger(__name__)


def encode_data_uri(picture: EmbeddedPicture, *, default_mime: str | None = None) -> str:
    """Return ``data:<mime>;base64,<payload>`` for an embedded picture.

    Raises:
        CoverEncodingFailure: If the picture carries no bytes, no usable mime
            type, or the payload cannot be base64-encoded.
    """
    mime = (picture.mime or "").strip() or default_mime
    if not mime:
        raise CoverEncodingFailure("embedded picture has no mime type")
    data = picture.data
    if not data:
        raise CoverEncodingFailure("embedded picture is empty")
    try:
        payload = base64.b64encode(bytes(data)).decode("ascii")
    except (TypeError, ValueError, binascii.Error) as exc:
        raise CoverEncodingFailure(f"failed to encode embedded picture: {exc}") from exc
    return f"data:{mime};base64,{payload}"


def resolve_cover(
    primary_pictures: Sequence[EmbeddedPicture],
    secondary_pictures: Sequence[EmbeddedPicture] = (),
    *,
    placeholder: str = PLACEHOLDER_COVER,
    source: str | None = None,
) -> str:
    """Resolve a cover for one file, never returning an empty string.

    The primary reader's first picture wins (mime defaults to
    ``image/jpeg``), then the secondary parser's first picture with its own
    format string, then ``placeholder``. An encoding error on either picture
    moves on to the next step.
    """
    steps = (
        ("primary", primary_pictures, DEFAULT_PICTURE_MIME),
        ("secondary", secondary_pictures, None),
    )
    for step_name, pictures, default_mime in steps:
        if not pictures:
            continue
        try:
            return encode_data_uri(pictures[0], default_mime=default_mime)
        except Exception:
            logger.warning(
                "Cover encoding failed step=%s file=%s; falling back",
                step_name,
                source or "?",
                exc_info=True,
            )
    return placeholder
