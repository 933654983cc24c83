"""Secondary format parser backed by ffprobe.

ffprobe decodes stream headers, so it is the authoritative source for
duration, bitrate and codec. Its container tags are used as fallbacks for
the fields the primary tag reader leaves empty.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Any

from media.ffprobe import extract_attached_picture, probe_media
from metadata.types import EmbeddedPicture, FormatInfo, SecondaryMetadata

_LOG = logging.getLogger(__name__)
_MULTI_VALUE_RE = re.compile(r"\s*;\s*")

_PICTURE_FORMATS = {
    "mjpeg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "bmp": "image/bmp",
    "webp": "image/webp",
    "tiff": "image/tiff",
}


def read_secondary_metadata(file_path: str, *, load_pictures: bool = True) -> SecondaryMetadata:
    """Probe ``file_path`` and map the payload onto :class:`SecondaryMetadata`.

    Probe errors propagate to the caller. A failure to copy out an attached
    picture only drops the picture.
    """
    payload = probe_media(file_path)
    metadata = parse_probe_payload(payload)
    if not load_pictures:
        return metadata

    pictures = []
    stream = _first_attached_picture(payload)
    if stream is not None:
        try:
            data = extract_attached_picture(file_path, stream["index"])
        except (RuntimeError, ValueError):
            _LOG.warning("Failed to extract attached picture from %s", file_path, exc_info=True)
        else:
            pictures.append(EmbeddedPicture(data=data, mime=_picture_format(stream)))
    return replace(metadata, pictures=pictures)


def parse_probe_payload(payload: dict) -> SecondaryMetadata:
    """Map an ffprobe JSON payload onto :class:`SecondaryMetadata` without pictures."""
    fmt = payload.get("format") or {}
    streams = [s for s in payload.get("streams") or [] if isinstance(s, dict)]
    audio = next((s for s in streams if s.get("codec_type") == "audio"), {})
    tags = _merged_tags(fmt, audio)

    artists_raw = tags.get("artists")
    artists = [part for part in _MULTI_VALUE_RE.split(artists_raw) if part] if artists_raw else []
    comment = tags.get("comment")

    codec_name = _clean(audio.get("codec_name"))
    return SecondaryMetadata(
        title=_clean(tags.get("title")),
        artist=_clean(tags.get("artist")),
        artists=artists,
        album=_clean(tags.get("album")),
        comment=[comment] if _clean(comment) else [],
        format=FormatInfo(
            duration_seconds=_to_float(fmt.get("duration")) or _to_float(audio.get("duration")),
            bitrate=_to_int(audio.get("bit_rate")) or _to_int(fmt.get("bit_rate")),
            codec=codec_name.upper() if codec_name else None,
            sample_rate=_to_int(audio.get("sample_rate")),
            bits_per_sample=_to_int(audio.get("bits_per_raw_sample")) or _to_int(audio.get("bits_per_sample")),
        ),
    )


def _merged_tags(fmt: dict, audio: dict) -> dict[str, str]:
    # Container tags win over stream tags; keys differ in case between formats.
    merged: dict[str, str] = {}
    for source in (audio.get("tags") or {}, fmt.get("tags") or {}):
        for key, value in source.items():
            if value is None:
                continue
            merged[str(key).lower()] = str(value)
    return merged


def _first_attached_picture(payload: dict) -> dict | None:
    for stream in payload.get("streams") or []:
        if not isinstance(stream, dict):
            continue
        disposition = stream.get("disposition") or {}
        if stream.get("codec_type") == "video" and disposition.get("attached_pic") == 1:
            if isinstance(stream.get("index"), int):
                return stream
    return None


def _picture_format(stream: dict) -> str:
    codec = str(stream.get("codec_name") or "").lower()
    return _PICTURE_FORMATS.get(codec, f"image/{codec}" if codec else "image/jpeg")


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _to_int(value: Any) -> int | None:
    if value in (None, "", "N/A"):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _to_float(value: Any) -> float | None:
    if value in (None, "", "N/A"):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
