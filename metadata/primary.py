"""Primary tag reader backed by mutagen."""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Any, Iterator

from mutagen import File as MutagenFile
from mutagen import MutagenError
from mutagen.mp4 import MP4Cover

from library.errors import ExtractionFailure
from metadata.types import EmbeddedPicture, PrimaryTags

_LOG = logging.getLogger(__name__)

_MP4_COVER_MIME = {
    MP4Cover.FORMAT_JPEG: "image/jpeg",
    MP4Cover.FORMAT_PNG: "image/png",
}
_FIXED_CODECS = {
    "FLAC": "FLAC",
    "WAVE": "PCM",
    "AIFF": "PCM",
    "OggVorbis": "Vorbis",
    "OggOpus": "Opus",
}


@contextmanager
def open_primary_tags(file_path: str) -> Iterator[PrimaryTags]:
    """Open ``file_path`` and yield its tags; the file handle is closed on every exit path.

    Raises:
        ExtractionFailure: If mutagen cannot identify or parse the file.
    """
    handle = open(file_path, "rb")
    try:
        try:
            audio = MutagenFile(handle)
        except MutagenError as exc:
            raise ExtractionFailure(os.path.basename(file_path), str(exc) or type(exc).__name__) from exc
        if audio is None:
            raise ExtractionFailure(os.path.basename(file_path), "unsupported or unrecognized audio container")
        yield read_primary_tags(audio)
    finally:
        handle.close()
        _LOG.debug("Released primary tag handle for %s", file_path)


def read_primary_tags(audio: Any) -> PrimaryTags:
    """Build :class:`PrimaryTags` from a loaded mutagen ``FileType``."""
    tags = getattr(audio, "tags", None)
    info = getattr(audio, "info", None)
    if tags is not None and hasattr(tags, "getall"):
        title, performers, album, pictures = _read_id3(tags)
    elif type(audio).__name__ == "MP4":
        title, performers, album, pictures = _read_mp4(tags)
    else:
        title, performers, album, pictures = _read_vorbis(audio, tags)

    return PrimaryTags(
        title=title,
        performers=performers,
        album=album,
        pictures=pictures,
        audio_sample_rate=_positive_int(getattr(info, "sample_rate", None)),
        bits_per_sample=_positive_int(getattr(info, "bits_per_sample", None)),
        codecs=_codec_descriptions(audio, info),
    )


def _read_id3(tags):
    title = _first_text(_frame_text(tags, "TIT2"))
    performers = _clean_list(_frame_text(tags, "TPE1"))
    album = _first_text(_frame_text(tags, "TALB"))
    pictures = [
        EmbeddedPicture(data=bytes(frame.data), mime=frame.mime or None)
        for frame in tags.getall("APIC")
        if getattr(frame, "data", None)
    ]
    return title, performers, album, pictures


def _read_mp4(tags):
    if tags is None:
        return None, [], None, []
    title = _first_text(tags.get("\xa9nam"))
    performers = _clean_list(tags.get("\xa9ART"))
    album = _first_text(tags.get("\xa9alb"))
    pictures = [
        EmbeddedPicture(data=bytes(cover), mime=_MP4_COVER_MIME.get(getattr(cover, "imageformat", None)))
        for cover in tags.get("covr") or []
        if cover
    ]
    return title, performers, album, pictures


def _read_vorbis(audio, tags):
    title = performers = album = None
    if tags is not None:
        title = _first_text(tags.get("title"))
        performers = _clean_list(tags.get("artist"))
        album = _first_text(tags.get("album"))
    pictures = [
        EmbeddedPicture(data=bytes(picture.data), mime=picture.mime or None)
        for picture in getattr(audio, "pictures", None) or []
        if picture.data
    ]
    return title, performers or [], album, pictures


def _codec_descriptions(audio, info) -> list[str]:
    kind = type(audio).__name__
    if kind in _FIXED_CODECS:
        return [_FIXED_CODECS[kind]]
    if kind in {"MP3", "EasyMP3"} and info is not None:
        return [f"MPEG {info.version:g} Layer {info.layer}"]
    description = getattr(info, "codec_description", None) or getattr(info, "codec", None)
    if description:
        return [str(description)]
    return []


def _frame_text(tags, frame_id):
    frame = tags.get(frame_id)
    if frame is None:
        return []
    return list(getattr(frame, "text", None) or [])


def _clean_list(values) -> list[str]:
    if not values:
        return []
    out = []
    for value in values:
        text = str(value).strip()
        if text:
            out.append(text)
    return out


def _first_text(values) -> str | None:
    cleaned = _clean_list(values)
    return cleaned[0] if cleaned else None


def _positive_int(value) -> int | None:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return None
    return parsed if parsed > 0 else None
