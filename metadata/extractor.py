"""Field resolution across the primary tag reader and the secondary format parser."""

from __future__ import annotations

import math
import os

from config.settings import DEFAULT_ALBUM, DEFAULT_ARTIST, DEFAULT_CODEC
from metadata.merge import first, pick
from metadata.types import ExtractedFields, PrimaryTags, SecondaryMetadata


def extract_fields(filename: str, primary: PrimaryTags, secondary: SecondaryMetadata) -> ExtractedFields:
    """Merge both sources with first-non-empty-wins precedence per field."""
    fmt = secondary.format
    stem = os.path.splitext(filename)[0]

    name, _ = pick(
        "title",
        [
            ("primary", lambda: primary.title),
            ("secondary", lambda: secondary.title),
            ("filename", lambda: stem),
        ],
        default=stem,
    )
    artists, _ = pick(
        "artists",
        [
            ("primary", lambda: first(primary.performers)),
            ("secondary.artists", lambda: first(secondary.artists)),
            ("secondary.artist", lambda: secondary.artist),
        ],
        default=DEFAULT_ARTIST,
    )
    album, _ = pick(
        "album",
        [("primary", lambda: primary.album), ("secondary", lambda: secondary.album)],
        default=DEFAULT_ALBUM,
    )
    alias, _ = pick("alias", [("secondary", lambda: first(secondary.comment))], default="")
    sample_rate, _ = pick(
        "sample_rate",
        [("primary", lambda: primary.audio_sample_rate), ("secondary", lambda: fmt.sample_rate)],
        default=0,
    )
    bits_per_sample, _ = pick(
        "bits_per_sample",
        [("primary", lambda: primary.bits_per_sample), ("secondary", lambda: fmt.bits_per_sample)],
        default=0,
    )
    bitrate, _ = pick("bitrate", [("secondary", lambda: fmt.bitrate)], default=0)
    codec, _ = pick(
        "codec",
        [("secondary", lambda: fmt.codec), ("primary", lambda: first(primary.codecs))],
        default=DEFAULT_CODEC,
    )
    duration, _ = pick("duration", [("secondary", lambda: fmt.duration_seconds)], default=0)

    return ExtractedFields(
        name=str(name),
        artists=str(artists),
        album=str(album),
        alias=str(alias),
        sample_rate=int(sample_rate),
        bits_per_sample=int(bits_per_sample),
        bitrate_kbps=int(bitrate) // 1000,
        codec=str(codec),
        duration_ms=math.floor(float(duration) * 1000),
    )
