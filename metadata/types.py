"""Structured metadata types produced by the two file readers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EmbeddedPicture:
    """Raw artwork bytes and the mime type (or format string) reported for them."""

    data: bytes
    mime: str | None = None

    def __repr__(self) -> str:
        return f"EmbeddedPicture(mime={self.mime!r}, size={len(self.data or b'')})"


@dataclass(frozen=True)
class PrimaryTags:
    """Container tag fields and audio properties read by the primary tag reader."""

    title: str | None = None
    performers: list[str] = field(default_factory=list)
    album: str | None = None
    pictures: list[EmbeddedPicture] = field(default_factory=list)
    audio_sample_rate: int | None = None
    bits_per_sample: int | None = None
    codecs: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FormatInfo:
    """Decode-level properties reported by the secondary format parser."""

    duration_seconds: float | None = None
    bitrate: int | None = None
    codec: str | None = None
    sample_rate: int | None = None
    bits_per_sample: int | None = None


@dataclass(frozen=True)
class SecondaryMetadata:
    """Format properties plus the tag-like fallback fields of the secondary parser."""

    title: str | None = None
    artist: str | None = None
    artists: list[str] = field(default_factory=list)
    album: str | None = None
    comment: list[str] = field(default_factory=list)
    pictures: list[EmbeddedPicture] = field(default_factory=list)
    format: FormatInfo = field(default_factory=FormatInfo)


@dataclass(frozen=True)
class ExtractedFields:
    """Song fields after the primary/secondary fallback merge."""

    name: str
    artists: str
    album: str
    alias: str
    sample_rate: int
    bits_per_sample: int
    bitrate_kbps: int
    codec: str
    duration_ms: int


__all__ = [
    "EmbeddedPicture",
    "ExtractedFields",
    "FormatInfo",
    "PrimaryTags",
    "SecondaryMetadata",
]
