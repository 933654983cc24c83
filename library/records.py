"""Song descriptors returned to the player UI."""

from __future__ import annotations

from dataclasses import dataclass

from config.settings import STATIC_PREFIX
from media.quality import classify_quality
from metadata.types import ExtractedFields

BYTES_PER_MB = 1024 * 1024


@dataclass(frozen=True)
class SongDescriptor:
    id: int
    name: str
    artists: str
    album: str
    alias: str
    cover: str
    duration_ms: int
    size_mb: float
    path: str
    quality: str
    bitrate_kbps: int
    sample_rate: int
    bits_per_sample: int
    codec: str
    type: str = "song"

    def to_json(self) -> dict:
        """Return the wire shape consumed by the player UI."""
        return {
            "id": self.id,
            "name": self.name,
            "artists": self.artists,
            "album": self.album,
            "alias": self.alias,
            "cover": self.cover,
            "durationMs": self.duration_ms,
            "sizeMB": self.size_mb,
            "path": self.path,
            "quality": self.quality,
            "type": self.type,
            "bitrateKbps": self.bitrate_kbps,
            "sampleRate": self.sample_rate,
            "bitsPerSample": self.bits_per_sample,
            "codec": self.codec,
        }


def size_in_mb(size_bytes: int) -> float:
    return round(max(size_bytes, 0) / BYTES_PER_MB, 2)


def build_song_descriptor(
    *,
    position: int,
    filename: str,
    fields: ExtractedFields,
    cover: str,
    size_bytes: int,
    static_prefix: str = STATIC_PREFIX,
) -> SongDescriptor:
    """Assemble a descriptor; ``position`` is the 1-based index in the scanner listing."""
    return SongDescriptor(
        id=position,
        name=fields.name,
        artists=fields.artists,
        album=fields.album,
        alias=fields.alias,
        cover=cover,
        duration_ms=max(fields.duration_ms, 0),
        size_mb=size_in_mb(size_bytes),
        path=f"{static_prefix}{filename}",
        quality=classify_quality(fields.sample_rate, fields.bits_per_sample),
        bitrate_kbps=max(fields.bitrate_kbps, 0),
        sample_rate=max(fields.sample_rate, 0),
        bits_per_sample=max(fields.bits_per_sample, 0),
        codec=fields.codec,
    )
