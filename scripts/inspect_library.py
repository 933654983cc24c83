#!/usr/bin/env python3
from __future__ import annotations

import os
import sys

from engine.paths import resolve_library_dir
from library.errors import DirectoryNotFound
from library.scanner import list_audio_files
from library.service import process_file
from metadata.primary import open_primary_tags
from metadata.secondary import read_secondary_metadata


def _dump(label: str, value) -> None:
    print(f"  {label}: {value!r}")


def inspect_file(library_dir: str, filename: str, position: int) -> None:
    file_path = os.path.join(library_dir, filename)
    print(f"\n========== {position}. {filename} ==========")
    print("primary (mutagen):")
    try:
        with open_primary_tags(file_path) as primary:
            _dump("title", primary.title)
            _dump("performers", primary.performers)
            _dump("album", primary.album)
            _dump("pictures", primary.pictures)
            _dump("sample_rate", primary.audio_sample_rate)
            _dump("bits_per_sample", primary.bits_per_sample)
            _dump("codecs", primary.codecs)
    except Exception as exc:
        print(f"  error: {exc}")

    print("secondary (ffprobe):")
    try:
        secondary = read_secondary_metadata(file_path)
    except Exception as exc:
        print(f"  error: {exc}")
    else:
        _dump("title", secondary.title)
        _dump("artist", secondary.artist)
        _dump("artists", secondary.artists)
        _dump("album", secondary.album)
        _dump("comment", secondary.comment)
        _dump("pictures", secondary.pictures)
        _dump("format", secondary.format)

    result = process_file(library_dir, filename, position)
    if result.ok:
        song = result.song.to_json()
        if song["cover"].startswith("data:"):
            song["cover"] = song["cover"][:48] + "..."
        print(f"descriptor: {song}")
    else:
        print(f"dropped: {result.error}")


def main() -> int:
    library_dir = resolve_library_dir(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"Music directory path: {library_dir}")
    try:
        filenames = list_audio_files(library_dir)
    except DirectoryNotFound as exc:
        print(str(exc))
        return 1
    print(f"Eligible files: {filenames}")
    for position, filename in enumerate(filenames, start=1):
        inspect_file(library_dir, filename, position)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
