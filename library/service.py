"""Library scan orchestration: per-file pipeline, batch listing and cover lookup."""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from dataclasses import dataclass

import anyio

from config.settings import PLACEHOLDER_COVER, STATIC_PREFIX
from engine.paths import resolve_library_file
from library.errors import ExtractionFailure, FileNotFound, SecondaryParserUnavailable
from library.records import SongDescriptor, build_song_descriptor
from library.scanner import list_audio_files
from media.cover import resolve_cover
from media.ffprobe import ffprobe_available
from metadata.extractor import extract_fields
from metadata.primary import open_primary_tags
from metadata.secondary import read_secondary_metadata

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileResult:
    """Outcome of processing one file: a descriptor or the failure that dropped it."""

    filename: str
    position: int
    song: SongDescriptor | None = None
    error: ExtractionFailure | None = None

    @property
    def ok(self) -> bool:
        return self.song is not None


def process_file(
    library_dir: str,
    filename: str,
    position: int,
    *,
    static_prefix: str = STATIC_PREFIX,
    placeholder: str = PLACEHOLDER_COVER,
) -> FileResult:
    """Extract, resolve and build one descriptor. Never raises; failures are returned."""
    file_path = os.path.join(library_dir, filename)
    logger.debug("Processing file: %s", file_path)
    try:
        size_bytes = os.stat(file_path).st_size
        with open_primary_tags(file_path) as primary:
            secondary = read_secondary_metadata(file_path, load_pictures=not primary.pictures)
            fields = extract_fields(filename, primary, secondary)
            cover = resolve_cover(
                primary.pictures,
                secondary.pictures,
                placeholder=placeholder,
                source=filename,
            )
        song = build_song_descriptor(
            position=position,
            filename=filename,
            fields=fields,
            cover=cover,
            size_bytes=size_bytes,
            static_prefix=static_prefix,
        )
    except Exception as exc:
        logger.warning("Error processing file %s", file_path, exc_info=True)
        if isinstance(exc, ExtractionFailure):
            failure = exc
        else:
            failure = ExtractionFailure(filename, str(exc) or type(exc).__name__)
        return FileResult(filename=filename, position=position, error=failure)
    return FileResult(filename=filename, position=position, song=song)


async def scan_library(
    library_dir: str,
    *,
    static_prefix: str = STATIC_PREFIX,
    placeholder: str = PLACEHOLDER_COVER,
) -> list[FileResult]:
    """Process every eligible file concurrently and return all results in scan order.

    Raises:
        DirectoryNotFound: If ``library_dir`` does not exist.
        SecondaryParserUnavailable: If there are files to read but ffprobe is missing.
    """
    filenames = await anyio.to_thread.run_sync(list_audio_files, library_dir)
    if filenames and not ffprobe_available():
        raise SecondaryParserUnavailable("ffprobe")
    logger.info("Scanning %d audio files in %s", len(filenames), library_dir)
    tasks = [
        anyio.to_thread.run_sync(
            functools.partial(
                process_file,
                library_dir,
                filename,
                position,
                static_prefix=static_prefix,
                placeholder=placeholder,
            )
        )
        for position, filename in enumerate(filenames, start=1)
    ]
    return list(await asyncio.gather(*tasks))


async def list_songs(
    library_dir: str,
    *,
    static_prefix: str = STATIC_PREFIX,
    placeholder: str = PLACEHOLDER_COVER,
) -> list[SongDescriptor]:
    """Return descriptors for every file that processed cleanly, in scan order.

    Ids keep their listing positions, so a dropped file leaves a gap.

    Raises:
        DirectoryNotFound: If ``library_dir`` does not exist.
        SecondaryParserUnavailable: If there are files to read but ffprobe is missing.
    """
    results = await scan_library(library_dir, static_prefix=static_prefix, placeholder=placeholder)
    songs = [result.song for result in results if result.ok]
    logger.info("Successfully processed %d out of %d files", len(songs), len(results))
    return songs


def get_cover_for_file(library_dir: str, filename: str, *, placeholder: str = PLACEHOLDER_COVER) -> dict:
    """Return ``{"cover": ...}`` for one library file using only the primary tag reader.

    Raises:
        FileNotFound: If the file is missing or the name points outside the library.
        ExtractionFailure: If the file cannot be read by the primary tag reader.
    """
    try:
        file_path = resolve_library_file(filename, library_dir)
    except ValueError as exc:
        raise FileNotFound(filename) from exc
    if not os.path.isfile(file_path):
        raise FileNotFound(filename)
    with open_primary_tags(file_path) as primary:
        cover = resolve_cover(primary.pictures, (), placeholder=placeholder, source=filename)
    return {"cover": cover}
