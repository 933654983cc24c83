"""Enumerate eligible audio files in the library root."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from config.settings import AUDIO_EXTENSIONS
from library.errors import DirectoryNotFound

logger = logging.getLogger(__name__)


def is_audio_file(filename: str, extensions: Iterable[str] = AUDIO_EXTENSIONS) -> bool:
    return os.path.splitext(filename)[1].lower() in extensions


def list_audio_files(library_dir: str, extensions: Iterable[str] = AUDIO_EXTENSIONS) -> list[str]:
    """Return eligible filenames directly under ``library_dir`` in enumeration order.

    The listing is not recursive and the order is whatever the filesystem
    reports; positions in this list are the song ids for one scan.

    Raises:
        DirectoryNotFound: If ``library_dir`` is missing or not a directory.
    """
    if not os.path.isdir(library_dir):
        raise DirectoryNotFound(library_dir)
    allowed = frozenset(ext.lower() for ext in extensions)
    entries = os.listdir(library_dir)
    logger.debug("Library entries in %s: %s", library_dir, entries)
    return [
        name
        for name in entries
        if is_audio_file(name, allowed) and os.path.isfile(os.path.join(library_dir, name))
    ]
