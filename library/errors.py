"""Error taxonomy for local library scans."""

from __future__ import annotations


class LocalLibraryError(Exception):
    """Base class for local library failures."""


class DirectoryNotFound(LocalLibraryError):
    """The configured library root does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Music directory does not exist: {path}")
        self.path = path


class FileNotFound(LocalLibraryError):
    """A requested library file does not exist."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"File not found: {filename}")
        self.filename = filename


class ExtractionFailure(LocalLibraryError):
    """Reading tags or audio properties of one file failed."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Failed to extract metadata from {filename}: {reason}")
        self.filename = filename
        self.reason = reason


class CoverEncodingFailure(LocalLibraryError):
    """Embedded artwork could not be encoded as a data URI."""


class SecondaryParserUnavailable(LocalLibraryError):
    """The external secondary format parser cannot be run on this host."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"{tool} is not installed or not available in PATH")
        self.tool = tool
