import os
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent.parent

LIBRARY_DIR = Path(os.environ.get("LOCALMUSIC_DIR", PROJECT_ROOT / "localmusic")).resolve()
LOG_DIR = Path(os.environ.get("LOCALMUSIC_LOG_DIR", PROJECT_ROOT / "data" / "logs")).resolve()


def ensure_dir(path):
    if path:
        os.makedirs(path, exist_ok=True)


def _is_within_base(path, base_dir):
    real = os.path.realpath(path)
    base = os.path.realpath(base_dir)
    return os.path.commonpath([real, base]) == base


def resolve_library_dir(path=None):
    """Return the absolute library root, relative overrides anchored at the project root."""
    if not path:
        return str(LIBRARY_DIR)
    if os.path.isabs(path):
        return os.path.abspath(path)
    return os.path.abspath(os.path.join(PROJECT_ROOT, path))


def resolve_library_file(filename, library_dir):
    """Join ``filename`` onto the library root, rejecting names that escape it."""
    if not filename or os.path.isabs(filename):
        raise ValueError(f"Library file name must be relative: {filename!r}")
    resolved = os.path.abspath(os.path.join(library_dir, filename))
    if not _is_within_base(resolved, library_dir):
        raise ValueError(f"Path must be within library directory: {library_dir}")
    return resolved
