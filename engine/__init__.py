from .paths import LIBRARY_DIR, LOG_DIR, ensure_dir, resolve_library_dir, resolve_library_file

__all__ = [
    "LIBRARY_DIR",
    "LOG_DIR",
    "ensure_dir",
    "resolve_library_dir",
    "resolve_library_file",
]
