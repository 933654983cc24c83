"""Priority merge of metadata fields across independent sources."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

_LOG = logging.getLogger(__name__)

Candidate = tuple[str, Callable[[], Any]]


def pick(field: str, candidates: Iterable[Candidate], default: Any = None) -> tuple[Any, str]:
    """Return the first non-empty value from ordered ``(source, extractor)`` pairs.

    Extractors are evaluated lazily in order and evaluation stops at the first
    value that passes :func:`has_value`. When every source is empty the
    ``default`` is returned with source name ``"default"``.
    """
    for source_name, extractor in candidates:
        value = extractor()
        if has_value(value):
            _LOG.debug("metadata_field_source field=%s source=%s", field, source_name)
            return value, source_name
    _LOG.debug("metadata_field_source field=%s source=default", field)
    return default, "default"


def has_value(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (bytes, bytearray, list, tuple)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value > 0
    return True


def first(values: Any) -> Any:
    """Return the first element of a list-like value, or None."""
    if not values:
        return None
    if isinstance(values, (list, tuple)):
        return values[0]
    return None
