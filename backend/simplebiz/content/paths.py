"""
Copy-on-write updates of a single nested location in a content document.
"""
from collections.abc import Mapping, Sequence
from typing import Any

from simplebiz.content.errors import InvalidOperation

MISSING = object()


def _check_path(path: Sequence[str]) -> tuple[str, ...]:
    if isinstance(path, str) or not isinstance(path, Sequence):
        raise InvalidOperation(f"Path must be a sequence of field names, got {path!r}")
    if not path:
        raise InvalidOperation("Path must not be empty")
    for segment in path:
        if not isinstance(segment, str):
            raise InvalidOperation(f"Path segments must be strings, got {segment!r}")
    return tuple(path)


def set_path(document: Mapping[str, Any], path: Sequence[str], value: Any) -> dict[str, Any]:
    """
    Return a new document with ``value`` stored at ``path``.

    Every mapping on the path is shallow-copied; branches off the path are
    shared with ``document``, which is never mutated. Missing (or None)
    intermediate levels are created as empty dicts; any other non-mapping
    value on the way raises InvalidOperation rather than being overwritten.
    """
    segments = _check_path(path)

    root = dict(document)
    current = root
    for segment in segments[:-1]:
        child = current.get(segment)
        if child is None:
            child = {}
        elif isinstance(child, Mapping):
            child = dict(child)
        else:
            raise InvalidOperation(
                f"Cannot set {'.'.join(segments)}: {segment!r} is a {type(child).__name__}, not an object"
            )
        current[segment] = child
        current = child

    current[segments[-1]] = value
    return root


def get_path(document: Mapping[str, Any], path: Sequence[str], default: Any = MISSING) -> Any:
    """Read the value at ``path``; raise KeyError when absent and no default is given."""
    current: Any = document
    for segment in _check_path(path):
        if not isinstance(current, Mapping) or segment not in current:
            if default is MISSING:
                raise KeyError(".".join(path))
            return default
        current = current[segment]
    return current
