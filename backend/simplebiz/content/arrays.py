"""
Add, remove and replace operations on ordered list fields (e.g. ``services``).
"""
from collections.abc import Mapping, Sequence
from enum import Enum as PyEnum
from typing import Any

from simplebiz.content.errors import InvalidOperation
from simplebiz.content.paths import get_path, set_path


class ArrayOperation(str, PyEnum):
    ADD = "add"
    REMOVE = "remove"
    UPDATE = "update"


def _coerce_operation(operation: ArrayOperation | str) -> ArrayOperation:
    try:
        return ArrayOperation(operation)
    except ValueError:
        raise InvalidOperation(f"Invalid array operation: {operation!r}") from None


def _check_index(index: Any, length: int, operation: ArrayOperation) -> int:
    if index is None:
        raise InvalidOperation(f"Index is required for {operation.value} operation")
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidOperation(f"Index must be an integer, got {index!r}")
    if not 0 <= index < length:
        raise InvalidOperation(f"Index {index} out of range for array of length {length}")
    return index


def mutate_array(
    document: Mapping[str, Any],
    path: Sequence[str],
    operation: ArrayOperation | str,
    value: Any = None,
    index: int | None = None,
) -> dict[str, Any]:
    """
    Apply one array operation to the list at ``path`` and return a new document.

    Raises InvalidOperation for unknown operations, missing or out-of-range
    indexes, and when the value at ``path`` is not a list. The input document
    is left untouched in every case.
    """
    op = _coerce_operation(operation)

    current = get_path(document, path, default=None)
    if current is None:
        current = []
    elif not isinstance(current, list):
        raise InvalidOperation(f"Value at {'.'.join(path)} is not an array")

    if op is ArrayOperation.ADD:
        updated = [*current, value]
    elif op is ArrayOperation.REMOVE:
        position = _check_index(index, len(current), op)
        updated = current[:position] + current[position + 1:]
    else:
        position = _check_index(index, len(current), op)
        updated = list(current)
        updated[position] = value

    return set_path(document, path, updated)
