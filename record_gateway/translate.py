"""
Identifier translation between application and storage field naming.

Callers address records by ``id``; MongoDB stores the primary key as
``_id``. ``convert_id`` rewrites the key at every depth of a nested value
and always returns new containers, leaving its input untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

APP_ID = "id"
STORAGE_ID = "_id"


class Direction(str, Enum):
    TO_STORAGE = "toStorage"
    FROM_STORAGE = "fromStorage"


_RENAMES = {
    Direction.TO_STORAGE: (APP_ID, STORAGE_ID),
    Direction.FROM_STORAGE: (STORAGE_ID, APP_ID),
}


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_sequence_of_mappings(value: Any) -> bool:
    return _is_sequence(value) and len(value) > 0 and isinstance(value[0], Mapping)


def convert_id(direction: Direction | str, value: Any) -> Any:
    """Return ``value`` with the identifier key renamed along ``direction``."""

    direction = Direction(direction)

    if _is_sequence(value):
        return [convert_id(direction, item) for item in value]

    if not isinstance(value, Mapping):
        return value

    source, target = _RENAMES[direction]
    result: dict[str, Any] = {}
    for key, item in value.items():
        if _is_sequence_of_mappings(item) or isinstance(item, Mapping):
            result[key] = convert_id(direction, item)
        elif key == source:
            result[target] = item
        else:
            result[key] = item
    return result


def to_storage(value: Any) -> Any:
    return convert_id(Direction.TO_STORAGE, value)


def from_storage(value: Any) -> Any:
    return convert_id(Direction.FROM_STORAGE, value)


def storage_field(name: str) -> str:
    """Storage name for a single top-level field, e.g. a sort key."""

    return STORAGE_ID if name == APP_ID else name
