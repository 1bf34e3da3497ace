"""
Default values for newly created records.

Three layers are merged, highest precedence first:

1. fields supplied by the caller,
2. ``defaultValue`` directives declared in the model schema,
3. the standard audit fields every record carries.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional
from uuid import uuid1

from .models import FieldDescriptor
from .typing import Schema


class DefaultDirective(str, Enum):
    UUID = "uuid"
    CURRENT_USER_UUID = "current-user-uuid"


def _new_id(current_user: Any = None) -> str:
    return str(uuid1())


# TODO: resolve CURRENT_USER_UUID from current_user once callers pass a user
# object carrying its id; it mints a fresh uuid like UUID until then.
_RESOLVERS: Dict[DefaultDirective, Callable[[Any], Any]] = {
    DefaultDirective.UUID: _new_id,
    DefaultDirective.CURRENT_USER_UUID: _new_id,
}


def resolve_default(value: Any, current_user: Any = None) -> Any:
    """Resolve a directive tag to a generated value; literals pass through."""

    if isinstance(value, str):
        try:
            directive = DefaultDirective(value)
        except ValueError:
            return value
        return _RESOLVERS[directive](current_user)
    return value


def _descriptor_default(descriptor: Any) -> Any:
    if isinstance(descriptor, FieldDescriptor):
        return descriptor.default_value
    if isinstance(descriptor, Mapping):
        return descriptor.get("defaultValue")
    return None


def schema_defaults(schema: Optional[Schema], current_user: Any = None) -> dict[str, Any]:
    """Evaluate every ``defaultValue`` declared in ``schema``."""

    values: dict[str, Any] = {}
    for field, descriptor in (schema or {}).items():
        default = _descriptor_default(descriptor)
        if default is not None:
            values[field] = resolve_default(default, current_user)
    return values


def standard_defaults(current_user: Any = None) -> dict[str, Any]:
    now = datetime.utcnow()
    return {
        "id": _new_id(),
        "createdBy": current_user,
        "createdAt": now,
        "updatedBy": current_user,
        "updatedAt": now,
        "active": True,
    }


def set_default_values(
    schema: Optional[Schema],
    data: Optional[Mapping[str, Any]],
    current_user: Any = None,
) -> dict[str, Any]:
    """Return a new record: ``data`` over schema defaults over standard ones."""

    return {
        **standard_defaults(current_user),
        **schema_defaults(schema, current_user),
        **(data or {}),
    }
