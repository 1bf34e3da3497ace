"""Lightweight typing helpers shared by the gateway modules."""

from typing import Any, Mapping, Protocol, Union

MongoDocument = Mapping[str, Any]

# A field descriptor is either a plain mapping (``{"defaultValue": "uuid"}``)
# or a ``record_gateway.models.FieldDescriptor``.
Schema = Mapping[str, Any]


class SchemaSource(Protocol):
    """Domain object registered per model; the gateway only reads its schema."""

    def get_schema(self) -> Schema:  # pragma: no cover - structural typing only
        ...


Query = Union[str, Mapping[str, Any]]
