"""Soft-deleting CRUD gateway over MongoDB collections.

Example usage:

    from record_gateway import init

    gateway = await init({"comment": CommentDomain()}, {"dbUrl": "mongodb://localhost/app"})
    created = await gateway.create("comment", {"text": "hi"}, current_user="user-123")
    page = await gateway.get_models("comment", {}, {"page": 1, "limit": 20})
    await gateway.remove("comment", created["id"])
"""

from .defaults import DefaultDirective, set_default_values
from .errors import (
    DatabaseConnectionError,
    NotFoundError,
    RecordGatewayError,
    UnknownModelError,
)
from .gateway import RecordGateway, init
from .models import FieldDescriptor, GatewayOptions, ListOptions, Page
from .settings import GatewaySettings, settings
from .translate import Direction, convert_id, from_storage, to_storage

__all__ = [
    "DefaultDirective",
    "set_default_values",
    "DatabaseConnectionError",
    "NotFoundError",
    "RecordGatewayError",
    "UnknownModelError",
    "RecordGateway",
    "init",
    "FieldDescriptor",
    "GatewayOptions",
    "ListOptions",
    "Page",
    "GatewaySettings",
    "settings",
    "Direction",
    "convert_id",
    "from_storage",
    "to_storage",
]
