from datetime import datetime
from uuid import UUID

from record_gateway.defaults import (
    DefaultDirective,
    resolve_default,
    schema_defaults,
    set_default_values,
)
from record_gateway.models import FieldDescriptor

SCHEMA = {
    "text": {},
    "status": {"defaultValue": "open"},
    "threadId": {"defaultValue": "uuid"},
    "ownerId": {"defaultValue": "current-user-uuid"},
}


def test_sets_standard_fields_when_missing():
    current_user = "testUserUUID"

    result = set_default_values(SCHEMA, {}, current_user)

    assert result["id"]
    assert isinstance(result["createdAt"], datetime)
    assert isinstance(result["updatedAt"], datetime)
    assert result["createdBy"] == current_user
    assert result["updatedBy"] == current_user
    assert result["active"] is True


def test_retains_input_data_and_does_not_mutate():
    data = {"someField": "test"}

    result = set_default_values(SCHEMA, data)

    assert data == {"someField": "test"}
    assert result["someField"] == "test"
    assert len(result) > 4
    assert result["createdBy"] is None


def test_caller_fields_beat_schema_and_standard_defaults():
    data = {"id": "fixed", "status": "closed", "active": False}

    result = set_default_values(SCHEMA, data, "user-1")

    assert result["id"] == "fixed"
    assert result["status"] == "closed"
    assert result["active"] is False


def test_schema_defaults_beat_standard_defaults():
    schema = {"active": {"defaultValue": "pending"}}

    result = set_default_values(schema, {}, "user-1")

    assert result["active"] == "pending"


def test_generator_tags_produce_fresh_uuids():
    first = set_default_values(SCHEMA, {})
    second = set_default_values(SCHEMA, {})

    assert UUID(first["threadId"])
    assert UUID(first["ownerId"])
    assert first["threadId"] != second["threadId"]
    assert first["id"] != second["id"]


def test_literal_defaults_and_missing_schema():
    assert schema_defaults(SCHEMA)["status"] == "open"
    assert "text" not in schema_defaults(SCHEMA)
    assert set_default_values(None, {"a": 1})["a"] == 1


def test_falsy_literal_defaults_are_kept():
    schema = {"archived": {"defaultValue": False}, "votes": {"defaultValue": 0}}

    result = set_default_values(schema, {})

    assert result["archived"] is False
    assert result["votes"] == 0


def test_accepts_field_descriptor_models():
    schema = {"status": FieldDescriptor(defaultValue="draft")}

    assert set_default_values(schema, {})["status"] == "draft"


def test_resolve_default():
    assert resolve_default("open") == "open"
    assert resolve_default(5) == 5
    assert UUID(resolve_default(DefaultDirective.UUID.value))
