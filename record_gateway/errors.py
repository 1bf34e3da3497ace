"""Errors raised by the record gateway."""

from typing import Any, Mapping, Optional


class RecordGatewayError(Exception):
    """Base class for every gateway error."""


class NotFoundError(RecordGatewayError, LookupError):
    """Raised when a lookup or guarded update matches no active record."""

    def __init__(self, model: str, query: Optional[Mapping[str, Any]] = None):
        self.model = model
        self.query = dict(query or {})
        super().__init__(f"No {model} record matches {self.query!r}")


class DatabaseConnectionError(RecordGatewayError, ConnectionError):
    """Raised when MongoDB cannot be reached during ``init``."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Cannot connect to {url}: {reason}")


class UnknownModelError(RecordGatewayError, KeyError):
    """Raised when a model has no registered domain object."""

    def __init__(self, model: str):
        self.model = model
        super().__init__(model)

    def __str__(self) -> str:
        return f"No domain registered for model {self.model!r}"
