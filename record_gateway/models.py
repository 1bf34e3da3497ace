"""Pydantic models for gateway options, listing parameters and results."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _positive_int(value: Any) -> Optional[int]:
    """Coerce page/limit input to a positive int, ``None`` when unusable."""

    if value is None:
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if number > 0 else None


class FieldDescriptor(BaseModel):
    """Schema entry for a single field. Unknown keys are kept as-is."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    default_value: Any = Field(default=None, alias="defaultValue")


class GatewayOptions(BaseModel):
    """Connection options accepted by ``record_gateway.init``."""

    model_config = ConfigDict(populate_by_name=True)

    db_url: Optional[str] = Field(default=None, alias="dbUrl")
    db_name: Optional[str] = Field(default=None, alias="dbName")


class ListOptions(BaseModel):
    """
    Paging for ``RecordGateway.get_models``.

    Anything that does not coerce to a positive number is dropped to ``None``
    so the gateway's defaults apply; the same goes for a non-string sort.
    """

    page: Optional[int] = None
    limit: Optional[int] = None
    sort: Optional[str] = None

    @field_validator("page", "limit", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> Optional[int]:
        return _positive_int(v)

    @field_validator("sort", mode="before")
    @classmethod
    def coerce_sort(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) and v else None


class Page(BaseModel):
    """One page of records together with the total matching count."""

    total: int
    records: List[dict] = Field(default_factory=list)
