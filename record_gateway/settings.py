"""Configuration for the record gateway's MongoDB connection and paging.

Values come from ``RECORD_GATEWAY_*`` environment variables (or a ``.env``
file). Applications can build their own ``GatewaySettings`` and hand it to
``RecordGateway`` to override the module-level defaults.
"""
from loguru import logger

from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewaySettings(BaseSettings):
    """MongoDB connection details plus listing defaults."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RECORD_GATEWAY_",
        extra="ignore",
    )

    uri: str = "mongodb://localhost:27017/records"
    # Used when the URI does not name a database.
    db_name: str = "records"
    server_selection_timeout_ms: int = 5000

    default_page: int = 1
    default_limit: int = 20
    default_sort: str = "_id"


settings = GatewaySettings()
logger.info(
    "GatewaySettings initialized with db_name={db_name} default_limit={limit}",
    db_name=settings.db_name,
    limit=settings.default_limit,
)
