"""Async MongoDB helpers built on top of Motor.

Only connection concerns live here; ``record_gateway.gateway`` builds the
CRUD operations on top of the database handle returned by ``connect``."""

from __future__ import annotations

from typing import Optional

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from .errors import DatabaseConnectionError
from .settings import GatewaySettings, settings as default_settings


def sanitize_url(url: str) -> str:
    """Hide the password in a MongoDB URL so it can be logged."""

    if "://" not in url or "@" not in url:
        return url

    protocol, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    if ":" not in credentials:
        return url
    username = credentials.split(":", 1)[0]
    return f"{protocol}://{username}:***@{host}"


def create_client(url: str, settings: Optional[GatewaySettings] = None) -> AsyncIOMotorClient:
    """Return a Motor client for ``url``; no I/O happens until first use."""

    settings = settings or default_settings
    return AsyncIOMotorClient(
        url,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )


def database_for(
    client: AsyncIOMotorClient,
    db_name: Optional[str] = None,
    settings: Optional[GatewaySettings] = None,
) -> AsyncIOMotorDatabase:
    """Pick the explicit database, else the one named in the URL, else the configured one."""

    if db_name:
        return client[db_name]
    settings = settings or default_settings
    try:
        return client.get_default_database()
    except ConfigurationError:
        return client[settings.db_name]


async def ping(client: AsyncIOMotorClient) -> dict:
    """Run a ``ping`` command against the server behind ``client``."""

    await client.admin.command("ping")
    return {"ok": True}


async def connect(
    url: str,
    db_name: Optional[str] = None,
    settings: Optional[GatewaySettings] = None,
) -> tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """
    Open a client for ``url`` and confirm the server answers.

    Raises ``DatabaseConnectionError`` when the URL is invalid or the server
    cannot be reached; the driver error is chained as the cause.
    """

    safe_url = sanitize_url(url)
    client: Optional[AsyncIOMotorClient] = None
    try:
        client = create_client(url, settings)
        await ping(client)
    except (PyMongoError, ValueError) as exc:
        if client is not None:
            client.close()
        logger.error("Cannot connect to {url}: {error}", url=safe_url, error=exc)
        raise DatabaseConnectionError(safe_url, str(exc)) from exc

    logger.info("Connected to {url}", url=safe_url)
    return client, database_for(client, db_name, settings)
