"""Async CRUD gateway over MongoDB collections with soft deletion."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from loguru import logger
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from .defaults import set_default_values
from .errors import NotFoundError, UnknownModelError
from .models import GatewayOptions, ListOptions, Page
from .mongo import connect
from .settings import GatewaySettings, settings as default_settings
from .translate import from_storage, storage_field, to_storage
from .typing import Query, SchemaSource

ACTIVE_FILTER = {"active": True}


def _normalize_query(query: Query) -> dict[str, Any]:
    """A bare string addresses a record by id."""

    if isinstance(query, str):
        return {"id": query}
    return dict(query or {})


class RecordGateway:
    """
    CRUD access to every model registered in ``domains``.

    Each model maps to a collection of the same name. Reads only ever see
    records with ``active: True``; ``remove`` flips that flag instead of
    deleting. Records leave the gateway keyed by ``id`` and are stored
    keyed by ``_id``.
    """

    def __init__(
        self,
        database: AsyncIOMotorDatabase,
        domains: Optional[Mapping[str, SchemaSource]] = None,
        settings: Optional[GatewaySettings] = None,
        client: Optional[AsyncIOMotorClient] = None,
    ):
        self._db = database
        self._domains = dict(domains or {})
        self._settings = settings or default_settings
        self._client = client

    def get_db(self) -> AsyncIOMotorDatabase:
        return self._db

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _collection(self, model: str):
        return self._db[model]

    def _schema(self, model: str):
        try:
            domain = self._domains[model]
        except KeyError:
            raise UnknownModelError(model) from None
        return domain.get_schema()

    # ---------------------------------------------------------
    # READ
    # ---------------------------------------------------------
    async def get_model(self, model: str, query: Optional[Mapping[str, Any]] = None) -> dict:
        """
        Return the first active record matching ``query``.

        Only top-level ``id`` keys are renamed; operator queries on the
        identifier (``{"_id": {"$in": [...]}}``) must use ``_id`` directly.
        """

        find = {**(query or {}), **ACTIVE_FILTER}
        logger.debug("get_model {model} {find}", model=model, find=find)

        doc = await self._collection(model).find_one(to_storage(find))
        if not doc:
            raise NotFoundError(model, find)
        return from_storage(doc)

    async def get_models(
        self,
        model: str,
        query: Optional[Mapping[str, Any]] = None,
        options: Union[ListOptions, Mapping[str, Any], None] = None,
    ) -> Page:
        """
        Return one page of active records plus the total active match count.

        The count and the page are fetched concurrently and are not taken
        from the same snapshot, so under concurrent writes they may disagree.
        As with ``get_model``, operator queries on the identifier use ``_id``.
        """

        if not isinstance(options, ListOptions):
            options = ListOptions.model_validate(options or {})

        page = options.page or self._settings.default_page
        limit = options.limit or self._settings.default_limit
        sort = storage_field(options.sort or self._settings.default_sort)

        find = to_storage({**(query or {}), **ACTIVE_FILTER})
        logger.debug(
            "get_models {model} {find} page={page} limit={limit} sort={sort}",
            model=model,
            find=find,
            page=page,
            limit=limit,
            sort=sort,
        )

        collection = self._collection(model)
        cursor = (
            collection.find(find)
            .sort(sort, 1)
            .skip((page - 1) * limit)
            .limit(limit)
        )
        total, docs = await asyncio.gather(
            collection.count_documents(find),
            cursor.to_list(length=None),
        )
        return Page(total=total, records=[from_storage(doc) for doc in docs])

    # ---------------------------------------------------------
    # CREATE
    # ---------------------------------------------------------
    async def create(
        self,
        model: str,
        data: Optional[Mapping[str, Any]] = None,
        current_user: Any = None,
    ) -> dict:
        """Insert ``data`` completed with defaults and return the stored record."""

        record = set_default_values(self._schema(model), data, current_user)
        doc = to_storage(record)
        logger.debug("create {model} {id}", model=model, id=doc["_id"])

        await self._collection(model).insert_one(doc)
        return await self.get_model(model, {"id": doc["_id"]})

    # ---------------------------------------------------------
    # UPDATE
    # ---------------------------------------------------------
    async def edit(self, model: str, query: Query, data: Mapping[str, Any]) -> dict:
        """Set the fields in ``data`` on one matching record and return it."""

        find = _normalize_query(query)
        changes = {**data, "updatedAt": datetime.utcnow()}
        logger.debug("edit {model} {find} fields={fields}", model=model, find=find, fields=list(data))

        collection = self._collection(model)
        # Only an active record is written, and the same record is returned.
        target = await collection.find_one(
            to_storage({**find, **ACTIVE_FILTER}),
            {"_id": 1},
        )
        if not target:
            raise NotFoundError(model, find)
        target_id = target["_id"]

        result = await collection.update_one(
            {"_id": target_id, **ACTIVE_FILTER},
            {"$set": to_storage(changes)},
        )
        if result.modified_count == 0:
            raise NotFoundError(model, find)

        return await self.get_model(model, {"id": target_id})

    # ---------------------------------------------------------
    # DELETE
    # ---------------------------------------------------------
    async def remove(self, model: str, query: Query) -> None:
        """Soft-delete one matching record."""

        find = _normalize_query(query)
        logger.debug("remove {model} {find}", model=model, find=find)

        result = await self._collection(model).update_one(
            to_storage(find),
            {"$set": {"active": False}},
        )
        if result.modified_count == 0:
            raise NotFoundError(model, find)


async def init(
    domains: Mapping[str, SchemaSource],
    options: Union[GatewayOptions, Mapping[str, Any], None] = None,
    settings: Optional[GatewaySettings] = None,
) -> RecordGateway:
    """Connect to MongoDB and return a gateway serving ``domains``."""

    settings = settings or default_settings
    if not isinstance(options, GatewayOptions):
        options = GatewayOptions.model_validate(options or {})

    client, database = await connect(options.db_url or settings.uri, options.db_name, settings)
    return RecordGateway(database, domains, settings=settings, client=client)
