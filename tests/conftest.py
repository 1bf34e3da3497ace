import copy
from types import SimpleNamespace

import pytest

from record_gateway import GatewaySettings, RecordGateway


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs
        self.sort_spec = None
        self.skipped = 0
        self.limited = None

    def sort(self, key, direction=1):
        self.sort_spec = (key, direction)
        self._docs = sorted(
            self._docs,
            key=lambda doc: doc.get(key),
            reverse=direction == -1,
        )
        return self

    def skip(self, count):
        self.skipped = count
        self._docs = self._docs[count:]
        return self

    def limit(self, count):
        self.limited = count
        self._docs = self._docs[:count]
        return self

    async def to_list(self, length=None):
        return [copy.deepcopy(doc) for doc in self._docs]


class FakeCollection:
    """Small in-memory stand-in for a Motor collection (equality matches only)."""

    def __init__(self, name):
        self.name = name
        self.docs = []
        self.queries = []
        self.updates = []
        self.cursors = []

    async def find_one(self, query, projection=None):
        self.queries.append(query)
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    def find(self, query):
        self.queries.append(query)
        cursor = FakeCursor([doc for doc in self.docs if _matches(doc, query)])
        self.cursors.append(cursor)
        return cursor

    async def count_documents(self, query):
        self.queries.append(query)
        return sum(1 for doc in self.docs if _matches(doc, query))

    async def insert_one(self, doc):
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query, update):
        self.updates.append((query, update))
        for doc in self.docs:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(key) != value for key, value in changes.items())
                doc.update(copy.deepcopy(changes))
                return SimpleNamespace(matched_count=1, modified_count=int(modified))
        return SimpleNamespace(matched_count=0, modified_count=0)


class FakeDatabase:
    def __init__(self, name="records"):
        self.name = name
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


class CommentDomain:
    def get_schema(self):
        return {
            "text": {},
            "status": {"defaultValue": "open"},
            "threadId": {"defaultValue": "uuid"},
        }


@pytest.fixture()
def database():
    return FakeDatabase()


@pytest.fixture()
def gateway_settings():
    return GatewaySettings()


@pytest.fixture()
def gateway(database, gateway_settings):
    return RecordGateway(database, {"comment": CommentDomain()}, settings=gateway_settings)


@pytest.fixture()
def comments(database):
    """25 active comments with ids c00..c24, stored out of order."""

    collection = database["comment"]
    for index in reversed(range(25)):
        collection.docs.append(
            {
                "_id": f"c{index:02d}",
                "text": f"comment {index}",
                "active": True,
                "createdBy": "user-1",
                "updatedBy": "user-1",
            }
        )
    return collection
