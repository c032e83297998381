"""Shared fixtures: an in-memory stand-in for the async MongoDB client.

Only the calls made by `ProductRepository` and `connect()` are supported:
insert_one, find, find_one, find_one_and_update, delete_one, admin.command
and close.
"""

from __future__ import annotations

import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from product_api.config import Settings
from product_api.main import create_app


def _matches(doc: dict, query: dict) -> bool:
    return all(doc.get(key) == value for key, value in query.items())


class InMemoryCollection:
    def __init__(self, fail_with: Exception | None = None) -> None:
        self.docs: list[dict] = []
        self.fail_with = fail_with

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def insert_one(self, doc: dict):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: dict):
        self._check()
        return self._iterate(query)

    async def _iterate(self, query: dict):
        for doc in list(self.docs):
            if _matches(doc, query):
                yield copy.deepcopy(doc)

    async def find_one(self, query: dict):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def find_one_and_update(self, query: dict, update: dict, return_document=ReturnDocument.BEFORE):
        self._check()
        for doc in self.docs:
            if _matches(doc, query):
                before = copy.deepcopy(doc)
                doc.update(update.get("$set", {}))
                return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: dict):
        self._check()
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class InMemoryClient:
    """Mimics `client[db][collection]`, `client.admin.command` and `close()`."""

    def __init__(self, collection: InMemoryCollection | None = None, ping_error: Exception | None = None) -> None:
        self.collection = collection or InMemoryCollection()
        self.ping_error = ping_error
        self.pings = 0
        self.closed = False
        self.admin = SimpleNamespace(command=self._command)

    async def _command(self, name: str):
        self.pings += 1
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}

    def __getitem__(self, db_name: str):
        return {"products": self.collection}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(mongodb_uri="mongodb://localhost:27017")


@pytest.fixture
def mongo_client() -> InMemoryClient:
    return InMemoryClient()


@pytest.fixture
def client(settings, mongo_client) -> TestClient:
    return TestClient(create_app(settings, client=mongo_client))
