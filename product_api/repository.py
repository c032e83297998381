"""Product persistence on top of a MongoDB collection.

Every operation is a single awaited driver call. There are no transactions:
two concurrent updates of the same product are last-write-wins, which MongoDB
decides for us.

Ids:
- MongoDB generates an ObjectId on insert; the API exposes its hex string.
- A string that is not a valid ObjectId cannot name any product, so it is
  reported as `ProductNotFound` rather than as a server error.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection

from .errors import ProductNotFound
from .models import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _object_id(product_id: str) -> ObjectId:
    try:
        return ObjectId(product_id)
    except (InvalidId, TypeError):
        raise ProductNotFound(product_id) from None


def _to_product(doc: dict[str, Any]) -> Product:
    """Convert a MongoDB document to the API record."""
    return Product(
        id=str(doc["_id"]),
        name=doc["name"],
        price=doc["price"],
        quantity=doc["quantity"],
        image=doc.get("image"),
        createdAt=doc["createdAt"],
        updatedAt=doc["updatedAt"],
    )


class ProductRepository:
    """CRUD operations over the products collection."""

    def __init__(self, collection: AsyncCollection) -> None:
        self._collection = collection

    async def create(self, fields: ProductCreate) -> Product:
        now = _now()
        doc = fields.model_dump()
        doc["createdAt"] = now
        doc["updatedAt"] = now

        result = await self._collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("[Mongo] Inserted product %s", result.inserted_id)
        return _to_product(doc)

    async def list_all(self) -> list[Product]:
        """Return every product in natural (insertion) order."""
        return [_to_product(doc) async for doc in self._collection.find({})]

    async def get_by_id(self, product_id: str) -> Product:
        doc = await self._collection.find_one({"_id": _object_id(product_id)})
        if doc is None:
            raise ProductNotFound(product_id)
        return _to_product(doc)

    async def update_by_id(self, product_id: str, fields: ProductUpdate) -> Product:
        """Replace only the supplied fields and return the updated product."""
        changes = fields.changes()
        changes["updatedAt"] = _now()

        doc = await self._collection.find_one_and_update(
            {"_id": _object_id(product_id)},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            raise ProductNotFound(product_id)
        return _to_product(doc)

    async def delete_by_id(self, product_id: str) -> None:
        result = await self._collection.delete_one({"_id": _object_id(product_id)})
        if result.deleted_count == 0:
            raise ProductNotFound(product_id)
        logger.info("[Mongo] Deleted product %s", product_id)
