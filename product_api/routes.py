"""HTTP routes for product-api.

Routers are built by factories so the repository is passed in explicitly at
startup instead of being read from a module global.

Error mapping (at each handler boundary):
- ProductNotFound -> 404
- anything else   -> 500 with the raw error message
Error bodies are `{"message": "..."}` (see `main.http_exception_handler`).
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from .errors import DatabaseUnavailable, ProductNotFound
from .models import Message, Product, ProductCreate, ProductUpdate
from .repository import ProductRepository

logger = logging.getLogger(__name__)

GREETING = "Hello from the product API!"


def build_root_router() -> APIRouter:
    router = APIRouter()

    @router.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Static greeting; works even without a database."""
        return GREETING

    @router.get("/health")
    async def health() -> dict[str, str]:
        """Basic liveness endpoint."""
        return {"status": "ok"}

    return router


def _server_error(e: Exception) -> HTTPException:
    logger.error("[Server] Request failed: %s", e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


def _not_found(e: ProductNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def build_product_router(repository: ProductRepository | None) -> APIRouter:
    """Map the CRUD verbs under `/api/products` onto `repository`.

    Args:
        repository: The product repository, or None when MongoDB is not
            configured. In that case every route answers 500.
    """
    router = APIRouter(prefix="/api/products", tags=["products"])

    def repo() -> ProductRepository:
        if repository is None:
            raise DatabaseUnavailable()
        return repository

    @router.get("", response_model=list[Product])
    async def list_products():
        try:
            return await repo().list_all()
        except Exception as e:
            raise _server_error(e)

    @router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
    async def create_product(product: ProductCreate):
        try:
            return await repo().create(product)
        except Exception as e:
            raise _server_error(e)

    @router.get("/{product_id}", response_model=Product)
    async def get_product(product_id: str):
        try:
            return await repo().get_by_id(product_id)
        except ProductNotFound as e:
            raise _not_found(e)
        except Exception as e:
            raise _server_error(e)

    @router.put("/{product_id}", response_model=Product)
    async def update_product(product_id: str, product: ProductUpdate):
        """Partial update: only the fields present in the body change."""
        if not product.changes():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="No fields to update",
            )

        try:
            return await repo().update_by_id(product_id, product)
        except ProductNotFound as e:
            raise _not_found(e)
        except Exception as e:
            raise _server_error(e)

    @router.delete("/{product_id}", response_model=Message)
    async def delete_product(product_id: str):
        try:
            await repo().delete_by_id(product_id)
        except ProductNotFound as e:
            raise _not_found(e)
        except Exception as e:
            raise _server_error(e)
        return Message(message="Product deleted successfully")

    return router
