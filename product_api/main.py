"""product-api FastAPI application.

Responsibilities:
- Serve `GET /` and the product CRUD routes under `/api/products`
- Check the MongoDB connection once, in the background, at startup

Why is the connection check not awaited before serving?
- The server must be reachable even when MongoDB is down or not configured.
- A failed check is only logged; data routes then fail individually.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import AsyncMongoClient, errors
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, load_settings
from .mongo import connect, create_client, get_collection
from .repository import ProductRepository
from .routes import build_product_router, build_root_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render every HTTP error as `{"message": ...}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _open_client(settings: Settings) -> AsyncMongoClient | None:
    if not settings.mongodb_uri:
        logger.warning("[Mongo] MONGODB_URI is not set. Please add it to a .env file.")
        return None

    try:
        return create_client(settings.mongodb_uri)
    except errors.PyMongoError as e:
        # A malformed URI is reported like any other connection failure.
        logger.error("[Mongo] Connection failed! %s", e)
        return None


def create_app(settings: Settings | None = None, client: AsyncMongoClient | None = None) -> FastAPI:
    """Wire configuration -> connector -> repository -> routers.

    Args:
        settings: Configuration; read from the environment when omitted.
        client: A ready MongoDB client. When omitted one is built from
            `settings.mongodb_uri` (if set).

    Usable as a uvicorn factory: `uvicorn --factory product_api.main:create_app`,
    so logging is configured here rather than in `run()`.
    """
    if settings is None:
        settings = load_settings()
    configure_logging(settings.log_level)

    if client is None:
        client = _open_client(settings)

    repository = None
    if client is not None:
        collection = get_collection(client, settings.mongodb_db, settings.mongodb_collection)
        repository = ProductRepository(collection)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Background task: connecting must never delay the server bind.
        connect_task = asyncio.create_task(connect(client)) if client is not None else None
        yield
        if connect_task is not None:
            connect_task.cancel()
            with suppress(asyncio.CancelledError):
                await connect_task
        if client is not None:
            await client.close()

    app = FastAPI(title="Product API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        # Credentials are only allowed for an explicit origin list.
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    app.include_router(build_root_router())
    app.include_router(build_product_router(repository))
    return app


def run() -> None:
    """Console entry point: `product-api`."""
    settings = load_settings()
    app = create_app(settings)
    logger.info("[Server] Server is running on http://%s:%s/", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
