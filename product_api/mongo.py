"""MongoDB connector for product-api.

This module has one job: set up the MongoDB client and report whether the
database is reachable.

Key behaviour (important):
- Building the client does no I/O; pymongo connects lazily.
- `connect()` is attempted exactly once, in the background, after the server
  has started. A failure is logged and nothing else happens: no retry, no
  process exit. Data requests then fail one by one with HTTP 500.
"""

from __future__ import annotations

import logging

from pymongo import AsyncMongoClient, errors
from pymongo.asynchronous.collection import AsyncCollection

logger = logging.getLogger(__name__)


def create_client(uri: str) -> AsyncMongoClient:
    """Create the async MongoDB client for `uri`.

    Raises:
        pymongo.errors.ConfigurationError: if the URI cannot be parsed.
    """
    return AsyncMongoClient(uri)


async def connect(client: AsyncMongoClient) -> bool:
    """Ping the server once and log the outcome.

    Returns:
        True  -> the server answered the ping
        False -> it did not (the error has been logged)
    """
    try:
        await client.admin.command("ping")
    except errors.PyMongoError as e:
        logger.error("[Mongo] Connection failed! %s", e)
        return False

    logger.info("[Mongo] Connected to database!")
    return True


def get_collection(client: AsyncMongoClient, db_name: str, collection_name: str) -> AsyncCollection:
    """Return the products collection handle."""
    return client[db_name][collection_name]
