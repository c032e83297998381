"""product-api configuration.

This module only reads environment variables (and a `.env` file, if present).
Settings are read once at startup; there is no dynamic reload.

Keeping configuration in one place makes it easy to:
- run locally or inside a container without touching application logic
- see, at a glance, what the service depends on

`MONGODB_URI` is deliberately optional. Without it the HTTP server still starts
and `GET /` answers, but every data route fails with HTTP 500.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict


class Settings(BaseModel):
    """Immutable snapshot of the process configuration."""

    model_config = ConfigDict(frozen=True)

    # --- MongoDB -------------------------------------------------------------
    # Connection string. Example: "mongodb://localhost:27017"
    mongodb_uri: str | None = None
    mongodb_db: str = "test"
    mongodb_collection: str = "products"

    # --- HTTP ----------------------------------------------------------------
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: tuple[str, ...] = ("*",)

    log_level: str = "INFO"


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(origin.strip() for origin in raw.split(",") if origin.strip())


def load_settings() -> Settings:
    """Build `Settings` from the process environment.

    An empty `MONGODB_URI` counts as unset. The connection string form is not
    validated here; the driver reports a bad URI when the connector runs.

    Raises:
        ValueError: if `PORT` is not an integer.
    """
    load_dotenv()

    return Settings(
        mongodb_uri=os.getenv("MONGODB_URI") or None,
        mongodb_db=os.getenv("MONGODB_DB", "test"),
        mongodb_collection=os.getenv("MONGODB_COLLECTION", "products"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
