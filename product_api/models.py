"""Pydantic models for product-api.

We validate input at the HTTP boundary so that:
- bad requests fail fast with a clear 422 error
- MongoDB only receives well-formed product documents

`price` and `quantity` can never be negative, and `name` can never be empty.
`price` must be finite and `quantity` must fit in a BSON int64, otherwise the
value could not be stored or returned as JSON.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Largest integer BSON can encode (int64).
MAX_QUANTITY = 2**63 - 1


class ProductCreate(BaseModel):
    """Request body for `POST /api/products`."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(default=0, ge=0, le=MAX_QUANTITY)
    image: str | None = None


class ProductUpdate(BaseModel):
    """Request body for `PUT /api/products/{id}`.

    Every field is optional; only the fields present in the body are replaced.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    quantity: int | None = Field(default=None, ge=0, le=MAX_QUANTITY)
    image: str | None = None

    def changes(self) -> dict:
        """Return only the fields the client actually sent (nulls dropped)."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Product(BaseModel):
    """A stored product, as returned by the API.

    Fields:
        id: String form of the MongoDB ObjectId assigned on insert.
        createdAt / updatedAt: UTC timestamps maintained by the repository.
    """

    id: str
    name: str
    price: float
    quantity: int
    image: str | None = None
    createdAt: datetime
    updatedAt: datetime


class Message(BaseModel):
    """Plain `{message}` body used for deletes and errors."""

    message: str
