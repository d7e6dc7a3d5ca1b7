"""Pydantic models for seed validation, query parameters and API payloads.

Payload models serialize with camelCase aliases (``dateOfSale``,
``totalSaleAmount``) so the JSON shape stays compatible with existing
clients; use ``model_dump(by_alias=True)``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Seed records
# ---------------------------------------------------------------------------

class TransactionRecord(_CamelModel):
    """Schema for a cleaned upstream record before it is stored.

    Attributes:
        id: Upstream identifier, preserved across reseeds.
        title: Product title.
        description: Free-text description.
        price: Sale price, finite.
        category: Category label.
        image: Optional image URL.
        sold: Whether the item was sold.
        date_of_sale: Timestamp of the sale (UTC).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
    id: int | None = None
    title: str
    description: str = ""
    price: float = Field(..., allow_inf_nan=False)
    category: str
    image: str | None = None
    sold: bool
    date_of_sale: datetime

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("date_of_sale")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def to_document(self) -> dict[str, Any]:
        """Return the Mongo document for this record."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------

class MonthQuery(_CamelModel):
    """Validated ``month`` parameter shared by every report route."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")
    month: int = Field(..., ge=1, le=12)


MAX_PER_PAGE = 100
# (page - 1) * perPage is sent as the cursor skip, a signed 64-bit BSON integer
MAX_PAGE = (2**63 - 1) // MAX_PER_PAGE


class ListQuery(MonthQuery):
    """Validated parameters of the transaction listing."""
    search: str | None = None
    page: int = Field(1, ge=1, le=MAX_PAGE)
    per_page: int = Field(10, ge=1, le=MAX_PER_PAGE)


# ---------------------------------------------------------------------------
# Response payloads
# ---------------------------------------------------------------------------

class Transaction(_CamelModel):
    """A stored transaction as returned by the listing endpoint."""
    object_id: str | None = Field(default=None, alias="_id")
    id: int | None = None
    title: str
    description: str = ""
    price: float
    category: str | None = None
    image: str | None = None
    sold: bool
    date_of_sale: datetime

    @field_validator("object_id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> str | None:
        return None if value is None else str(value)


class TransactionPage(_CamelModel):
    transactions: list[Transaction]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class Statistics(_CamelModel):
    """Sale totals for one month."""
    total_sale_amount: float = 0
    total_sold_items: int = Field(0, ge=0)
    total_not_sold_items: int = Field(0, ge=0)


class PriceRange(_CamelModel):
    """One histogram bin."""
    range: str
    count: int = Field(..., ge=0)


class CategoryCount(_CamelModel):
    category: str | None
    count: int = Field(..., ge=0)


class CombinedReport(_CamelModel):
    """Statistics, bar chart and pie chart computed together."""
    statistics: Statistics
    bar_chart: list[PriceRange]
    pie_chart: list[CategoryCount]
