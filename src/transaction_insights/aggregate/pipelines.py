"""Aggregation pipeline builders and the fixed price bins.

Functions here only build Mongo documents; they never touch a collection.
`transaction_insights.aggregate.reports` runs them and shapes the output.

Price bins are half-open, ``lower <= price < next_lower``, with the last bin
unbounded. For integer prices this equals the closed ranges ``0-100``,
``101-200``, ... and every non-negative price falls in exactly one bin.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PRICE_BOUNDARIES: tuple[int, ...] = (0, 101, 201, 301, 401, 501, 601, 701, 801, 901)
OVERFLOW_LABEL = "901-above"


@dataclass(frozen=True)
class PriceBin:
    """One histogram bin.

    Attributes:
        lower: Inclusive lower bound.
        upper: Exclusive upper bound, or None for the overflow bin.
        label: Display label, e.g. ``"101-200"`` or ``"901-above"``.
    """
    lower: int
    upper: int | None
    label: str


def price_bins() -> list[PriceBin]:
    """Return the ten bins in ascending order."""
    bins = []
    for lower, upper in zip(PRICE_BOUNDARIES, PRICE_BOUNDARIES[1:]):
        bins.append(PriceBin(lower=lower, upper=upper, label=f"{lower}-{upper - 1}"))
    bins.append(PriceBin(lower=PRICE_BOUNDARIES[-1], upper=None, label=OVERFLOW_LABEL))
    return bins


def price_range_filter(match: dict[str, Any], price_bin: PriceBin) -> dict[str, Any]:
    """Return `match` restricted to prices inside `price_bin`.

    `match` must not constrain ``price`` itself (the month predicate does not).
    """
    bounds: dict[str, Any] = {"$gte": price_bin.lower}
    if price_bin.upper is not None:
        bounds["$lt"] = price_bin.upper
    return {**match, "price": bounds}


def statistics_pipeline(match: dict[str, Any]) -> list[dict[str, Any]]:
    """Sum of price plus sold / not-sold counts over `match`."""
    return [
        {"$match": match},
        {
            "$group": {
                "_id": None,
                "totalSaleAmount": {"$sum": "$price"},
                "totalSoldItems": {
                    "$sum": {"$cond": [{"$eq": ["$sold", True]}, 1, 0]},
                },
                "totalNotSoldItems": {
                    "$sum": {"$cond": [{"$eq": ["$sold", False]}, 1, 0]},
                },
            }
        },
        {"$project": {"_id": 0}},
    ]


def price_bucket_pipeline(match: dict[str, Any]) -> list[dict[str, Any]]:
    """Single-pass histogram over `match`.

    Negative prices are filtered out first so they land in no bin, as with
    the range-count strategy; otherwise `$bucket` would put them in the
    default bucket.
    """
    return [
        {"$match": match},
        {"$match": {"price": {"$gte": PRICE_BOUNDARIES[0]}}},
        {
            "$bucket": {
                "groupBy": "$price",
                "boundaries": list(PRICE_BOUNDARIES),
                "default": OVERFLOW_LABEL,
                "output": {"count": {"$sum": 1}},
            }
        },
    ]


def category_pipeline(match: dict[str, Any]) -> list[dict[str, Any]]:
    """Record counts per category over `match`."""
    return [
        {"$match": match},
        {"$group": {"_id": "$category", "count": {"$sum": 1}}},
        {"$sort": {"count": -1, "_id": 1}},
        {"$project": {"_id": 0, "category": "$_id", "count": 1}},
    ]
