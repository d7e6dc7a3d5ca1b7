"""Report functions over the transactions collection.

Each function takes a PyMongo collection (anything with ``find``,
``count_documents`` and ``aggregate``) plus a filter built by
`transaction_insights.query`, runs the queries and returns pydantic
payload models.

Expectations:
- Stored documents follow `models.TransactionRecord` (``dateOfSale`` is a
  datetime, ``price`` numeric, ``sold`` boolean).
- Report filters are month predicates only; the free-text search is applied
  to the listing alone.
"""

from __future__ import annotations

import logging
import math
from functools import partial
from typing import Any

from pymongo import ASCENDING

from transaction_insights.aggregate.fanout import fan_out
from transaction_insights.aggregate.pipelines import (
    OVERFLOW_LABEL,
    category_pipeline,
    price_bins,
    price_bucket_pipeline,
    price_range_filter,
    statistics_pipeline,
)
from transaction_insights.models import (
    CategoryCount,
    CombinedReport,
    PriceRange,
    Statistics,
    Transaction,
    TransactionPage,
)
from transaction_insights.query.params import ListParams

log = logging.getLogger(__name__)

# deterministic page order: upstream id, then insertion order
SORT_ORDER = [("id", ASCENDING), ("_id", ASCENDING)]


# =========================================================
# LISTING
# =========================================================

def list_transactions(collection: Any, params: ListParams) -> TransactionPage:
    """Return one page of transactions matching `params`.

    The page query and the total count run concurrently.

    Args:
        collection: Transactions collection.
        params: Validated listing parameters (``page`` and ``per_page`` >= 1).

    Returns:
        `TransactionPage` with ``total_pages = ceil(total / per_page)``.
    """
    match = params.predicate

    def _page() -> list[dict[str, Any]]:
        cursor = (
            collection.find(match)
            .sort(SORT_ORDER)
            .skip(params.skip)
            .limit(params.per_page)
        )
        return list(cursor)

    docs, total = fan_out(_page, partial(collection.count_documents, match))
    log.debug("Listed %d of %d transactions (page %d)", len(docs), total, params.page)

    return TransactionPage(
        transactions=[Transaction.model_validate(d) for d in docs],
        total=total,
        page=params.page,
        total_pages=math.ceil(total / params.per_page),
    )


# =========================================================
# STATISTICS
# =========================================================

def statistics(collection: Any, match: dict[str, Any]) -> Statistics:
    """Return sale totals over `match`; all zeros when nothing matches."""
    rows = list(collection.aggregate(statistics_pipeline(match)))
    if not rows:
        return Statistics()
    return Statistics.model_validate(rows[0])


# =========================================================
# PRICE HISTOGRAM
# =========================================================

def bar_chart(collection: Any, match: dict[str, Any]) -> list[PriceRange]:
    """Histogram built from one range-count query per bin, run concurrently."""
    bins = price_bins()
    counts = fan_out(
        *(partial(collection.count_documents, price_range_filter(match, b)) for b in bins)
    )
    return [PriceRange(range=b.label, count=int(c)) for b, c in zip(bins, counts)]


def shape_buckets(rows: list[dict[str, Any]]) -> list[PriceRange]:
    """Turn `$bucket` output into all ten labelled bins, zeros included.

    `$bucket` emits only non-empty buckets, keyed by the lower boundary or
    by the overflow label.
    """
    bins = price_bins()
    labels = {b.lower: b.label for b in bins}
    counts = {b.label: 0 for b in bins}

    for row in rows:
        key = row["_id"]
        label = OVERFLOW_LABEL if key == OVERFLOW_LABEL else labels[int(key)]
        counts[label] += int(row["count"])

    return [PriceRange(range=label, count=count) for label, count in counts.items()]


def bar_chart_bucketed(collection: Any, match: dict[str, Any]) -> list[PriceRange]:
    """Histogram built from a single `$bucket` aggregation."""
    return shape_buckets(list(collection.aggregate(price_bucket_pipeline(match))))


# =========================================================
# CATEGORIES
# =========================================================

def pie_chart(collection: Any, match: dict[str, Any]) -> list[CategoryCount]:
    """Record counts per category over `match`."""
    return [CategoryCount.model_validate(r) for r in collection.aggregate(category_pipeline(match))]


# =========================================================
# COMBINED
# =========================================================

def combined_report(collection: Any, match: dict[str, Any]) -> CombinedReport:
    """Run statistics, bucketed histogram and category breakdown concurrently.

    No snapshot is shared between the three queries; under concurrent
    writes their totals may disagree.
    """
    stats, bars, pie = fan_out(
        partial(statistics, collection, match),
        partial(bar_chart_bucketed, collection, match),
        partial(pie_chart, collection, match),
    )
    return CombinedReport(statistics=stats, bar_chart=bars, pie_chart=pie)
