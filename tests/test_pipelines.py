from __future__ import annotations

from transaction_insights.aggregate.pipelines import (
    OVERFLOW_LABEL,
    PRICE_BOUNDARIES,
    category_pipeline,
    price_bins,
    price_bucket_pipeline,
    price_range_filter,
    statistics_pipeline,
)
from transaction_insights.query.filters import month_filter

MATCH = month_filter(3)


def test_price_bins_labels_in_ascending_order() -> None:
    labels = [b.label for b in price_bins()]
    assert labels == [
        "0-100",
        "101-200",
        "201-300",
        "301-400",
        "401-500",
        "501-600",
        "601-700",
        "701-800",
        "801-900",
        "901-above",
    ]


def test_price_range_filter_bounds() -> None:
    bins = price_bins()
    assert price_range_filter(MATCH, bins[1]) == {**MATCH, "price": {"$gte": 101, "$lt": 201}}
    assert price_range_filter(MATCH, bins[-1]) == {**MATCH, "price": {"$gte": 901}}


def test_bucket_pipeline_uses_explicit_overflow_label() -> None:
    pipeline = price_bucket_pipeline(MATCH)
    assert pipeline[0] == {"$match": MATCH}
    assert pipeline[1] == {"$match": {"price": {"$gte": 0}}}
    bucket = pipeline[2]["$bucket"]
    assert bucket["boundaries"] == list(PRICE_BOUNDARIES)
    assert bucket["default"] == OVERFLOW_LABEL


def test_statistics_pipeline_groups_everything() -> None:
    pipeline = statistics_pipeline(MATCH)
    assert pipeline[0] == {"$match": MATCH}
    group = pipeline[1]["$group"]
    assert group["_id"] is None
    assert group["totalSaleAmount"] == {"$sum": "$price"}
    assert set(group) == {"_id", "totalSaleAmount", "totalSoldItems", "totalNotSoldItems"}


def test_category_pipeline_groups_by_category() -> None:
    pipeline = category_pipeline(MATCH)
    assert pipeline[1] == {"$group": {"_id": "$category", "count": {"$sum": 1}}}
    assert pipeline[-1]["$project"]["category"] == "$_id"
