from __future__ import annotations

from datetime import datetime, timezone

import pytest
from bson import ObjectId

from fakes import FakeCollection
from transaction_insights.cli import build_parser, run_report
from transaction_insights.errors import ParamValidationError
from transaction_insights.query.filters import NO_MATCH


def _doc(i: int) -> dict:
    return {
        "_id": ObjectId(),
        "id": i,
        "title": f"Item {i}",
        "description": "",
        "price": 120.0,
        "category": "electronics",
        "image": None,
        "sold": True,
        "dateOfSale": datetime(2022, 6, 1, tzinfo=timezone.utc),
    }


def test_parser_report_arguments() -> None:
    args = build_parser().parse_args(
        ["report", "transactions", "--month", "6", "--search", "item", "--per-page", "5"]
    )
    assert (args.cmd, args.kind, args.month) == ("report", "transactions", "6")
    assert (args.search, args.page, args.per_page) == ("item", None, "5")


def test_parser_rejects_unknown_report() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["report", "heatmap", "--month", "6"])


def test_run_report_transactions() -> None:
    col = FakeCollection(docs=[_doc(2), _doc(1)])
    args = build_parser().parse_args(["report", "transactions", "--month", "6"])
    payload = run_report(col, args)
    assert payload["success"] is True
    assert [t["id"] for t in payload["data"]["transactions"]] == [1, 2]
    assert payload["data"]["totalPages"] == 1


def test_run_report_bar_chart() -> None:
    col = FakeCollection(docs=[_doc(1), _doc(2)])
    args = build_parser().parse_args(["report", "bar-chart", "--month", "6"])
    data = run_report(col, args)["data"]
    assert {"range": "101-200", "count": 2} in data


def test_run_report_strict_and_lenient() -> None:
    args = build_parser().parse_args(["report", "statistics", "--month", "June"])
    with pytest.raises(ParamValidationError):
        run_report(FakeCollection(), args)

    col = FakeCollection()
    assert run_report(col, args, strict=False)["data"]["totalSoldItems"] == 0
    assert col.pipelines[0][0] == {"$match": NO_MATCH}
