from __future__ import annotations

from transaction_insights.query.filters import (
    NO_MATCH,
    build_filter,
    coerce_int,
    month_filter,
    parse_number,
    search_filter,
)


def test_month_filter_matches_month_of_date_of_sale() -> None:
    assert month_filter(3) == {"$expr": {"$eq": [{"$month": "$dateOfSale"}, 3]}}
    assert month_filter(" 11 ") == {"$expr": {"$eq": [{"$month": "$dateOfSale"}, 11]}}


def test_month_filter_unreadable_month_matches_nothing() -> None:
    for month in ("abc", "", "3.5", None, True):
        assert month_filter(month) == NO_MATCH


def test_month_filter_out_of_range_month_is_kept() -> None:
    # $month never returns 13, so this simply matches nothing
    assert month_filter(13)["$expr"]["$eq"][1] == 13


def test_blank_search_adds_nothing() -> None:
    assert search_filter(None) is None
    assert search_filter("   ") is None
    assert build_filter(4, "  ") == month_filter(4)


def test_text_search_is_case_insensitive_escaped_substring() -> None:
    q = search_filter("  (Cotton)+ ")
    assert q == {
        "$or": [
            {"title": {"$regex": r"\(Cotton\)\+", "$options": "i"}},
            {"description": {"$regex": r"\(Cotton\)\+", "$options": "i"}},
        ]
    }


def test_numeric_search_adds_price_equality() -> None:
    clauses = search_filter("150")["$or"]
    assert {"price": 150} in clauses
    assert isinstance(clauses[-1]["price"], int)
    assert len(clauses) == 3

    assert {"price": 0} in search_filter("0")["$or"]
    assert {"price": 9.99} in search_filter("9.99")["$or"]


def test_non_finite_numbers_are_not_prices() -> None:
    assert parse_number("nan") is None
    assert parse_number("inf") is None
    assert parse_number("shirt") is None
    assert len(search_filter("nan")["$or"]) == 2


def test_build_filter_combines_month_and_search() -> None:
    q = build_filter("7", "bag")
    assert q["$expr"] == {"$eq": [{"$month": "$dateOfSale"}, 7]}
    assert len(q["$or"]) == 2


def test_build_filter_does_not_mutate_no_match() -> None:
    build_filter("x", "bag")
    assert NO_MATCH == {"_id": {"$exists": False}}


def test_digit_separators_are_not_numbers() -> None:
    assert parse_number("1_000") is None
    assert search_filter("1_000") == {
        "$or": [
            {"title": {"$regex": "1_000", "$options": "i"}},
            {"description": {"$regex": "1_000", "$options": "i"}},
        ]
    }
    assert parse_number("1000") == 1000


def test_coerce_int() -> None:
    assert coerce_int(" 42 ") == 42
    assert coerce_int(7) == 7
    for value in ("1_2", "4.0", "", None, False, 3.0):
        assert coerce_int(value) is None
    assert month_filter("1_2") == NO_MATCH
