"""Filter predicates shared by the listing and report queries.

Every read goes through `month_filter`; the listing additionally ORs a
free-text search over title, description and (for numeric input) price.
The builders never raise: a month that cannot be read as an integer gives
a predicate matching no document.
"""

from __future__ import annotations

import math
import re
from typing import Any

# every document has an _id, so this matches nothing
NO_MATCH: dict[str, Any] = {"_id": {"$exists": False}}


def coerce_int(value: Any) -> int | None:
    """Return `value` as an int, or None when it is not an integer.

    Strings must be plain decimal digits with an optional sign; digit
    separators (``"1_000"``) are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            return None
    return None


def parse_number(text: str) -> float | int | None:
    """Parse `text` as a finite number, preferring int for integral values."""
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def month_filter(month: Any) -> dict[str, Any]:
    """Return a predicate selecting records sold in calendar `month`.

    Args:
        month: Month number (1-12) as int or string.

    Returns:
        A Mongo filter document. Months outside 1-12 are kept as-is and
        simply match nothing; non-integers yield `NO_MATCH`.
    """
    value = coerce_int(month)
    if value is None:
        return dict(NO_MATCH)
    return {"$expr": {"$eq": [{"$month": "$dateOfSale"}, value]}}


def search_filter(search: str | None) -> dict[str, Any] | None:
    """Return the OR-predicate for a free-text search, or None if blank."""
    term = (search or "").strip()
    if not term:
        return None

    pattern = {"$regex": re.escape(term), "$options": "i"}
    clauses: list[dict[str, Any]] = [
        {"title": pattern},
        {"description": pattern},
    ]
    number = parse_number(term)
    if number is not None:
        clauses.append({"price": number})
    return {"$or": clauses}


def build_filter(month: Any, search: str | None = None) -> dict[str, Any]:
    """Combine the month predicate with the optional search predicate."""
    query = month_filter(month)
    search_query = search_filter(search)
    if search_query is not None:
        query.update(search_query)
    return query
