"""Parse-and-validate step for query-string parameters.

Raw values arrive as optional strings. In strict mode they are validated by
the pydantic models in `transaction_insights.models` and failures raise
`ParamValidationError`. In lenient mode nothing is rejected: an unreadable
month becomes a predicate that matches nothing, and an unreadable or
out-of-range page/perPage falls back to its default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from transaction_insights.errors import ParamValidationError
from transaction_insights.models import MAX_PAGE, MAX_PER_PAGE, ListQuery, MonthQuery
from transaction_insights.query.filters import build_filter, coerce_int, month_filter

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 10


@dataclass(frozen=True)
class MonthParams:
    """Typed month parameter; `month` is None only in lenient mode."""
    month: int | None

    @property
    def predicate(self) -> dict[str, Any]:
        return month_filter(self.month)


@dataclass(frozen=True)
class ListParams:
    """Typed parameters of the transaction listing."""
    month: int | None
    search: str | None
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def predicate(self) -> dict[str, Any]:
        return build_filter(self.month, self.search)


def _clean(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(p) for p in err["loc"]) or "query"
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts)


def _lenient_int(value: Any, default: int, upper: int) -> int:
    parsed = coerce_int(value)
    if parsed is None or not 1 <= parsed <= upper:
        return default
    return parsed


def parse_month_params(month: Any, *, strict: bool = True) -> MonthParams:
    """Validate the `month` parameter of the report routes.

    Raises:
        ParamValidationError: in strict mode, if `month` is missing, not an
            integer, or outside 1-12.
    """
    if not strict:
        return MonthParams(month=coerce_int(month))

    raw = {} if month is None else {"month": _clean(month)}
    try:
        parsed = MonthQuery.model_validate(raw)
    except ValidationError as e:
        raise ParamValidationError(_describe(e)) from e
    return MonthParams(month=parsed.month)


def parse_list_params(
    month: Any,
    search: str | None = None,
    page: Any = None,
    per_page: Any = None,
    *,
    strict: bool = True,
) -> ListParams:
    """Validate the parameters of the transaction listing.

    Raises:
        ParamValidationError: in strict mode, if `month` is invalid, `page`
            is below 1 or `perPage` is outside 1-100.
    """
    term = (search or "").strip() or None

    if not strict:
        return ListParams(
            month=coerce_int(month),
            search=term,
            page=_lenient_int(page, DEFAULT_PAGE, MAX_PAGE),
            per_page=_lenient_int(per_page, DEFAULT_PER_PAGE, MAX_PER_PAGE),
        )

    raw: dict[str, Any] = {"search": term}
    if month is not None:
        raw["month"] = _clean(month)
    # blank page/perPage mean "use the default"
    for key, value in (("page", page), ("perPage", per_page)):
        value = _clean(value)
        if value not in (None, ""):
            raw[key] = value

    try:
        parsed = ListQuery.model_validate(raw)
    except ValidationError as e:
        raise ParamValidationError(_describe(e)) from e
    return ListParams(
        month=parsed.month,
        search=parsed.search,
        page=parsed.page,
        per_page=parsed.per_page,
    )
