from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError

from transaction_insights.models import ListQuery, MonthQuery, Transaction, TransactionRecord

RECORD = {
    "id": 7,
    "title": "White Gold Plated Princess",
    "price": 9.99,
    "description": None,
    "category": "jewelery",
    "sold": True,
    "dateOfSale": datetime(2022, 2, 1, 5, 30, tzinfo=timezone(timedelta(hours=5, minutes=30))),
    "unexpected": "dropped",
}


def test_transaction_record_normalizes_to_document() -> None:
    doc = TransactionRecord.model_validate(RECORD).to_document()
    assert doc["dateOfSale"] == datetime(2022, 2, 1, tzinfo=timezone.utc)
    assert doc["description"] == ""
    assert doc["image"] is None
    assert "unexpected" not in doc
    assert "_id" not in doc


def test_transaction_record_rejects_non_finite_price() -> None:
    with pytest.raises(ValidationError):
        TransactionRecord.model_validate({**RECORD, "price": float("nan")})


def test_month_query_bounds() -> None:
    assert MonthQuery.model_validate({"month": "12"}).month == 12
    for bad in ("0", "13", "March"):
        with pytest.raises(ValidationError):
            MonthQuery.model_validate({"month": bad})


def test_list_query_uses_camel_case_per_page() -> None:
    q = ListQuery.model_validate({"month": 3, "perPage": "25"})
    assert (q.page, q.per_page) == (1, 25)
    with pytest.raises(ValidationError):
        ListQuery.model_validate({"month": 3, "perPage": 101})
    with pytest.raises(ValidationError):
        ListQuery.model_validate({"month": 3, "limit": 5})


def test_transaction_stringifies_object_id() -> None:
    oid = ObjectId()
    t = Transaction.model_validate({**RECORD, "description": "ring", "_id": oid})
    dumped = t.model_dump(mode="json", by_alias=True)
    assert dumped["_id"] == str(oid)
    assert dumped["dateOfSale"].startswith("2022-02-01")
