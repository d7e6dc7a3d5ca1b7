"""Cleaning and validation of fetched transaction records.

Records are loaded into a pandas DataFrame, normalized column by column
(text trimming, numeric price, boolean ``sold``, UTC ``dateOfSale``), then
validated row by row with `models.TransactionRecord`. Rows that fail are
counted and dropped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd
from pydantic import ValidationError

from transaction_insights.models import TransactionRecord

log = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("title", "price", "category", "sold", "dateOfSale")

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}
_WHITESPACE = re.compile(r"\s+")


@dataclass
class CleanResult:
    """Outcome of `clean_records`.

    Attributes:
        documents: Mongo-ready documents, in upstream order.
        rejected: Number of upstream rows dropped.
    """
    documents: list[dict[str, Any]] = field(default_factory=list)
    rejected: int = 0


def _to_bool(value: Any) -> bool | None:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE_STRINGS:
            return True
        if s in _FALSE_STRINGS:
            return False
    return None


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _squash(value: Any) -> Any:
    return _WHITESPACE.sub(" ", value.strip()) if isinstance(value, str) else value


def clean_frame(pdf: pd.DataFrame) -> pd.DataFrame:
    """Normalize a DataFrame of raw records.

    Missing required columns are added as empty. Rows without a parseable
    ``dateOfSale`` or a finite ``price`` are removed.

    Returns:
        Cleaned DataFrame with object dtype and None for missing values.
    """
    pdf = pdf.copy()
    for col in REQUIRED_COLUMNS:
        if col not in pdf.columns:
            pdf[col] = None

    # -----------------------------
    # Text fields
    # -----------------------------
    for col in ("title", "category"):
        pdf[col] = pdf[col].map(_squash)
    if "description" in pdf.columns:
        pdf["description"] = pdf["description"].map(_strip)

    # -----------------------------
    # Price, sold flag, date
    # -----------------------------
    pdf["price"] = pd.to_numeric(pdf["price"], errors="coerce")
    pdf["sold"] = pdf["sold"].map(_to_bool)
    pdf["dateOfSale"] = pd.to_datetime(
        pdf["dateOfSale"],
        errors="coerce",
        utc=True,
        format="ISO8601",
    )

    keep = pdf["dateOfSale"].notna() & np.isfinite(pdf["price"].astype(float))
    dropped = int((~keep).sum())
    if dropped:
        log.warning("Dropping %d rows without a valid dateOfSale or price", dropped)

    pdf = pdf[keep].astype(object)
    return pdf.where(pd.notna(pdf), None)


def validate_frame(pdf: pd.DataFrame) -> tuple[list[dict[str, Any]], int]:
    """Validate cleaned rows with `TransactionRecord`.

    Returns:
        A tuple of (list_of_documents, bad_count).
    """
    good: list[dict[str, Any]] = []
    bad = 0

    for rec in pdf.to_dict(orient="records"):
        ts = rec.get("dateOfSale")
        if isinstance(ts, pd.Timestamp):
            rec["dateOfSale"] = ts.to_pydatetime()
        try:
            good.append(TransactionRecord.model_validate(rec).to_document())
        except ValidationError as e:
            log.debug("Rejected record id=%s: %s", rec.get("id"), e)
            bad += 1

    return good, bad


def clean_records(records: list[dict[str, Any]]) -> CleanResult:
    """Clean and validate raw upstream records."""
    if not records:
        return CleanResult()

    pdf = clean_frame(pd.DataFrame.from_records(records))
    documents, bad = validate_frame(pdf)
    rejected = len(records) - len(pdf) + bad

    if rejected:
        log.warning("Rejected %d of %d upstream records", rejected, len(records))
    return CleanResult(documents=documents, rejected=rejected)
