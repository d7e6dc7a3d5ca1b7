"""Seed loader: replace the transactions collection with the upstream feed.

fetch → clean/validate → atomic replace. The live collection is swapped in
one rename, so a failed load leaves the previous data in place and two
concurrent seeds never interleave their writes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pymongo.database import Database
from pymongo.errors import PyMongoError

from transaction_insights.config import Settings
from transaction_insights.db import replace_collection
from transaction_insights.errors import SeedError
from transaction_insights.ingest.fetch_source import fetch_transactions
from transaction_insights.ingest.transform import clean_records

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedResult:
    """Counts reported by `seed_transactions`."""
    inserted: int
    rejected: int


def seed_transactions(db: Database[dict[str, Any]], settings: Settings) -> SeedResult:
    """Reload the transactions collection from `settings.seed_url`.

    Upstream ``id`` values are preserved; Mongo ``_id`` values are new on
    every run.

    Raises:
        SeedError: if the fetch fails or the database write fails.
    """
    raw = fetch_transactions(settings.seed_url, timeout=settings.seed_timeout)
    cleaned = clean_records(raw)

    try:
        inserted = replace_collection(db, settings.mongo_collection, cleaned.documents)
    except PyMongoError as e:
        raise SeedError(f"Failed to load transactions: {e}") from e

    log.info(
        "Seed complete: inserted=%d rejected=%d collection=%s",
        inserted,
        cleaned.rejected,
        settings.mongo_collection,
    )
    return SeedResult(inserted=inserted, rejected=cleaned.rejected)
