"""MongoDB helpers and the atomic collection replace used by the seed loader.

Centralizes creation of Mongo clients, index definitions and the
staging-then-rename strategy that swaps in a freshly loaded collection.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator
from uuid import uuid4

import certifi
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from transaction_insights.config import Settings

log = logging.getLogger(__name__)

BATCH_SIZE = 1000


def get_client(uri: str, tls: bool = False) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    Args:
        uri: MongoDB connection URI.
        tls: Connect over TLS using the certifi CA bundle.

    Returns:
        Configured MongoClient instance. The client connects lazily.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
        "tz_aware": True,
    }
    if tls:
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


def connect(settings: Settings) -> tuple[MongoClient, Database[dict[str, Any]]]:
    """Build a client and database handle from `settings`."""
    client = get_client(settings.mongo_uri, tls=settings.mongo_tls)
    return client, get_db(client, settings.mongo_db)


def ensure_indexes(collection: Collection[dict[str, Any]]) -> None:
    """Create the indexes backing pagination order and month filtering."""
    collection.create_index([("id", ASCENDING), ("_id", ASCENDING)])
    collection.create_index([("dateOfSale", ASCENDING)])
    collection.create_index([("category", ASCENDING)])


def _chunks(docs: Iterable[dict[str, Any]], size: int) -> Iterator[list[dict[str, Any]]]:
    """Yield lists of documents in batches of `size`."""
    batch: list[dict[str, Any]] = []
    for doc in docs:
        batch.append(doc)
        if len(batch) >= size:
            yield batch
            batch = []
    if batch:
        yield batch


def replace_collection(
    db: Database[dict[str, Any]],
    name: str,
    docs: Iterable[dict[str, Any]],
    batch_size: int = BATCH_SIZE,
) -> int:
    """Atomically replace collection `name` with `docs`.

    Documents are written to a uniquely named staging collection which is
    then renamed over the live one with ``dropTarget=True``. Readers see
    either the previous set or the complete new one. On failure the staging
    collection is dropped and the live collection is untouched.

    Args:
        db: Target database.
        name: Live collection name.
        docs: Documents to load.
        batch_size: Number of documents per insert_many call.

    Returns:
        Number of documents inserted.

    Raises:
        PyMongoError: if any insert, index build or the rename fails.
    """
    staging_name = f"{name}__staging_{uuid4().hex}"
    staging = db[staging_name]
    inserted = 0

    try:
        for batch in _chunks(docs, batch_size):
            result = staging.insert_many(batch, ordered=True)
            inserted += len(result.inserted_ids)
        # also materializes the staging collection when there are no docs
        ensure_indexes(staging)
        staging.rename(name, dropTarget=True)
    except PyMongoError:
        log.warning("Replace of %s failed; dropping %s", name, staging_name)
        db.drop_collection(staging_name)
        raise

    log.info("Replaced collection %s with %d documents", name, inserted)
    return inserted
