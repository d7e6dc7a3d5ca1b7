"""Transaction routes.

All routes are GET and answer with the envelope from `api.envelope`.
Query parameters are taken as raw strings and handed to
`query.params`, which validates them strictly or coerces them leniently
depending on `Settings.strict_params`.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from pymongo.collection import Collection
from pymongo.database import Database

from transaction_insights.aggregate import reports
from transaction_insights.api import envelope
from transaction_insights.config import Settings
from transaction_insights.ingest.seed import seed_transactions
from transaction_insights.query.params import parse_list_params, parse_month_params

log = logging.getLogger(__name__)

router = APIRouter()


# --------------------------------------------------
# Dependencies
# --------------------------------------------------
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database[dict[str, Any]]:
    return request.app.state.db


def get_collection(
    settings: Settings = Depends(get_app_settings),
    db: Database[dict[str, Any]] = Depends(get_database),
) -> Collection[dict[str, Any]]:
    return db[settings.mongo_collection]


# --------------------------------------------------
# Routes
# --------------------------------------------------
@router.get("/initialize")
def initialize(
    settings: Settings = Depends(get_app_settings),
    db: Database[dict[str, Any]] = Depends(get_database),
) -> dict[str, Any]:
    """Reload the collection from the upstream feed."""
    result = seed_transactions(db, settings)
    log.info("Initialized with %d transactions (%d rejected)", result.inserted, result.rejected)
    return envelope.message("Database initialized successfully")


@router.get("/transactions")
def list_transactions(
    month: Optional[str] = None,
    search: Optional[str] = None,
    page: Optional[str] = None,
    per_page: Optional[str] = Query(None, alias="perPage"),
    settings: Settings = Depends(get_app_settings),
    collection: Collection[dict[str, Any]] = Depends(get_collection),
) -> dict[str, Any]:
    """One page of the month's transactions, optionally searched."""
    params = parse_list_params(month, search, page, per_page, strict=settings.strict_params)
    return envelope.success(reports.list_transactions(collection, params))


@router.get("/statistics")
def statistics(
    month: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
    collection: Collection[dict[str, Any]] = Depends(get_collection),
) -> dict[str, Any]:
    params = parse_month_params(month, strict=settings.strict_params)
    return envelope.success(reports.statistics(collection, params.predicate))


@router.get("/bar-chart")
def bar_chart(
    month: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
    collection: Collection[dict[str, Any]] = Depends(get_collection),
) -> dict[str, Any]:
    params = parse_month_params(month, strict=settings.strict_params)
    return envelope.success(reports.bar_chart(collection, params.predicate))


@router.get("/pie-chart")
def pie_chart(
    month: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
    collection: Collection[dict[str, Any]] = Depends(get_collection),
) -> dict[str, Any]:
    params = parse_month_params(month, strict=settings.strict_params)
    return envelope.success(reports.pie_chart(collection, params.predicate))


@router.get("/combined-data")
def combined_data(
    month: Optional[str] = None,
    settings: Settings = Depends(get_app_settings),
    collection: Collection[dict[str, Any]] = Depends(get_collection),
) -> dict[str, Any]:
    """Statistics, bar chart and pie chart in one payload."""
    params = parse_month_params(month, strict=settings.strict_params)
    return envelope.success(reports.combined_report(collection, params.predicate))
