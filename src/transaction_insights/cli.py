"""Command-line interface for seeding, serving and ad-hoc reports.

Provides subcommands: `seed`, `serve`, and `report`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace.
"""
from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from typing import Any

from transaction_insights.aggregate import reports
from transaction_insights.api.envelope import success
from transaction_insights.config import get_settings
from transaction_insights.db import connect
from transaction_insights.errors import InsightsError
from transaction_insights.ingest.seed import seed_transactions
from transaction_insights.logging_config import configure_logging
from transaction_insights.query.params import parse_list_params, parse_month_params

log = logging.getLogger(__name__)

REPORT_KINDS = ("transactions", "statistics", "bar-chart", "pie-chart", "combined")


# --------------------------------------------------
# SEED
# --------------------------------------------------
def cmd_seed(args: argparse.Namespace) -> None:
    """Replace the transactions collection with the upstream feed.

    Args:
        args: argparse namespace with an optional `url` override.
    """
    s = get_settings()
    if args.url:
        s = replace(s, seed_url=args.url)

    client, db = connect(s)
    try:
        result = seed_transactions(db, s)
    finally:
        client.close()

    print(f"Inserted {result.inserted} transactions ({result.rejected} rejected)")


# --------------------------------------------------
# SERVE
# --------------------------------------------------
def cmd_serve(args: argparse.Namespace) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    s = get_settings()
    uvicorn.run(
        "transaction_insights.api.app:create_app",
        factory=True,
        host=args.host,
        port=args.port or s.port,
        reload=args.reload,
        log_config=None,
    )


# --------------------------------------------------
# REPORT
# --------------------------------------------------
def run_report(collection: Any, args: argparse.Namespace, strict: bool = True) -> dict[str, Any]:
    """Compute the requested report and wrap it in the success envelope."""
    if args.kind == "transactions":
        params = parse_list_params(
            args.month, args.search, args.page, args.per_page, strict=strict
        )
        return success(reports.list_transactions(collection, params))

    match = parse_month_params(args.month, strict=strict).predicate
    if args.kind == "statistics":
        return success(reports.statistics(collection, match))
    if args.kind == "bar-chart":
        return success(reports.bar_chart(collection, match))
    if args.kind == "pie-chart":
        return success(reports.pie_chart(collection, match))
    return success(reports.combined_report(collection, match))


def cmd_report(args: argparse.Namespace) -> None:
    """Print one report as JSON."""
    s = get_settings()
    client, db = connect(s)
    try:
        payload = run_report(db[s.mongo_collection], args, strict=s.strict_params)
    finally:
        client.close()
    print(json.dumps(payload, indent=2))


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    Returns:
        Configured argparse.ArgumentParser instance.
    """
    p = argparse.ArgumentParser(prog="transaction-insights")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_seed = sub.add_parser("seed")
    p_seed.add_argument("--url", default=None, help="override API_URL")

    p_serve = sub.add_parser("serve")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.add_argument("--reload", action="store_true")

    p_report = sub.add_parser("report")
    p_report.add_argument("kind", choices=REPORT_KINDS)
    p_report.add_argument("--month", required=True)
    p_report.add_argument("--search", default=None)
    p_report.add_argument("--page", default=None)
    p_report.add_argument("--per-page", dest="per_page", default=None)

    return p


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    s = get_settings()
    configure_logging(s.log_path, s.log_level)

    args = build_parser().parse_args(argv)

    try:
        if args.cmd == "seed":
            cmd_seed(args)
        elif args.cmd == "serve":
            cmd_serve(args)
        elif args.cmd == "report":
            cmd_report(args)
        else:
            raise SystemExit(2)
    except InsightsError as e:
        log.error("%s", e.message)
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
