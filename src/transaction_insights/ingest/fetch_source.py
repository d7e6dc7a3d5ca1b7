"""Download the upstream transaction feed.

The upstream is a plain HTTP endpoint returning a JSON array of transaction
objects.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from transaction_insights.errors import SeedError

log = logging.getLogger(__name__)


def fetch_transactions(url: str, timeout: float = 60.0) -> list[dict[str, Any]]:
    """Fetch and decode the upstream JSON array.

    Args:
        url: Upstream feed URL.
        timeout: Request timeout in seconds.

    Returns:
        List of raw transaction dicts as published upstream.

    Raises:
        SeedError: if the URL is empty, the request fails or returns a
            non-2xx status, or the body is not a JSON array of objects.
    """
    if not url:
        raise SeedError("API_URL is not configured")

    log.info("Downloading %s", url)
    try:
        r = requests.get(url, headers={"Accept": "application/json"}, timeout=timeout)
        r.raise_for_status()
        payload = r.json()
    except requests.RequestException as e:
        raise SeedError(f"Failed to fetch transactions: {e}") from e
    except ValueError as e:
        raise SeedError(f"Upstream response is not valid JSON: {e}") from e

    if not isinstance(payload, list) or not all(isinstance(x, dict) for x in payload):
        raise SeedError("Upstream response must be a JSON array of objects")

    log.info("Fetched %d transactions", len(payload))
    return payload
