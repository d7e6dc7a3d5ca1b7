"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (a `.env` file in the project root is loaded
first) and validates the numeric ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Container for service configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Target MongoDB database name.
        mongo_collection: Name of the live transactions collection.
        mongo_tls: Whether to connect with TLS (certifi CA bundle).
        seed_url: Upstream URL returning the transaction JSON array.
        seed_timeout: Timeout in seconds for the upstream fetch.
        api_prefix: Prefix under which the HTTP routes are mounted.
        port: Port used by the `serve` command.
        cors_allow_origins: Origins allowed by the CORS middleware.
        strict_params: Reject malformed query parameters with a 400 instead
            of silently coercing them.
        log_level: Root logging level name.
        log_path: Optional log file.
    """
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "transaction_insights"
    mongo_collection: str = "transactions"
    mongo_tls: bool = False
    seed_url: str = ""
    seed_timeout: float = 60.0
    api_prefix: str = "/api"
    port: int = 5002
    cors_allow_origins: tuple[str, ...] = ("*",)
    strict_params: bool = True
    log_level: str = "INFO"
    log_path: Path | None = None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_number(name: str, default: str, cast: type) -> int | float:
    raw = os.getenv(name, default).strip() or default
    try:
        return cast(raw)
    except ValueError as e:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from e


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `PORT` or `SEED_TIMEOUT` is not numeric.
    """
    mongo_uri = os.getenv("MONGO_URI", "mongodb://localhost:27017").strip()
    origins = os.getenv("CORS_ALLOW_ORIGINS", "*")
    log_path = os.getenv("LOG_PATH", "").strip()

    prefix = "/" + os.getenv("API_PREFIX", "/api").strip().strip("/")

    return Settings(
        mongo_uri=mongo_uri,
        mongo_db=os.getenv("MONGO_DB", "transaction_insights"),
        mongo_collection=os.getenv("MONGO_COLLECTION", "transactions"),
        mongo_tls=_env_flag("MONGO_TLS", mongo_uri.startswith("mongodb+srv://")),
        seed_url=os.getenv("API_URL", "").strip(),
        seed_timeout=float(_env_number("SEED_TIMEOUT", "60", float)),
        api_prefix="" if prefix == "/" else prefix,
        port=int(_env_number("PORT", "5002", int)),
        cors_allow_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
        strict_params=_env_flag("STRICT_PARAMS", True),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        log_path=Path(log_path) if log_path else None,
    )
