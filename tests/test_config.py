from __future__ import annotations

from pathlib import Path

import pytest

from transaction_insights.config import Settings, get_settings

ENV_VARS = (
    "MONGO_URI",
    "MONGO_DB",
    "MONGO_COLLECTION",
    "MONGO_TLS",
    "API_URL",
    "SEED_TIMEOUT",
    "API_PREFIX",
    "PORT",
    "CORS_ALLOW_ORIGINS",
    "STRICT_PARAMS",
    "LOG_LEVEL",
    "LOG_PATH",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_settings_dataclass() -> None:
    assert get_settings() == Settings()


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb+srv://cluster.example.net")
    monkeypatch.setenv("API_URL", " https://example.test/feed.json ")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test,")
    monkeypatch.setenv("STRICT_PARAMS", "false")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_PATH", "logs/api.log")

    s = get_settings()

    assert s.mongo_tls is True
    assert s.seed_url == "https://example.test/feed.json"
    assert s.port == 8080
    assert s.cors_allow_origins == ("http://a.test", "http://b.test")
    assert s.strict_params is False
    assert s.log_level == "DEBUG"
    assert s.log_path == Path("logs/api.log")


def test_tls_flag_overrides_uri_default(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_URI", "mongodb+srv://cluster.example.net")
    monkeypatch.setenv("MONGO_TLS", "0")
    assert get_settings().mongo_tls is False


@pytest.mark.parametrize(
    "raw, expected",
    [("/api", "/api"), ("api/", "/api"), ("/v1/api/", "/v1/api"), ("/", "")],
)
def test_api_prefix_is_normalised(monkeypatch, raw, expected) -> None:
    monkeypatch.setenv("API_PREFIX", raw)
    assert get_settings().api_prefix == expected


@pytest.mark.parametrize("name", ["PORT", "SEED_TIMEOUT"])
def test_non_numeric_values_raise(monkeypatch, name) -> None:
    monkeypatch.setenv(name, "soon")
    with pytest.raises(RuntimeError, match=name):
        get_settings()
