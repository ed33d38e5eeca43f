from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable

from dotenv import load_dotenv

DEFAULT_BASE = "DEPOSEVN"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 10.0
    retries: int = 0
    retry_backoff_seconds: float = 0.3
    max_connections: int = 10
    verify_ssl: bool = True
    default_base: str = DEFAULT_BASE
    app_name: str = "stockquery"
    log_level: str = "INFO"

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def timeout(self) -> tuple[float, float]:
        return (self.connect_timeout_seconds, self.read_timeout_seconds)


def _require(values: dict[str, str | None], required: Iterable[str]) -> None:
    missing = [key for key in required if not values.get(key)]
    if missing:
        raise ConfigError(f"Missing required config values: {', '.join(missing)}")


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("STOCKQUERY_ENV") or "dev").strip()
    env_key = env_name.upper()

    api_base_url = (
        (os.getenv(f"STOCKQUERY_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("STOCKQUERY_API_BASE_URL") or "").strip()
    )

    timeout_seconds = _read_float("STOCKQUERY_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid STOCKQUERY_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    connect_timeout_seconds = _read_float(
        "STOCKQUERY_CONNECT_TIMEOUT_SECONDS", str(min(timeout_seconds, 5.0))
    )
    _validate(
        connect_timeout_seconds > 0,
        (
            "Invalid STOCKQUERY_CONNECT_TIMEOUT_SECONDS: "
            f"expected > 0, got {connect_timeout_seconds}"
        ),
    )

    read_timeout_seconds = _read_float(
        "STOCKQUERY_READ_TIMEOUT_SECONDS",
        str(max(timeout_seconds, connect_timeout_seconds)),
    )
    _validate(
        read_timeout_seconds > 0,
        f"Invalid STOCKQUERY_READ_TIMEOUT_SECONDS: expected > 0, got {read_timeout_seconds}",
    )

    # One-shot by default; retries only cover transport failures of read-only calls.
    retries = _read_int("STOCKQUERY_RETRIES", "0")
    _validate(retries >= 0, f"Invalid STOCKQUERY_RETRIES: expected >= 0, got {retries}")

    retry_backoff_seconds = _read_float("STOCKQUERY_RETRY_BACKOFF_SECONDS", "0.3")
    _validate(
        retry_backoff_seconds >= 0,
        (
            "Invalid STOCKQUERY_RETRY_BACKOFF_SECONDS: "
            f"expected >= 0, got {retry_backoff_seconds}"
        ),
    )

    max_connections = _read_int("STOCKQUERY_MAX_CONNECTIONS", "10")
    _validate(
        max_connections >= 1,
        f"Invalid STOCKQUERY_MAX_CONNECTIONS: expected >= 1, got {max_connections}",
    )

    verify_ssl = _coerce_bool(os.getenv("STOCKQUERY_VERIFY_SSL"), True)

    default_base = (os.getenv("STOCKQUERY_DEFAULT_BASE") or DEFAULT_BASE).strip()

    app_name = (os.getenv("STOCKQUERY_APP_NAME") or "stockquery").strip()
    log_level = (os.getenv("STOCKQUERY_LOG_LEVEL") or "INFO").strip().upper()
    _validate(
        log_level in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
        f"Invalid STOCKQUERY_LOG_LEVEL: unknown level {log_level!r}",
    )

    values = {"STOCKQUERY_API_BASE_URL": api_base_url}
    _require(values, ["STOCKQUERY_API_BASE_URL"])

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout_seconds,
        read_timeout_seconds=read_timeout_seconds,
        retries=retries,
        retry_backoff_seconds=retry_backoff_seconds,
        max_connections=max_connections,
        verify_ssl=verify_ssl,
        default_base=default_base,
        app_name=app_name,
        log_level=log_level,
    )
