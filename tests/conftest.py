from __future__ import annotations

import sys
from pathlib import Path

import pytest

BASE_DIR = Path(__file__).resolve().parents[1]
SDK_SRC = BASE_DIR / "src"

sys.path.insert(0, str(SDK_SRC))

from stockquery_sdk.auth_store import SessionStore  # noqa: E402
from stockquery_sdk.config import ClientConfig  # noqa: E402
from stockquery_sdk.http_client import HttpClient  # noqa: E402

API_BASE_URL = "https://api.example.com"


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(env_name="test", api_base_url=API_BASE_URL, retry_backoff_seconds=0)


@pytest.fixture
def http(config: ClientConfig) -> HttpClient:
    return HttpClient(config)


@pytest.fixture
def store(tmp_path: Path) -> SessionStore:
    return SessionStore(base_dir=tmp_path / "session")
