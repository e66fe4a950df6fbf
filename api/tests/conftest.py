from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the service modules importable when running tests from the repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import main  # noqa: E402
import sql_main  # noqa: E402
from core.config import Settings  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def dictionary_app():
    return main.create_app(Settings(port=3000, base_path="", max_body_bytes=1024))


@pytest.fixture
def dictionary_client(dictionary_app) -> TestClient:
    return TestClient(dictionary_app)


@pytest.fixture
def sql_app():
    return sql_main.create_app(Settings(port=3001, base_path="/api"), connect=False)


@pytest.fixture
def sql_client(sql_app) -> TestClient:
    return TestClient(sql_app)
