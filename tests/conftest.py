from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ADMIN_PW = "letmein-test"


def _reset_runtime_caches() -> None:
    from core.config import get_settings
    from core.db import reset_engine

    get_settings.cache_clear()
    reset_engine()


def _purge_api_modules() -> None:
    for name in ["api.main", "api.routes", "api.ratelimit"]:
        sys.modules.pop(name, None)


def _use_database(tmp_path: Path, monkeypatch, env_overrides: dict[str, str] | None = None) -> None:
    db_path = tmp_path / "region_site_test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{db_path}")
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PW)
    monkeypatch.delenv("MOCK_DATA", raising=False)
    for key, value in (env_overrides or {}).items():
        monkeypatch.setenv(key, value)

    _reset_runtime_caches()

    from core.db import create_schema

    create_schema()


@pytest.fixture
def store(tmp_path, monkeypatch):
    from core.store import DocumentStore

    _use_database(tmp_path, monkeypatch)
    yield DocumentStore()
    _reset_runtime_caches()


@pytest.fixture
def build_client(tmp_path, monkeypatch):
    def _build(env_overrides: dict[str, str] | None = None) -> TestClient:
        _use_database(tmp_path, monkeypatch, env_overrides)
        _purge_api_modules()
        from api.main import create_app

        return TestClient(create_app())

    yield _build
    _purge_api_modules()
    _reset_runtime_caches()


@pytest.fixture
def client(build_client):
    with build_client() as c:
        yield c
