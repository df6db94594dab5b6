"""
API test fixtures.

The app runs against a file-backed SQLite database created by the app's own
lifespan, with fake providers injected through the service cache dependency.

Dependencies: pytest, fastapi.testclient
System role: HTTP-level test harness
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from docchat.api.deps import get_service_cache, get_settings_dependency
from docchat.boundary.db.connection import get_async_engine
from docchat.configs import get_settings
from docchat.main import create_app


class FakeServiceCache:
    """Service cache holding fake providers."""

    def __init__(self, embedder, completion, ocr) -> None:
        self.embedder = embedder
        self.completion = completion
        self.ocr = ocr

    async def aclose(self) -> None:
        return None


def _clear_cached_settings() -> None:
    get_settings.cache_clear()
    get_settings_dependency.cache_clear()
    get_async_engine.cache_clear()


@pytest.fixture
def service_cache(fake_embedder, fake_completion, fake_ocr) -> FakeServiceCache:
    return FakeServiceCache(fake_embedder, fake_completion, fake_ocr)


@pytest.fixture
def client(tmp_path, monkeypatch, service_cache) -> Iterator[TestClient]:
    """
    TestClient with a fresh database per test.

    Yields:
        TestClient: Client whose lifespan created the tables
    """
    monkeypatch.setenv("POSTGRES_URL", f"sqlite+aiosqlite:///{tmp_path / 'docchat.db'}")
    monkeypatch.setenv("POSTGRES_AUTO_CREATE_TABLES", "true")
    monkeypatch.setenv("PROVIDER_EMBEDDING_DIMENSION", "3")
    monkeypatch.setenv("INGESTION_INTER_BATCH_DELAY_SECONDS", "0")
    _clear_cached_settings()

    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: service_cache
    with TestClient(app) as test_client:
        yield test_client

    _clear_cached_settings()
