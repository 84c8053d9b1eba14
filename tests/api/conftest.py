"""
API Test Layer Configuration

HTTP contract tests against the FastAPI app, served in-process through
httpx's ASGI transport. Storage is the in-memory mock repository, injected
by overriding the get_album_service dependency (lifespan is not run).

Usage:
    pytest tests/api -v
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from tests.component.mocks import MockAlbumRepository


BASE_URL = "http://testserver"


@pytest.fixture
def api_repository() -> MockAlbumRepository:
    """In-memory repository behind the app"""
    return MockAlbumRepository()


@pytest.fixture
def album_app(api_repository):
    """FastAPI app wired to the mock repository"""
    from microservices.album_service.album_service import AlbumService
    from microservices.album_service.main import app, get_album_service

    service = AlbumService(repository=api_repository)
    app.dependency_overrides[get_album_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def http_client(album_app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Raw HTTP client; app exceptions become 500 responses instead of raising"""
    transport = httpx.ASGITransport(app=album_app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url=BASE_URL) as client:
        yield client


@pytest_asyncio.fixture
async def album_api(http_client):
    """Typed album service client over the in-process app"""
    from microservices.album_service.client import AlbumServiceClient

    return AlbumServiceClient(base_url=BASE_URL, client=http_client, base_path="/album")


class APIAssertions:
    """Envelope assertions shared by API tests"""

    @staticmethod
    def assert_success(envelope, status_code: int = 200):
        assert envelope["status_code"] == status_code, envelope
        assert envelope["ok"] is True

    @staticmethod
    def assert_failure(envelope, status_code: int, msg: str = None):
        assert envelope["status_code"] == status_code, envelope
        assert envelope["ok"] is False
        assert "data" not in envelope
        if msg is not None:
            assert envelope["msg"] == msg


@pytest.fixture
def api_assert() -> APIAssertions:
    return APIAssertions()
