"""
Component Test Layer Configuration

Tests AlbumService with the in-memory repository; no database required.

Usage:
    pytest tests/component -v
"""
import pytest

from tests.component.mocks import MockAlbumRepository


# =============================================================================
# Repository Mocks
# =============================================================================

@pytest.fixture
def mock_repository() -> MockAlbumRepository:
    """In-memory album repository"""
    return MockAlbumRepository()


# =============================================================================
# Service Under Test
# =============================================================================

@pytest.fixture
def album_service(mock_repository):
    """Create album service with mocked repository"""
    from microservices.album_service.album_service import AlbumService

    return AlbumService(repository=mock_repository)
