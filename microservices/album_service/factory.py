"""
Album Service Factory

Factory functions for creating service instances with real dependencies.
This is the ONLY place that imports I/O-dependent modules (repository).

Usage:
    from .factory import create_album_service
    service = create_album_service(settings)
"""
from typing import Optional

from core.config import AlbumServiceSettings, get_settings

from .album_service import AlbumService


def create_album_service(
    settings: Optional[AlbumServiceSettings] = None,
) -> AlbumService:
    """
    Create AlbumService with real dependencies.

    This function imports the real repository (which has I/O dependencies).
    Use this in production, NOT in tests.

    Args:
        settings: Optional settings (defaults to environment)

    Returns:
        AlbumService: Configured service instance with real repository
    """
    # Import real repository here (not at module level)
    from .album_repository import AlbumRepository

    settings = settings or get_settings()
    repository = AlbumRepository(config=settings.infrastructure)

    return AlbumService(repository=repository)
