"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (database).
"""

from .album_repository_mock import MockAlbumRepository

__all__ = [
    'MockAlbumRepository',
]
