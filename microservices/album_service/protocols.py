"""
Album Service Protocols (Interfaces)

These interfaces define contracts for dependency injection.
NO import-time I/O dependencies - safe to import anywhere.
"""
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

# Import only models (no I/O dependencies)
from .models import Album, AlbumProjection


DUPLICATE_ALBUM_MESSAGE = "Duplicate album entry. This album already exists."
EMPTY_COLLECTION_MESSAGE = "There are no documents stored in the database."


# Custom exceptions - defined here to avoid importing repository
class AlbumNotFoundError(Exception):
    """Album not found error"""

    def __init__(self, album_id: str):
        self.album_id = album_id
        super().__init__(f"The document with ID {album_id} was not found.")


class AlbumCollectionEmptyError(Exception):
    """No albums stored at all"""

    def __init__(self, message: str = EMPTY_COLLECTION_MESSAGE):
        super().__init__(message)


class AlbumValidationError(Exception):
    """Album request body validation error"""
    pass


class InvalidAlbumIdError(Exception):
    """Album identifier is malformed"""

    def __init__(self, album_id: str):
        self.album_id = album_id
        super().__init__(f"The ID {album_id} is not a valid album identifier.")


class DuplicateAlbumError(Exception):
    """(title, artist) already taken by another album"""

    def __init__(self, message: str = DUPLICATE_ALBUM_MESSAGE):
        super().__init__(message)


class AlbumServiceError(Exception):
    """Base exception for album service errors"""
    pass


class RequestBodyTooLargeError(Exception):
    """Request body exceeds the configured byte limit"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"The JSON body exceeds the limit of {limit} bytes.")


@runtime_checkable
class AlbumRepositoryProtocol(Protocol):
    """
    Interface for Album Repository.

    Implementations must provide these methods.
    Used for dependency injection to enable testing.

    insert() and update_by_id() raise DuplicateAlbumError when the
    (title, artist) uniqueness constraint is violated.
    """

    # ==================== Album Operations ====================

    async def find_all(self) -> List[Album]:
        """List every stored album"""
        ...

    async def find_by_id(self, album_id: str) -> Optional[Album]:
        """Get album by id"""
        ...

    async def find_by_id_projected(
        self, album_id: str, fields: Sequence[str]
    ) -> Optional[AlbumProjection]:
        """Get only the given fields of an album"""
        ...

    async def insert(self, album_data: Dict[str, Any]) -> Album:
        """Insert a new album, assigning its id and timestamps"""
        ...

    async def update_by_id(
        self, album_id: str, update_data: Dict[str, Any]
    ) -> Optional[Album]:
        """Update the given fields, returning the post-update record"""
        ...

    async def delete_by_id(self, album_id: str) -> Optional[Album]:
        """Atomically find and delete an album"""
        ...

    # ==================== Lifecycle ====================

    async def initialize(self) -> None:
        """Open connections and ensure the collection exists"""
        ...

    async def close(self) -> None:
        """Release connections"""
        ...

    # ==================== Utility Methods ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        ...
