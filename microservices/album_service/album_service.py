"""
Album Service Business Logic

Album management business logic layer for the microservice.
Handles validation results, preconditions, no-op detection and error mapping.

Uses dependency injection for testability:
- Repository is injected, not created at import time
"""

from typing import Optional, List
import logging

# Import protocols (no I/O dependencies) - NOT the concrete repository!
from .protocols import (
    AlbumRepositoryProtocol,
    AlbumNotFoundError,
    AlbumCollectionEmptyError,
    AlbumValidationError,
    InvalidAlbumIdError,
    DuplicateAlbumError,
    AlbumServiceError,
)
from .models import (
    Album,
    AlbumUpdateResult,
    ScoreUpdate,
    COMPARISON_FIELDS,
)
from .validators import (
    AlbumValidationResult,
    ScoreValidationResult,
    is_valid_album_id,
)

logger = logging.getLogger(__name__)

# Errors that already carry their response mapping and pass through untouched
_KNOWN_ERRORS = (
    AlbumNotFoundError,
    AlbumCollectionEmptyError,
    AlbumValidationError,
    InvalidAlbumIdError,
    DuplicateAlbumError,
)


# ==================== Album Service ====================

class AlbumService:
    """
    Album management business logic service

    Handles all album-related business operations while delegating
    data access to the repository layer.

    Uses dependency injection for testability - repository is injected,
    not created internally.
    """

    def __init__(self, repository: Optional[AlbumRepositoryProtocol] = None):
        """
        Initialize service with injected dependencies.

        Args:
            repository: Repository (inject mock for testing)
        """
        self.repo = repository  # Will be set by factory if None

    # ==================== Album Queries ====================

    async def list_albums(self) -> List[Album]:
        """
        List every stored album

        Returns:
            List[Album]: All albums

        Raises:
            AlbumCollectionEmptyError: If nothing is stored
            AlbumServiceError: If operation fails
        """
        try:
            albums = await self.repo.find_all()

            if not albums:
                raise AlbumCollectionEmptyError()

            return albums

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to list albums: {e}")
            raise AlbumServiceError(f"Failed to list albums: {str(e)}")

    async def get_album(self, album_id: str) -> Album:
        """
        Get album by ID

        Raises:
            InvalidAlbumIdError: If the id is malformed
            AlbumNotFoundError: If album not found
        """
        self._require_valid_id(album_id)

        try:
            album = await self.repo.find_by_id(album_id)

            if not album:
                raise AlbumNotFoundError(album_id)

            return album

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to get album {album_id}: {e}")
            raise AlbumServiceError(f"Failed to get album: {str(e)}")

    # ==================== Album Lifecycle Operations ====================

    async def create_album(self, validation: AlbumValidationResult) -> Album:
        """
        Create a new album

        Args:
            validation: Result of validating the request body

        Returns:
            Album: Created album with assigned id and default score

        Raises:
            AlbumValidationError: If the body failed validation
            DuplicateAlbumError: If (title, artist) already exists
            AlbumServiceError: If operation fails
        """
        self._require_valid_body(validation)

        try:
            album = await self.repo.insert(validation.album.to_insert_data())

            logger.info(f"Album created: {album.id} ({album.title!r} by {album.artist!r})")
            return album

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to create album: {e}")
            raise AlbumServiceError(f"Failed to create album: {str(e)}")

    async def update_album(
        self,
        album_id: str,
        validation: AlbumValidationResult
    ) -> AlbumUpdateResult:
        """
        Replace an album's fields, or do nothing if they are unchanged

        The stored record is projected to the comparison fields and compared
        with the payload; score only takes part when the payload supplies it.
        An unchanged payload never reaches the repository write.

        Raises:
            AlbumValidationError: If the body failed validation
            InvalidAlbumIdError: If the id is malformed
            AlbumNotFoundError: If album not found
            DuplicateAlbumError: If the new (title, artist) is taken
            AlbumServiceError: If operation fails
        """
        self._require_valid_body(validation)
        self._require_valid_id(album_id)

        try:
            existing = await self.repo.find_by_id_projected(album_id, COMPARISON_FIELDS)
            if not existing:
                raise AlbumNotFoundError(album_id)

            update_data = validation.album.to_update_data()

            if existing.model_dump(include=set(update_data)) == update_data:
                logger.info(f"Album {album_id} unchanged, skipping write")
                return AlbumUpdateResult(modified=False)

            updated_album = await self.repo.update_by_id(album_id, update_data)

            # Deleted between the read and the write
            if not updated_album:
                raise AlbumNotFoundError(album_id)

            logger.info(f"Album updated: {album_id}")
            return AlbumUpdateResult(modified=True, album=updated_album)

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to update album {album_id}: {e}")
            raise AlbumServiceError(f"Failed to update album: {str(e)}")

    async def delete_album(self, album_id: str) -> Album:
        """
        Delete album

        Returns:
            Album: The removed record

        Raises:
            InvalidAlbumIdError: If the id is malformed
            AlbumNotFoundError: If album not found
        """
        self._require_valid_id(album_id)

        try:
            deleted = await self.repo.delete_by_id(album_id)

            if not deleted:
                raise AlbumNotFoundError(album_id)

            logger.info(f"Album deleted: {album_id}")
            return deleted

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to delete album {album_id}: {e}")
            raise AlbumServiceError(f"Failed to delete album: {str(e)}")

    # ==================== Score Operations ====================

    async def update_album_score(
        self,
        album_id: str,
        validation: ScoreValidationResult
    ) -> Album:
        """
        Append a value to an album's score history

        Never touches title/artist, so it cannot trigger the duplicate check.

        Raises:
            AlbumValidationError: If score is missing or not a number
            InvalidAlbumIdError: If the id is malformed
            AlbumNotFoundError: If album not found
            AlbumServiceError: If operation fails
        """
        if not validation.ok:
            logger.warning(f"Rejected score update for {album_id}: {validation.error.msg}")
            raise AlbumValidationError(validation.error.msg)

        self._require_valid_id(album_id)

        try:
            existing = await self.repo.find_by_id_projected(album_id, ("score",))
            if not existing:
                raise AlbumNotFoundError(album_id)

            # Re-validate the whole history before writing it back
            score_update = ScoreUpdate(score=[*(existing.score or []), validation.score])

            updated_album = await self.repo.update_by_id(album_id, score_update.model_dump())
            if not updated_album:
                raise AlbumNotFoundError(album_id)

            logger.info(f"Album {album_id} score appended: {validation.score}")
            return updated_album

        except _KNOWN_ERRORS:
            raise
        except Exception as e:
            logger.error(f"Failed to update score of album {album_id}: {e}")
            raise AlbumServiceError(f"Failed to update album score: {str(e)}")

    # ==================== Validation Helpers ====================

    def _require_valid_body(self, validation: AlbumValidationResult) -> None:
        """Reject a failed validation result before any storage access"""
        if not validation.ok:
            logger.warning(f"Rejected album body: {validation.error.msg}")
            raise AlbumValidationError(validation.error.msg)

    def _require_valid_id(self, album_id: str) -> None:
        if not is_valid_album_id(album_id):
            logger.warning(f"Rejected malformed album id: {album_id!r}")
            raise InvalidAlbumIdError(album_id)

    # ==================== Health Check ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        return await self.repo.check_connection()
