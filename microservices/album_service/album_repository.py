"""
Album Repository - Data access layer for album service
Handles database operations for the album collection

Uses an asyncpg connection pool against PostgreSQL. The (title, artist)
uniqueness constraint is a unique index; violations surface as
DuplicateAlbumError.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import asyncpg

from core.config import InfraConfig, get_settings

from .models import Album, AlbumProjection, generate_album_id
from .protocols import DuplicateAlbumError

logger = logging.getLogger(__name__)

# Storage columns that may be projected or written
WRITABLE_COLUMNS = ("title", "year", "artist", "photo_url", "score")


class AlbumRepository:
    """Album repository - data access layer for album operations"""

    def __init__(self, config: Optional[InfraConfig] = None, pool: Optional[asyncpg.Pool] = None):
        """Initialize album repository with PostgreSQL settings"""
        self.config = config or get_settings().infrastructure
        self._pool = pool
        # Table names (album schema)
        self.schema = self.config.postgres_schema
        self.albums_table = "albums"

    @property
    def _table(self) -> str:
        return f"{self.schema}.{self.albums_table}"

    # ==================== Lifecycle ====================

    async def initialize(self) -> None:
        """Create the pool and ensure table and unique index exist"""
        await self._get_pool()
        await self.ensure_schema()

    async def close(self) -> None:
        """Close the connection pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
            logger.info("PostgreSQL pool closed")

    async def _get_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            self._pool = await asyncpg.create_pool(
                host=self.config.postgres_host,
                port=self.config.postgres_port,
                user=self.config.postgres_user,
                password=self.config.postgres_password,
                database=self.config.postgres_db,
                min_size=self.config.postgres_pool_min,
                max_size=self.config.postgres_pool_max,
                init=self._init_connection,
            )
            logger.info(
                f"PostgreSQL pool created: {self.config.postgres_host}:"
                f"{self.config.postgres_port}/{self.config.postgres_db}"
            )
        return self._pool

    @staticmethod
    async def _init_connection(conn: asyncpg.Connection) -> None:
        # Score history is stored as JSONB; exchange it as Python lists
        await conn.set_type_codec(
            "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
        )

    async def ensure_schema(self) -> None:
        """Create schema, table and the (title, artist) unique index if missing"""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            await conn.execute(f"CREATE SCHEMA IF NOT EXISTS {self.schema}")
            await conn.execute(f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    artist TEXT NOT NULL,
                    year DOUBLE PRECISION NOT NULL,
                    photo_url TEXT NOT NULL,
                    score JSONB NOT NULL DEFAULT '[0]'::jsonb,
                    created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                    updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
                )
            """)
            await conn.execute(f"""
                CREATE UNIQUE INDEX IF NOT EXISTS {self.albums_table}_title_artist_key
                ON {self._table} (title, artist)
            """)
        logger.info(f"Album table ready: {self._table}")

    # ==================== Album Operations ====================

    async def find_all(self) -> List[Album]:
        """List every stored album"""
        query = f"SELECT * FROM {self._table} ORDER BY created_at, id"

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(query)

        return [Album.model_validate(dict(row)) for row in rows]

    async def find_by_id(self, album_id: str) -> Optional[Album]:
        """Get album by id"""
        query = f"SELECT * FROM {self._table} WHERE id = $1"

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, album_id)

        return Album.model_validate(dict(row)) if row else None

    async def find_by_id_projected(
        self, album_id: str, fields: Sequence[str]
    ) -> Optional[AlbumProjection]:
        """Get only the given fields of an album (id excluded)"""
        columns = [field for field in fields if field in WRITABLE_COLUMNS]
        if not columns:
            raise ValueError(f"No projectable fields in {list(fields)}")

        query = f"SELECT {', '.join(columns)} FROM {self._table} WHERE id = $1"

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, album_id)

        return AlbumProjection.model_validate(dict(row)) if row else None

    async def insert(self, album_data: Dict[str, Any]) -> Album:
        """Insert a new album, assigning its id and timestamps"""
        album_id = generate_album_id()
        query = f"""
            INSERT INTO {self._table} (id, title, artist, year, photo_url, score)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING *
        """
        params = [
            album_id,
            album_data["title"],
            album_data["artist"],
            float(album_data["year"]),
            album_data["photo_url"],
            album_data["score"],
        ]

        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(query, *params)
        except asyncpg.exceptions.UniqueViolationError as e:
            logger.warning(f"Duplicate album rejected on insert: {album_data['title']!r} / {album_data['artist']!r}")
            raise DuplicateAlbumError() from e

        return Album.model_validate(dict(row))

    async def update_by_id(
        self, album_id: str, update_data: Dict[str, Any]
    ) -> Optional[Album]:
        """Update the given fields, returning the post-update record"""
        # Build SET clause dynamically
        set_clauses = []
        params: List[Any] = []

        for key, value in update_data.items():
            if key not in WRITABLE_COLUMNS:
                raise ValueError(f"Field {key} cannot be updated")
            params.append(float(value) if key == "year" else value)
            set_clauses.append(f"{key} = ${len(params)}")

        set_clauses.append("updated_at = now()")
        params.append(album_id)

        query = f"""
            UPDATE {self._table}
            SET {', '.join(set_clauses)}
            WHERE id = ${len(params)}
            RETURNING *
        """

        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(query, *params)
        except asyncpg.exceptions.UniqueViolationError as e:
            logger.warning(f"Duplicate album rejected on update of {album_id}")
            raise DuplicateAlbumError() from e

        return Album.model_validate(dict(row)) if row else None

    async def delete_by_id(self, album_id: str) -> Optional[Album]:
        """Atomically find and delete an album (hard delete)"""
        query = f"DELETE FROM {self._table} WHERE id = $1 RETURNING *"

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(query, album_id)

        return Album.model_validate(dict(row)) if row else None

    # ==================== Utility Methods ====================

    async def check_connection(self) -> bool:
        """Check database connection"""
        try:
            pool = await self._get_pool()
            async with pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False
