#!/usr/bin/env python3
"""Infrastructure configuration

PostgreSQL connection settings for the album store (native asyncpg).
"""
import os
from dataclasses import dataclass

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class InfraConfig:
    """Storage endpoint used by the album repository"""

    # ===========================================
    # PostgreSQL (native asyncpg - port 5432)
    # ===========================================
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "album_db"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_schema: str = "album"

    # Connection pool sizing
    postgres_pool_min: int = 1
    postgres_pool_max: int = 10

    @property
    def postgres_dsn(self) -> str:
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @classmethod
    def from_env(cls) -> 'InfraConfig':
        """Load infrastructure config from environment"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")

        # Test runs point at a dedicated database
        if env in ("testing", "test"):
            database = os.getenv("POSTGRES_DB_TEST", "album_db_test")
        else:
            database = os.getenv("POSTGRES_DB", "album_db")

        return cls(
            postgres_host=os.getenv("POSTGRES_HOST", "localhost"),
            postgres_port=_int(os.getenv("POSTGRES_PORT", "5432"), 5432),
            postgres_db=database,
            postgres_user=os.getenv("POSTGRES_USER", "postgres"),
            postgres_password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            postgres_schema=os.getenv("POSTGRES_SCHEMA", "album"),
            postgres_pool_min=_int(os.getenv("POSTGRES_POOL_MIN", "1"), 1),
            postgres_pool_max=_int(os.getenv("POSTGRES_POOL_MAX", "10"), 10),
        )
