"""
Shared Test Fixtures

Centralized factories used across all test layers.

Structure:
    - common.py: Unique suffixes, timestamps
    - album_fixtures.py: Album service factories
"""

# Common utilities
from .common import (
    make_suffix,
    make_timestamp,
)

# Album service fixtures
from .album_fixtures import (
    make_album_id,
    make_album_body,
    make_album,
    make_score_body,
)

__all__ = [
    # Common
    "make_suffix",
    "make_timestamp",
    # Album
    "make_album_id",
    "make_album_body",
    "make_album",
    "make_score_body",
]
