"""
Common/Shared Fixtures

Base factories and generators used across test layers.
"""
import uuid
from datetime import datetime, timezone


def make_suffix(length: int = 8) -> str:
    """Generate a unique hex suffix for test data"""
    return uuid.uuid4().hex[:length]


def make_timestamp() -> datetime:
    """Generate current UTC timestamp"""
    return datetime.now(timezone.utc)
