"""
Root conftest.py - Global fixtures and configuration for all test layers.

Test Layers:
    - api/        : HTTP contract tests (FastAPI app over ASGI, mocked storage)
    - integration/: Repository tests (real PostgreSQL, skipped when unreachable)
    - component/  : Service tests (mocked repository)
    - unit/       : Unit tests (pure functions, no I/O)
"""
import os
import sys

import pytest

# Set testing environment BEFORE any service imports
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

# Import shared fixtures from tests/fixtures
from tests.fixtures import (
    make_album_id,
    make_album_body,
    make_album,
    make_score_body,
)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Configure custom markers"""
    config.addinivalue_line("markers", "unit: pure function tests, no I/O")
    config.addinivalue_line("markers", "component: service tests with mocked repository")
    config.addinivalue_line("markers", "api: HTTP contract tests")
    config.addinivalue_line("markers", "integration: tests against a real PostgreSQL")


# =============================================================================
# Shared Factories
# =============================================================================

@pytest.fixture
def album_body():
    """Factory for create/update request bodies"""
    return make_album_body


@pytest.fixture
def stored_album():
    """Factory for stored album records"""
    return make_album


@pytest.fixture
def album_id() -> str:
    """A well-formed album ID that is not stored anywhere"""
    return make_album_id()


@pytest.fixture
def score_body():
    """Factory for score-append bodies"""
    return make_score_body
