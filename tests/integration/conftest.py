"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Use real I/O but to temp locations
- Should be deterministic
"""

import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from venture_connect_api.app.main import create_app
from venture_connect_api.app.storage import MemoryStore


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def db_path(temp_dir):
    """Path to a not-yet-created SQLite database."""
    return str(temp_dir / "test.db")


@pytest.fixture
def api_store():
    return MemoryStore()


@pytest.fixture
def client(test_settings, api_store):
    """Test client over an app with an empty in-memory store."""
    app = create_app(test_settings, store=api_store)
    return TestClient(app)
