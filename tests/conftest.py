"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O
- integration/ Store backends and the HTTP API, real I/O to temp locations

Run specific levels:
    pytest tests/unit -v
    pytest tests/integration -v
    pytest tests -v
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from venture_connect_api.app.core.config import Settings


@pytest.fixture
def test_settings():
    """Settings that never touch the real database file."""
    return Settings(
        storage_backend="memory",
        secret_key="test-secret",
        log_level="WARNING",
        seed_on_startup=False,
    )


@pytest.fixture
def investor_fields():
    """Raw user fields as the service hands them to the store."""
    return {
        "email": "a@x.com",
        "password": "salt$hash",
        "first_name": "Ada",
        "last_name": "Investor",
        "role": "investor",
        "industries": ["FinTech", "SaaS"],
        "investment_range": "$1M - $5M",
        "portfolio_size": 12,
    }


@pytest.fixture
def entrepreneur_fields():
    return {
        "email": "b@x.com",
        "password": "salt$hash",
        "first_name": "Ben",
        "last_name": "Founder",
        "role": "entrepreneur",
        "company": "Acme Robotics",
        "funding_need": "$2M Seed",
    }
