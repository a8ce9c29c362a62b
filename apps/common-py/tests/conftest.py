"""Pytest configuration for common-py tests."""

import os
import sys

import pytest

_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from nftclub_common.services.password_hasher import PasswordHasher  # noqa: E402
from nftclub_common.services.user_service import UserAccessService  # noqa: E402
from nftclub_common.services.user_store import InMemoryUserStore  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no external services")
    config.addinivalue_line("markers", "integration: tests that need a live Cosmos DB")


@pytest.fixture
def hasher() -> PasswordHasher:
    """Cheap hasher so tests stay fast."""
    return PasswordHasher(n=2**4)


@pytest.fixture
def store() -> InMemoryUserStore:
    return InMemoryUserStore()


@pytest.fixture
def service(store: InMemoryUserStore, hasher: PasswordHasher) -> UserAccessService:
    return UserAccessService(store=store, hasher=hasher)
