"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import Iterator

import pytest

# Ensure both src roots are importable when running from a checkout
_TESTS_DIR = os.path.dirname(__file__)
for _src in ("../src", "../../common-py/src"):
    _path = os.path.abspath(os.path.join(_TESTS_DIR, _src))
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fastapi import FastAPI  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from nftclub_api.config import Settings  # noqa: E402
from nftclub_api.main import create_app  # noqa: E402
from nftclub_common.services.user_store import InMemoryUserStore  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of any .env file."""
    return Settings(
        _env_file=None,
        environment="test",
        user_store_backend="memory",
        password_hash_n=2**4,
    )


@pytest.fixture
def store() -> InMemoryUserStore:
    """Fresh in-memory user store."""
    return InMemoryUserStore()


@pytest.fixture
def app(settings: Settings, store: InMemoryUserStore) -> FastAPI:
    """Application wired to the in-memory store."""
    return create_app(settings=settings, store=store)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Create a FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client
