"""
tests/conftest.py -- Shared test fixtures for the user management tests.

This module provides:
  - hasher / store / service / slot: unit-level auth objects, no HTTP
  - web_client: TestClient with follow_redirects=False for web route tests
  - api_client: TestClient for JSON API tests

Every client fixture is function-scoped and enters the TestClient context,
which runs the real lifespan: each test gets a freshly seeded in-memory store
and an empty cookie jar.

DEBUG and BCRYPT_ROUNDS must be set before any app import so get_settings()
auto-generates SECRET_KEY and the seeded hashes use bcrypt's minimum cost.
"""

from __future__ import annotations

import os
from collections.abc import Generator

# CRITICAL: Set before any auth/core/api import.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from asgi import app
from auth.passwords import PasswordHasher
from auth.service import AuthService
from auth.session import SessionSlot
from auth.store import CredentialStore

# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    """A minimum-cost hasher shared across the session (it is stateless)."""
    return PasswordHasher(cost=4)


@pytest.fixture
def store(hasher: PasswordHasher) -> CredentialStore:
    """A CredentialStore seeded with the two fixed accounts."""
    s = CredentialStore()
    s.seed(hasher)
    return s


@pytest.fixture
def service(store: CredentialStore, hasher: PasswordHasher) -> AuthService:
    return AuthService(store, hasher)


@pytest.fixture
def slot() -> SessionSlot:
    """An empty visitor slot backed by a plain dict."""
    return SessionSlot({})


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def web_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient for web route tests.

    follow_redirects=False is essential: we assert on redirect *locations*
    (e.g. 302 to /login), which are invisible once the client follows the
    redirect and returns the final 200 response.
    """
    with TestClient(app, follow_redirects=False, raise_server_exceptions=True) as client:
        yield client


@pytest.fixture
def api_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient for JSON API tests."""
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
