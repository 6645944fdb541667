"""Pytest configuration and fixtures."""

import os
import tempfile
from typing import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport

from coachai.api.client import ApiClient
from coachai.api.http import create_http_client
from coachai.auth.manager import SessionManager
from coachai.config import ClientSettings
from coachai.db.database import close_database, init_database
from coachai.db.secrets import configure_secrets_key
from coachai.models.session import Credentials
from tests.fake_service import DEFAULT_EMAIL, DEFAULT_PASSWORD, FakeCoachService


@pytest.fixture(autouse=True)
async def setup_test_db() -> AsyncGenerator[str, None]:
    """Set up a test database for each test."""
    # Create a temporary database file
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    configure_secrets_key("test-secrets-key")
    await init_database(db_path)

    yield db_path

    # Clean up
    await close_database()
    configure_secrets_key(None)
    os.unlink(db_path)


@pytest.fixture
def fake_service() -> FakeCoachService:
    return FakeCoachService()


@pytest.fixture
def settings(setup_test_db: str) -> ClientSettings:
    return ClientSettings(
        base_url="http://test",
        database_path=setup_test_db,
        request_timeout=5.0,
    )


@pytest.fixture
async def http_client(
    fake_service: FakeCoachService, settings: ClientSettings
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client wired to the fake service."""
    async with create_http_client(
        settings, transport=ASGITransport(app=fake_service.app)
    ) as client:
        yield client


@pytest.fixture
def session_manager(http_client: httpx.AsyncClient) -> SessionManager:
    return SessionManager(http_client)


@pytest.fixture
def api_client(http_client: httpx.AsyncClient, session_manager: SessionManager) -> ApiClient:
    return ApiClient(http_client, session_manager)


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(email=DEFAULT_EMAIL, password=DEFAULT_PASSWORD)


@pytest.fixture
async def signed_in(session_manager: SessionManager, credentials: Credentials) -> SessionManager:
    """A session manager with a live session."""
    await session_manager.sign_in(credentials)
    return session_manager
