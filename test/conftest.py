"""
Pytest configuration and fixtures.
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Set test environment before the application reads its settings
os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-forget-me-not-suite")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

from forget_me_not.auth.jwt import JWTHandler  # noqa: E402
from forget_me_not.config import Settings  # noqa: E402
from forget_me_not.exclusions.dependencies import get_exclusion_store  # noqa: E402
from forget_me_not.exclusions.store import InMemoryExclusionStore  # noqa: E402
from forget_me_not.main import create_app  # noqa: E402
from forget_me_not.modules.dependencies import (  # noqa: E402
    get_candidate_provider,
    get_update_status_provider,
)
from forget_me_not.modules.providers import (  # noqa: E402
    InMemoryUpdateStatusProvider,
    StaticCandidateProvider,
)
from forget_me_not.shared.database import Base, get_db_session  # noqa: E402
import forget_me_not.variables.models  # noqa: E402,F401

ENABLED_MODULES = ["alpha", "beta", "gamma", "views"]


class RecordingStore(InMemoryExclusionStore):
    """In-memory store that counts reads and writes."""

    def __init__(self, items=None) -> None:
        super().__init__(items)
        self.get_calls = 0
        self.set_calls = 0

    async def get(self) -> set[str]:
        self.get_calls += 1
        return await super().get()

    async def set(self, items) -> None:
        self.set_calls += 1
        await super().set(items)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def jwt_handler(settings: Settings) -> JWTHandler:
    return JWTHandler(settings)


@pytest.fixture
def admin_token(jwt_handler: JWTHandler) -> str:
    return jwt_handler.create_access_token(
        subject="user-admin", email="admin@example.com", role="admin"
    )


@pytest.fixture
def editor_token(jwt_handler: JWTHandler) -> str:
    return jwt_handler.create_access_token(
        subject="user-editor", email="editor@example.com", role="editor"
    )


@pytest.fixture
def viewer_token(jwt_handler: JWTHandler) -> str:
    return jwt_handler.create_access_token(
        subject="user-viewer", email="viewer@example.com", role="viewer"
    )


@pytest.fixture
def expired_token(jwt_handler: JWTHandler) -> str:
    return jwt_handler.create_access_token(
        subject="user-admin",
        email="admin@example.com",
        role="admin",
        expires_delta=timedelta(minutes=-5),
    )


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def candidate_provider() -> StaticCandidateProvider:
    return StaticCandidateProvider(ENABLED_MODULES)


@pytest.fixture
def update_provider() -> InMemoryUpdateStatusProvider:
    return InMemoryUpdateStatusProvider()


@pytest.fixture
def db_session() -> AsyncMock:
    return AsyncMock(name="db_session")


@pytest.fixture
def app(
    store: RecordingStore,
    candidate_provider: StaticCandidateProvider,
    update_provider: InMemoryUpdateStatusProvider,
    db_session: AsyncMock,
) -> FastAPI:
    """Application with storage and collaborators replaced by in-memory fakes."""
    application = create_app()

    async def _override_get_db_session() -> AsyncMock:
        return db_session

    application.dependency_overrides[get_db_session] = _override_get_db_session
    application.dependency_overrides[get_exclusion_store] = lambda: store
    application.dependency_overrides[get_candidate_provider] = lambda: candidate_provider
    application.dependency_overrides[get_update_status_provider] = lambda: update_provider
    return application


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def sqlite_session() -> AsyncGenerator[AsyncSession, None]:
    """Session on a fresh in-memory SQLite database."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session

    await engine.dispose()
