"""Pytest configuration and fixtures for tenant_admin.

Repository, service and API tests run against a fresh in-memory SQLite
database (aiosqlite) per test, created from the ORM metadata. The identity
provider is never contacted: API tests override get_current_identity, and the
Cognito adapters are tested with httpx.MockTransport and a mocked boto3 client.
"""

import os

# Settings are read on first use; point them at SQLite and disable Cognito wiring.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["AUTH_ENABLED"] = "false"

from collections.abc import AsyncIterator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from tenant_admin.core.config import get_settings  # noqa: E402
from tenant_admin.domain.identity import Identity  # noqa: E402
from tenant_admin.infrastructure.persistence import models  # noqa: E402, F401
from tenant_admin.infrastructure.persistence.database import (  # noqa: E402
    Base,
    get_db,
    get_db_transactional,
    make_session_factory,
)

get_settings.cache_clear()


def _enable_sqlite_savepoints_and_fks(engine: AsyncEngine) -> None:
    """pysqlite defers BEGIN and breaks SAVEPOINT; take over transaction control."""

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database with the full schema."""
    eng = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    _enable_sqlite_savepoints_and_fks(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    """Session for repository/service tests. Rolled back after the test."""
    async with make_session_factory(engine)() as session:
        yield session
        await session.rollback()


class IdentityHolder:
    """Mutable slot for the identity the API under test should see (None = anonymous)."""

    def __init__(self) -> None:
        self.identity: Identity | None = None

    def grant(self, *permissions: str, roles: tuple[str, ...] = ()) -> Identity:
        self.identity = Identity(
            user_id="test-user-id",
            subject_id="test-subject",
            username="tester",
            email="tester@example.com",
            roles=frozenset(roles),
            permissions=frozenset(permissions),
        )
        return self.identity


@pytest.fixture
def current_identity() -> IdentityHolder:
    return IdentityHolder()


@pytest.fixture
def app(db_session: AsyncSession, current_identity: IdentityHolder):
    """FastAPI app wired to the test session and a controllable caller identity."""
    from tenant_admin.api.v1.dependencies import get_current_identity
    from tenant_admin.main import create_app

    application = create_app()

    async def _session() -> AsyncIterator[AsyncSession]:
        yield db_session

    async def _identity() -> Identity | None:
        return current_identity.identity

    application.dependency_overrides[get_db] = _session
    application.dependency_overrides[get_db_transactional] = _session
    application.dependency_overrides[get_current_identity] = _identity
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
