"""Pytest configuration for async testing.

This configuration ensures:
1. Settings can load (DATABASE_URL is set before any src import)
2. Integration tests get a fresh SQLite database file per test
3. Concurrent sessions in one test use separate connections
4. Mock fixtures are shared across unit tests
"""

import os

# Settings are loaded at import time of src.core.config
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import asyncio  # noqa: E402
from dataclasses import replace  # noqa: E402
from datetime import UTC, datetime  # noqa: E402
from uuid import UUID  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from uuid_extensions import uuid7  # noqa: E402

from src.core.result import Success  # noqa: E402
from src.domain.entities.connection import Connection  # noqa: E402
from src.domain.enums.access_level import AccessLevel  # noqa: E402
from src.domain.enums.actor_role import ActorRole  # noqa: E402
from src.domain.enums.connection_state import ConnectionState  # noqa: E402


# =============================================================================
# Test helper functions for domain entities
# =============================================================================


def create_connection(
    state: ConnectionState = ConnectionState.PENDING,
    connection_id: UUID | None = None,
    requester_id: UUID | None = None,
    grantor_id: UUID | None = None,
    access_level: AccessLevel = AccessLevel.FULL,
    revoked_by: ActorRole = ActorRole.GRANTOR,
    revocation_reason: str | None = None,
) -> Connection:
    """Helper to create a Connection snapshot in a consistent state.

    Args:
        state: Lifecycle state of the snapshot.
        connection_id: Fixed id (random uuid7 when omitted).
        requester_id: Fixed requester (random when omitted).
        grantor_id: Fixed grantor (random when omitted).
        access_level: Granted scope for APPROVED/REVOKED snapshots.
        revoked_by: Revoking role for REVOKED snapshots.
        revocation_reason: Reason for REVOKED snapshots.

    Returns:
        Connection whose fields satisfy the state's invariants.

    Usage:
        pending = create_connection()
        approved = create_connection(ConnectionState.APPROVED)
    """
    now = datetime.now(UTC)
    fields: dict = {}

    if state in (ConnectionState.APPROVED, ConnectionState.REVOKED):
        fields.update(access_level=access_level, approved_at=now)
    if state == ConnectionState.REVOKED:
        fields.update(
            revoked_by=revoked_by,
            revoked_at=now,
            revocation_reason=revocation_reason,
        )

    return Connection(
        id=connection_id or uuid7(),
        requester_id=requester_id or uuid7(),
        grantor_id=grantor_id or uuid7(),
        state=state,
        created_at=now,
        updated_at=now,
        **fields,
    )


def apply_transition(connection: Connection):
    """Side effect mimicking the store's conditional_update on a snapshot.

    Usage:
        repo.conditional_update.side_effect = apply_transition(pending)
    """
    return lambda connection_id, expected, transition: Success(
        value=replace(connection, **transition.changes())
    )


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real database"
    )


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_database(tmp_path):
    """Provide a Database backed by a fresh SQLite file.

    A file (not :memory:) lets concurrent sessions in the same test hold
    their own connections, so races resolve in the database the way they
    do in production.

    Usage:
        async def test_something(test_database):
            async with test_database.get_session() as session1:
                ...
            async with test_database.get_session() as session2:
                ...
    """
    from src.infrastructure.persistence.database import Database

    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'connections.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(test_database):
    """Provide a single session on the test database."""
    async with test_database.get_session() as session:
        yield session


@pytest.fixture
def connection_repository(db_session):
    """Provide a ConnectionRepository bound to db_session."""
    from src.infrastructure.persistence.repositories import ConnectionRepository

    return ConnectionRepository(session=db_session)


# =============================================================================
# Reusable Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_logger():
    """Provide a mock logger for testing.

    Returns a Mock object with standard logging methods (info, debug, error, warning).
    Use this when testing components that require a logger dependency.

    Usage:
        def test_something(mock_logger):
            handler = RevokeConnectionHandler(connection_repo=repo, logger=mock_logger)
            ...
            mock_logger.info.assert_called_once()
    """
    from unittest.mock import Mock

    logger = Mock()
    logger.info = Mock()
    logger.debug = Mock()
    logger.error = Mock()
    logger.warning = Mock()
    return logger
