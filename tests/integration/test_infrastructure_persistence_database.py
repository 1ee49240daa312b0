"""Integration tests for Database session management.

Tests cover:
- Connectivity check
- Commit on clean exit, rollback on exception
- Schema creation and removal
"""

import pytest
from sqlalchemy import text
from uuid_extensions import uuid7

from src.core.result import Success
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models import ConnectionModel
from src.infrastructure.persistence.repositories import ConnectionRepository
from tests.conftest import create_connection


@pytest.mark.integration
class TestDatabase:
    """Test Database against a SQLite file."""

    @pytest.mark.asyncio
    async def test_check_connection(self, test_database):
        assert await test_database.check_connection() is True

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_exception(self, test_database):
        model_id = uuid7()
        connection = create_connection(connection_id=model_id)

        with pytest.raises(RuntimeError):
            async with test_database.get_session() as session:
                session.add(
                    ConnectionModel(
                        id=connection.id,
                        requester_id=connection.requester_id,
                        grantor_id=connection.grantor_id,
                        state=connection.state.value,
                        created_at=connection.created_at,
                        updated_at=connection.updated_at,
                    )
                )
                await session.flush()
                raise RuntimeError("abort")

        async with test_database.get_session() as session:
            found = await ConnectionRepository(session=session).find_by_id(model_id)

        assert isinstance(found, Success)
        assert found.value is None

    @pytest.mark.asyncio
    async def test_drop_all_removes_table(self, test_database):
        await test_database.drop_all()

        async with test_database.get_session() as session:
            result = await session.execute(
                text(
                    "SELECT name FROM sqlite_master "
                    "WHERE type = 'table' AND name = 'connections'"
                )
            )
            assert result.first() is None

    @pytest.mark.asyncio
    async def test_check_connection_fails_for_unreachable_database(self, tmp_path):
        database = Database(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'x.db'}"
        )

        try:
            assert await database.check_connection() is False
        finally:
            await database.close()
