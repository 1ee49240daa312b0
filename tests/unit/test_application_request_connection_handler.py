"""Unit tests for RequestConnectionHandler.

Tests the request connection command handler business logic.
Uses mocked repository and logger for isolation.
"""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands.connection_commands import RequestConnection
from src.application.commands.handlers.request_connection_handler import (
    RequestConnectionHandler,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState
from src.domain.errors.connection_error import (
    ConnectionAlreadyExistsError,
    ConnectionConflictError,
    InvalidTransitionError,
    StaleStateError,
)
from src.domain.protocols.connection_repository import ConnectionRepository
from src.infrastructure.errors import StorageUnavailableError
from tests.conftest import apply_transition, create_connection


# =============================================================================
# Test Fixtures
# =============================================================================


def create_handler(mock_logger) -> tuple[RequestConnectionHandler, AsyncMock]:
    """Create handler with mocked dependencies."""
    repo = AsyncMock(spec=ConnectionRepository)
    repo.insert.side_effect = lambda connection: Success(value=connection)
    handler = RequestConnectionHandler(connection_repo=repo, logger=mock_logger)
    return handler, repo


# =============================================================================
# Success Tests
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_creates_pending_connection(mock_logger):
    """Test a never-seen pair gets a new PENDING connection."""
    handler, repo = create_handler(mock_logger)
    repo.find_by_pair.return_value = Success(value=None)
    requester_id, grantor_id = uuid7(), uuid7()

    result = await handler.handle(
        RequestConnection(requester_id=requester_id, grantor_id=grantor_id)
    )

    assert isinstance(result, Success)
    assert result.value.state == ConnectionState.PENDING
    assert result.value.requester_id == requester_id
    assert result.value.grantor_id == grantor_id
    assert result.value.access_level is None
    repo.insert.assert_awaited_once()
    repo.conditional_update.assert_not_called()
    mock_logger.info.assert_called_once()
    assert mock_logger.info.call_args.args[0] == "connection_requested"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_reactivates_revoked_connection(mock_logger):
    """Test a REVOKED pair is reactivated in place via conditional update."""
    handler, repo = create_handler(mock_logger)
    revoked = create_connection(ConnectionState.REVOKED)
    repo.find_by_pair.return_value = Success(value=revoked)
    repo.conditional_update.side_effect = apply_transition(revoked)

    result = await handler.handle(
        RequestConnection(
            requester_id=revoked.requester_id, grantor_id=revoked.grantor_id
        )
    )

    assert isinstance(result, Success)
    assert result.value.id == revoked.id
    assert result.value.state == ConnectionState.PENDING
    assert result.value.access_level is None
    assert result.value.revoked_by is None
    repo.insert.assert_not_called()

    connection_id, expected_state, transition = (
        repo.conditional_update.call_args.args
    )
    assert connection_id == revoked.id
    assert expected_state == ConnectionState.REVOKED
    assert transition.to_state == ConnectionState.PENDING


# =============================================================================
# Failure Tests
# =============================================================================


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_rejects_self_connection(mock_logger):
    """Test a principal cannot request access to themselves."""
    handler, repo = create_handler(mock_logger)
    principal = uuid7()

    result = await handler.handle(
        RequestConnection(requester_id=principal, grantor_id=principal)
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, ValidationError)
    assert result.error.code == ErrorCode.VALIDATION_FAILED
    repo.find_by_pair.assert_not_called()
    mock_logger.warning.assert_called_once()


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("state", [ConnectionState.PENDING, ConnectionState.APPROVED])
async def test_request_on_live_connection_already_exists(mock_logger, state):
    """Test PENDING/APPROVED pairs report AlreadyExists without writing."""
    handler, repo = create_handler(mock_logger)
    existing = create_connection(state)
    repo.find_by_pair.return_value = Success(value=existing)

    result = await handler.handle(
        RequestConnection(
            requester_id=existing.requester_id, grantor_id=existing.grantor_id
        )
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, ConnectionAlreadyExistsError)
    assert result.error.connection_id == existing.id
    assert result.error.current_state == state
    repo.insert.assert_not_called()
    repo.conditional_update.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_losing_insert_race_reports_winner(mock_logger):
    """Test a unique constraint conflict re-reads and reports the winner."""
    handler, repo = create_handler(mock_logger)
    winner = create_connection()
    repo.find_by_pair.side_effect = [Success(value=None), Success(value=winner)]
    repo.insert.side_effect = None
    repo.insert.return_value = Failure(
        error=ConnectionConflictError(
            code=ErrorCode.CONNECTION_ALREADY_EXISTS,
            message="conflict",
        )
    )

    result = await handler.handle(
        RequestConnection(
            requester_id=winner.requester_id, grantor_id=winner.grantor_id
        )
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, ConnectionAlreadyExistsError)
    assert result.error.connection_id == winner.id
    assert result.error.current_state == ConnectionState.PENDING
    assert repo.find_by_pair.await_count == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_losing_reactivation_race_already_exists(mock_logger):
    """Test a stale reactivation is reported as AlreadyExists."""
    handler, repo = create_handler(mock_logger)
    revoked = create_connection(ConnectionState.REVOKED)
    repo.find_by_pair.return_value = Success(value=revoked)
    repo.conditional_update.return_value = Failure(
        error=StaleStateError.observed(
            revoked.id, ConnectionState.REVOKED, ConnectionState.PENDING
        )
    )

    result = await handler.handle(
        RequestConnection(
            requester_id=revoked.requester_id, grantor_id=revoked.grantor_id
        )
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, ConnectionAlreadyExistsError)
    assert result.error.connection_id == revoked.id
    assert result.error.current_state == ConnectionState.PENDING


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_reactivation_finding_revoked_again_invalid_transition(
    mock_logger,
):
    """Test a reactivation that re-reads REVOKED is not reported as AlreadyExists."""
    handler, repo = create_handler(mock_logger)
    revoked = create_connection(ConnectionState.REVOKED)
    repo.find_by_pair.return_value = Success(value=revoked)
    repo.conditional_update.return_value = Failure(
        error=StaleStateError.observed(
            revoked.id, ConnectionState.REVOKED, ConnectionState.REVOKED
        )
    )

    result = await handler.handle(
        RequestConnection(
            requester_id=revoked.requester_id, grantor_id=revoked.grantor_id
        )
    )

    assert isinstance(result, Failure)
    assert isinstance(result.error, InvalidTransitionError)
    assert result.error.current_state == ConnectionState.REVOKED
    assert result.error.attempted == ConnectionAction.REQUEST
    assert result.error.code == ErrorCode.CONNECTION_INVALID_TRANSITION


@pytest.mark.unit
@pytest.mark.asyncio
async def test_request_propagates_storage_failure(mock_logger):
    """Test storage failures propagate unchanged and are logged as errors."""
    handler, repo = create_handler(mock_logger)
    unavailable = StorageUnavailableError(
        message="Connection store is unavailable", operation="find_by_pair"
    )
    repo.find_by_pair.return_value = Failure(error=unavailable)

    result = await handler.handle(
        RequestConnection(requester_id=uuid7(), grantor_id=uuid7())
    )

    assert isinstance(result, Failure)
    assert result.error is unavailable
    assert result.error.code == ErrorCode.STORAGE_UNAVAILABLE
    mock_logger.error.assert_called_once()
    repo.insert.assert_not_called()
