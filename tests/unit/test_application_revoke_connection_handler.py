"""Unit tests for RevokeConnectionHandler.

Tests the revoke connection command handler business logic.
Uses mocked repository and logger for isolation.
"""

from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from src.application.commands.connection_commands import RevokeConnection
from src.application.commands.handlers.revoke_connection_handler import (
    RevokeConnectionHandler,
)
from src.core.enums import ErrorCode
from src.core.errors import ValidationError
from src.core.result import Failure, Success
from src.domain.entities.connection import MAX_REVOCATION_REASON_LENGTH
from src.domain.enums.access_level import AccessLevel
from src.domain.enums.actor_role import ActorRole
from src.domain.enums.connection_action import ConnectionAction
from src.domain.enums.connection_state import ConnectionState
from src.domain.errors.connection_error import (
    ConnectionForbiddenError,
    ConnectionNotFoundError,
    InvalidTransitionError,
    StaleStateError,
)
from src.domain.protocols.connection_repository import ConnectionRepository
from src.infrastructure.errors import StorageFailureError
from tests.conftest import apply_transition, create_connection


def create_handler(mock_logger) -> tuple[RevokeConnectionHandler, AsyncMock]:
    """Create handler with mocked dependencies."""
    repo = AsyncMock(spec=ConnectionRepository)
    handler = RevokeConnectionHandler(connection_repo=repo, logger=mock_logger)
    return handler, repo


@pytest.mark.unit
class TestRevokeConnectionSuccess:
    """Test successful revocations."""

    @pytest.mark.asyncio
    async def test_requester_revokes_approved_connection(self, mock_logger):
        """Test revocation keeps the grant fields as trace."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(
            ConnectionState.APPROVED, access_level=AccessLevel.FULL
        )
        repo.find_by_id.return_value = Success(value=approved)
        repo.conditional_update.side_effect = apply_transition(approved)

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=approved.requester_id,
                actor_role=ActorRole.REQUESTER,
                reason="changed practitioner",
            )
        )

        assert isinstance(result, Success)
        assert result.value.state == ConnectionState.REVOKED
        assert result.value.revoked_by == ActorRole.REQUESTER
        assert result.value.revocation_reason == "changed practitioner"
        assert result.value.revoked_at is not None
        assert result.value.access_level == AccessLevel.FULL
        assert result.value.approved_at == approved.approved_at
        assert repo.conditional_update.call_args.args[1] == ConnectionState.APPROVED

    @pytest.mark.asyncio
    async def test_grantor_rejects_pending_request(self, mock_logger):
        """Test rejecting a pending request is the same revoke step."""
        handler, repo = create_handler(mock_logger)
        pending = create_connection()
        repo.find_by_id.return_value = Success(value=pending)
        repo.conditional_update.side_effect = apply_transition(pending)

        result = await handler.handle(
            RevokeConnection(
                connection_id=pending.id,
                actor_id=pending.grantor_id,
                actor_role=ActorRole.GRANTOR,
            )
        )

        assert isinstance(result, Success)
        assert result.value.state == ConnectionState.REVOKED
        assert result.value.access_level is None
        assert repo.conditional_update.call_args.args[1] == ConnectionState.PENDING

    @pytest.mark.asyncio
    async def test_admin_revokes_any_connection(self, mock_logger):
        """Test ADMIN may revoke a connection they are not part of."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(ConnectionState.APPROVED)
        repo.find_by_id.return_value = Success(value=approved)
        repo.conditional_update.side_effect = apply_transition(approved)

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=uuid7(),
                actor_role=ActorRole.ADMIN,
            )
        )

        assert isinstance(result, Success)
        assert result.value.revoked_by == ActorRole.ADMIN

    @pytest.mark.asyncio
    async def test_revocation_log_omits_reason_text(self, mock_logger):
        """Test the free-text reason is never written to logs."""
        handler, repo = create_handler(mock_logger)
        pending = create_connection()
        repo.find_by_id.return_value = Success(value=pending)
        repo.conditional_update.side_effect = apply_transition(pending)

        await handler.handle(
            RevokeConnection(
                connection_id=pending.id,
                actor_id=pending.requester_id,
                actor_role=ActorRole.REQUESTER,
                reason="private details",
            )
        )

        logged = mock_logger.info.call_args.kwargs
        assert "private details" not in logged.values()
        assert logged["has_reason"] is True


@pytest.mark.unit
class TestRevokeConnectionFailures:
    """Test rejected revocations."""

    @pytest.mark.asyncio
    async def test_revoke_unknown_connection_not_found(self, mock_logger):
        """Test a missing record yields ConnectionNotFoundError."""
        handler, repo = create_handler(mock_logger)
        repo.find_by_id.return_value = Success(value=None)

        result = await handler.handle(
            RevokeConnection(
                connection_id=uuid7(),
                actor_id=uuid7(),
                actor_role=ActorRole.ADMIN,
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConnectionNotFoundError)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "role", [ActorRole.REQUESTER, ActorRole.GRANTOR]
    )
    async def test_revoke_by_stranger_forbidden(self, mock_logger, role):
        """Test a principal outside the pair cannot revoke."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(ConnectionState.APPROVED)
        repo.find_by_id.return_value = Success(value=approved)

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=uuid7(),
                actor_role=role,
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConnectionForbiddenError)
        assert result.error.required_role == role
        repo.conditional_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke_with_mismatched_role_forbidden(self, mock_logger):
        """Test the requester cannot act in the grantor role."""
        handler, repo = create_handler(mock_logger)
        pending = create_connection()
        repo.find_by_id.return_value = Success(value=pending)

        result = await handler.handle(
            RevokeConnection(
                connection_id=pending.id,
                actor_id=pending.requester_id,
                actor_role=ActorRole.GRANTOR,
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ConnectionForbiddenError)
        repo.conditional_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke_twice_invalid_transition(self, mock_logger):
        """Test revoking a REVOKED record fails instead of succeeding twice."""
        handler, repo = create_handler(mock_logger)
        revoked = create_connection(ConnectionState.REVOKED)
        repo.find_by_id.return_value = Success(value=revoked)

        result = await handler.handle(
            RevokeConnection(
                connection_id=revoked.id,
                actor_id=revoked.grantor_id,
                actor_role=ActorRole.GRANTOR,
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTransitionError)
        assert result.error.current_state == ConnectionState.REVOKED
        repo.conditional_update.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke_losing_race_invalid_transition(self, mock_logger):
        """Test a concurrent revoke turns the loser into InvalidTransition."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(ConnectionState.APPROVED)
        repo.find_by_id.return_value = Success(value=approved)
        repo.conditional_update.return_value = Failure(
            error=StaleStateError.observed(
                approved.id, ConnectionState.APPROVED, ConnectionState.REVOKED
            )
        )

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=approved.grantor_id,
                actor_role=ActorRole.GRANTOR,
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, InvalidTransitionError)
        assert result.error.current_state == ConnectionState.REVOKED
        assert result.error.attempted == ConnectionAction.REVOKE

    @pytest.mark.asyncio
    async def test_revoke_with_overlong_reason_fails_validation(self, mock_logger):
        """Test a reason longer than the stored column is rejected up front."""
        handler, repo = create_handler(mock_logger)

        result = await handler.handle(
            RevokeConnection(
                connection_id=uuid7(),
                actor_id=uuid7(),
                actor_role=ActorRole.GRANTOR,
                reason="x" * (MAX_REVOCATION_REASON_LENGTH + 1),
            )
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.code == ErrorCode.VALIDATION_FAILED
        assert result.error.field == "reason"
        repo.find_by_id.assert_not_called()
        repo.conditional_update.assert_not_called()
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio
    async def test_revoke_with_reason_at_limit_succeeds(self, mock_logger):
        """Test a reason of exactly the maximum length is accepted."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(ConnectionState.APPROVED)
        repo.find_by_id.return_value = Success(value=approved)
        repo.conditional_update.side_effect = apply_transition(approved)
        reason = "x" * MAX_REVOCATION_REASON_LENGTH

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=approved.grantor_id,
                actor_role=ActorRole.GRANTOR,
                reason=reason,
            )
        )

        assert isinstance(result, Success)
        assert result.value.revocation_reason == reason

    @pytest.mark.asyncio
    async def test_revoke_rejected_write_logged_as_error(self, mock_logger):
        """Test a permanent store failure propagates and is logged as an error."""
        handler, repo = create_handler(mock_logger)
        approved = create_connection(ConnectionState.APPROVED)
        repo.find_by_id.return_value = Success(value=approved)
        rejected = StorageFailureError(
            message="Connection store rejected the operation",
            operation="conditional_update",
        )
        repo.conditional_update.return_value = Failure(error=rejected)

        result = await handler.handle(
            RevokeConnection(
                connection_id=approved.id,
                actor_id=approved.requester_id,
                actor_role=ActorRole.REQUESTER,
            )
        )

        assert isinstance(result, Failure)
        assert result.error is rejected
        assert result.error.code == ErrorCode.STORAGE_FAILED
        mock_logger.error.assert_called_once()
