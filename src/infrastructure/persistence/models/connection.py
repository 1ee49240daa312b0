"""Connection database model.

One row per (requester, grantor) pair, holding the pair's lifecycle state.

Concurrency:
    - uq_connections_requester_grantor: two concurrent first requests cannot
      both insert
    - state is the compare-and-swap target of conditional updates
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.entities.connection import MAX_REVOCATION_REASON_LENGTH
from src.infrastructure.persistence.base import BaseMutableModel


class ConnectionModel(BaseMutableModel):
    """Connection row.

    Fields:
        id, created_at, updated_at: From BaseMutableModel. created_at is
            re-stamped when a revoked pair is requested again.
        requester_id: Principal asking for access
        grantor_id: Principal whose records are shared
        state: pending, approved or revoked
        access_level: full, partial or read_only (set on approval)
        approved_at: When the grantor approved
        revocation_reason: Free text supplied on revocation
        revoked_by: requester, grantor or admin
        revoked_at: When the connection was revoked

    Indexes:
        - uq_connections_requester_grantor: (requester_id, grantor_id) unique
        - ix_connections_requester_id / ix_connections_grantor_id: listings
        - idx_connections_grantor_state: grantor's pending inbox
    """

    __tablename__ = "connections"

    requester_id: Mapped[UUID] = mapped_column(
        index=True, comment="Principal requesting access (patient)"
    )
    grantor_id: Mapped[UUID] = mapped_column(
        index=True, comment="Principal granting access (practitioner)"
    )

    state: Mapped[str] = mapped_column(
        String(20), comment="Connection state: pending, approved, revoked"
    )
    access_level: Mapped[str | None] = mapped_column(
        String(20), comment="Granted scope: full, partial, read_only"
    )
    approved_at: Mapped[datetime | None]

    revocation_reason: Mapped[str | None] = mapped_column(
        String(MAX_REVOCATION_REASON_LENGTH)
    )
    revoked_by: Mapped[str | None] = mapped_column(
        String(20), comment="Role that revoked: requester, grantor, admin"
    )
    revoked_at: Mapped[datetime | None]

    __table_args__ = (
        UniqueConstraint(
            "requester_id", "grantor_id", name="uq_connections_requester_grantor"
        ),
        Index("idx_connections_grantor_state", "grantor_id", "state"),
    )

    def __repr__(self) -> str:
        return (
            f"<ConnectionModel(id={self.id}, requester_id={self.requester_id}, "
            f"grantor_id={self.grantor_id}, state={self.state})>"
        )
