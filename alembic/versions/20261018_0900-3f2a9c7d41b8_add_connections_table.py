"""add_connections_table

Revision ID: 3f2a9c7d41b8
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c7d41b8"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create connections table."""
    op.create_table(
        "connections",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        # Participants
        sa.Column(
            "requester_id",
            sa.Uuid(),
            nullable=False,
            comment="Principal requesting access (patient)",
        ),
        sa.Column(
            "grantor_id",
            sa.Uuid(),
            nullable=False,
            comment="Principal granting access (practitioner)",
        ),
        # Lifecycle
        sa.Column(
            "state",
            sa.String(length=20),
            nullable=False,
            comment="Connection state: pending, approved, revoked",
        ),
        sa.Column(
            "access_level",
            sa.String(length=20),
            nullable=True,
            comment="Granted scope: full, partial, read_only",
        ),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revocation_reason", sa.String(length=500), nullable=True),
        sa.Column(
            "revoked_by",
            sa.String(length=20),
            nullable=True,
            comment="Role that revoked: requester, grantor, admin",
        ),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_connections"),
        sa.UniqueConstraint(
            "requester_id",
            "grantor_id",
            name="uq_connections_requester_grantor",
        ),
    )

    op.create_index(
        "ix_connections_requester_id",
        "connections",
        ["requester_id"],
        unique=False,
    )
    op.create_index(
        "ix_connections_grantor_id",
        "connections",
        ["grantor_id"],
        unique=False,
    )
    op.create_index(
        "idx_connections_grantor_state",
        "connections",
        ["grantor_id", "state"],
        unique=False,
    )


def downgrade() -> None:
    """Drop connections table."""
    op.drop_index("idx_connections_grantor_state", table_name="connections")
    op.drop_index("ix_connections_grantor_id", table_name="connections")
    op.drop_index("ix_connections_requester_id", table_name="connections")
    op.drop_table("connections")
