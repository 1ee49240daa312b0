"""Declarative base for the connection store tables.

- BaseModel: id and created_at, shared metadata with naming conventions
- BaseMutableModel: adds updated_at

Columns annotated as UUID or datetime map to portable types (Uuid,
timezone-aware DateTime), so the same models run on PostgreSQL and on the
SQLite databases used in tests.

Ids are minted by the application (uuid7) and always passed in; created_at
and updated_at are written explicitly by the lifecycle, the server defaults
only cover rows inserted outside it.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class BaseModel(DeclarativeBase):
    """Base for all tables: UUID primary key and creation timestamp."""

    __abstract__ = True

    metadata = MetaData(naming_convention=NAMING_CONVENTION)
    type_annotation_map = {
        UUID: Uuid,
        datetime: DateTime(timezone=True),
    }

    id: Mapped[UUID] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class BaseMutableModel(BaseModel):
    """Base for tables whose rows change after insert."""

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )
