"""User ORM: persists accounts and their password hashes.

Invariants:
    - id is UUID primary key (client-side default)
    - email is UNIQUE: the database is the final arbiter of uniqueness
    - password_hash is opaque; no model method exposes it

Design Decisions:
    - Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite test databases
    - updated_at maintained via onupdate, including bulk UPDATE statements
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from accounts_api.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User account row."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
