"""SQLAlchemy User Store: async persistence for UserRecord behind the UserStore protocol.

Invariants:
    - Email uniqueness is enforced by the users.email UNIQUE index; a violating write
      rolls back and raises EmailConflict
    - update()/delete() return False when no row matched the id
    - Every method commits its own unit of work (one store call = one transaction)
    - Callers only ever see UserRecord snapshots, never ORM instances
    - find_all order is (created_at, id): total and stable, so pages never overlap

Design Decisions:
    - Core UPDATE/DELETE statements over load-then-mutate: single round trip and a
      reliable rowcount for "no such record"
    - IntegrityError is caught here (not in the session manager) because a unique
      violation is a business outcome, not an infrastructure failure
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from accounts_api.core.domain_types import UserId, UserRecord
from accounts_api.core.repository_protocols import EmailConflict
from accounts_api.models.user import User as UserModel

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"name", "email", "password_hash"})


class SqlAlchemyUserStore:
    """UserStore over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> list[UserRecord]:
        query = select(UserModel).order_by(UserModel.created_at, UserModel.id)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return [_to_record(row) for row in result.scalars().all()]

    async def find_by_id(self, user_id: UserId) -> UserRecord | None:
        result = await self.db.execute(
            select(UserModel).where(UserModel.id == user_id),
        )
        row = result.scalar_one_or_none()
        return _to_record(row) if row else None

    async def find_by_email(
        self, email: str, exclude_id: UserId | None = None,
    ) -> UserRecord | None:
        query = select(UserModel).where(UserModel.email == email)
        if exclude_id is not None:
            query = query.where(UserModel.id != exclude_id)
        result = await self.db.execute(query)
        row = result.scalars().first()
        return _to_record(row) if row else None

    async def insert(
        self, name: str, email: str, password_hash: str,
    ) -> UserRecord:
        user = UserModel(name=name, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info("Insert rejected by unique email constraint")
            raise EmailConflict(email)
        await self.db.refresh(user)
        return _to_record(user)

    async def update(self, user_id: UserId, **fields: str) -> bool:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if not fields:
            return await self.find_by_id(user_id) is not None
        try:
            result = await self.db.execute(
                update(UserModel)
                .where(UserModel.id == user_id)
                .values(**fields),
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "Update rejected by unique email constraint",
                extra={"user_id": str(user_id)},
            )
            raise EmailConflict(fields.get("email", ""))
        return result.rowcount > 0

    async def delete(self, user_id: UserId) -> bool:
        result = await self.db.execute(
            delete(UserModel).where(UserModel.id == user_id),
        )
        await self.db.commit()
        return result.rowcount > 0


def _to_record(row: UserModel) -> UserRecord:
    return UserRecord(
        id=UserId(row.id),
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
    )
