"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - UserStore enforces email uniqueness on its write path and signals a violation
      with EmailConflict; a prior find_by_email is advisory only

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass in-memory fakes
    - Async in Protocol: store does network IO, hasher does CPU work off the loop
    - Verification is a hasher capability: the hashing scheme can change without
      touching the account service
"""

from typing import Protocol

from accounts_api.core.domain_types import UserId, UserRecord


class EmailConflict(Exception):
    """Raised by a UserStore when a write would duplicate an existing email."""

    def __init__(self, email: str):
        super().__init__("email already exists")
        self.email = email


class UserStore(Protocol):
    """Contract for user persistence, implemented by shell."""
    async def find_all(
        self, limit: int | None = None, offset: int = 0,
    ) -> list[UserRecord]: ...
    async def find_by_id(self, user_id: UserId) -> UserRecord | None: ...
    async def find_by_email(
        self, email: str, exclude_id: UserId | None = None,
    ) -> UserRecord | None: ...
    async def insert(
        self, name: str, email: str, password_hash: str,
    ) -> UserRecord | None: ...
    async def update(self, user_id: UserId, **fields: str) -> bool: ...
    async def delete(self, user_id: UserId) -> bool: ...


class PasswordHasher(Protocol):
    """Contract for the one-way credential hash, implemented by shell."""
    async def hash(self, plain: str) -> str: ...
    async def verify(self, plain: str, hashed: str) -> bool: ...
