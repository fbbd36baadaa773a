"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps UUID; never pass bare strings as ids in domain logic
    - UserRecord carries password_hash, but public_view() never does
    - ChangePasswordStage is linear: a later stage implies every earlier one passed

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclass for UserRecord: store hands out snapshots, the service never
      mutates or caches them across requests
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserRecord:
    """Snapshot of a persisted user as returned by the UserStore."""
    id: UserId
    name: str
    email: str
    password_hash: str

    def public_view(self) -> dict:
        """Outward shape: id, name, email. Never includes the hash."""
        return {"id": str(self.id), "name": self.name, "email": self.email}

    def __repr__(self) -> str:
        return f"UserRecord(id={self.id!s}, email={self.email!r})"


# ─── Enums ───────────────────────────────────────────────────────

class ChangePasswordStage(str, Enum):
    """Progress of the change_password pipeline. Failure exits at any stage."""
    START = "start"
    IDENTITY_RESOLVED = "identity_resolved"
    OLD_PASSWORD_VERIFIED = "old_password_verified"
    NEW_PASSWORD_VALIDATED = "new_password_validated"
    HASHED = "hashed"
    PERSISTED = "persisted"
