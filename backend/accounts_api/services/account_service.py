"""Account Service: business rules for user accounts and credential rotation.

Invariants:
    - Every failure is a typed AccountsError; no silent defaults
    - Plaintext passwords and hashes are never logged or returned
    - The store's unique-email constraint is the source of truth; the pre-read
      in create/update only short-circuits the common case
    - change_password persists the hash it just computed, nothing else
    - No state survives between calls (store and hasher are injected per request)

Design Decisions:
    - create_user does not re-check password confirmation: the request schema owns it
    - change_password re-checks confirmation and length even though the schema
      already did: the method is callable without the HTTP layer
    - update_user still requires name and email together (full replace, no patch)
"""

import logging

from accounts_api.core.domain_types import ChangePasswordStage, UserId, UserRecord
from accounts_api.core.errors import (
    EmailAlreadyTakenError,
    ErrorContext,
    InvalidOldPasswordError,
    PersistenceFailedError,
    UnknownUserError,
)
from accounts_api.core.password_rules import (
    check_password_confirmation,
    check_password_length,
)
from accounts_api.core.repository_protocols import (
    EmailConflict,
    PasswordHasher,
    UserStore,
)

logger = logging.getLogger(__name__)

PASSWORD_UPDATED_MESSAGE = "Password updated successfully"


class AccountService:
    """Orchestrates UserStore and PasswordHasher calls for one request."""

    def __init__(self, store: UserStore, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    async def list_users(
        self, limit: int | None = None, offset: int = 0,
    ) -> list[UserRecord]:
        return await self.store.find_all(limit=limit, offset=offset)

    async def get_user(self, user_id: UserId) -> UserRecord:
        user = await self.store.find_by_id(user_id)
        if user is None:
            raise UnknownUserError(str(user_id))
        return user

    async def create_user(
        self, name: str, email: str, password: str,
    ) -> UserRecord:
        """Create an account. Email must be unused; the password is stored hashed."""
        await self._ensure_email_available(email)
        password_hash = await self.hasher.hash(password)
        try:
            user = await self.store.insert(name, email, password_hash)
        except EmailConflict:
            # lost the race against a concurrent create with the same email
            raise EmailAlreadyTakenError()
        if user is None:
            raise PersistenceFailedError("create user")
        logger.info("User created", extra={"user_id": str(user.id)})
        return user

    async def update_user(
        self, user_id: UserId, name: str, email: str,
    ) -> UserId:
        """Replace name and email. The user's own current email is not a conflict."""
        if email:
            await self._ensure_email_available(email, exclude_id=user_id)
        try:
            updated = await self.store.update(user_id, name=name, email=email)
        except EmailConflict:
            raise EmailAlreadyTakenError(ErrorContext(user_id=str(user_id)))
        if not updated:
            raise PersistenceFailedError(
                "update user", ErrorContext(user_id=str(user_id)),
            )
        logger.info("User updated", extra={"user_id": str(user_id)})
        return user_id

    async def delete_user(self, user_id: UserId) -> UserId:
        deleted = await self.store.delete(user_id)
        if not deleted:
            raise PersistenceFailedError(
                "delete user", ErrorContext(user_id=str(user_id)),
            )
        logger.info("User deleted", extra={"user_id": str(user_id)})
        return user_id

    async def change_password(
        self,
        user_id: UserId,
        old_password: str,
        new_password: str,
        new_password_confirm: str,
    ) -> dict:
        """Rotate a user's password.

        Short-circuit pipeline, first failing stage decides the error:
        resolve identity -> verify old password -> validate new password
        -> hash -> persist the new hash.
        """
        stage = ChangePasswordStage.START
        context = ErrorContext(user_id=str(user_id))

        user = await self.store.find_by_id(user_id)
        if user is None:
            self._log_rejected(user_id, stage, "UNKNOWN_USER")
            raise UnknownUserError(str(user_id))
        stage = ChangePasswordStage.IDENTITY_RESOLVED

        if not await self.hasher.verify(old_password, user.password_hash):
            self._log_rejected(user_id, stage, "INVALID_OLD_PASSWORD")
            raise InvalidOldPasswordError(context)
        stage = ChangePasswordStage.OLD_PASSWORD_VERIFIED

        error = (
            check_password_confirmation(new_password, new_password_confirm)
            or check_password_length(new_password)
        )
        if error is not None:
            error.context = context
            self._log_rejected(user_id, stage, error.code)
            raise error
        stage = ChangePasswordStage.NEW_PASSWORD_VALIDATED

        new_hash = await self.hasher.hash(new_password)
        stage = ChangePasswordStage.HASHED

        if not await self.store.update(user_id, password_hash=new_hash):
            self._log_rejected(user_id, stage, "PERSISTENCE_FAILED")
            raise PersistenceFailedError("update password", context)
        stage = ChangePasswordStage.PERSISTED

        logger.info(
            "Password changed",
            extra={"user_id": str(user_id), "stage": stage.value},
        )
        return {"message": PASSWORD_UPDATED_MESSAGE}

    # ─── Helpers ─────────────────────────────────────────────────

    async def _ensure_email_available(
        self, email: str, exclude_id: UserId | None = None,
    ) -> None:
        existing = await self.store.find_by_email(email, exclude_id=exclude_id)
        if existing is not None:
            raise EmailAlreadyTakenError(
                ErrorContext(user_id=str(exclude_id) if exclude_id else None),
            )

    @staticmethod
    def _log_rejected(
        user_id: UserId, stage: ChangePasswordStage, error_code: str,
    ) -> None:
        logger.warning(
            "Password change rejected",
            extra={
                "user_id": str(user_id),
                "stage": stage.value,
                "error_code": error_code,
            },
        )
