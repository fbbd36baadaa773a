"""User Routes: HTTP adapters for the account service.

Invariants:
    - Request bodies are validated by Pydantic before the handler runs
    - Handlers call exactly one AccountService operation and shape the payload
    - No response ever contains password material (payloads built from public_view)
    - Failures propagate untouched to the global error handlers

Design Decisions:
    - AccountService built per request via Depends: store bound to the request's
      AsyncSession, hasher is a process-wide singleton
    - Success status is 200 for every operation, including create and delete
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from accounts_api.core.domain_types import UserId
from accounts_api.infrastructure.database import get_db
from accounts_api.infrastructure.password_hasher import get_password_hasher
from accounts_api.infrastructure.user_store import SqlAlchemyUserStore
from accounts_api.schemas.user import (
    ChangePasswordRequest,
    CreatedUserResponse,
    CreateUserRequest,
    MessageResponse,
    UpdateUserRequest,
    UserIdResponse,
    UserResponse,
)
from accounts_api.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    """FastAPI dependency: account service bound to this request's session."""
    return AccountService(SqlAlchemyUserStore(db), get_password_hasher())


@router.get("", response_model=list[UserResponse])
async def list_users(
    limit: int = Query(100, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: AccountService = Depends(get_account_service),
):
    """List users (public fields only)."""
    users = await service.list_users(limit=limit, offset=offset)
    return [user.public_view() for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID, service: AccountService = Depends(get_account_service),
):
    """Get one user. Unknown ids are a 422."""
    user = await service.get_user(UserId(user_id))
    return user.public_view()


@router.post("", response_model=CreatedUserResponse)
async def create_user(
    body: CreateUserRequest,
    service: AccountService = Depends(get_account_service),
):
    """Create a user and echo back name and email."""
    user = await service.create_user(body.name, body.email, body.password)
    return {"name": user.name, "email": user.email}


@router.put("/{user_id}", response_model=UserIdResponse)
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    service: AccountService = Depends(get_account_service),
):
    """Replace name and email."""
    updated = await service.update_user(UserId(user_id), body.name, body.email)
    return {"id": str(updated)}


@router.delete("/{user_id}", response_model=UserIdResponse)
async def delete_user(
    user_id: UUID, service: AccountService = Depends(get_account_service),
):
    deleted = await service.delete_user(UserId(user_id))
    return {"id": str(deleted)}


@router.put("/{user_id}/password", response_model=MessageResponse)
async def change_password(
    user_id: UUID,
    body: ChangePasswordRequest,
    service: AccountService = Depends(get_account_service),
):
    """Rotate the user's password after verifying the current one."""
    return await service.change_password(
        UserId(user_id),
        body.old_password,
        body.new_password,
        body.new_password_confirm,
    )
