"""User Schemas: Pydantic models with field-level validation for the /users API.

Invariants:
    - CreateUserRequest: name 1-100, valid email, password 6-32, confirmation equal
    - UpdateUserRequest: name and email both required (full replace)
    - ChangePasswordRequest: old/new 6-32, new confirmation equal
    - Response models never declare a password or hash field

Design Decisions:
    - Field bounds come from core/password_rules.py so schema and service agree
    - Wire names for change-password stay password_lama / password_baru /
      password_baru_confirm; Python attributes use old/new via aliases
    - model_validator for confirmation: runs after field checks, so a short password
      is reported before a mismatch
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from accounts_api.core.password_rules import (
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
)


class CreateUserRequest(BaseModel):
    """Account creation: confirmation must match the password."""
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(
        min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH,
    )
    password_confirm: str

    @model_validator(mode="after")
    def passwords_match(self) -> "CreateUserRequest":
        if self.password != self.password_confirm:
            raise ValueError("password not same")
        return self


class UpdateUserRequest(BaseModel):
    """Account update: both fields required even when only one changes."""
    name: str = Field(min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    email: EmailStr


class ChangePasswordRequest(BaseModel):
    """Credential rotation: old password plus a confirmed new password."""
    model_config = ConfigDict(populate_by_name=True)

    old_password: str = Field(
        alias="password_lama",
        min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH,
    )
    new_password: str = Field(
        alias="password_baru",
        min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH,
    )
    new_password_confirm: str = Field(alias="password_baru_confirm")

    @model_validator(mode="after")
    def new_passwords_match(self) -> "ChangePasswordRequest":
        if self.new_password != self.new_password_confirm:
            raise ValueError("password not same")
        return self


# --- Responses ----------------------------------------------------------------

class UserResponse(BaseModel):
    """Public user shape: id, name, email."""
    id: str
    name: str
    email: str


class CreatedUserResponse(BaseModel):
    name: str
    email: str


class UserIdResponse(BaseModel):
    id: str


class MessageResponse(BaseModel):
    message: str
