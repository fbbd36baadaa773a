"""Request Validation: operation-keyed schema check and first-error reporting.

Invariants:
    - validate_request is pure: returns the payload unchanged or raises
      RequestValidationFailure naming the first violated field/rule
    - The same first-error formatting is used for FastAPI's RequestValidationError,
      so HTTP and programmatic callers see identical messages

Design Decisions:
    - Explicit dict of operation -> schema (no auto-discovery)
    - Body-level errors (model validators) carry their own message without a field
      prefix, e.g. "password not same"
"""

from typing import Any, Sequence

from pydantic import BaseModel, ValidationError

from accounts_api.core.errors import RequestValidationFailure
from accounts_api.schemas.user import (
    ChangePasswordRequest,
    CreateUserRequest,
    UpdateUserRequest,
)


REQUEST_SCHEMAS: dict[str, type[BaseModel]] = {
    "create": CreateUserRequest,
    "update": UpdateUserRequest,
    "change_password": ChangePasswordRequest,
}

# FastAPI prefixes locations with where the value came from
_LOCATION_ROOTS = {"body", "path", "query", "header", "cookie"}
_VALUE_ERROR_PREFIX = "Value error, "


def validate_request(operation: str, payload: Any) -> Any:
    """Check payload against the operation's schema. Returns payload unchanged."""
    try:
        schema = REQUEST_SCHEMAS[operation]
    except KeyError:
        raise ValueError(f"Unknown operation '{operation}'") from None
    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        raise first_error_failure(exc.errors()) from None
    return payload


def first_error_failure(errors: Sequence[dict]) -> RequestValidationFailure:
    """Build the VALIDATION failure for the first error in a Pydantic error list."""
    if not errors:
        return RequestValidationFailure("Invalid request data")
    first = errors[0]
    field = _field_name(first.get("loc", ()))
    message = str(first.get("msg", "Invalid value"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    if field:
        message = f"{field}: {message}"
    return RequestValidationFailure(message, field=field)


def _field_name(loc: Sequence[Any]) -> str | None:
    # numeric parts are list indexes or JSON byte offsets, not field names
    parts = [p for p in loc if isinstance(p, str)]
    if parts and parts[0] in _LOCATION_ROOTS:
        parts = parts[1:]
    return ".".join(parts) or None
