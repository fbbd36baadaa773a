"""Error Classifier: kind -> status mapping and response bodies.

Tests:
    - VALIDATION and NOT_FOUND_OR_UNPROCESSABLE -> 422
    - UNAUTHORIZED -> 401, INTERNAL -> 500
    - Unknown kinds and untyped exceptions fall back to 500 with a generic body
    - Messages pass through verbatim
"""

import pytest

from accounts_api.core.error_classifier import (
    INTERNAL_ERROR_BODY,
    classify,
    status_for_kind,
)
from accounts_api.core.errors import (
    DatabaseError,
    EmailAlreadyTakenError,
    FailureKind,
    InvalidOldPasswordError,
    RequestValidationFailure,
    UnknownUserError,
)


@pytest.mark.parametrize("kind, expected", [
    (FailureKind.VALIDATION, 422),
    (FailureKind.NOT_FOUND_OR_UNPROCESSABLE, 422),
    (FailureKind.UNAUTHORIZED, 401),
    (FailureKind.INTERNAL, 500),
])
def test_status_for_kind(kind, expected):
    assert status_for_kind(kind) == expected


def test_unknown_kind_falls_back_to_500():
    assert status_for_kind(None) == 500


def test_not_found_and_unprocessable_share_status():
    status_missing, _ = classify(UnknownUserError("x"))
    status_taken, _ = classify(EmailAlreadyTakenError())
    assert status_missing == status_taken == 422


def test_classify_passes_message_verbatim():
    status, body = classify(InvalidOldPasswordError())
    assert status == 401
    assert body["error"]["message"] == "Invalid old password"


def test_classify_validation_failure():
    status, body = classify(RequestValidationFailure("password not same"))
    assert status == 422
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["error"]["message"] == "password not same"


def test_classify_database_error_is_500():
    status, body = classify(DatabaseError("down", "execute"))
    assert status == 500
    assert body["error"]["kind"] == "internal"


def test_classify_untyped_exception_hides_details():
    status, body = classify(RuntimeError("secret connection string"))
    assert status == 500
    assert body == INTERNAL_ERROR_BODY
    assert "secret" not in str(body)
