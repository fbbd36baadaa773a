"""Domain Types: UserRecord public view and pipeline stages.

Tests:
    - public_view() exposes id/name/email only
    - repr never includes the password hash
    - ChangePasswordStage lists the pipeline in order
"""

from uuid import uuid4

from accounts_api.core.domain_types import ChangePasswordStage, UserId, UserRecord


def _record():
    return UserRecord(
        id=UserId(uuid4()), name="A", email="a@x.com", password_hash="$2b$04$hash",
    )


def test_public_view_excludes_hash():
    record = _record()
    view = record.public_view()
    assert set(view) == {"id", "name", "email"}
    assert view["id"] == str(record.id)


def test_repr_excludes_hash():
    assert "$2b$04$hash" not in repr(_record())


def test_change_password_stages_in_order():
    assert [s.value for s in ChangePasswordStage] == [
        "start",
        "identity_resolved",
        "old_password_verified",
        "new_password_validated",
        "hashed",
        "persisted",
    ]
