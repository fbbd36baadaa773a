"""PUT /users/{id}/password: credential rotation over HTTP with real bcrypt.

Invariants:
    - Correct old password + valid new password -> 200 {message}
    - Wrong old password -> 401, stored hash unchanged
    - New password shorter than 6 -> 422 regardless of old password correctness
    - After rotation the new password verifies and the old one does not
"""

from uuid import UUID, uuid4

from sqlalchemy import select

from accounts_api.models.user import User as UserModel


def _body(old="secret1", new="secret2", confirm=None):
    return {
        "password_lama": old,
        "password_baru": new,
        "password_baru_confirm": new if confirm is None else confirm,
    }


async def _stored_hash(test_session_factory, user_id: str) -> str:
    async with test_session_factory() as db:
        result = await db.execute(
            select(UserModel.password_hash).where(UserModel.id == UUID(user_id)),
        )
        return result.scalar_one()


async def test_change_password_success(client, created_user):
    res = await client.put(f"/users/{created_user['id']}/password", json=_body())
    assert res.status_code == 200
    assert res.json() == {"message": "Password updated successfully"}


async def test_round_trip_new_verifies_old_fails(
    client, created_user, test_session_factory, bcrypt_hasher,
):
    await client.put(f"/users/{created_user['id']}/password", json=_body())
    stored = await _stored_hash(test_session_factory, created_user["id"])
    assert await bcrypt_hasher.verify("secret2", stored)
    assert not await bcrypt_hasher.verify("secret1", stored)


async def test_second_rotation_requires_new_password(client, created_user):
    await client.put(f"/users/{created_user['id']}/password", json=_body())
    stale = await client.put(
        f"/users/{created_user['id']}/password", json=_body(old="secret1", new="secret3"),
    )
    assert stale.status_code == 401
    fresh = await client.put(
        f"/users/{created_user['id']}/password", json=_body(old="secret2", new="secret3"),
    )
    assert fresh.status_code == 200


async def test_wrong_old_password_returns_401(
    client, created_user, test_session_factory,
):
    before = await _stored_hash(test_session_factory, created_user["id"])
    res = await client.put(
        f"/users/{created_user['id']}/password", json=_body(old="wrong-1"),
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid old password"
    assert await _stored_hash(test_session_factory, created_user["id"]) == before


async def test_short_new_password_returns_422_with_correct_old(client, created_user):
    res = await client.put(
        f"/users/{created_user['id']}/password", json=_body(new="abc"),
    )
    assert res.status_code == 422
    assert "password_baru" in res.json()["error"]["message"]


async def test_short_new_password_returns_422_with_wrong_old(client, created_user):
    res = await client.put(
        f"/users/{created_user['id']}/password", json=_body(old="wrong-1", new="abc"),
    )
    assert res.status_code == 422


async def test_mismatched_confirmation_returns_422(
    client, created_user, test_session_factory,
):
    before = await _stored_hash(test_session_factory, created_user["id"])
    res = await client.put(
        f"/users/{created_user['id']}/password",
        json=_body(new="secret2", confirm="secret3"),
    )
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "password not same"
    assert await _stored_hash(test_session_factory, created_user["id"]) == before


async def test_unknown_user_returns_422(client):
    res = await client.put(f"/users/{uuid4()}/password", json=_body())
    assert res.status_code == 422
    assert res.json()["error"]["message"] == "Unknown user"


async def test_response_never_echoes_passwords(client, created_user):
    res = await client.put(f"/users/{created_user['id']}/password", json=_body())
    assert "secret" not in res.text
    assert "$2" not in res.text
