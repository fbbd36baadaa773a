"""BcryptPasswordHasher: passlib-backed hashing run in a worker thread."""

import pytest
from passlib.hash import bcrypt

from accounts_api.core.errors import InvalidOldPasswordError
from accounts_api.infrastructure.password_hasher import (
    BcryptPasswordHasher,
    get_password_hasher,
)
from accounts_api.services.account_service import AccountService

from tests.services.fakes import FakeUserStore

# 32 characters, 86 UTF-8 bytes: the first 72 bytes are shared
LONG_REAL = "😀" * 18 + "a" * 14
LONG_WRONG = "😀" * 18 + "z" * 14


async def test_hash_is_opaque_and_salted(bcrypt_hasher):
    first = await bcrypt_hasher.hash("secret1")
    second = await bcrypt_hasher.hash("secret1")
    assert first != "secret1"
    assert first != second
    assert first.startswith("$bcrypt-sha256$")


async def test_verify_accepts_correct_password(bcrypt_hasher):
    hashed = await bcrypt_hasher.hash("secret1")
    assert await bcrypt_hasher.verify("secret1", hashed)


async def test_verify_rejects_wrong_password(bcrypt_hasher):
    hashed = await bcrypt_hasher.hash("secret1")
    assert not await bcrypt_hasher.verify("secret2", hashed)


async def test_verify_malformed_hash_is_false(bcrypt_hasher):
    assert not await bcrypt_hasher.verify("secret1", "not-a-hash")
    assert not await bcrypt_hasher.verify("secret1", "")


async def test_verify_across_cost_factors():
    hashed = await BcryptPasswordHasher(rounds=5).hash("secret1")
    assert await BcryptPasswordHasher(rounds=4).verify("secret1", hashed)


async def test_bytes_past_72_are_significant(bcrypt_hasher):
    assert len(LONG_REAL) == 32
    assert LONG_REAL.encode()[:72] == LONG_WRONG.encode()[:72]
    hashed = await bcrypt_hasher.hash(LONG_REAL)
    assert await bcrypt_hasher.verify(LONG_REAL, hashed)
    assert not await bcrypt_hasher.verify(LONG_WRONG, hashed)


async def test_plain_bcrypt_hash_still_verifies(bcrypt_hasher):
    legacy = bcrypt.using(rounds=4).hash("secret1")
    assert await bcrypt_hasher.verify("secret1", legacy)
    assert not await bcrypt_hasher.verify("secret2", legacy)


async def test_change_password_rejects_old_password_sharing_72_byte_prefix(
    bcrypt_hasher,
):
    store = FakeUserStore()
    service = AccountService(store, bcrypt_hasher)
    user = await service.create_user("A", "a@x.com", LONG_REAL)
    stored = store.users[user.id].password_hash

    with pytest.raises(InvalidOldPasswordError):
        await service.change_password(user.id, LONG_WRONG, "secret2", "secret2")
    assert store.users[user.id].password_hash == stored


def test_app_hasher_uses_configured_rounds():
    hasher = get_password_hasher()
    assert hasher is get_password_hasher()
    assert isinstance(hasher, BcryptPasswordHasher)
