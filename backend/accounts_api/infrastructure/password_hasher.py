"""Password Hasher: bcrypt via passlib, executed off the event loop.

Invariants:
    - hash() output is opaque and salted; equal inputs give different hashes
    - verify() never raises on a malformed stored hash; it returns False
    - Every byte of the password counts: plain bcrypt reads only the first 72 bytes,
      so new hashes use bcrypt_sha256 (SHA-256 prehash, then bcrypt)
    - Hashes written by plain bcrypt still verify
    - Hashing runs in a worker thread (bcrypt is CPU-bound)

Design Decisions:
    - passlib CryptContext with deprecated="auto": a scheme change only touches this file
    - Cost factor from settings (password_hash_rounds): tests run with the minimum
"""

from functools import lru_cache

import anyio
from passlib.context import CryptContext

from accounts_api.config import get_settings


class BcryptPasswordHasher:
    """PasswordHasher implementation backed by a passlib CryptContext."""

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(
            schemes=["bcrypt_sha256", "bcrypt"],
            deprecated="auto",
            bcrypt_sha256__rounds=rounds,
            bcrypt__rounds=rounds,
        )

    async def hash(self, plain: str) -> str:
        return await anyio.to_thread.run_sync(self._context.hash, plain)

    async def verify(self, plain: str, hashed: str) -> bool:
        return await anyio.to_thread.run_sync(self._verify, plain, hashed)

    def _verify(self, plain: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(plain, hashed)
        except (ValueError, TypeError):
            return False


@lru_cache
def get_password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=get_settings().password_hash_rounds)
