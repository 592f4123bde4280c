"""
Salted SHA-256 password digests.

Stored digests have the form `<hex salt>:<hex sha256(password + hex salt)>`.
The primitive is part of the on-disk format: switching to a different
algorithm would need a new, distinguishable digest format so that
existing digests keep verifying.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Optional

from .random_source import RandomSource, RandomSourceUnavailable

logger = logging.getLogger(__name__)

DEFAULT_SALT_LENGTH = 16
DEFAULT_TOKEN_LENGTH = 32
SEPARATOR = ":"


class HashingUnavailable(Exception):
    """The password could not be hashed (bad input or no randomness)."""


class PasswordHasher:
    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self._random = random_source or RandomSource()

    def _random_hex(self, length: int) -> str:
        return self._random.random_bytes(length).hex()

    def generate_salt(self, length: int = DEFAULT_SALT_LENGTH) -> str:
        return self._random_hex(length)

    def generate_token(self, length: int = DEFAULT_TOKEN_LENGTH) -> str:
        """Random hex string; shares the salt generator."""

        return self._random_hex(length)

    def hash_password(self, password: str, salt: Optional[str] = None) -> str:
        """
        Return `salt:hexdigest` for `password`.

        A fresh salt is generated when `salt` is None or empty.
        """

        try:
            actual_salt = salt or self.generate_salt()
            salted = (password + actual_salt).encode("utf-8")
        except (RandomSourceUnavailable, TypeError, UnicodeEncodeError) as exc:
            raise HashingUnavailable(str(exc)) from exc

        return f"{actual_salt}{SEPARATOR}{hashlib.sha256(salted).hexdigest()}"

    def verify_password(self, password: str, stored_hash: str) -> bool:
        """
        Check `password` against a stored `salt:hexdigest` string.

        Malformed digests (no separator, wrong types) verify as False.
        """

        if not isinstance(stored_hash, str):
            return False
        salt, sep, expected = stored_hash.partition(SEPARATOR)
        if not sep:
            return False

        try:
            computed = self.hash_password(password, salt)
        except HashingUnavailable:
            return False

        # An empty stored salt makes hash_password draw a fresh one, so
        # the comparison below fails as it should.
        computed_hex = computed.partition(SEPARATOR)[2]
        return hmac.compare_digest(computed_hex.encode(), expected.encode("utf-8", "replace"))
