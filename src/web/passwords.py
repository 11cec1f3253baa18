"""Password hashing (scrypt) and password-reset tokens."""

import hashlib
import os
import secrets

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

SALT_BYTES = 16
KEY_LENGTH = 64
RESET_TOKEN_BYTES = 32


def _kdf(salt: bytes) -> Scrypt:
    return Scrypt(salt=salt, length=KEY_LENGTH, n=2**14, r=8, p=1)


def hash_password(password: str) -> str:
    """Return ``salt_hex:derived_hex`` with a fresh random salt."""
    salt = os.urandom(SALT_BYTES)
    derived = _kdf(salt).derive(password.encode())
    return f"{salt.hex()}:{derived.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """Constant-time check of ``password`` against a stored hash."""
    salt_hex, _, derived_hex = (stored or "").partition(":")
    if not salt_hex or not derived_hex:
        return False
    try:
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(derived_hex)
    except ValueError:
        return False
    try:
        _kdf(salt).verify(password.encode(), expected)
    except InvalidKey:
        return False
    return True


def hash_reset_token(raw: str) -> str:
    return hashlib.sha256(raw.encode()).hexdigest()


def generate_reset_token() -> tuple[str, str]:
    """Return (raw token for the user, sha256 hash for the database)."""
    raw = secrets.token_hex(RESET_TOKEN_BYTES)
    return raw, hash_reset_token(raw)
