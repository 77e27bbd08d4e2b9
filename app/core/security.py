# File: app/core/security.py

"""
Password hashing helpers for the Users API.

bcrypt only looks at the first 72 bytes of a password, and recent releases
of the library refuse longer input instead of truncating it. Both helpers
cut the encoded password to that limit so hashing and checking agree.
"""

from typing import Optional

import bcrypt

from app.core.config import settings

BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(plain: str, rounds: Optional[int] = None) -> str:
    """Return a bcrypt hash (as text) for a plaintext password."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_encode(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """
    Check a plaintext password against a stored bcrypt hash.

    A stored value that is not a valid bcrypt hash never matches.
    """
    try:
        return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
    except ValueError:
        return False
