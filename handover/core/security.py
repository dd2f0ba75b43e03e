"""Password hashing and session token generation."""

import secrets
from functools import lru_cache

import bcrypt

from handover.core.config import settings

# Bytes of randomness in a session token (encoded as URL-safe base64).
SESSION_TOKEN_BYTES = 32

# Reserved account seeded on startup; it can never be deleted.
ADMIN_USERNAME = "admin"

USERNAME_MAX_LEN = 255
NAME_MAX_LEN = 255


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; anything beyond it is ignored by the algorithm.
    pw_bytes = plain_password.encode("utf-8")[:72]
    cost = rounds if rounds is not None else settings.BCRYPT_ROUNDS
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def dummy_password_hash() -> str:
    """Hash compared against when the username is unknown, so both login paths run bcrypt."""
    return hash_password(secrets.token_urlsafe(16))


def new_session_token() -> str:
    """Return an unguessable opaque session identifier."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
