"""Password hashing and session token helpers."""

from __future__ import annotations

import hashlib
import hmac
import secrets
from datetime import datetime, timezone

_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 260_000, salt: str | None = None) -> str:
    """PBKDF2-HMAC-SHA256 hash encoded as ``algorithm$iterations$salt$hex``."""
    if salt is None:
        salt = secrets.token_hex(16)
    key = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{_ALGORITHM}${iterations}${salt}${key.hex()}"


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt, _ = encoded.split("$", 3)
    except ValueError:
        return False
    if algorithm != _ALGORITHM:
        return False
    candidate = hash_password(password, int(iterations), salt)
    return hmac.compare_digest(candidate, encoded)


def generate_token() -> str:
    return secrets.token_urlsafe(32)


def is_expired(expires_at: datetime, now: datetime | None = None) -> bool:
    """Compare in UTC; SQLite hands timestamps back without tzinfo."""
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return (now or datetime.now(timezone.utc)) >= expires_at
