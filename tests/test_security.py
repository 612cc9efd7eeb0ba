"""Test password hashing and session expiry helpers."""
from datetime import datetime, timedelta, timezone

from auth.security import generate_token, hash_password, is_expired, verify_password


def test_hash_and_verify():
    encoded = hash_password("secret1", iterations=1000)
    assert encoded.startswith("pbkdf2_sha256$1000$")
    assert verify_password("secret1", encoded)
    assert not verify_password("secret2", encoded)


def test_salt_differs_per_hash():
    assert hash_password("secret1", 1000) != hash_password("secret1", 1000)


def test_verify_rejects_garbage():
    assert not verify_password("secret1", "plaintext")
    assert not verify_password("secret1", "md5$1$salt$abc")


def test_tokens_are_unique():
    assert generate_token() != generate_token()


def test_is_expired():
    now = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    assert is_expired(now - timedelta(seconds=1), now)
    assert not is_expired(now + timedelta(hours=1), now)


def test_is_expired_naive_treated_as_utc():
    now = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
    assert not is_expired(datetime(2024, 1, 1, 13), now)
