"""Tests for JWT tokens and password hashing."""

from datetime import timedelta

import pytest

from app.infrastructure.security import (
    create_access_token,
    get_password_hash,
    hash_password_async,
    verify_password,
    verify_password_async,
    verify_token,
)


def test_token_round_trip_carries_tenant_and_role() -> None:
    token = create_access_token("u1", "t1", "manager")
    payload = verify_token(token)
    assert payload["sub"] == "u1"
    assert payload["tenant_id"] == "t1"
    assert payload["role"] == "manager"
    assert payload["exp"] > payload["iat"]


def test_expired_token_rejected() -> None:
    token = create_access_token("u1", "t1", "staff", expires_delta=timedelta(seconds=-1))
    with pytest.raises(ValueError, match="Invalid token"):
        verify_token(token)


def test_tampered_token_rejected() -> None:
    token = create_access_token("u1", "t1", "staff")
    with pytest.raises(ValueError):
        verify_token(token[:-2] + ("aa" if not token.endswith("aa") else "bb"))


def test_password_hash_verifies() -> None:
    hashed = get_password_hash("correct horse battery staple")
    assert hashed != "correct horse battery staple"
    assert verify_password("correct horse battery staple", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("anything", "not-a-bcrypt-hash")


def test_long_passwords_are_not_truncated() -> None:
    base = "x" * 80
    hashed = get_password_hash(base + "a")
    assert not verify_password(base + "b", hashed)


async def test_async_helpers() -> None:
    hashed = await hash_password_async("s3cret-pass")
    assert await verify_password_async("s3cret-pass", hashed)
