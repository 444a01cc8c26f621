"""Tests for registration, login and token validation."""

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt
from sqlalchemy import select

from cinecollection.core.exceptions import AuthError, ConflictError, NotFoundError, ValidationError
from cinecollection.models.user import User
from cinecollection.services.auth_service import AuthService, Identity


@pytest.mark.asyncio
async def test_register_returns_token_and_public_user(auth_service, db_session):
    result = await auth_service.register("Carol@Example.com ", "s3cret-pass", "Carol")

    assert set(result.user) == {"id", "email", "name"}
    assert result.user["email"] == "carol@example.com"
    assert result.user["name"] == "Carol"

    identity = AuthService.validate_token(result.token)
    assert identity == Identity(user_id=result.user["id"], email="carol@example.com")

    stored = (await db_session.execute(select(User))).scalar_one()
    assert stored.password_hash != "s3cret-pass"
    assert stored.password_hash.startswith("$2")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "email,password,name",
    [
        ("", "pw", "Name"),
        ("a@example.com", "", "Name"),
        ("a@example.com", "pw", ""),
        ("   ", "pw", "Name"),
        (None, "pw", "Name"),
    ],
)
async def test_register_requires_all_fields(auth_service, email, password, name):
    with pytest.raises(ValidationError):
        await auth_service.register(email, password, name)


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(auth_service):
    await auth_service.register("dup@example.com", "first-pass", "First")

    with pytest.raises(ConflictError):
        await auth_service.register("dup@example.com", "second-pass", "Second")


@pytest.mark.asyncio
async def test_register_duplicate_is_case_insensitive(auth_service):
    await auth_service.register("dup@example.com", "first-pass", "First")

    with pytest.raises(ConflictError):
        await auth_service.register("DUP@Example.COM", "second-pass", "Second")


@pytest.mark.asyncio
async def test_login_success(auth_service, alice):
    identity, _ = alice

    result = await auth_service.login("ALICE@example.com", "correct-horse")

    assert result.user == {"id": identity.user_id, "email": "alice@example.com", "name": "Alice"}
    assert AuthService.validate_token(result.token).user_id == identity.user_id


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_email_are_indistinguishable(auth_service, alice):
    with pytest.raises(AuthError) as wrong_password:
        await auth_service.login("alice@example.com", "wrong-password")
    with pytest.raises(AuthError) as unknown_email:
        await auth_service.login("nobody@example.com", "correct-horse")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"
    assert wrong_password.value.status_code == unknown_email.value.status_code == 400


@pytest.mark.asyncio
async def test_login_requires_email_and_password(auth_service):
    with pytest.raises(ValidationError):
        await auth_service.login("", "pw")


@pytest.mark.asyncio
async def test_token_expires_after_24_hours(auth_service, alice):
    identity, _ = alice
    user = await auth_service.get_user(identity.user_id)
    now = datetime.now(timezone.utc)

    issued_an_hour_ago = AuthService.issue_token(user, issued_at=now - timedelta(hours=1))
    issued_25_hours_ago = AuthService.issue_token(user, issued_at=now - timedelta(hours=25))

    assert AuthService.validate_token(issued_an_hour_ago) == identity
    with pytest.raises(AuthError) as exc_info:
        AuthService.validate_token(issued_25_hours_ago)
    assert exc_info.value.status_code == 401


@pytest.mark.parametrize("token", ["", "not-a-token", "a.b.c"])
def test_malformed_tokens_rejected(token):
    with pytest.raises(AuthError):
        AuthService.validate_token(token)


def test_token_signed_with_other_key_rejected():
    forged = jwt.encode(
        {"sub": "1", "email": "alice@example.com",
         "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "some-other-secret",
        algorithm="HS256",
    )

    with pytest.raises(AuthError):
        AuthService.validate_token(forged)


@pytest.mark.asyncio
async def test_tampered_token_rejected(alice):
    _, token = alice
    header, _, signature = token.split(".")
    claims = {"sub": "999", "email": "mallory@example.com", "exp": 4102444800}
    forged_payload = base64.urlsafe_b64encode(json.dumps(claims).encode()).rstrip(b"=").decode()
    tampered = ".".join([header, forged_payload, signature])

    with pytest.raises(AuthError):
        AuthService.validate_token(tampered)


@pytest.mark.asyncio
async def test_get_user_missing(auth_service):
    with pytest.raises(NotFoundError):
        await auth_service.get_user(999)
