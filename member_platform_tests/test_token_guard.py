"""Tests for bearer token issuance and validation."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from member_platform.member_service.auth import Identity, TokenGuard
from member_platform.member_service.errors import AuthenticationError

from .conftest import bearer

SECRET = "unit-test-secret-0123456789abcdef-0123456789"


@pytest.fixture
def token_guard():
    return TokenGuard(SECRET)


def test_issued_token_is_accepted_immediately(token_guard):
    token = token_guard.issue_token(42, "a@x.com")
    assert token_guard.validate_token(token) == Identity(user_id=42, email="a@x.com")


def test_token_claims(token_guard):
    token = token_guard.issue_token(7, "claims@x.com")
    data = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert data["sub"] == "7"
    assert data["email"] == "claims@x.com"
    assert data["exp"] - data["iat"] == 24 * 60 * 60


def test_token_valid_just_before_expiry(token_guard):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24) + timedelta(seconds=60)
    token = token_guard.issue_token(1, "a@x.com", issued_at=issued_at)
    assert token_guard.validate_token(token).user_id == 1


def test_token_rejected_after_expiry(token_guard):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24, seconds=1)
    token = token_guard.issue_token(1, "a@x.com", issued_at=issued_at)
    with pytest.raises(AuthenticationError) as exc_info:
        token_guard.validate_token(token)
    assert exc_info.value.message == "Invalid or expired token"
    assert exc_info.value.status_code == 401


def test_leeway_tolerates_small_clock_skew():
    lenient = TokenGuard(SECRET, leeway=timedelta(seconds=30))
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24, seconds=10)
    token = lenient.issue_token(1, "a@x.com", issued_at=issued_at)
    assert lenient.validate_token(token).email == "a@x.com"


def test_tampered_payload_is_rejected(token_guard):
    header, _payload, signature = token_guard.issue_token(1, "a@x.com").split(".")
    _, other_payload, _ = token_guard.issue_token(2, "admin@x.com").split(".")
    with pytest.raises(AuthenticationError):
        token_guard.validate_token(f"{header}.{other_payload}.{signature}")


def test_token_from_other_secret_is_rejected(token_guard):
    forged = TokenGuard("someone-elses-secret-0123456789abcdef-01234").issue_token(1, "a@x.com")
    with pytest.raises(AuthenticationError):
        token_guard.validate_token(forged)


def test_token_without_identity_claims_is_rejected(token_guard):
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthenticationError):
        token_guard.validate_token(token)


def test_unsigned_token_is_rejected(token_guard):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "1", "email": "a@x.com", "iat": now, "exp": now + timedelta(hours=1)},
        None,
        algorithm="none",
    )
    with pytest.raises(AuthenticationError):
        token_guard.validate_token(token)


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenGuard("")


def test_secret_not_in_repr(token_guard):
    assert SECRET not in repr(token_guard)


def test_expired_token_rejected_by_api(client, register, guard):
    user = register()["user"]
    stale = guard.issue_token(
        user["id"], user["email"],
        issued_at=datetime.now(timezone.utc) - timedelta(hours=25),
    )
    response = client.get("/profile", headers=bearer(stale))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or expired token"}
