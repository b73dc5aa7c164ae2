"""
Tests for token issuance and verification.

Tests cover:
- Claims round trip
- Expiry
- Signature tampering and foreign secrets
- Malformed and incomplete tokens
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from core.auth import CredentialService, TokenClaims
from core.exceptions import InvalidTokenError
from modules.auth.models import UserRole
from tests.conftest import TEST_SECRET, make_settings


@pytest.fixture
def service():
    return CredentialService(make_settings())


@pytest.fixture
def user_id():
    return str(uuid.uuid4())


class TestTokenGeneration:
    """Token issuance."""

    def test_token_payload(self, service, user_id):
        token = service.issue_token(user_id, "fudge@sweetshop.com", "user")

        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["sub"] == user_id
        assert payload["userId"] == user_id
        assert payload["email"] == "fudge@sweetshop.com"
        assert payload["role"] == "user"
        assert "iat" in payload

    def test_token_expires_after_24_hours(self, service, user_id):
        token = service.issue_token(user_id, "fudge@sweetshop.com", UserRole.ADMIN)

        payload = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_unknown_role_is_refused(self, service, user_id):
        with pytest.raises(ValueError):
            service.issue_token(user_id, "fudge@sweetshop.com", "superuser")


class TestTokenVerification:
    """Token verification."""

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.ADMIN])
    def test_round_trip_recovers_identity(self, service, user_id, role):
        token = service.issue_token(user_id, "fudge@sweetshop.com", role.value)

        claims = service.verify_token(token)

        assert isinstance(claims, TokenClaims)
        assert (claims.user_id, claims.email, claims.role) == (
            user_id,
            "fudge@sweetshop.com",
            role,
        )
        assert claims.expires_at - claims.issued_at == timedelta(hours=24)

    def test_expired_token_rejected(self, service, user_id):
        token = service.issue_token(
            user_id, "fudge@sweetshop.com", "user", expires_delta=timedelta(seconds=-1)
        )

        with pytest.raises(InvalidTokenError) as exc_info:
            service.verify_token(token)
        assert exc_info.value.detail == "Invalid or expired token"

    def test_altered_signature_rejected(self, service, user_id):
        token = service.issue_token(user_id, "fudge@sweetshop.com", "user")
        header, payload, signature = token.split(".")
        flipped = ("A" if signature[0] != "A" else "B") + signature[1:]

        with pytest.raises(InvalidTokenError):
            service.verify_token(".".join([header, payload, flipped]))

    def test_altered_payload_rejected(self, service, user_id):
        token = service.issue_token(user_id, "fudge@sweetshop.com", "user")
        forged = jwt.encode(
            {"sub": user_id, "userId": user_id, "email": "fudge@sweetshop.com", "role": "admin",
             "iat": datetime.now(timezone.utc), "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "not-the-shop-secret",
            algorithm="HS256",
        )
        # Splice the admin payload onto the genuine signature
        header, _, signature = token.split(".")
        _, forged_payload, _ = forged.split(".")

        with pytest.raises(InvalidTokenError):
            service.verify_token(".".join([header, forged_payload, signature]))

    def test_token_from_other_secret_rejected(self, user_id):
        other = CredentialService(make_settings(jwt_secret_key="someone-elses-secret"))
        token = other.issue_token(user_id, "fudge@sweetshop.com", "admin")

        with pytest.raises(InvalidTokenError):
            CredentialService(make_settings()).verify_token(token)

    @pytest.mark.parametrize("token", ["", "invalid.token.here", "not-a-jwt", "a.b"])
    def test_malformed_token_rejected(self, service, token):
        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_unsigned_token_rejected(self, service, user_id):
        token = jwt.encode(
            {"sub": user_id, "userId": user_id, "email": "fudge@sweetshop.com", "role": "admin"},
            TEST_SECRET,
            algorithm="HS256",
        )
        header, payload, _ = token.split(".")
        # {"alg":"none","typ":"JWT"}
        none_header = "eyJhbGciOiJub25lIiwidHlwIjoiSldUIn0"

        with pytest.raises(InvalidTokenError):
            service.verify_token(f"{none_header}.{payload}.")

    @pytest.mark.parametrize(
        "missing", ["userId", "sub", "email", "role", "exp", "iat"]
    )
    def test_token_missing_claim_rejected(self, service, user_id, missing):
        now = datetime.now(timezone.utc)
        claims = {
            "sub": user_id,
            "userId": user_id,
            "email": "fudge@sweetshop.com",
            "role": "user",
            "iat": now,
            "exp": now + timedelta(hours=1),
        }
        del claims[missing]
        token = jwt.encode(claims, TEST_SECRET, algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_token_with_unknown_role_rejected(self, service, user_id):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"sub": user_id, "userId": user_id, "email": "fudge@sweetshop.com",
             "role": "superuser", "iat": now, "exp": now + timedelta(hours=1)},
            TEST_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            service.verify_token(token)

    def test_leeway_tolerates_small_clock_skew(self, user_id):
        lenient = CredentialService(make_settings(jwt_leeway_seconds=120))
        token = lenient.issue_token(
            user_id, "fudge@sweetshop.com", "user", expires_delta=timedelta(seconds=-5)
        )

        assert lenient.verify_token(token).user_id == user_id
