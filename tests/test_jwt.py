"""Tests for the credential verifier (token signature, expiry and claims)."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from farmtrak.auth.errors import AuthError, AuthErrorKind
from farmtrak.auth.jwt import create_access_token, subject_from_claims, verify_token
from farmtrak.config import settings


def _encode(payload: dict, secret: str = "test-secret") -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def _claims(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(uuid.uuid4()),
        "email": "farmer@example.com",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=1)).timestamp()),
        "iss": settings.jwt_issuer,
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


class TestVerifyToken:
    def test_valid_token_returns_claims(self):
        account_id = uuid.uuid4()
        token = create_access_token(account_id, "farmer@example.com", "farmer")

        payload = verify_token(token)

        assert payload["sub"] == str(account_id)
        assert payload["email"] == "farmer@example.com"
        assert payload["role"] == "farmer"
        assert payload["exp"] > payload["iat"]

    def test_expired_token_is_expired_credential(self):
        token = create_access_token(uuid.uuid4(), "a@example.com", "farmer", expires_in=timedelta(seconds=-1))

        with pytest.raises(AuthError) as exc_info:
            verify_token(token)
        assert exc_info.value.kind == AuthErrorKind.EXPIRED_CREDENTIAL

    def test_wrong_secret_is_malformed(self):
        token = create_access_token(uuid.uuid4(), "a@example.com", "farmer", secret="other-secret")

        with pytest.raises(AuthError) as exc_info:
            verify_token(token)
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    def test_forged_expired_token_is_malformed_not_expired(self):
        # Assinatura é checada antes da expiração
        token = create_access_token(
            uuid.uuid4(), "a@example.com", "farmer", expires_in=timedelta(seconds=-10), secret="forger"
        )

        with pytest.raises(AuthError) as exc_info:
            verify_token(token)
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    @pytest.mark.parametrize("token", ["not-a-jwt", "a.b.c", "Bearer x"])
    def test_garbage_is_malformed(self, token):
        with pytest.raises(AuthError) as exc_info:
            verify_token(token)
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    @pytest.mark.parametrize("token", ["", "   "])
    def test_empty_token_is_missing(self, token):
        with pytest.raises(AuthError) as exc_info:
            verify_token(token)
        assert exc_info.value.kind == AuthErrorKind.MISSING_CREDENTIAL

    def test_wrong_issuer_is_malformed(self):
        with pytest.raises(AuthError) as exc_info:
            verify_token(_encode(_claims(iss="someone-else")))
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    def test_missing_subject_is_malformed(self):
        with pytest.raises(AuthError) as exc_info:
            verify_token(_encode(_claims(sub=None)))
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    def test_non_uuid_subject_is_malformed(self):
        with pytest.raises(AuthError) as exc_info:
            verify_token(_encode(_claims(sub="42")))
        assert exc_info.value.kind == AuthErrorKind.MALFORMED_CREDENTIAL

    def test_error_detail_is_kept_for_diagnostics(self):
        with pytest.raises(AuthError) as exc_info:
            verify_token("not-a-jwt")
        assert exc_info.value.message == "Invalid token"
        assert exc_info.value.detail


def test_subject_from_claims_parses_uuid():
    account_id = uuid.uuid4()
    assert subject_from_claims({"sub": str(account_id)}) == account_id
