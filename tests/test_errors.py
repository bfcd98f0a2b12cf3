"""Tests for the closed error taxonomy and its HTTP mapping."""

import pytest

from farmtrak.auth.errors import AUTH_ERROR_STATUS, AuthError, AuthErrorKind


def test_every_kind_has_a_status():
    assert set(AUTH_ERROR_STATUS) == set(AuthErrorKind)


@pytest.mark.parametrize(
    "kind, status_code",
    [
        (AuthErrorKind.MISSING_CREDENTIAL, 401),
        (AuthErrorKind.MALFORMED_CREDENTIAL, 401),
        (AuthErrorKind.EXPIRED_CREDENTIAL, 401),
        (AuthErrorKind.ACCOUNT_NOT_FOUND, 401),
        (AuthErrorKind.INSUFFICIENT_ROLE, 403),
        (AuthErrorKind.NOT_OWNER, 403),
        (AuthErrorKind.RESOURCE_NOT_FOUND, 404),
        (AuthErrorKind.INVALID_RESOURCE_REFERENCE, 400),
    ],
)
def test_status_mapping(kind, status_code):
    assert AuthError(kind).status_code == status_code


def test_default_message_and_override():
    assert AuthError(AuthErrorKind.EXPIRED_CREDENTIAL).message == "Token expired"
    assert AuthError(AuthErrorKind.RESOURCE_NOT_FOUND, "Farm not found").message == "Farm not found"


def test_account_not_found_message_does_not_reveal_absence():
    message = AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND).message.lower()
    assert "not found" not in message
    assert "exist" not in message


def test_only_401_carries_www_authenticate():
    assert AuthError(AuthErrorKind.MISSING_CREDENTIAL).headers == {"WWW-Authenticate": "Bearer"}
    assert AuthError(AuthErrorKind.NOT_OWNER).headers is None
