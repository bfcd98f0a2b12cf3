from farmtrak.auth.errors import AuthError, AuthErrorKind
from farmtrak.auth.jwt import create_access_token, verify_token
from farmtrak.auth.ownership import ResourceType, check_ownership
from farmtrak.auth.password import hash_password, verify_password

__all__ = [
    "AuthError",
    "AuthErrorKind",
    "create_access_token",
    "verify_token",
    "ResourceType",
    "check_ownership",
    "hash_password",
    "verify_password",
]
