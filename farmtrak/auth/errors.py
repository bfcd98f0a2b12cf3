from __future__ import annotations

import enum

from fastapi import status


class AuthErrorKind(str, enum.Enum):
    """Tipos fechados de falha da camada de autenticação/autorização."""

    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    MALFORMED_CREDENTIAL = "MALFORMED_CREDENTIAL"
    EXPIRED_CREDENTIAL = "EXPIRED_CREDENTIAL"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    INSUFFICIENT_ROLE = "INSUFFICIENT_ROLE"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    NOT_OWNER = "NOT_OWNER"
    INVALID_RESOURCE_REFERENCE = "INVALID_RESOURCE_REFERENCE"


AUTH_ERROR_STATUS: dict[AuthErrorKind, int] = {
    AuthErrorKind.MISSING_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.MALFORMED_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.EXPIRED_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    # Sessão inválida: não revela se a conta existe ou não
    AuthErrorKind.ACCOUNT_NOT_FOUND: status.HTTP_401_UNAUTHORIZED,
    AuthErrorKind.INSUFFICIENT_ROLE: status.HTTP_403_FORBIDDEN,
    AuthErrorKind.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AuthErrorKind.NOT_OWNER: status.HTTP_403_FORBIDDEN,
    AuthErrorKind.INVALID_RESOURCE_REFERENCE: status.HTTP_400_BAD_REQUEST,
}

_DEFAULT_MESSAGE: dict[AuthErrorKind, str] = {
    AuthErrorKind.MISSING_CREDENTIAL: "Missing Authorization: Bearer <token>",
    AuthErrorKind.MALFORMED_CREDENTIAL: "Invalid token",
    AuthErrorKind.EXPIRED_CREDENTIAL: "Token expired",
    AuthErrorKind.ACCOUNT_NOT_FOUND: "Invalid session",
    AuthErrorKind.INSUFFICIENT_ROLE: "Insufficient permissions",
    AuthErrorKind.RESOURCE_NOT_FOUND: "Resource not found",
    AuthErrorKind.NOT_OWNER: "You can only access your own resources",
    AuthErrorKind.INVALID_RESOURCE_REFERENCE: "Invalid resource reference",
}


class AuthError(Exception):
    """
    Falha de um dos gates da pipeline de autorização.

    Args:
        kind: tipo da falha (define o status HTTP)
        message: mensagem pública; usa a mensagem padrão do tipo se omitida
        detail: diagnóstico interno, exposto apenas em APP_ENV=development
    """

    def __init__(self, kind: AuthErrorKind, message: str | None = None, *, detail: str | None = None):
        self.kind = kind
        self.message = message or _DEFAULT_MESSAGE[kind]
        self.detail = detail
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return AUTH_ERROR_STATUS[self.kind]

    @property
    def headers(self) -> dict[str, str] | None:
        if self.status_code == status.HTTP_401_UNAUTHORIZED:
            return {"WWW-Authenticate": "Bearer"}
        return None
