import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt, JWTError, ExpiredSignatureError

from farmtrak.auth.errors import AuthError, AuthErrorKind
from farmtrak.config import settings


def create_access_token(
    account_id: uuid.UUID,
    email: str,
    role: str,
    *,
    expires_in: timedelta | None = None,
    secret: str | None = None,
) -> str:
    """
    Cria um token JWT com as informações da conta.

    Args:
        account_id: ID da conta no banco
        email: Email da conta
        role: Role da conta no momento da emissão (apenas informativo;
            a autorização sempre usa a role atual do banco)
        expires_in: validade; padrão JWT_EXPIRATION_HOURS
        secret: segredo de assinatura; padrão JWT_SECRET

    Returns:
        Token JWT codificado
    """
    now = datetime.now(timezone.utc)
    if expires_in is None:
        expires_in = timedelta(hours=settings.jwt_expiration_hours)
    payload: Dict[str, Any] = {
        "sub": str(account_id),  # Subject (account_id)
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_in).timestamp()),
        "iss": settings.jwt_issuer,
    }
    return jwt.encode(payload, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, *, secret: str | None = None) -> Dict[str, Any]:
    """
    Verifica assinatura, expiração e emissor de um token JWT.

    Args:
        token: Token JWT a ser verificado
        secret: segredo de verificação; padrão JWT_SECRET

    Returns:
        Payload do token decodificado (contém ao menos `sub`)

    Raises:
        AuthError: MISSING_CREDENTIAL, EXPIRED_CREDENTIAL ou MALFORMED_CREDENTIAL
    """
    if not token or not token.strip():
        raise AuthError(AuthErrorKind.MISSING_CREDENTIAL)

    try:
        payload = jwt.decode(
            token.strip(),
            secret or settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
        )
    except ExpiredSignatureError as e:
        # Precisa vir antes de JWTError (ExpiredSignatureError é subclasse)
        raise AuthError(AuthErrorKind.EXPIRED_CREDENTIAL, detail=str(e)) from e
    except JWTError as e:
        # Evita vazar detalhes internos no payload de erro.
        raise AuthError(AuthErrorKind.MALFORMED_CREDENTIAL, detail=str(e)) from e

    subject_from_claims(payload)
    return payload


def subject_from_claims(payload: Dict[str, Any]) -> uuid.UUID:
    """Extrai o account_id (`sub`) do payload; falha como credencial malformada."""
    subject = payload.get("sub")
    if not subject:
        raise AuthError(AuthErrorKind.MALFORMED_CREDENTIAL, detail="token without sub claim")
    try:
        return uuid.UUID(str(subject))
    except ValueError as e:
        raise AuthError(AuthErrorKind.MALFORMED_CREDENTIAL, detail="sub claim is not a UUID") from e
