import logging
from typing import Any, Iterable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.concurrency import run_in_threadpool

from farmtrak.auth.errors import AuthError, AuthErrorKind
from farmtrak.auth.jwt import subject_from_claims, verify_token
from farmtrak.auth.ownership import OWNERSHIP_RULES, ResourceType, check_ownership, parse_resource_id
from farmtrak.db.store import FarmStore, get_store
from farmtrak.model import Account, AccountRole

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False)

DEFAULT_OVERRIDE_ROLES: tuple[AccountRole, ...] = (AccountRole.ADMIN,)


def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> dict[str, Any]:
    """Credential Verifier: exige Authorization: Bearer <token> válido."""
    if not credentials:
        raise AuthError(AuthErrorKind.MISSING_CREDENTIAL)
    return verify_token(credentials.credentials)


def get_current_account(
    request: Request,
    payload: dict[str, Any] = Depends(get_token_payload),
    store: FarmStore = Depends(get_store),
) -> Account:
    """
    Dependency que retorna a conta autenticada a partir do JWT.

    Consulta o banco em toda request (sem cache de sessão): a role pode ter
    mudado desde a emissão do token. A conta fica em request.state.account
    para os gates e o handler da rota.
    """
    account_id = subject_from_claims(payload)
    account = store.get_account(account_id)
    if not account:
        logger.info("Token válido para conta inexistente: %s", account_id)
        raise AuthError(AuthErrorKind.ACCOUNT_NOT_FOUND)
    request.state.account = account
    return account


def get_optional_account(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    store: FarmStore = Depends(get_store),
) -> Account | None:
    """
    Variante opcional da pipeline: sem credencial (ou credencial inválida)
    retorna None em vez de rejeitar. Só para rotas que optam explicitamente.
    """
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
        account = store.get_account(subject_from_claims(payload))
    except AuthError as e:
        logger.debug("Auth opcional ignorada: %s", e.kind.value)
        return None
    if account is not None:
        request.state.account = account
    return account


def require_role(*roles: AccountRole):
    """
    Dependency factory para verificar se a conta tem uma das roles permitidas.

    Args:
        roles: roles aceitas (ex: AccountRole.FARMER, AccountRole.ADMIN)

    Returns:
        Dependency function
    """
    if not roles:
        raise ValueError("require_role precisa de ao menos uma role")
    allowed = frozenset(roles)

    def role_checker(account: Account = Depends(get_current_account)) -> Account:
        if account.role not in allowed:
            logger.warning(
                "Role insuficiente: account=%s role=%s allowed=%s",
                account.id,
                account.role.value,
                sorted(r.value for r in allowed),
            )
            raise AuthError(
                AuthErrorKind.INSUFFICIENT_ROLE,
                f"Requires role: {' or '.join(sorted(r.value for r in allowed))}",
            )
        return account

    return role_checker


def require_ownership(
    resource_type: ResourceType,
    *,
    param: str = "id",
    override_roles: Iterable[AccountRole] = DEFAULT_OVERRIDE_ROLES,
):
    """
    Dependency factory: existência + posse de um recurso identificado no path.

    Ordem fixa: ID válido (400) -> recurso existe (404) -> posse/override (403).
    A existência é checada também para roles de override, então um ID
    inexistente é 404 para qualquer um.

    Returns:
        Dependency que devolve o recurso carregado (também em request.state.resource)
    """
    override = tuple(override_roles)

    def ownership_checker(
        request: Request,
        account: Account = Depends(get_current_account),
        store: FarmStore = Depends(get_store),
    ) -> Any:
        resource_id = parse_resource_id(request.path_params.get(param), resource_type)
        ref = store.get_resource_ref(resource_type, resource_id)
        if ref is None:
            raise AuthError(
                AuthErrorKind.RESOURCE_NOT_FOUND,
                f"{OWNERSHIP_RULES[resource_type].label} not found",
            )
        check_ownership(account, ref, override)
        request.state.resource = ref.resource
        return ref.resource

    return ownership_checker


def require_parent_ownership(
    parent_type: ResourceType,
    *,
    field: str = "farm_id",
    required: bool = True,
    override_roles: Iterable[AccountRole] = DEFAULT_OVERRIDE_ROLES,
):
    """
    Dependency factory para criação (ou mudança de pai): valida que o pai
    referenciado no corpo da request (ex: farm_id) existe e pertence à conta.

    Args:
        parent_type: tipo do recurso pai
        field: campo do corpo JSON com o ID do pai
        required: se False, corpo sem o campo passa direto (ex: PUT parcial)
        override_roles: roles que dispensam a posse do pai

    Returns:
        Dependency que devolve o pai carregado, ou None quando o campo é opcional e ausente
    """
    override = tuple(override_roles)

    async def parent_checker(
        request: Request,
        account: Account = Depends(get_current_account),
        store: FarmStore = Depends(get_store),
    ) -> Any:
        try:
            body = await request.json()
        except ValueError:
            body = None
        raw = body.get(field) if isinstance(body, dict) else None
        if raw is None and not required:
            return None

        parent_id = parse_resource_id(raw, parent_type)
        ref = await run_in_threadpool(store.get_resource_ref, parent_type, parent_id)
        if ref is None:
            raise AuthError(
                AuthErrorKind.RESOURCE_NOT_FOUND,
                f"{OWNERSHIP_RULES[parent_type].label} not found",
            )
        check_ownership(account, ref, override)
        request.state.parent = ref.resource
        # Na criação o pai é o único recurso da request; numa troca de pai o
        # recurso do path (require_ownership) já ocupa request.state.resource
        if getattr(request.state, "resource", None) is None:
            request.state.resource = ref.resource
        return ref.resource

    return parent_checker
