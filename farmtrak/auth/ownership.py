"""
Regras de posse dos recursos e avaliação do Ownership Gate.

Posse é direta (`owner_id`/`farmer_id`/`account_id` == account.id) ou com
exatamente um salto via `farm_id` -> farm.owner_id. Não há cadeias mais longas.
"""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Iterable

from farmtrak.auth.errors import AuthError, AuthErrorKind
from farmtrak.model import (
    Account,
    AccountRole,
    AgrovetProduct,
    Animal,
    Contact,
    Crop,
    Farm,
    Feed,
    HealthRecord,
    Sale,
)

logger = logging.getLogger(__name__)


class ResourceType(str, enum.Enum):
    FARM = "farm"
    ANIMAL = "animal"
    CROP = "crop"
    SALE = "sale"
    CONTACT = "contact"
    HEALTH_RECORD = "health_record"
    FEED = "feed"
    AGROVET_PRODUCT = "agrovet_product"


@dataclass(frozen=True)
class OwnershipRule:
    model: type
    label: str
    # Exatamente um dos dois
    owner_field: str | None = None
    parent_field: str | None = None


OWNERSHIP_RULES: dict[ResourceType, OwnershipRule] = {
    ResourceType.FARM: OwnershipRule(Farm, "Farm", owner_field="owner_id"),
    ResourceType.ANIMAL: OwnershipRule(Animal, "Animal", parent_field="farm_id"),
    ResourceType.CROP: OwnershipRule(Crop, "Crop", parent_field="farm_id"),
    ResourceType.SALE: OwnershipRule(Sale, "Sale", owner_field="farmer_id"),
    ResourceType.CONTACT: OwnershipRule(Contact, "Contact", owner_field="account_id"),
    ResourceType.HEALTH_RECORD: OwnershipRule(HealthRecord, "Health record", owner_field="farmer_id"),
    ResourceType.FEED: OwnershipRule(Feed, "Feed", owner_field="farmer_id"),
    ResourceType.AGROVET_PRODUCT: OwnershipRule(AgrovetProduct, "Product", owner_field="agrovet_id"),
}


@dataclass
class ResourceRef:
    """Recurso já carregado junto com o dono resolvido (direto ou via fazenda)."""

    resource_type: ResourceType
    resource: Any
    owner_id: uuid.UUID | None
    parent: Farm | None = None


def parse_resource_id(raw: Any, resource_type: ResourceType) -> uuid.UUID:
    """Converte o identificador vindo do path/body; ausente ou malformado vira 400."""
    label = OWNERSHIP_RULES[resource_type].label
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise AuthError(AuthErrorKind.INVALID_RESOURCE_REFERENCE, f"{label} ID is required")
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except ValueError as e:
        raise AuthError(AuthErrorKind.INVALID_RESOURCE_REFERENCE, f"Invalid {label.lower()} ID") from e


def check_ownership(
    account: Account,
    ref: ResourceRef,
    override_roles: Iterable[AccountRole] = (AccountRole.ADMIN,),
) -> None:
    """
    Ownership Gate.

    Permite se a role da conta está em `override_roles` ou se a conta é a dona
    (direta ou via fazenda). Caso contrário, NOT_OWNER.
    A checagem de existência deve ter rodado antes (ref já carregado).
    """
    if account.role in frozenset(override_roles):
        return
    if ref.owner_id is not None and ref.owner_id == account.id:
        return
    logger.warning(
        "Acesso negado: account=%s role=%s %s=%s owner=%s",
        account.id,
        account.role.value,
        ref.resource_type.value,
        getattr(ref.resource, "id", None),
        ref.owner_id,
    )
    raise AuthError(AuthErrorKind.NOT_OWNER)
