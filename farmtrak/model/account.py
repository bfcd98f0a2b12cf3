from __future__ import annotations

import enum

import sqlalchemy as sa
from sqlmodel import Field
from sqlalchemy import UniqueConstraint

from farmtrak.model.base import BaseModel


class AccountRole(str, enum.Enum):
    FARMER = "farmer"
    VET = "vet"
    AGROVET = "agrovet"
    ADMIN = "admin"


class Account(BaseModel, table=True):
    """Modelo Account - contas do sistema (tabela account no banco)."""

    __tablename__ = "account"

    email: str = Field(index=True)
    name: str
    phone: str | None = Field(default=None, nullable=True)
    address: str | None = Field(default=None, nullable=True)

    # Importante: persistir enums pelos *values* ("farmer"/"vet", etc),
    # pois o banco usa strings.
    role: AccountRole = Field(
        default=AccountRole.FARMER,
        sa_type=sa.Enum(
            AccountRole,
            name="account_role",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        index=True,
    )
    password_hash: str

    # Perfil de veterinário (obrigatório apenas quando role == vet)
    clinic_name: str | None = Field(default=None, nullable=True)
    specialization: str | None = Field(default=None, nullable=True)
    license_number: str | None = Field(default=None, nullable=True)

    # Perfil de agrovet (loja de insumos)
    business_name: str | None = Field(default=None, nullable=True)

    __table_args__ = (
        UniqueConstraint("email", name="uq_account_email"),
    )
