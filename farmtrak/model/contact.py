import uuid

from sqlmodel import Field

from farmtrak.model.base import BaseModel


class Contact(BaseModel, table=True):
    """Contato da agenda de uma conta (fornecedor, comprador, veterinário...)."""

    __tablename__ = "contact"

    account_id: uuid.UUID = Field(foreign_key="account.id", index=True)

    name: str
    contact_type: str = Field(index=True)  # supplier, buyer, vet, agrovet, other
    phone: str | None = Field(default=None, nullable=True)
    email: str | None = Field(default=None, nullable=True)
    address: str | None = Field(default=None, nullable=True)
    notes: str | None = Field(default=None, nullable=True)
