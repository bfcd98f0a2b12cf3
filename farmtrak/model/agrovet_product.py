import uuid

from sqlmodel import Field

from farmtrak.model.base import BaseModel


class AgrovetProduct(BaseModel, table=True):
    """Produto do catálogo de um agrovet (conta com role agrovet)."""

    __tablename__ = "agrovet_product"

    agrovet_id: uuid.UUID = Field(foreign_key="account.id", index=True)

    name: str = Field(index=True)
    category: str | None = Field(default=None, nullable=True)
    price: float
    quantity: float = Field(default=0)
    unit: str | None = Field(default=None, nullable=True)
    is_available: bool = Field(default=True, index=True)
