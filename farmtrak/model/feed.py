import uuid

from sqlmodel import Field

from farmtrak.model.base import BaseModel


class Feed(BaseModel, table=True):
    """Item do estoque de ração/insumos de um produtor."""

    __tablename__ = "feed"

    farmer_id: uuid.UUID = Field(foreign_key="account.id", index=True)

    name: str
    feed_type: str = Field(index=True)  # concentrate, roughage, supplement, mineral, other
    quantity: float = Field(default=0)
    unit: str = Field(default="kg")
    # Abaixo disso entra em /feeds/alerts
    minimum_stock: float = Field(default=0)
    unit_cost: float | None = Field(default=None, nullable=True)
    supplier: str | None = Field(default=None, nullable=True)
    notes: str | None = Field(default=None, nullable=True)
