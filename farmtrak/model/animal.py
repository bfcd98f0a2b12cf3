import uuid
from datetime import date

from sqlmodel import Field

from farmtrak.model.base import BaseModel


class Animal(BaseModel, table=True):
    __tablename__ = "animal"

    farm_id: uuid.UUID = Field(foreign_key="farm.id", index=True)

    tag_number: str = Field(index=True)
    name: str | None = Field(default=None, nullable=True)
    species: str
    breed: str | None = Field(default=None, nullable=True)
    sex: str | None = Field(default=None, nullable=True)  # male, female
    birth_date: date | None = Field(default=None, nullable=True)
    weight_kg: float | None = Field(default=None, nullable=True)
    health_status: str = Field(default="healthy")
    notes: str | None = Field(default=None, nullable=True)
    # Delete é soft: is_active = False (registros de saúde são preservados)
    is_active: bool = Field(default=True, index=True)
