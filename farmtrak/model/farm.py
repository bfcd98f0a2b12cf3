from __future__ import annotations

import enum
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from farmtrak.model.base import BaseModel


class FarmType(str, enum.Enum):
    CROP = "crop"
    LIVESTOCK = "livestock"
    MIXED = "mixed"


class Farm(BaseModel, table=True):
    """Fazenda. Raiz de posse: animais e culturas apontam para cá via farm_id."""

    __tablename__ = "farm"

    owner_id: uuid.UUID = Field(foreign_key="account.id", index=True)

    name: str = Field(index=True)
    description: str | None = Field(default=None, nullable=True)
    location: str | None = Field(default=None, nullable=True)
    latitude: float | None = Field(default=None, nullable=True)
    longitude: float | None = Field(default=None, nullable=True)
    area_hectares: float | None = Field(default=None, nullable=True)
    farm_type: FarmType = Field(
        default=FarmType.MIXED,
        sa_type=sa.Enum(
            FarmType,
            name="farm_type",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
    )
    # Delete é soft: is_active = False
    is_active: bool = Field(default=True, index=True)
