from __future__ import annotations

import enum
import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from farmtrak.model.base import BaseModel


class CropStatus(str, enum.Enum):
    PLANTED = "planted"
    GROWING = "growing"
    HARVESTED = "harvested"
    FAILED = "failed"


class Crop(BaseModel, table=True):
    __tablename__ = "crop"

    farm_id: uuid.UUID = Field(foreign_key="farm.id", index=True)

    name: str = Field(index=True)
    variety: str | None = Field(default=None, nullable=True)
    area_hectares: float | None = Field(default=None, nullable=True)
    planting_date: date | None = Field(default=None, nullable=True)
    expected_harvest_date: date | None = Field(default=None, nullable=True)
    actual_harvest_date: date | None = Field(default=None, nullable=True)
    status: CropStatus = Field(
        default=CropStatus.PLANTED,
        sa_type=sa.Enum(
            CropStatus,
            name="crop_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        index=True,
    )
    notes: str | None = Field(default=None, nullable=True)
    is_active: bool = Field(default=True, index=True)
