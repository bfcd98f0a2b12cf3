import uuid
from datetime import datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlmodel import Session, func, select

from farmtrak.auth.dependencies import get_current_account, require_ownership, require_role
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.base import utc_now
from farmtrak.model.animal import Animal
from farmtrak.model.crop import Crop
from farmtrak.model.farm import Farm, FarmType

router = APIRouter(prefix="/farms", tags=["Farm"])


class FarmCreate(BaseModel):
    name: str
    description: str | None = PydanticField(default=None, max_length=500)
    location: str | None = PydanticField(default=None, max_length=200)
    latitude: float | None = PydanticField(default=None, ge=-90, le=90)
    longitude: float | None = PydanticField(default=None, ge=-180, le=180)
    area_hectares: float | None = PydanticField(default=None, ge=0.01)
    farm_type: FarmType = FarmType.MIXED

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not 2 <= len(v) <= 100:
            raise ValueError("name deve ter entre 2 e 100 caracteres")
        return v


class FarmUpdate(BaseModel):
    name: str | None = None
    description: str | None = PydanticField(default=None, max_length=500)
    location: str | None = PydanticField(default=None, max_length=200)
    latitude: float | None = PydanticField(default=None, ge=-90, le=90)
    longitude: float | None = PydanticField(default=None, ge=-180, le=180)
    area_hectares: float | None = PydanticField(default=None, ge=0.01)
    farm_type: FarmType | None = None
    is_active: bool | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not 2 <= len(v) <= 100:
            raise ValueError("name deve ter entre 2 e 100 caracteres")
        return v


class FarmResponse(BaseModel):
    id: uuid.UUID
    owner_id: uuid.UUID
    name: str
    description: str | None = None
    location: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    area_hectares: float | None = None
    farm_type: FarmType
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[FarmResponse])
def list_farms(
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Fazendas ativas da conta (admin vê todas)."""
    query = select(Farm).where(Farm.is_active == True)  # noqa: E712
    if account.role != AccountRole.ADMIN:
        query = query.where(Farm.owner_id == account.id)
    return session.exec(query.order_by(Farm.created_at.desc())).all()


@router.post("", response_model=FarmResponse, status_code=201)
def create_farm(
    body: FarmCreate,
    account: Account = Depends(require_role(AccountRole.FARMER, AccountRole.ADMIN)),
    session: Session = Depends(get_session),
):
    farm = Farm(owner_id=account.id, **body.model_dump())
    session.add(farm)
    session.commit()
    session.refresh(farm)
    return farm


@router.get("/{id}", response_model=FarmResponse)
def get_farm(farm: Farm = Depends(require_ownership(ResourceType.FARM))):
    return farm


@router.put("/{id}", response_model=FarmResponse)
def update_farm(
    body: FarmUpdate,
    farm: Farm = Depends(require_ownership(ResourceType.FARM)),
    session: Session = Depends(get_session),
):
    # id, owner_id e created_at nunca vêm do corpo
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"name", "farm_type", "is_active"}:
            continue
        setattr(farm, field, value)
    farm.updated_at = utc_now()
    session.add(farm)
    session.commit()
    session.refresh(farm)
    return farm


@router.delete("/{id}")
def delete_farm(
    farm: Farm = Depends(require_ownership(ResourceType.FARM)),
    session: Session = Depends(get_session),
):
    """Soft delete (is_active = False)."""
    farm_id = farm.id
    farm.is_active = False
    farm.updated_at = utc_now()
    session.add(farm)
    session.commit()
    return {"message": "Farm deleted successfully", "id": str(farm_id)}


class FarmStatsResponse(BaseModel):
    farm_id: uuid.UUID
    animal_count: int
    crop_count: int
    total_crop_area_hectares: float
    utilization_percentage: float


@router.get("/{id}/stats", response_model=FarmStatsResponse)
def get_farm_stats(
    farm: Farm = Depends(require_ownership(ResourceType.FARM)),
    session: Session = Depends(get_session),
):
    """Contagem de animais/culturas ativos e uso da área da fazenda pelas culturas."""
    animal_count = session.exec(
        select(func.count(Animal.id)).where(Animal.farm_id == farm.id, Animal.is_active == True)  # noqa: E712
    ).one()
    crop_count, crop_area = session.exec(
        select(func.count(Crop.id), func.coalesce(func.sum(Crop.area_hectares), 0.0)).where(
            Crop.farm_id == farm.id, Crop.is_active == True  # noqa: E712
        )
    ).one()

    utilization = 0.0
    if crop_area and farm.area_hectares:
        utilization = round(crop_area / farm.area_hectares * 100, 1)

    return FarmStatsResponse(
        farm_id=farm.id,
        animal_count=animal_count,
        crop_count=crop_count,
        total_crop_area_hectares=round(float(crop_area or 0), 2),
        utilization_percentage=utilization,
    )
