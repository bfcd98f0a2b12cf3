import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field as PydanticField, field_validator, model_validator
from sqlmodel import Session, select

from farmtrak.auth.dependencies import (
    get_current_account,
    require_ownership,
    require_parent_ownership,
    require_role,
)
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.base import utc_now
from farmtrak.model.crop import Crop, CropStatus
from farmtrak.model.farm import Farm
from farmtrak.services.status import compute_crop_stage

router = APIRouter(
    prefix="/crops",
    tags=["Crop"],
    dependencies=[Depends(require_role(AccountRole.FARMER, AccountRole.VET, AccountRole.ADMIN))],
)

_READ_OVERRIDE = (AccountRole.ADMIN, AccountRole.VET)


class CropCreate(BaseModel):
    farm_id: uuid.UUID
    name: str
    variety: str | None = None
    area_hectares: float | None = PydanticField(default=None, gt=0)
    planting_date: date | None = None
    expected_harvest_date: date | None = None
    status: CropStatus = CropStatus.PLANTED
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()

    @model_validator(mode="after")
    def validate_dates(self):
        if self.planting_date and self.expected_harvest_date and self.expected_harvest_date < self.planting_date:
            raise ValueError("expected_harvest_date deve ser >= planting_date")
        return self


class CropUpdate(BaseModel):
    farm_id: uuid.UUID | None = None
    name: str | None = None
    variety: str | None = None
    area_hectares: float | None = PydanticField(default=None, gt=0)
    planting_date: date | None = None
    expected_harvest_date: date | None = None
    actual_harvest_date: date | None = None
    notes: str | None = None


class CropStatusUpdate(BaseModel):
    status: CropStatus
    actual_harvest_date: date | None = None


class CropResponse(BaseModel):
    id: uuid.UUID
    farm_id: uuid.UUID
    name: str
    variety: str | None = None
    area_hectares: float | None = None
    planting_date: date | None = None
    expected_harvest_date: date | None = None
    actual_harvest_date: date | None = None
    status: CropStatus
    stage: str
    notes: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime


def _to_response(crop: Crop) -> CropResponse:
    # stage é recalculado a cada leitura, nunca gravado
    return CropResponse(**crop.model_dump(), stage=compute_crop_stage(crop))


def _save(session: Session, crop: Crop) -> CropResponse:
    crop.updated_at = utc_now()
    session.add(crop)
    session.commit()
    session.refresh(crop)
    return _to_response(crop)


@router.get("", response_model=list[CropResponse])
def list_crops(
    farm_id: uuid.UUID | None = Query(default=None),
    status: CropStatus | None = Query(default=None),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    query = select(Crop).where(Crop.is_active == True)  # noqa: E712
    if account.role not in _READ_OVERRIDE:
        query = query.join(Farm, Farm.id == Crop.farm_id).where(Farm.owner_id == account.id)
    if farm_id is not None:
        query = query.where(Crop.farm_id == farm_id)
    if status is not None:
        query = query.where(Crop.status == status)
    crops = session.exec(query.order_by(Crop.created_at.desc())).all()
    return [_to_response(c) for c in crops]


@router.post("", response_model=CropResponse, status_code=201)
def create_crop(
    body: CropCreate,
    farm: Farm = Depends(require_parent_ownership(ResourceType.FARM)),
    session: Session = Depends(get_session),
):
    crop = Crop(**body.model_dump())
    session.add(crop)
    session.commit()
    session.refresh(crop)
    return _to_response(crop)


@router.get("/{id}", response_model=CropResponse)
def get_crop(crop: Crop = Depends(require_ownership(ResourceType.CROP, override_roles=_READ_OVERRIDE))):
    return _to_response(crop)


@router.put("/{id}", response_model=CropResponse)
def update_crop(
    body: CropUpdate,
    crop: Crop = Depends(require_ownership(ResourceType.CROP)),
    new_farm: Farm | None = Depends(require_parent_ownership(ResourceType.FARM, required=False)),
    session: Session = Depends(get_session),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"farm_id", "name"}:
            continue
        setattr(crop, field, value)
    return _save(session, crop)


@router.patch("/{id}/status", response_model=CropResponse)
def update_crop_status(
    body: CropStatusUpdate,
    crop: Crop = Depends(require_ownership(ResourceType.CROP)),
    session: Session = Depends(get_session),
):
    crop.status = body.status
    if body.status == CropStatus.HARVESTED and crop.actual_harvest_date is None:
        crop.actual_harvest_date = body.actual_harvest_date or date.today()
    return _save(session, crop)


@router.delete("/{id}")
def delete_crop(
    crop: Crop = Depends(require_ownership(ResourceType.CROP)),
    session: Session = Depends(get_session),
):
    """Soft delete (is_active = False)."""
    crop_id = crop.id
    crop.is_active = False
    crop.updated_at = utc_now()
    session.add(crop)
    session.commit()
    return {"message": "Crop deleted successfully", "id": str(crop_id)}
