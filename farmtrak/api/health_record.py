import uuid
from datetime import date, datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field as PydanticField, field_validator
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
from farmtrak.model.animal import Animal
from farmtrak.model.base import utc_now
from farmtrak.model.farm import Farm
from farmtrak.model.health_record import HealthRecord

router = APIRouter(
    prefix="/health-records",
    tags=["Health"],
    dependencies=[Depends(require_role(AccountRole.FARMER, AccountRole.VET, AccountRole.ADMIN))],
)

# Veterinário registra e consulta saúde de qualquer animal; só o dono/admin altera
_VET_OVERRIDE = (AccountRole.ADMIN, AccountRole.VET)

RECORD_TYPES = {"vaccination", "treatment", "checkup", "deworming", "other"}


class HealthRecordCreate(BaseModel):
    animal_id: uuid.UUID
    record_type: str
    description: str
    treatment: str | None = None
    record_date: date | None = None
    next_due_date: date | None = None
    cost: float | None = PydanticField(default=None, ge=0)

    @field_validator("record_type")
    @classmethod
    def validate_record_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in RECORD_TYPES:
            raise ValueError(f"record_type inválido (esperado: {'|'.join(sorted(RECORD_TYPES))})")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()


class HealthRecordUpdate(BaseModel):
    record_type: str | None = None
    description: str | None = None
    treatment: str | None = None
    record_date: date | None = None
    next_due_date: date | None = None
    cost: float | None = PydanticField(default=None, ge=0)

    @field_validator("record_type")
    @classmethod
    def validate_record_type(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in RECORD_TYPES:
            raise ValueError(f"record_type inválido (esperado: {'|'.join(sorted(RECORD_TYPES))})")
        return v


class HealthRecordResponse(BaseModel):
    id: uuid.UUID
    farmer_id: uuid.UUID
    animal_id: uuid.UUID
    vet_id: uuid.UUID | None = None
    record_type: str
    description: str
    treatment: str | None = None
    record_date: date
    next_due_date: date | None = None
    cost: float | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


def _scope_query(query, account: Account):
    if account.role == AccountRole.FARMER:
        return query.where(HealthRecord.farmer_id == account.id)
    if account.role == AccountRole.VET:
        return query.where(HealthRecord.vet_id == account.id)
    return query


@router.get("", response_model=list[HealthRecordResponse])
def list_health_records(
    animal_id: uuid.UUID | None = Query(default=None),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Farmer: registros dos seus animais. Vet: registros que criou. Admin: todos."""
    query = _scope_query(select(HealthRecord), account)
    if animal_id is not None:
        query = query.where(HealthRecord.animal_id == animal_id)
    return session.exec(query.order_by(HealthRecord.record_date.desc())).all()


@router.get("/upcoming", response_model=list[HealthRecordResponse])
def list_upcoming(
    days: int = Query(default=30, ge=1, le=365),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Registros com next_due_date nos próximos `days` dias."""
    today = date.today()
    query = _scope_query(select(HealthRecord), account).where(
        HealthRecord.next_due_date.is_not(None),  # type: ignore[union-attr]
        HealthRecord.next_due_date >= today,
        HealthRecord.next_due_date <= today + timedelta(days=days),
    )
    return session.exec(query.order_by(HealthRecord.next_due_date.asc())).all()


@router.post("", response_model=HealthRecordResponse, status_code=201)
def create_health_record(
    body: HealthRecordCreate,
    animal: Animal = Depends(
        require_parent_ownership(ResourceType.ANIMAL, field="animal_id", override_roles=_VET_OVERRIDE)
    ),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    # Posse do registro = dono da fazenda do animal
    farm = session.get(Farm, animal.farm_id)
    if farm is None:
        raise HTTPException(status_code=409, detail="Animal is not attached to a farm")

    record = HealthRecord(
        farmer_id=farm.owner_id,
        animal_id=animal.id,
        vet_id=account.id if account.role == AccountRole.VET else None,
        record_type=body.record_type,
        description=body.description,
        treatment=body.treatment,
        record_date=body.record_date or date.today(),
        next_due_date=body.next_due_date,
        cost=body.cost,
    )
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@router.get("/{id}", response_model=HealthRecordResponse)
def get_health_record(
    record: HealthRecord = Depends(require_ownership(ResourceType.HEALTH_RECORD, override_roles=_VET_OVERRIDE)),
):
    return record


@router.put("/{id}", response_model=HealthRecordResponse)
def update_health_record(
    body: HealthRecordUpdate,
    record: HealthRecord = Depends(require_ownership(ResourceType.HEALTH_RECORD)),
    session: Session = Depends(get_session),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"record_type", "description", "record_date"}:
            continue
        setattr(record, field, value)
    record.updated_at = utc_now()
    session.add(record)
    session.commit()
    session.refresh(record)
    return record


@router.delete("/{id}")
def delete_health_record(
    record: HealthRecord = Depends(require_ownership(ResourceType.HEALTH_RECORD)),
    session: Session = Depends(get_session),
):
    record_id = record.id
    session.delete(record)
    session.commit()
    return {"message": "Health record deleted successfully", "id": str(record_id)}
