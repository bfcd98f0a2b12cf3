import logging
import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
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

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/animals",
    tags=["Animal"],
    dependencies=[Depends(require_role(AccountRole.FARMER, AccountRole.VET, AccountRole.ADMIN))],
)

# Veterinário pode consultar qualquer animal, mas não alterar
_READ_OVERRIDE = (AccountRole.ADMIN, AccountRole.VET)


class AnimalCreate(BaseModel):
    farm_id: uuid.UUID
    tag_number: str
    name: str | None = None
    species: str
    breed: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    weight_kg: float | None = PydanticField(default=None, gt=0)
    health_status: str = "healthy"
    notes: str | None = None

    @field_validator("tag_number", "species")
    @classmethod
    def validate_string_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()

    @field_validator("sex")
    @classmethod
    def validate_sex(cls, v: str | None) -> str | None:
        if v is not None and v not in {"male", "female"}:
            raise ValueError("sex inválido (esperado: male|female)")
        return v


class AnimalUpdate(BaseModel):
    farm_id: uuid.UUID | None = None
    tag_number: str | None = None
    name: str | None = None
    species: str | None = None
    breed: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    weight_kg: float | None = PydanticField(default=None, gt=0)
    health_status: str | None = None
    notes: str | None = None


class AnimalResponse(BaseModel):
    id: uuid.UUID
    farm_id: uuid.UUID
    tag_number: str
    name: str | None = None
    species: str
    breed: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    weight_kg: float | None = None
    health_status: str
    notes: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[AnimalResponse])
def list_animals(
    farm_id: uuid.UUID | None = Query(default=None),
    species: str | None = Query(default=None),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Animais ativos das fazendas da conta (vet/admin veem todos)."""
    query = select(Animal).where(Animal.is_active == True)  # noqa: E712
    if account.role not in _READ_OVERRIDE:
        query = query.join(Farm, Farm.id == Animal.farm_id).where(Farm.owner_id == account.id)
    if farm_id is not None:
        query = query.where(Animal.farm_id == farm_id)
    if species:
        query = query.where(Animal.species == species)
    return session.exec(query.order_by(Animal.created_at.desc())).all()


@router.post("", response_model=AnimalResponse, status_code=201)
def create_animal(
    body: AnimalCreate,
    farm: Farm = Depends(require_parent_ownership(ResourceType.FARM)),
    session: Session = Depends(get_session),
):
    animal = Animal(**body.model_dump())
    session.add(animal)
    session.commit()
    session.refresh(animal)
    return animal


@router.get("/{id}", response_model=AnimalResponse)
def get_animal(animal: Animal = Depends(require_ownership(ResourceType.ANIMAL, override_roles=_READ_OVERRIDE))):
    return animal


@router.put("/{id}", response_model=AnimalResponse)
def update_animal(
    body: AnimalUpdate,
    animal: Animal = Depends(require_ownership(ResourceType.ANIMAL)),
    new_farm: Farm | None = Depends(require_parent_ownership(ResourceType.FARM, required=False)),
    session: Session = Depends(get_session),
):
    """
    Atualização parcial. Trocar de fazenda exige posse da fazenda de destino;
    os registros de saúde do animal passam para o dono da nova fazenda no mesmo commit.
    """
    if new_farm is not None and new_farm.id != animal.farm_id:
        records = session.exec(select(HealthRecord).where(HealthRecord.animal_id == animal.id)).all()
        for record in records:
            record.farmer_id = new_farm.owner_id
            record.updated_at = utc_now()
            session.add(record)
        logger.info(
            "Animal %s movido para farm=%s (%d registros de saúde reatribuídos)",
            animal.id,
            new_farm.id,
            len(records),
        )

    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"farm_id", "tag_number", "species", "health_status"}:
            continue
        setattr(animal, field, value)
    animal.updated_at = utc_now()
    session.add(animal)
    session.commit()
    session.refresh(animal)
    return animal


@router.delete("/{id}")
def delete_animal(
    animal: Animal = Depends(require_ownership(ResourceType.ANIMAL)),
    session: Session = Depends(get_session),
):
    """Soft delete (is_active = False); registros de saúde são mantidos."""
    animal_id = animal.id
    animal.is_active = False
    animal.updated_at = utc_now()
    session.add(animal)
    session.commit()
    return {"message": "Animal deleted successfully", "id": str(animal_id)}
