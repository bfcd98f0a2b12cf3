import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, field_validator
from sqlmodel import Session, select

from farmtrak.auth.dependencies import get_current_account, require_ownership
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account
from farmtrak.model.base import utc_now
from farmtrak.model.contact import Contact

router = APIRouter(prefix="/contacts", tags=["Contact"])

CONTACT_TYPES = {"supplier", "buyer", "vet", "agrovet", "other"}


class ContactCreate(BaseModel):
    name: str
    contact_type: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()

    @field_validator("contact_type")
    @classmethod
    def validate_contact_type(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in CONTACT_TYPES:
            raise ValueError(f"contact_type inválido (esperado: {'|'.join(sorted(CONTACT_TYPES))})")
        return v


class ContactUpdate(BaseModel):
    name: str | None = None
    contact_type: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None

    @field_validator("contact_type")
    @classmethod
    def validate_contact_type(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().lower()
        if v not in CONTACT_TYPES:
            raise ValueError(f"contact_type inválido (esperado: {'|'.join(sorted(CONTACT_TYPES))})")
        return v


class ContactResponse(BaseModel):
    id: uuid.UUID
    account_id: uuid.UUID
    name: str
    contact_type: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[ContactResponse])
def list_contacts(
    contact_type: str | None = Query(default=None),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    query = select(Contact).where(Contact.account_id == account.id)
    if contact_type:
        query = query.where(Contact.contact_type == contact_type)
    query = query.order_by(Contact.created_at.desc()).limit(limit).offset(offset)
    return session.exec(query).all()


@router.post("", response_model=ContactResponse, status_code=201)
def create_contact(
    body: ContactCreate,
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    contact = Contact(account_id=account.id, **body.model_dump())
    session.add(contact)
    session.commit()
    session.refresh(contact)
    return contact


@router.get("/{id}", response_model=ContactResponse)
def get_contact(contact: Contact = Depends(require_ownership(ResourceType.CONTACT))):
    return contact


@router.put("/{id}", response_model=ContactResponse)
def update_contact(
    body: ContactUpdate,
    contact: Contact = Depends(require_ownership(ResourceType.CONTACT)),
    session: Session = Depends(get_session),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"name", "contact_type"}:
            continue
        setattr(contact, field, value)
    contact.updated_at = utc_now()
    session.add(contact)
    session.commit()
    session.refresh(contact)
    return contact


@router.delete("/{id}")
def delete_contact(
    contact: Contact = Depends(require_ownership(ResourceType.CONTACT)),
    session: Session = Depends(get_session),
):
    contact_id = contact.id
    session.delete(contact)
    session.commit()
    return {"message": "Contact deleted successfully", "id": str(contact_id)}
