import uuid

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlmodel import Session, select

from farmtrak.auth.dependencies import get_optional_account
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole

router = APIRouter(prefix="/vets", tags=["Vet"])


class VetResponse(BaseModel):
    id: uuid.UUID
    name: str
    clinic_name: str | None = None
    specialization: str | None = None
    # Contato só para quem está autenticado
    email: str | None = None
    phone: str | None = None
    address: str | None = None


@router.get("", response_model=list[VetResponse])
def list_vets(
    specialization: str | None = Query(default=None),
    viewer: Account | None = Depends(get_optional_account),
    session: Session = Depends(get_session),
):
    """Diretório público de veterinários (auth opcional)."""
    query = select(Account).where(Account.role == AccountRole.VET)
    if specialization:
        query = query.where(Account.specialization.ilike(f"%{specialization.strip()}%"))  # type: ignore[union-attr]
    vets = session.exec(query.order_by(Account.name.asc())).all()

    result: list[VetResponse] = []
    for vet in vets:
        item = VetResponse(
            id=vet.id,
            name=vet.name,
            clinic_name=vet.clinic_name,
            specialization=vet.specialization,
        )
        if viewer is not None:
            item.email = vet.email
            item.phone = vet.phone
            item.address = vet.address
        result.append(item)
    return result
