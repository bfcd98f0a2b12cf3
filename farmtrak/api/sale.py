import uuid
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field as PydanticField, field_validator, model_validator
from sqlmodel import Session, select

from farmtrak.auth.dependencies import get_current_account, require_ownership, require_role
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.base import utc_now
from farmtrak.model.sale import PaymentStatus, Sale
from farmtrak.services.status import compute_payment_status

router = APIRouter(
    prefix="/sales",
    tags=["Sale"],
    dependencies=[Depends(require_role(AccountRole.FARMER, AccountRole.ADMIN))],
)


class SaleCreate(BaseModel):
    customer_name: str
    product: str
    quantity: float = PydanticField(gt=0)
    unit: str | None = None
    unit_price: float = PydanticField(ge=0)
    amount_paid: float = PydanticField(default=0, ge=0)
    sale_date: date | None = None
    notes: str | None = None

    @field_validator("customer_name", "product")
    @classmethod
    def validate_string_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()


class PaymentUpdate(BaseModel):
    amount_paid: float | None = PydanticField(default=None, ge=0)
    payment_status: PaymentStatus | None = None

    @model_validator(mode="after")
    def validate_not_empty(self):
        if self.amount_paid is None and self.payment_status is None:
            raise ValueError("informe amount_paid e/ou payment_status")
        return self


class SaleResponse(BaseModel):
    id: uuid.UUID
    farmer_id: uuid.UUID
    customer_name: str
    product: str
    quantity: float
    unit: str | None = None
    unit_price: float
    total_amount: float
    amount_paid: float
    amount_pending: float
    payment_status: PaymentStatus
    sale_date: date
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[SaleResponse])
def list_sales(
    payment_status: PaymentStatus | None = Query(default=None),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    query = select(Sale)
    if account.role != AccountRole.ADMIN:
        query = query.where(Sale.farmer_id == account.id)
    if payment_status is not None:
        query = query.where(Sale.payment_status == payment_status)
    return session.exec(query.order_by(Sale.sale_date.desc())).all()


@router.post("", response_model=SaleResponse, status_code=201)
def create_sale(
    body: SaleCreate,
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    total = round(body.quantity * body.unit_price, 2)
    pending, payment_status = compute_payment_status(total, body.amount_paid)
    sale = Sale(
        farmer_id=account.id,
        customer_name=body.customer_name,
        product=body.product,
        quantity=body.quantity,
        unit=body.unit,
        unit_price=body.unit_price,
        total_amount=total,
        amount_paid=body.amount_paid,
        amount_pending=pending,
        payment_status=payment_status,
        sale_date=body.sale_date or date.today(),
        notes=body.notes,
    )
    session.add(sale)
    session.commit()
    session.refresh(sale)
    return sale


@router.get("/{id}", response_model=SaleResponse)
def get_sale(sale: Sale = Depends(require_ownership(ResourceType.SALE))):
    return sale


@router.patch("/{id}/payment", response_model=SaleResponse)
def update_payment(
    body: PaymentUpdate,
    sale: Sale = Depends(require_ownership(ResourceType.SALE)),
    session: Session = Depends(get_session),
):
    """
    Atualiza pagamento: amount_paid recalcula pendente e status;
    payment_status explícito prevalece sobre o calculado.
    """
    if body.amount_paid is not None:
        sale.amount_paid = body.amount_paid
        sale.amount_pending, sale.payment_status = compute_payment_status(sale.total_amount, body.amount_paid)
    if body.payment_status is not None:
        sale.payment_status = body.payment_status
    sale.updated_at = utc_now()
    session.add(sale)
    session.commit()
    session.refresh(sale)
    return sale


@router.delete("/{id}")
def delete_sale(
    sale: Sale = Depends(require_ownership(ResourceType.SALE)),
    session: Session = Depends(get_session),
):
    sale_id = sale.id
    session.delete(sale)
    session.commit()
    return {"message": "Sale deleted successfully", "id": str(sale_id)}
