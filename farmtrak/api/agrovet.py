import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlmodel import Session, select

from farmtrak.auth.dependencies import get_optional_account, require_ownership, require_role
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.agrovet_product import AgrovetProduct
from farmtrak.model.base import utc_now

router = APIRouter(prefix="/agrovets", tags=["Agrovet"])

# Só o próprio agrovet mantém o catálogo (admin por override de posse)
_seller_gate = require_role(AccountRole.AGROVET, AccountRole.ADMIN)


class AgrovetResponse(BaseModel):
    id: uuid.UUID
    name: str
    business_name: str | None = None
    # Contato só para quem está autenticado
    email: str | None = None
    phone: str | None = None
    address: str | None = None


class ProductCreate(BaseModel):
    name: str
    category: str | None = None
    price: float = PydanticField(ge=0)
    quantity: float = PydanticField(default=0, ge=0)
    unit: str | None = None
    is_available: bool = True

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()


class ProductUpdate(BaseModel):
    name: str | None = None
    category: str | None = None
    price: float | None = PydanticField(default=None, ge=0)
    quantity: float | None = PydanticField(default=None, ge=0)
    unit: str | None = None
    is_available: bool | None = None


class ProductResponse(BaseModel):
    id: uuid.UUID
    agrovet_id: uuid.UUID
    name: str
    category: str | None = None
    price: float
    quantity: float
    unit: str | None = None
    is_available: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


@router.get("", response_model=list[AgrovetResponse])
def list_agrovets(
    viewer: Account | None = Depends(get_optional_account),
    session: Session = Depends(get_session),
):
    """Diretório público de agrovets (auth opcional)."""
    agrovets = session.exec(
        select(Account).where(Account.role == AccountRole.AGROVET).order_by(Account.name.asc())
    ).all()

    result: list[AgrovetResponse] = []
    for agrovet in agrovets:
        item = AgrovetResponse(id=agrovet.id, name=agrovet.name, business_name=agrovet.business_name)
        if viewer is not None:
            item.email = agrovet.email
            item.phone = agrovet.phone
            item.address = agrovet.address
        result.append(item)
    return result


# Rotas /products antes de /{agrovet_id}/products


@router.get("/products", response_model=list[ProductResponse])
def list_my_products(
    account: Account = Depends(_seller_gate),
    session: Session = Depends(get_session),
):
    """Catálogo do agrovet autenticado, incluindo itens indisponíveis."""
    query = select(AgrovetProduct).where(AgrovetProduct.agrovet_id == account.id)
    return session.exec(query.order_by(AgrovetProduct.name.asc())).all()


@router.post("/products", response_model=ProductResponse, status_code=201)
def create_product(
    body: ProductCreate,
    account: Account = Depends(_seller_gate),
    session: Session = Depends(get_session),
):
    if account.role != AccountRole.AGROVET:
        raise HTTPException(status_code=400, detail="Only agrovet accounts keep a product catalog")
    product = AgrovetProduct(agrovet_id=account.id, **body.model_dump())
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@router.put("/products/{id}", response_model=ProductResponse, dependencies=[Depends(_seller_gate)])
def update_product(
    body: ProductUpdate,
    product: AgrovetProduct = Depends(require_ownership(ResourceType.AGROVET_PRODUCT)),
    session: Session = Depends(get_session),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"name", "price", "quantity", "is_available"}:
            continue
        setattr(product, field, value)
    product.updated_at = utc_now()
    session.add(product)
    session.commit()
    session.refresh(product)
    return product


@router.delete("/products/{id}", dependencies=[Depends(_seller_gate)])
def delete_product(
    product: AgrovetProduct = Depends(require_ownership(ResourceType.AGROVET_PRODUCT)),
    session: Session = Depends(get_session),
):
    product_id = product.id
    session.delete(product)
    session.commit()
    return {"message": "Product deleted successfully", "id": str(product_id)}


@router.get("/{agrovet_id}/products", response_model=list[ProductResponse])
def list_agrovet_products(
    agrovet_id: uuid.UUID,
    category: str | None = Query(default=None),
    session: Session = Depends(get_session),
):
    """Produtos disponíveis de um agrovet (público)."""
    agrovet = session.get(Account, agrovet_id)
    if agrovet is None or agrovet.role != AccountRole.AGROVET:
        raise HTTPException(status_code=404, detail="Agrovet not found")

    query = select(AgrovetProduct).where(
        AgrovetProduct.agrovet_id == agrovet_id,
        AgrovetProduct.is_available == True,  # noqa: E712
    )
    if category:
        query = query.where(AgrovetProduct.category == category)
    return session.exec(query.order_by(AgrovetProduct.name.asc())).all()
