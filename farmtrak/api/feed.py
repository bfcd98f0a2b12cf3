import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field as PydanticField, field_validator
from sqlmodel import Session, select

from farmtrak.auth.dependencies import get_current_account, require_ownership, require_role
from farmtrak.auth.ownership import ResourceType
from farmtrak.db.session import get_session
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.base import utc_now
from farmtrak.model.feed import Feed

router = APIRouter(
    prefix="/feeds",
    tags=["Feed"],
    dependencies=[Depends(require_role(AccountRole.FARMER, AccountRole.ADMIN))],
)

FEED_TYPES = {"concentrate", "roughage", "supplement", "mineral", "other"}


def _validate_feed_type(v: str | None) -> str | None:
    if v is None:
        return v
    v = v.strip().lower()
    if v not in FEED_TYPES:
        raise ValueError(f"feed_type inválido (esperado: {'|'.join(sorted(FEED_TYPES))})")
    return v


class FeedCreate(BaseModel):
    name: str
    feed_type: str
    quantity: float = PydanticField(default=0, ge=0)
    unit: str = "kg"
    minimum_stock: float = PydanticField(default=0, ge=0)
    unit_cost: float | None = PydanticField(default=None, ge=0)
    supplier: str | None = None
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("campo não pode ser vazio")
        return v.strip()

    @field_validator("feed_type")
    @classmethod
    def validate_feed_type(cls, v: str) -> str:
        return _validate_feed_type(v)


class FeedUpdate(BaseModel):
    name: str | None = None
    feed_type: str | None = None
    quantity: float | None = PydanticField(default=None, ge=0)
    unit: str | None = None
    minimum_stock: float | None = PydanticField(default=None, ge=0)
    unit_cost: float | None = PydanticField(default=None, ge=0)
    supplier: str | None = None
    notes: str | None = None

    @field_validator("feed_type")
    @classmethod
    def validate_feed_type(cls, v: str | None) -> str | None:
        return _validate_feed_type(v)


class FeedResponse(BaseModel):
    id: uuid.UUID
    farmer_id: uuid.UUID
    name: str
    feed_type: str
    quantity: float
    unit: str
    minimum_stock: float
    unit_cost: float | None = None
    supplier: str | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class FeedTypeSummary(BaseModel):
    feed_type: str
    unit: str
    total_quantity: float
    total_value: float


class FeedStatsResponse(BaseModel):
    item_count: int
    low_stock_count: int
    total_value: float
    by_type: list[FeedTypeSummary]


def _scoped(account: Account):
    query = select(Feed)
    if account.role != AccountRole.ADMIN:
        query = query.where(Feed.farmer_id == account.id)
    return query


@router.get("", response_model=list[FeedResponse])
def list_feeds(
    feed_type: str | None = Query(default=None),
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    query = _scoped(account)
    if feed_type:
        query = query.where(Feed.feed_type == feed_type.strip().lower())
    return session.exec(query.order_by(Feed.name.asc())).all()


@router.get("/alerts", response_model=list[FeedResponse])
def list_low_stock(
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Itens com estoque no mínimo ou abaixo dele."""
    query = _scoped(account).where(Feed.quantity <= Feed.minimum_stock)
    return session.exec(query.order_by(Feed.quantity.asc())).all()


@router.get("/stats/summary", response_model=FeedStatsResponse)
def feed_stats(
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Resumo do estoque: valor total (quantity * unit_cost) e totais por tipo/unidade."""
    feeds = session.exec(_scoped(account)).all()

    by_type: dict[tuple[str, str], FeedTypeSummary] = {}
    total_value = 0.0
    low_stock = 0
    for feed in feeds:
        value = feed.quantity * (feed.unit_cost or 0)
        total_value += value
        if feed.quantity <= feed.minimum_stock:
            low_stock += 1
        key = (feed.feed_type, feed.unit)
        summary = by_type.setdefault(
            key, FeedTypeSummary(feed_type=feed.feed_type, unit=feed.unit, total_quantity=0, total_value=0)
        )
        summary.total_quantity += feed.quantity
        summary.total_value = round(summary.total_value + value, 2)

    return FeedStatsResponse(
        item_count=len(feeds),
        low_stock_count=low_stock,
        total_value=round(total_value, 2),
        by_type=sorted(by_type.values(), key=lambda s: s.total_value, reverse=True),
    )


@router.post("", response_model=FeedResponse, status_code=201)
def create_feed(
    body: FeedCreate,
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    feed = Feed(farmer_id=account.id, **body.model_dump())
    session.add(feed)
    session.commit()
    session.refresh(feed)
    return feed


@router.get("/{id}", response_model=FeedResponse)
def get_feed(feed: Feed = Depends(require_ownership(ResourceType.FEED))):
    return feed


@router.put("/{id}", response_model=FeedResponse)
def update_feed(
    body: FeedUpdate,
    feed: Feed = Depends(require_ownership(ResourceType.FEED)),
    session: Session = Depends(get_session),
):
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in {"name", "feed_type", "quantity", "unit", "minimum_stock"}:
            continue
        setattr(feed, field, value)
    feed.updated_at = utc_now()
    session.add(feed)
    session.commit()
    session.refresh(feed)
    return feed


@router.delete("/{id}")
def delete_feed(
    feed: Feed = Depends(require_ownership(ResourceType.FEED)),
    session: Session = Depends(get_session),
):
    feed_id = feed.id
    session.delete(feed)
    session.commit()
    return {"message": "Feed deleted successfully", "id": str(feed_id)}
