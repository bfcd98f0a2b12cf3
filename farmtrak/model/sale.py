from __future__ import annotations

import enum
import uuid
from datetime import date

import sqlalchemy as sa
from sqlmodel import Field

from farmtrak.model.base import BaseModel


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PARTIAL = "partial"
    PENDING = "pending"


class Sale(BaseModel, table=True):
    __tablename__ = "sale"

    farmer_id: uuid.UUID = Field(foreign_key="account.id", index=True)

    customer_name: str
    product: str
    quantity: float
    unit: str | None = Field(default=None, nullable=True)
    unit_price: float
    total_amount: float
    amount_paid: float = Field(default=0)
    amount_pending: float = Field(default=0)
    payment_status: PaymentStatus = Field(
        default=PaymentStatus.PENDING,
        sa_type=sa.Enum(
            PaymentStatus,
            name="payment_status",
            native_enum=False,
            values_callable=lambda e: [m.value for m in e],
        ),
        index=True,
    )
    sale_date: date
    notes: str | None = Field(default=None, nullable=True)
