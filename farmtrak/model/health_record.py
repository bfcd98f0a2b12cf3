import uuid
from datetime import date

from sqlmodel import Field

from farmtrak.model.base import BaseModel


class HealthRecord(BaseModel, table=True):
    """
    Registro de saúde de um animal.

    Observações:
      - `farmer_id` é copiado do dono da fazenda do animal na criação
        (posse direta, sem precisar de dois saltos animal -> fazenda -> dono).
      - `vet_id` é preenchido quando o registro foi criado por um veterinário.
    """

    __tablename__ = "health_record"

    farmer_id: uuid.UUID = Field(foreign_key="account.id", index=True)
    animal_id: uuid.UUID = Field(foreign_key="animal.id", index=True)
    vet_id: uuid.UUID | None = Field(default=None, foreign_key="account.id", nullable=True, index=True)

    record_type: str = Field(index=True)  # vaccination, treatment, checkup, deworming
    description: str
    treatment: str | None = Field(default=None, nullable=True)
    record_date: date
    next_due_date: date | None = Field(default=None, nullable=True, index=True)
    cost: float | None = Field(default=None, nullable=True)
