"""
Status derivados recalculados a partir de datas/valores gravados.
Não há máquina de estados: cada leitura recalcula.
"""

from __future__ import annotations

from datetime import date, timedelta

from farmtrak.model import Crop, CropStatus, PaymentStatus

READY_WINDOW = timedelta(days=7)


def compute_crop_stage(crop: Crop, today: date | None = None) -> str:
    """
    Estágio da cultura: failed, planning, harvested, overdue, ready ou growing.

    - `overdue`: chegou a colheita prevista (o próprio dia já conta) sem colheita real
    - `ready`: colheita prevista nos próximos 7 dias
    """
    today = today or date.today()
    if crop.status == CropStatus.FAILED:
        return "failed"
    if not crop.planting_date:
        return "planning"
    if crop.actual_harvest_date:
        return "harvested"
    if crop.expected_harvest_date:
        if today >= crop.expected_harvest_date:
            return "overdue"
        if crop.expected_harvest_date - today <= READY_WINDOW:
            return "ready"
    return "growing"


def compute_payment_status(total_amount: float, amount_paid: float) -> tuple[float, PaymentStatus]:
    """Retorna (amount_pending, payment_status) para um total e valor pago."""
    pending = round(total_amount - amount_paid, 2)
    if pending <= 0:
        return pending, PaymentStatus.PAID
    if amount_paid > 0:
        return pending, PaymentStatus.PARTIAL
    return pending, PaymentStatus.PENDING
