from farmtrak.model.base import BaseModel
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.farm import Farm, FarmType
from farmtrak.model.animal import Animal
from farmtrak.model.crop import Crop, CropStatus
from farmtrak.model.sale import Sale, PaymentStatus
from farmtrak.model.contact import Contact
from farmtrak.model.health_record import HealthRecord
from farmtrak.model.feed import Feed
from farmtrak.model.agrovet_product import AgrovetProduct

__all__ = [
    "BaseModel",
    "Account",
    "AccountRole",
    "Farm",
    "FarmType",
    "Animal",
    "Crop",
    "CropStatus",
    "Sale",
    "PaymentStatus",
    "Contact",
    "HealthRecord",
    "Feed",
    "AgrovetProduct",
]
