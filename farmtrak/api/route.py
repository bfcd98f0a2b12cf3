from fastapi import APIRouter, Depends

from farmtrak.api.agrovet import router as agrovet_router
from farmtrak.api.animal import router as animal_router
from farmtrak.api.auth import AccountResponse, router as auth_router
from farmtrak.api.contact import router as contact_router
from farmtrak.api.crop import router as crop_router
from farmtrak.api.farm import router as farm_router
from farmtrak.api.feed import router as feed_router
from farmtrak.api.health_record import router as health_record_router
from farmtrak.api.sale import router as sale_router
from farmtrak.api.vet import router as vet_router
from farmtrak.auth.dependencies import get_current_account
from farmtrak.model.account import Account


router = APIRouter()  # Sem tag padrão - cada endpoint define sua própria tag
router.include_router(auth_router)
router.include_router(farm_router)
router.include_router(animal_router)
router.include_router(crop_router)
router.include_router(sale_router)
router.include_router(contact_router)
router.include_router(health_record_router)
router.include_router(feed_router)
router.include_router(vet_router)
router.include_router(agrovet_router)


@router.get("/health", tags=["System"])
def health():
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/me", response_model=AccountResponse, tags=["Auth"])
def get_me(account: Account = Depends(get_current_account)):
    """
    Retorna os dados da conta autenticada.
    Mesmo conteúdo de /auth/me, exposto na raiz.
    """
    return account
