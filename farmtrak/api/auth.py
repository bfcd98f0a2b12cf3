import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, field_validator, model_validator
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from farmtrak.auth.dependencies import get_current_account
from farmtrak.auth.jwt import create_access_token
from farmtrak.auth.password import hash_password, verify_password
from farmtrak.db.session import get_session
from farmtrak.db.store import FarmStore, get_store
from farmtrak.model.account import Account, AccountRole
from farmtrak.model.base import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# admin não se auto-registra
_SELF_REGISTER_ROLES = {AccountRole.FARMER, AccountRole.VET, AccountRole.AGROVET}

_PROFILE_FIELDS: dict[AccountRole, tuple[str, ...]] = {
    AccountRole.VET: ("clinic_name", "specialization", "license_number"),
    AccountRole.AGROVET: ("business_name",),
}


class AccountResponse(BaseModel):
    id: uuid.UUID
    email: str
    name: str
    phone: str | None = None
    address: str | None = None
    role: AccountRole
    clinic_name: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    business_name: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    account: AccountResponse


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str
    phone: str | None = None
    role: AccountRole = AccountRole.FARMER
    address: str | None = None
    clinic_name: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    business_name: str | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("email inválido")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("password deve ter ao menos 6 caracteres")
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if len(v.strip()) < 2:
            raise ValueError("name deve ter ao menos 2 caracteres")
        return v.strip()

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: AccountRole) -> AccountRole:
        if v not in _SELF_REGISTER_ROLES:
            raise ValueError("role inválida (esperado: farmer|vet|agrovet)")
        return v

    @model_validator(mode="after")
    def validate_profile(self):
        # Vet precisa de clínica, especialização e registro; agrovet, do nome da loja
        required = _PROFILE_FIELDS.get(self.role, ())
        missing = [f for f in required if not (getattr(self, f) or "").strip()]
        if missing:
            raise ValueError(f"campos obrigatórios para {self.role.value}: {', '.join(missing)}")
        return self


class LoginRequest(BaseModel):
    email: str
    password: str


class ProfileUpdateRequest(BaseModel):
    # email e role não são editáveis
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    clinic_name: str | None = None
    specialization: str | None = None
    license_number: str | None = None
    business_name: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None and len(v.strip()) < 2:
            raise ValueError("name deve ter ao menos 2 caracteres")
        return v.strip() if v is not None else None


def _auth_response(account: Account) -> AuthResponse:
    token = create_access_token(account.id, account.email, account.role.value)
    return AuthResponse(access_token=token, account=AccountResponse.model_validate(account))


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    store: FarmStore = Depends(get_store),
    session: Session = Depends(get_session),
):
    """Cria uma conta e retorna o token de acesso."""
    if store.get_account_by_email(body.email):
        raise HTTPException(status_code=400, detail="Account with this email already exists")

    account = Account(
        email=body.email,
        name=body.name,
        phone=body.phone,
        address=body.address,
        role=body.role,
        password_hash=hash_password(body.password),
        clinic_name=body.clinic_name,
        specialization=body.specialization,
        license_number=body.license_number,
        business_name=body.business_name,
    )
    session.add(account)
    try:
        session.commit()
    except IntegrityError as e:
        # Corrida entre dois registros com o mesmo email
        session.rollback()
        raise HTTPException(status_code=400, detail="Account with this email already exists") from e
    session.refresh(account)
    logger.info("Conta registrada: id=%s role=%s", account.id, account.role.value)
    return _auth_response(account)


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, store: FarmStore = Depends(get_store)):
    """Autentica por email/senha. Mesma resposta para email ou senha errados."""
    account = store.get_account_by_email(body.email.strip().lower())
    if not account or not verify_password(body.password, account.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _auth_response(account)


@router.get("/me", response_model=AccountResponse)
def get_profile(account: Account = Depends(get_current_account)):
    return account


@router.put("/me", response_model=AccountResponse)
def update_profile(
    body: ProfileUpdateRequest,
    account: Account = Depends(get_current_account),
    session: Session = Depends(get_session),
):
    """Atualiza o perfil da conta autenticada (apenas campos enviados)."""
    for field, value in body.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(account, field, value)
    account.updated_at = utc_now()
    session.add(account)
    session.commit()
    session.refresh(account)
    return account
