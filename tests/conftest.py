"""
Fixtures compartilhadas.

O banco é SQLite em memória (StaticPool); a sessão do teste é injetada via
app.dependency_overrides[get_session]. Nenhum serviço externo é necessário.
"""

import os

# Antes de importar farmtrak: config é lida no import
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["JWT_ISSUER"] = "farmtrak"
os.environ["APP_ENV"] = "test"

from datetime import timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

from farmtrak.auth.jwt import create_access_token  # noqa: E402
from farmtrak.auth.password import hash_password  # noqa: E402
from farmtrak.db.session import get_session  # noqa: E402
from farmtrak.main import app  # noqa: E402
from farmtrak.model import Account, AccountRole, Animal, Crop, Farm  # noqa: E402

PASSWORD = "secret123"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def client(session):
    # Mesma sessão dos fixtures: o que o teste grava a API enxerga
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(session):
    counter = {"n": 0}

    def _make(role: AccountRole = AccountRole.FARMER, email: str | None = None, **fields) -> Account:
        counter["n"] += 1
        account = Account(
            email=email or f"{role.value}{counter['n']}@example.com",
            name=fields.pop("name", f"{role.value.capitalize()} {counter['n']}"),
            role=role,
            password_hash=hash_password(PASSWORD),
            **fields,
        )
        session.add(account)
        session.commit()
        return account

    return _make


@pytest.fixture
def make_farm(session):
    def _make(owner: Account, name: str = "Fazenda Boa Vista", **fields) -> Farm:
        farm = Farm(owner_id=owner.id, name=name, **fields)
        session.add(farm)
        session.commit()
        return farm

    return _make


@pytest.fixture
def make_animal(session):
    def _make(farm: Farm, tag_number: str = "BR-001", species: str = "cattle", **fields) -> Animal:
        animal = Animal(farm_id=farm.id, tag_number=tag_number, species=species, **fields)
        session.add(animal)
        session.commit()
        return animal

    return _make


@pytest.fixture
def make_crop(session):
    def _make(farm: Farm, name: str = "Milho", **fields) -> Crop:
        crop = Crop(farm_id=farm.id, name=name, **fields)
        session.add(crop)
        session.commit()
        return crop

    return _make


def token_for(account: Account, *, expires_in: timedelta | None = None) -> str:
    return create_access_token(account.id, account.email, account.role.value, expires_in=expires_in)


def auth_header(account: Account, **kwargs) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_for(account, **kwargs)}"}
