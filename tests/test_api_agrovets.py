"""Tests for the agrovet directory and product catalog."""

import uuid

import pytest

from conftest import auth_header
from farmtrak.model import AccountRole, AgrovetProduct


@pytest.fixture
def make_product(session):
    def _make(agrovet, name="Vermífugo", price=50.0, **fields) -> AgrovetProduct:
        product = AgrovetProduct(agrovet_id=agrovet.id, name=name, price=price, **fields)
        session.add(product)
        session.commit()
        return product

    return _make


def test_register_agrovet_requires_business_name(client):
    body = {"email": "loja@example.com", "password": "secret123", "name": "Mike", "role": "agrovet"}

    assert client.post("/auth/register", json=body).status_code == 422

    body["business_name"] = "Casa do Produtor"
    response = client.post("/auth/register", json=body)
    assert response.status_code == 201
    assert response.json()["account"]["business_name"] == "Casa do Produtor"


def test_directory_hides_contact_from_anonymous(client, make_account):
    make_account(AccountRole.AGROVET, business_name="Casa do Produtor", phone="+55 31 3333-0000")
    make_account(AccountRole.VET)

    anonymous = client.get("/agrovets").json()
    authenticated = client.get("/agrovets", headers=auth_header(make_account())).json()

    assert len(anonymous) == 1
    assert anonymous[0]["business_name"] == "Casa do Produtor"
    assert anonymous[0]["phone"] is None
    assert authenticated[0]["phone"] == "+55 31 3333-0000"


def test_public_catalog_lists_available_products(client, make_account, make_product):
    agrovet = make_account(AccountRole.AGROVET)
    available = make_product(agrovet, name="Sal mineral")
    make_product(agrovet, name="Esgotado", is_available=False)
    make_product(make_account(AccountRole.AGROVET), name="De outra loja")

    response = client.get(f"/agrovets/{agrovet.id}/products")

    assert [p["id"] for p in response.json()] == [str(available.id)]


def test_catalog_of_non_agrovet_is_not_found(client, make_account):
    farmer = make_account()

    assert client.get(f"/agrovets/{farmer.id}/products").status_code == 404
    assert client.get(f"/agrovets/{uuid.uuid4()}/products").status_code == 404


def test_agrovet_manages_own_catalog(client, make_account):
    agrovet = make_account(AccountRole.AGROVET)
    headers = auth_header(agrovet)

    created = client.post(
        "/agrovets/products",
        json={"name": "Ração Premium", "category": "feed", "price": 2500, "quantity": 10, "unit": "kg"},
        headers=headers,
    )
    assert created.status_code == 201
    product_id = created.json()["id"]
    assert created.json()["agrovet_id"] == str(agrovet.id)

    updated = client.put(f"/agrovets/products/{product_id}", json={"is_available": False}, headers=headers)
    assert updated.json()["is_available"] is False

    mine = client.get("/agrovets/products", headers=headers).json()
    assert [p["id"] for p in mine] == [product_id]


@pytest.mark.parametrize("role", [AccountRole.FARMER, AccountRole.VET])
def test_other_roles_cannot_sell(client, make_account, role):
    response = client.post("/agrovets/products", json={"name": "X", "price": 1}, headers=auth_header(make_account(role)))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


def test_agrovet_cannot_touch_another_catalog(client, make_account, make_product):
    product = make_product(make_account(AccountRole.AGROVET))
    rival = make_account(AccountRole.AGROVET)

    response = client.delete(f"/agrovets/products/{product.id}", headers=auth_header(rival))

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_OWNER"


def test_role_gate_runs_before_product_lookup(client, make_account, make_product):
    product = make_product(make_account(AccountRole.AGROVET))

    response = client.put(
        f"/agrovets/products/{product.id}", json={"price": 1}, headers=auth_header(make_account(AccountRole.FARMER))
    )

    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


def test_admin_overrides_catalog_ownership(client, make_account, make_product):
    product = make_product(make_account(AccountRole.AGROVET))

    response = client.delete(
        f"/agrovets/products/{product.id}", headers=auth_header(make_account(AccountRole.ADMIN))
    )

    assert response.status_code == 200
