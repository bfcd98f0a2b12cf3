"""Tests for the resource routes: listing scope, computed fields and vet access."""

from datetime import date, timedelta

from conftest import auth_header
from farmtrak.model import AccountRole, HealthRecord


class TestFarms:
    def test_create_sets_owner_from_account(self, client, make_account):
        farmer = make_account()

        response = client.post(
            "/farms",
            json={"name": "  Sítio Esperança ", "farm_type": "livestock", "area_hectares": 12.5},
            headers=auth_header(farmer),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["owner_id"] == str(farmer.id)
        assert data["name"] == "Sítio Esperança"
        assert data["is_active"] is True

    def test_list_only_own_active_farms(self, client, make_account, make_farm):
        farmer = make_account()
        mine = make_farm(farmer, name="Minha")
        make_farm(farmer, name="Antiga", is_active=False)
        make_farm(make_account(), name="Vizinho")

        response = client.get("/farms", headers=auth_header(farmer))

        assert [f["id"] for f in response.json()] == [str(mine.id)]

    def test_admin_lists_all_active_farms(self, client, make_account, make_farm):
        make_farm(make_account(), name="Uma")
        make_farm(make_account(), name="Outra")

        response = client.get("/farms", headers=auth_header(make_account(AccountRole.ADMIN)))

        assert len(response.json()) == 2

    def test_soft_delete_hides_farm_from_list(self, client, make_account, make_farm):
        farmer = make_account()
        farm = make_farm(farmer)

        client.delete(f"/farms/{farm.id}", headers=auth_header(farmer))

        assert client.get("/farms", headers=auth_header(farmer)).json() == []

    def test_update_cannot_change_owner(self, client, make_account, make_farm):
        farmer = make_account()
        farm = make_farm(farmer)
        other = make_account()

        response = client.put(
            f"/farms/{farm.id}", json={"owner_id": str(other.id), "location": "MG"}, headers=auth_header(farmer)
        )

        assert response.status_code == 200
        assert response.json()["owner_id"] == str(farmer.id)
        assert response.json()["location"] == "MG"


class TestAnimals:
    def test_list_scoped_to_own_farms(self, client, make_account, make_farm, make_animal):
        farmer = make_account()
        mine = make_animal(make_farm(farmer), tag_number="A1")
        make_animal(make_farm(make_account(), name="Vizinho"), tag_number="B1")

        response = client.get("/animals", headers=auth_header(farmer))

        assert [a["id"] for a in response.json()] == [str(mine.id)]

    def test_vet_lists_all_animals(self, client, make_account, make_farm, make_animal):
        make_animal(make_farm(make_account()), tag_number="A1")
        make_animal(make_farm(make_account(), name="Vizinho"), tag_number="B1")

        response = client.get("/animals", headers=auth_header(make_account(AccountRole.VET)))

        assert len(response.json()) == 2

    def test_agrovet_is_not_allowed(self, client, make_account):
        response = client.get("/animals", headers=auth_header(make_account(AccountRole.AGROVET)))

        assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"

    def test_delete_is_soft_and_keeps_health_records(self, client, session, make_account, make_farm, make_animal):
        farmer = make_account()
        animal = make_animal(make_farm(farmer))
        session.add(
            HealthRecord(
                farmer_id=farmer.id,
                animal_id=animal.id,
                record_type="checkup",
                description="Rotina",
                record_date=date(2026, 1, 5),
            )
        )
        session.commit()
        headers = auth_header(farmer)

        response = client.delete(f"/animals/{animal.id}", headers=headers)

        assert response.status_code == 200
        assert client.get("/animals", headers=headers).json() == []
        assert client.get(f"/animals/{animal.id}", headers=headers).json()["is_active"] is False
        assert len(client.get("/health-records", headers=headers).json()) == 1


class TestCrops:
    def test_create_returns_computed_stage(self, client, make_account, make_farm):
        farmer = make_account()
        farm = make_farm(farmer)
        today = date.today()

        response = client.post(
            "/crops",
            json={
                "farm_id": str(farm.id),
                "name": "Milho",
                "planting_date": (today - timedelta(days=100)).isoformat(),
                "expected_harvest_date": (today + timedelta(days=2)).isoformat(),
            },
            headers=auth_header(farmer),
        )

        assert response.status_code == 201
        assert response.json()["status"] == "planted"
        assert response.json()["stage"] == "ready"

    def test_harvest_sets_actual_date(self, client, make_account, make_farm, make_crop):
        farmer = make_account()
        crop = make_crop(make_farm(farmer), planting_date=date(2026, 1, 1))

        response = client.patch(
            f"/crops/{crop.id}/status",
            json={"status": "harvested", "actual_harvest_date": "2026-05-02"},
            headers=auth_header(farmer),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "harvested"
        assert data["actual_harvest_date"] == "2026-05-02"
        assert data["stage"] == "harvested"

    def test_status_change_requires_ownership(self, client, make_account, make_farm, make_crop):
        crop = make_crop(make_farm(make_account()))
        vet = make_account(AccountRole.VET)

        response = client.patch(f"/crops/{crop.id}/status", json={"status": "failed"}, headers=auth_header(vet))

        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_harvest_before_planting_is_invalid(self, client, make_account, make_farm):
        farmer = make_account()
        farm = make_farm(farmer)

        response = client.post(
            "/crops",
            json={
                "farm_id": str(farm.id),
                "name": "Feijão",
                "planting_date": "2026-05-01",
                "expected_harvest_date": "2026-04-01",
            },
            headers=auth_header(farmer),
        )

        assert response.status_code == 422


class TestSales:
    def _create(self, client, farmer, **overrides):
        body = {"customer_name": "Mercado Central", "product": "Leite", "quantity": 10, "unit": "L", "unit_price": 4.5}
        body.update(overrides)
        return client.post("/sales", json=body, headers=auth_header(farmer))

    def test_create_computes_totals(self, client, make_account):
        response = self._create(client, make_account(), amount_paid=20)

        assert response.status_code == 201
        data = response.json()
        assert data["total_amount"] == 45.0
        assert data["amount_pending"] == 25.0
        assert data["payment_status"] == "partial"

    def test_payment_update_recomputes_status(self, client, make_account):
        farmer = make_account()
        sale_id = self._create(client, farmer).json()["id"]

        response = client.patch(f"/sales/{sale_id}/payment", json={"amount_paid": 45}, headers=auth_header(farmer))

        assert response.json()["payment_status"] == "paid"
        assert response.json()["amount_pending"] == 0.0

    def test_explicit_payment_status_wins(self, client, make_account):
        farmer = make_account()
        sale_id = self._create(client, farmer).json()["id"]

        response = client.patch(
            f"/sales/{sale_id}/payment",
            json={"amount_paid": 45, "payment_status": "partial"},
            headers=auth_header(farmer),
        )

        assert response.json()["payment_status"] == "partial"

    def test_list_filters_by_payment_status(self, client, make_account):
        farmer = make_account()
        self._create(client, farmer)
        paid = self._create(client, farmer, amount_paid=45).json()

        response = client.get("/sales", params={"payment_status": "paid"}, headers=auth_header(farmer))

        assert [s["id"] for s in response.json()] == [paid["id"]]

    def test_other_farmer_cannot_read_sale(self, client, make_account):
        sale_id = self._create(client, make_account()).json()["id"]

        response = client.get(f"/sales/{sale_id}", headers=auth_header(make_account()))

        assert response.json()["error"]["code"] == "NOT_OWNER"


class TestContacts:
    def test_contacts_are_private(self, client, make_account):
        alice = make_account()
        bob = make_account()
        created = client.post(
            "/contacts", json={"name": "Casa Agro", "contact_type": "Supplier"}, headers=auth_header(alice)
        ).json()

        assert created["contact_type"] == "supplier"
        assert client.get("/contacts", headers=auth_header(bob)).json() == []
        response = client.get(f"/contacts/{created['id']}", headers=auth_header(bob))
        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_any_role_can_keep_contacts(self, client, make_account):
        agrovet = make_account(AccountRole.AGROVET)

        response = client.post(
            "/contacts", json={"name": "Fazenda Sol", "contact_type": "buyer"}, headers=auth_header(agrovet)
        )

        assert response.status_code == 201

    def test_invalid_contact_type(self, client, make_account):
        response = client.post(
            "/contacts", json={"name": "X", "contact_type": "friend"}, headers=auth_header(make_account())
        )

        assert response.status_code == 422


class TestHealthRecords:
    def test_vet_records_for_any_animal(self, client, make_account, make_farm, make_animal):
        farmer = make_account()
        animal = make_animal(make_farm(farmer))
        vet = make_account(AccountRole.VET)

        response = client.post(
            "/health-records",
            json={"animal_id": str(animal.id), "record_type": "vaccination", "description": "Aftosa"},
            headers=auth_header(vet),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["farmer_id"] == str(farmer.id)
        assert data["vet_id"] == str(vet.id)

        # O dono do animal enxerga o registro feito pelo vet
        listed = client.get("/health-records", headers=auth_header(farmer)).json()
        assert [r["id"] for r in listed] == [data["id"]]

    def test_farmer_cannot_record_for_foreign_animal(self, client, make_account, make_farm, make_animal):
        animal = make_animal(make_farm(make_account()))

        response = client.post(
            "/health-records",
            json={"animal_id": str(animal.id), "record_type": "checkup", "description": "Rotina"},
            headers=auth_header(make_account()),
        )

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_owner_record_has_no_vet(self, client, make_account, make_farm, make_animal):
        farmer = make_account()
        animal = make_animal(make_farm(farmer))

        response = client.post(
            "/health-records",
            json={"animal_id": str(animal.id), "record_type": "deworming", "description": "Vermífugo"},
            headers=auth_header(farmer),
        )

        assert response.json()["vet_id"] is None

    def test_vet_cannot_delete_record(self, client, make_account, make_farm, make_animal):
        farmer = make_account()
        animal = make_animal(make_farm(farmer))
        vet = make_account(AccountRole.VET)
        record_id = client.post(
            "/health-records",
            json={"animal_id": str(animal.id), "record_type": "treatment", "description": "Mastite"},
            headers=auth_header(vet),
        ).json()["id"]

        assert client.get(f"/health-records/{record_id}", headers=auth_header(vet)).status_code == 200
        response = client.delete(f"/health-records/{record_id}", headers=auth_header(vet))
        assert response.json()["error"]["code"] == "NOT_OWNER"

    def test_upcoming_window(self, client, make_account, make_farm, make_animal):
        farmer = make_account()
        animal = make_animal(make_farm(farmer))
        today = date.today()
        headers = auth_header(farmer)
        for days in (5, 20, 60):
            client.post(
                "/health-records",
                json={
                    "animal_id": str(animal.id),
                    "record_type": "vaccination",
                    "description": f"Reforço {days}d",
                    "next_due_date": (today + timedelta(days=days)).isoformat(),
                },
                headers=headers,
            )

        response = client.get("/health-records/upcoming", params={"days": 30}, headers=headers)

        assert [r["description"] for r in response.json()] == ["Reforço 5d", "Reforço 20d"]


class TestFarmStats:
    def test_counts_active_animals_and_crops(self, client, make_account, make_farm, make_animal, make_crop):
        farmer = make_account()
        farm = make_farm(farmer, area_hectares=20)
        make_animal(farm, tag_number="A1")
        make_animal(farm, tag_number="A2")
        make_animal(farm, tag_number="A3", is_active=False)
        make_crop(farm, name="Milho", area_hectares=5)
        make_crop(farm, name="Soja", area_hectares=3)
        make_crop(farm, name="Trigo", area_hectares=10, is_active=False)

        response = client.get(f"/farms/{farm.id}/stats", headers=auth_header(farmer))

        assert response.status_code == 200
        assert response.json() == {
            "farm_id": str(farm.id),
            "animal_count": 2,
            "crop_count": 2,
            "total_crop_area_hectares": 8.0,
            "utilization_percentage": 40.0,
        }

    def test_farm_without_area_has_zero_utilization(self, client, make_account, make_farm, make_crop):
        farmer = make_account()
        farm = make_farm(farmer)
        make_crop(farm, area_hectares=2)

        response = client.get(f"/farms/{farm.id}/stats", headers=auth_header(farmer))

        assert response.json()["utilization_percentage"] == 0.0

    def test_stats_require_ownership(self, client, make_account, make_farm):
        farm = make_farm(make_account())

        response = client.get(f"/farms/{farm.id}/stats", headers=auth_header(make_account()))

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_OWNER"


class TestCropDelete:
    def test_delete_is_soft(self, client, make_account, make_farm, make_crop):
        farmer = make_account()
        crop = make_crop(make_farm(farmer))
        headers = auth_header(farmer)

        assert client.delete(f"/crops/{crop.id}", headers=headers).status_code == 200

        assert client.get("/crops", headers=headers).json() == []
        assert client.get(f"/crops/{crop.id}", headers=headers).json()["is_active"] is False
