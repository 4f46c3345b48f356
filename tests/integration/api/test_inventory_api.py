"""Integration tests for the pharmacy inventory API"""

import pytest
from decimal import Decimal

ADMIN = {"X-User-Id": "ADM001", "X-User-Role": "admin"}
NURSE = {"X-User-Id": "NUR001", "X-User-Role": "nurse"}
RECEPTIONIST = {"X-User-Id": "REC001", "X-User-Role": "receptionist"}

MEDICINE_PAYLOAD = {
    "name": "Paracetamol 500mg",
    "generic_name": "Acetaminophen",
    "category": "tablet",
    "manufacturer": "Acme Pharma",
    "batch_number": "B-100",
    "quantity": 20,
    "min_threshold": 10,
    "unit_price": "2.50",
    "expiry_date": "2099-12-31",
}

DISPENSE_PAYLOAD = {"patient_id": "PAT20240042", "patient_name": "Jane Doe"}


async def add_medicine(client, **overrides):
    response = await client.post("/api/inventory/medicines", json={**MEDICINE_PAYLOAD, **overrides}, headers=NURSE)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestInventoryAPI:
    """Test medicine stock endpoints"""

    async def test_add_medicine_derives_status_and_value(self, client):
        # Act
        medicine = await add_medicine(client)

        # Assert
        assert medicine["medicine_id"].startswith("MED")
        assert medicine["status"] == "available"
        assert Decimal(medicine["total_value"]) == Decimal("50.00")
        assert medicine["created_by"] == "NUR001"

    async def test_receptionist_cannot_add_medicine(self, client):
        response = await client.post("/api/inventory/medicines", json=MEDICINE_PAYLOAD, headers=RECEPTIONIST)

        assert response.status_code == 403

    async def test_dispense_reduces_stock(self, client):
        """
        Given: 20 units in stock with a reorder level of 10
        When: 12 units are dispensed
        Then: 8 units remain and the medicine is low on stock
        """
        # Arrange
        medicine = await add_medicine(client)

        # Act
        response = await client.post(
            f"/api/inventory/medicines/{medicine['id']}/dispense",
            json={**DISPENSE_PAYLOAD, "quantity": 12},
            headers=NURSE,
        )

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["medicine"]["quantity"] == 8
        assert body["medicine"]["status"] == "low_stock"
        assert Decimal(body["dispense"]["total_amount"]) == Decimal("30.00")
        assert body["dispense"]["dispensed_by"] == "NUR001"

    async def test_insufficient_stock_leaves_quantity_untouched(self, client):
        # Arrange
        medicine = await add_medicine(client, quantity=5)

        # Act
        response = await client.post(
            f"/api/inventory/medicines/{medicine['id']}/dispense",
            json={**DISPENSE_PAYLOAD, "quantity": 10},
            headers=NURSE,
        )
        fetched = await client.get(f"/api/inventory/medicines/{medicine['id']}", headers=NURSE)

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INSUFFICIENT_STOCK"
        assert response.json()["error"]["message"] == (
            "Insufficient stock for Paracetamol 500mg: requested 10, available 5"
        )
        assert fetched.json()["quantity"] == 5

    async def test_expired_medicine_cannot_be_dispensed(self, client):
        # Arrange
        medicine = await add_medicine(client, expiry_date="2000-01-01")

        # Act
        response = await client.post(
            f"/api/inventory/medicines/{medicine['id']}/dispense",
            json={**DISPENSE_PAYLOAD, "quantity": 1},
            headers=NURSE,
        )

        # Assert
        assert medicine["status"] == "expired"
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MEDICINE_EXPIRED"

    async def test_restock_and_movements(self, client):
        # Arrange
        medicine = await add_medicine(client, quantity=3)
        await client.post(
            f"/api/inventory/medicines/{medicine['id']}/dispense",
            json={**DISPENSE_PAYLOAD, "quantity": 3},
            headers=NURSE,
        )

        # Act
        restocked = await client.post(
            f"/api/inventory/medicines/{medicine['id']}/restock",
            json={"quantity": 100, "unit_price": "3.00", "batch_number": "B-200", "expiry_date": "2099-06-30"},
            headers=NURSE,
        )
        movements = await client.get(f"/api/inventory/medicines/{medicine['id']}/movements", headers=NURSE)

        # Assert
        assert restocked.status_code == 201
        assert restocked.json()["medicine"]["quantity"] == 100
        assert restocked.json()["medicine"]["batch_number"] == "B-200"
        assert Decimal(restocked.json()["medicine"]["total_value"]) == Decimal("300.00")
        assert len(movements.json()["dispenses"]) == 1
        assert len(movements.json()["restocks"]) == 1

    async def test_list_by_derived_status_and_summary(self, client):
        # Arrange
        await add_medicine(client)
        await add_medicine(client, name="Amoxicillin", quantity=0, category="capsule")

        # Act
        out_of_stock = await client.get("/api/inventory/medicines", params={"status": "out_of_stock"}, headers=NURSE)
        summary = await client.get("/api/inventory/medicines/summary", headers=NURSE)

        # Assert
        assert [m["name"] for m in out_of_stock.json()["medicines"]] == ["Amoxicillin"]
        assert summary.json()["total_medicines"] == 2
        assert summary.json()["out_of_stock_items"] == 1
        assert Decimal(summary.json()["total_value"]) == Decimal("50.00")

    async def test_delete_is_admin_only(self, client):
        # Arrange
        medicine = await add_medicine(client)

        # Act
        by_nurse = await client.delete(f"/api/inventory/medicines/{medicine['id']}", headers=NURSE)
        by_admin = await client.delete(f"/api/inventory/medicines/{medicine['id']}", headers=ADMIN)
        missing = await client.get(f"/api/inventory/medicines/{medicine['id']}", headers=ADMIN)

        # Assert
        assert by_nurse.status_code == 403
        assert by_admin.json()["deleted"] is True
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "MEDICINE_NOT_FOUND"
