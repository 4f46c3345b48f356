"""Integration tests for the invoice and payment API"""

import base64
import pytest
from decimal import Decimal

ADMIN = {"X-User-Id": "ADM001", "X-User-Role": "admin"}
RECEPTIONIST = {"X-User-Id": "REC001", "X-User-Role": "receptionist"}
NURSE = {"X-User-Id": "NUR001", "X-User-Role": "nurse"}
PATIENT = {"X-User-Id": "PAT20240042", "X-User-Role": "patient"}

INVOICE_PAYLOAD = {
    "patient_id": "PAT20240042",
    "patient_name": "Jane Doe",
    "items": [
        {"description": "Consultation", "category": "consultation", "quantity": 2, "unit_price": "500"},
        {"description": "Blood panel", "category": "test", "quantity": 1, "unit_price": "1500"},
    ],
    "discount_percentage": "10",
    "tax_percentage": "5",
}


async def create_invoice(client, payload=None):
    response = await client.post("/api/billing/invoices", json=payload or INVOICE_PAYLOAD, headers=RECEPTIONIST)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestInvoiceAPI:
    """Test invoice lifecycle through the API"""

    async def test_create_invoice_computes_totals(self, client):
        """
        Given: Items 2 x 500 and 1 x 1500, 10% discount, 5% tax
        When: The invoice is created
        Then: Totals are computed server side
        """
        # Act
        invoice = await create_invoice(client)

        # Assert
        assert invoice["invoice_number"].startswith("INV-")
        assert Decimal(invoice["subtotal"]) == Decimal("2500")
        assert Decimal(invoice["total_amount"]) == Decimal("2362.50")
        assert Decimal(invoice["balance_amount"]) == Decimal("2362.50")
        assert invoice["status"] == "pending"
        assert len(invoice["items"]) == 2

    async def test_invoice_numbers_are_sequential(self, client):
        first = await create_invoice(client)
        second = await create_invoice(client)

        assert int(second["invoice_number"].split("-")[-1]) == int(first["invoice_number"].split("-")[-1]) + 1

    async def test_nurse_cannot_create_invoice(self, client):
        response = await client.post("/api/billing/invoices", json=INVOICE_PAYLOAD, headers=NURSE)

        assert response.status_code == 403

    async def test_partial_then_full_payment(self, client):
        """
        Given: An invoice of 2362.50
        When: 1000 and then 1362.50 are paid
        Then: Status goes partially_paid then paid, and further payments are rejected
        """
        # Arrange
        invoice = await create_invoice(client)
        url = f"/api/billing/invoices/{invoice['id']}/pay"

        # Act
        first = await client.post(url, json={"amount": "1000", "payment_method": "card"}, headers=RECEPTIONIST)
        second = await client.post(url, json={"amount": "1362.50", "payment_method": "cash"}, headers=RECEPTIONIST)
        third = await client.post(url, json={"amount": "1", "payment_method": "cash"}, headers=RECEPTIONIST)

        # Assert
        assert first.status_code == 201
        assert first.json()["invoice"]["status"] == "partially_paid"
        assert Decimal(first.json()["invoice"]["balance_amount"]) == Decimal("1362.50")
        assert second.json()["invoice"]["status"] == "paid"
        assert Decimal(second.json()["invoice"]["balance_amount"]) == Decimal("0")
        assert third.status_code == 400
        assert third.json()["error"]["code"] == "INVALID_INVOICE_STATUS"

    async def test_overpayment_rejected(self, client):
        # Arrange
        invoice = await create_invoice(client)

        # Act
        response = await client.post(
            f"/api/billing/invoices/{invoice['id']}/pay",
            json={"amount": "2500", "payment_method": "card"},
            headers=RECEPTIONIST,
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "PAYMENT_EXCEEDS_BALANCE"

    async def test_payments_listed_and_patient_notified(self, client):
        # Arrange
        invoice = await create_invoice(client)
        await client.post(
            f"/api/billing/invoices/{invoice['id']}/pay",
            json={"amount": "500", "payment_method": "upi", "transaction_id": "TXN-1"},
            headers=RECEPTIONIST,
        )

        # Act
        payments = await client.get("/api/billing/payments", headers=ADMIN)
        notifications = await client.get("/api/notifications", headers=PATIENT)

        # Assert
        assert payments.json()["total"] == 1
        assert payments.json()["payments"][0]["payment_method"] == "upi"
        assert notifications.json()["notifications"][0]["type"] == "invoice_payment"

    async def test_finalized_invoice_items_frozen(self, client):
        # Arrange
        invoice = await create_invoice(client)
        await client.post(
            f"/api/billing/invoices/{invoice['id']}/pay",
            json={"amount": "100", "payment_method": "cash"},
            headers=RECEPTIONIST,
        )

        # Act
        response = await client.patch(
            f"/api/billing/invoices/{invoice['id']}",
            json={"discount_percentage": "50"},
            headers=ADMIN,
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVOICE_FINALIZED"

    async def test_delete_requires_admin_and_no_payments(self, client):
        # Arrange
        unpaid = await create_invoice(client)
        paid = await create_invoice(client)
        await client.post(
            f"/api/billing/invoices/{paid['id']}/pay",
            json={"amount": "100", "payment_method": "cash"},
            headers=RECEPTIONIST,
        )

        # Act
        by_receptionist = await client.delete(f"/api/billing/invoices/{unpaid['id']}", headers=RECEPTIONIST)
        with_payments = await client.delete(f"/api/billing/invoices/{paid['id']}", headers=ADMIN)
        by_admin = await client.delete(f"/api/billing/invoices/{unpaid['id']}", headers=ADMIN)

        # Assert
        assert by_receptionist.status_code == 403
        assert with_payments.status_code == 409
        assert by_admin.status_code == 200

    async def test_patient_sees_only_own_invoices(self, client):
        # Arrange
        await create_invoice(client)
        await create_invoice(client, {**INVOICE_PAYLOAD, "patient_id": "PAT20249999", "patient_name": "John Roe"})

        # Act
        response = await client.get("/api/billing/invoices", headers=PATIENT)

        # Assert
        assert response.json()["total"] == 1
        assert response.json()["invoices"][0]["patient_id"] == "PAT20240042"

    async def test_billing_summary(self, client):
        # Arrange
        invoice = await create_invoice(client)
        await client.post(
            f"/api/billing/invoices/{invoice['id']}/pay",
            json={"amount": "2362.50", "payment_method": "card"},
            headers=RECEPTIONIST,
        )

        # Act
        response = await client.get("/api/billing/invoices/summary", headers=ADMIN)

        # Assert
        body = response.json()
        assert body["total_invoices"] == 1
        assert body["paid_invoices"] == 1
        assert Decimal(body["total_revenue"]) == Decimal("2362.50")

    async def test_invoice_pdf(self, client):
        # Arrange
        invoice = await create_invoice(client)

        # Act
        rendered = await client.get(f"/api/billing/invoices/{invoice['id']}/pdf", headers=ADMIN)
        download = await client.get(f"/api/billing/invoices/{invoice['id']}/pdf/download", headers=ADMIN)

        # Assert
        assert rendered.status_code == 200
        assert base64.b64decode(rendered.json()["pdf_base64"]).startswith(b"%PDF")
        assert download.headers["content-type"] == "application/pdf"
        assert download.content.startswith(b"%PDF")

    async def test_unknown_invoice(self, client):
        response = await client.get("/api/billing/invoices/does-not-exist", headers=ADMIN)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"
