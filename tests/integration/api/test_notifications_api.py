"""Integration tests for the notification API"""

import pytest

DOCTOR = {"X-User-Id": "DOC001", "X-User-Role": "doctor"}
NURSE = {"X-User-Id": "NUR001", "X-User-Role": "nurse"}
PATIENT = {"X-User-Id": "PAT20240042", "X-User-Role": "patient"}


async def notify(client, **overrides):
    payload = {
        "recipient_id": "NUR001",
        "type": "appointment_booked",
        "priority": "medium",
        "data": {"doctorName": "Dr. Smith", "date": "2024-03-01", "time": "10:30"},
    }
    payload.update(overrides)
    response = await client.post("/api/notifications", json=payload, headers=DOCTOR)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
class TestNotificationAPI:
    """Test the notification inbox"""

    async def test_create_renders_template(self, client):
        # Act
        notification = await notify(client)

        # Assert
        assert notification["notification_id"].startswith("NOT")
        assert notification["title"] == "New Appointment Booked"
        assert notification["message"] == "Appointment with Dr. Smith scheduled for 2024-03-01 at 10:30"
        assert notification["status"] == "unread"
        assert notification["sender_id"] == "DOC001"

    async def test_patient_cannot_send(self, client):
        response = await client.post(
            "/api/notifications",
            json={"recipient_id": "NUR001", "type": "system_alert", "title": "Hi", "message": "Hi"},
            headers=PATIENT,
        )

        assert response.status_code == 403

    async def test_inbox_is_scoped_and_ordered(self, client):
        """
        Given: A low and a critical notification for the nurse, one for someone else
        When: The nurse lists their inbox
        Then: Only their notifications come back, critical first
        """
        # Arrange
        await notify(client, priority="low")
        await notify(client, type="system_alert", priority="critical", title="Oxygen low", message="Ward 3")
        await notify(client, recipient_id="DOC002")

        # Act
        response = await client.get("/api/notifications", headers=NURSE)

        # Assert
        body = response.json()
        assert body["total"] == 2
        assert body["unread_count"] == 2
        assert [n["priority"] for n in body["notifications"]] == ["critical", "low"]

    async def test_read_read_all_and_archive(self, client):
        # Arrange
        first = await notify(client)
        second = await notify(client)
        third = await notify(client)

        # Act
        read = await client.post(f"/api/notifications/{first['id']}/read", headers=NURSE)
        archived = await client.delete(f"/api/notifications/{second['id']}", headers=NURSE)
        read_all = await client.post("/api/notifications/read-all", headers=NURSE)
        inbox = await client.get("/api/notifications", headers=NURSE)
        archive_box = await client.get("/api/notifications", params={"status": "archived"}, headers=NURSE)

        # Assert
        assert read.json()["status"] == "read"
        assert read.json()["read_at"] is not None
        assert archived.json()["status"] == "archived"
        assert read_all.json()["updated"] == 1
        assert [n["id"] for n in inbox.json()["notifications"]] == [third["id"], first["id"]]
        assert inbox.json()["unread_count"] == 0
        assert [n["id"] for n in archive_box.json()["notifications"]] == [second["id"]]

    async def test_cannot_touch_other_users_notification(self, client):
        # Arrange
        notification = await notify(client)

        # Act
        response = await client.post(f"/api/notifications/{notification['id']}/read", headers=PATIENT)

        # Assert
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOTIFICATION_NOT_FOUND"

    async def test_summary(self, client):
        # Arrange
        await notify(client, priority="high")
        await notify(client)

        # Act
        response = await client.get("/api/notifications/summary", headers=NURSE)

        # Assert
        body = response.json()
        assert body["total_notifications"] == 2
        assert body["unread_count"] == 2
        assert body["high_priority_count"] == 1
        assert body["type_distribution"]["appointment_booked"] == 2
