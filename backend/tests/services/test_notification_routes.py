"""Notification Routes — tests for notification creation and rescheduling.

Tests cover:
    - POST /notifications requires an existing event
    - PATCH .../frequency moves start_date by the frequency offset
    - repeated PATCH requests keep moving start_date forward
    - malformed notify triggers map to 400
"""

NOTIFICATIONS = "/api/v1/notifications"


def _payload(event_id: str, **overrides) -> dict:
    body = {
        "event_id": event_id,
        "delivery_kind": "email",
        "delivery_recipient": "test@example.com",
        "delivery_frequency": "daily",
        "notify_trigger": "M10:00:00::I604800",
        "start_date": "2024-05-01T08:00:00+00:00",
        "recipients": ["test@example.com"],
    }
    body.update(overrides)
    return body


async def test_create_notification(client, seed_event):
    response = await client.post(
        NOTIFICATIONS, json=_payload(seed_event.id.hex()),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["display_id"].startswith("NTFY")
    assert body["event_id"] == seed_event.id.hex()
    assert body["delivery_kind"] == "email"
    assert body["notify_trigger"] == {
        "time": "10:00:00", "interval_seconds": 604800,
    }
    assert body["recipients"] == ["test@example.com"]


async def test_get_notification(client, seed_event):
    created = (await client.post(
        NOTIFICATIONS, json=_payload(seed_event.id.hex()),
    )).json()
    response = await client.get(f"{NOTIFICATIONS}/{created['id']}")
    assert response.status_code == 200
    assert response.json()["delivery_frequency"] == "daily"


async def test_create_for_unknown_event_is_404(client):
    response = await client.post(NOTIFICATIONS, json=_payload("0" * 24))
    assert response.status_code == 404


async def test_bad_event_id_shape_is_400(client):
    response = await client.post(NOTIFICATIONS, json=_payload("XYZ"))
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_malformed_notify_trigger_is_400(client, seed_event):
    response = await client.post(
        NOTIFICATIONS,
        json=_payload(seed_event.id.hex(), notify_trigger="M10:00:00"),
    )
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_INPUT_STRING"


async def test_weekly_reschedule_advances_seven_days(client, seed_event):
    created = (await client.post(
        NOTIFICATIONS, json=_payload(seed_event.id.hex()),
    )).json()
    response = await client.patch(
        f"{NOTIFICATIONS}/{created['id']}/frequency",
        json={"delivery_frequency": "weekly"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["delivery_frequency"] == "weekly"
    assert body["start_date"].startswith("2024-05-08T08:00:00")


async def test_repeated_reschedule_accumulates(client, seed_event):
    created = (await client.post(
        NOTIFICATIONS, json=_payload(seed_event.id.hex()),
    )).json()
    url = f"{NOTIFICATIONS}/{created['id']}/frequency"
    await client.patch(url, json={"delivery_frequency": "weekly"})
    await client.patch(url, json={"delivery_frequency": "weekly"})
    stored = (await client.get(f"{NOTIFICATIONS}/{created['id']}")).json()
    assert stored["start_date"].startswith("2024-05-15T08:00:00")


async def test_unknown_frequency_is_400(client, seed_event):
    created = (await client.post(
        NOTIFICATIONS, json=_payload(seed_event.id.hex()),
    )).json()
    response = await client.patch(
        f"{NOTIFICATIONS}/{created['id']}/frequency",
        json={"delivery_frequency": "hourly"},
    )
    assert response.status_code == 400


async def test_reschedule_unknown_notification_is_404(client):
    response = await client.patch(
        f"{NOTIFICATIONS}/{'0' * 24}/frequency",
        json={"delivery_frequency": "weekly"},
    )
    assert response.status_code == 404
