from datetime import datetime, timedelta

from app.modules.trackings.repository import TrackingsRepository
from tests.conftest import USER_EMAIL


def test_append_and_list_events(client, auth_headers, seeded_users):
    for status in ["parcel_created", "rider_assigned"]:
        response = client.post(
            "/trackings",
            json={"tracking_id": "PCL-1", "status": status, "message": f"{status} ok"},
            headers=auth_headers(USER_EMAIL),
        )
        assert response.status_code == 201
        assert response.json()["inserted"] is True

    events = client.get("/trackings/PCL-1").json()
    assert [e["status"] for e in events] == ["parcel_created", "rider_assigned"]
    assert events[0]["updated_by"] == USER_EMAIL


def test_tracking_id_and_status_are_required(client, auth_headers, seeded_users):
    for payload in [{"status": "x"}, {"tracking_id": "PCL-1"}, {"tracking_id": " ", "status": "x"}]:
        response = client.post("/trackings", json=payload, headers=auth_headers(USER_EMAIL))
        assert response.status_code == 400


def test_events_ordered_by_timestamp_regardless_of_insertion(client, db_session):
    repository = TrackingsRepository(db_session)
    base = datetime(2024, 5, 1, 10, 0)
    for offset, status in [(2, "delivered"), (0, "created"), (1, "in-transit")]:
        repository.append_event({
            "tracking_id": "PCL-9",
            "status": status,
            "timestamp": base + timedelta(hours=offset),
        })

    events = client.get("/trackings/PCL-9").json()
    assert [e["status"] for e in events] == ["created", "in-transit", "delivered"]


def test_unknown_tracking_id_has_no_events(client):
    assert client.get("/trackings/NOPE").json() == []
