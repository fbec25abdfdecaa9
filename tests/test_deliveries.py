from datetime import datetime, timedelta

import pytest

from app.shared.database.models import RiderEarning, User
from tests.conftest import ADMIN_EMAIL, USER_EMAIL, RIDER_EMAIL


@pytest.fixture
def assigned_parcel(client, auth_headers, approved_rider, make_parcel):
    parcel_id = make_parcel(cost="500", sender_region="Dhaka", receiver_region="dhaka")
    response = client.patch(
        f"/parcels/{parcel_id}/assign-rider",
        json={"rider_id": approved_rider, "rider_name": "Rahim", "rider_email": RIDER_EMAIL},
        headers=auth_headers(ADMIN_EMAIL),
    )
    assert response.status_code == 200
    return parcel_id


def _set_status(client, auth_headers, parcel_id, status):
    return client.patch(
        f"/parcels/{parcel_id}/status", json={"status": status}, headers=auth_headers(RIDER_EMAIL)
    )


def _deliver(client, auth_headers, parcel_id):
    assert _set_status(client, auth_headers, parcel_id, "in-transit").status_code == 200
    assert _set_status(client, auth_headers, parcel_id, "delivered").status_code == 200


def test_full_delivery_and_cashout_scenario(client, auth_headers, assigned_parcel, get_rider, get_parcel):
    parcel = get_parcel(assigned_parcel)
    assert parcel.delivery_status == "rider_assigned"
    assert parcel.assigned_rider_email == RIDER_EMAIL
    assert parcel.assigned_at is not None
    assert get_rider().work_status == "in-delivery"

    _deliver(client, auth_headers, assigned_parcel)
    parcel = get_parcel(assigned_parcel)
    assert parcel.delivery_status == "delivered"
    assert parcel.picked_at is not None
    assert parcel.delivered_at is not None
    assert get_rider().work_status == "idle"

    response = client.post(
        "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL)
    )
    assert response.status_code == 201
    assert response.json()["amount"] == 150
    assert get_rider().pending_earnings == 150

    response = client.patch(f"/parcels/{assigned_parcel}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert response.status_code == 200
    assert response.json()["amount"] == 150

    rider = get_rider()
    assert rider.pending_earnings == 0
    assert rider.cashed_out_earnings == 150
    assert rider.total_earnings == 150
    assert get_parcel(assigned_parcel).cashout_status == "cashed_out"
    assert get_parcel(assigned_parcel).cashed_out_at is not None


def test_invalid_delivery_status_is_rejected(client, auth_headers, assigned_parcel):
    for status in ["pending", "service_center_delivered", "lost", ""]:
        response = _set_status(client, auth_headers, assigned_parcel, status)
        assert response.status_code == 400


def test_delivery_status_never_moves_backward(client, auth_headers, assigned_parcel, get_parcel):
    _deliver(client, auth_headers, assigned_parcel)

    response = _set_status(client, auth_headers, assigned_parcel, "in-transit")
    assert response.status_code == 409
    assert get_parcel(assigned_parcel).delivery_status == "delivered"


def test_repeating_current_status_is_a_no_op(client, auth_headers, assigned_parcel):
    response = _set_status(client, auth_headers, assigned_parcel, "rider_assigned")
    assert response.status_code == 200
    assert response.json()["changed"] is False


def test_only_assigned_rider_updates_status(client, auth_headers, approved_rider, make_parcel):
    parcel_id = make_parcel()
    response = _set_status(client, auth_headers, parcel_id, "in-transit")
    assert response.status_code == 403


def test_status_update_requires_rider_role(client, auth_headers, assigned_parcel):
    response = client.patch(
        f"/parcels/{assigned_parcel}/status", json={"status": "in-transit"}, headers=auth_headers(USER_EMAIL)
    )
    assert response.status_code == 403


def test_assign_missing_parcel_or_rider(client, auth_headers, approved_rider, make_parcel):
    response = client.patch(
        "/parcels/999/assign-rider", json={"rider_id": approved_rider}, headers=auth_headers(ADMIN_EMAIL)
    )
    assert response.status_code == 404

    parcel_id = make_parcel()
    response = client.patch(
        f"/parcels/{parcel_id}/assign-rider", json={"rider_id": 999}, headers=auth_headers(ADMIN_EMAIL)
    )
    assert response.status_code == 404


def test_assign_requires_approved_rider(client, auth_headers, seeded_users, make_parcel, get_parcel):
    response = client.post(
        "/riders", json={"name": "Karim", "email": USER_EMAIL}, headers=auth_headers(USER_EMAIL)
    )
    rider_id = response.json()["id"]
    parcel_id = make_parcel()

    response = client.patch(
        f"/parcels/{parcel_id}/assign-rider", json={"rider_id": rider_id}, headers=auth_headers(ADMIN_EMAIL)
    )
    assert response.status_code == 409
    assert get_parcel(parcel_id).delivery_status == "pending"


def test_cannot_assign_after_pickup(client, auth_headers, assigned_parcel, approved_rider):
    assert _set_status(client, auth_headers, assigned_parcel, "in-transit").status_code == 200
    response = client.patch(
        f"/parcels/{assigned_parcel}/assign-rider",
        json={"rider_id": approved_rider},
        headers=auth_headers(ADMIN_EMAIL),
    )
    assert response.status_code == 409


def test_duplicate_earnings_conflict(client, auth_headers, assigned_parcel, get_rider):
    _deliver(client, auth_headers, assigned_parcel)
    first = client.post(
        "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL)
    )
    assert first.status_code == 201

    second = client.post(
        "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL)
    )
    assert second.status_code == 409

    rider = get_rider()
    assert rider.total_earnings == 150
    assert rider.pending_earnings == 150


def test_double_cashout_conflict(client, auth_headers, assigned_parcel, get_rider):
    _deliver(client, auth_headers, assigned_parcel)
    client.post("/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL))

    first = client.patch(f"/parcels/{assigned_parcel}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert first.status_code == 200
    second = client.patch(f"/parcels/{assigned_parcel}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert second.status_code == 409

    rider = get_rider()
    assert rider.pending_earnings == 0
    assert rider.cashed_out_earnings == 150


def test_cashout_missing_parcel(client, auth_headers, approved_rider):
    response = client.patch("/parcels/999/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert response.status_code == 404


def test_cashout_without_recorded_earnings_changes_nothing(client, auth_headers, assigned_parcel, get_rider, get_parcel):
    _deliver(client, auth_headers, assigned_parcel)

    response = client.patch(f"/parcels/{assigned_parcel}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert response.status_code == 404
    assert get_parcel(assigned_parcel).cashout_status == "none"
    assert get_rider().cashed_out_earnings == 0


def test_earnings_for_another_rider_is_forbidden(client, auth_headers, assigned_parcel):
    response = client.post(
        "/rider/earnings/add",
        json={"parcel_id": assigned_parcel, "rider_email": "someone@parcels.com"},
        headers=auth_headers(RIDER_EMAIL),
    )
    assert response.status_code == 403


def test_balances_stay_consistent(client, auth_headers, approved_rider, make_parcel, get_rider):
    parcels = [
        make_parcel(cost="1000", sender_region="Dhaka", receiver_region="Dhaka"),
        make_parcel(cost="1000", sender_region="Dhaka", receiver_region="Rajshahi"),
        make_parcel(cost="250", sender_region="Sylhet", receiver_region="Sylhet"),
    ]
    for parcel_id in parcels:
        client.patch(
            f"/parcels/{parcel_id}/assign-rider", json={"rider_id": approved_rider}, headers=auth_headers(ADMIN_EMAIL)
        )
        _deliver(client, auth_headers, parcel_id)
        client.post("/rider/earnings/add", json={"parcel_id": parcel_id}, headers=auth_headers(RIDER_EMAIL))
        rider = get_rider()
        assert rider.pending_earnings + rider.cashed_out_earnings == rider.total_earnings

    for parcel_id in parcels[:2]:
        client.patch(f"/parcels/{parcel_id}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
        rider = get_rider()
        assert rider.pending_earnings + rider.cashed_out_earnings == rider.total_earnings

    rider = get_rider()
    assert rider.total_earnings == 300 + 400 + 75
    assert rider.cashed_out_earnings == 700
    assert rider.pending_earnings == 75


def test_rider_parcel_listings(client, auth_headers, assigned_parcel, approved_rider, make_parcel):
    other = make_parcel()
    client.patch(f"/parcels/{other}/assign-rider", json={"rider_id": approved_rider}, headers=auth_headers(ADMIN_EMAIL))
    _deliver(client, auth_headers, other)

    active = client.get("/rider/parcels", headers=auth_headers(RIDER_EMAIL)).json()
    completed = client.get("/rider/parcels/completed", headers=auth_headers(RIDER_EMAIL)).json()
    assert [p["id"] for p in active] == [assigned_parcel]
    assert [p["id"] for p in completed] == [other]

    response = client.get("/parcel/rider-status-count", headers=auth_headers(RIDER_EMAIL))
    counts = {row["status"]: row["count"] for row in response.json()}
    assert counts == {"rider_assigned": 1, "delivered": 1}


def test_earnings_summary_buckets(client, auth_headers, approved_rider, db_session):
    now = datetime.now()
    db_session.add_all([
        RiderEarning(rider_id=approved_rider, parcel_id=1, amount=100, status="pending", date=now),
        RiderEarning(rider_id=approved_rider, parcel_id=2, amount=40, status="cashed_out",
                     date=now - timedelta(days=800)),
    ])
    db_session.commit()

    response = client.get("/rider/earnings", headers=auth_headers(RIDER_EMAIL))
    assert response.status_code == 200
    summary = response.json()
    assert summary["today"] == 100
    assert summary["week"] == 100
    assert summary["month"] == 100
    assert summary["year"] == 100
    assert [entry["parcel_id"] for entry in summary["history"]] == [1, 2]


def test_earnings_summary_for_unknown_rider(client, auth_headers, seeded_users, db_session):
    user = db_session.query(User).filter(User.email == USER_EMAIL).one()
    user.role = "rider"
    db_session.commit()

    response = client.get("/rider/earnings", headers=auth_headers(USER_EMAIL))
    assert response.status_code == 404


def _approve_second_rider(client, auth_headers, email=USER_EMAIL):
    rider_id = client.post(
        "/riders", json={"name": "Karim", "email": email}, headers=auth_headers(email)
    ).json()["id"]
    client.patch(
        f"/riders/{rider_id}/status", json={"status": "approved", "email": email}, headers=auth_headers(ADMIN_EMAIL)
    )
    return rider_id


def test_earnings_only_for_assigned_rider(client, auth_headers, assigned_parcel, get_rider):
    _deliver(client, auth_headers, assigned_parcel)
    _approve_second_rider(client, auth_headers)

    response = client.post(
        "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(USER_EMAIL)
    )
    assert response.status_code == 403
    assert get_rider(USER_EMAIL).pending_earnings == 0

    response = client.post(
        "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL)
    )
    assert response.status_code == 201
    response = client.patch(f"/parcels/{assigned_parcel}/cashout", json={}, headers=auth_headers(RIDER_EMAIL))
    assert response.status_code == 200


def test_earnings_on_unassigned_parcel_forbidden(client, auth_headers, approved_rider, make_parcel, get_rider):
    parcel_id = make_parcel()
    response = client.post(
        "/rider/earnings/add", json={"parcel_id": parcel_id}, headers=auth_headers(RIDER_EMAIL)
    )
    assert response.status_code == 403
    assert get_rider().total_earnings == 0


def test_earnings_require_delivered_parcel(client, auth_headers, assigned_parcel, get_rider):
    for status in [None, "in-transit"]:
        if status:
            assert _set_status(client, auth_headers, assigned_parcel, status).status_code == 200
        response = client.post(
            "/rider/earnings/add", json={"parcel_id": assigned_parcel}, headers=auth_headers(RIDER_EMAIL)
        )
        assert response.status_code == 409

    rider = get_rider()
    assert rider.total_earnings == 0
    assert rider.pending_earnings == 0


def test_delivered_states_are_final(client, auth_headers, approved_rider, make_parcel, get_parcel):
    parcel_id = make_parcel(
        delivery_status="service_center_delivered",
        assigned_rider_id=approved_rider,
        assigned_rider_email=RIDER_EMAIL,
    )

    response = _set_status(client, auth_headers, parcel_id, "delivered")
    assert response.status_code == 409
    parcel = get_parcel(parcel_id)
    assert parcel.delivery_status == "service_center_delivered"
    assert parcel.delivered_at is None


def test_repeating_delivered_is_still_a_no_op(client, auth_headers, assigned_parcel):
    _deliver(client, auth_headers, assigned_parcel)
    response = _set_status(client, auth_headers, assigned_parcel, "delivered")
    assert response.status_code == 200
    assert response.json()["changed"] is False


def test_deleting_in_progress_parcel_frees_rider(client, auth_headers, assigned_parcel, get_rider):
    assert get_rider().work_status == "in-delivery"

    response = client.delete(f"/parcels/{assigned_parcel}", headers=auth_headers(ADMIN_EMAIL))
    assert response.status_code == 200
    assert get_rider().work_status == "idle"


def test_deleting_one_of_several_parcels_keeps_rider_busy(
    client, auth_headers, assigned_parcel, approved_rider, make_parcel, get_rider
):
    other = make_parcel()
    client.patch(f"/parcels/{other}/assign-rider", json={"rider_id": approved_rider}, headers=auth_headers(ADMIN_EMAIL))

    client.delete(f"/parcels/{assigned_parcel}", headers=auth_headers(ADMIN_EMAIL))
    assert get_rider().work_status == "in-delivery"
