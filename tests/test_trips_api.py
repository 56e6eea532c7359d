from datetime import timedelta

from conftest import make_trip, trip_payload
from fueltrack.models.trip import Trip, TripStatus, FuelType
from fueltrack.utils.clock import utcnow

URL = "/api/v1/trips"


def test_requires_authentication(client):
    assert client.get(URL).status_code == 401
    assert client.post(URL, json=trip_payload()).status_code == 401


def test_rejects_malformed_token(client):
    res = client.get(URL, headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


def test_create_trip_defaults_to_in_transit(client, user_headers, notifier):
    res = client.post(URL, json=trip_payload(), headers=user_headers)

    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "in_transit"
    assert body["quantityLiters"] == 100
    assert body["id"]
    assert [e[0] for e in notifier.events] == ["TRIP_CREATED"]
    assert notifier.events[0][1]["id"] == body["id"]


def test_quantity_over_limit_is_a_validation_error(client, user_headers, db):
    res = client.post(URL, json=trip_payload(quantityLiters=30001), headers=user_headers)

    assert res.status_code == 400
    body = res.json()
    assert body["message"]
    assert [e["field"] for e in body["errors"]] == ["quantityLiters"]
    assert db.query(Trip).count() == 0


def test_departure_in_past_is_a_validation_error(client, user_headers, db, notifier):
    past = (utcnow() - timedelta(hours=1)).isoformat()
    res = client.post(URL, json=trip_payload(departureAt=past), headers=user_headers)

    assert res.status_code == 400
    assert [e["field"] for e in res.json()["errors"]] == ["departureAt"]
    assert db.query(Trip).count() == 0
    assert notifier.events == []


def test_create_with_terminal_status_is_rejected(client, user_headers, db, notifier):
    res = client.post(URL, json=trip_payload(status="cancelled"), headers=user_headers)

    assert res.status_code == 400
    assert [e["field"] for e in res.json()["errors"]] == ["status"]
    assert db.query(Trip).count() == 0
    assert notifier.events == []


def test_all_invalid_fields_reported_together(client, user_headers):
    payload = trip_payload(quantityLiters=0, fuelType="jet-a")
    del payload["origin"]
    res = client.post(URL, json=payload, headers=user_headers)

    assert res.status_code == 400
    assert {e["field"] for e in res.json()["errors"]} == {"quantityLiters", "fuelType", "origin"}


def test_list_returns_trips_and_stats(client, user_headers, db):
    make_trip(db, truckPlate="TRK-001")
    make_trip(db, truckPlate="TRK-001")
    make_trip(db, truckPlate="TRK-009", status=TripStatus.COMPLETED, quantityLiters=4000)

    res = client.get(URL, headers=user_headers)

    assert res.status_code == 200
    body = res.json()
    assert len(body["trips"]) == 3
    assert body["stats"] == {
        "activeTrips": 2,
        "completedToday": 1,
        "litersTransported": 4000,
        "trucksInRoute": 1,
    }


def test_list_filters_from_query_string(client, user_headers, db):
    make_trip(db, driverName="Pedro ABC", fuelType=FuelType.DIESEL)
    make_trip(db, driverName="Pedro ABC", fuelType=FuelType.GASOLINE)
    make_trip(db, driverName="Luis", fuelType=FuelType.DIESEL)

    res = client.get(URL, params={"search": "abc", "fuelType": "diesel"}, headers=user_headers)

    trips = res.json()["trips"]
    assert len(trips) == 1
    assert trips[0]["driverName"] == "Pedro ABC"


def test_list_ignores_cleared_filters(client, user_headers, db):
    make_trip(db)
    res = client.get(f"{URL}?search=&status=&fuelType=&sortBy=&sortOrder=", headers=user_headers)
    assert res.status_code == 200
    assert len(res.json()["trips"]) == 1


def test_list_rejects_unknown_sort_field(client, user_headers):
    res = client.get(URL, params={"sortBy": "password"}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "sortBy"


def test_list_sorts_ascending(client, user_headers, db):
    for liters in (900, 100, 500):
        make_trip(db, quantityLiters=liters)
    res = client.get(URL, params={"sortBy": "quantityLiters", "sortOrder": "asc"}, headers=user_headers)
    assert [t["quantityLiters"] for t in res.json()["trips"]] == [100, 500, 900]


def test_get_single_trip(client, user_headers, db):
    trip = make_trip(db)
    res = client.get(f"{URL}/{trip.id}", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["id"] == trip.id
    assert client.get(f"{URL}/nope", headers=user_headers).status_code == 404


def test_update_trip(client, user_headers, db, notifier):
    trip = make_trip(db)
    res = client.put(f"{URL}/{trip.id}", json={"status": "completed"}, headers=user_headers)

    assert res.status_code == 200
    assert res.json()["status"] == "completed"
    assert [e[0] for e in notifier.events] == ["TRIP_UPDATED"]


def test_update_unknown_trip_is_404_not_400(client, user_headers, notifier):
    res = client.put(f"{URL}/missing", json={"origin": "Tunja"}, headers=user_headers)

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"
    assert notifier.events == []


def test_update_validates_supplied_fields(client, user_headers, db):
    trip = make_trip(db)
    res = client.put(f"{URL}/{trip.id}", json={"quantityLiters": 40000}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "quantityLiters"


def test_update_cannot_reopen_cancelled_trip(client, user_headers, db):
    trip = make_trip(db, status=TripStatus.CANCELLED)
    res = client.put(f"{URL}/{trip.id}", json={"status": "in_transit"}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"


def test_cancel_keeps_trip_listed(client, user_headers, db, notifier):
    trip = make_trip(db, quantityLiters=700)

    res = client.delete(f"{URL}/{trip.id}", headers=user_headers)
    assert res.status_code == 204
    assert res.content == b""
    assert notifier.events == [("TRIP_DELETED", {"id": trip.id})]

    body = client.get(URL, headers=user_headers).json()
    assert [t["status"] for t in body["trips"]] == ["cancelled"]
    assert body["stats"]["activeTrips"] == 0
    assert body["stats"]["litersTransported"] == 0


def test_cancel_unknown_trip_is_404(client, user_headers):
    assert client.delete(f"{URL}/missing", headers=user_headers).status_code == 404


def test_store_failure_is_a_generic_500(app, user_headers, monkeypatch):
    from fastapi.testclient import TestClient
    from fueltrack.api.v1 import trips as trips_api

    def unreachable(db, filters):
        raise ConnectionError("db host unreachable")

    monkeypatch.setattr(trips_api, "query_trips", unreachable)
    with TestClient(app, raise_server_exceptions=False) as c:
        res = c.get(URL, headers=user_headers)

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_SERVER_ERROR"
    assert "unreachable" not in res.text
