import pytest

from conftest import make_trip
from fueltrack.models.audit_log import AuditLog

URL = "/api/v1/drivers"


def driver_payload(**overrides) -> dict:
    payload = {
        "name": "Carlos Mendoza",
        "nationalId": "1045678901",
        "phone": "3001234567",
        "email": "carlos@fleet.co",
        "licenseNumber": "LIC-20001",
        "licenseExpiry": "2027-06-30",
        "yearsExperience": 8,
    }
    payload.update(overrides)
    return payload


def _create(client, headers, **overrides):
    return client.post(URL, json=driver_payload(**overrides), headers=headers)


def test_admin_registers_driver(client, admin_headers):
    res = _create(client, admin_headers)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["status"] == "active"
    assert data["licenseExpiry"] == "2027-06-30"
    assert data["email"] == "carlos@fleet.co"


def test_blank_email_is_stored_as_none(client, admin_headers):
    assert _create(client, admin_headers, email="  ").json()["data"]["email"] is None


def test_plain_user_cannot_register_driver(client, user_headers):
    res = _create(client, user_headers)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.parametrize("field, value", [
    ("name", "A"),
    ("nationalId", "123"),
    ("phone", "300"),
    ("licenseNumber", "L1"),
    ("yearsExperience", 51),
    ("email", "not-an-email"),
])
def test_invalid_driver_fields(client, admin_headers, field, value):
    res = _create(client, admin_headers, **{field: value})
    assert res.status_code == 400
    assert [e["field"] for e in res.json()["errors"]] == [field]


def test_duplicate_license_is_conflict(client, admin_headers):
    _create(client, admin_headers)
    res = _create(client, admin_headers, name="Otro Conductor")
    assert res.status_code == 409
    assert res.json()["error"]["field"] == "licenseNumber"


def test_list_search_and_status(client, admin_headers, user_headers):
    _create(client, admin_headers)
    _create(client, admin_headers, name="Ana Pérez", licenseNumber="LIC-30003", status="suspended")

    res = client.get(URL, params={"search": "ana"}, headers=user_headers)
    body = res.json()
    assert [d["name"] for d in body["data"]] == ["Ana Pérez"]
    assert body["meta"]["total"] == 1

    res = client.get(URL, params={"status": "active"}, headers=user_headers)
    assert [d["licenseNumber"] for d in res.json()["data"]] == ["LIC-20001"]


def test_list_is_paginated(client, admin_headers, user_headers):
    for i in range(3):
        _create(client, admin_headers, name=f"Driver {i}", licenseNumber=f"LIC-4000{i}")

    body = client.get(URL, params={"page": 2, "limit": 2}, headers=user_headers).json()
    assert [d["name"] for d in body["data"]] == ["Driver 2"]
    assert body["meta"] == {"page": 2, "limit": 2, "total": 3, "totalPages": 2,
                            "hasNext": False, "hasPrev": True}


def test_get_unknown_driver(client, user_headers):
    res = client.get(f"{URL}/999", headers=user_headers)
    assert res.status_code == 404
    assert res.json()["message"] == "Driver not found"


def test_rename_driver_leaves_trips_untouched(client, db, admin_headers, user_headers):
    driver_id = _create(client, admin_headers).json()["data"]["id"]
    trip = make_trip(db, driverName="Carlos Mendoza")

    res = client.put(f"{URL}/{driver_id}", json={"name": "Carlos A. Mendoza"}, headers=admin_headers)
    assert res.json()["data"]["name"] == "Carlos A. Mendoza"

    fetched = client.get(f"/api/v1/trips/{trip.id}", headers=user_headers).json()
    assert fetched["driverName"] == "Carlos Mendoza"


def test_update_to_taken_license_is_conflict(client, admin_headers):
    _create(client, admin_headers)
    other = _create(client, admin_headers, licenseNumber="LIC-50005").json()["data"]
    res = client.put(f"{URL}/{other['id']}", json={"licenseNumber": "LIC-20001"}, headers=admin_headers)
    assert res.status_code == 409


def test_delete_driver_is_audited(client, db, admin, admin_headers):
    driver_id = _create(client, admin_headers).json()["data"]["id"]

    assert client.delete(f"{URL}/{driver_id}", headers=admin_headers).status_code == 200
    assert client.get(f"{URL}/{driver_id}", headers=admin_headers).status_code == 404

    actions = [(a.action, a.entityType) for a in db.query(AuditLog).order_by(AuditLog.id).all()]
    assert actions == [("CREATE", "Driver"), ("DELETE", "Driver")]
