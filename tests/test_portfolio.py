# tests/test_portfolio.py
from models import Lease, LeaseStatus
from tests.conftest import make_user, auth_headers


def test_create_and_list_properties(client, headers):
    res = client.post(
        "/api/landlord/properties",
        json={"name": "Birch House", "city": "Austin", "zipCode": "78701"},
        headers=headers,
    )
    assert res.status_code == 201
    created = res.json()
    assert created["name"] == "Birch House"
    assert created["propertyType"] == "apartment"
    assert created["zipCode"] == "78701"
    assert created["units"] == []

    res = client.post(
        f"/api/landlord/properties/{created['id']}/units",
        json={"unitNumber": "2", "bedrooms": 2, "rentAmount": 1350},
        headers=headers,
    )
    assert res.status_code == 201
    assert res.json()["status"] == "vacant"
    assert res.json()["rentAmount"] == 1350.0

    res = client.get("/api/landlord/properties", headers=headers)
    assert [p["name"] for p in res.json()] == ["Birch House"]


def test_duplicate_unit_number_conflicts(client, headers, prop):
    res = client.post(f"/api/landlord/properties/{prop.id}/units", json={"unitNumber": "1A"}, headers=headers)
    assert res.status_code == 409
    assert res.json()["message"] == "Unit 1A already exists in this property"


def test_update_property_and_list_units(client, headers, prop):
    res = client.patch(f"/api/landlord/properties/{prop.id}", json={"city": "Shelbyville"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["city"] == "Shelbyville"
    assert res.json()["name"] == "Maple Court"

    res = client.get(f"/api/landlord/properties/{prop.id}/units", headers=headers)
    assert [u["unitNumber"] for u in res.json()] == ["1A", "1B"]


def test_property_of_another_landlord_is_not_found(client, db, prop):
    other = make_user(db, "otto@example.com", first_name="Otto")
    res = client.get(f"/api/landlord/properties/{prop.id}", headers=auth_headers(other))
    assert res.status_code == 404
    assert res.json()["message"] == f"Property with ID {prop.id} not found"


def test_tenants(client, headers, tenant):
    res = client.post(
        "/api/landlord/tenants",
        json={"firstName": "Ann", "lastName": "Abbot", "email": "ann@example.com"},
        headers=headers,
    )
    assert res.status_code == 201
    assert res.json()["fullName"] == "Ann Abbot"

    res = client.get("/api/landlord/tenants", headers=headers)
    assert [t["lastName"] for t in res.json()] == ["Abbot", "Renter"]


def test_lease_lifecycle(client, headers, db, units, tenant):
    body = {
        "unitId": units[1].id,
        "tenantId": tenant.id,
        "rentAmount": 1200,
        "startDate": "2026-04-01",
        "endDate": "2027-03-31",
    }
    res = client.post("/api/landlord/leases", json=body, headers=headers)
    assert res.status_code == 201
    lease = res.json()
    assert lease["status"] == "active"
    assert lease["tenantName"] == "Tom Renter"
    assert lease["propertyName"] == "Maple Court"
    assert lease["unitNumber"] == "1B"
    assert units[1].status == "occupied"

    res = client.post("/api/landlord/leases", json=body, headers=headers)
    assert res.status_code == 409
    assert res.json()["message"] == "Unit 1B already has an active lease"

    res = client.get(f"/api/landlord/leases/{lease['id']}", headers=headers)
    assert res.json()["rentAmount"] == 1200.0

    res = client.post(f"/api/landlord/leases/{lease['id']}/terminate", headers=headers)
    assert res.status_code == 200
    assert res.json()["status"] == "terminated"
    assert units[1].status == "vacant"
    assert db.get(Lease, lease["id"]).status == LeaseStatus.TERMINATED

    res = client.post(f"/api/landlord/leases/{lease['id']}/terminate", headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Only active leases can be terminated"


def test_lease_dates_must_be_ordered(client, headers, units, tenant):
    res = client.post(
        "/api/landlord/leases",
        json={
            "unitId": units[1].id,
            "tenantId": tenant.id,
            "rentAmount": 1200,
            "startDate": "2026-04-01",
            "endDate": "2026-04-01",
        },
        headers=headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Lease end date must be after the start date"


def test_list_leases_filters(client, headers, lease, prop):
    res = client.get("/api/landlord/leases", params={"status": "active", "propertyId": prop.id}, headers=headers)
    assert [row["id"] for row in res.json()] == [lease.id]

    res = client.get("/api/landlord/leases", params={"status": "terminated"}, headers=headers)
    assert res.json() == []


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"success": True, "status": "ok", "database": True}


def test_init_db_creates_tables():
    import database
    from sqlalchemy import inspect

    database.init_db()
    tables = inspect(database.engine).get_table_names()
    assert {"properties", "leases", "rent_payments", "saved_payout_methods"} <= set(tables)
