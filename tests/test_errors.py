# tests/test_errors.py
def test_unknown_route(client):
    res = client.get("/api/nothing-here")
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Route not found"}


def test_not_found_error_envelope(client, headers):
    res = client.get("/api/landlord/leases/999", headers=headers)
    assert res.status_code == 404
    assert res.json() == {"success": False, "message": "Lease with ID 999 not found"}


def test_validation_error_envelope(client, headers, lease):
    res = client.post("/api/landlord/rent-payments", headers=headers, json={
        "leaseId": lease.id,
        "amount": -5,
        "dueDate": "2026-04-01",
    })
    assert res.status_code == 422
    body = res.json()
    assert body["success"] is False
    assert body["message"].startswith("amount")


def test_value_error_maps_to_400(client, headers, lease):
    res = client.post(f"/api/landlord/leases/{lease.id}/terminate", headers=headers)
    assert res.status_code == 200
    res = client.post(f"/api/landlord/leases/{lease.id}/terminate", headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Only active leases can be terminated"


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["success"] is True
