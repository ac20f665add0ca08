# tests/test_auth.py
from models import Landlord, User, UserRole
from tests.conftest import make_user, auth_headers


def test_register_creates_landlord_profile(client, db):
    res = client.post("/api/auth/register", json={
        "firstName": "Ana",
        "lastName": "Owner",
        "email": "Ana@RentWell.io",
        "password": "s3cure-pass",
        "companyName": "Owner Holdings",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "ana@rentwell.io"
    assert body["user"]["role"] == "landlord"

    user = db.query(User).filter(User.email == "ana@rentwell.io").one()
    landlord = db.query(Landlord).filter(Landlord.user_id == user.id).one()
    assert landlord.company_name == "Owner Holdings"
    assert landlord.subscription_tier.value == "free"


def test_register_duplicate_email_conflicts(client, landlord_user):
    res = client.post("/api/auth/register", json={
        "firstName": "Lana",
        "lastName": "Again",
        "email": landlord_user.email,
        "password": "another-pass",
    })
    assert res.status_code == 409
    assert res.json() == {"success": False, "message": "An account with this email already exists"}


def test_login(client, landlord_user):
    res = client.post("/api/auth/login", json={"email": landlord_user.email, "password": "correct-horse"})
    assert res.status_code == 200
    assert res.json()["user"]["id"] == landlord_user.id

    res = client.post("/api/auth/login", json={"email": landlord_user.email, "password": "wrong-horse"})
    assert res.status_code == 401
    assert res.json()["message"] == "Invalid email or password"


def test_missing_and_invalid_token(client):
    res = client.get("/api/landlord/properties")
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Missing token"}

    res = client.get("/api/landlord/properties", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 403
    assert res.json()["message"] == "Invalid token"


def test_team_member_cannot_use_landlord_routes(client, db):
    worker = make_user(db, "wes@example.com", role=UserRole.TEAM_MEMBER, first_name="Wes")
    res = client.get("/api/landlord/properties", headers=auth_headers(worker))
    assert res.status_code == 403
    assert res.json()["message"] == "Landlord access required"


def test_landlord_profile_created_on_first_use(client, db):
    user = User(email="late@example.com", password="x", first_name="Late", last_name="Comer", role=UserRole.LANDLORD)
    db.add(user)
    db.commit()

    res = client.get("/api/landlord/properties", headers=auth_headers(user))
    assert res.status_code == 200
    assert db.query(Landlord).filter(Landlord.user_id == user.id).count() == 1
