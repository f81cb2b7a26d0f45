import pytest
from fastapi.testclient import TestClient

from app import deps
from app.api_service import app
from collection.collectors import CollectorAdmin
from config.settings import settings
from identity.auth_client import AuthServiceError
from models.entities import Collector
from tests.conftest import make_household
from utils.clock import local_today


class FakeIdentity:
    def __init__(self, accounts=None, fail_sign_up=None):
        self.accounts = accounts or {}
        self.fail_sign_up = fail_sign_up

    def sign_in(self, email, password):
        if email not in self.accounts or self.accounts[email][1] != password:
            raise AuthServiceError("INVALID_LOGIN_CREDENTIALS", status_code=400)
        return {"user_id": self.accounts[email][0], "email": email}

    def sign_up(self, email, password, display_name=""):
        if self.fail_sign_up:
            raise AuthServiceError(self.fail_sign_up, status_code=400)
        return f"uid-{email.split('@')[0]}"


@pytest.fixture
def identity():
    return FakeIdentity(
        accounts={
            "boss@greenlink.test": ("uid-boss", "pw"),
            "ravi@greenlink.test": ("c-ravi", "pw"),
            "stranger@greenlink.test": ("uid-stranger", "pw"),
        }
    )


@pytest.fixture
def client(db, households, collectors, routes, logs, sessions, identity, monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_EMAILS", "boss@greenlink.test")
    app.dependency_overrides[deps.get_household_repo] = lambda: households
    app.dependency_overrides[deps.get_collector_repo] = lambda: collectors
    app.dependency_overrides[deps.get_route_repo] = lambda: routes
    app.dependency_overrides[deps.get_log_repo] = lambda: logs
    app.dependency_overrides[deps.get_session_repo] = lambda: sessions
    app.dependency_overrides[deps.get_identity_client] = lambda: identity
    app.dependency_overrides[deps.get_collector_admin] = lambda: CollectorAdmin(
        collectors=collectors, households=households, identity=identity
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth(sessions, role, subject_id, user_id=None):
    token = f"tok-{role}-{subject_id}"
    sessions.create_session(
        token=token, user_id=user_id or subject_id, role=role, subject_id=subject_id, email="", ttl_sec=3600
    )
    return {"Authorization": f"Bearer {token}"}


def test_requires_bearer_token(client):
    r = client.get("/api/households")
    assert r.status_code == 401
    assert r.json()["detail"] == "missing_auth"


def test_admin_login(client):
    r = client.post("/auth/login", json={"email": "Boss@greenlink.test", "password": "pw"})
    assert r.status_code == 200
    assert r.json()["role"] == "admin"
    me = client.get("/auth/me", headers={"Authorization": f"Bearer {r.json()['token']}"})
    assert me.json()["role"] == "admin"


def test_collector_login(client, ravi):
    r = client.post("/auth/login", json={"email": "ravi@greenlink.test", "password": "pw"})
    assert r.status_code == 200
    assert r.json()["role"] == "collector"
    assert r.json()["subject_id"] == "c-ravi"


def test_login_rejections(client):
    assert client.post("/auth/login", json={"email": "boss@greenlink.test", "password": "nope"}).status_code == 401
    r = client.post("/auth/login", json={"email": "stranger@greenlink.test", "password": "pw"})
    assert r.status_code == 403
    assert r.json()["detail"] == "no_role_for_user"


def test_logout_revokes_session(client, sessions):
    headers = _auth(sessions, "admin", "uid-boss")
    assert client.post("/auth/logout", headers=headers).status_code == 200
    r = client.get("/auth/me", headers=headers)
    assert r.status_code == 401
    assert r.json()["detail"] == "revoked_session"


def test_resident_login_and_own_record(client, households):
    mine = make_household(households, phone="9847054300")
    other = make_household(households, phone="9847054301")

    r = client.post("/auth/resident", json={"phone": "98470 54300"})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['token']}"}

    assert client.get("/api/households/mine", headers=headers).json()["household"]["id"] == mine.id
    assert client.get(f"/api/households/{other.id}", headers=headers).status_code == 403
    assert client.get("/api/households", headers=headers).status_code == 403


def test_resident_login_unknown_phone(client):
    assert client.post("/auth/resident", json={"phone": "0000000000"}).status_code == 404


def test_admin_household_crud(client, sessions):
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.post(
        "/api/households",
        json={"resident_name": "Meera", "address": "Lotus, Ward 2", "ward": 2, "phone": "9847054399"},
        headers=headers,
    )
    assert r.status_code == 201
    hid = r.json()["household"]["id"]

    r = client.patch(f"/api/households/{hid}", json={"monthly_fee": 150}, headers=headers)
    assert r.json()["household"]["monthly_fee"] == 150.0
    assert client.patch(f"/api/households/{hid}", json={}, headers=headers).status_code == 400

    assert client.delete(f"/api/households/{hid}", headers=headers).status_code == 200
    r = client.get(f"/api/households/{hid}", headers=headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "household_not_found"


def test_collector_cannot_create_household(client, sessions, ravi):
    headers = _auth(sessions, "collector", ravi.id)
    r = client.post(
        "/api/households",
        json={"resident_name": "X", "address": "Y", "ward": 1, "phone": "9847054399"},
        headers=headers,
    )
    assert r.status_code == 403


def test_collector_records_collection(client, sessions, households, collectors, ravi):
    h = make_household(households, assigned_collector=ravi.id)
    headers = _auth(sessions, "collector", ravi.id)

    r = client.post(
        f"/api/households/{h.id}/collection",
        json={"status": "collected", "amount": 100, "payment_mode": "offline"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["log"]["collector_id"] == ravi.id
    assert collectors.get(ravi.id).total_collections == 1

    assigned = client.get("/api/households/assigned", headers=headers).json()["items"]
    assert assigned[0]["collection_status"] == "collected"
    assert assigned[0]["payment_status"] == "paid"


def test_admin_collection_needs_collector(client, sessions, households):
    h = make_household(households)
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.post(f"/api/households/{h.id}/collection", json={"status": "collected"}, headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "missing_collector_id"


def test_resident_pays_online(client, sessions, households, logs):
    h = make_household(households)
    headers = _auth(sessions, "household", h.id)

    assert client.post(f"/api/households/{h.id}/pay-online", json={"amount": 0}, headers=headers).status_code == 422
    r = client.post(f"/api/households/{h.id}/pay-online", json={"amount": 100}, headers=headers)
    assert r.status_code == 200
    assert r.json()["log"]["collector_id"] == "SYSTEM"

    mine = client.get("/api/logs/mine", headers=headers).json()["items"]
    assert [e["status"] for e in mine] == ["paid"]


def test_route_assignment_conflict(client, sessions, households, ravi):
    make_household(households, ward=1)
    headers = _auth(sessions, "admin", "uid-boss")

    r = client.post("/api/routes", json={"collector_id": ravi.id, "ward": 1}, headers=headers)
    assert r.status_code == 201
    assert r.json()["route"]["date"] == local_today().isoformat()
    assert r.json()["route"]["total_houses"] == 1

    r = client.post("/api/routes", json={"collector_id": ravi.id, "ward": 1}, headers=headers)
    assert r.status_code == 409
    assert r.json()["detail"] == "route_already_assigned"

    collector_headers = _auth(sessions, "collector", ravi.id)
    assert client.get("/api/routes/today", headers=collector_headers).json()["route"]["ward"] == 1


def test_collector_cannot_complete_someone_elses_route(client, sessions, ravi, anita):
    admin = _auth(sessions, "admin", "uid-boss")
    route_id = client.post("/api/routes", json={"collector_id": anita.id, "ward": 3}, headers=admin).json()["route"]["id"]
    r = client.post(f"/api/routes/{route_id}/complete", headers=_auth(sessions, "collector", ravi.id))
    assert r.status_code == 403


def test_create_collector(client, sessions, collectors):
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.post(
        "/api/collectors",
        json={"name": "Suresh Babu", "phone": "9847044444", "email": "suresh@greenlink.test", "password": "secret1", "wards": [4, 2]},
        headers=headers,
    )
    assert r.status_code == 201
    body = r.json()["collector"]
    assert body["id"] == "uid-suresh"
    assert body["wards"] == [2, 4]
    assert body["avatar"] == "SU"
    assert collectors.get("uid-suresh") is not None


def test_create_collector_email_taken(client, sessions, identity):
    identity.fail_sign_up = "EMAIL_EXISTS"
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.post(
        "/api/collectors",
        json={"name": "Dup", "phone": "9847044444", "email": "ravi@greenlink.test", "password": "secret1", "wards": [1]},
        headers=headers,
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "email_exists"


def test_delete_collector_unassigns(client, sessions, households, ravi):
    h = make_household(households, assigned_collector=ravi.id)
    r = client.delete(f"/api/collectors/{ravi.id}", headers=_auth(sessions, "admin", "uid-boss"))
    assert r.json()["households_unassigned"] == 1
    assert households.get(h.id).assigned_collector == "unassigned"


def test_daily_report(client, sessions, households, ravi):
    h = make_household(households)
    make_household(households, phone="9847054301")
    collector = _auth(sessions, "collector", ravi.id)
    client.post(f"/api/households/{h.id}/collection", json={"status": "collected", "amount": 100}, headers=collector)

    admin = _auth(sessions, "admin", "uid-boss")
    summary = client.get("/api/reports/daily", headers=admin).json()["summary"]
    assert summary["covered"] == 1
    assert summary["pending"] == 1
    assert summary["revenue"] == 100.0
    assert len(client.get("/api/reports/weekly", headers=admin).json()["days"]) == 7
    assert client.get("/api/reports/daily", headers=collector).status_code == 403


def test_inactive_collector_cannot_log_in(client, collectors):
    collectors.create(Collector(id="c-old", name="Old Hand", phone="9847099999", status="inactive"))
    client.app.dependency_overrides[deps.get_identity_client] = lambda: FakeIdentity(
        accounts={"old@greenlink.test": ("c-old", "pw")}
    )
    r = client.post("/auth/login", json={"email": "old@greenlink.test", "password": "pw"})
    assert r.status_code == 403
    assert r.json()["detail"] == "collector_inactive"


def test_create_collector_phone_taken(client, sessions, ravi):
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.post(
        "/api/collectors",
        json={"name": "Other", "phone": ravi.phone, "email": "other@greenlink.test", "password": "secret1", "wards": [1]},
        headers=headers,
    )
    assert r.status_code == 409
    assert r.json()["detail"] == "collector_phone_exists"


def test_update_household_with_null_name_is_rejected(client, sessions, households):
    h = make_household(households)
    headers = _auth(sessions, "admin", "uid-boss")
    r = client.patch(f"/api/households/{h.id}", json={"resident_name": None}, headers=headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "invalid_household_update"
    assert households.get(h.id).resident_name == "Lakshmi Nair"
