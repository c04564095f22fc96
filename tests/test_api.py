"""API tests against the in-memory store. /health needs no store at all."""

import pytest
from fastapi.testclient import TestClient

from api.main import app, create_app
from contactbook.infrastructure import InMemoryContactStore


@pytest.fixture
def store():
    return InMemoryContactStore()


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store)) as c:
        yield c


def _create(client, **overrides):
    body = {"name": "Alice Smith", "email": "a@x.com", "company": "Acme", "category": "work"}
    body.update(overrides)
    r = client.post("/contacts", json=body)
    assert r.status_code == 201, r.text
    return r.json()


def test_health():
    r = TestClient(app).get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_create_and_list(client):
    created = _create(client)
    assert created["id"]
    assert created["initials"] == "AS"
    assert created["is_favorite"] is False

    r = client.get("/contacts")
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == [created["id"]]


def test_create_with_empty_name_is_400_and_no_insert(client, store):
    r = client.post("/contacts", json={"name": " ", "email": "a@x.com"})
    assert r.status_code == 400
    assert "insert" not in store.calls


def test_create_with_unknown_category_is_400(client):
    r = client.post("/contacts", json={"name": "A", "email": "a@x", "category": "boss"})
    assert r.status_code == 400


def test_list_filters(client):
    _create(client)
    _create(client, name="Bob", email="bob@home.net", company=None,
            category="family", is_favorite=True)

    names = lambda r: [c["name"] for c in r.json()]  # noqa: E731
    assert names(client.get("/contacts", params={"q": "ACME"})) == ["Alice Smith"]
    assert names(client.get("/contacts", params={"category": "family"})) == ["Bob"]
    assert names(client.get("/contacts", params={"favorites": "true"})) == ["Bob"]
    assert client.get("/contacts", params={"category": "friends"}).status_code == 400


def test_update_and_unknown_id(client):
    created = _create(client)
    r = client.put(f"/contacts/{created['id']}",
                   json={"name": "Alice Jones", "email": "a@x.com"})
    assert r.status_code == 200
    assert r.json()["name"] == "Alice Jones"
    assert r.json()["created_at"] == created["created_at"]

    r = client.put("/contacts/missing", json={"name": "X", "email": "x@x"})
    assert r.status_code == 404


def test_update_without_is_favorite_keeps_flag(client):
    created = _create(client, is_favorite=True)
    r = client.put(f"/contacts/{created['id']}",
                   json={"name": "Alice Jones", "email": "a@x.com"})
    assert r.status_code == 200
    assert r.json()["is_favorite"] is True

    r = client.put(f"/contacts/{created['id']}",
                   json={"name": "Alice Jones", "email": "a@x.com", "is_favorite": False})
    assert r.json()["is_favorite"] is False


def test_toggle_and_set_favorite(client):
    created = _create(client)
    r = client.post(f"/contacts/{created['id']}/favorite")
    assert r.status_code == 200
    assert r.json()["is_favorite"] is True

    r = client.put(f"/contacts/{created['id']}/favorite", json={"favorite": True})
    assert r.json()["is_favorite"] is True

    assert client.post("/contacts/missing/favorite").status_code == 404


def test_delete(client):
    created = _create(client)
    assert client.delete(f"/contacts/{created['id']}").status_code == 204
    assert client.get("/contacts").json() == []
    assert client.delete(f"/contacts/{created['id']}").status_code == 404


def test_store_failure_maps_to_5xx(client, store):
    store.fail_next("insert")
    r = client.post("/contacts", json={"name": "A", "email": "a@x"})
    assert r.status_code == 502


def test_export_csv(client):
    _create(client)
    r = client.get("/contacts/export.csv")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")
    assert "contacts.csv" in r.headers["content-disposition"]
    assert r.text.splitlines()[1] == '"Alice Smith","a@x.com","","Acme","work"'


def test_export_xlsx(client):
    _create(client)
    r = client.get("/contacts/export.xlsx")
    assert r.status_code == 200
    assert r.content[:2] == b"PK"  # xlsx is a zip container
