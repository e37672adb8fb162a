from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from contact_site.db.store import InMemoryMessageStore, JsonFileMessageStore
from contact_site.main import create_app

from conftest import make_settings

VALID = {"name": "A", "email": "a@b.com", "project": "P"}


class BrokenStore(InMemoryMessageStore):
    def append(self, message):
        raise OSError("disk full")

    def list(self):
        raise OSError("permission denied")


def test_valid_submission_is_stored(client, store):
    response = client.post("/api/contact", json=VALID)

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Thanks for reaching out!"}
    assert response.headers["cache-control"] == "no-store"

    records = store.list()
    assert len(records) == 1
    assert {k: records[0][k] for k in ("name", "email", "project")} == VALID
    assert records[0]["receivedAt"].endswith("Z")


def test_fields_are_trimmed(client, store):
    client.post("/api/contact", json={"name": "  Ada ", "email": " ada@example.com", "project": "Site\n"})

    record = store.list()[0]
    assert (record["name"], record["email"], record["project"]) == ("Ada", "ada@example.com", "Site")


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@b.com", "project": "P"},
        {"name": "A", "project": "P"},
        {"name": "A", "email": "a@b.com"},
        {"name": "", "email": "a@b.com", "project": "P"},
        {"name": "A", "email": "   ", "project": "P"},
        {"name": "A", "email": "a@b.com", "project": None},
        {},
    ],
)
def test_missing_field_is_rejected(client, store, payload):
    response = client.post("/api/contact", json=payload)

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Please fill out all fields."}
    assert store.list() == []


def test_non_object_payload_is_rejected(client, store):
    response = client.post("/api/contact", json=["A", "a@b.com", "P"])

    assert response.status_code == 400
    assert response.json()["ok"] is False
    assert store.list() == []


def test_empty_body_is_rejected(client, store):
    response = client.post("/api/contact", content=b"")

    assert response.status_code == 400
    assert store.list() == []


def test_malformed_json_is_a_client_error(client, store):
    response = client.post(
        "/api/contact",
        content=b'{"name": "A",',
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Invalid JSON payload."}
    assert store.list() == []


def test_oversized_payload_closes_connection(tmp_path, public_dir):
    store = InMemoryMessageStore()
    app = create_app(settings=make_settings(tmp_path, max_body_bytes=64), store=store)

    with TestClient(app) as client:
        payload = dict(VALID, project="x" * 200)
        response = client.post("/api/contact", content=json.dumps(payload).encode())

    assert response.status_code == 413
    assert response.json()["ok"] is False
    assert response.headers["connection"] == "close"
    assert store.list() == []


def test_oversized_streamed_payload_is_rejected(tmp_path, public_dir):
    store = InMemoryMessageStore()
    app = create_app(settings=make_settings(tmp_path, max_body_bytes=64), store=store)

    with TestClient(app) as client:
        response = client.post("/api/contact", content=iter([b"x" * 40, b"x" * 40]))

    assert response.status_code == 413
    assert store.list() == []


def test_store_failure_on_submit(tmp_path, public_dir):
    with TestClient(create_app(settings=make_settings(tmp_path), store=BrokenStore())) as client:
        response = client.post("/api/contact", json=VALID)

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Something went wrong. Please try again."}


def test_messages_listed_in_submission_order(client):
    client.post("/api/contact", json={"name": "First", "email": "one@example.com", "project": "P1"})
    client.post("/api/contact", json={"name": "Second", "email": "two@example.com", "project": "P2"})

    response = client.get("/api/messages")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert [m["name"] for m in body["data"]] == ["First", "Second"]
    assert set(body["data"][0]) == {"name", "email", "project", "receivedAt"}
    assert body["data"][0]["receivedAt"].endswith("Z")


def test_empty_store_lists_nothing(client):
    response = client.get("/api/messages")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "data": []}


def test_store_failure_on_list(tmp_path, public_dir):
    with TestClient(create_app(settings=make_settings(tmp_path), store=BrokenStore())) as client:
        response = client.get("/api/messages")

    assert response.status_code == 500
    assert response.json() == {"ok": False, "error": "Unable to load messages."}


def test_corrupt_store_file_fails_list(tmp_path, public_dir):
    path = tmp_path / "data" / "messages.json"
    path.parent.mkdir()
    path.write_text("{not json")

    with TestClient(create_app(settings=make_settings(tmp_path), store=JsonFileMessageStore(path))) as client:
        response = client.get("/api/messages")

    assert response.status_code == 500
    assert response.json()["ok"] is False


def test_submission_persisted_to_json_file(tmp_path, public_dir):
    path = tmp_path / "data" / "messages.json"
    app = create_app(settings=make_settings(tmp_path), store=JsonFileMessageStore(path))

    with TestClient(app) as client:
        assert json.loads(path.read_text()) == []
        client.post("/api/contact", json=VALID)
        listed = client.get("/api/messages").json()["data"]

    records = json.loads(path.read_text())
    assert len(records) == 1
    assert {k: records[0][k] for k in ("name", "email", "project")} == VALID
    assert records[0]["receivedAt"]
    assert listed == records


def test_wrong_method_on_api_path_falls_through_to_static(client):
    response = client.get("/api/contact")

    assert response.status_code == 404
    assert response.text == "404 Not Found"


def test_health_reports_store_and_public_dir(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["store"]["message_count"] == 0
    assert body["public_dir"]["status"] == "OK"


def test_health_degraded_without_public_dir(tmp_path):
    app = create_app(settings=make_settings(tmp_path), store=InMemoryMessageStore())

    with TestClient(app) as client:
        body = client.get("/api/health").json()

    assert body["status"] == "degraded"
    assert body["public_dir"]["status"] == "MISSING"


def test_json_responses_declare_utf8(client):
    response = client.get("/api/messages")

    assert response.headers["content-type"] == "application/json; charset=utf-8"


def test_records_outside_the_model_are_listed_and_kept(tmp_path, public_dir):
    path = tmp_path / "data" / "messages.json"
    path.parent.mkdir()
    legacy = {"name": "Old", "email": "o@x", "project": 5, "receivedAt": "2024-01-01T00:00:00Z", "phone": "123"}
    path.write_text(json.dumps([legacy], indent=2))

    with TestClient(create_app(settings=make_settings(tmp_path), store=JsonFileMessageStore(path))) as client:
        submitted = client.post("/api/contact", json=VALID)
        listed = client.get("/api/messages")

    assert submitted.status_code == 200
    assert listed.status_code == 200
    data = listed.json()["data"]
    assert data[0] == legacy
    assert data[1]["name"] == "A"
