"""
Tests for the Flask API: listing, lookup, reorder, error bodies, auth.
"""
from unittest.mock import patch

import pytest

from shiptivity.errors import StoreError
from shiptivity_server import create_app


def lane_order(clients, status):
    """Ids in a lane, top of the swimlane first."""
    return [c["id"] for c in sorted(
        (c for c in clients if c["status"] == status), key=lambda c: c["priority"]
    )]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Reads
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_index(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.get_json() == {"message": "SHIPTIVITY API. Read documentation to see API docs"}


def test_list_clients(client):
    r = client.get("/api/v1/clients")
    assert r.status_code == 200
    data = r.get_json()
    assert len(data) == 20
    assert data[0] == {
        "id": 1,
        "name": "Stark, White and Abbott",
        "description": "Cloned Optimal Architecture",
        "status": "in-progress",
        "priority": 1,
    }


def test_list_clients_by_status(client):
    r = client.get("/api/v1/clients?status=complete")
    assert r.status_code == 200
    assert [c["id"] for c in r.get_json()] == [2, 11, 13, 17]


def test_list_clients_bad_status(client):
    r = client.get("/api/v1/clients?status=archived")
    assert r.status_code == 400
    assert r.get_json() == {
        "message": "Invalid status provided.",
        "long_message": "Status can only be one of the following: [backlog | in-progress | complete].",
    }


def test_get_client(client):
    r = client.get("/api/v1/clients/4")
    assert r.status_code == 200
    assert r.get_json()["name"] == "Thompson PLC"


@pytest.mark.parametrize("raw,long_message", [
    ("abc", "Id can only be integer."),
    ("404", "Cannot find client with that id."),
    ("99999999999999999999", "Cannot find client with that id."),
])
def test_get_client_bad_id(client, raw, long_message):
    r = client.get(f"/api/v1/clients/{raw}")
    assert r.status_code == 400
    assert r.get_json() == {"message": "Invalid id provided.", "long_message": long_message}


def test_stats(client):
    r = client.get("/api/v1/stats")
    assert r.get_json() == {
        "total": 20,
        "by_status": {"backlog": 11, "in-progress": 5, "complete": 4},
    }


def test_health(client, store):
    r = client.get("/health")
    assert r.get_json() == {"status": "ok", "db": store.db_path}


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Reorder
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def test_put_priority_same_lane(client, store):
    """In-progress #4 (id 15) moved to the top; returns and persists the full board"""
    r = client.put("/api/v1/clients/15", json={"priority": 1})
    assert r.status_code == 200
    data = r.get_json()
    assert len(data) == 20
    assert lane_order(data, "in-progress") == [15, 1, 4, 5, 16]

    persisted = [c.to_dict() for c in store.list_all()]
    assert persisted == data


def test_put_status_goes_to_bottom(client):
    """Backlog #2 (id 6) → in-progress with no priority lands at #6"""
    r = client.put("/api/v1/clients/6", json={"status": "in-progress"})
    data = r.get_json()
    assert lane_order(data, "in-progress") == [1, 4, 5, 15, 16, 6]
    assert lane_order(data, "backlog") == [3, 7, 8, 9, 10, 12, 14, 18, 19, 20]
    assert [c["priority"] for c in data if c["id"] == 7] == [2]


def test_put_status_and_priority(client):
    r = client.put("/api/v1/clients/20", json={"status": "complete", "priority": "2"})
    assert r.status_code == 200
    assert lane_order(r.get_json(), "complete") == [2, 20, 11, 13, 17]


def test_put_priority_clamped(client):
    r = client.put("/api/v1/clients/2", json={"status": "in-progress", "priority": 99})
    moved = next(c for c in r.get_json() if c["id"] == 2)
    assert moved == {**moved, "status": "in-progress", "priority": 6}


def test_put_noop_returns_unchanged_board(client):
    before = client.get("/api/v1/clients").get_json()
    r = client.put("/api/v1/clients/5", json={"status": "in-progress"})
    assert r.status_code == 200
    assert r.get_json() == before


def test_put_empty_body_is_noop(client):
    before = client.get("/api/v1/clients").get_json()
    r = client.put("/api/v1/clients/5", data="not json")
    assert r.status_code == 200
    assert r.get_json() == before


@pytest.mark.parametrize("body,message", [
    ({"status": "done"}, "Invalid status provided."),
    ({"priority": 0}, "Invalid priority provided."),
    ({"priority": "first"}, "Invalid priority provided."),
    ({"priority": -2}, "Invalid priority provided."),
])
def test_put_rejects_bad_input(client, store, body, message):
    before = store.list_all()
    r = client.put("/api/v1/clients/3", json=body)
    assert r.status_code == 400
    assert r.get_json()["message"] == message
    assert store.list_all() == before


@pytest.mark.parametrize("raw", ["77", "99999999999999999999"])
def test_put_unknown_id(client, raw):
    r = client.put(f"/api/v1/clients/{raw}", json={"priority": 1})
    assert r.status_code == 400
    assert r.get_json()["long_message"] == "Cannot find client with that id."


def test_put_store_failure_is_500(client, store):
    with patch.object(store, "save_all", side_effect=StoreError("disk I/O error")):
        r = client.put("/api/v1/clients/3", json={"priority": 2})
    assert r.status_code == 500
    assert r.get_json() == {"message": "Storage failure.", "long_message": "disk I/O error"}


def test_put_refuses_to_save_broken_board(client, store):
    """A snapshot that is not densely ranked is never persisted"""
    board = store.list_all()
    board[0].priority = 9  # in-progress now has a gap
    with patch.object(store, "list_all", return_value=board), \
            patch.object(store, "save_all") as save_all:
        r = client.put("/api/v1/clients/3", json={"priority": 2})
    assert r.status_code == 500
    assert r.get_json()["message"] == "Internal ranking error."
    save_all.assert_not_called()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Auth
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class TestApiKey:

    @pytest.fixture
    def locked(self, store):
        return create_app(store, api_secret="s3cret").test_client()

    def test_missing_key_is_401(self, locked):
        assert locked.put("/api/v1/clients/3", json={"priority": 2}).status_code == 401

    def test_wrong_key_is_403(self, locked):
        r = locked.put("/api/v1/clients/3", json={"priority": 2}, headers={"X-API-Key": "nope"})
        assert r.status_code == 403

    def test_correct_key(self, locked):
        r = locked.put("/api/v1/clients/3", json={"priority": 2}, headers={"X-API-Key": "s3cret"})
        assert r.status_code == 200

    def test_reads_stay_open(self, locked):
        assert locked.get("/api/v1/clients").status_code == 200
