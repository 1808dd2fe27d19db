"""Shared test fixtures for the Shiptivity store, engine and API tests."""

import sys
from pathlib import Path

import pytest

# Ensure the repo root (shiptivity/, shiptivity_server.py) is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from shiptivity.schema import Client, Lane
from shiptivity.store import ClientStore
from shiptivity_server import create_app


def _make_lane(lane: Lane, count: int, start_id: int = 1) -> list:
    return [
        Client(id=start_id + i, name=f"{lane.value}-{i + 1}", status=lane, priority=i + 1)
        for i in range(count)
    ]


@pytest.fixture
def make_lane():
    """Factory: ``make_lane(lane, count, start_id=1)`` builds densely ranked clients in one lane."""
    return _make_lane


@pytest.fixture
def store(tmp_path):
    """A seeded ClientStore on a temporary database."""
    s = ClientStore(str(tmp_path / "clients.db"))
    yield s
    s.close()


@pytest.fixture
def app(store):
    return create_app(store)


@pytest.fixture
def client(app):
    return app.test_client()
