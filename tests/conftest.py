import pytest
from fastapi.testclient import TestClient

from app import create_app
from registry import Connection


def drain(connection: Connection) -> list:
    """Return every message queued for `connection` so far."""
    messages = []
    while not connection.outbox.empty():
        messages.append(connection.outbox.get_nowait())
    return messages


@pytest.fixture
def app():
    return create_app(static_dir=None)


@pytest.fixture
def client(app):
    # A single portal so every socket in a test shares one event loop
    with TestClient(app) as client:
        yield client
