# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from helpdesk.core.config import Settings
from helpdesk.main import create_app
from helpdesk.ticket.repository import JsonFileTicketRepository
from helpdesk.ticket.services import TicketStore


@pytest.fixture
def tickets_file(tmp_path):
    return tmp_path / "data" / "tickets.json"


@pytest.fixture
def settings(tickets_file):
    return Settings(_env_file=None, TICKETS_FILE=str(tickets_file), LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client):
    r = client.post("/login", data={"email": "a@b.com", "password": "secret1"}, follow_redirects=False)
    assert r.status_code == 303
    return client


@pytest.fixture
def store(app):
    return app.state.ticket_store


@pytest.fixture
def seeded_store(tickets_file):
    s = TicketStore(JsonFileTicketRepository(tickets_file))
    s.initialize()
    return s
