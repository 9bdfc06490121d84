import os

# Never reach a real store from the test run
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "Asia/Tokyo"

import pytest
from fastapi.testclient import TestClient

from saunalog.auth import create_session_token
from saunalog.database import Database
from saunalog.main import create_app
from saunalog.services.ledger import SessionLedger


@pytest.fixture
def database():
    db = Database("sqlite://")
    db.init_db()
    yield db
    db.dispose()


@pytest.fixture
def ledger(database):
    return SessionLedger(database)


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    token = create_session_token("user-1", "Sauna Fan")
    return {"Authorization": f"Bearer {token}"}
