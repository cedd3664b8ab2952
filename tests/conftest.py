import os
import sys
import tempfile
from pathlib import Path
import pytest

# Ensure project root is on sys.path so tests can import 'floorsync' package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Point the app at a throwaway sqlite file before anything imports the settings
_TMP_DIR = tempfile.mkdtemp(prefix="floorsync-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_TMP_DIR) / 'test.db'}"

from fastapi.testclient import TestClient
from floorsync.db import SessionLocal, create_schema, drop_schema
from floorsync.core.broadcaster import EventBroadcaster
from floorsync.main import create_app
from floorsync import models


class CollectingSubscriber:
    """In-process observer that records every frame it receives."""

    def __init__(self, subscriber_id):
        self.id = subscriber_id
        self.messages = []

    def deliver(self, message):
        self.messages.append(message)

    def events(self):
        return [m["event"] for m in self.messages]


@pytest.fixture(autouse=True)
def reset_db():
    # Drop all and re-create so the test DB matches the current models exactly
    drop_schema()
    create_schema()
    yield
    drop_schema()


@pytest.fixture()
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def broadcaster():
    return EventBroadcaster()


@pytest.fixture()
def observer(broadcaster):
    sub = CollectingSubscriber("observer-1")
    broadcaster.subscribe(sub)
    return sub


@pytest.fixture()
def app(broadcaster):
    return create_app(broadcaster=broadcaster)


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def order(db):
    o = models.Order(customer="ABC Construction", status="production")
    db.add(o)
    db.commit()
    db.refresh(o)
    return o
