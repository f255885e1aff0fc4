"""
Shared fixtures: configuration, stores, services and HTTP clients
"""
import pytest
from fastapi.testclient import TestClient
from pydantic.alias_generators import to_camel

from evaltrack.core.aggregator import SubmissionAggregator
from evaltrack.core.registry import SessionRegistry
from evaltrack.core.store import MemoryDocumentStore
from evaltrack.main import create_app
from evaltrack.models import CRITERIA, AppConfig


@pytest.fixture
def config(tmp_path):
    return AppConfig(
        data_path=str(tmp_path / "data" / "db.json"),
        secret_key="test-secret",
        static_dir=str(tmp_path / "public"),
    )


@pytest.fixture
def store():
    return MemoryDocumentStore()


@pytest.fixture
def registry(store):
    return SessionRegistry(store)


@pytest.fixture
def aggregator(store):
    return SubmissionAggregator(store)


@pytest.fixture
def make_form():
    """Build an evaluation form body with every criterion set to `value`"""
    def _make(session_id, jury_name="Hugo", student_name="Fabien", value="1", **overrides):
        form = {to_camel(c): value for c in CRITERIA}
        form.update(sessionId=session_id, juryName=jury_name, studentName=student_name,
                    studentComments="Well done!")
        form.update(overrides)
        return form
    return _make


@pytest.fixture
def client(config):
    with TestClient(create_app(config)) as c:
        yield c


@pytest.fixture
def logged_in(client):
    """Client logged in as Toulouse"""
    res = client.post("/api/login", json={"username": "Toulouse", "password": "demo"})
    assert res.json()["success"] is True
    return client


@pytest.fixture
def other_campus(logged_in):
    """Second client on the same app, logged in as Paris"""
    other = TestClient(logged_in.app)
    res = other.post("/api/login", json={"username": "Paris", "password": "demo"})
    assert res.json()["success"] is True
    return other
