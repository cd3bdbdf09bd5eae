"""
Shared pytest fixtures.

Each test gets its own in-memory store, so ids and records never leak
between tests.
"""
import pytest
from fastapi.testclient import TestClient

from app.data.seed import seed_database
from app.main import app
from app.services.clinic_store import ClinicStore


@pytest.fixture
def empty_store():
    """Store with tables but no data."""
    store = ClinicStore("sqlite://")
    yield store
    store.close()


@pytest.fixture
def store(empty_store):
    """Store seeded with the demo clinic (4 doctors, 2 patients)."""
    seed_database(empty_store)
    return empty_store


@pytest.fixture
def client():
    """HTTP client running the full app lifespan against a fresh seeded store."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def new_patient(store):
    return store.register_patient({"name": "Jane Doe", "username": "jane", "password": "s3cret!"})
