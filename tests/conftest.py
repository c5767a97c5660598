import mongomock
import pytest
from fastapi.testclient import TestClient

from radiograph_registry.core.config import get_settings
from radiograph_registry.core.store import PatientStore
from radiograph_registry.main import create_app


@pytest.fixture
def collection():
    return mongomock.MongoClient()["radiografias"]["pacientes"]


@pytest.fixture
def store(collection) -> PatientStore:
    patient_store = PatientStore(collection)
    patient_store.ensure_indexes()
    return patient_store


@pytest.fixture
def client(store, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    app = create_app(store=store)
    return TestClient(app)
