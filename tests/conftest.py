"""
Shared fixtures for all tests.

Every test gets its own SQLite document store in ``tmp_path`` and an
application built around it, so no state leaks between tests.
"""
import pytest
from fastapi.testclient import TestClient

from maternity_records_api.app.core.config import Settings
from maternity_records_api.app.core.db import SQLiteDocumentStore
from maternity_records_api.app.main import create_app
from maternity_records_api.app.services.catalog import default_catalog
from maternity_records_api.app.services.flow_service import FormFlowController


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / 'records.db'),
        store_backend='sqlite',
        google_credentials_base64='',
        google_credentials_file=str(tmp_path / 'serviceAccountKey.json'),
    )


@pytest.fixture
def store(settings):
    s = SQLiteDocumentStore(settings.database_url)
    s.init_db()
    return s


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def flow(catalog):
    return FormFlowController(catalog)


@pytest.fixture
def app(settings, store):
    return create_app(settings, store=store)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def registered_patient(store):
    """A stored PatientRegistration document for P123."""
    return store.add('PatientRegistration', {
        'PersonalNumber': 'P123',
        'FirstName': 'Anna',
        'LastName': 'Berg',
        'BloodGroup': 'A+',
    })
