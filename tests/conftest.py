"""
Test configuration and fixtures for the Contact Management API.

Every test gets its own SQLite file under pytest's ``tmp_path`` so no
state leaks between tests.
"""

import os

# Keep the import-time application from writing log files into the
# working directory.  Must run before the package is imported.
os.environ.setdefault("LOG_DIR", "")

import pytest
from fastapi.testclient import TestClient

from contact_manager_api.app.core.config import Settings
from contact_manager_api.app.core.db import init_db, open_connection
from contact_manager_api.app.main import create_app
from contact_manager_api.app.services.contact_service import ContactStore


@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a fresh database file."""
    return Settings(
        database_url=str(tmp_path / "contacts.db"),
        log_dir="",
        log_level="DEBUG",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with startup/shutdown events run."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store():
    """A store over an in-memory database."""
    conn = open_connection(Settings(database_url=":memory:", log_dir=""))
    init_db(conn)
    contact_store = ContactStore(conn)
    yield contact_store
    contact_store.close()


@pytest.fixture
def unique_email_store():
    conn = open_connection(Settings(database_url=":memory:", log_dir=""))
    init_db(conn, unique_email=True)
    contact_store = ContactStore(conn)
    yield contact_store
    contact_store.close()
