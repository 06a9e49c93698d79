# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from storage.relational import RelationalStorage


@pytest.fixture
def settings(tmp_path):
    return Settings(
        storage_backend="sql",
        database_url="sqlite://",
        admin_password_policy="plain",
        upload_dir=str(tmp_path / "uploads"),
    )


# Fresh in-memory SQLite database per test
@pytest.fixture
def sql_storage():
    storage = RelationalStorage("sqlite://")
    storage.connect()
    yield storage
    storage.close()


@pytest.fixture
def client(settings):
    app = create_app(settings, storage=RelationalStorage(settings.database_url))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def storage(client):
    return client.app.state.storage
