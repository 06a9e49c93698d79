# tests/test_config.py
import pytest

from config import Settings, load_settings
from database import build_storage
from storage.document import DocumentStorage
from storage.relational import RelationalStorage


def test_defaults(monkeypatch):
    for name in ("STORAGE_BACKEND", "MONGODB_URI", "MONGO_URI", "PORT", "LENIENT_MUTATIONS",
                 "FORMAT_BOOKING_DATE", "CORS_ORIGINS", "ADMIN_PASSWORD_POLICY"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.storage_backend == "mongo"
    assert settings.mongodb_uri == "mongodb://127.0.0.1:27017"
    assert settings.port == 3000
    assert settings.lenient_mutations is True
    assert settings.format_booking_date is None
    assert settings.cors_origins == ["*"]
    assert settings.admin_password_policy == "plain"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "SQL")
    monkeypatch.delenv("MONGODB_URI", raising=False)
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LENIENT_MUTATIONS", "false")
    monkeypatch.setenv("FORMAT_BOOKING_DATE", "yes")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("UPLOAD_URL_PREFIX", "/files/")
    settings = load_settings()
    assert settings.storage_backend == "sql"
    assert settings.mongodb_uri == "mongodb://db:27017"
    assert settings.port == 8080
    assert settings.lenient_mutations is False
    assert settings.format_booking_date is True
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.upload_url_prefix == "/files"


def test_build_storage_picks_backend_and_date_format():
    mongo = build_storage(Settings(storage_backend="mongo"))
    sql = build_storage(Settings(storage_backend="sql", database_url="sqlite://"))
    assert isinstance(mongo, DocumentStorage) and mongo.format_dates is False
    assert isinstance(sql, RelationalStorage) and sql.format_dates is True

    forced = build_storage(Settings(storage_backend="mongo", format_booking_date=True))
    assert forced.format_dates is True


def test_build_storage_rejects_unknown_backend():
    with pytest.raises(ValueError):
        build_storage(Settings(storage_backend="redis"))
