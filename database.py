# database.py
from fastapi import Request

from config import Settings
from storage.base import StorageAdapter
from storage.document import DocumentStorage
from storage.relational import RelationalStorage


def build_storage(settings: Settings) -> StorageAdapter:
    """Pick the storage backend named by STORAGE_BACKEND (not connected yet)."""
    backend = settings.storage_backend
    if backend in ("mongo", "mongodb", "document"):
        format_dates = settings.format_booking_date if settings.format_booking_date is not None else False
        return DocumentStorage(settings.mongodb_uri, settings.mongodb_db, format_dates=format_dates)
    if backend in ("sql", "relational", "mysql", "postgres", "sqlite"):
        format_dates = settings.format_booking_date if settings.format_booking_date is not None else True
        return RelationalStorage(settings.database_url, format_dates=format_dates)
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r} (use 'mongo' or 'sql')")


def get_storage(request: Request) -> StorageAdapter:
    return request.app.state.storage
