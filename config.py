# config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Request

load_dotenv()


def _env_bool(name: str, default: Optional[bool] = None) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    storage_backend: str = "mongo"          # mongo | sql
    mongodb_uri: str = "mongodb://127.0.0.1:27017"
    mongodb_db: str = "booking_db"
    database_url: str = "sqlite:///./booking.db"

    # plain = legacy String(stored) == String(input), hashed = bcrypt
    admin_password_policy: str = "plain"
    # None = backend default (sql formats booking_date, mongo does not)
    format_booking_date: Optional[bool] = None
    lenient_mutations: bool = True

    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"

    default_admin_username: str = "admin"
    default_admin_password: str = "1234"


def load_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        storage_backend=os.getenv("STORAGE_BACKEND", "mongo").lower(),
        mongodb_uri=os.getenv("MONGODB_URI") or os.getenv("MONGO_URI") or "mongodb://127.0.0.1:27017",
        mongodb_db=os.getenv("MONGODB_DB", "booking_db"),
        database_url=os.getenv("DATABASE_URL", "sqlite:///./booking.db"),
        admin_password_policy=os.getenv("ADMIN_PASSWORD_POLICY", "plain").lower(),
        format_booking_date=_env_bool("FORMAT_BOOKING_DATE"),
        lenient_mutations=_env_bool("LENIENT_MUTATIONS", True),
        upload_dir=os.getenv("UPLOAD_DIR", "uploads"),
        upload_url_prefix=os.getenv("UPLOAD_URL_PREFIX", "/uploads").rstrip("/"),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        default_admin_username=os.getenv("DEFAULT_ADMIN_USERNAME", "admin"),
        default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD", "1234"),
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
