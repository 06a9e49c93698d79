# main.py
import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import Settings, load_settings
from database import build_storage
from routes import admin, booking, user
from storage.base import StorageAdapter
from utils.errors import register_exception_handlers

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[StorageAdapter] = None) -> FastAPI:
    settings = settings or load_settings()
    storage = storage or build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        os.makedirs(settings.upload_dir, exist_ok=True)
        storage.connect()
        logger.info("Storage backend %s ready", type(storage).__name__)
        try:
            yield
        finally:
            storage.close()

    app = FastAPI(title="Booking API", lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(user.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(booking.router, prefix="/api")

    @app.get("/api/test")
    async def health():
        return {"message": "Backend is running!"}

    # Uploaded booking images, read-only
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )
    return app


settings = load_settings()
logging.basicConfig(level=settings.log_level)
app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port)
