# utils/upload.py
import logging
import os
import secrets
import shutil
import time
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)


class UploadError(Exception):
    """The image could not be written to the upload directory."""


def build_filename(original: str) -> str:
    # extension kept as sent, like path.extname on the client filename
    ext = os.path.splitext(original or "")[1]
    return f"{int(time.time() * 1000)}-{secrets.token_hex(4)}{ext}"


def save_upload(image: Optional[UploadFile], upload_dir: str, url_prefix: str = "/uploads") -> Optional[str]:
    """Write the booking image to disk and return its public path.

    No size, type or content checks are done here.
    """
    if image is None or not image.filename:
        return None

    filename = build_filename(image.filename)
    path = os.path.join(upload_dir, filename)
    try:
        os.makedirs(upload_dir, exist_ok=True)
        with open(path, "wb") as out:
            shutil.copyfileobj(image.file, out)
    except OSError as exc:
        logger.error("Could not store upload %s in %s: %s", image.filename, upload_dir, exc)
        raise UploadError(f"Could not store uploaded image: {exc.strerror or exc}") from exc

    logger.info("Stored upload %s as %s", image.filename, path)
    return f"{url_prefix}/{filename}"
