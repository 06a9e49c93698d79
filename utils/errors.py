# utils/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storage.base import DuplicateKeyError, StorageError
from utils.upload import UploadError

logger = logging.getLogger(__name__)

ERROR_KINDS = {
    400: "validation_error",
    401: "authentication_failed",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
    500: "storage_failure",
}


def error_response(status_code: int, message: str, kind: str = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "error",
            "error": kind or ERROR_KINDS.get(status_code, "error"),
            "message": message,
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        fields = sorted({".".join(str(p) for p in err["loc"][1:]) or "body" for err in exc.errors()})
        return error_response(400, "Invalid or missing fields: " + ", ".join(fields))

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key(request: Request, exc: DuplicateKeyError):
        logger.warning("Duplicate key on %s %s: %s", request.method, request.url.path, exc)
        return error_response(400, "Record already exists", kind="duplicate_key")

    @app.exception_handler(StorageError)
    async def storage_error(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return error_response(500, str(exc))

    @app.exception_handler(UploadError)
    async def upload_error(request: Request, exc: UploadError):
        return error_response(500, str(exc), kind="upload_failure")

    # anything else still answers with the JSON envelope
    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(500, str(exc) or type(exc).__name__, kind="internal_error")
