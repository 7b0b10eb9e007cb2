"""Maps exceptions to the JSON error envelope: {"error": "..."}."""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from doc_translator.documents.exceptions import NotFoundError, ValidationError
from doc_translator.logging.logger import Log
from doc_translator.storage.exceptions import StorageError


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    Log.warning(f"Rejected {request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_400_BAD_REQUEST, str(exc))


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    Log.info(f"{request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_404_NOT_FOUND, str(exc))


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    Log.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Storage operation failed")


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    Log.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid request")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        Log.info(f"Path not found: {request.method} {request.url.path}")
        return _error(
            status.HTTP_404_NOT_FOUND,
            "Not Found",
            path=request.url.path,
            method=request.method,
        )
    return _error(exc.status_code, str(exc.detail))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(NotFoundError, not_found_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)
