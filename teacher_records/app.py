"""FastAPI application exposing the teacher records API."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ORIGINS, LOG_LEVEL, SEED_DEV_DATA
from .db import get_session, init_db
from .routers import teacher_positions, teachers, users
from .schemas import envelope
from .services.errors import ServiceError, unique_violation_field

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=LOG_LEVEL)

API_VERSION = "1.0.0"

# Same wording as the pre-write uniqueness checks in services/validation.py.
_CONFLICT_LABELS = {"email": "Email", "identity": "Identity number"}

app = FastAPI(title="Teacher Records Service", version=API_VERSION)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router)
app.include_router(teachers.router)
app.include_router(teacher_positions.router)


def _error(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=envelope(success=False, message=message, errors=errors),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        LOGGER.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return _error(exc.status_code, "Internal server error")
    LOGGER.warning(
        "Rejected %s %s: %s %s", request.method, request.url.path, exc.message, exc.errors
    )
    return _error(exc.status_code, exc.message, exc.errors)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append(f"{location}: {error['msg']}" if location else error["msg"])
    LOGGER.warning("Invalid payload for %s %s: %s", request.method, request.url.path, errors)
    return _error(status.HTTP_400_BAD_REQUEST, "Invalid data", errors)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    field = unique_violation_field(exc)
    LOGGER.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    if field is None:
        return _error(status.HTTP_400_BAD_REQUEST, "Data conflicts with stored records")
    name = to_camel(field)
    label = _CONFLICT_LABELS.get(field, name[:1].upper() + name[1:])
    return _error(
        status.HTTP_400_BAD_REQUEST, f"{label} already exists", [f"{name} already exists"]
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(status.HTTP_404_NOT_FOUND, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.on_event("startup")
def startup_event() -> None:  # pragma: no cover - exercised indirectly
    init_db()
    if SEED_DEV_DATA:
        from .db.fixtures import seed_dev_data

        with get_session() as session:
            seed_dev_data(session)
        LOGGER.info("Seeded development data")


@app.get("/", include_in_schema=False)
def index() -> dict:
    return {
        "message": "Teacher Records API",
        "version": API_VERSION,
        "endpoints": {
            "users": "/api/users",
            "teachers": "/api/teachers",
            "teacherPositions": "/api/teacher-positions",
        },
    }


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}


__all__ = ["app", "health_check", "index"]
