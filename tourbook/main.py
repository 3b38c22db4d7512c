import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tourbook.api.deps import engine
from tourbook.api.routers.bookings import router as bookings_router
from tourbook.api.routers.custom_trips import router as custom_trips_router
from tourbook.api.routers.health import router as health_router
from tourbook.api.routers.workers import router as workers_router
from tourbook.api.schemas.bookings import ErrorBody, ErrorResponse
from tourbook.config import get_settings
from tourbook.domain.errors import DomainError, ValidationError
from tourbook.infrastructure.db.tables import metadata

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not settings.use_in_memory:
        # Crea las tablas si no existen (dev/demo)
        async with engine.begin() as conn:
            await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title="Tour Bookings API",
    version="0.1.0",
    lifespan=lifespan
)


def _error_response(status_code: int, message: str, error: ErrorBody) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    fields = exc.fields if isinstance(exc, ValidationError) else None
    log = logger.error if exc.status_code >= 500 else logger.info
    log(
        "Request rejected",
        extra={
            "code": exc.code,
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return _error_response(
        exc.status_code,
        exc.message,
        ErrorBody(code=exc.code, fields=fields or None),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = []
    for err in exc.errors():
        location = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        if location:
            fields.append(".".join(location))
    return _error_response(
        400,
        "Invalid request data",
        ErrorBody(code="VALIDATION_ERROR", fields=fields or None),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler.

    Unhandled exceptions are logged with an error_id; raw details are only
    returned to the client when expose_error_details is enabled.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    detail = None
    if get_settings().expose_error_details:
        detail = {"type": type(exc).__name__, "message": str(exc)}

    return _error_response(
        500,
        "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
        ErrorBody(code="INTERNAL_ERROR", detail=detail, error_id=error_id),
    )


app.include_router(health_router, tags=["Health"])
app.include_router(bookings_router, prefix="/api/v1", tags=["Bookings"])
app.include_router(custom_trips_router, prefix="/api/v1", tags=["Custom Trips"])
app.include_router(workers_router, prefix="/api/v1", tags=["Worker"])
