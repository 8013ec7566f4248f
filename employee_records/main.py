# employee_records/main.py

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from employee_records.api.dependencies import get_interceptor
from employee_records.api.middleware import (
    CorrelationIdMiddleware,
    CountryCodeMiddleware,
    RequestAuditMiddleware,
)
from employee_records.api.routers import employees, health
from employee_records.application.exceptions import (
    ApplicationError,
    ConcurrentModificationError,
    HistoryPersistenceError,
)
from employee_records.config.logging import configure_logging
from employee_records.config.settings import get_settings
from employee_records.domain.exceptions import (
    DomainError,
    DomainValidationError,
    EmailAlreadyExistsError,
    EmployeeNotFoundError,
)

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # The history recorder must be subscribed before the first write.
    get_interceptor()
    logger.info(
        "audit_pipeline_ready",
        extra={"server_timezone": settings.server_timezone},
    )
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> CountryCode -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(CountryCodeMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(EmployeeNotFoundError)
async def employee_not_found_handler(request, exc: EmployeeNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(EmailAlreadyExistsError)
async def email_exists_handler(request, exc: EmailAlreadyExistsError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(ConcurrentModificationError)
async def concurrent_modification_handler(request, exc: ConcurrentModificationError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(HistoryPersistenceError)
async def history_persistence_error_handler(request, exc: HistoryPersistenceError):
    # The employee row may already be committed; the request still fails.
    logger.error(
        "history_persistence_failed",
        extra={"entity_id": str(exc.entity_id) if exc.entity_id else None},
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "The change could not be recorded in the audit history"},
    )


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred"},
    )


# Routers: /health, /api/employees
app.include_router(health.router)
app.include_router(employees.router, prefix="/api/employees")
