# employee_records/api/routers/health.py

from fastapi import APIRouter, Request

from employee_records.config.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Health check with country code and correlation ID from request state."""
    settings = get_settings()
    return {
        "status": "ok",
        "country_code": request.state.country_code,
        "correlation_id": request.state.correlation_id,
        "server_timezone": settings.server_timezone,
        "environment": settings.environment,
        "version": settings.version,
    }
