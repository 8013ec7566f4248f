"""API middleware: correlation ID, country code, request audit."""

import json
import logging
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from employee_records.api.dependencies import get_locale_resolver
from employee_records.config.settings import get_settings
from employee_records.core.context import correlation_id_ctx, country_code_ctx

logger = logging.getLogger(__name__)

ENTITY_HEADER = "X-Entity"
ENTITY_QUERY_PARAM = "entity"
CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Generate or preserve correlation ID; attach to request.state, response header, and logging context."""

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        correlation_id_ctx.set(correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class CountryCodeMiddleware(BaseHTTPMiddleware):
    """
    Country code from X-Entity, else the `entity` query parameter, else the configured
    default. Unsupported codes get 400. The code goes on request.state; the response
    carries the matching Content-Language.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        settings = get_settings()
        country_code = request.headers.get(ENTITY_HEADER) or request.query_params.get(
            ENTITY_QUERY_PARAM
        )
        if not country_code or not country_code.strip():
            country_code = settings.default_country_code
        country_code = country_code.strip().upper()

        if country_code not in settings.supported_country_codes:
            return JSONResponse(
                status_code=400,
                content={"detail": "Invalid country code."},
            )

        request.state.country_code = country_code
        country_code_ctx.set(country_code)

        response = await call_next(request)
        response.headers["Content-Language"] = get_locale_resolver().resolve(country_code)
        return response


class RequestAuditMiddleware(BaseHTTPMiddleware):
    """After response: log structured request line (correlation_id, country_code, path, method, status_code)."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        audit_event = {
            "event": "request_audit",
            "correlation_id": getattr(request.state, "correlation_id", None),
            "country_code": getattr(request.state, "country_code", None),
            "path": request.url.path,
            "method": request.method,
            "status_code": response.status_code,
        }
        logger.info(json.dumps(audit_event))
        return response
