# employee_records/core/context.py
# Read by the log formatter only; services receive the country code as a parameter.

import contextvars

correlation_id_ctx = contextvars.ContextVar("correlation_id", default=None)
country_code_ctx = contextvars.ContextVar("country_code", default=None)
