# Correlation-ID middleware: read X-Correlation-ID from the request or mint one, bind it into
# structlog contextvars and echo it in the response header.
import uuid
from typing import Callable

import structlog.contextvars
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_admin.logging_config import get_logger

logger = get_logger(__name__)

HEADER_CORRELATION_ID = "X-Correlation-ID"


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Bind correlation_id (plus method and path) for every log line of the request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(HEADER_CORRELATION_ID, "").strip()
        if not correlation_id:
            correlation_id = uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            correlation_id=correlation_id,
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)
        response.headers[HEADER_CORRELATION_ID] = correlation_id
        if response.status_code >= 500:
            logger.warning("http.server_error", status_code=response.status_code)
        return response
