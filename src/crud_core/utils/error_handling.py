"""
Centralized error handling for the HTTP adapter
"""

import logging
import uuid
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from crud_core.utils.structured_logging import (
    ErrorHandlingConfig,
    StructuredLogger,
    request_id_var,
    utc_timestamp,
)

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware assigning a trace ID to every request"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        token = request_id_var.set(trace_id)
        request.state.trace_id = trace_id
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers["X-Trace-ID"] = trace_id
        return response


def error_body(error: str, message: str, trace_id: Optional[str] = None, **extra) -> Dict[str, Any]:
    """Build the JSON body shared by all error responses"""
    content = {"error": error, "message": message, **extra}
    if ErrorHandlingConfig.INCLUDE_TRACE_ID and trace_id:
        content["trace_id"] = trace_id
    if ErrorHandlingConfig.INCLUDE_TIMESTAMP:
        content["timestamp"] = utc_timestamp()
    return content


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions raised by routing (unknown paths, bad methods)"""
    trace_id = getattr(request.state, "trace_id", None)
    if exc.status_code >= 500:
        trace_id = StructuredLogger.log_error(
            f"http_{exc.status_code}",
            f"HTTP {exc.status_code}: {exc.detail}",
            request=request,
            exception=exc
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(f"HTTP {exc.status_code}", str(exc.detail), trace_id)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI request validation errors as bad requests"""
    validation_details = [
        {
            "field": " -> ".join(str(loc) for loc in error.get("loc", [])),
            "message": error.get("msg", "Unknown validation error"),
            "type": error.get("type", "unknown")
        }
        for error in exc.errors()
    ]

    trace_id = StructuredLogger.log_error(
        "validation_error",
        f"Request validation failed: {len(validation_details)} validation errors",
        request=request,
        extra_context={"validation_errors": validation_details},
        include_traceback=False,
        level=logging.WARNING
    )

    return JSONResponse(
        status_code=400,
        content=error_body("bad_request", "Request validation failed", trace_id, detail=validation_details)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions without exposing internals"""
    trace_id = StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {exc}",
        request=request,
        exception=exc
    )
    return JSONResponse(
        status_code=500,
        content=error_body("Internal Server Error", "An unexpected error occurred", trace_id)
    )


def setup_error_handling(app):
    """Setup centralized error handling for a FastAPI app"""
    app.add_middleware(RequestContextMiddleware)

    # Most specific first
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Centralized error handling system initialized")
