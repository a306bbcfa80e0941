# 📄 File: app/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# Catches errors that happen while handling a request and turns them into friendly, consistent
# error messages, so a client always gets the same shape back whatever went wrong.
# 🧪 Purpose (Technical Summary):
# FastAPI exception handlers that render CVBuilderException subclasses, request validation
# failures and unexpected errors as {"success": false, "error": {...}} with the request id.
# 🔗 Dependencies:
# FastAPI, app.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From:
# app.main.py (handler registration), every API endpoint raising a CVBuilderException

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.shared.core.exceptions import CVBuilderException

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None
) -> JSONResponse:
    """
    Create a standardized error response

    Args:
        error_code: Error code identifier
        message: Human-readable error message
        status_code: HTTP status code
        details: Additional error details
        request_id: Request correlation ID

    Returns:
        JSON error response
    """
    error_response = {
        "success": False,
        "error": {
            "code": error_code,
            "message": message,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
    }

    if request_id:
        error_response["error"]["request_id"] = request_id

    response = JSONResponse(status_code=status_code, content=error_response)

    if request_id:
        response.headers["X-Request-ID"] = request_id
    response.headers["X-Error-Code"] = error_code

    return response


async def cv_builder_exception_handler(request: Request, exc: CVBuilderException) -> JSONResponse:
    """Handle application exceptions raised by services and dependencies."""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.method} {request.url.path}: {exc.message}")

    response = create_error_response(
        error_code=exc.error_code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=_request_id(request),
    )
    if exc.status_code == 401:
        response.headers["WWW-Authenticate"] = "Bearer"
    return response


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body or parameter parsing errors from FastAPI."""
    violations = [
        {
            "field": ".".join(str(loc) for loc in error.get("loc", []) if loc != "body"),
            "message": error.get("msg", "Validation error"),
        }
        for error in exc.errors()
    ]
    return create_error_response(
        error_code="VALIDATION_ERROR",
        message="Request validation failed",
        status_code=422,
        details={"violations": violations},
        request_id=_request_id(request),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Internal server error: {exc}", exc_info=exc)
    return create_error_response(
        error_code="INTERNAL_SERVER_ERROR",
        message="An internal server error occurred",
        status_code=500,
        request_id=_request_id(request),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CVBuilderException, cv_builder_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
