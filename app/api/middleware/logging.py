# 📄 File: app/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a diary of every request made to the CV Builder, recording what was asked for,
# how long it took and whether it failed, each tagged with a request number.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: assigns or propagates X-Request-ID, binds it to the logging
# context variable for the lifetime of the request, and logs timing with sensitive headers removed.
# 🔗 Dependencies:
# FastAPI, starlette BaseHTTPMiddleware, logging, app.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# app.main.py (middleware registration), error handling (reads request.state.request_id)

import logging
import time
import uuid
from typing import Any, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.shared.utils.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
SENSITIVE_HEADERS = frozenset({
    "authorization",
    "cookie",
    "x-api-key",
    "x-access-token",
    "x-refresh-token",
})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Features:
    - Request id propagation (header in, header out)
    - Request/response timing
    - Slow request warnings
    - Security-aware header filtering
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        token = request_id_var.set(request_id)
        start_time = time.time()

        logger.info(
            f"Request started: {request.method} {request.url.path}",
            extra={"extra_fields": self._request_fields(request)}
        )

        try:
            response = await call_next(request)
        except Exception:
            processing_time = time.time() - start_time
            logger.exception(
                f"Request failed: {request.method} {request.url.path} ({processing_time:.3f}s)"
            )
            raise
        else:
            processing_time = time.time() - start_time
            log_level = logging.WARNING if processing_time > self.slow_request_threshold else logging.INFO
            logger.log(
                log_level,
                f"Request completed: {request.method} {request.url.path} - "
                f"{response.status_code} ({processing_time:.3f}s)"
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            request_id_var.reset(token)

    def _get_or_create_request_id(self, request: Request) -> str:
        if hasattr(request.state, "request_id"):
            return request.state.request_id

        request_id = request.headers.get(REQUEST_ID_HEADER.lower()) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    def _request_fields(self, request: Request) -> Dict[str, Any]:
        return {
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else None,
            "headers": filter_sensitive_headers(dict(request.headers)),
        }


def filter_sensitive_headers(headers: Dict[str, str]) -> Dict[str, str]:
    return {
        name: "[FILTERED]" if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }
