# 📄 File: app/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the helpers that wrap every request: one tags and logs each request,
# the other turns errors into consistent answers.
# 🧪 Purpose (Technical Summary):
# Package initialization for request logging middleware and exception handler registration.
# 🔗 Dependencies:
# FastAPI, starlette
# 🔄 Connected Modules / Calls From:
# app.main.py

from .error_handling import register_exception_handlers
from .logging import RequestLoggingMiddleware

__all__ = [
    "RequestLoggingMiddleware",
    "register_exception_handlers",
]
