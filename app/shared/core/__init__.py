"""
Core utilities package for the CV Builder application.
Provides the exception hierarchy and bearer token security.
"""

from .exceptions import (
    CVBuilderException,
    AuthenticationError,
    AuthorizationError,
    ValidationError,
    QuotaExceededError,
    NotFoundError,
    DatabaseError
)

__all__ = [
    "CVBuilderException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "QuotaExceededError",
    "NotFoundError",
    "DatabaseError",
]
