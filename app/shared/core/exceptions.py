# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines all the special error types our CV Builder uses to say what went wrong
# (bad input, not your CV, out of downloads, missing CV, database trouble) in a clear way.
# 🧪 Purpose (Technical Summary):
# Custom exception hierarchy with HTTP status codes, error details and serialization for API
# responses. Policy decisions are plain data; services convert denials into these types.
# 🔗 Dependencies:
# FastAPI HTTPException, typing, HTTP status constants
# 🔄 Connected Modules / Calls From:
# cv_service.py, data stores, error handling middleware, security, API endpoints

from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException, status


class CVBuilderException(Exception):
    """
    Base exception class for the CV Builder application.
    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__.upper()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
                "status_code": self.status_code
            }
        }

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict()["error"]
        )


# =============================================================================
# AUTHENTICATION & AUTHORIZATION EXCEPTIONS
# =============================================================================

class AuthenticationError(CVBuilderException):
    """
    Exception raised for authentication failures.
    Used when the bearer token is missing or invalid, or names no account.
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None,
        user_id: Optional[str] = None
    ):
        if not details:
            details = {}
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_401_UNAUTHORIZED,
            details=details,
            error_code="AUTHENTICATION_ERROR"
        )


class AuthorizationError(CVBuilderException):
    """
    Exception raised for authorization failures.
    Used for ownership, account state, verification and status transition denials.
    """

    def __init__(
        self,
        message: str = "Access denied",
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        required_action: Optional[str] = None,
        user_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id
        if required_action:
            details["required_action"] = required_action
        if user_id:
            details["user_id"] = user_id

        super().__init__(
            message=message,
            status_code=status.HTTP_403_FORBIDDEN,
            details=details,
            error_code="AUTHORIZATION_ERROR"
        )


# =============================================================================
# VALIDATION & BUSINESS RULE EXCEPTIONS
# =============================================================================

class ValidationError(CVBuilderException):
    """
    Exception raised for data validation failures.

    Carries the full violation list so clients can highlight each field;
    the message is the joined ``field: message`` form.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        violations: Optional[Iterable[Any]] = None,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        violation_list: List[Dict[str, str]] = [
            v.to_dict() if hasattr(v, "to_dict") else dict(v)
            for v in (violations or [])
        ]
        if violation_list:
            details["violations"] = violation_list
        if field:
            details["field"] = field

        self.violations = violation_list
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
            error_code="VALIDATION_ERROR"
        )


class QuotaExceededError(CVBuilderException):
    """
    Exception raised when a role-based usage limit is reached.
    Used for CV count, monthly download and monthly share limits.
    """

    def __init__(
        self,
        message: str = "Usage limit reached",
        action: Optional[str] = None,
        limit: Optional[int] = None,
        current_usage: Optional[int] = None,
        role: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if action:
            details["action"] = action
        if limit is not None:
            details["limit"] = limit
        if current_usage is not None:
            details["current_usage"] = current_usage
        if role:
            details["role"] = role

        super().__init__(
            message=message,
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            details=details,
            error_code="QUOTA_EXCEEDED"
        )


class NotFoundError(CVBuilderException):
    """Exception raised when a requested account or CV does not exist."""

    def __init__(
        self,
        message: Optional[str] = None,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = resource_id

        super().__init__(
            message=message or f"{resource_type} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details=details,
            error_code="NOT_FOUND"
        )


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(CVBuilderException):
    """
    Exception raised for data store failures.
    Used for connection issues, query failures and exhausted counter retries.
    """

    def __init__(
        self,
        message: str = "Database error",
        operation: Optional[str] = None,
        table: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if not details:
            details = {}

        if operation:
            details["operation"] = operation
        if table:
            details["table"] = table

        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
            error_code="DATABASE_ERROR"
        )
