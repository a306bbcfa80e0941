"""Domain services: aggregate validation, quota enforcement and the CV application service."""

from .cv_service import CVService
from .quota_service import (
    DEFAULT_LIMITS,
    QuotaEnforcer,
    QuotaLimits,
    can_user_create_more_cvs,
    can_user_download_more,
    can_user_share_more,
    current_month_start,
)
from .validation_service import (
    combine_errors,
    format_errors,
    has_errors,
    sanitize_string,
    validate_cv_creation,
    validate_cv_update,
    validate_pagination,
    validate_profile_update,
    validate_user_login,
    validate_user_registration,
)

__all__ = [
    "CVService",
    "DEFAULT_LIMITS",
    "QuotaEnforcer",
    "QuotaLimits",
    "can_user_create_more_cvs",
    "can_user_download_more",
    "can_user_share_more",
    "combine_errors",
    "current_month_start",
    "format_errors",
    "has_errors",
    "sanitize_string",
    "validate_cv_creation",
    "validate_cv_update",
    "validate_pagination",
    "validate_profile_update",
    "validate_user_login",
    "validate_user_registration",
]
