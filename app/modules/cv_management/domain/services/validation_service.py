# 📄 File: app/modules/cv_management/domain/services/validation_service.py
# 🧭 Purpose (Layman Explanation):
# Runs all the individual field checks for a whole form at once (sign-up, login, profile edit,
# new CV, CV edit) and turns the list of problems into one readable message.
# 🧪 Purpose (Technical Summary):
# Aggregate validators concatenating field validator output in a fixed order, plus helpers to
# combine, test and format violation lists. Pure; never raises.
# 🔗 Dependencies:
# domain.rules, domain.constants, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# cv_service.py, presentation api, tests

from typing import Any, Iterable, List, Mapping

from app.shared.utils.validators import is_valid_date, sanitize_string, to_number

from ..constants import PAGINATION_MAX_LIMIT
from ..models import Violation
from ..rules.cv_rules import (
    section_validators,
    validate_basic_details,
    validate_layout,
    validate_status,
    validate_title,
)
from ..rules.user_rules import (
    validate_contact_number,
    validate_email,
    validate_password,
    validate_username,
)

__all__ = [
    "combine_errors",
    "format_errors",
    "has_errors",
    "is_valid_date",
    "sanitize_string",
    "validate_cv_creation",
    "validate_cv_update",
    "validate_pagination",
    "validate_profile_update",
    "validate_user_login",
    "validate_user_registration",
]


def combine_errors(*error_lists: Iterable[Violation]) -> List[Violation]:
    combined: List[Violation] = []
    for errors in error_lists:
        combined.extend(errors)
    return combined


def has_errors(errors: List[Violation]) -> bool:
    return len(errors) > 0


def format_errors(errors: Iterable[Violation]) -> str:
    """Join violations as ``field: message, field: message``."""
    return ", ".join(f"{error.field}: {error.message}" for error in errors)


def _payload(data: Any) -> Mapping[str, Any]:
    return data if isinstance(data, Mapping) else {}


def _has_entries(value: Any) -> bool:
    return value is not None and not (hasattr(value, "__len__") and len(value) == 0)


# ==============================================================================
# ACCOUNT PAYLOADS
# ==============================================================================

def validate_user_registration(data: Mapping[str, Any]) -> List[Violation]:
    data = _payload(data)
    errors: List[Violation] = []
    errors.extend(validate_username(data.get("username")))
    errors.extend(validate_email(data.get("email")))
    errors.extend(validate_password(data.get("password")))
    if data.get("contact_number"):
        errors.extend(validate_contact_number(data.get("contact_number")))
    return errors


def validate_user_login(data: Mapping[str, Any]) -> List[Violation]:
    """Either username or email must be present; password is always checked."""
    data = _payload(data)
    errors: List[Violation] = []

    if not data.get("username") and not data.get("email"):
        errors.append(Violation("username_or_email", "Either username or email is required"))

    errors.extend(validate_password(data.get("password")))

    if data.get("username"):
        errors.extend(validate_username(data.get("username")))
    if data.get("email"):
        errors.extend(validate_email(data.get("email")))

    return errors


def validate_profile_update(data: Mapping[str, Any]) -> List[Violation]:
    data = _payload(data)
    errors: List[Violation] = []
    if data.get("username"):
        errors.extend(validate_username(data.get("username")))
    if data.get("email"):
        errors.extend(validate_email(data.get("email")))
    if data.get("contact_number"):
        errors.extend(validate_contact_number(data.get("contact_number")))
    return errors


# ==============================================================================
# CV PAYLOADS
# ==============================================================================

def validate_cv_creation(data: Mapping[str, Any]) -> List[Violation]:
    """
    Validate a full CV creation payload.

    Title, layout and basic details are always checked; each section list is
    checked only when non-empty, in the order education, experience,
    projects, skills, social profiles.
    """
    data = _payload(data)
    errors: List[Violation] = []
    errors.extend(validate_title(data.get("title")))
    errors.extend(validate_layout(data.get("layout")))
    errors.extend(validate_basic_details(data.get("basic_details")))

    for section, validator in section_validators():
        if _has_entries(data.get(section)):
            errors.extend(validator(data.get(section)))

    return errors


def validate_cv_update(data: Mapping[str, Any]) -> List[Violation]:
    """Like creation, but every part is checked only when present in the payload."""
    data = _payload(data)
    errors: List[Violation] = []

    if "title" in data:
        errors.extend(validate_title(data.get("title")))
    if "layout" in data:
        errors.extend(validate_layout(data.get("layout")))
    if "status" in data:
        errors.extend(validate_status(data.get("status")))
    if "basic_details" in data:
        errors.extend(validate_basic_details(data.get("basic_details")))

    for section, validator in section_validators():
        if section in data and _has_entries(data.get(section)):
            errors.extend(validator(data.get(section)))

    return errors


# ==============================================================================
# REQUEST HELPERS
# ==============================================================================

def validate_pagination(page: Any = None, limit: Any = None) -> List[Violation]:
    """
    Check list paging parameters.

    ``None`` means "use the default". Numeric strings are accepted; any other
    value that is not a number is reported instead of compared.
    """
    errors: List[Violation] = []

    if page is not None:
        page_number = to_number(page)
        if page_number is None:
            errors.append(Violation("page", "Page must be a number"))
        elif page_number < 1:
            errors.append(Violation("page", "Page must be greater than 0"))

    if limit is not None:
        limit_number = to_number(limit)
        if limit_number is None:
            errors.append(Violation("limit", "Limit must be a number"))
        elif limit_number < 1:
            errors.append(Violation("limit", "Limit must be greater than 0"))
        elif limit_number > PAGINATION_MAX_LIMIT:
            errors.append(Violation("limit", f"Limit must not exceed {PAGINATION_MAX_LIMIT}"))

    return errors
