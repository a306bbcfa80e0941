"""
Policy engine: pure validators and permission checks.

Every function here is side-effect free and total: validators return lists
of ``Violation`` records and checks return ``PolicyDecision`` values.
"""

from .cv_rules import (
    can_transition_status,
    validate_basic_details,
    validate_education,
    validate_experience,
    validate_layout,
    validate_projects,
    validate_skills,
    validate_social_profiles,
    validate_status,
    validate_title,
)
from .environment import (
    DEFAULT_ENVIRONMENT,
    PolicyEnvironment,
    get_rate_limit_config,
    is_development,
    is_production,
    should_require_email_verification,
)
from .permissions import has_permission, permissions_for
from .user_rules import (
    can_create_document,
    can_download,
    can_modify_document,
    can_share,
    can_view_document,
    validate_contact_number,
    validate_email,
    validate_password,
    validate_username,
)

__all__ = [
    "DEFAULT_ENVIRONMENT",
    "PolicyEnvironment",
    "can_create_document",
    "can_download",
    "can_modify_document",
    "can_share",
    "can_transition_status",
    "can_view_document",
    "get_rate_limit_config",
    "has_permission",
    "is_development",
    "is_production",
    "permissions_for",
    "should_require_email_verification",
    "validate_basic_details",
    "validate_contact_number",
    "validate_education",
    "validate_email",
    "validate_experience",
    "validate_layout",
    "validate_password",
    "validate_projects",
    "validate_skills",
    "validate_social_profiles",
    "validate_status",
    "validate_title",
    "validate_username",
]
