# 📄 File: app/modules/cv_management/domain/rules/user_rules.py
# 🧭 Purpose (Layman Explanation):
# The checks for everything about a person's account: is the username, email, password and phone
# number acceptable, and is this person allowed to create, download or share a given CV.
# 🧪 Purpose (Technical Summary):
# Pure account-field validators returning ordered violation lists, and ownership/state checks
# returning PolicyDecision values. Nothing here raises, logs or performs I/O.
# 🔗 Dependencies:
# domain.constants, domain.models, domain.rules.environment, app.shared.utils.validators
# 🔄 Connected Modules / Calls From:
# validation_service.py, cv_service.py, tests

from typing import Any, List, Optional

from app.shared.utils.validators import is_blank, matches

from ..constants import (
    DocumentStatus,
    EMAIL_PATTERN,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PASSWORD_PATTERN,
    PHONE_PATTERN,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    USERNAME_PATTERN,
)
from ..models import Account, Document, PolicyDecision, Violation
from .environment import DEFAULT_ENVIRONMENT, PolicyEnvironment

# Denial reasons
ACCOUNT_NOT_ACTIVE = "User account is not active"
VERIFICATION_REQUIRED = "Email verification required"
DOWNLOAD_NOT_OWNER = "You can only download your own CVs"
DOWNLOAD_NOT_PUBLISHED = "CV must be published before downloading"
SHARE_NOT_OWNER = "You can only share your own CVs"
SHARE_NOT_PUBLISHED = "CV must be published before sharing"
MODIFY_NOT_OWNER = "You can only modify your own CVs"
VIEW_NOT_OWNER = "You can only view your own CVs"


# ==============================================================================
# FIELD VALIDATORS
# ==============================================================================

def validate_username(username: Any) -> List[Violation]:
    """
    Validate a username.

    Required; 3-30 characters after trimming; letters, digits and underscores only.
    """
    if is_blank(username):
        return [Violation("username", "Username is required")]

    errors: List[Violation] = []
    trimmed = username.strip()

    if len(trimmed) < USERNAME_MIN_LENGTH:
        errors.append(Violation(
            "username",
            f"Username must be at least {USERNAME_MIN_LENGTH} characters long"
        ))

    if len(trimmed) > USERNAME_MAX_LENGTH:
        errors.append(Violation(
            "username",
            f"Username must not exceed {USERNAME_MAX_LENGTH} characters"
        ))

    if not USERNAME_PATTERN.match(trimmed):
        errors.append(Violation(
            "username",
            "Username can only contain letters, numbers, and underscores"
        ))

    return errors


def validate_email(email: Any, field: str = "email") -> List[Violation]:
    if is_blank(email):
        return [Violation(field, "Email is required")]

    if not matches(EMAIL_PATTERN, email):
        return [Violation(field, "Please provide a valid email address")]

    return []


def validate_password(password: Any) -> List[Violation]:
    """
    Validate password strength.

    Length 8-128 plus at least one lowercase, uppercase, digit and special
    character from ``@$!%*?&``. The pattern is applied as a prefix match, so
    only the first character is checked against the allowed class.
    """
    if not isinstance(password, str) or len(password) == 0:
        return [Violation("password", "Password is required")]

    errors: List[Violation] = []

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(Violation(
            "password",
            f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        ))

    if len(password) > PASSWORD_MAX_LENGTH:
        errors.append(Violation(
            "password",
            f"Password must not exceed {PASSWORD_MAX_LENGTH} characters"
        ))

    if not PASSWORD_PATTERN.match(password):
        errors.append(Violation(
            "password",
            "Password must contain at least one uppercase letter, one lowercase letter, "
            "one number, and one special character"
        ))

    return errors


def validate_contact_number(contact_number: Optional[Any], field: str = "contact_number") -> List[Violation]:
    """Optional field; an empty value is valid."""
    if contact_number is None or contact_number == "":
        return []

    if not matches(PHONE_PATTERN, contact_number):
        return [Violation(field, "Please provide a valid contact number")]

    return []


# ==============================================================================
# OWNERSHIP AND STATE CHECKS
# ==============================================================================

def can_create_document(account: Account) -> PolicyDecision:
    if not account.is_active:
        return PolicyDecision.deny(ACCOUNT_NOT_ACTIVE)

    # OAuth accounts count as verified
    if not account.is_oauth and not account.is_verified:
        return PolicyDecision.deny(VERIFICATION_REQUIRED)

    return PolicyDecision.allow()


def can_download(
    account: Account,
    document: Document,
    env: PolicyEnvironment = DEFAULT_ENVIRONMENT,
) -> PolicyDecision:
    """
    Owners may download their CVs.

    Drafts are downloadable unless ``env.require_published_for_download`` is set.
    """
    if not document.is_owned_by(account.id):
        return PolicyDecision.deny(DOWNLOAD_NOT_OWNER)

    if env.require_published_for_download and document.status != DocumentStatus.PUBLISHED:
        return PolicyDecision.deny(DOWNLOAD_NOT_PUBLISHED)

    return PolicyDecision.allow()


def can_share(account: Account, document: Document) -> PolicyDecision:
    if not document.is_owned_by(account.id):
        return PolicyDecision.deny(SHARE_NOT_OWNER)

    if document.status != DocumentStatus.PUBLISHED:
        return PolicyDecision.deny(SHARE_NOT_PUBLISHED)

    return PolicyDecision.allow()


def can_modify_document(account: Account, document: Document) -> PolicyDecision:
    """Owners and admins may update or delete a CV."""
    if account.is_admin or document.is_owned_by(account.id):
        return PolicyDecision.allow()
    return PolicyDecision.deny(MODIFY_NOT_OWNER)


def can_view_document(account: Account, document: Document) -> PolicyDecision:
    """Public CVs are readable by any caller; private ones by the owner and admins."""
    if document.is_public or account.is_admin or document.is_owned_by(account.id):
        return PolicyDecision.allow()
    return PolicyDecision.deny(VIEW_NOT_OWNER)
