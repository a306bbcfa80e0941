# 📄 File: app/modules/cv_management/domain/constants.py
# 🧭 Purpose (Layman Explanation):
# Holds the fixed lists and numbers the CV builder plays by: which roles exist, which layouts a CV
# can use, how long a username may be, and how many CVs or downloads each kind of user gets.
# 🧪 Purpose (Technical Summary):
# Enumerations and numeric thresholds shared by the policy rules, the quota enforcer, the
# application service and the API layer, so every caller builds consistent messages and limits.
# 🔗 Dependencies:
# re, enum
# 🔄 Connected Modules / Calls From:
# domain.rules.*, domain.services.*, presentation schemas, settings defaults

import re
from enum import Enum


class UserRole(str, Enum):
    """Account roles. The standard role is stored as ``"user"``."""
    STANDARD = "user"
    PREMIUM = "premium"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value) -> "UserRole":
        """Map a stored or client-supplied role string onto the enum."""
        if isinstance(value, cls):
            return value
        if value == "standard":
            return cls.STANDARD
        return cls(value)


class DocumentStatus(str, Enum):
    """CV lifecycle status"""
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class CVLayout(str, Enum):
    """CV rendering layouts"""
    MODERN = "modern"
    CLASSIC = "classic"
    CREATIVE = "creative"


class SkillCategory(str, Enum):
    TECHNICAL = "technical"
    INTERPERSONAL = "interpersonal"
    LANGUAGE = "language"


class OAuthProvider(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"


class SharePlatform(str, Enum):
    """Channels a CV can be shared through"""
    EMAIL = "email"
    LINKEDIN = "linkedin"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    WHATSAPP = "whatsapp"


class QuotaAction(str, Enum):
    """Actions counted against a role's quota"""
    CREATE_CV = "create_cv"
    DOWNLOAD = "download"
    SHARE = "share"


# Data store table names
USERS_TABLE = "users"
CVS_TABLE = "cvs"
CV_DOWNLOADS_TABLE = "cv_downloads"
CV_SHARES_TABLE = "cv_shares"
SECTION_TABLES = {
    "basic_details": "basic_details",
    "education": "education",
    "experience": "experience",
    "projects": "projects",
    "skills": "skills",
    "social_profiles": "social_profiles",
}

# ==============================================================================
# VALIDATION RULES
# ==============================================================================

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = re.compile(r'^[a-zA-Z0-9_]+$')

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128
# Prefix match: after the lookaheads only the first character is checked against the class.
PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]')
PASSWORD_SPECIAL_CHARACTERS = "@$!%*?&"

EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
PHONE_PATTERN = re.compile(r'\+?[\d\s\-()]+')

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 1000

CV_TITLE_MIN_LENGTH = 3
CV_TITLE_MAX_LENGTH = 100

SKILL_NAME_MIN_LENGTH = 2
SKILL_NAME_MAX_LENGTH = 50

PROJECT_TITLE_MIN_LENGTH = 3
PROJECT_TITLE_MAX_LENGTH = 100

PERCENTAGE_MIN = 0
PERCENTAGE_MAX = 100
CGPA_MIN = 0
CGPA_MAX = 10
TEAM_SIZE_MIN = 1

PAGINATION_DEFAULT_PAGE = 1
PAGINATION_DEFAULT_LIMIT = 10
PAGINATION_MAX_LIMIT = 100

DEFAULT_RATE_LIMIT_WINDOW_MS = 15 * 60 * 1000
DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100

# ==============================================================================
# BUSINESS RULES
# ==============================================================================

MAX_CVS_PER_USER = 10
MAX_EDUCATION_ENTRIES = 10
MAX_EXPERIENCE_ENTRIES = 20
MAX_PROJECT_ENTRIES = 15
MAX_SKILL_ENTRIES = 50
MAX_SOCIAL_PROFILE_ENTRIES = 10

FREE_DOWNLOADS_PER_MONTH = 3
FREE_SHARES_PER_MONTH = 5
PREMIUM_DOWNLOADS_PER_MONTH = 50
PREMIUM_SHARES_PER_MONTH = 100

UNLIMITED_ROLES = frozenset({UserRole.PREMIUM, UserRole.ADMIN})

# Allowed moves when the status state machine is enforced
STATUS_TRANSITIONS = {
    DocumentStatus.DRAFT: frozenset({DocumentStatus.PUBLISHED, DocumentStatus.ARCHIVED}),
    DocumentStatus.PUBLISHED: frozenset({DocumentStatus.ARCHIVED, DocumentStatus.DRAFT}),
    DocumentStatus.ARCHIVED: frozenset(),
}

# Role permission grants; an ":unlimited" grant satisfies the matching ":own" action
ROLE_PERMISSIONS = {
    UserRole.STANDARD: frozenset({
        "read:own", "write:own", "delete:own", "download:own", "share:own",
    }),
    UserRole.PREMIUM: frozenset({
        "read:own", "write:own", "delete:own", "download:unlimited", "share:unlimited",
    }),
    UserRole.ADMIN: frozenset({
        "read:all", "write:all", "delete:all", "download:unlimited", "share:unlimited",
        "manage:users", "manage:system",
    }),
}
