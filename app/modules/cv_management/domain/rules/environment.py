"""
Explicit runtime environment for policy decisions.

Rules that depend on deployment configuration (email verification, the
download publish gate, status state machine, rate limits) take a
``PolicyEnvironment`` argument instead of reading process environment
variables, so every rule stays a pure function of its inputs.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..constants import (
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_MS,
)

PRODUCTION = "production"
DEVELOPMENT = "development"


@dataclass(frozen=True)
class PolicyEnvironment:
    """Deployment switches consumed by the policy engine."""

    app_env: str = DEVELOPMENT
    require_email_verification: Optional[bool] = None
    require_published_for_download: bool = False
    enforce_status_transitions: bool = False
    rate_limit_window_ms: int = DEFAULT_RATE_LIMIT_WINDOW_MS
    rate_limit_max_requests: int = DEFAULT_RATE_LIMIT_MAX_REQUESTS


DEFAULT_ENVIRONMENT = PolicyEnvironment()


def is_production(env: PolicyEnvironment) -> bool:
    return env.app_env == PRODUCTION


def is_development(env: PolicyEnvironment) -> bool:
    return env.app_env == DEVELOPMENT


def should_require_email_verification(env: PolicyEnvironment) -> bool:
    """Verification is mandatory in production unless explicitly overridden."""
    if env.require_email_verification is not None:
        return env.require_email_verification
    return is_production(env)


def get_rate_limit_config(env: PolicyEnvironment) -> Dict[str, object]:
    return {
        "window_ms": env.rate_limit_window_ms,
        "max": env.rate_limit_max_requests,
        "skip_successful_requests": False,
    }
