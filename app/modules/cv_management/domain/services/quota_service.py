# 📄 File: app/modules/cv_management/domain/services/quota_service.py
# 🧭 Purpose (Layman Explanation):
# Decides whether someone has used up their allowance: how many CVs they may keep and how many
# downloads and shares they get each month. It also explains what to do (upgrade) when they run out.
# 🧪 Purpose (Technical Summary):
# Role-based quota enforcement over pre-computed usage counts. Comparisons are strict
# less-than against the limit; premium and admin roles have no CV cap. Pure and non-raising.
# 🔗 Dependencies:
# dataclasses, datetime, domain.constants, domain.models
# 🔄 Connected Modules / Calls From:
# cv_service.py, presentation api (usage endpoint), settings (limit overrides), tests

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from ..constants import (
    FREE_DOWNLOADS_PER_MONTH,
    FREE_SHARES_PER_MONTH,
    MAX_CVS_PER_USER,
    PREMIUM_DOWNLOADS_PER_MONTH,
    PREMIUM_SHARES_PER_MONTH,
    QuotaAction,
    UNLIMITED_ROLES,
    UserRole,
)
from ..models import Account, PolicyDecision, UsageStats

RoleLike = Union[Account, UserRole, str]

_ACTION_NOUNS = {
    QuotaAction.CREATE_CV: "CVs",
    QuotaAction.DOWNLOAD: "downloads",
    QuotaAction.SHARE: "shares",
}


@dataclass(frozen=True)
class QuotaLimits:
    """Numeric limits per role. ``None`` means unlimited."""

    max_cvs_per_user: int = MAX_CVS_PER_USER
    free_downloads_per_month: int = FREE_DOWNLOADS_PER_MONTH
    free_shares_per_month: int = FREE_SHARES_PER_MONTH
    premium_downloads_per_month: int = PREMIUM_DOWNLOADS_PER_MONTH
    premium_shares_per_month: int = PREMIUM_SHARES_PER_MONTH


DEFAULT_LIMITS = QuotaLimits()


def _role_of(subject: RoleLike) -> UserRole:
    if isinstance(subject, Account):
        return subject.role
    return UserRole.parse(subject)


def current_month_start(now: Optional[datetime] = None) -> datetime:
    """
    First instant of the current calendar month in server-local time.

    Args:
        now: Reference time; defaults to the current local time

    Returns:
        Timezone-aware local datetime at day 1, 00:00:00
    """
    reference = (now or datetime.now()).astimezone()
    # Resolve the offset at day 1, not at the reference time
    return datetime(reference.year, reference.month, 1).astimezone()


class QuotaEnforcer:
    """
    Combines a caller's role with a usage count to decide whether one more
    action may proceed.
    """

    def __init__(self, limits: QuotaLimits = DEFAULT_LIMITS):
        self.limits = limits

    def limit_for(self, role: RoleLike, action: QuotaAction) -> Optional[int]:
        """Effective limit for a role and action, ``None`` when unlimited."""
        role = _role_of(role)
        premium_tier = role in UNLIMITED_ROLES

        if action == QuotaAction.CREATE_CV:
            return None if premium_tier else self.limits.max_cvs_per_user
        if action == QuotaAction.DOWNLOAD:
            return self.limits.premium_downloads_per_month if premium_tier else self.limits.free_downloads_per_month
        if action == QuotaAction.SHARE:
            return self.limits.premium_shares_per_month if premium_tier else self.limits.free_shares_per_month
        raise ValueError(f"Unknown quota action: {action}")

    def check(self, subject: RoleLike, action: QuotaAction, count: int) -> PolicyDecision:
        role = _role_of(subject)
        limit = self.limit_for(role, action)

        if limit is None or count < limit:
            return PolicyDecision.allow()

        return PolicyDecision.deny(self.denial_reason(role, action, limit))

    @staticmethod
    def denial_reason(role: RoleLike, action: QuotaAction, limit: int) -> str:
        noun = _ACTION_NOUNS[action]
        if action == QuotaAction.CREATE_CV:
            reason = f"Maximum CV limit reached ({limit})."
        elif action == QuotaAction.DOWNLOAD:
            reason = f"Monthly download limit reached ({limit})."
        else:
            reason = f"Monthly share limit reached ({limit})."

        if _role_of(role) == UserRole.STANDARD:
            reason += f" Upgrade to premium for more {noun}."
        return reason

    def can_user_create_more_cvs(self, account: RoleLike, current_cv_count: int) -> PolicyDecision:
        return self.check(account, QuotaAction.CREATE_CV, current_cv_count)

    def can_user_download_more(self, account: RoleLike, downloads_this_month: int) -> PolicyDecision:
        return self.check(account, QuotaAction.DOWNLOAD, downloads_this_month)

    def can_user_share_more(self, account: RoleLike, shares_this_month: int) -> PolicyDecision:
        return self.check(account, QuotaAction.SHARE, shares_this_month)

    def usage_summary(self, account: RoleLike, stats: UsageStats) -> Dict[str, Any]:
        """Usage next to limits and remaining allowance, for display."""
        used = {
            QuotaAction.CREATE_CV: stats.total_cvs,
            QuotaAction.DOWNLOAD: stats.downloads_this_month,
            QuotaAction.SHARE: stats.shares_this_month,
        }
        summary: Dict[str, Any] = {"role": _role_of(account).value}
        for action, count in used.items():
            limit = self.limit_for(account, action)
            summary[action.value] = {
                "used": count,
                "limit": limit,
                "remaining": None if limit is None else max(limit - count, 0),
            }
        return summary


_default_enforcer = QuotaEnforcer()


def can_user_create_more_cvs(account: RoleLike, current_cv_count: int) -> PolicyDecision:
    return _default_enforcer.can_user_create_more_cvs(account, current_cv_count)


def can_user_download_more(account: RoleLike, downloads_this_month: int) -> PolicyDecision:
    return _default_enforcer.can_user_download_more(account, downloads_this_month)


def can_user_share_more(account: RoleLike, shares_this_month: int) -> PolicyDecision:
    return _default_enforcer.can_user_share_more(account, shares_this_month)
