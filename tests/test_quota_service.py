"""Tests for role based quota enforcement."""

import time
from datetime import datetime, timedelta, timezone

import pytest

from app.modules.cv_management.domain.constants import QuotaAction, UserRole
from app.modules.cv_management.domain.models import UsageStats
from app.modules.cv_management.domain.services.quota_service import (
    QuotaEnforcer,
    QuotaLimits,
    can_user_create_more_cvs,
    can_user_download_more,
    can_user_share_more,
    current_month_start,
)


class TestCVLimit:
    def test_standard_user_at_limit_is_denied(self, account_factory):
        decision = can_user_create_more_cvs(account_factory(), 10)
        assert decision.denied
        assert "10" in decision.reason
        assert "Upgrade to premium" in decision.reason

    def test_standard_user_below_limit(self, account_factory):
        assert can_user_create_more_cvs(account_factory(), 9).allowed

    @pytest.mark.parametrize("role", ["premium", "admin"])
    def test_premium_tiers_have_no_cv_cap(self, account_factory, role):
        assert can_user_create_more_cvs(account_factory(role=role), 10_000).allowed

    def test_accepts_plain_role_values(self):
        assert can_user_create_more_cvs("standard", 10).denied
        assert can_user_create_more_cvs(UserRole.PREMIUM, 10).allowed


class TestMonthlyLimits:
    @pytest.mark.parametrize("role,allowed_at,denied_at", [
        ("user", 2, 3),
        ("premium", 49, 50),
        ("admin", 49, 50),
    ])
    def test_download_boundaries(self, account_factory, role, allowed_at, denied_at):
        account = account_factory(role=role)
        assert can_user_download_more(account, allowed_at).allowed
        assert can_user_download_more(account, denied_at).denied

    @pytest.mark.parametrize("role,allowed_at,denied_at", [
        ("user", 4, 5),
        ("premium", 99, 100),
        ("admin", 99, 100),
    ])
    def test_share_boundaries(self, account_factory, role, allowed_at, denied_at):
        account = account_factory(role=role)
        assert can_user_share_more(account, allowed_at).allowed
        assert can_user_share_more(account, denied_at).denied

    def test_upgrade_hint_only_for_standard_users(self, account_factory):
        standard = can_user_download_more(account_factory(), 3)
        premium = can_user_download_more(account_factory(role="premium"), 50)
        assert standard.reason == "Monthly download limit reached (3). Upgrade to premium for more downloads."
        assert premium.reason == "Monthly download limit reached (50)."

    def test_share_reason(self, account_factory):
        decision = can_user_share_more(account_factory(), 5)
        assert decision.reason == "Monthly share limit reached (5). Upgrade to premium for more shares."


class TestQuotaEnforcer:
    def test_custom_limits(self, account_factory):
        enforcer = QuotaEnforcer(QuotaLimits(max_cvs_per_user=2, free_downloads_per_month=1))
        account = account_factory()
        assert enforcer.can_user_create_more_cvs(account, 1).allowed
        assert enforcer.can_user_create_more_cvs(account, 2).denied
        assert enforcer.can_user_download_more(account, 1).reason.startswith("Monthly download limit reached (1).")

    def test_limit_for(self):
        enforcer = QuotaEnforcer()
        assert enforcer.limit_for("user", QuotaAction.CREATE_CV) == 10
        assert enforcer.limit_for("admin", QuotaAction.CREATE_CV) is None
        assert enforcer.limit_for("premium", QuotaAction.SHARE) == 100

    def test_usage_summary(self, account_factory):
        stats = UsageStats(total_cvs=4, published_cvs=1, downloads_this_month=5, shares_this_month=1)
        summary = QuotaEnforcer().usage_summary(account_factory(), stats)
        assert summary["role"] == "user"
        assert summary["create_cv"] == {"used": 4, "limit": 10, "remaining": 6}
        assert summary["download"] == {"used": 5, "limit": 3, "remaining": 0}
        assert summary["share"] == {"used": 1, "limit": 5, "remaining": 4}

    def test_usage_summary_unlimited(self, account_factory):
        summary = QuotaEnforcer().usage_summary(account_factory(role="premium"), UsageStats(total_cvs=40))
        assert summary["create_cv"] == {"used": 40, "limit": None, "remaining": None}


@pytest.fixture
def eastern_time(monkeypatch):
    """Run a test under US Eastern time with its DST rules."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "EST+05EDT,M3.2.0,M11.1.0")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class TestMonthWindow:
    def test_current_month_start(self):
        reference = datetime(2024, 3, 17, 15, 45, 12, tzinfo=timezone.utc).astimezone()
        start = current_month_start(reference)
        assert (start.year, start.month, start.day) == (reference.year, reference.month, 1)
        assert (start.hour, start.minute, start.second, start.microsecond) == (0, 0, 0, 0)
        assert start.tzinfo is not None
        assert start <= reference

    def test_month_start_uses_offset_of_day_one(self, eastern_time):
        # DST starts on 8 March 2026, so day 1 is still on standard time
        start = current_month_start(datetime(2026, 3, 20, 12))
        assert start.replace(tzinfo=None) == datetime(2026, 3, 1)
        assert start.utcoffset() == timedelta(hours=-5)

    def test_month_start_before_dst_ends(self, eastern_time):
        # DST ends on 1 November 2026 at 02:00, so midnight is still daylight time
        start = current_month_start(datetime(2026, 11, 20, 12))
        assert start.replace(tzinfo=None) == datetime(2026, 11, 1)
        assert start.utcoffset() == timedelta(hours=-4)

    def test_aware_reference_is_converted_to_local_month(self, eastern_time):
        # 03:00 UTC on 1 April is still 31 March in New York
        start = current_month_start(datetime(2026, 4, 1, 3, tzinfo=timezone.utc))
        assert start.replace(tzinfo=None) == datetime(2026, 3, 1)
