"""Tests for role grants and the policy environment switches."""

import pytest

from app.modules.cv_management.domain.constants import UserRole
from app.modules.cv_management.domain.rules.environment import (
    PolicyEnvironment,
    get_rate_limit_config,
    is_development,
    is_production,
    should_require_email_verification,
)
from app.modules.cv_management.domain.rules.permissions import has_permission, permissions_for


class TestPermissions:
    def test_standard_user_grants(self):
        assert has_permission("user", "download:own")
        assert not has_permission("user", "download:unlimited")
        assert not has_permission("user", "read:all")

    def test_unlimited_grant_satisfies_own(self):
        assert has_permission(UserRole.PREMIUM, "download:own")
        assert has_permission("premium", "share:own")
        assert not has_permission("premium", "manage:users")

    def test_admin_grants(self):
        assert has_permission("admin", "manage:system")
        assert has_permission("admin", "write:all")
        assert has_permission("admin", "share:own")

    def test_all_grant_satisfies_own(self):
        assert has_permission("admin", "read:own")
        assert has_permission("admin", "write:own")
        assert has_permission("admin", "delete:own")
        assert not has_permission("user", "write:all")

    def test_standard_alias(self):
        assert permissions_for("standard") == permissions_for("user")

    @pytest.mark.parametrize("role", ["guest", None, 7])
    def test_unknown_role_has_no_grants(self, role):
        assert permissions_for(role) == frozenset()
        assert not has_permission(role, "read:own")


class TestPolicyEnvironment:
    def test_defaults(self):
        env = PolicyEnvironment()
        assert is_development(env)
        assert not is_production(env)

    def test_email_verification_follows_production(self):
        assert should_require_email_verification(PolicyEnvironment(app_env="production"))
        assert not should_require_email_verification(PolicyEnvironment(app_env="development"))

    def test_email_verification_override(self):
        env = PolicyEnvironment(app_env="production", require_email_verification=False)
        assert not should_require_email_verification(env)
        env = PolicyEnvironment(app_env="test", require_email_verification=True)
        assert should_require_email_verification(env)

    def test_rate_limit_config(self):
        env = PolicyEnvironment(rate_limit_window_ms=60_000, rate_limit_max_requests=5)
        assert get_rate_limit_config(env) == {
            "window_ms": 60_000,
            "max": 5,
            "skip_successful_requests": False,
        }
