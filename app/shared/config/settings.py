# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and provides them to the rest of the CV Builder in an organized way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading, validation
# and type safety. Builds the PolicyEnvironment and QuotaLimits values handed to the
# pure policy layer so no rule reads the process environment directly.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - app.shared.config.supabase
# - app.shared.core.security
# - cv_management presentation dependencies

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.modules.cv_management.domain.constants import (
    DEFAULT_RATE_LIMIT_MAX_REQUESTS,
    DEFAULT_RATE_LIMIT_WINDOW_MS,
    FREE_DOWNLOADS_PER_MONTH,
    FREE_SHARES_PER_MONTH,
    MAX_CVS_PER_USER,
    PREMIUM_DOWNLOADS_PER_MONTH,
    PREMIUM_SHARES_PER_MONTH,
)
from app.modules.cv_management.domain.rules.environment import PolicyEnvironment
from app.modules.cv_management.domain.services.quota_service import QuotaLimits


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="CV Builder API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="CV builder backend with policy and quota enforcement",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json|text)")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")

    # =========================================================================
    # DATA STORE
    # =========================================================================

    DATA_STORE_BACKEND: str = Field(default="supabase", description="Data store backend (supabase|memory)")
    SUPABASE_URL: Optional[str] = Field(None, description="Supabase project URL")
    SUPABASE_ANON_KEY: Optional[str] = Field(None, description="Supabase anonymous key")
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = Field(None, description="Supabase service role key")
    COUNTER_UPDATE_RETRIES: int = Field(default=5, description="Compare-and-set retries for counters")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(default="change-me", description="JWT secret key")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # =========================================================================
    # POLICY SWITCHES
    # =========================================================================

    REQUIRE_EMAIL_VERIFICATION: Optional[bool] = Field(
        None,
        description="Override for email verification (defaults to production only)"
    )
    REQUIRE_PUBLISHED_FOR_DOWNLOAD: bool = Field(
        default=False,
        description="Only published CVs may be downloaded"
    )
    ENFORCE_STATUS_TRANSITIONS: bool = Field(
        default=False,
        description="Restrict CV status changes to the draft/published/archived lifecycle"
    )
    RATE_LIMIT_WINDOW_MS: int = Field(default=DEFAULT_RATE_LIMIT_WINDOW_MS, description="Rate limit window")
    RATE_LIMIT_MAX_REQUESTS: int = Field(
        default=DEFAULT_RATE_LIMIT_MAX_REQUESTS,
        description="Max requests per rate limit window"
    )

    # =========================================================================
    # BUSINESS LIMITS
    # =========================================================================

    MAX_CVS_PER_USER: int = Field(default=MAX_CVS_PER_USER, description="CV cap for standard users")
    FREE_DOWNLOADS_PER_MONTH: int = Field(default=FREE_DOWNLOADS_PER_MONTH, description="Standard download limit")
    FREE_SHARES_PER_MONTH: int = Field(default=FREE_SHARES_PER_MONTH, description="Standard share limit")
    PREMIUM_DOWNLOADS_PER_MONTH: int = Field(
        default=PREMIUM_DOWNLOADS_PER_MONTH,
        description="Premium and admin download limit"
    )
    PREMIUM_SHARES_PER_MONTH: int = Field(
        default=PREMIUM_SHARES_PER_MONTH,
        description="Premium and admin share limit"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = ["development", "test", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("LOG_FORMAT must be json or text")
        return v.lower()

    @field_validator("DATA_STORE_BACKEND")
    @classmethod
    def validate_data_store_backend(cls, v: str) -> str:
        if v.lower() not in ("supabase", "memory"):
            raise ValueError("DATA_STORE_BACKEND must be supabase or memory")
        return v.lower()

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        return self.ENVIRONMENT == "test"

    def policy_environment(self) -> PolicyEnvironment:
        """Snapshot of the policy switches for the rule layer."""
        return PolicyEnvironment(
            app_env=self.ENVIRONMENT,
            require_email_verification=self.REQUIRE_EMAIL_VERIFICATION,
            require_published_for_download=self.REQUIRE_PUBLISHED_FOR_DOWNLOAD,
            enforce_status_transitions=self.ENFORCE_STATUS_TRANSITIONS,
            rate_limit_window_ms=self.RATE_LIMIT_WINDOW_MS,
            rate_limit_max_requests=self.RATE_LIMIT_MAX_REQUESTS,
        )

    def quota_limits(self) -> QuotaLimits:
        return QuotaLimits(
            max_cvs_per_user=self.MAX_CVS_PER_USER,
            free_downloads_per_month=self.FREE_DOWNLOADS_PER_MONTH,
            free_shares_per_month=self.FREE_SHARES_PER_MONTH,
            premium_downloads_per_month=self.PREMIUM_DOWNLOADS_PER_MONTH,
            premium_shares_per_month=self.PREMIUM_SHARES_PER_MONTH,
        )


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
