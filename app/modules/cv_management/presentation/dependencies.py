# 📄 File: app/modules/cv_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Provides the building blocks every CV endpoint needs: working out who is calling from their
# login token, checking their plan allows the action, and handing over a CV service wired to the
# right database.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies for the CV module: bearer token to account id (python-jose through
# SecurityManager), role permission guards per route, DataStore backend selection from settings,
# and CVService construction with the configured PolicyEnvironment and QuotaLimits.
# 🔗 Dependencies:
# FastAPI, app.shared.config, app.shared.core.security, cv_management infrastructure
# 🔄 Connected Modules / Calls From:
# app.modules.cv_management.presentation.api.v1.cvs, tests (dependency overrides)

import logging
from functools import lru_cache
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.shared.config.settings import Settings, get_settings
from app.shared.config.supabase import get_supabase_client
from app.shared.core.exceptions import AuthenticationError, AuthorizationError
from app.shared.core.security import SecurityManager
from app.shared.utils.logging import bind_user

from ..domain.repositories.data_store import DataStore
from ..domain.rules.permissions import has_permission
from ..domain.services.cv_service import CVService
from ..domain.services.quota_service import QuotaEnforcer
from ..infrastructure.database.memory_data_store import MemoryDataStore
from ..infrastructure.database.supabase_data_store import SupabaseDataStore

logger = logging.getLogger(__name__)

# auto_error=False so a missing header goes through AuthenticationError handling
security = HTTPBearer(auto_error=False)


@lru_cache()
def get_data_store() -> DataStore:
    """Process-wide data store chosen by DATA_STORE_BACKEND."""
    settings = get_settings()
    if settings.DATA_STORE_BACKEND == "memory":
        logger.info("Using in-memory data store")
        return MemoryDataStore()

    logger.info("Using Supabase data store")
    return SupabaseDataStore(get_supabase_client(), max_retries=settings.COUNTER_UPDATE_RETRIES)


def get_security_manager(settings: Settings = Depends(get_settings)) -> SecurityManager:
    return SecurityManager(settings)


def get_current_account_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    security_manager: SecurityManager = Depends(get_security_manager),
) -> str:
    """
    Resolve the caller's account id from the bearer token.

    Raises:
        AuthenticationError: If the header is missing or the token is invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    account_id = security_manager.get_subject(credentials.credentials)
    bind_user(account_id)
    return account_id


def get_cv_service(
    data_store: DataStore = Depends(get_data_store),
    settings: Settings = Depends(get_settings),
) -> CVService:
    return CVService(
        data_store=data_store,
        quota_enforcer=QuotaEnforcer(settings.quota_limits()),
        env=settings.policy_environment(),
    )


def require_permission(action: str) -> Callable[..., str]:
    """
    Build a dependency that admits the caller only if their role grants ``action``.

    Args:
        action: Permission string such as ``write:own`` or ``download:own``

    Returns:
        Dependency resolving to the caller's account id
    """

    def permission_checker(
        account_id: str = Depends(get_current_account_id),
        service: CVService = Depends(get_cv_service),
    ) -> str:
        account = service.get_account(account_id)
        if not has_permission(account.role, action):
            logger.warning(f"Permission {action} denied for user {account_id} ({account.role.value})")
            raise AuthorizationError(
                f"Permission denied for action: {action}",
                required_action=action,
                user_id=account_id,
            )
        return account_id

    return permission_checker
