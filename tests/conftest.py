"""Shared pytest fixtures: account and CV factories, an in-memory data store and an API client."""

import os
import sys
from datetime import timedelta
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path so that `from app...` resolves without an install.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.main import create_application
from app.modules.cv_management.domain.models import Account, Document
from app.modules.cv_management.domain.rules.environment import PolicyEnvironment
from app.modules.cv_management.domain.services.cv_service import CVService
from app.modules.cv_management.domain.services.quota_service import QuotaEnforcer
from app.modules.cv_management.infrastructure.database.memory_data_store import MemoryDataStore
from app.modules.cv_management.presentation.dependencies import get_cv_service, get_data_store
from app.shared.config.settings import Settings, get_settings
from app.shared.core.security import SecurityManager

TEST_JWT_SECRET = "test-secret-key-for-cv-builder"


# ==============================================================================
# FACTORIES
# ==============================================================================

def make_account(**overrides: Any) -> Account:
    data: Dict[str, Any] = {
        "id": "user-1",
        "username": "jane_doe",
        "email": "jane@example.com",
        "role": "user",
        "is_active": True,
        "is_verified": True,
    }
    data.update(overrides)
    return Account.model_validate(data)


def make_document(**overrides: Any) -> Document:
    data: Dict[str, Any] = {
        "id": "cv-1",
        "user_id": "user-1",
        "title": "Backend Engineer",
        "layout": "modern",
        "status": "draft",
    }
    data.update(overrides)
    return Document.model_validate(data)


def cv_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "title": "Backend Engineer",
        "layout": "modern",
        "basic_details": {
            "full_name": "Jane Doe",
            "email": "jane@example.com",
            "phone": "+1 555 0100",
            "introduction": "Engineer who likes boring, reliable systems.",
        },
        "education": [
            {
                "degree_name": "BSc Computer Science",
                "institution": "State University",
                "start_date": "2014-09-01",
                "percentage": 82,
                "cgpa": 8.4,
            }
        ],
        "skills": [
            {"skill_name": "Python", "proficiency_percentage": 90, "category": "technical"},
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def account_factory():
    return make_account


@pytest.fixture
def document_factory():
    return make_document


@pytest.fixture
def payload_factory():
    return cv_payload


# ==============================================================================
# DATA STORE AND SERVICE
# ==============================================================================

@pytest.fixture
def data_store() -> MemoryDataStore:
    store = MemoryDataStore()
    store.insert("users", {
        "id": "user-1", "username": "jane_doe", "email": "jane@example.com",
        "role": "user", "is_active": True, "is_verified": True,
    })
    store.insert("users", {
        "id": "user-2", "username": "john_roe", "email": "john@example.com",
        "role": "user", "is_active": True, "is_verified": True,
    })
    store.insert("users", {
        "id": "premium-1", "username": "pat_premium", "email": "pat@example.com",
        "role": "premium", "is_active": True, "is_verified": True,
    })
    store.insert("users", {
        "id": "admin-1", "username": "ada_admin", "email": "ada@example.com",
        "role": "admin", "is_active": True, "is_verified": True,
    })
    store.insert("users", {
        "id": "unverified-1", "username": "una_new", "email": "una@example.com",
        "role": "user", "is_active": True, "is_verified": False,
    })
    store.insert("users", {
        "id": "oauth-1", "username": "olly_oauth", "email": "olly@example.com",
        "role": "user", "is_active": True, "is_verified": False, "oauth_provider": "google",
    })
    store.insert("users", {
        "id": "inactive-1", "username": "ivan_off", "email": "ivan@example.com",
        "role": "user", "is_active": False, "is_verified": True,
    })
    return store


@pytest.fixture
def policy_env() -> PolicyEnvironment:
    return PolicyEnvironment(app_env="test")


@pytest.fixture
def cv_service(data_store, policy_env) -> CVService:
    return CVService(data_store, QuotaEnforcer(), policy_env)


@pytest.fixture
def published_cv(cv_service, data_store) -> Dict[str, Any]:
    """A published CV owned by user-1."""
    created = cv_service.create_cv("user-1", cv_payload())
    cv_id = created["cv"]["id"]
    data_store.update("cvs", cv_id, {"status": "published"})
    return data_store.get("cvs", cv_id)


# ==============================================================================
# API
# ==============================================================================

@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        ENVIRONMENT="test",
        DEBUG=False,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="text",
        DATA_STORE_BACKEND="memory",
        JWT_SECRET_KEY=TEST_JWT_SECRET,
    )


@pytest.fixture
def api_app(test_settings, data_store):
    application = create_application(test_settings)
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_data_store] = lambda: data_store
    application.dependency_overrides[get_cv_service] = lambda: CVService(
        data_store,
        QuotaEnforcer(test_settings.quota_limits()),
        test_settings.policy_environment(),
    )
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(api_app):
    with TestClient(api_app) as test_client:
        yield test_client


@pytest.fixture
def security_manager(test_settings) -> SecurityManager:
    return SecurityManager(test_settings)


@pytest.fixture
def auth_headers(security_manager):
    """Build bearer headers for an account id."""

    def _headers(account_id: str = "user-1", expires_delta: Optional[timedelta] = None) -> Dict[str, str]:
        token = security_manager.create_access_token(account_id, expires_delta=expires_delta)
        return {"Authorization": f"Bearer {token}"}

    return _headers
