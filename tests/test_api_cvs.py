"""API tests for the CV endpoints, health checks and error envelope."""

from datetime import timedelta

import pytest

from app.modules.cv_management.presentation.dependencies import require_permission
from app.shared.core.exceptions import AuthorizationError, NotFoundError


def _create(client, auth_headers, payload, account_id="user-1"):
    return client.post("/api/v1/cvs", json=payload, headers=auth_headers(account_id))


def _publish(client, auth_headers, cv_id, account_id="user-1"):
    return client.patch(f"/api/v1/cvs/{cv_id}", json={"status": "published"}, headers=auth_headers(account_id))


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["service"] == "cv-builder-api"
        assert body["environment"] == "test"

    def test_ready_with_memory_backend(self, client):
        response = client.get("/api/v1/health/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"


class TestAuthentication:
    def test_missing_token(self, client, payload_factory):
        response = client.post("/api/v1/cvs", json=payload_factory())
        assert response.status_code == 401
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "AUTHENTICATION_ERROR"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token(self, client, payload_factory):
        response = client.post("/api/v1/cvs", json=payload_factory(), headers={"Authorization": "Bearer nonsense"})
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Could not validate credentials"

    def test_expired_token(self, client, auth_headers, payload_factory):
        headers = auth_headers("user-1", expires_delta=timedelta(minutes=-5))
        response = client.post("/api/v1/cvs", json=payload_factory(), headers=headers)
        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Token expired"


class TestCreate:
    def test_create_cv(self, client, auth_headers, payload_factory):
        response = _create(client, auth_headers, payload_factory())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "CV created successfully"
        assert body["data"]["cv"]["status"] == "draft"
        assert body["data"]["basic_details"]["full_name"] == "Jane Doe"

    def test_validation_error_shape(self, client, auth_headers):
        response = _create(client, auth_headers, {"title": "ab", "layout": "modern"})

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert {"field": "title", "message": "CV title must be at least 3 characters long"} in error["details"]["violations"]
        assert response.headers["X-Error-Code"] == "VALIDATION_ERROR"

    def test_malformed_body(self, client, auth_headers):
        response = client.post(
            "/api/v1/cvs",
            json={"title": "Backend", "layout": "modern", "education": "not-a-list"},
            headers=auth_headers(),
        )
        assert response.status_code == 422
        violations = response.json()["error"]["details"]["violations"]
        assert violations[0]["field"].startswith("education")

    def test_unverified_user_forbidden(self, client, auth_headers, payload_factory):
        response = _create(client, auth_headers, payload_factory(), account_id="unverified-1")
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "Email verification required"

    def test_unknown_account(self, client, auth_headers, payload_factory):
        response = _create(client, auth_headers, payload_factory(), account_id="ghost")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_cv_limit(self, client, auth_headers, data_store, payload_factory):
        for index in range(10):
            data_store.insert("cvs", {"user_id": "user-1", "title": f"CV {index}", "layout": "modern"})

        response = _create(client, auth_headers, payload_factory())

        assert response.status_code == 402
        error = response.json()["error"]
        assert error["code"] == "QUOTA_EXCEEDED"
        assert error["details"]["limit"] == 10
        assert "Upgrade to premium" in error["message"]


class TestLifecycle:
    def test_update_download_share_delete(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]

        response = _publish(client, auth_headers, cv_id)
        assert response.status_code == 200
        assert response.json()["data"]["cv"]["status"] == "published"

        response = client.post(f"/api/v1/cvs/{cv_id}/download", json={"download_type": "pdf"}, headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["data"]["download_count"] == 1

        response = client.post(
            f"/api/v1/cvs/{cv_id}/share",
            json={"platform": "email", "recipient_email": "friend@example.com"},
            headers=auth_headers(),
        )
        assert response.status_code == 200
        assert response.json()["data"]["share_count"] == 1

        usage = client.get("/api/v1/cvs/usage", headers=auth_headers()).json()["data"]
        assert usage["download"] == {"used": 1, "limit": 3, "remaining": 2}
        assert usage["share"]["used"] == 1

        response = client.delete(f"/api/v1/cvs/{cv_id}", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["message"] == "CV deleted successfully"

    def test_download_without_body_defaults_to_pdf(self, client, auth_headers, data_store, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]
        response = client.post(f"/api/v1/cvs/{cv_id}/download", headers=auth_headers())
        assert response.status_code == 200
        assert data_store.select("cv_downloads", {"cv_id": cv_id})[0]["download_type"] == "pdf"

    def test_download_quota(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]
        for _ in range(3):
            assert client.post(f"/api/v1/cvs/{cv_id}/download", headers=auth_headers()).status_code == 200

        response = client.post(f"/api/v1/cvs/{cv_id}/download", headers=auth_headers())
        assert response.status_code == 402
        assert response.json()["error"]["details"]["action"] == "download"

    def test_share_draft_forbidden(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]
        response = client.post(f"/api/v1/cvs/{cv_id}/share", json={"platform": "linkedin"}, headers=auth_headers())
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "CV must be published before sharing"

    def test_other_users_cv_is_forbidden(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]

        response = client.patch(f"/api/v1/cvs/{cv_id}", json={"title": "Mine now"}, headers=auth_headers("user-2"))
        assert response.status_code == 403
        details = response.json()["error"]["details"]
        assert details["resource_id"] == cv_id
        assert details["required_action"] == "update"

    def test_missing_cv(self, client, auth_headers):
        response = client.delete("/api/v1/cvs/does-not-exist", headers=auth_headers())
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "CV not found"


class TestRead:
    def test_list_cvs_with_pagination(self, client, auth_headers, payload_factory):
        for index in range(3):
            _create(client, auth_headers, payload_factory(title=f"Backend CV {index}"))

        response = client.get("/api/v1/cvs", params={"page": 1, "limit": 2}, headers=auth_headers())

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "CVs retrieved successfully"
        assert len(body["data"]) == 2
        assert body["pagination"] == {
            "page": 1, "limit": 2, "total": 3, "total_pages": 2, "has_next": True, "has_prev": False,
        }

    def test_list_rejects_oversized_limit(self, client, auth_headers):
        response = client.get("/api/v1/cvs", params={"limit": 500}, headers=auth_headers())
        assert response.status_code == 422
        assert {"field": "limit", "message": "Limit must not exceed 100"} in response.json()["error"]["details"]["violations"]

    def test_list_only_returns_callers_cvs(self, client, auth_headers, payload_factory):
        _create(client, auth_headers, payload_factory())
        response = client.get("/api/v1/cvs", headers=auth_headers("user-2"))
        assert response.json()["data"] == []

    def test_get_cv(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]

        response = client.get(f"/api/v1/cvs/{cv_id}", headers=auth_headers())
        assert response.status_code == 200
        assert response.json()["data"]["basic_details"]["full_name"] == "Jane Doe"

        response = client.get(f"/api/v1/cvs/{cv_id}", headers=auth_headers("user-2"))
        assert response.status_code == 403
        assert response.json()["error"]["message"] == "You can only view your own CVs"

    def test_admin_passes_own_scope_guards(self, client, auth_headers, payload_factory):
        cv_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]
        response = client.patch(f"/api/v1/cvs/{cv_id}", json={"title": "Reviewed CV"}, headers=auth_headers("admin-1"))
        assert response.status_code == 200
        assert response.json()["data"]["cv"]["title"] == "Reviewed CV"


class TestSectionOwnership:
    def test_update_cannot_write_into_another_users_cv(self, client, auth_headers, data_store, payload_factory):
        victim_id = _create(client, auth_headers, payload_factory()).json()["data"]["cv"]["id"]
        own_id = _create(client, auth_headers, payload_factory(), account_id="user-2").json()["data"]["cv"]["id"]

        response = client.patch(
            f"/api/v1/cvs/{own_id}",
            json={"basic_details": {"full_name": "Injected", "email": "x@example.com", "cv_id": victim_id}},
            headers=auth_headers("user-2"),
        )

        assert response.status_code == 200
        rows = data_store.select("basic_details", {"cv_id": victim_id})
        assert [row["full_name"] for row in rows] == ["Jane Doe"]


class TestPermissionGuard:
    def test_missing_grant_is_forbidden(self, cv_service):
        checker = require_permission("manage:users")
        with pytest.raises(AuthorizationError) as exc_info:
            checker(account_id="user-1", service=cv_service)
        assert exc_info.value.message == "Permission denied for action: manage:users"
        assert exc_info.value.details["required_action"] == "manage:users"

    def test_granted_action_returns_account_id(self, cv_service):
        assert require_permission("manage:users")(account_id="admin-1", service=cv_service) == "admin-1"
        assert require_permission("download:own")(account_id="premium-1", service=cv_service) == "premium-1"

    def test_unknown_account(self, cv_service):
        with pytest.raises(NotFoundError):
            require_permission("read:own")(account_id="ghost", service=cv_service)
