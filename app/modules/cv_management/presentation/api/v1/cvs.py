# 📄 File: app/modules/cv_management/presentation/api/v1/cvs.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for CVs: list them, open one, create one, edit it, delete it, download it,
# share it, and see how much of this month's allowance is left.
#
# 🧪 Purpose (Technical Summary):
# FastAPI CV endpoints. Each route resolves the caller from the bearer token, checks the role
# grants the route's action and delegates to CVService; policy denials arrive as CVBuilderException subclasses and are rendered by the
# application exception handlers.
#
# 🔗 Dependencies:
# - FastAPI router and status codes
# - app.modules.cv_management.domain.services.cv_service
# - app.modules.cv_management.presentation.dependencies
# - app.modules.cv_management.presentation.api.schemas.cv_schemas
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (router inclusion)

"""
CV API Endpoints

Endpoints:
- POST /cvs: Create a CV
- GET /cvs: List the caller's CVs (paginated)
- GET /cvs/usage: Usage statistics and limits for the caller
- GET /cvs/{cv_id}: CV with its sections
- PATCH /cvs/{cv_id}: Update a CV
- DELETE /cvs/{cv_id}: Delete a CV
- POST /cvs/{cv_id}/download: Record a download
- POST /cvs/{cv_id}/share: Record a share

Routes are plain ``def`` because the data store client is synchronous;
FastAPI runs them in its threadpool.
"""

import logging

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.modules.cv_management.domain.services.cv_service import CVService
from app.modules.cv_management.presentation.api.schemas.cv_schemas import (
    APIResponse,
    CVPayload,
    DownloadRequest,
    PaginatedResponse,
    ShareRequest,
)
from app.modules.cv_management.presentation.dependencies import (
    get_cv_service,
    require_permission,
)

logger = logging.getLogger(__name__)

cvs_router = APIRouter()

ERROR_RESPONSES = {
    401: {"description": "Authentication required"},
    403: {"description": "Not allowed for this account or CV"},
    404: {"description": "Account or CV not found"},
    422: {"description": "Validation failed"},
}


@cvs_router.post(
    "",
    response_model=APIResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create CV",
    responses={**ERROR_RESPONSES, 402: {"description": "CV limit reached"}},
)
def create_cv(
    body: CVPayload,
    account_id: str = Depends(require_permission("write:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    data = service.create_cv(account_id, body.to_payload())
    return APIResponse(message="CV created successfully", data=data)


@cvs_router.get(
    "/usage",
    response_model=APIResponse,
    summary="Usage statistics",
    description="CV count and this month's downloads and shares next to the caller's limits",
    responses=ERROR_RESPONSES,
)
def get_usage(
    account_id: str = Depends(require_permission("read:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    return APIResponse(message="Usage retrieved successfully", data=service.get_usage_summary(account_id))


@cvs_router.get(
    "",
    response_model=PaginatedResponse,
    summary="List CVs",
    description="The caller's CVs, most recently changed first",
    responses=ERROR_RESPONSES,
)
def list_cvs(
    page: Optional[int] = Query(None, description="Page number, starting at 1"),
    limit: Optional[int] = Query(None, description="Page size, at most 100"),
    cv_status: Optional[str] = Query(None, alias="status", description="Only CVs with this status"),
    account_id: str = Depends(require_permission("read:own")),
    service: CVService = Depends(get_cv_service),
) -> PaginatedResponse:
    result = service.list_cvs(account_id, page=page, limit=limit, status=cv_status)
    return PaginatedResponse(
        message="CVs retrieved successfully",
        data=result["cvs"],
        pagination=result["pagination"],
    )


@cvs_router.get(
    "/{cv_id}",
    response_model=APIResponse,
    summary="Get CV",
    description="CV record with basic details and every section; public CVs are readable by any caller",
    responses=ERROR_RESPONSES,
)
def get_cv(
    cv_id: str,
    account_id: str = Depends(require_permission("read:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    return APIResponse(message="CV retrieved successfully", data=service.get_cv(account_id, cv_id))


@cvs_router.patch(
    "/{cv_id}",
    response_model=APIResponse,
    summary="Update CV",
    responses=ERROR_RESPONSES,
)
def update_cv(
    cv_id: str,
    body: CVPayload,
    account_id: str = Depends(require_permission("write:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    data = service.update_cv(account_id, cv_id, body.to_payload())
    return APIResponse(message="CV updated successfully", data=data)


@cvs_router.delete(
    "/{cv_id}",
    response_model=APIResponse,
    summary="Delete CV",
    responses=ERROR_RESPONSES,
)
def delete_cv(
    cv_id: str,
    account_id: str = Depends(require_permission("delete:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    service.delete_cv(account_id, cv_id)
    return APIResponse(message="CV deleted successfully")


@cvs_router.post(
    "/{cv_id}/download",
    response_model=APIResponse,
    summary="Download CV",
    responses={**ERROR_RESPONSES, 402: {"description": "Monthly download limit reached"}},
)
def download_cv(
    cv_id: str,
    body: DownloadRequest = DownloadRequest(),
    account_id: str = Depends(require_permission("download:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    data = service.download_cv(account_id, cv_id, body.download_type)
    return APIResponse(message="CV download started", data=data)


@cvs_router.post(
    "/{cv_id}/share",
    response_model=APIResponse,
    summary="Share CV",
    responses={**ERROR_RESPONSES, 402: {"description": "Monthly share limit reached"}},
)
def share_cv(
    cv_id: str,
    body: ShareRequest,
    account_id: str = Depends(require_permission("share:own")),
    service: CVService = Depends(get_cv_service),
) -> APIResponse:
    data = service.share_cv(account_id, cv_id, body.platform, body.recipient_email)
    return APIResponse(message="CV shared successfully", data=data)
