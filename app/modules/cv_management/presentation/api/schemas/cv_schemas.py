# 📄 File: app/modules/cv_management/presentation/api/schemas/cv_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes the shape of the data the CV endpoints accept and send back, like what a share
# request must contain and how a successful answer is wrapped.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the CV endpoints. CV content is accepted as a free-form
# mapping and checked by the policy engine so clients receive its field-level messages.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
#
# 🔄 Connected Modules / Calls From:
# - app.modules.cv_management.presentation.api.v1.cvs

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CVPayload(BaseModel):
    """
    CV create/update body.

    Known keys are listed for documentation; every key is passed through
    unchanged to the policy validators.
    """

    model_config = ConfigDict(extra="allow")

    title: Optional[Any] = Field(None, description="CV title (3-100 characters)")
    layout: Optional[Any] = Field(None, description="modern, classic or creative")
    status: Optional[Any] = Field(None, description="draft, published or archived (update only)")
    is_public: Optional[bool] = Field(None, description="Public visibility flag")
    basic_details: Optional[Dict[str, Any]] = Field(None, description="Name, email, phone, introduction")
    education: Optional[List[Any]] = None
    experience: Optional[List[Any]] = None
    projects: Optional[List[Any]] = None
    skills: Optional[List[Any]] = None
    social_profiles: Optional[List[Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        """Only the keys the client actually sent."""
        return self.model_dump(exclude_unset=True)


class DownloadRequest(BaseModel):
    download_type: str = Field(default="pdf", description="pdf or docx")


class ShareRequest(BaseModel):
    """Share a published CV through one platform."""

    platform: str = Field(..., description="email, linkedin, twitter, facebook or whatsapp")
    recipient_email: Optional[str] = Field(None, description="Recipient for email shares")


class APIResponse(BaseModel):
    """Success envelope shared by every CV endpoint."""

    success: bool = True
    message: str
    data: Optional[Any] = None


class PaginationInfo(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class PaginatedResponse(APIResponse):
    """Success envelope for list endpoints; ``data`` holds the current page."""

    pagination: PaginationInfo
