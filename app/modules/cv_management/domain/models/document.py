# 📄 File: app/modules/cv_management/domain/models/document.py
# 🧭 Purpose (Layman Explanation):
# Describes a saved CV: who owns it, what it is called, how it looks, whether it is still a draft,
# and how many times it has been downloaded or shared.
# 🧪 Purpose (Technical Summary):
# Read-only CV snapshot used for ownership and state checks. Section content lives in
# child tables keyed by the CV id and is not part of this model.
# 🔗 Dependencies:
# pydantic, typing, domain.constants
# 🔄 Connected Modules / Calls From:
# user_rules.py, cv_rules.py, cv_service.py, data stores

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import CVLayout, DocumentStatus


class Document(BaseModel):
    """CV record owned by exactly one account."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: str
    title: str = ""
    layout: CVLayout = CVLayout.MODERN
    status: DocumentStatus = DocumentStatus.DRAFT
    is_public: bool = False
    download_count: int = 0
    share_count: int = 0

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def stringify_ids(cls, v):
        return str(v) if v is not None else v

    @field_validator("download_count", "share_count", mode="before")
    @classmethod
    def default_counters(cls, v):
        return 0 if v is None else v

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Document":
        return cls.model_validate(row)

    @property
    def owner_id(self) -> str:
        return self.user_id

    @property
    def is_published(self) -> bool:
        return self.status == DocumentStatus.PUBLISHED

    def is_owned_by(self, account_id: str) -> bool:
        return self.user_id == str(account_id)
