# 📄 File: app/modules/cv_management/domain/models/account.py
# 🧭 Purpose (Layman Explanation):
# Describes a registered person as far as the CV rules care: who they are, which plan they are on,
# and whether their account is switched on and confirmed.
# 🧪 Purpose (Technical Summary):
# Read-only account snapshot consumed by the policy engine. Built from a data store row;
# credential material and profile extras are ignored.
# 🔗 Dependencies:
# pydantic, typing, domain.constants
# 🔄 Connected Modules / Calls From:
# user_rules.py, quota_service.py, cv_service.py, presentation dependencies

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..constants import OAuthProvider, UserRole, UNLIMITED_ROLES


class Account(BaseModel):
    """
    Account snapshot.

    OAuth-linked accounts are treated as verified regardless of ``is_verified``.
    Accounts are never hard-deleted here; deactivation flips ``is_active``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    username: str = ""
    email: str = ""
    contact_number: Optional[str] = None
    role: UserRole = UserRole.STANDARD
    is_active: bool = True
    is_verified: bool = False
    oauth_provider: Optional[OAuthProvider] = None
    oauth_id: Optional[str] = None

    @field_validator("role", mode="before")
    @classmethod
    def parse_role(cls, v):
        """Accept both the stored ``user`` value and the ``standard`` alias"""
        if v is None:
            return UserRole.STANDARD
        return UserRole.parse(v)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return str(v) if v is not None else v

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Account":
        """Build an account snapshot from a ``users`` table row."""
        return cls.model_validate(row)

    @property
    def is_oauth(self) -> bool:
        return self.oauth_provider is not None

    @property
    def is_premium(self) -> bool:
        return self.role == UserRole.PREMIUM

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def has_unlimited_role(self) -> bool:
        return self.role in UNLIMITED_ROLES

    @property
    def effectively_verified(self) -> bool:
        return self.is_oauth or self.is_verified
