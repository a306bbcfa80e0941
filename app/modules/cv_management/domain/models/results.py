# 📄 File: app/modules/cv_management/domain/models/results.py
# 🧭 Purpose (Layman Explanation):
# The little "answer slips" the rules hand back: a list of things wrong with a form,
# a yes/no with a reason for "may I do this?", and a summary of how much a user has used this month.
# 🧪 Purpose (Technical Summary):
# Immutable value objects returned by the policy engine and quota enforcer. Failures are
# plain data so callers can branch without unwinding control flow.
# 🔗 Dependencies:
# dataclasses, typing
# 🔄 Connected Modules / Calls From:
# domain.rules.*, domain.services.*, presentation schemas

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Violation:
    """A single reason a payload failed validation."""
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class PolicyDecision:
    """Outcome of a permission, state or quota check."""
    allowed: bool
    reason: Optional[str] = None

    @classmethod
    def allow(cls) -> "PolicyDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str) -> "PolicyDecision":
        return cls(allowed=False, reason=reason)

    @property
    def denied(self) -> bool:
        return not self.allowed

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"allowed": self.allowed}
        if self.reason is not None:
            data["reason"] = self.reason
        return data


@dataclass(frozen=True)
class UsageStats:
    """Usage counters derived from the data store for one account."""
    total_cvs: int = 0
    published_cvs: int = 0
    downloads_this_month: int = 0
    shares_this_month: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
