"""Domain models for the CV management module."""

from .account import Account
from .document import Document
from .results import PolicyDecision, UsageStats, Violation

__all__ = [
    "Account",
    "Document",
    "PolicyDecision",
    "UsageStats",
    "Violation",
]
