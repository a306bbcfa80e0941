# 📄 File: app/modules/cv_management/domain/services/cv_service.py
# 🧭 Purpose (Layman Explanation):
# The CV desk clerk: it looks up the person and the CV, checks the form is filled in properly,
# checks the person is allowed and still has allowance left, and only then saves the change.
# 🧪 Purpose (Technical Summary):
# Application service running the list / read / create / update / delete / download / share flow:
# resolve entities (NotFoundError), validate payload (ValidationError), ownership and state checks
# (AuthorizationError), fresh usage count plus quota check (QuotaExceededError), then mutate.
# 🔗 Dependencies:
# domain.rules, domain.services.quota_service, domain.services.validation_service,
# domain.repositories.data_store, app.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.cvs (FastAPI routes), tests

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from app.shared.core.exceptions import (
    AuthorizationError,
    DatabaseError,
    NotFoundError,
    QuotaExceededError,
    ValidationError,
)

from ..constants import (
    CV_DOWNLOADS_TABLE,
    CV_SHARES_TABLE,
    CVS_TABLE,
    DocumentStatus,
    PAGINATION_DEFAULT_LIMIT,
    PAGINATION_DEFAULT_PAGE,
    QuotaAction,
    SECTION_TABLES,
    SharePlatform,
    USERS_TABLE,
)
from ..models import Account, Document, PolicyDecision, UsageStats, Violation
from ..repositories.data_store import DataStore
from ..rules.cv_rules import can_transition_status, validate_status
from ..rules.environment import DEFAULT_ENVIRONMENT, PolicyEnvironment
from ..rules.user_rules import (
    can_create_document,
    can_download,
    can_modify_document,
    can_share,
    can_view_document,
    validate_email,
)
from .quota_service import QuotaEnforcer, current_month_start
from .validation_service import (
    format_errors,
    has_errors,
    validate_cv_creation,
    validate_cv_update,
    validate_pagination,
)

logger = logging.getLogger(__name__)

LIST_SECTIONS = ("education", "experience", "projects", "skills", "social_profiles")
CV_COLUMNS = ("title", "layout", "status", "is_public")
SHARE_PLATFORMS = tuple(platform.value for platform in SharePlatform)
DOWNLOAD_TYPES = ("pdf", "docx")
# Server-managed columns never taken from a section payload
PROTECTED_SECTION_FIELDS = frozenset({"id", "cv_id", "created_at"})


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class CVService:
    """
    Orchestrates CV operations against a data store.

    Policy functions never raise; this service is the single place where a
    denial becomes an exception, so the HTTP layer only maps exception types.
    """

    def __init__(
        self,
        data_store: DataStore,
        quota_enforcer: Optional[QuotaEnforcer] = None,
        env: PolicyEnvironment = DEFAULT_ENVIRONMENT,
    ):
        self.data_store = data_store
        self.quota_enforcer = quota_enforcer or QuotaEnforcer()
        self.env = env

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_account(self, account_id: str) -> Account:
        row = self.data_store.get(USERS_TABLE, account_id)
        if row is None:
            raise NotFoundError("User not found", resource_type="User", resource_id=account_id)
        try:
            return Account.from_row(row)
        except PydanticValidationError as e:
            logger.error(f"Stored user {account_id} is malformed: {e}")
            raise DatabaseError(
                "Stored user record is invalid",
                operation="read",
                table=USERS_TABLE,
                details={"resource_id": account_id},
            )

    def get_document(self, cv_id: str) -> Document:
        return self._parse_document(self._get_document_row(cv_id))

    def _get_document_row(self, cv_id: str) -> Dict[str, Any]:
        row = self.data_store.get(CVS_TABLE, cv_id)
        if row is None:
            raise NotFoundError("CV not found", resource_type="CV", resource_id=cv_id)
        return row

    def _parse_document(self, row: Mapping[str, Any]) -> Document:
        try:
            return Document.from_row(row)
        except PydanticValidationError as e:
            logger.error(f"Stored CV {row.get('id')} is malformed: {e}")
            raise DatabaseError(
                "Stored CV record is invalid",
                operation="read",
                table=CVS_TABLE,
                details={"resource_id": row.get("id")},
            )

    def get_usage_stats(self, account_id: str, now: Optional[datetime] = None) -> UsageStats:
        """
        Count the caller's CVs and this month's downloads and shares.

        Args:
            account_id: Account whose usage is counted
            now: Reference time for the month window

        Returns:
            UsageStats with fresh counts
        """
        month_start = current_month_start(now)
        return UsageStats(
            total_cvs=self.data_store.count(CVS_TABLE, {"user_id": account_id}),
            published_cvs=self.data_store.count(
                CVS_TABLE, {"user_id": account_id, "status": DocumentStatus.PUBLISHED.value}
            ),
            downloads_this_month=self.data_store.count(
                CV_DOWNLOADS_TABLE, {"user_id": account_id}, since=month_start
            ),
            shares_this_month=self.data_store.count(
                CV_SHARES_TABLE, {"user_id": account_id}, since=month_start
            ),
        )

    def get_usage_summary(self, account_id: str) -> Dict[str, Any]:
        account = self.get_account(account_id)
        stats = self.get_usage_stats(account.id)
        summary = self.quota_enforcer.usage_summary(account, stats)
        summary["stats"] = stats.to_dict()
        return summary

    def get_cv(self, account_id: str, cv_id: str) -> Dict[str, Any]:
        account = self.get_account(account_id)
        document = self.get_document(cv_id)
        self._ensure_allowed(can_view_document(account, document), account, "read", cv_id)
        return self.get_cv_data(cv_id)

    def list_cvs(
        self,
        account_id: str,
        page: Any = None,
        limit: Any = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Page through the caller's CVs, most recently changed first.

        Args:
            account_id: Owner whose CVs are listed
            page: 1-based page number, defaults to 1
            limit: Page size, defaults to 10 and capped at 100
            status: Optional status filter

        Returns:
            Dict with ``cvs`` and ``pagination`` (page, limit, total, total_pages,
            has_next, has_prev)
        """
        account = self.get_account(account_id)
        self._ensure_valid(validate_pagination(page, limit), "Invalid pagination parameters")
        if status is not None:
            self._ensure_valid(validate_status(status), "Invalid status filter")

        page = int(float(page)) if page is not None else PAGINATION_DEFAULT_PAGE
        limit = int(float(limit)) if limit is not None else PAGINATION_DEFAULT_LIMIT

        filters: Dict[str, Any] = {"user_id": account.id}
        if status is not None:
            filters["status"] = status
        rows = self.data_store.select(CVS_TABLE, filters)
        rows.sort(key=lambda row: row.get("updated_at") or row.get("created_at") or "", reverse=True)

        total = len(rows)
        total_pages = -(-total // limit)
        offset = (page - 1) * limit
        return {
            "cvs": rows[offset:offset + limit],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages,
                "has_next": page < total_pages,
                "has_prev": page > 1,
            },
        }

    def get_cv_data(self, cv_id: str) -> Dict[str, Any]:
        """CV record with its basic details and section lists."""
        document_row = self._get_document_row(cv_id)

        basic_details = self.data_store.select(SECTION_TABLES["basic_details"], {"cv_id": cv_id})
        data: Dict[str, Any] = {
            "cv": document_row,
            "basic_details": basic_details[0] if basic_details else None,
        }
        for section in LIST_SECTIONS:
            data[section] = self.data_store.select(SECTION_TABLES[section], {"cv_id": cv_id})
        return data

    # =========================================================================
    # GUARDS
    # =========================================================================

    def _ensure_valid(self, violations: List[Violation], message: str) -> None:
        if has_errors(violations):
            logger.info(f"{message}: {format_errors(violations)}")
            raise ValidationError(
                message,
                violations=violations,
                details={"message": format_errors(violations)},
            )

    def _ensure_allowed(
        self,
        decision: PolicyDecision,
        account: Account,
        action: str,
        resource_id: Optional[str] = None,
    ) -> None:
        if decision.denied:
            logger.warning(f"{action} denied for user {account.id}: {decision.reason}")
            raise AuthorizationError(
                decision.reason,
                resource_type="CV",
                resource_id=resource_id,
                required_action=action,
                user_id=account.id,
            )

    def _ensure_quota(self, account: Account, action: QuotaAction, used: int) -> None:
        decision = self.quota_enforcer.check(account, action, used)
        if decision.denied:
            logger.warning(f"{action.value} quota reached for user {account.id} ({used} used)")
            raise QuotaExceededError(
                decision.reason,
                action=action.value,
                limit=self.quota_enforcer.limit_for(account, action),
                current_usage=used,
                role=account.role.value,
            )

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def create_cv(self, account_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        account = self.get_account(account_id)
        self._ensure_valid(validate_cv_creation(payload), "CV creation validation failed")
        self._ensure_allowed(can_create_document(account), account, "create")

        cv_count = self.data_store.count(CVS_TABLE, {"user_id": account.id})
        self._ensure_quota(account, QuotaAction.CREATE_CV, cv_count)

        now = _now()
        document_row = self.data_store.insert(CVS_TABLE, {
            "user_id": account.id,
            "title": payload["title"],
            "layout": payload["layout"],
            "status": DocumentStatus.DRAFT.value,
            "is_public": False,
            "download_count": 0,
            "share_count": 0,
            "last_modified": now,
        })
        cv_id = document_row["id"]

        try:
            self._write_basic_details(cv_id, payload.get("basic_details") or {})
            for section in LIST_SECTIONS:
                if payload.get(section):
                    self._replace_section(cv_id, section, payload[section])
        except DatabaseError:
            logger.error(f"Rolling back CV {cv_id} after section write failure")
            self._delete_cv_rows(cv_id)
            raise

        logger.info(f"CV {cv_id} created for user {account.id}")
        return self.get_cv_data(cv_id)

    def update_cv(self, account_id: str, cv_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Apply column and section changes to a CV.

        Sections present in the payload replace the stored ones. If a write
        fails with DatabaseError, the CV columns and every touched section are
        put back as they were before the call.
        """
        account = self.get_account(account_id)
        document_row = self._get_document_row(cv_id)
        document = self._parse_document(document_row)
        self._ensure_valid(validate_cv_update(payload), "CV update validation failed")
        self._ensure_allowed(can_modify_document(account, document), account, "update", cv_id)

        if "status" in payload:
            transition = can_transition_status(document.status, payload["status"], self.env)
            self._ensure_allowed(transition, account, "update", cv_id)

        changes = {column: payload[column] for column in CV_COLUMNS if column in payload}
        now = _now()
        changes.update({"updated_at": now, "last_modified": now})

        touched = [section for section in LIST_SECTIONS if section in payload]
        if payload.get("basic_details"):
            touched.append("basic_details")
        snapshot = {
            section: self.data_store.select(SECTION_TABLES[section], {"cv_id": cv_id})
            for section in touched
        }

        try:
            self.data_store.update(CVS_TABLE, cv_id, changes)
            if payload.get("basic_details"):
                self._write_basic_details(cv_id, payload["basic_details"])
            for section in LIST_SECTIONS:
                if section in payload:
                    self._replace_section(cv_id, section, payload[section] or [])
        except DatabaseError:
            logger.error(f"Restoring CV {cv_id} after section write failure")
            self._restore_cv(cv_id, document_row, changes, snapshot)
            raise

        logger.info(f"CV {cv_id} updated by user {account.id}")
        return self.get_cv_data(cv_id)

    def delete_cv(self, account_id: str, cv_id: str) -> None:
        account = self.get_account(account_id)
        document = self.get_document(cv_id)
        self._ensure_allowed(can_modify_document(account, document), account, "delete", cv_id)

        self._delete_cv_rows(cv_id)
        logger.info(f"CV {cv_id} deleted by user {account.id}")

    def download_cv(self, account_id: str, cv_id: str, download_type: str = "pdf") -> Dict[str, Any]:
        """
        Record a download.

        The tracking row drives the monthly quota; the counter on the CV row
        is a display total and is incremented atomically.
        """
        account = self.get_account(account_id)
        document = self.get_document(cv_id)
        if download_type not in DOWNLOAD_TYPES:
            self._ensure_valid(
                [Violation("download_type", f"Download type must be one of: {', '.join(DOWNLOAD_TYPES)}")],
                "CV download validation failed",
            )
        self._ensure_allowed(can_download(account, document, self.env), account, "download", cv_id)

        stats = self.get_usage_stats(account.id)
        self._ensure_quota(account, QuotaAction.DOWNLOAD, stats.downloads_this_month)

        self.data_store.insert(CV_DOWNLOADS_TABLE, {
            "user_id": account.id,
            "cv_id": cv_id,
            "download_type": download_type,
            "created_at": _now(),
        })
        download_count = self.data_store.increment_counter(CVS_TABLE, cv_id, "download_count")

        logger.info(f"CV {cv_id} downloaded by user {account.id}")
        return {
            "cv_id": cv_id,
            "download_count": download_count,
            "downloads_this_month": stats.downloads_this_month + 1,
        }

    def share_cv(
        self,
        account_id: str,
        cv_id: str,
        platform: str,
        recipient_email: Optional[str] = None,
    ) -> Dict[str, Any]:
        account = self.get_account(account_id)
        document = self.get_document(cv_id)

        violations: List[Violation] = []
        if not platform:
            violations.append(Violation("platform", "Share platform is required"))
        elif platform not in SHARE_PLATFORMS:
            violations.append(Violation("platform", f"Platform must be one of: {', '.join(SHARE_PLATFORMS)}"))
        if recipient_email:
            violations.extend(validate_email(recipient_email, field="recipient_email"))
        self._ensure_valid(violations, "CV share validation failed")

        self._ensure_allowed(can_share(account, document), account, "share", cv_id)

        stats = self.get_usage_stats(account.id)
        self._ensure_quota(account, QuotaAction.SHARE, stats.shares_this_month)

        self.data_store.insert(CV_SHARES_TABLE, {
            "user_id": account.id,
            "cv_id": cv_id,
            "share_platform": platform,
            "recipient_email": recipient_email,
            "created_at": _now(),
        })
        share_count = self.data_store.increment_counter(CVS_TABLE, cv_id, "share_count")

        logger.info(f"CV {cv_id} shared on {platform} by user {account.id}")
        return {
            "cv_id": cv_id,
            "platform": platform,
            "share_count": share_count,
            "shares_this_month": stats.shares_this_month + 1,
        }

    # =========================================================================
    # SECTION WRITES
    # =========================================================================

    @staticmethod
    def _section_row(cv_id: str, entry: Mapping[str, Any]) -> Dict[str, Any]:
        """Client section fields bound to ``cv_id``; server-managed keys are dropped."""
        row = {key: value for key, value in entry.items() if key not in PROTECTED_SECTION_FIELDS}
        row["cv_id"] = cv_id
        return row

    def _write_basic_details(self, cv_id: str, details: Mapping[str, Any]) -> None:
        table = SECTION_TABLES["basic_details"]
        existing = self.data_store.select(table, {"cv_id": cv_id})
        if existing:
            self.data_store.update(table, existing[0]["id"], self._section_row(cv_id, details))
        else:
            self.data_store.insert(table, self._section_row(cv_id, details))

    def _replace_section(self, cv_id: str, section: str, entries: List[Mapping[str, Any]]) -> None:
        table = SECTION_TABLES[section]
        self.data_store.delete(table, {"cv_id": cv_id})
        for entry in entries:
            self.data_store.insert(table, self._section_row(cv_id, entry))

    def _restore_cv(
        self,
        cv_id: str,
        document_row: Mapping[str, Any],
        changes: Mapping[str, Any],
        snapshot: Mapping[str, List[Dict[str, Any]]],
    ) -> None:
        self.data_store.update(CVS_TABLE, cv_id, {column: document_row.get(column) for column in changes})
        for section, rows in snapshot.items():
            table = SECTION_TABLES[section]
            self.data_store.delete(table, {"cv_id": cv_id})
            for row in rows:
                self.data_store.insert(table, row)

    def _delete_cv_rows(self, cv_id: str) -> None:
        for table in SECTION_TABLES.values():
            self.data_store.delete(table, {"cv_id": cv_id})
        self.data_store.delete(CVS_TABLE, {"id": cv_id})
