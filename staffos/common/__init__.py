"""Common module — shared utilities for the StaffOS client."""

from staffos.common.constants import (
    DEFAULT_AUDIT_PAGE_SIZE,
    DEFAULT_LIST_LIMIT,
    HR_ROLES,
    AbsenceCategory,
    CaseStatus,
    CaseType,
    CheckStatus,
    CheckType,
    CycleStatus,
    InsightStatus,
    LeaveStatus,
    NotificationCategory,
    ObjectiveStatus,
    OnboardingStage,
    PatternType,
    PipelineStage,
    Priority,
    ReferenceStatus,
    ReviewStatus,
    TerminationType,
    WorkflowStatus,
)
from staffos.common.exceptions import (
    ApiUnavailable,
    AppException,
    AuthenticationRequired,
    ConflictError,
    ForbiddenException,
    NotFoundException,
    ValidationException,
    exception_from_response,
    require_fields,
)
from staffos.common.formatting import (
    format_currency,
    format_date,
    format_datetime,
    humanize,
    parse_date,
    percentage,
)
from staffos.common.pagination import PaginationMeta, build_meta

__all__ = [
    # Constants / Enums
    "AbsenceCategory",
    "CaseStatus",
    "CaseType",
    "CheckStatus",
    "CheckType",
    "CycleStatus",
    "InsightStatus",
    "LeaveStatus",
    "NotificationCategory",
    "ObjectiveStatus",
    "OnboardingStage",
    "PatternType",
    "PipelineStage",
    "Priority",
    "ReferenceStatus",
    "ReviewStatus",
    "TerminationType",
    "WorkflowStatus",
    "HR_ROLES",
    "DEFAULT_AUDIT_PAGE_SIZE",
    "DEFAULT_LIST_LIMIT",
    # Exceptions
    "ApiUnavailable",
    "AppException",
    "AuthenticationRequired",
    "ConflictError",
    "ForbiddenException",
    "NotFoundException",
    "ValidationException",
    "exception_from_response",
    "require_fields",
    # Formatting
    "format_currency",
    "format_date",
    "format_datetime",
    "humanize",
    "parse_date",
    "percentage",
    # Pagination
    "PaginationMeta",
    "build_meta",
]
