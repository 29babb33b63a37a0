"""Pydantic schemas for profiles, validation issues and reports."""

from portal_analytics.schemas.issues import (
    REMEDIATION_HINTS,
    IssueCode,
    Severity,
    ValidationIssue,
)
from portal_analytics.schemas.profile import (
    ChartKind,
    DashboardProfile,
    FlowColumns,
    HeadlineTotal,
    MetricDescriptor,
)
from portal_analytics.schemas.reports import (
    QualityReport,
    StructureReport,
    ValidationSummary,
)

__all__ = [
    # Issues
    "IssueCode",
    "REMEDIATION_HINTS",
    "Severity",
    "ValidationIssue",
    # Profiles
    "ChartKind",
    "DashboardProfile",
    "FlowColumns",
    "HeadlineTotal",
    "MetricDescriptor",
    # Reports
    "QualityReport",
    "StructureReport",
    "ValidationSummary",
]
