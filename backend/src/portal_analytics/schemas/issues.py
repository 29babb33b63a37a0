"""Structured validation issue schemas."""
import enum
from typing import Any

from pydantic import BaseModel, Field


class Severity(str, enum.Enum):
    """How an issue affects the dashboard consuming the snapshot."""

    ERROR = "error"
    WARNING = "warning"


class ValidationIssue(BaseModel):
    """A single finding produced by a validator."""

    code: str = Field(..., description="Machine-readable issue code")
    severity: Severity = Field(..., description="error blocks rendering, warning does not")
    message: str = Field(..., description="Human-readable issue message")
    metric: str | None = Field(default=None, description="Metric the issue refers to")
    row: str | int | None = Field(default=None, description="Row label or index within the metric result")
    column: str | None = Field(default=None, description="Column holding the offending value")
    value: Any | None = Field(default=None, description="Offending value")

    @property
    def remediation(self) -> str | None:
        """Operator hint for this issue's code, if one is known."""
        return REMEDIATION_HINTS.get(self.code)

    def __str__(self) -> str:
        return self.message


# Issue codes enum for consistency
class IssueCode:
    """Standard issue codes emitted by the validators."""

    # Structure errors
    MISSING_SECTION = "missing_section"
    MISSING_METRICS_CONTAINER = "missing_metrics_container"
    MISSING_METRIC = "missing_metric"
    INVALID_RESULT = "invalid_result"

    # Structure warnings
    MISSING_METADATA_FIELD = "missing_metadata_field"
    MISSING_RECOMMENDED_SECTION = "missing_recommended_section"
    MISSING_QUERY = "missing_query"

    # Quality warnings
    RATIO_OUT_OF_RANGE = "ratio_out_of_range"
    EMPTY_RELATIONAL_TABLE = "empty_relational_table"
    INVALID_HEADLINE_TOTAL = "invalid_headline_total"


# Remediation hints for common issues
REMEDIATION_HINTS = {
    IssueCode.MISSING_SECTION: "Regenerate the snapshot with the exporter; the section is written on every run.",
    IssueCode.MISSING_METRICS_CONTAINER: "Check the exporter version; metrics live under 'queries_and_results' or 'metrics'.",
    IssueCode.MISSING_METRIC: "Add the query for this metric to the exporter configuration and re-run it.",
    IssueCode.INVALID_RESULT: "The metric's rows must be a JSON array, even when the query returns nothing.",
    IssueCode.MISSING_QUERY: "Include the source query text so the dashboard can display it.",
    IssueCode.RATIO_OUT_OF_RANGE: "Ratio columns are WAU/MAU style values; check the query's time windows.",
    IssueCode.EMPTY_RELATIONAL_TABLE: "The journey query returned no rows; widen the time range or blade scope.",
    IssueCode.INVALID_HEADLINE_TOTAL: "The overall distinct-user count is missing or zero; check the MAU query.",
}


def error(code: str, message: str, **context: Any) -> ValidationIssue:
    """Build an error-severity issue."""
    return ValidationIssue(code=code, severity=Severity.ERROR, message=message, **context)


def warning(code: str, message: str, **context: Any) -> ValidationIssue:
    """Build a warning-severity issue."""
    return ValidationIssue(code=code, severity=Severity.WARNING, message=message, **context)
