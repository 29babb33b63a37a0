"""Schemas for validator reports."""
from pydantic import BaseModel, Field

from portal_analytics.schemas.issues import ValidationIssue


class StructureReport(BaseModel):
    """Outcome of the structure validator.

    Warnings never make a report fail; any error does.
    """

    errors: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[ValidationIssue] = Field(default_factory=list)
    metric_count: int = Field(default=0, description="Metrics present in the container")
    blade_count: int = Field(default=0, description="Entries in the metadata blade scope")

    @property
    def passed(self) -> bool:
        return not self.errors

    def messages(self) -> list[str]:
        """Errors first, then warnings, as plain text."""
        return [issue.message for issue in self.errors + self.warnings]


class QualityReport(BaseModel):
    """Outcome of the quality validator."""

    warnings: list[ValidationIssue] = Field(default_factory=list)
    headline_total: float | None = Field(default=None, description="Overall distinct-user count, when found")
    flow_count: int | None = Field(default=None, description="Rows in the first relational table checked")

    @property
    def quality_acceptable(self) -> bool:
        return not self.warnings

    def messages(self) -> list[str]:
        return [issue.message for issue in self.warnings]


class ValidationSummary(BaseModel):
    """Combined result of a validation run."""

    structure: StructureReport
    quality: QualityReport | None = Field(
        default=None, description="Absent when structure validation failed"
    )

    @property
    def passed(self) -> bool:
        return self.structure.passed and self.quality is not None and self.quality.quality_acceptable

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1
