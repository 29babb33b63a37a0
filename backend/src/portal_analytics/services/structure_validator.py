"""
Structure validation for dashboard snapshots.

Checks that a parsed snapshot has the shape a dashboard needs before any
chart is drawn:
- required top-level sections and the metrics container are present
- every metric the profile requires exists
- each metric carries its query text (warning when absent)
- each metric's rows are a list (error when absent or another type)

Every check runs regardless of earlier failures so a single report lists
all problems in the document.
"""
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from portal_analytics.schemas.issues import IssueCode, Severity, ValidationIssue, error, warning
from portal_analytics.schemas.profile import DashboardProfile
from portal_analytics.schemas.reports import StructureReport
from portal_analytics.services.projection import MISSING, find_result, metrics_container

logger = structlog.get_logger(__name__)

LogSink = Callable[[str], None]


def validate_structure(
    snapshot: Mapping[str, Any],
    profile: DashboardProfile,
    log: LogSink | None = None,
) -> StructureReport:
    """
    Validate the structure of a snapshot against a dashboard profile.

    Args:
        snapshot: Parsed snapshot document
        profile: Dashboard profile listing required sections and metrics
        log: Optional sink for progress and summary lines

    Returns:
        StructureReport with errors and warnings

    Raises:
        TypeError: If snapshot is not a mapping
    """
    if not isinstance(snapshot, Mapping):
        raise TypeError(f"snapshot must be a mapping, got {type(snapshot).__name__}")

    if log:
        log("Validating data structure...")

    report = StructureReport()

    for section in profile.required_sections:
        value = snapshot.get(section)
        if value is None:
            report.errors.append(
                error(IssueCode.MISSING_SECTION, f"missing section {section}", column=section)
            )
        elif not isinstance(value, Mapping):
            report.errors.append(
                error(
                    IssueCode.MISSING_SECTION,
                    f"invalid section {section}: expected object, got {type(value).__name__}",
                    column=section,
                    value=type(value).__name__,
                )
            )

    _check_metadata(snapshot, profile, report)

    container_key, container = metrics_container(snapshot, profile)
    if container_key is None or not isinstance(container, Mapping):
        expected = ", ".join(profile.metrics_container_keys)
        report.errors.append(
            error(
                IssueCode.MISSING_METRICS_CONTAINER,
                f"missing metrics section (expected one of: {expected})",
                value=None if container_key is None else type(container).__name__,
            )
        )
        container = {}
    report.metric_count = len(container)

    for name in profile.required_metrics:
        if name not in container:
            report.errors.append(
                error(IssueCode.MISSING_METRIC, f"missing metric {name}", metric=name)
            )
            continue
        for issue in check_metric_record(name, container[name], profile.result_aliases):
            _file(report, issue)

    for section in profile.recommended_sections:
        if snapshot.get(section) is None:
            report.warnings.append(
                warning(
                    IssueCode.MISSING_RECOMMENDED_SECTION,
                    f"missing {section} section",
                    column=section,
                )
            )

    logger.info(
        "structure_validation_completed",
        profile=profile.name,
        errors=len(report.errors),
        warnings=len(report.warnings),
        metric_count=report.metric_count,
    )

    if log:
        if report.passed:
            log("Data structure validation passed")
            log(f"Metrics available: {report.metric_count}")
            log(f"Blade scope: {report.blade_count} blades")
        else:
            log("Data structure validation found issues:")
        for message in report.messages():
            log(f"  {message}")

    return report


def check_metric_record(name: str, record: Any, aliases: list[str]) -> list[ValidationIssue]:
    """
    Check one metric record for its query text and row sequence.

    Args:
        name: Metric name, used in messages
        record: The metric record as found in the container
        aliases: Accepted names for the row sequence

    Returns:
        Issues found (empty when the record is well formed)
    """
    if not isinstance(record, Mapping):
        return [
            error(
                IssueCode.INVALID_RESULT,
                f"metric {name} is {type(record).__name__}, expected an object with query and result",
                metric=name,
                value=type(record).__name__,
            )
        ]

    issues = []
    if not isinstance(record.get("query"), str) or not record["query"]:
        issues.append(warning(IssueCode.MISSING_QUERY, f"missing query for metric {name}", metric=name))

    alias, value = find_result(record, aliases)
    if value is MISSING:
        issues.append(
            error(
                IssueCode.INVALID_RESULT,
                f"missing result for metric {name} (expected one of: {', '.join(aliases)})",
                metric=name,
            )
        )
    elif not isinstance(value, list):
        issues.append(
            error(
                IssueCode.INVALID_RESULT,
                f"invalid {alias} for metric {name}: expected array, got {type(value).__name__}",
                metric=name,
                column=alias,
                value=type(value).__name__,
            )
        )
    return issues


def _check_metadata(snapshot: Mapping[str, Any], profile: DashboardProfile, report: StructureReport) -> None:
    metadata = snapshot.get("metadata")
    if not isinstance(metadata, Mapping):
        return

    for field_name in profile.recommended_metadata:
        if not metadata.get(field_name):
            report.warnings.append(
                warning(
                    IssueCode.MISSING_METADATA_FIELD,
                    f"missing metadata.{field_name}",
                    column=field_name,
                )
            )

    for key in profile.blade_scope_keys:
        scope = metadata.get(key)
        if isinstance(scope, list):
            report.blade_count = len(scope)
            break


def _file(report: StructureReport, issue: ValidationIssue) -> None:
    if issue.severity == Severity.ERROR:
        report.errors.append(issue)
    else:
        report.warnings.append(issue)
