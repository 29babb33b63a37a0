"""Quality validation for structurally valid snapshots."""
from collections.abc import Callable, Mapping
from typing import Any

import structlog

from portal_analytics.schemas.issues import IssueCode, warning
from portal_analytics.schemas.profile import DashboardProfile, HeadlineTotal
from portal_analytics.schemas.reports import QualityReport
from portal_analytics.services.projection import metric_rows

logger = structlog.get_logger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _ratio_value(value: Any) -> float | None:
    """Numeric value of a ratio cell; numeric strings count, other strings do not."""
    if _is_number(value):
        return value
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def validate_quality(
    snapshot: Mapping[str, Any],
    profile: DashboardProfile,
    log: Callable[[str], None] | None = None,
) -> QualityReport:
    """
    Flag implausible values in a snapshot without blocking rendering.

    Expects a snapshot that passed structure validation. Metrics that are
    missing anyway are skipped rather than reported again.

    Args:
        snapshot: Parsed snapshot document
        profile: Dashboard profile with ratio bounds, non-empty tables and headline total
        log: Optional sink for progress and summary lines

    Returns:
        QualityReport; quality_acceptable is True iff no warnings were found
    """
    if not isinstance(snapshot, Mapping):
        raise TypeError(f"snapshot must be a mapping, got {type(snapshot).__name__}")

    if log:
        log("Validating data quality...")

    report = QualityReport()

    headline = profile.headline_total
    if headline is not None:
        _check_headline_total(snapshot, profile, headline, report)
        if log and report.headline_total is not None:
            label = f"{headline.column} ({headline.label_value})" if headline.label_column else headline.column
            log(f"{label}: {report.headline_total:,.0f}")

    for descriptor in profile.metrics:
        rows = metric_rows(snapshot, profile, descriptor.name)
        if rows is None:
            continue

        for column, (lower, upper) in descriptor.ratio_columns.items():
            for index, row in enumerate(rows):
                if not isinstance(row, Mapping):
                    continue
                value = row.get(column)
                number = _ratio_value(value)
                if number is not None and not lower <= number <= upper:
                    row_id = _row_identifier(row, index, descriptor.label_column)
                    report.warnings.append(
                        warning(
                            IssueCode.RATIO_OUT_OF_RANGE,
                            f"{descriptor.name} row {row_id}: {column}={value} outside [{lower:g}, {upper:g}]",
                            metric=descriptor.name,
                            row=row_id,
                            column=column,
                            value=value,
                        )
                    )

        if descriptor.must_be_non_empty:
            if report.flow_count is None:
                report.flow_count = len(rows)
            if not rows:
                report.warnings.append(
                    warning(
                        IssueCode.EMPTY_RELATIONAL_TABLE,
                        f"no rows in {descriptor.name}",
                        metric=descriptor.name,
                    )
                )
            elif log:
                log(f"{descriptor.name} flows: {len(rows)}")

    logger.info(
        "quality_validation_completed",
        profile=profile.name,
        warnings=len(report.warnings),
        headline_total=report.headline_total,
    )

    if log:
        if report.quality_acceptable:
            log("Data quality validation passed")
        else:
            log("Data quality issues found:")
            for message in report.messages():
                log(f"  {message}")

    return report


def _check_headline_total(
    snapshot: Mapping[str, Any],
    profile: DashboardProfile,
    headline: HeadlineTotal,
    report: QualityReport,
) -> None:
    rows = metric_rows(snapshot, profile, headline.metric) or []
    value = None
    for row in rows:
        if not isinstance(row, Mapping):
            continue
        if headline.label_column is None or row.get(headline.label_column) == headline.label_value:
            value = row.get(headline.column)
            break

    if _is_number(value) and value > 0:
        report.headline_total = value
        return

    label = f" ({headline.label_column}={headline.label_value})" if headline.label_column else ""
    report.warnings.append(
        warning(
            IssueCode.INVALID_HEADLINE_TOTAL,
            f"no valid {headline.column} in {headline.metric}{label}",
            metric=headline.metric,
            row=headline.label_value,
            column=headline.column,
            value=value,
        )
    )


def _row_identifier(row: Mapping[str, Any], index: int, label_column: str | None) -> str | int:
    if label_column and isinstance(row.get(label_column), (str, int)):
        return row[label_column]
    return index
