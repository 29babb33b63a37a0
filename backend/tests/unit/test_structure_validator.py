"""Unit tests for snapshot structure validation."""
import copy
from typing import Any

import pytest

from portal_analytics.schemas.issues import IssueCode, Severity
from portal_analytics.schemas.profile import DashboardProfile
from portal_analytics.services.structure_validator import check_metric_record, validate_structure

MAU_BY_BLADE = "monthly_active_users_by_blade"


@pytest.fixture
def mau_profile() -> DashboardProfile:
    return DashboardProfile.from_requirements([MAU_BY_BLADE])


def test_valid_snapshot_passes(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that a factory snapshot has no errors or warnings."""
    report = validate_structure(snapshot, profile)

    assert report.passed
    assert report.errors == []
    assert report.warnings == []
    assert report.metric_count == 6
    assert report.blade_count == len(snapshot["metadata"]["blade_scope"])


def test_single_metric_snapshot_passes(mau_profile: DashboardProfile) -> None:
    """Test the minimal document with one required metric."""
    snapshot = {
        "queries_and_results": {
            MAU_BY_BLADE: {"query": "...", "result": [{"BladeName": "X", "MAU_28d": 100}]},
        }
    }

    report = validate_structure(snapshot, mau_profile)

    assert report.errors == []
    assert report.warnings == []


def test_empty_container_reports_missing_metric(mau_profile: DashboardProfile) -> None:
    """Test that an empty metrics container yields exactly one missing-metric error."""
    report = validate_structure({"queries_and_results": {}}, mau_profile)

    assert [issue.message for issue in report.errors] == [f"missing metric {MAU_BY_BLADE}"]
    assert report.errors[0].code == IssueCode.MISSING_METRIC
    assert report.errors[0].metric == MAU_BY_BLADE
    assert not report.passed


@pytest.mark.parametrize("snapshot", [{}, {"metadata": {}}, {"summary": {"total": 3}}])
def test_missing_container_reports_error_without_raising(
    snapshot: dict[str, Any], profile: DashboardProfile
) -> None:
    """Test that a document without any metrics container reports errors."""
    report = validate_structure(snapshot, profile)

    assert len(report.errors) >= 1
    assert any(issue.code == IssueCode.MISSING_METRICS_CONTAINER for issue in report.errors)
    # Every required metric is also reported as missing
    missing = {issue.metric for issue in report.errors if issue.code == IssueCode.MISSING_METRIC}
    assert missing == set(profile.required_metrics)


def test_missing_metadata_is_an_error_for_builtin_profile(
    snapshot: dict[str, Any], profile: DashboardProfile
) -> None:
    """Test that built-in profiles require the metadata section."""
    del snapshot["metadata"]

    report = validate_structure(snapshot, profile)

    assert [issue.message for issue in report.errors] == ["missing section metadata"]


def test_null_metadata_is_reported_as_missing(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that a metadata section set to null counts as absent."""
    snapshot["metadata"] = None

    report = validate_structure(snapshot, profile)

    assert not report.passed
    assert [issue.message for issue in report.errors] == ["missing section metadata"]
    assert report.errors[0].code == IssueCode.MISSING_SECTION


@pytest.mark.parametrize("metadata", [["generated_at"], "2025-09-19", 3])
def test_non_object_metadata_is_an_error(
    snapshot: dict[str, Any], profile: DashboardProfile, metadata: Any
) -> None:
    """Test that a metadata section which is not an object fails structure."""
    snapshot["metadata"] = metadata

    report = validate_structure(snapshot, profile)

    assert len(report.errors) == 1
    assert report.errors[0].message == (
        f"invalid section metadata: expected object, got {type(metadata).__name__}"
    )
    assert report.errors[0].value == type(metadata).__name__


def test_null_recommended_section_is_a_warning(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that a recommended section set to null is reported like an absent one."""
    snapshot["summary"] = None

    report = validate_structure(snapshot, profile)

    assert report.passed
    assert [issue.message for issue in report.warnings] == ["missing summary section"]


def test_non_array_result_reported_once_and_others_still_checked(
    snapshot: dict[str, Any], profile: DashboardProfile
) -> None:
    """Test that an object-valued result is one error and does not stop other checks."""
    snapshot["metrics"]["stickiness"]["results"] = {"PolicyMenu": 0.3}
    del snapshot["metrics"]["session_frequency"]
    del snapshot["metrics"]["average_sessions_per_user"]["query"]

    report = validate_structure(snapshot, profile)

    stickiness_errors = [issue for issue in report.errors if issue.metric == "stickiness"]
    assert len(stickiness_errors) == 1
    assert "stickiness" in stickiness_errors[0].message
    assert stickiness_errors[0].code == IssueCode.INVALID_RESULT
    assert stickiness_errors[0].value == "dict"

    assert any(issue.metric == "session_frequency" for issue in report.errors)
    assert [issue.metric for issue in report.warnings] == ["average_sessions_per_user"]


def test_missing_query_is_only_a_warning(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that rendering can proceed without query text."""
    snapshot["metrics"]["stickiness"]["query"] = ""

    report = validate_structure(snapshot, profile)

    assert report.passed
    assert len(report.warnings) == 1
    assert report.warnings[0].code == IssueCode.MISSING_QUERY
    assert report.warnings[0].severity == Severity.WARNING


def test_empty_result_array_is_structurally_valid(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that an empty list is accepted by the structure check."""
    snapshot["metrics"]["user_journey_sankey"]["results"] = []

    assert validate_structure(snapshot, profile).passed


def test_only_configured_alias_is_accepted(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that rows stored under an alias the profile does not accept are missing."""
    record = snapshot["metrics"]["stickiness"]
    record["data"] = record.pop("results")

    report = validate_structure(snapshot, profile)

    assert len(report.errors) == 1
    assert report.errors[0].message.startswith("missing result for metric stickiness")


def test_recommended_metadata_and_sections_are_warnings(
    snapshot: dict[str, Any], profile: DashboardProfile
) -> None:
    """Test that absent descriptive fields degrade to warnings."""
    del snapshot["metadata"]["data_source"]
    del snapshot["summary"]

    report = validate_structure(snapshot, profile)

    assert report.passed
    assert {issue.message for issue in report.warnings} == {
        "missing metadata.data_source",
        "missing summary section",
    }


def test_log_sink_receives_summary(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that progress lines are written to the supplied sink."""
    lines: list[str] = []

    validate_structure(snapshot, profile, log=lines.append)

    assert lines[0] == "Validating data structure..."
    assert "Data structure validation passed" in lines
    assert "Metrics available: 6" in lines


def test_snapshot_is_not_mutated(snapshot: dict[str, Any], profile: DashboardProfile) -> None:
    """Test that validation leaves the document untouched."""
    before = copy.deepcopy(snapshot)
    validate_structure(snapshot, profile)

    assert snapshot == before


def test_non_mapping_snapshot_raises(profile: DashboardProfile) -> None:
    """Test that passing a non-mapping is treated as a programming error."""
    with pytest.raises(TypeError):
        validate_structure([1, 2, 3], profile)


def test_check_metric_record_rejects_non_object_record() -> None:
    """Test that a record which is not an object is a single error."""
    issues = check_metric_record("stickiness", [0.3, 0.4], ["results"])

    assert len(issues) == 1
    assert issues[0].severity == Severity.ERROR
    assert issues[0].remediation is not None
