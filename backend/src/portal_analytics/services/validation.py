"""Run structure and quality validation in sequence."""
from collections.abc import Callable, Mapping
from typing import Any

from portal_analytics.schemas.profile import DashboardProfile
from portal_analytics.schemas.reports import ValidationSummary
from portal_analytics.services.quality_validator import validate_quality
from portal_analytics.services.structure_validator import validate_structure


def validate_snapshot(
    snapshot: Mapping[str, Any],
    profile: DashboardProfile,
    log: Callable[[str], None] | None = None,
) -> ValidationSummary:
    """
    Validate structure, then quality only if the structure passed.

    Args:
        snapshot: Parsed snapshot document
        profile: Dashboard profile
        log: Optional sink for progress and summary lines

    Returns:
        ValidationSummary (quality is None when structure failed)
    """
    structure = validate_structure(snapshot, profile, log=log)
    if not structure.passed:
        return ValidationSummary(structure=structure)
    return ValidationSummary(structure=structure, quality=validate_quality(snapshot, profile, log=log))
