"""Snapshot loading, validation and projection services."""

from portal_analytics.services.quality_validator import validate_quality
from portal_analytics.services.snapshot_loader import (
    LoadedSnapshot,
    SnapshotFetchError,
    SnapshotLoadError,
    SnapshotNotFoundError,
    SnapshotParseError,
    fetch_snapshot,
    parse_snapshot,
    read_snapshot,
    with_fallback,
    with_fallback_async,
)
from portal_analytics.services.structure_validator import validate_structure
from portal_analytics.services.validation import validate_snapshot

__all__ = [
    "LoadedSnapshot",
    "SnapshotFetchError",
    "SnapshotLoadError",
    "SnapshotNotFoundError",
    "SnapshotParseError",
    "fetch_snapshot",
    "parse_snapshot",
    "read_snapshot",
    "validate_quality",
    "validate_snapshot",
    "validate_structure",
    "with_fallback",
    "with_fallback_async",
]
