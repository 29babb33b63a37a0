#!/usr/bin/env python3
"""
Snapshot validation command.

Checks that a dashboard's JSON snapshot has the structure the dashboard
expects, then sanity-checks its values. Run from the directory holding the
snapshot, as a build or CI step.

Usage:
    # Validate the default snapshot (test_ver11.json) with the default profile
    portal-analytics-validate

    # Validate another file against another dashboard's profile
    portal-analytics-validate --file netsec_ver02.json --profile netsec

    # Validate a deployed snapshot
    portal-analytics-validate --url https://example.org/dashboard/test_ver11.json

    # List built-in profiles
    portal-analytics-validate --list-profiles

Exit codes:
    0  structure and quality checks passed
    1  any failure, including a missing file or malformed JSON
"""
import argparse
import asyncio
import sys

import structlog

from portal_analytics.config import settings
from portal_analytics.logging import setup_logging
from portal_analytics.profiles import UnknownProfileError, available_profiles, get_profile
from portal_analytics.services.snapshot_loader import (
    LoadedSnapshot,
    SnapshotLoadError,
    fetch_snapshot,
    read_snapshot,
)
from portal_analytics.services.validation import validate_snapshot

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portal-analytics-validate",
        description="Validate a dashboard snapshot's structure and data quality",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--file", help=f"Snapshot file (default: {settings.snapshot_path})")
    source.add_argument("--url", help="Fetch the snapshot over HTTP instead of reading a file")
    parser.add_argument(
        "--profile",
        default=settings.profile,
        help=f"Dashboard profile to validate against (default: {settings.profile})",
    )
    parser.add_argument("--list-profiles", action="store_true", help="List built-in profiles and exit")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    return parser


def load(args: argparse.Namespace) -> LoadedSnapshot:
    url = args.url or (None if args.file else settings.snapshot_url)
    if url:
        return asyncio.run(fetch_snapshot(url, timeout=settings.http_timeout_seconds))
    return read_snapshot(args.file or settings.snapshot_path)


def main(argv: list[str] | None = None) -> int:
    """
    Run the validator.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if args.list_profiles:
        for name in available_profiles():
            profile = get_profile(name)
            print(f"{name}: {profile.snapshot_file} ({len(profile.required_metrics)} required metrics)")
        return 0

    try:
        profile = get_profile(args.profile)
    except UnknownProfileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    try:
        snapshot = load(args)
    except SnapshotLoadError as e:
        logger.error("snapshot_load_failed", source=e.source, error=str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Snapshot: {snapshot.source} (profile: {profile.name})")
    summary = validate_snapshot(snapshot.data, profile, log=print)

    if not summary.structure.passed:
        print("Structure validation failed.")
    elif summary.passed:
        print("All validations passed! Dashboard should work correctly.")
    else:
        print("Some validations failed, but dashboard may still work.")

    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
