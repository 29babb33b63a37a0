"""
Snapshot loading from disk or HTTP, with an explicit fallback combinator.

Dashboards fetch one JSON document per page load and substitute a snapshot
captured at authoring time when the fetch fails. Here the fetch and the
substitution are separate pieces: loaders raise SnapshotLoadError, and
with_fallback()/with_fallback_async() wrap any loader so that a load error
yields the embedded snapshot instead.
"""
import copy
import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)

Snapshot = dict[str, Any]


class SnapshotLoadError(Exception):
    """Raised when a snapshot cannot be obtained."""

    def __init__(self, source: str, message: str):
        self.source = source
        self.message = message
        super().__init__(f"{message}: {source}")


class SnapshotNotFoundError(SnapshotLoadError):
    """Raised when the snapshot file does not exist."""

    def __init__(self, source: str):
        super().__init__(source, "Data file not found")


class SnapshotParseError(SnapshotLoadError):
    """Raised when the snapshot is not a JSON object."""

    def __init__(self, source: str, detail: str):
        self.detail = detail
        super().__init__(source, f"Error parsing JSON ({detail})")


class SnapshotFetchError(SnapshotLoadError):
    """Raised on network errors and non-success HTTP responses."""

    def __init__(self, source: str, detail: str, status_code: int | None = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(source, f"Failed to fetch snapshot ({detail})")


@dataclass(frozen=True)
class LoadedSnapshot:
    """A snapshot together with where it came from."""

    data: Snapshot
    source: str
    fallback_reason: str | None = None

    @property
    def used_fallback(self) -> bool:
        return self.fallback_reason is not None


def parse_snapshot(text: str, source: str) -> Snapshot:
    """
    Parse snapshot text as a whole JSON document.

    Raises:
        SnapshotParseError: If the text is not valid JSON or not an object
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotParseError(source, str(e)) from e

    if not isinstance(data, dict):
        raise SnapshotParseError(source, f"top-level value is {type(data).__name__}, expected object")
    return data


def read_snapshot(path: str | Path) -> LoadedSnapshot:
    """
    Read and parse a UTF-8 snapshot file.

    Raises:
        SnapshotNotFoundError: If the file does not exist
        SnapshotParseError: If the file is not valid UTF-8 JSON
    """
    path = Path(path)
    if not path.is_file():
        raise SnapshotNotFoundError(str(path))

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SnapshotParseError(str(path), f"not UTF-8: {e.reason}") from e

    data = parse_snapshot(text, str(path))
    logger.info("snapshot_loaded", source=str(path), size_bytes=len(text))
    return LoadedSnapshot(data=data, source=str(path))


async def fetch_snapshot(
    url: str,
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> LoadedSnapshot:
    """
    Fetch a snapshot over HTTP.

    Args:
        url: Snapshot URL
        timeout: Request timeout in seconds
        client: Optional client to reuse (a short-lived one is created otherwise)

    Raises:
        SnapshotFetchError: On transport errors or non-2xx responses
        SnapshotParseError: If the body is not a JSON object
    """
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout) as owned:
                response = await owned.get(url)
        else:
            response = await client.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        logger.warning("snapshot_fetch_timeout", url=url, timeout=timeout)
        raise SnapshotFetchError(url, f"timeout after {timeout}s") from e
    except httpx.HTTPError as e:
        logger.warning("snapshot_fetch_error", url=url, error=str(e))
        raise SnapshotFetchError(url, str(e)) from e

    if not response.is_success:
        logger.warning("snapshot_fetch_failed", url=url, status_code=response.status_code)
        raise SnapshotFetchError(url, f"HTTP {response.status_code}", status_code=response.status_code)

    data = parse_snapshot(response.text, url)
    logger.info("snapshot_fetched", url=url, size_bytes=len(response.content))
    return LoadedSnapshot(data=data, source=url)


def _embedded(embedded: Snapshot, error: SnapshotLoadError) -> LoadedSnapshot:
    logger.warning(
        "snapshot_fallback_used",
        source=error.source,
        reason=str(error),
    )
    return LoadedSnapshot(data=copy.deepcopy(embedded), source="embedded", fallback_reason=str(error))


def with_fallback(
    loader: Callable[..., LoadedSnapshot],
    embedded: Snapshot,
) -> Callable[..., LoadedSnapshot]:
    """
    Wrap a loader so a SnapshotLoadError yields the embedded snapshot.

    Each call returns a fresh copy of the embedded snapshot. Errors other
    than SnapshotLoadError propagate.
    """

    def load(*args: Any, **kwargs: Any) -> LoadedSnapshot:
        try:
            return loader(*args, **kwargs)
        except SnapshotLoadError as e:
            return _embedded(embedded, e)

    return load


def with_fallback_async(
    loader: Callable[..., Awaitable[LoadedSnapshot]],
    embedded: Snapshot,
) -> Callable[..., Awaitable[LoadedSnapshot]]:
    """Async counterpart of with_fallback() for fetch_snapshot-style loaders."""

    async def load(*args: Any, **kwargs: Any) -> LoadedSnapshot:
        try:
            return await loader(*args, **kwargs)
        except SnapshotLoadError as e:
            return _embedded(embedded, e)

    return load
