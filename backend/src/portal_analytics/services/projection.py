"""
Projection helpers shared by the validators and the dashboards.

These encode the conventions the dashboards use to read a snapshot:
- the metrics container may be named differently between snapshot versions
- a metric's rows live under one of several aliases (result/results/data)
- the "show query" dialog reads each metric's verbatim query text
- blade identifiers are long paths and are shortened for display
- journey tables are merged into an undirected flow graph before drawing

Nothing here mutates the snapshot it is given.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from portal_analytics.schemas.profile import DashboardProfile, FlowColumns

MISSING = object()


def metrics_container(snapshot: Mapping[str, Any], profile: DashboardProfile) -> tuple[str | None, Any]:
    """
    Find the metrics container using the profile's accepted key names.

    Returns:
        (key, container) for the first key present, or (None, None)
    """
    for key in profile.metrics_container_keys:
        if key in snapshot:
            return key, snapshot[key]
    return None, None


def find_result(record: Mapping[str, Any], aliases: list[str]) -> tuple[str | None, Any]:
    """
    Locate a metric record's row sequence.

    Only the first alias present on the record is considered; a snapshot is
    not expected to carry the same rows under two names.

    Returns:
        (alias, value) or (None, MISSING) when no alias is present
    """
    for alias in aliases:
        if alias in record:
            return alias, record[alias]
    return None, MISSING


def result_rows(record: Any, aliases: list[str]) -> list[Any] | None:
    """Rows of a metric record, or None when absent or not a list."""
    if not isinstance(record, Mapping):
        return None
    _, value = find_result(record, aliases)
    return value if isinstance(value, list) else None


def metric_rows(snapshot: Mapping[str, Any], profile: DashboardProfile, metric: str) -> list[Any] | None:
    _, container = metrics_container(snapshot, profile)
    if not isinstance(container, Mapping):
        return None
    return result_rows(container.get(metric), profile.result_aliases)


def query_catalog(snapshot: Mapping[str, Any], profile: DashboardProfile) -> dict[str, str]:
    """
    Map metric name to its source query text.

    Metrics without a string query are left out; the dashboard shows no
    query for them.
    """
    _, container = metrics_container(snapshot, profile)
    if not isinstance(container, Mapping):
        return {}
    catalog = {}
    for name, record in container.items():
        if isinstance(record, Mapping) and isinstance(record.get("query"), str):
            catalog[name] = record["query"]
    return catalog


def blade_display_name(full_name: str) -> str:
    """Short label for a blade path, e.g. '.../Blade/PolicyMenuBlade' -> 'PolicyMenu'."""
    if full_name == "Overall":
        return full_name
    last = full_name.rsplit("/", 1)[-1]
    return last.replace("Blade", "").replace(".ReactView", "")


def share_of_total(value: float, total: float, digits: int = 1) -> float:
    """Percentage of total, rounded; 0.0 when total is not positive."""
    if total <= 0:
        return 0.0
    return round(value / total * 100, digits)


@dataclass
class JourneyLink:
    source: int
    target: int
    value: float
    label: str


@dataclass
class JourneyGraph:
    """Undirected flow graph built from a journey or co-occurrence table."""

    nodes: list[str] = field(default_factory=list)
    links: list[JourneyLink] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(link.value for link in self.links)

    def peak_share(self, digits: int = 1) -> float:
        """Share of the largest link in the total flow, as a percentage."""
        if not self.links:
            return 0.0
        return share_of_total(max(link.value for link in self.links), self.total, digits)


def build_journey_graph(rows: list[Mapping[str, Any]], columns: FlowColumns | None = None) -> JourneyGraph:
    """
    Merge a journey table into a graph with one link per blade pair.

    Flows A->B and B->A collapse into a single link whose value is their sum
    and whose label lists both directions. Nodes keep first-seen order.

    Args:
        rows: Journey rows
        columns: Source/target/value column names (defaults to source/target/value)

    Returns:
        JourneyGraph
    """
    columns = columns or FlowColumns()
    graph = JourneyGraph()
    index: dict[str, int] = {}
    links: dict[tuple[int, int], JourneyLink] = {}

    for row in rows:
        source = row[columns.source]
        target = row[columns.target]
        value = row[columns.value]
        for name in (source, target):
            if name not in index:
                index[name] = len(graph.nodes)
                graph.nodes.append(name)

        label = f"{blade_display_name(source)} → {blade_display_name(target)} ({value:,})"
        key = tuple(sorted((index[source], index[target])))
        if key in links:
            links[key].value += value
            links[key].label += f" + {label}"
        else:
            link = JourneyLink(source=index[source], target=index[target], value=value, label=label)
            links[key] = link
            graph.links.append(link)

    return graph
