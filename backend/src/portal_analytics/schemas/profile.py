"""Declarative dashboard profiles.

A profile describes what one dashboard needs from a snapshot: where the
metrics live, which alias holds each metric's rows, which metrics must be
present, and which columns carry bounded ratios. Validators and projection
helpers are driven entirely by this configuration.
"""
import enum

from pydantic import BaseModel, Field, model_validator


class ChartKind(str, enum.Enum):
    """How the dashboard presents a metric."""

    BAR = "bar"
    LINE = "line"
    DOUGHNUT = "doughnut"
    FLOW = "flow"
    TABLE = "table"


class FlowColumns(BaseModel):
    """Column names of a relational (journey / co-occurrence) table."""

    source: str = "source"
    target: str = "target"
    value: str = "value"


class MetricDescriptor(BaseModel):
    """Per-metric descriptor used in place of per-dashboard chart code."""

    name: str = Field(..., min_length=1, description="Key in the metrics container")
    chart: ChartKind = Field(default=ChartKind.BAR)
    label_column: str | None = Field(default=None, description="Column identifying a row (e.g. blade name)")
    value_columns: list[str] = Field(default_factory=list, description="Columns plotted by the dashboard")
    ratio_columns: dict[str, tuple[float, float]] = Field(
        default_factory=dict,
        description="Columns holding bounded ratios, mapped to inclusive (lower, upper) bounds",
    )
    flow: FlowColumns | None = Field(default=None, description="Set for relational tables")
    must_be_non_empty: bool = Field(default=False)
    required: bool = Field(default=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "MetricDescriptor":
        for column, (lower, upper) in self.ratio_columns.items():
            if lower > upper:
                raise ValueError(f"ratio bounds for {column} are inverted: {lower} > {upper}")
        return self


class HeadlineTotal(BaseModel):
    """Locates the overall distinct-user count within a metric's rows."""

    metric: str
    column: str
    label_column: str | None = Field(default=None, description="Column used to pick the row")
    label_value: str | None = Field(default=None, description="Value the label column must equal")


class DashboardProfile(BaseModel):
    """Everything a dashboard expects from a snapshot."""

    name: str = "custom"
    snapshot_file: str | None = Field(default=None, description="Snapshot filename the dashboard fetches")
    metrics_container_keys: list[str] = Field(default_factory=lambda: ["queries_and_results", "metrics"])
    result_aliases: list[str] = Field(default_factory=lambda: ["result", "results", "data"])
    required_sections: list[str] = Field(default_factory=list)
    recommended_sections: list[str] = Field(default_factory=list)
    recommended_metadata: list[str] = Field(default_factory=list)
    blade_scope_keys: list[str] = Field(default_factory=lambda: ["blade_scope", "blades"])
    metrics: list[MetricDescriptor] = Field(default_factory=list)
    headline_total: HeadlineTotal | None = None

    @classmethod
    def from_requirements(
        cls,
        required_metrics: list[str],
        ratio_columns: dict[str, dict[str, tuple[float, float]]] | None = None,
        non_empty: list[str] | None = None,
        headline_total: HeadlineTotal | None = None,
        **kwargs,
    ) -> "DashboardProfile":
        """
        Build a profile from plain lists instead of descriptors.

        Args:
            required_metrics: Metric names that must be present
            ratio_columns: metric -> column -> (lower, upper)
            non_empty: Metric names whose rows must not be empty
            headline_total: Optional headline total locator

        Returns:
            DashboardProfile
        """
        ratio_columns = ratio_columns or {}
        non_empty = non_empty or []
        names = list(dict.fromkeys([*required_metrics, *ratio_columns, *non_empty]))
        metrics = [
            MetricDescriptor(
                name=name,
                ratio_columns=ratio_columns.get(name, {}),
                must_be_non_empty=name in non_empty,
                chart=ChartKind.FLOW if name in non_empty else ChartKind.BAR,
                required=name in required_metrics,
            )
            for name in names
        ]
        return cls(metrics=metrics, headline_total=headline_total, **kwargs)

    @property
    def required_metrics(self) -> list[str]:
        return [m.name for m in self.metrics if m.required]

    @property
    def ratio_bounds(self) -> dict[str, dict[str, tuple[float, float]]]:
        return {m.name: m.ratio_columns for m in self.metrics if m.ratio_columns}

    @property
    def non_empty_metrics(self) -> list[str]:
        return [m.name for m in self.metrics if m.must_be_non_empty]

    def descriptor(self, name: str) -> MetricDescriptor | None:
        for metric in self.metrics:
            if metric.name == name:
                return metric
        return None
