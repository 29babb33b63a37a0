"""Built-in profiles for the dashboard variants that consume snapshots."""
from portal_analytics.schemas.profile import (
    ChartKind,
    DashboardProfile,
    FlowColumns,
    HeadlineTotal,
    MetricDescriptor,
)

UNIT_RATIO = (0.0, 1.0)
PERCENTAGE = (0.0, 100.0)

RECOMMENDED_METADATA = ["generated_at", "data_source", "blade_scope"]


class UnknownProfileError(KeyError):
    """Raised when a profile name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown profile '{name}' (available: {', '.join(available_profiles())})")

    def __str__(self) -> str:
        return self.args[0]


HACKATHON = DashboardProfile(
    name="hackathon",
    snapshot_file="test_ver11.json",
    metrics_container_keys=["metrics"],
    result_aliases=["results"],
    required_sections=["metadata"],
    recommended_sections=["summary"],
    recommended_metadata=RECOMMENDED_METADATA,
    metrics=[
        MetricDescriptor(
            name="monthly_active_users",
            label_column="name",
            value_columns=["MAU_by_Blade"],
        ),
        MetricDescriptor(
            name="weekly_active_users_trend",
            chart=ChartKind.LINE,
            label_column="name",
            value_columns=["WAU"],
        ),
        MetricDescriptor(
            name="stickiness",
            label_column="name",
            value_columns=["Stickiness"],
            ratio_columns={"Stickiness": UNIT_RATIO},
        ),
        MetricDescriptor(
            name="average_sessions_per_user",
            label_column="name",
            value_columns=["AvgSessionsPerUser"],
        ),
        MetricDescriptor(
            name="user_journey_sankey",
            chart=ChartKind.FLOW,
            flow=FlowColumns(source="Source", target="Target", value="FlowCount"),
            must_be_non_empty=True,
        ),
        MetricDescriptor(
            name="session_frequency",
            label_column="name",
            value_columns=["AvgActiveDaysPerUser"],
        ),
    ],
    headline_total=HeadlineTotal(
        metric="monthly_active_users",
        column="MAU_Overall",
        label_column="name",
        label_value="Overall",
    ),
)

POLICY = DashboardProfile(
    name="policy",
    snapshot_file="test_ver08.json",
    metrics_container_keys=["queries_and_results"],
    result_aliases=["data"],
    required_sections=["metadata"],
    recommended_metadata=["generated_at", "data_source", "blades"],
    metrics=[
        MetricDescriptor(
            name="weekly_active_users",
            chart=ChartKind.LINE,
            label_column="name",
            value_columns=["WAU"],
        ),
        MetricDescriptor(
            name="stickiness",
            label_column="name",
            value_columns=["Stickiness"],
            ratio_columns={"Stickiness": UNIT_RATIO},
        ),
        MetricDescriptor(
            name="average_sessions_per_user",
            label_column="name",
            value_columns=["AvgSessionsPerUser"],
        ),
        MetricDescriptor(
            name="user_journey",
            chart=ChartKind.FLOW,
            flow=FlowColumns(),
            must_be_non_empty=True,
        ),
        MetricDescriptor(
            name="session_frequency",
            label_column="name",
            value_columns=["AvgActiveDaysPerUser"],
        ),
        MetricDescriptor(
            name="top_blades_by_loads_and_users",
            label_column="name",
            value_columns=["TotalLoads", "UniqueUsers"],
        ),
        MetricDescriptor(
            name="repeat_visitors",
            label_column="name",
            value_columns=["RepeatVisitorPercentage"],
            ratio_columns={"RepeatVisitorPercentage": PERCENTAGE},
        ),
        MetricDescriptor(
            name="first_time_users",
            label_column="name",
            value_columns=["NewUsersThisMonth"],
        ),
        MetricDescriptor(
            name="day_of_week_engagement",
            chart=ChartKind.LINE,
            label_column="DayOfWeek",
            value_columns=["ActiveUsers"],
        ),
        MetricDescriptor(
            name="peak_hours_usage",
            chart=ChartKind.LINE,
            label_column="HourOfDay",
            value_columns=["Sessions"],
        ),
    ],
)

NETSEC = DashboardProfile(
    name="netsec",
    snapshot_file="netsec_ver02.json",
    metrics_container_keys=["queries_and_results"],
    result_aliases=["result"],
    required_sections=["metadata"],
    recommended_metadata=["generated_at", "data_source"],
    metrics=[
        MetricDescriptor(
            name="monthly_active_users_by_blade",
            label_column="BladeName",
            value_columns=["MAU_28d"],
        ),
        MetricDescriptor(
            name="weekly_active_users_trend",
            chart=ChartKind.LINE,
            label_column="BladeName",
            value_columns=["WAU"],
        ),
        MetricDescriptor(
            name="user_journey_sankey_data",
            chart=ChartKind.FLOW,
            flow=FlowColumns(source="Blade1", target="Blade2", value="CooccurrenceCount"),
            must_be_non_empty=True,
        ),
        MetricDescriptor(
            name="average_sessions_per_user",
            chart=ChartKind.TABLE,
            label_column="Metric",
            value_columns=["Value"],
        ),
        MetricDescriptor(
            name="session_frequency",
            chart=ChartKind.TABLE,
            label_column="Metric",
            value_columns=["Value"],
        ),
    ],
)

_PROFILES = {profile.name: profile for profile in (HACKATHON, POLICY, NETSEC)}


def available_profiles() -> list[str]:
    return sorted(_PROFILES)


def get_profile(name: str) -> DashboardProfile:
    """
    Look up a built-in profile by name.

    Raises:
        UnknownProfileError: If no profile has that name
    """
    try:
        return _PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name) from None
