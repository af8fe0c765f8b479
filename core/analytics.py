# =============================================================================
# core/analytics.py  —  Analytics tools
# =============================================================================
#
# Dixa analytics has two families:
#   metrics  → aggregated numbers (e.g. "closed_conversations" → Count)
#   records  → row-level data (e.g. "ratings")
#
# Typical flow for the agent:
#   listAnalyticsMetrics / listAnalyticsRecords   → discover IDs
#   getAnalyticsMetric / getAnalyticsRecord       → discover properties
#   getAnalyticsFilter                            → discover filter values
#   getAnalyticsMetricsData / getAnalyticsRecordsData → query data
#
# The two data endpoints POST a JSON body but only read data, so they are as
# safe to retry as the GETs.
#
# FILTER SHAPES DIFFER ON PURPOSE:
#   metrics data takes  filters=[{"attribute": ..., "values": [...]}]
#   records data takes  filters={"<attribute>": [...]}
#   and the period filters differ too (Preset vs explicit from/to).
# =============================================================================

from core.adapter import make_tool
from core.models import Endpoint
from core.schema import (
    PRESET_PERIOD,
    RANGE_PERIOD,
    ParameterSchema,
    filter_list,
    filter_map,
    identifier,
    page_key,
    page_limit,
    period_filter,
    string,
    string_list,
)

_PAGING = ("pageKey", "pageLimit")

LIST_ANALYTICS_METRICS = make_tool(
    name="listAnalyticsMetrics",
    description=(
        "List all available analytics metric IDs from Dixa that can be used to fetch data in "
        "Get Metric Data. These metrics represent different types of measurements and analytics "
        "that can be queried."
    ),
    parameters=ParameterSchema.of(page_key(), page_limit()),
    endpoint=Endpoint(method="GET", path="/analytics/metrics",
                      action="fetch analytics metrics", query=_PAGING),
)

LIST_ANALYTICS_RECORDS = make_tool(
    name="listAnalyticsRecords",
    description=(
        "List all available analytics record IDs from Dixa that can be used to fetch data in "
        "Get Metric Records Data. These records represent different types of data that can be queried."
    ),
    parameters=ParameterSchema.of(page_key(), page_limit()),
    endpoint=Endpoint(method="GET", path="/analytics/records",
                      action="fetch analytics records", query=_PAGING),
)

GET_ANALYTICS_METRIC = make_tool(
    name="getAnalyticsMetric",
    description=(
        "Get detailed information about a specific analytics metric from Dixa. This endpoint lists "
        "all available properties of a metric that can be used for querying its data."
    ),
    parameters=ParameterSchema.of(
        identifier("metricId", "The ID of the metric to fetch information for (e.g., 'csat')"),
    ),
    endpoint=Endpoint(method="GET", path="/analytics/metrics/{metricId}",
                      action="fetch analytics metric"),
)

GET_ANALYTICS_RECORD = make_tool(
    name="getAnalyticsRecord",
    description=(
        "Get detailed information about a specific analytics record from Dixa. This endpoint lists "
        "all available properties of a record that can be used for querying its data."
    ),
    parameters=ParameterSchema.of(
        identifier("recordId", "The ID of the record to fetch information for (e.g., 'ratings')"),
    ),
    endpoint=Endpoint(method="GET", path="/analytics/records/{recordId}",
                      action="fetch analytics record"),
)

GET_ANALYTICS_FILTER = make_tool(
    name="getAnalyticsFilter",
    description=(
        "Get possible values to be used with a given analytics filter attribute from Dixa. Filter "
        "attributes are not metric or record specific, so one filter attribute can be used with "
        "multiple metrics/records. When a filter value is not relevant for a specific metric/record, "
        "it is simply ignored."
    ),
    parameters=ParameterSchema.of(
        identifier(
            "filterAttribute",
            "The filter attribute to get values for (e.g., 'agent_id', 'queue_id', 'channel')",
        ),
        page_key(),
        page_limit(),
    ),
    endpoint=Endpoint(method="GET", path="/analytics/filter/{filterAttribute}",
                      action="fetch analytics filter values", query=_PAGING),
)

GET_ANALYTICS_METRICS_DATA = make_tool(
    name="getAnalyticsMetricsData",
    description=(
        "Call listAnalyticsMetrics before calling this endpoint to get the available metrics. "
        "Get analytics data for a specific metric with filters, period settings, and aggregations. "
        "This endpoint allows you to query analytics metrics data with custom filters, period "
        "settings, aggregations, and timezone."
    ),
    parameters=ParameterSchema.of(
        identifier("metricId", "The ID of the metric to fetch data for (e.g., 'closed_conversations')"),
        period_filter("periodFilter", "The period filter configuration using preset periods",
                      shape=PRESET_PERIOD),
        filter_list("filters", "Array of filters to apply"),
        string_list("aggregations", "Array of aggregations to apply (e.g., ['Count'])"),
        string("timezone", "The timezone to use for the data (e.g., 'Europe/Copenhagen')", min_length=1),
        page_key(),
        page_limit(),
    ),
    endpoint=Endpoint(
        method="POST",
        path="/analytics/metrics",
        action="fetch analytics metrics data",
        query=_PAGING,
        body=(
            ("metricId", "id"),
            ("periodFilter", "periodFilter"),
            ("filters", "filters"),
            ("aggregations", "aggregations"),
            ("timezone", "timezone"),
        ),
    ),
)

GET_ANALYTICS_RECORDS_DATA = make_tool(
    name="getAnalyticsRecordsData",
    description="Get analytics data for a specific record from Dixa.",
    parameters=ParameterSchema.of(
        identifier("recordId", "The ID of the record to fetch data for"),
        period_filter("periodFilter", "Time period to fetch data for", shape=RANGE_PERIOD),
        filter_map("filters", "Optional filters to apply to the data"),
        string("timezone", "Timezone to use for the data (e.g., 'Europe/Copenhagen')", min_length=1),
        page_key(),
        page_limit(default=None),
    ),
    endpoint=Endpoint(
        method="POST",
        path="/analytics/records/{recordId}/data",
        action="fetch analytics records data",
        query=_PAGING,
        body=(
            ("periodFilter", "periodFilter"),
            ("filters", "filters"),
            ("timezone", "timezone"),
        ),
    ),
)

TOOLS = (
    LIST_ANALYTICS_METRICS,
    LIST_ANALYTICS_RECORDS,
    GET_ANALYTICS_METRIC,
    GET_ANALYTICS_RECORD,
    GET_ANALYTICS_FILTER,
    GET_ANALYTICS_METRICS_DATA,
    GET_ANALYTICS_RECORDS_DATA,
)
