"""
Query Fragment Contracts

Typed request fragments shared by the request-carrying widget definitions:
metric queries, APM/log queries, process queries, plus the time and marker
settings several definitions reuse.

Field names match the dashboard API JSON, so ``model_dump(exclude_none=True)``
is the wire payload.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# -----------------------------------------------------------------------------
# Shared settings
# -----------------------------------------------------------------------------


class WidgetTime(BaseModel):
    """Time frame displayed by a widget."""

    live_span: str | None = Field(
        default=None, description='Live span shown by the widget (e.g. "1h", "4h")'
    )


class WidgetMarker(BaseModel):
    """Horizontal marker drawn on a graph."""

    value: str = Field(description='Marker value or range (e.g. "y = 15")')
    display_type: str | None = Field(
        default=None, description='Marker style (e.g. "error dashed")'
    )
    label: str | None = Field(default=None, description="Marker label")


# -----------------------------------------------------------------------------
# APM / Log query
# -----------------------------------------------------------------------------


class ApmOrLogQueryCompute(BaseModel):
    """Aggregation applied by an APM or log query."""

    aggregation: str = Field(description='Aggregation method (e.g. "count", "avg")')
    facet: str | None = Field(default=None, description="Facet to aggregate on")
    interval: int | None = Field(default=None, description="Rollup interval in ms")


class ApmOrLogQuerySearch(BaseModel):
    """Search filter of an APM or log query."""

    query: str = Field(description="Search query")


class ApmOrLogQueryGroupBySort(BaseModel):
    """Ordering of the groups produced by a group-by."""

    aggregation: str = Field(description="Aggregation used for sorting")
    order: str = Field(description='Sort order ("asc" or "desc")')
    facet: str | None = Field(default=None, description="Facet used for sorting")


class ApmOrLogQueryGroupBy(BaseModel):
    """One group-by clause of an APM or log query."""

    facet: str = Field(description="Facet to group by")
    limit: int | None = Field(default=None, description="Maximum number of groups")
    sort: ApmOrLogQueryGroupBySort | None = Field(
        default=None, description="Group ordering"
    )


class ApmOrLogQuery(BaseModel):
    """Structured query against APM traces or logs."""

    index: str = Field(description='Index to query ("*" for all)')
    compute: ApmOrLogQueryCompute = Field(description="Aggregation settings")
    search: ApmOrLogQuerySearch | None = Field(default=None, description="Search filter")
    group_by: list[ApmOrLogQueryGroupBy] | None = Field(
        default=None, description="Ordered group-by clauses"
    )


# -----------------------------------------------------------------------------
# Process query
# -----------------------------------------------------------------------------


class ProcessQuery(BaseModel):
    """Query against live process metrics."""

    metric: str = Field(description="Process metric name")
    search_by: str | None = Field(default=None, description="Process search string")
    filter_by: list[str] | None = Field(default=None, description="Tag filters")
    limit: int | None = Field(default=None, description="Maximum number of processes")


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

QUERY_KINDS = ("q", "apm_query", "log_query", "process_query")


class WidgetRequest(BaseModel):
    """
    A request slot: exactly one of the query alternatives is populated.

    ``q`` holds a bare metric query string.
    """

    q: str | None = Field(default=None, description="Metric query")
    apm_query: ApmOrLogQuery | None = Field(default=None, description="APM query")
    log_query: ApmOrLogQuery | None = Field(default=None, description="Log query")
    process_query: ProcessQuery | None = Field(default=None, description="Process query")

    @property
    def query_kind(self) -> str | None:
        """Name of the first populated query alternative, if any."""
        for kind in QUERY_KINDS:
            if getattr(self, kind) is not None:
                return kind
        return None


class TimeseriesRequest(WidgetRequest):
    """Request of a timeseries widget."""

    display_type: str | None = Field(
        default=None, description='How the series is drawn ("line", "area", "bars")'
    )
