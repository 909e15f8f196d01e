"""
Query fragment codec.

Converts the reusable request pieces (metric / APM / log / process queries,
widget time, markers) between configuration blocks and typed contracts.
"""

from __future__ import annotations

from typing import Any

from ..exceptions import MultipleQueriesSpecifiedError, NoQuerySpecifiedError
from ..models.contracts.queries import (
    QUERY_KINDS,
    ApmOrLogQuery,
    ApmOrLogQueryCompute,
    ApmOrLogQueryGroupBy,
    ApmOrLogQueryGroupBySort,
    ApmOrLogQuerySearch,
    ProcessQuery,
    TimeseriesRequest,
    WidgetMarker,
    WidgetRequest,
    WidgetTime,
)
from .fields import FieldReader, put_optional


# =============================================================================
# Widget time
# =============================================================================


def decode_time(reader: FieldReader | None) -> WidgetTime | None:
    if reader is None:
        return None
    return WidgetTime(live_span=reader.optional_string("live_span"))


def encode_time(time: WidgetTime) -> dict[str, str]:
    encoded: dict[str, str] = {}
    put_optional(encoded, "live_span", time.live_span)
    return encoded


# =============================================================================
# Markers
# =============================================================================


def decode_markers(readers: list[FieldReader]) -> list[WidgetMarker] | None:
    if not readers:
        return None
    return [
        WidgetMarker(
            value=reader.required_string("value"),
            display_type=reader.optional_string("display_type"),
            label=reader.optional_string("label"),
        )
        for reader in readers
    ]


def encode_markers(markers: list[WidgetMarker]) -> list[dict[str, str]]:
    encoded = []
    for marker in markers:
        item = {"value": marker.value}
        put_optional(item, "display_type", marker.display_type)
        put_optional(item, "label", marker.label)
        encoded.append(item)
    return encoded


# =============================================================================
# APM / Log query
# =============================================================================


def decode_apm_or_log_query(reader: FieldReader) -> ApmOrLogQuery:
    index = reader.required_string("index")
    compute = reader.required_map("compute")
    search = reader.map("search")

    group_by = None
    group_by_readers = reader.blocks("group_by")
    if group_by_readers:
        group_by = [_decode_group_by(item) for item in group_by_readers]

    return ApmOrLogQuery(
        index=index,
        compute=ApmOrLogQueryCompute(
            aggregation=compute.required_string("aggregation"),
            facet=compute.optional_string("facet"),
            interval=compute.optional_int("interval"),
        ),
        search=ApmOrLogQuerySearch(query=search.required_string("query")) if search else None,
        group_by=group_by,
    )


def _decode_group_by(reader: FieldReader) -> ApmOrLogQueryGroupBy:
    sort = reader.map("sort")
    return ApmOrLogQueryGroupBy(
        facet=reader.required_string("facet"),
        limit=reader.optional_int("limit"),
        sort=ApmOrLogQueryGroupBySort(
            aggregation=sort.required_string("aggregation"),
            order=sort.required_string("order"),
            facet=sort.optional_string("facet"),
        ) if sort else None,
    )


def encode_apm_or_log_query(query: ApmOrLogQuery) -> dict[str, Any]:
    compute = {"aggregation": query.compute.aggregation}
    put_optional(compute, "facet", query.compute.facet)
    if query.compute.interval is not None:
        compute["interval"] = str(query.compute.interval)

    encoded: dict[str, Any] = {"index": query.index, "compute": compute}
    if query.search is not None:
        encoded["search"] = {"query": query.search.query}
    if query.group_by is not None:
        encoded["group_by"] = [_encode_group_by(group_by) for group_by in query.group_by]
    return encoded


def _encode_group_by(group_by: ApmOrLogQueryGroupBy) -> dict[str, Any]:
    encoded: dict[str, Any] = {"facet": group_by.facet}
    put_optional(encoded, "limit", group_by.limit)
    if group_by.sort is not None:
        sort = {"aggregation": group_by.sort.aggregation, "order": group_by.sort.order}
        put_optional(sort, "facet", group_by.sort.facet)
        encoded["sort"] = sort
    return encoded


# =============================================================================
# Process query
# =============================================================================


def decode_process_query(reader: FieldReader) -> ProcessQuery:
    return ProcessQuery(
        metric=reader.required_string("metric"),
        search_by=reader.optional_string("search_by"),
        filter_by=reader.optional_string_list("filter_by"),
        limit=reader.optional_int("limit"),
    )


def encode_process_query(query: ProcessQuery) -> dict[str, Any]:
    encoded: dict[str, Any] = {"metric": query.metric}
    put_optional(encoded, "search_by", query.search_by)
    if query.filter_by is not None:
        encoded["filter_by"] = list(query.filter_by)
    put_optional(encoded, "limit", query.limit)
    return encoded


# =============================================================================
# Request slots
# =============================================================================


def decode_request_query(reader: FieldReader) -> dict[str, Any]:
    """
    Decode the single query alternative of a request block.

    Alternatives are looked up in the order q, apm_query, log_query,
    process_query. Exactly one must be populated.

    Returns:
        Keyword arguments for a ``WidgetRequest`` subclass

    Raises:
        NoQuerySpecifiedError: If no alternative is populated
        MultipleQueriesSpecifiedError: If several alternatives are populated
    """
    populated = [
        kind for kind in QUERY_KINDS
        if (reader.has(kind) if kind == "q" else reader.has_block(kind))
    ]
    if not populated:
        raise NoQuerySpecifiedError(reader.path)
    if len(populated) > 1:
        raise MultipleQueriesSpecifiedError(populated, reader.path)

    kind = populated[0]
    if kind == "q":
        return {"q": reader.required_string("q")}
    if kind == "process_query":
        return {"process_query": decode_process_query(reader.block(kind))}
    return {kind: decode_apm_or_log_query(reader.block(kind))}


def encode_request_query(request: WidgetRequest) -> dict[str, Any]:
    kind = request.query_kind
    if kind is None:
        return {}
    if kind == "q":
        return {"q": request.q}
    if kind == "process_query":
        return {kind: [encode_process_query(request.process_query)]}
    return {kind: [encode_apm_or_log_query(getattr(request, kind))]}


def decode_timeseries_requests(readers: list[FieldReader]) -> list[TimeseriesRequest]:
    return [
        TimeseriesRequest(
            **decode_request_query(reader),
            display_type=reader.optional_string("display_type"),
        )
        for reader in readers
    ]


def encode_timeseries_requests(requests: list[TimeseriesRequest]) -> list[dict[str, Any]]:
    encoded = []
    for request in requests:
        item = encode_request_query(request)
        put_optional(item, "display_type", request.display_type)
        encoded.append(item)
    return encoded
