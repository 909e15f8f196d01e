"""
Widget definition codecs.

One decode/encode pair per leaf definition kind. Required fields are always
validated and always emitted; optional fields are copied only when set.
The group definition lives in ``widgets`` since it recurses into the
widget codec.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..models.contracts.widgets import (
    AlertGraphDefinition,
    AlertValueDefinition,
    CheckStatusDefinition,
    FreeTextDefinition,
    IframeDefinition,
    ImageDefinition,
    LogStreamDefinition,
    NoteDefinition,
    TimeseriesDefinition,
    TitledDefinition,
)
from .fields import FieldReader, put_optional
from .queries import (
    decode_markers,
    decode_time,
    decode_timeseries_requests,
    encode_markers,
    encode_time,
    encode_timeseries_requests,
)


@dataclass(frozen=True)
class DefinitionCodec:
    """Conversion functions for one definition kind."""

    type: str
    decode: Callable[[FieldReader], Any]
    encode: Callable[[Any], dict[str, Any]]

    @property
    def config_key(self) -> str:
        return f"{self.type}_definition"


def _decode_title(reader: FieldReader) -> dict[str, str | None]:
    return {
        "title": reader.optional_string("title"),
        "title_size": reader.optional_string("title_size"),
        "title_align": reader.optional_string("title_align"),
    }


def _encode_title(definition: TitledDefinition, encoded: dict[str, Any]) -> None:
    put_optional(encoded, "title", definition.title)
    put_optional(encoded, "title_size", definition.title_size)
    put_optional(encoded, "title_align", definition.title_align)


def _encode_time(definition: Any, encoded: dict[str, Any]) -> None:
    if definition.time is not None:
        encoded["time"] = encode_time(definition.time)


# =============================================================================
# Alert Graph
# =============================================================================


def decode_alert_graph_definition(reader: FieldReader) -> AlertGraphDefinition:
    return AlertGraphDefinition(
        alert_id=reader.required_string("alert_id"),
        viz_type=reader.required_string("viz_type"),
        **_decode_title(reader),
        time=decode_time(reader.map("time")),
    )


def encode_alert_graph_definition(definition: AlertGraphDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "alert_id": definition.alert_id,
        "viz_type": definition.viz_type,
    }
    _encode_title(definition, encoded)
    _encode_time(definition, encoded)
    return encoded


# =============================================================================
# Alert Value
# =============================================================================


def decode_alert_value_definition(reader: FieldReader) -> AlertValueDefinition:
    return AlertValueDefinition(
        alert_id=reader.required_string("alert_id"),
        precision=reader.optional_int("precision"),
        unit=reader.optional_string("unit"),
        text_size=reader.optional_string("text_size"),
        text_align=reader.optional_string("text_align"),
        **_decode_title(reader),
    )


def encode_alert_value_definition(definition: AlertValueDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {"alert_id": definition.alert_id}
    put_optional(encoded, "precision", definition.precision)
    put_optional(encoded, "unit", definition.unit)
    put_optional(encoded, "text_size", definition.text_size)
    put_optional(encoded, "text_align", definition.text_align)
    _encode_title(definition, encoded)
    return encoded


# =============================================================================
# Check Status
# =============================================================================


def decode_check_status_definition(reader: FieldReader) -> CheckStatusDefinition:
    return CheckStatusDefinition(
        check=reader.required_string("check"),
        grouping=reader.required_string("grouping"),
        group=reader.optional_string("group"),
        group_by=reader.optional_string_list("group_by"),
        tags=reader.optional_string_list("tags"),
        **_decode_title(reader),
        time=decode_time(reader.map("time")),
    )


def encode_check_status_definition(definition: CheckStatusDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "check": definition.check,
        "grouping": definition.grouping,
    }
    put_optional(encoded, "group", definition.group)
    if definition.group_by is not None:
        encoded["group_by"] = list(definition.group_by)
    if definition.tags is not None:
        encoded["tags"] = list(definition.tags)
    _encode_title(definition, encoded)
    _encode_time(definition, encoded)
    return encoded


# =============================================================================
# Free Text
# =============================================================================


def decode_free_text_definition(reader: FieldReader) -> FreeTextDefinition:
    return FreeTextDefinition(
        text=reader.required_string("text"),
        color=reader.optional_string("color"),
        font_size=reader.optional_string("font_size"),
        text_align=reader.optional_string("text_align"),
    )


def encode_free_text_definition(definition: FreeTextDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {"text": definition.text}
    put_optional(encoded, "color", definition.color)
    put_optional(encoded, "font_size", definition.font_size)
    put_optional(encoded, "text_align", definition.text_align)
    return encoded


# =============================================================================
# Iframe / Image
# =============================================================================


def decode_iframe_definition(reader: FieldReader) -> IframeDefinition:
    return IframeDefinition(url=reader.required_string("url"))


def encode_iframe_definition(definition: IframeDefinition) -> dict[str, Any]:
    return {"url": definition.url}


def decode_image_definition(reader: FieldReader) -> ImageDefinition:
    return ImageDefinition(
        url=reader.required_string("url"),
        sizing=reader.optional_string("sizing"),
        margin=reader.optional_string("margin"),
    )


def encode_image_definition(definition: ImageDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {"url": definition.url}
    put_optional(encoded, "sizing", definition.sizing)
    put_optional(encoded, "margin", definition.margin)
    return encoded


# =============================================================================
# Log Stream
# =============================================================================


def decode_log_stream_definition(reader: FieldReader) -> LogStreamDefinition:
    return LogStreamDefinition(
        logset=reader.required_string("logset"),
        query=reader.optional_string("query"),
        columns=reader.optional_string_list("columns"),
        **_decode_title(reader),
        time=decode_time(reader.map("time")),
    )


def encode_log_stream_definition(definition: LogStreamDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {"logset": definition.logset}
    put_optional(encoded, "query", definition.query)
    if definition.columns is not None:
        encoded["columns"] = list(definition.columns)
    _encode_title(definition, encoded)
    _encode_time(definition, encoded)
    return encoded


# =============================================================================
# Note
# =============================================================================


def decode_note_definition(reader: FieldReader) -> NoteDefinition:
    return NoteDefinition(
        content=reader.required_string("content"),
        background_color=reader.optional_string("background_color"),
        font_size=reader.optional_string("font_size"),
        text_align=reader.optional_string("text_align"),
        show_tick=reader.optional_bool("show_tick"),
        tick_pos=reader.optional_string("tick_pos"),
        tick_edge=reader.optional_string("tick_edge"),
    )


def encode_note_definition(definition: NoteDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {"content": definition.content}
    put_optional(encoded, "background_color", definition.background_color)
    put_optional(encoded, "font_size", definition.font_size)
    put_optional(encoded, "text_align", definition.text_align)
    put_optional(encoded, "show_tick", definition.show_tick)
    put_optional(encoded, "tick_pos", definition.tick_pos)
    put_optional(encoded, "tick_edge", definition.tick_edge)
    return encoded


# =============================================================================
# Timeseries
# =============================================================================


def decode_timeseries_definition(reader: FieldReader) -> TimeseriesDefinition:
    return TimeseriesDefinition(
        requests=decode_timeseries_requests(reader.required_blocks("request")),
        markers=decode_markers(reader.blocks("marker")),
        **_decode_title(reader),
        show_legend=reader.optional_bool("show_legend"),
        legend_size=reader.optional_string("legend_size"),
        time=decode_time(reader.map("time")),
    )


def encode_timeseries_definition(definition: TimeseriesDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "request": encode_timeseries_requests(definition.requests),
    }
    if definition.markers is not None:
        encoded["marker"] = encode_markers(definition.markers)
    _encode_title(definition, encoded)
    put_optional(encoded, "show_legend", definition.show_legend)
    put_optional(encoded, "legend_size", definition.legend_size)
    _encode_time(definition, encoded)
    return encoded


# =============================================================================
# Registry
# =============================================================================

LEAF_DEFINITION_CODECS: dict[str, DefinitionCodec] = {
    codec.type: codec
    for codec in (
        DefinitionCodec("alert_graph", decode_alert_graph_definition, encode_alert_graph_definition),
        DefinitionCodec("alert_value", decode_alert_value_definition, encode_alert_value_definition),
        DefinitionCodec("check_status", decode_check_status_definition, encode_check_status_definition),
        DefinitionCodec("free_text", decode_free_text_definition, encode_free_text_definition),
        DefinitionCodec("iframe", decode_iframe_definition, encode_iframe_definition),
        DefinitionCodec("image", decode_image_definition, encode_image_definition),
        DefinitionCodec("log_stream", decode_log_stream_definition, encode_log_stream_definition),
        DefinitionCodec("note", decode_note_definition, encode_note_definition),
        DefinitionCodec("timeseries", decode_timeseries_definition, encode_timeseries_definition),
    )
}
