"""
Widget Definition Contracts

Core types for the recursive widget model.

This module is the single source of truth for:
- Widget definition variants (NoteDefinition, TimeseriesDefinition, etc.)
- The definition unions, discriminated on ``type``
- Widgets and their free-layout geometry

A group definition holds ``LeafWidget`` children, whose definition union
has no group variant, so a group nested inside a group is rejected by
validation rather than by a depth check.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union, get_args

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag

from .queries import TimeseriesRequest, WidgetMarker, WidgetTime


# -----------------------------------------------------------------------------
# Literal Types
# -----------------------------------------------------------------------------

WidgetType = Literal[
    "alert_graph",
    "alert_value",
    "check_status",
    "free_text",
    "group",
    "iframe",
    "image",
    "log_stream",
    "note",
    "timeseries",
]

WIDGET_TYPES: tuple[str, ...] = get_args(WidgetType)

LayoutType = Literal["ordered", "free"]

LAYOUT_TYPES: tuple[str, ...] = get_args(LayoutType)

UNKNOWN_TAG = "unknown"


# -----------------------------------------------------------------------------
# Shared Supporting Types
# -----------------------------------------------------------------------------


class WidgetLayout(BaseModel):
    """Position and size of a widget on a free layout dashboard."""

    x: float | None = Field(default=None, description="Horizontal position")
    y: float | None = Field(default=None, description="Vertical position")
    width: float | None = Field(default=None, description="Widget width")
    height: float | None = Field(default=None, description="Widget height")


class TitledDefinition(BaseModel):
    """Title fields shared by most definitions."""

    title: str | None = Field(default=None, description="Widget title")
    title_size: str | None = Field(default=None, description="Title font size")
    title_align: str | None = Field(default=None, description="Title alignment")


# -----------------------------------------------------------------------------
# Leaf Definitions
# -----------------------------------------------------------------------------


class AlertGraphDefinition(TitledDefinition):
    """Graph of the metric behind a monitor."""

    type: Literal["alert_graph"] = Field(default="alert_graph", description="Widget type")
    alert_id: str = Field(description="Monitor ID")
    viz_type: str = Field(description='Visualization ("timeseries" or "toplist")')
    time: WidgetTime | None = Field(default=None, description="Time frame")


class AlertValueDefinition(TitledDefinition):
    """Current value of the metric behind a monitor."""

    type: Literal["alert_value"] = Field(default="alert_value", description="Widget type")
    alert_id: str = Field(description="Monitor ID")
    precision: int | None = Field(default=None, description="Decimal places shown")
    unit: str | None = Field(default=None, description="Unit shown next to the value")
    text_size: str | None = Field(default=None, description="Value font size")
    text_align: str | None = Field(default=None, description="Value alignment")


class CheckStatusDefinition(TitledDefinition):
    """Status of a service check."""

    type: Literal["check_status"] = Field(default="check_status", description="Widget type")
    check: str = Field(description="Service check name")
    grouping: str = Field(description='Grouping mode ("check" or "cluster")')
    group: str | None = Field(default=None, description="Group reported by the check")
    group_by: list[str] | None = Field(default=None, description="Tags to group by")
    tags: list[str] | None = Field(default=None, description="Tags to filter on")
    time: WidgetTime | None = Field(default=None, description="Time frame")


class FreeTextDefinition(BaseModel):
    """Static text."""

    type: Literal["free_text"] = Field(default="free_text", description="Widget type")
    text: str = Field(description="Text to display")
    color: str | None = Field(default=None, description="Text color")
    font_size: str | None = Field(default=None, description="Font size")
    text_align: str | None = Field(default=None, description="Text alignment")


class IframeDefinition(BaseModel):
    """Embedded web page."""

    type: Literal["iframe"] = Field(default="iframe", description="Widget type")
    url: str = Field(description="URL of the embedded page")


class ImageDefinition(BaseModel):
    """Embedded image."""

    type: Literal["image"] = Field(default="image", description="Widget type")
    url: str = Field(description="URL of the image")
    sizing: str | None = Field(default=None, description='Sizing ("zoom", "fit", "center")')
    margin: str | None = Field(default=None, description='Margin ("small" or "large")')


class LogStreamDefinition(TitledDefinition):
    """Live stream of log events."""

    type: Literal["log_stream"] = Field(default="log_stream", description="Widget type")
    logset: str = Field(description="Log set ID")
    query: str | None = Field(default=None, description="Log search query")
    columns: list[str] | None = Field(default=None, description="Columns to display")
    time: WidgetTime | None = Field(default=None, description="Time frame")


class NoteDefinition(BaseModel):
    """Markdown note."""

    type: Literal["note"] = Field(default="note", description="Widget type")
    content: str = Field(description="Note content")
    background_color: str | None = Field(default=None, description="Background color")
    font_size: str | None = Field(default=None, description="Font size")
    text_align: str | None = Field(default=None, description="Text alignment")
    show_tick: bool | None = Field(default=None, description="Whether to show a tick")
    tick_pos: str | None = Field(default=None, description="Tick position")
    tick_edge: str | None = Field(default=None, description="Edge the tick sits on")


class TimeseriesDefinition(TitledDefinition):
    """Metric graph over time."""

    type: Literal["timeseries"] = Field(default="timeseries", description="Widget type")
    requests: list[TimeseriesRequest] = Field(description="Series to draw")
    markers: list[WidgetMarker] | None = Field(default=None, description="Markers")
    show_legend: bool | None = Field(default=None, description="Whether to show a legend")
    legend_size: str | None = Field(default=None, description="Legend size")
    time: WidgetTime | None = Field(default=None, description="Time frame")


class UnknownDefinition(BaseModel):
    """
    Definition whose type this package does not model.

    Produced when reading dashboards that contain widgets created
    elsewhere; every field is kept so the payload survives a round trip.
    """

    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Widget type reported by the API")


# -----------------------------------------------------------------------------
# Discriminated Unions
# -----------------------------------------------------------------------------


def _definition_tag(value: Any) -> str | None:
    """Map a definition (dict or model) to its union tag."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if tag is None:
        return None
    if tag in WIDGET_TYPES:
        return tag
    return UNKNOWN_TAG


LeafDefinition = Annotated[
    Union[
        Annotated[AlertGraphDefinition, Tag("alert_graph")],
        Annotated[AlertValueDefinition, Tag("alert_value")],
        Annotated[CheckStatusDefinition, Tag("check_status")],
        Annotated[FreeTextDefinition, Tag("free_text")],
        Annotated[IframeDefinition, Tag("iframe")],
        Annotated[ImageDefinition, Tag("image")],
        Annotated[LogStreamDefinition, Tag("log_stream")],
        Annotated[NoteDefinition, Tag("note")],
        Annotated[TimeseriesDefinition, Tag("timeseries")],
        Annotated[UnknownDefinition, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(_definition_tag),
]


class LeafWidget(BaseModel):
    """A widget that may appear inside a group (any type except group)."""

    id: int | None = Field(default=None, description="Widget ID assigned by the API")
    layout: WidgetLayout | None = Field(default=None, description="Free layout geometry")
    definition: LeafDefinition = Field(description="Widget definition")


class GroupDefinition(BaseModel):
    """Container for an ordered list of non-group widgets."""

    type: Literal["group"] = Field(default="group", description="Widget type")
    layout_type: LayoutType = Field(description="Layout of the group's children")
    widgets: list[LeafWidget] = Field(default_factory=list, description="Child widgets")
    title: str | None = Field(default=None, description="Group title")


Definition = Annotated[
    Union[
        Annotated[AlertGraphDefinition, Tag("alert_graph")],
        Annotated[AlertValueDefinition, Tag("alert_value")],
        Annotated[CheckStatusDefinition, Tag("check_status")],
        Annotated[FreeTextDefinition, Tag("free_text")],
        Annotated[GroupDefinition, Tag("group")],
        Annotated[IframeDefinition, Tag("iframe")],
        Annotated[ImageDefinition, Tag("image")],
        Annotated[LogStreamDefinition, Tag("log_stream")],
        Annotated[NoteDefinition, Tag("note")],
        Annotated[TimeseriesDefinition, Tag("timeseries")],
        Annotated[UnknownDefinition, Tag(UNKNOWN_TAG)],
    ],
    Discriminator(_definition_tag),
]


class Widget(BaseModel):
    """A dashboard widget: one definition plus optional free-layout geometry."""

    id: int | None = Field(default=None, description="Widget ID assigned by the API")
    layout: WidgetLayout | None = Field(default=None, description="Free layout geometry")
    definition: Definition = Field(description="Widget definition")


# -----------------------------------------------------------------------------
# Type Guards (as functions)
# -----------------------------------------------------------------------------


def is_known_type(widget_type: str) -> bool:
    """Check if a definition type is modelled by this package."""
    return widget_type in WIDGET_TYPES
