"""Typed contracts exchanged with the dashboard API."""

from .dashboards import Board, TemplateVariable
from .queries import (
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
from .widgets import (
    LAYOUT_TYPES,
    WIDGET_TYPES,
    AlertGraphDefinition,
    AlertValueDefinition,
    CheckStatusDefinition,
    Definition,
    FreeTextDefinition,
    GroupDefinition,
    IframeDefinition,
    ImageDefinition,
    LeafDefinition,
    LeafWidget,
    LogStreamDefinition,
    NoteDefinition,
    TimeseriesDefinition,
    UnknownDefinition,
    Widget,
    WidgetLayout,
)

__all__ = [
    "Board",
    "TemplateVariable",
    "ApmOrLogQuery",
    "ApmOrLogQueryCompute",
    "ApmOrLogQueryGroupBy",
    "ApmOrLogQueryGroupBySort",
    "ApmOrLogQuerySearch",
    "ProcessQuery",
    "TimeseriesRequest",
    "WidgetMarker",
    "WidgetRequest",
    "WidgetTime",
    "LAYOUT_TYPES",
    "WIDGET_TYPES",
    "AlertGraphDefinition",
    "AlertValueDefinition",
    "CheckStatusDefinition",
    "Definition",
    "FreeTextDefinition",
    "GroupDefinition",
    "IframeDefinition",
    "ImageDefinition",
    "LeafDefinition",
    "LeafWidget",
    "LogStreamDefinition",
    "NoteDefinition",
    "TimeseriesDefinition",
    "UnknownDefinition",
    "Widget",
    "WidgetLayout",
]
