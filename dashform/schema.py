"""
Resource Schema

Immutable descriptors for the dashboard resource configuration, built by
pure constructor functions, plus the validation pass run before any
configuration is decoded.

The widget schema comes in two flavours: ``widget_block()`` accepts every
definition kind, ``non_group_widget_block()`` accepts every kind except
``group_definition`` and is the element schema of a group's children.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from .exceptions import ConfigurationError, InvalidFieldValueError, MissingRequiredFieldError
from .models.contracts.widgets import LAYOUT_TYPES


class ValueType(str, Enum):
    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    LIST = "list"
    MAP = "map"


@dataclass(frozen=True)
class Block:
    """A set of named attributes (a nested block or a string map's members)."""

    attributes: Mapping[str, Attribute]

    def __post_init__(self):
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __contains__(self, name: str) -> bool:
        return name in self.attributes

    def __getitem__(self, name: str) -> Attribute:
        return self.attributes[name]


@dataclass(frozen=True)
class Attribute:
    """
    One attribute of a block.

    ``elem`` is a nested ``Block`` for lists of blocks and string maps with
    known members, or a ``ValueType`` for lists of primitives.
    """

    type: ValueType
    required: bool = False
    description: str = ""
    default: Any = None
    max_items: int | None = None
    elem: Block | ValueType | None = None
    allowed_values: tuple[str, ...] | None = None
    conflicts_with: tuple[str, ...] = field(default_factory=tuple)

    @property
    def zero_value(self) -> Any:
        """Value reported for the attribute when it is not set."""
        if self.default is not None:
            return self.default
        return {
            ValueType.STRING: "",
            ValueType.BOOL: False,
            ValueType.INT: 0,
            ValueType.FLOAT: 0.0,
            ValueType.LIST: [],
            ValueType.MAP: {},
        }[self.type]


# =============================================================================
# Attribute constructors
# =============================================================================


def _string(required: bool = False, description: str = "", **kwargs: Any) -> Attribute:
    return Attribute(ValueType.STRING, required=required, description=description, **kwargs)


def _bool(description: str = "", **kwargs: Any) -> Attribute:
    return Attribute(ValueType.BOOL, description=description, **kwargs)


def _int(description: str = "") -> Attribute:
    return Attribute(ValueType.INT, description=description)


def _float(required: bool = False) -> Attribute:
    return Attribute(ValueType.FLOAT, required=required)


def _string_list(required: bool = False, description: str = "") -> Attribute:
    return Attribute(
        ValueType.LIST, required=required, description=description, elem=ValueType.STRING
    )


def _single_block(block: Block, required: bool = False, description: str = "") -> Attribute:
    return Attribute(
        ValueType.LIST, required=required, description=description, max_items=1, elem=block
    )


def _block_list(
    block: Block,
    required: bool = False,
    description: str = "",
    conflicts_with: tuple[str, ...] = (),
) -> Attribute:
    return Attribute(
        ValueType.LIST,
        required=required,
        description=description,
        elem=block,
        conflicts_with=conflicts_with,
    )


def _string_map(block: Block, required: bool = False, description: str = "") -> Attribute:
    return Attribute(ValueType.MAP, required=required, description=description, elem=block)


def _title_attributes() -> dict[str, Attribute]:
    return {
        "title": _string(),
        "title_size": _string(),
        "title_align": _string(),
    }


# =============================================================================
# Shared blocks
# =============================================================================


def template_variable_block() -> Block:
    return Block({
        "name": _string(required=True, description="The name of the variable."),
        "prefix": _string(
            description=(
                "The tag prefix associated with the variable. Only tags with this "
                "prefix will appear in the variable dropdown."
            )
        ),
        "default": _string(
            description="The default value for the template variable on dashboard load."
        ),
    })


def widget_layout_block() -> Block:
    return Block({
        "x": _float(required=True),
        "y": _float(required=True),
        "width": _float(required=True),
        "height": _float(required=True),
    })


def widget_time_block() -> Block:
    return Block({"live_span": _string()})


def widget_marker_block() -> Block:
    return Block({
        "value": _string(required=True),
        "display_type": _string(),
        "label": _string(),
    })


# =============================================================================
# Query blocks
# =============================================================================


def metric_query_attribute() -> Attribute:
    return _string()


def apm_or_log_query_attribute() -> Attribute:
    return _single_block(Block({
        "index": _string(required=True),
        "compute": _string_map(
            Block({
                "aggregation": _string(required=True),
                "facet": _string(),
                "interval": _int(),
            }),
            required=True,
        ),
        "search": _string_map(Block({"query": _string(required=True)})),
        "group_by": _block_list(Block({
            "facet": _string(required=True),
            "limit": _int(),
            "sort": _string_map(Block({
                "aggregation": _string(required=True),
                "order": _string(required=True),
                "facet": _string(),
            })),
        })),
    }))


def process_query_attribute() -> Attribute:
    return _single_block(Block({
        "metric": _string(required=True),
        "search_by": _string(),
        "filter_by": _string_list(),
        "limit": _int(),
    }))


def timeseries_request_block() -> Block:
    # A request should implement exactly one of the query attributes
    return Block({
        "q": metric_query_attribute(),
        "apm_query": apm_or_log_query_attribute(),
        "log_query": apm_or_log_query_attribute(),
        "process_query": process_query_attribute(),
        "display_type": _string(),
    })


# =============================================================================
# Definition blocks
# =============================================================================


def alert_graph_definition_block() -> Block:
    return Block({
        "alert_id": _string(required=True),
        "viz_type": _string(required=True),
        **_title_attributes(),
        "time": _string_map(widget_time_block()),
    })


def alert_value_definition_block() -> Block:
    return Block({
        "alert_id": _string(required=True),
        "precision": _int(),
        "unit": _string(),
        "text_size": _string(),
        "text_align": _string(),
        **_title_attributes(),
    })


def check_status_definition_block() -> Block:
    return Block({
        "check": _string(required=True),
        "grouping": _string(required=True, allowed_values=("check", "cluster")),
        "group": _string(),
        "group_by": _string_list(),
        "tags": _string_list(),
        **_title_attributes(),
        "time": _string_map(widget_time_block()),
    })


def free_text_definition_block() -> Block:
    return Block({
        "text": _string(required=True),
        "color": _string(),
        "font_size": _string(),
        "text_align": _string(),
    })


def iframe_definition_block() -> Block:
    return Block({"url": _string(required=True)})


def image_definition_block() -> Block:
    return Block({
        "url": _string(required=True),
        "sizing": _string(),
        "margin": _string(),
    })


def log_stream_definition_block() -> Block:
    return Block({
        "logset": _string(required=True),
        "query": _string(),
        "columns": _string_list(),
        **_title_attributes(),
        "time": _string_map(widget_time_block()),
    })


def note_definition_block() -> Block:
    return Block({
        "content": _string(required=True),
        "background_color": _string(),
        "font_size": _string(),
        "text_align": _string(),
        "show_tick": _bool(),
        "tick_pos": _string(),
        "tick_edge": _string(),
    })


def timeseries_definition_block() -> Block:
    return Block({
        "request": _block_list(timeseries_request_block(), required=True),
        "marker": _block_list(widget_marker_block()),
        **_title_attributes(),
        "show_legend": _bool(),
        "legend_size": _string(),
        "time": _string_map(widget_time_block()),
    })


def group_definition_block() -> Block:
    return Block({
        "layout_type": _string(required=True, allowed_values=LAYOUT_TYPES),
        "widget": _block_list(
            non_group_widget_block(),
            required=True,
            description="The list of widgets in this group.",
        ),
        "title": _string(),
    })


# =============================================================================
# Widget blocks
# =============================================================================

LEAF_DEFINITION_BLOCKS = {
    "alert_graph_definition": ("an Alert Graph", alert_graph_definition_block),
    "alert_value_definition": ("an Alert Value", alert_value_definition_block),
    "check_status_definition": ("a Check Status", check_status_definition_block),
    "free_text_definition": ("a Free Text", free_text_definition_block),
    "iframe_definition": ("an Iframe", iframe_definition_block),
    "image_definition": ("an Image", image_definition_block),
    "log_stream_definition": ("a Log Stream", log_stream_definition_block),
    "note_definition": ("a Note", note_definition_block),
    "timeseries_definition": ("a Timeseries", timeseries_definition_block),
}


def _non_group_widget_attributes() -> dict[str, Attribute]:
    attributes = {
        "layout": _string_map(
            widget_layout_block(),
            description="The layout of the widget on a 'free' dashboard",
        ),
    }
    # A widget should implement exactly one of the following definitions
    for key, (label, build) in LEAF_DEFINITION_BLOCKS.items():
        attributes[key] = _single_block(
            build(), description=f"The definition for {label} widget"
        )
    return attributes


def non_group_widget_block() -> Block:
    """Schema for a widget that cannot contain other widgets."""
    return Block(_non_group_widget_attributes())


def widget_block() -> Block:
    """Schema for a top-level widget: any non-group widget, or a group."""
    attributes = _non_group_widget_attributes()
    attributes["group_definition"] = _single_block(
        group_definition_block(), description="The definition for a Group widget"
    )
    return Block(attributes)


def widget_json_block() -> Block:
    return Block({
        "definition": _string(required=True, description="JSON encoded widget definition"),
        "layout": _string_map(widget_layout_block()),
    })


def dashboard_schema() -> Block:
    """Schema of the dashboard resource."""
    return Block({
        "title": _string(required=True, description="The title of the dashboard."),
        "widget": _block_list(
            widget_block(),
            description="The list of widgets to display on the dashboard.",
            conflicts_with=("widget_json",),
        ),
        "widget_json": _block_list(
            widget_json_block(),
            description="The list of widgets, each definition given as a JSON document.",
            conflicts_with=("widget",),
        ),
        "layout_type": _string(
            required=True,
            allowed_values=LAYOUT_TYPES,
            description="The layout type of the dashboard, either 'free' or 'ordered'.",
        ),
        "description": _string(description="The description of the dashboard."),
        "is_read_only": _bool(
            default=False, description="Whether this dashboard is read-only."
        ),
        "template_variable": _block_list(
            template_variable_block(),
            description="The list of template variables for this dashboard.",
        ),
        "notify_list": _string_list(
            description=(
                "The list of handles of users to notify when changes are made "
                "to this dashboard."
            )
        ),
    })


# =============================================================================
# Validation
# =============================================================================


def is_empty(value: Any) -> bool:
    """Whether a configuration value counts as "not set"."""
    return value is None or value == "" or value == [] or value == {}


def _join(path: str, key: str | int) -> str:
    return f"{path}.{key}" if path else str(key)


def validate_config(block: Block, config: Mapping[str, Any], path: str = "") -> None:
    """
    Validate a configuration mapping against a block schema.

    Raises:
        ConfigurationError: On unknown attributes, missing required
            attributes, wrong value types, too many items, values outside
            an attribute's allowed set, or conflicting attributes
    """
    if not isinstance(config, Mapping):
        raise ConfigurationError(f"expected a block, got {type(config).__name__}", path)

    for key in config:
        if key not in block:
            raise ConfigurationError(f"unsupported attribute '{key}'", path)

    for name, attribute in block.attributes.items():
        value = config.get(name)
        if is_empty(value):
            if attribute.required:
                raise MissingRequiredFieldError(name, path)
            continue
        for other in attribute.conflicts_with:
            if not is_empty(config.get(other)):
                raise ConfigurationError(f"'{name}' conflicts with '{other}'", path)
        _validate_value(name, attribute, value, path)


def _validate_value(name: str, attribute: Attribute, value: Any, path: str) -> None:
    if attribute.type is ValueType.LIST:
        if not isinstance(value, list):
            raise InvalidFieldValueError(name, value, "expected a list", path)
        if attribute.max_items is not None and len(value) > attribute.max_items:
            raise InvalidFieldValueError(
                name, value, f"at most {attribute.max_items} item(s) allowed", path
            )
        for index, item in enumerate(value):
            item_path = _join(_join(path, name), index)
            if isinstance(attribute.elem, Block):
                validate_config(attribute.elem, item, item_path)
            elif attribute.elem is not None:
                _check_scalar(str(index), attribute.elem, item, _join(path, name))
    elif attribute.type is ValueType.MAP:
        if not isinstance(value, Mapping):
            raise InvalidFieldValueError(name, value, "expected a map", path)
        if isinstance(attribute.elem, Block):
            _validate_string_map(attribute.elem, value, _join(path, name))
    else:
        _check_scalar(name, attribute.type, value, path)
        if attribute.allowed_values is not None and value not in attribute.allowed_values:
            raise InvalidFieldValueError(
                name,
                value,
                f"expected one of {', '.join(attribute.allowed_values)}",
                path,
            )


def _validate_string_map(block: Block, value: Mapping[str, Any], path: str) -> None:
    # Map members arrive as strings (or bare scalars); their parsing is left
    # to the codec.
    for key, member in value.items():
        if key not in block:
            raise ConfigurationError(f"unsupported attribute '{key}'", path)
        if not isinstance(member, (str, int, float)):
            raise InvalidFieldValueError(key, member, "expected a scalar", path)
    for name, attribute in block.attributes.items():
        if attribute.required and is_empty(value.get(name)):
            raise MissingRequiredFieldError(name, path)


def _check_scalar(name: str, value_type: ValueType, value: Any, path: str) -> None:
    if value_type is ValueType.STRING:
        ok = isinstance(value, str)
    elif value_type is ValueType.BOOL:
        ok = isinstance(value, bool) or (
            isinstance(value, str) and value.lower() in ("true", "false")
        )
    elif value_type is ValueType.INT:
        # String encoded integers are parsed by the codec
        ok = isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))
    elif value_type is ValueType.FLOAT:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    else:
        ok = True
    if not ok:
        raise InvalidFieldValueError(name, value, f"expected {value_type.value}", path)
