"""
Dashboard assembly.

Turns the whole resource configuration into a ``Board`` and a ``Board``
back into resource values. Widgets, template variables and the notify list
keep their declaration order in both directions.

Widgets come either from ``widget`` blocks or from ``widget_json`` blocks,
whose definitions are JSON documents validated straight into the
definition union.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..exceptions import ConfigurationError, InvalidWidgetJsonError
from ..models.contracts.dashboards import Board, TemplateVariable
from ..models.contracts.widgets import Definition, Widget
from .fields import FieldReader, put_optional
from .layout import encode_layout
from .widgets import decode_widget_layout, decode_layout_type, decode_widgets, encode_widgets

logger = logging.getLogger(__name__)

_definition_adapter: TypeAdapter[Any] = TypeAdapter(Definition)


# =============================================================================
# Template variables / notify list
# =============================================================================


def decode_template_variables(readers: list[FieldReader]) -> list[TemplateVariable]:
    return [
        TemplateVariable(
            name=reader.required_string("name"),
            prefix=reader.optional_string("prefix"),
            default=reader.optional_string("default"),
        )
        for reader in readers
    ]


def encode_template_variables(variables: list[TemplateVariable]) -> list[dict[str, str]]:
    encoded = []
    for variable in variables:
        item = {"name": variable.name}
        put_optional(item, "prefix", variable.prefix)
        put_optional(item, "default", variable.default)
        encoded.append(item)
    return encoded


# =============================================================================
# widget_json
# =============================================================================


def decode_widget_json(readers: list[FieldReader], layout_type: str | None = None) -> list[Widget]:
    widgets = []
    for reader in readers:
        document = reader.required_string("definition")
        try:
            definition = _definition_adapter.validate_json(document)
        except ValidationError as exc:
            raise InvalidWidgetJsonError(
                f"definition is not a valid widget definition: {exc}", reader.path
            ) from exc
        widgets.append(Widget(
            layout=decode_widget_layout(reader, layout_type),
            definition=definition,
        ))
    return widgets


def dump_definition_json(definition: Any) -> str:
    """Compact JSON for a definition, without unset fields."""
    return _definition_adapter.dump_json(definition, exclude_none=True).decode()


def _same_definition(document: Any, definition: Any) -> bool:
    if not isinstance(document, str):
        return False
    try:
        return _definition_adapter.validate_json(document) == definition
    except ValidationError:
        return False


def encode_widget_json(
    widgets: list[Widget], existing: list[Mapping[str, Any]] | None = None
) -> list[dict[str, Any]]:
    """
    Encode widgets as ``widget_json`` blocks.

    A configured JSON document is kept verbatim when it describes the same
    definition as the remote widget at the same position, so formatting and
    key order chosen by the user do not show up as drift.
    """
    existing = existing or []
    encoded = []
    for index, widget in enumerate(widgets):
        document = existing[index].get("definition") if index < len(existing) else None
        if not _same_definition(document, widget.definition):
            document = dump_definition_json(widget.definition)
        item: dict[str, Any] = {"definition": document}
        if widget.layout is not None:
            item["layout"] = encode_layout(widget.layout)
        encoded.append(item)
    return encoded


# =============================================================================
# Board
# =============================================================================


def decode_board(
    config: Mapping[str, Any], board_id: str | None = None, lenient: bool = False
) -> Board:
    """
    Assemble a board from resource configuration.

    Args:
        config: Resource values (title, layout_type, widget, ...)
        board_id: Remote ID for updates, None for creation
        lenient: Drop unparseable numeric strings instead of failing

    Raises:
        ConfigurationError: If the configuration cannot describe a board
    """
    reader = FieldReader(config, "", lenient)
    layout_type = decode_layout_type(reader)

    if reader.has("widget") and reader.has("widget_json"):
        raise ConfigurationError("'widget' conflicts with 'widget_json'")
    if reader.has("widget_json"):
        widgets = decode_widget_json(reader.blocks("widget_json"), layout_type)
    else:
        widgets = decode_widgets(reader.blocks("widget"), layout_type)

    return Board(
        id=board_id or None,
        title=reader.required_string("title"),
        layout_type=layout_type,
        description=reader.optional_string("description"),
        is_read_only=bool(reader.optional_bool("is_read_only")),
        notify_list=reader.string_list("notify_list"),
        template_variables=decode_template_variables(reader.blocks("template_variable")),
        widgets=widgets,
    )


def encode_board(board: Board, existing: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """
    Resource values describing ``board``.

    Widgets are written to ``widget_json`` when the existing values use it,
    to ``widget`` otherwise.

    Raises:
        UnsupportedWidgetTypeError: If a widget type has no block codec
    """
    existing = existing or {}
    values: dict[str, Any] = {
        "title": board.title,
        "layout_type": board.layout_type,
        "is_read_only": board.is_read_only,
        "notify_list": list(board.notify_list),
        "template_variable": encode_template_variables(board.template_variables),
    }
    put_optional(values, "description", board.description)

    if existing.get("widget_json"):
        values["widget_json"] = encode_widget_json(board.widgets, existing["widget_json"])
    else:
        values["widget"] = encode_widgets(board.widgets)

    logger.debug(f"Encoded board {board.id}: {json.dumps(values, default=str)}")
    return values
