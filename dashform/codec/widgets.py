"""
Widget codec: the tagged-union dispatch.

Decoding looks for the populated ``<type>_definition`` block of a widget;
encoding switches on the definition's ``type`` discriminator. Top-level
widgets may be groups; a group's children are decoded with the leaf
registry only, so groups never nest.
"""

from __future__ import annotations

import logging
from typing import Any

from ..exceptions import (
    InvalidFieldValueError,
    MissingRequiredFieldError,
    MultipleDefinitionsSpecifiedError,
    NoDefinitionSpecifiedError,
    UnsupportedWidgetTypeError,
)
from ..models.contracts.widgets import (
    LAYOUT_TYPES,
    WIDGET_TYPES,
    GroupDefinition,
    LeafWidget,
    Widget,
    is_known_type,
)
from .definitions import LEAF_DEFINITION_CODECS, DefinitionCodec
from .fields import FieldReader, put_optional
from .layout import decode_layout, encode_layout

logger = logging.getLogger(__name__)


def decode_layout_type(reader: FieldReader) -> str:
    layout_type = reader.required_string("layout_type")
    if layout_type not in LAYOUT_TYPES:
        raise InvalidFieldValueError(
            "layout_type",
            layout_type,
            f"expected one of {', '.join(LAYOUT_TYPES)}",
            reader.path,
        )
    return layout_type


# =============================================================================
# Group
# =============================================================================


def decode_group_definition(reader: FieldReader) -> GroupDefinition:
    layout_type = decode_layout_type(reader)
    return GroupDefinition(
        layout_type=layout_type,
        widgets=decode_leaf_widgets(reader.required_blocks("widget"), layout_type),
        title=reader.optional_string("title"),
    )


def encode_group_definition(definition: GroupDefinition) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "layout_type": definition.layout_type,
        "widget": encode_widgets(definition.widgets),
    }
    put_optional(encoded, "title", definition.title)
    return encoded


GROUP_DEFINITION_CODEC = DefinitionCodec("group", decode_group_definition, encode_group_definition)

# Lookup order when decoding
DEFINITION_CODECS: dict[str, DefinitionCodec] = {
    widget_type: GROUP_DEFINITION_CODEC
    if widget_type == "group"
    else LEAF_DEFINITION_CODECS[widget_type]
    for widget_type in WIDGET_TYPES
}


# =============================================================================
# Decode
# =============================================================================


def _decode_definition(reader: FieldReader, codecs: dict[str, DefinitionCodec]) -> Any:
    populated = [codec for codec in codecs.values() if reader.has_block(codec.config_key)]
    if not populated:
        raise NoDefinitionSpecifiedError(reader.path)
    if len(populated) > 1:
        raise MultipleDefinitionsSpecifiedError(
            [codec.config_key for codec in populated], reader.path
        )
    codec = populated[0]
    return codec.decode(reader.block(codec.config_key))


def decode_widget_layout(reader: FieldReader, layout_type: str | None):
    """
    Layout of a widget under its parent's layout type.

    Required on "free" layouts, ignored on "ordered" ones.
    """
    if layout_type == "ordered":
        return None
    layout = reader.map("layout")
    if layout is None:
        if layout_type == "free":
            raise MissingRequiredFieldError("layout", reader.path)
        return None
    return decode_layout(layout)


def decode_widget(reader: FieldReader, layout_type: str | None = None) -> Widget:
    """Decode a top-level widget block (any definition kind, including group)."""
    return Widget(
        layout=decode_widget_layout(reader, layout_type),
        definition=_decode_definition(reader, DEFINITION_CODECS),
    )


def decode_leaf_widget(reader: FieldReader, layout_type: str | None = None) -> LeafWidget:
    """Decode a widget block inside a group (any definition kind except group)."""
    return LeafWidget(
        layout=decode_widget_layout(reader, layout_type),
        definition=_decode_definition(reader, LEAF_DEFINITION_CODECS),
    )


def decode_widgets(readers: list[FieldReader], layout_type: str | None = None) -> list[Widget]:
    return [decode_widget(reader, layout_type) for reader in readers]


def decode_leaf_widgets(
    readers: list[FieldReader], layout_type: str | None = None
) -> list[LeafWidget]:
    return [decode_leaf_widget(reader, layout_type) for reader in readers]


# =============================================================================
# Encode
# =============================================================================


def encode_widget(widget: Widget | LeafWidget) -> dict[str, Any]:
    """
    Encode a widget into its configuration block.

    Raises:
        UnsupportedWidgetTypeError: If the definition's type has no codec
    """
    encoded: dict[str, Any] = {}
    if widget.layout is not None:
        encoded["layout"] = encode_layout(widget.layout)

    widget_type = widget.definition.type
    if not is_known_type(widget_type):
        logger.debug(f"No codec for widget type {widget_type!r} (widget id {widget.id})")
        raise UnsupportedWidgetTypeError(widget_type)
    codec = DEFINITION_CODECS[widget_type]
    encoded[codec.config_key] = [codec.encode(widget.definition)]
    return encoded


def encode_widgets(widgets: list[Widget] | list[LeafWidget]) -> list[dict[str, Any]]:
    return [encode_widget(widget) for widget in widgets]
