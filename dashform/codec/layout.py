"""Widget layout codec: string map of x/y/width/height <-> WidgetLayout."""

from __future__ import annotations

from ..models.contracts.widgets import WidgetLayout
from .fields import FieldReader, format_float

LAYOUT_FIELDS = ("x", "y", "width", "height")


def decode_layout(reader: FieldReader) -> WidgetLayout:
    """
    Build a layout from its string map.

    In lenient mode a member that does not parse is left unset instead of
    failing the whole configuration.
    """
    return WidgetLayout(**{name: reader.required_float(name) for name in LAYOUT_FIELDS})


def encode_layout(layout: WidgetLayout) -> dict[str, str]:
    encoded = {}
    for name in LAYOUT_FIELDS:
        value = getattr(layout, name)
        if value is not None:
            encoded[name] = format_float(value)
    return encoded
