"""
Conversion between the resource configuration tree and typed contracts.

Layout -> scalar fields / query fragments -> definitions -> widgets -> board.
"""

from .dashboard import decode_board, encode_board
from .fields import FieldReader, format_float
from .layout import decode_layout, encode_layout
from .widgets import (
    DEFINITION_CODECS,
    decode_leaf_widget,
    decode_widget,
    encode_widget,
)

__all__ = [
    "decode_board",
    "encode_board",
    "FieldReader",
    "format_float",
    "decode_layout",
    "encode_layout",
    "DEFINITION_CODECS",
    "decode_leaf_widget",
    "decode_widget",
    "encode_widget",
]
