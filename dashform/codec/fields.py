"""
Field access helpers for the configuration tree.

``FieldReader`` wraps one configuration mapping and knows its dotted path,
so every decode error points at the attribute that caused it. Optional
values that are empty ("" / [] / {}) read as absent.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from ..exceptions import InvalidFieldValueError, MissingRequiredFieldError
from ..schema import is_empty


class FieldReader:
    """Typed, path-aware reads from a configuration mapping."""

    def __init__(self, config: Mapping[str, Any] | None, path: str = "", lenient: bool = False):
        self.config: Mapping[str, Any] = config or {}
        self.path = path
        self.lenient = lenient

    def __repr__(self) -> str:
        return f"FieldReader(path={self.path!r})"

    def child_path(self, key: str | int) -> str:
        return f"{self.path}.{key}" if self.path else str(key)

    def _child(self, config: Mapping[str, Any], path: str) -> FieldReader:
        return FieldReader(config, path, self.lenient)

    def has(self, key: str) -> bool:
        """Whether ``key`` holds a non-empty value."""
        return not is_empty(self.config.get(key))

    # -------------------------------------------------------------------------
    # Scalars
    # -------------------------------------------------------------------------

    def required_string(self, key: str) -> str:
        value = self.config.get(key)
        if is_empty(value):
            raise MissingRequiredFieldError(key, self.path)
        return self._as_string(key, value)

    def optional_string(self, key: str) -> str | None:
        value = self.config.get(key)
        if is_empty(value):
            return None
        return self._as_string(key, value)

    def optional_bool(self, key: str) -> bool | None:
        value = self.config.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, bool):
            return value
        # Members of string maps arrive string encoded
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise InvalidFieldValueError(key, value, "expected a boolean", self.path)

    def optional_int(self, key: str) -> int | None:
        value = self.config.get(key)
        if value is None or value == "":
            return None
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            if _is_plain_number(value):
                try:
                    return int(value, 10)
                except ValueError:
                    pass
            if self.lenient:
                return None
        raise InvalidFieldValueError(key, value, "expected an integer", self.path)

    def required_float(self, key: str) -> float | None:
        """
        Read a required float, accepting string encoded numbers.

        Returns None only in lenient mode, for a value that does not parse.
        """
        value = self.config.get(key)
        if is_empty(value):
            raise MissingRequiredFieldError(key, self.path)
        if isinstance(value, bool):
            raise InvalidFieldValueError(key, value, "expected a number", self.path)
        number = math.nan
        if not isinstance(value, str) or _is_plain_number(value):
            try:
                number = float(value)
            except (TypeError, ValueError):
                pass
        if math.isfinite(number):
            return number
        if self.lenient:
            return None
        raise InvalidFieldValueError(key, value, "expected a finite number", self.path)

    def _as_string(self, key: str, value: Any) -> str:
        if not isinstance(value, str):
            raise InvalidFieldValueError(key, value, "expected a string", self.path)
        return value

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------

    def optional_string_list(self, key: str) -> list[str] | None:
        value = self.config.get(key)
        if is_empty(value):
            return None
        if not isinstance(value, list):
            raise InvalidFieldValueError(key, value, "expected a list", self.path)
        return [self._as_string(f"{key}.{index}", item) for index, item in enumerate(value)]

    def string_list(self, key: str) -> list[str]:
        return self.optional_string_list(key) or []

    def map(self, key: str) -> FieldReader | None:
        """Reader over a string map attribute, or None when it is empty."""
        value = self.config.get(key)
        if is_empty(value):
            return None
        if not isinstance(value, Mapping):
            raise InvalidFieldValueError(key, value, "expected a map", self.path)
        return self._child(value, self.child_path(key))

    def required_map(self, key: str) -> FieldReader:
        reader = self.map(key)
        if reader is None:
            raise MissingRequiredFieldError(key, self.path)
        return reader

    def block(self, key: str) -> FieldReader | None:
        """
        Reader over a single nested block, or None when it is absent.

        Single blocks are lists holding at most one mapping; the block counts
        as present only when the list is non-empty and its first element is a
        populated mapping.
        """
        value = self.config.get(key)
        if not isinstance(value, list) or not value:
            return None
        first = value[0]
        if not isinstance(first, Mapping) or not first:
            return None
        return self._child(first, f"{self.child_path(key)}.0")

    def has_block(self, key: str) -> bool:
        return self.block(key) is not None

    def blocks(self, key: str) -> list[FieldReader]:
        """Readers over each element of a list of blocks."""
        value = self.config.get(key)
        if is_empty(value):
            return []
        if not isinstance(value, list):
            raise InvalidFieldValueError(key, value, "expected a list", self.path)
        readers = []
        for index, item in enumerate(value):
            item_path = f"{self.child_path(key)}.{index}"
            if not isinstance(item, Mapping):
                raise InvalidFieldValueError(key, item, "expected a block", item_path)
            readers.append(self._child(item, item_path))
        return readers

    def required_blocks(self, key: str) -> list[FieldReader]:
        readers = self.blocks(key)
        if not readers:
            raise MissingRequiredFieldError(key, self.path)
        return readers


def _is_plain_number(text: str) -> bool:
    # int() and float() also accept digit separators and surrounding whitespace
    return "_" not in text and text == text.strip()


# =============================================================================
# Encoding helpers
# =============================================================================


def put_optional(target: dict[str, Any], key: str, value: Any) -> None:
    """Set ``key`` only when ``value`` was set."""
    if value is not None:
        target[key] = value


def format_float(value: float) -> str:
    """
    Shortest plain decimal string that parses back to ``value``.

    No exponent and no trailing zeros: 36.0 -> "36", 0.5 -> "0.5",
    1e16 -> "10000000000000000".
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text
