"""
Resource data: the configuration and state of one dashboard resource
instance, as handed to the CRUD adapter.

Reads follow "zero value when unset" semantics; ``get_ok`` additionally
reports whether the attribute was explicitly set.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from .schema import Block, dashboard_schema, is_empty, validate_config


class ResourceData:
    """Values and remote ID of a dashboard resource instance."""

    def __init__(
        self,
        values: Mapping[str, Any] | None = None,
        id: str = "",
        schema: Block | None = None,
    ):
        self.schema = schema or dashboard_schema()
        self._values: dict[str, Any] = copy.deepcopy(dict(values or {}))
        self._id = id

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, keys={sorted(self._values)})"

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str | None) -> None:
        """Set the remote ID; an empty ID marks the resource as gone."""
        self._id = value or ""

    @property
    def values(self) -> dict[str, Any]:
        """Copy of the explicitly set values."""
        return copy.deepcopy(self._values)

    def get(self, key: str) -> Any:
        value, _ = self.get_ok(key)
        return value

    def get_ok(self, key: str) -> tuple[Any, bool]:
        """
        Value of ``key`` and whether it was set to a non-empty value.

        Raises:
            KeyError: If ``key`` is not an attribute of the schema
        """
        attribute = self.schema[key]
        value = self._values.get(key)
        if is_empty(value):
            return attribute.zero_value, False
        return copy.deepcopy(value), True

    def set(self, key: str, value: Any) -> None:
        """
        Set ``key``; None (or an empty value) clears it.

        Raises:
            KeyError: If ``key`` is not an attribute of the schema
        """
        if key not in self.schema:
            raise KeyError(key)
        if is_empty(value):
            self._values.pop(key, None)
        else:
            self._values[key] = copy.deepcopy(value)

    def replace(self, values: Mapping[str, Any]) -> None:
        """Overwrite every schema attribute with ``values`` (missing ones are cleared)."""
        for key in self.schema.attributes:
            self.set(key, values.get(key))

    def validate(self) -> None:
        """Validate the current values against the schema."""
        validate_config(self.schema, self._values)

    def state(self) -> dict[str, Any]:
        """Values plus ID, as persisted by the surrounding framework."""
        state = self.values
        state["id"] = self._id
        return state
