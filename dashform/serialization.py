"""
YAML serialization of resource configuration and state.

Configuration files hold the resource values (title, layout_type, widget,
...) as a mapping; state dumps add the remote ``id``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .resource_data import ResourceData


def load_config(text: str) -> dict[str, Any]:
    """
    Parse a YAML resource configuration.

    Raises:
        ConfigurationError: If the document is not valid YAML or not a mapping
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"configuration must be a mapping, got {type(data).__name__}"
        )
    return data


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Parse a YAML resource configuration file."""
    return load_config(Path(path).read_text(encoding="utf-8"))


def load_resource_data(text: str) -> ResourceData:
    """
    Build resource data from a YAML state or configuration document.

    An ``id`` key, when present, becomes the remote ID.
    """
    values = load_config(text)
    board_id = values.pop("id", "") or ""
    return ResourceData(values, id=str(board_id))


def dump_state(d: ResourceData) -> str:
    """Serialize resource data (values plus ID) to YAML."""
    return yaml.dump(d.state(), default_flow_style=False, sort_keys=False, allow_unicode=True)
