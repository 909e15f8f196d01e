"""
Dashform

Dashboard resource for a monitoring API: converts a nested resource
configuration (title, widgets, layout, template variables, notify list)
into typed dashboard contracts and drives create/read/update/delete calls
against the dashboard API.

Usage:
    from dashform import DashboardResource, load_resource_data

    resource = DashboardResource()
    d = load_resource_data(open("dashboard.yaml").read())
    resource.create(d)
    print(d.id)
"""

from .client import DashboardClient, get_client
from .codec import decode_board, encode_board
from .config import Settings, get_settings
from .exceptions import (
    ConfigurationError,
    CreateFailedError,
    DashformError,
    DeleteFailedError,
    MissingRequiredFieldError,
    NoDefinitionSpecifiedError,
    ReadFailedError,
    RemoteError,
    RemoteNotFoundError,
    UnsupportedWidgetTypeError,
    UpdateFailedError,
)
from .log import configure_logging
from .models.contracts import Board, TemplateVariable, Widget
from .resource import DashboardResource
from .resource_data import ResourceData
from .serialization import dump_state, load_config, load_resource_data

__version__ = "0.1.0"

__all__ = [
    "DashboardClient",
    "get_client",
    "decode_board",
    "encode_board",
    "Settings",
    "get_settings",
    "ConfigurationError",
    "CreateFailedError",
    "DashformError",
    "DeleteFailedError",
    "MissingRequiredFieldError",
    "NoDefinitionSpecifiedError",
    "ReadFailedError",
    "RemoteError",
    "RemoteNotFoundError",
    "UnsupportedWidgetTypeError",
    "UpdateFailedError",
    "configure_logging",
    "Board",
    "TemplateVariable",
    "Widget",
    "DashboardResource",
    "ResourceData",
    "dump_state",
    "load_config",
    "load_resource_data",
]
