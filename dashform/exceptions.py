"""
Dashform Exceptions

Error taxonomy for the dashboard resource.

Configuration errors are raised locally, before any network call.
Remote errors come from the dashboard API client.
Resource operation errors wrap either of the above with the name of the
CRUD operation that failed.
"""


class DashformError(Exception):
    """Base class for every error raised by dashform."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# Configuration errors
# =============================================================================


class ConfigurationError(DashformError):
    """
    Raised when a resource configuration cannot be turned into a dashboard.

    Attributes:
        path: Dotted path of the offending attribute (e.g. "widget.0.layout.x")
    """

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class MissingRequiredFieldError(ConfigurationError):
    """A required attribute is missing or empty."""

    def __init__(self, field: str, path: str = ""):
        self.field = field
        super().__init__(f"required field '{field}' is not set", path)


class InvalidFieldValueError(ConfigurationError):
    """An attribute holds a value of the wrong type or outside its allowed set."""

    def __init__(self, field: str, value: object, reason: str, path: str = ""):
        self.field = field
        self.value = value
        super().__init__(f"invalid value {value!r} for '{field}': {reason}", path)


class NoDefinitionSpecifiedError(ConfigurationError):
    """A widget block does not populate any definition kind."""

    def __init__(self, path: str = ""):
        super().__init__("widget does not specify a definition", path)


class MultipleDefinitionsSpecifiedError(ConfigurationError):
    """A widget block populates more than one definition kind."""

    def __init__(self, kinds: list[str], path: str = ""):
        self.kinds = kinds
        super().__init__(
            f"widget must specify exactly one definition, got: {', '.join(kinds)}",
            path,
        )


class NoQuerySpecifiedError(ConfigurationError):
    """A request block does not populate any query alternative."""

    def __init__(self, path: str = ""):
        super().__init__("request does not specify a query", path)


class MultipleQueriesSpecifiedError(ConfigurationError):
    """A request block populates more than one query alternative."""

    def __init__(self, queries: list[str], path: str = ""):
        self.queries = queries
        super().__init__(
            f"request must specify exactly one query, got: {', '.join(queries)}",
            path,
        )


class InvalidWidgetJsonError(ConfigurationError):
    """A widget_json definition is not valid JSON or not a known definition."""


# =============================================================================
# Structural errors
# =============================================================================


class UnsupportedWidgetTypeError(DashformError):
    """
    Raised when a widget definition carries a discriminator this package
    does not know how to convert.
    """

    def __init__(self, widget_type: str):
        self.widget_type = widget_type
        super().__init__(f"Unsupported widget type: {widget_type}")


# =============================================================================
# Remote errors
# =============================================================================


class RemoteError(DashformError):
    """
    Raised by the dashboard API client for any failed call.

    Attributes:
        status_code: HTTP status of the response, None for transport failures
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class RemoteNotFoundError(RemoteError):
    """The requested dashboard does not exist on the remote side."""

    def __init__(self, message: str = "Dashboard not found"):
        super().__init__(message, status_code=404)


# =============================================================================
# Resource operation errors
# =============================================================================


class ResourceOperationError(DashformError):
    """
    A CRUD operation on the dashboard resource failed.

    The underlying exception is available as ``cause`` and is also chained
    as ``__cause__``.
    """

    operation: str = "operation"

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Failed to {self.operation} dashboard: {cause}")


class CreateFailedError(ResourceOperationError):
    operation = "create"


class ReadFailedError(ResourceOperationError):
    operation = "read"


class UpdateFailedError(ResourceOperationError):
    operation = "update"


class DeleteFailedError(ResourceOperationError):
    operation = "delete"
