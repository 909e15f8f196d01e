"""
Dashboard Resource

CRUD adapter between resource data and the dashboard API client.

Each entry point assembles a board from the resource values (pure, local),
makes one blocking API call, and maps the result back onto the resource
data. Configuration errors surface before any network call.
"""

from __future__ import annotations

import logging

from .client import DashboardClient, get_client
from .codec.dashboard import decode_board, encode_board
from .config import Settings, get_settings
from .exceptions import (
    ConfigurationError,
    CreateFailedError,
    DashformError,
    DeleteFailedError,
    MissingRequiredFieldError,
    ReadFailedError,
    RemoteError,
    RemoteNotFoundError,
    UpdateFailedError,
)
from .log import configure_logging, format_metadata
from .models.contracts.dashboards import Board
from .resource_data import ResourceData
from .schema import Block, dashboard_schema

logger = logging.getLogger(__name__)


class DashboardResource:
    """
    Lifecycle of a dashboard resource.

    Usage:
        resource = DashboardResource()
        d = resource.new_data({"title": "Ops", "layout_type": "ordered", ...})
        resource.create(d)        # d.id now holds the remote ID
        resource.read(d)          # refresh from the remote side
        resource.delete(d)        # d.id is cleared
    """

    def __init__(self, client: DashboardClient | None = None, settings: Settings | None = None):
        self._client = client
        self.settings = settings or get_settings()
        configure_logging(self.settings.log_level)
        self.schema: Block = dashboard_schema()

    @property
    def client(self) -> DashboardClient:
        if self._client is None:
            self._client = get_client()
        return self._client

    def new_data(self, values: dict | None = None, id: str = "") -> ResourceData:
        """Resource data bound to this resource's schema."""
        return ResourceData(values, id=id, schema=self.schema)

    def build_board(self, d: ResourceData) -> Board:
        """
        Assemble the board described by ``d``.

        Raises:
            ConfigurationError: If the values fail validation or decoding
        """
        d.validate()
        return decode_board(
            d.values, board_id=d.id or None, lenient=self.settings.lenient_numeric_parsing
        )

    # =========================================================================
    # CRUD
    # =========================================================================

    def create(self, d: ResourceData) -> None:
        """
        Create the dashboard and adopt the remote ID.

        Raises:
            CreateFailedError: On configuration or API errors; ``d`` is unchanged
        """
        try:
            board = self.build_board(d)
        except ConfigurationError as exc:
            raise CreateFailedError(exc) from exc

        logger.debug(f"Creating dashboard: {board.to_payload()}")
        try:
            created = self.client.create_board(board)
        except RemoteError as exc:
            raise CreateFailedError(exc) from exc

        if not created.id:
            raise CreateFailedError(RemoteError("API response did not include a dashboard ID"))
        d.set_id(created.id)
        logger.info(f"Created dashboard{format_metadata({'id': created.id, 'title': created.title})}")

    def read(self, d: ResourceData) -> None:
        """
        Refresh ``d`` from the remote dashboard.

        A dashboard that no longer exists clears ``d.id`` instead of raising,
        so the framework drops the resource from its state.

        Raises:
            ReadFailedError: On any other API error or an unconvertible response,
                or if ``d`` has no ID
        """
        try:
            _require_id(d)
        except ConfigurationError as exc:
            raise ReadFailedError(exc) from exc

        try:
            board = self.client.get_board(d.id)
        except RemoteNotFoundError:
            logger.warning(f"Dashboard {d.id} not found, removing it from state")
            d.set_id("")
            return
        except RemoteError as exc:
            raise ReadFailedError(exc) from exc

        logger.debug(f"Fetched dashboard: {board.model_dump(exclude_none=True)}")
        try:
            values = encode_board(board, existing=d.values)
        except DashformError as exc:
            raise ReadFailedError(exc) from exc
        d.replace(values)

    def update(self, d: ResourceData) -> None:
        """
        Push ``d`` to the remote dashboard, then refresh it.

        Raises:
            UpdateFailedError: On configuration or API errors, or if ``d`` has no
                ID; ``d`` is unchanged
        """
        try:
            _require_id(d)
            board = self.build_board(d)
        except ConfigurationError as exc:
            raise UpdateFailedError(exc) from exc

        logger.debug(f"Updating dashboard {d.id}: {board.to_payload()}")
        try:
            self.client.update_board(board)
        except RemoteError as exc:
            raise UpdateFailedError(exc) from exc

        logger.info(f"Updated dashboard{format_metadata({'id': d.id})}")
        self.read(d)

    def delete(self, d: ResourceData) -> None:
        """
        Delete the remote dashboard and clear ``d.id``.

        Raises:
            DeleteFailedError: On API errors, or if ``d`` has no ID
        """
        try:
            _require_id(d)
        except ConfigurationError as exc:
            raise DeleteFailedError(exc) from exc

        try:
            self.client.delete_board(d.id)
        except RemoteError as exc:
            raise DeleteFailedError(exc) from exc

        logger.info(f"Deleted dashboard{format_metadata({'id': d.id})}")
        d.set_id("")

    def exists(self, d: ResourceData) -> bool:
        """
        Whether the remote dashboard still exists.

        Resource data without an ID has nothing to look up and reports False.

        Raises:
            RemoteError: On any API error other than not found
        """
        if not d.id:
            return False
        try:
            self.client.get_board(d.id)
        except RemoteNotFoundError:
            logger.warning(f"Dashboard {d.id} not found")
            return False
        return True

    def import_state(self, d: ResourceData) -> list[ResourceData]:
        """
        Populate ``d`` from nothing but its ID.

        Raises:
            ReadFailedError: If the dashboard does not exist or cannot be read
        """
        board_id = d.id
        self.read(d)
        if not d.id:
            raise ReadFailedError(RemoteNotFoundError(f"Dashboard {board_id} does not exist"))
        return [d]


def _require_id(d: ResourceData) -> None:
    """Operations on an existing dashboard need its remote ID."""
    if not d.id:
        raise MissingRequiredFieldError("id")
