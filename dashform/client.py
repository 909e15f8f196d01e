"""
Dashboard API Client

HTTP client for the remote dashboard API.
Auto-initializes from settings (environment variables or .env file).

Every failed call raises ``RemoteError``; a missing dashboard raises
``RemoteNotFoundError`` based on the HTTP status code.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import Settings, get_settings
from .exceptions import RemoteError, RemoteNotFoundError
from .models.contracts.dashboards import Board

logger = logging.getLogger(__name__)

DASHBOARD_PATH = "/api/v1/dashboard"


class DashboardClient:
    """
    HTTP client for the dashboard API.

    Singleton pattern - use get_client() to get the shared instance.
    """

    _instance: "DashboardClient | None" = None

    def __init__(
        self,
        api_url: str,
        api_key: str,
        app_key: str,
        timeout: float = 30.0,
        max_retries: int = 0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            api_url: Dashboard API URL
            api_key: API key
            app_key: Application key
            timeout: Timeout in seconds for each call
            max_retries: Connection retries done by the transport
            transport: Custom transport (tests use httpx.MockTransport)
        """
        self.api_url = api_url.rstrip("/")
        self._http = httpx.Client(
            base_url=self.api_url,
            headers={
                "DD-API-KEY": api_key,
                "DD-APPLICATION-KEY": app_key,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport or httpx.HTTPTransport(retries=max_retries),
        )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "DashboardClient":
        """Build a client from settings (defaults to the cached settings)."""
        settings = settings or get_settings()
        return cls(
            settings.api_url,
            settings.api_key,
            settings.app_key,
            timeout=settings.timeout,
            max_retries=settings.max_retries,
        )

    @classmethod
    def get_instance(cls) -> "DashboardClient":
        """
        Get singleton client instance.

        Returns:
            DashboardClient instance

        Raises:
            RuntimeError: If the API or application key is not configured
        """
        if cls._instance is None:
            settings = get_settings()
            if not settings.has_credentials:
                raise RuntimeError(
                    "DASHFORM_API_KEY and DASHFORM_APP_KEY environment variables required.\n"
                    "Set them in your .env file or export them:\n"
                    "  export DASHFORM_API_KEY=xxxxxxxxxxxx\n"
                    "  export DASHFORM_APP_KEY=xxxxxxxxxxxx"
                )
            cls._instance = cls.from_settings(settings)

        return cls._instance

    # =========================================================================
    # Dashboard operations
    # =========================================================================

    def create_board(self, board: Board) -> Board:
        """
        Create a dashboard.

        Returns:
            Board: The dashboard as stored remotely, with its assigned ID
        """
        response = self._request("POST", DASHBOARD_PATH, json=board.to_payload())
        return self._parse_board(response)

    def get_board(self, board_id: str) -> Board:
        """
        Fetch a dashboard.

        Raises:
            RemoteNotFoundError: If the dashboard does not exist
            RemoteError: On any other failure
        """
        response = self._request("GET", f"{DASHBOARD_PATH}/{board_id}")
        return self._parse_board(response)

    def update_board(self, board: Board) -> None:
        """Replace a dashboard with ``board`` (which must carry its ID)."""
        if not board.id:
            raise ValueError("Cannot update a dashboard without an ID")
        self._request("PUT", f"{DASHBOARD_PATH}/{board.id}", json=board.to_payload())

    def delete_board(self, board_id: str) -> None:
        """Delete a dashboard."""
        self._request("DELETE", f"{DASHBOARD_PATH}/{board_id}")

    def close(self):
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self) -> "DashboardClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        logger.debug(f"{method} {path}")
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            raise RemoteError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == 404:
            raise RemoteNotFoundError(
                f"{response.status_code} {response.reason_phrase}: {_error_detail(response)}"
            )
        if response.is_error:
            raise RemoteError(
                f"{response.status_code} {response.reason_phrase}: {_error_detail(response)}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _parse_board(response: httpx.Response) -> Board:
        try:
            return Board.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise RemoteError(
                f"Unexpected dashboard payload: {exc}", status_code=response.status_code
            ) from exc


def _error_detail(response: httpx.Response) -> str:
    """Error messages reported by the API, or the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and body.get("errors"):
        return "; ".join(str(error) for error in body["errors"])
    return response.text


def get_client() -> DashboardClient:
    """Get the singleton dashboard client."""
    return DashboardClient.get_instance()
