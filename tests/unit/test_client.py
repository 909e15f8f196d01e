"""
Unit tests for the dashboard API client, against httpx.MockTransport.
"""

import json

import httpx
import pytest

from dashform.client import DASHBOARD_PATH, DashboardClient
from dashform.exceptions import RemoteError, RemoteNotFoundError
from dashform.models.contracts.dashboards import Board
from dashform.models.contracts.widgets import NoteDefinition, Widget


BOARD_RESPONSE = {
    "id": "abc-def-ghi",
    "title": "Ops",
    "layout_type": "ordered",
    "is_read_only": False,
    "notify_list": None,
    "template_variables": None,
    "widgets": [{"id": 1, "definition": {"type": "note", "content": "note text"}}],
    "url": "/dashboard/abc-def-ghi/ops",
}


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self.body = body
        self.text = text
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)


def _client(handler) -> DashboardClient:
    return DashboardClient(
        "https://api.example.com/",
        "api-key",
        "app-key",
        transport=httpx.MockTransport(handler),
    )


def _board(**kwargs) -> Board:
    return Board(
        title="Ops",
        layout_type="ordered",
        widgets=[Widget(definition=NoteDefinition(content="note text"))],
        **kwargs,
    )


class TestDashboardCalls:
    """Test each API call's request and response handling."""

    def test_create_board(self):
        recorder = Recorder(body=BOARD_RESPONSE)

        created = _client(recorder).create_board(_board())

        request = recorder.requests[0]
        assert request.method == "POST"
        assert request.url == "https://api.example.com" + DASHBOARD_PATH
        assert request.headers["DD-API-KEY"] == "api-key"
        assert request.headers["DD-APPLICATION-KEY"] == "app-key"
        assert json.loads(request.content) == {
            "title": "Ops",
            "layout_type": "ordered",
            "is_read_only": False,
            "notify_list": [],
            "template_variables": [],
            "widgets": [{"definition": {"type": "note", "content": "note text"}}],
        }
        assert created.id == "abc-def-ghi"
        assert created.notify_list == []

    def test_get_board(self):
        recorder = Recorder(body=BOARD_RESPONSE)

        board = _client(recorder).get_board("abc-def-ghi")

        assert recorder.requests[0].method == "GET"
        assert recorder.requests[0].url.path == f"{DASHBOARD_PATH}/abc-def-ghi"
        assert board.widgets[0].definition.content == "note text"

    def test_update_board(self):
        recorder = Recorder(body=BOARD_RESPONSE)

        _client(recorder).update_board(_board(id="abc-def-ghi"))

        request = recorder.requests[0]
        assert request.method == "PUT"
        assert request.url.path == f"{DASHBOARD_PATH}/abc-def-ghi"
        assert "id" not in json.loads(request.content)

    def test_update_without_id(self):
        recorder = Recorder(body=BOARD_RESPONSE)

        with pytest.raises(ValueError):
            _client(recorder).update_board(_board())
        assert recorder.requests == []

    def test_delete_board(self):
        recorder = Recorder(body={"deleted_dashboard_id": "abc-def-ghi"})

        _client(recorder).delete_board("abc-def-ghi")

        assert recorder.requests[0].method == "DELETE"
        assert recorder.requests[0].url.path == f"{DASHBOARD_PATH}/abc-def-ghi"


class TestErrors:
    """Failed calls raise RemoteError, not found raises RemoteNotFoundError."""

    def test_not_found(self):
        recorder = Recorder(404, body={"errors": ["Dashboard abc-def-ghi not found"]})

        with pytest.raises(RemoteNotFoundError) as exc_info:
            _client(recorder).get_board("abc-def-ghi")

        assert exc_info.value.status_code == 404
        assert "404 Not Found" in str(exc_info.value)
        assert "Dashboard abc-def-ghi not found" in str(exc_info.value)

    def test_http_error(self):
        recorder = Recorder(400, body={"errors": ["Invalid widget", "Missing title"]})

        with pytest.raises(RemoteError) as exc_info:
            _client(recorder).create_board(_board())

        assert not isinstance(exc_info.value, RemoteNotFoundError)
        assert exc_info.value.status_code == 400
        assert "Invalid widget; Missing title" in str(exc_info.value)

    def test_plain_text_error_body(self):
        recorder = Recorder(503, text="upstream unavailable")

        with pytest.raises(RemoteError, match="upstream unavailable") as exc_info:
            _client(recorder).delete_board("abc-def-ghi")

        assert exc_info.value.status_code == 503

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RemoteError, match="connection refused") as exc_info:
            _client(handler).get_board("abc-def-ghi")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_unexpected_payload(self):
        recorder = Recorder(body={"title": "missing layout type"})

        with pytest.raises(RemoteError, match="Unexpected dashboard payload"):
            _client(recorder).get_board("abc-def-ghi")

    def test_non_json_payload(self):
        recorder = Recorder(text="<html></html>")

        with pytest.raises(RemoteError):
            _client(recorder).get_board("abc-def-ghi")


class TestConstruction:
    """Test client construction from settings."""

    def test_from_settings(self, settings):
        client = DashboardClient.from_settings(settings)

        assert client.api_url == "https://api.datadoghq.com"
        client.close()

    def test_singleton_requires_credentials(self, settings, monkeypatch):
        no_keys = settings.model_copy(update={"api_key": "", "app_key": ""})
        monkeypatch.setattr(DashboardClient, "_instance", None)
        monkeypatch.setattr("dashform.client.get_settings", lambda: no_keys)

        with pytest.raises(RuntimeError, match="DASHFORM_API_KEY"):
            DashboardClient.get_instance()

    def test_context_manager_closes(self):
        with _client(Recorder(body=BOARD_RESPONSE)) as client:
            client.get_board("abc-def-ghi")

        assert client._http.is_closed
