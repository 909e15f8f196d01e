"""
Contract tests for the widget definition union.

Payloads shaped like API responses must validate into the right variant,
and serialize back without unset fields.
"""

import pytest
from pydantic import ValidationError

from dashform.models.contracts.dashboards import READ_ONLY_FIELDS, Board
from dashform.models.contracts.queries import ApmOrLogQuery, TimeseriesRequest
from dashform.models.contracts.widgets import (
    AlertGraphDefinition,
    GroupDefinition,
    LeafWidget,
    NoteDefinition,
    TimeseriesDefinition,
    UnknownDefinition,
    Widget,
    is_known_type,
)


class TestDefinitionUnion:
    """Test discriminated union resolution."""

    def test_known_type_resolves_to_variant(self):
        widget = Widget.model_validate(
            {"definition": {"type": "alert_graph", "alert_id": "1", "viz_type": "toplist"}}
        )

        assert isinstance(widget.definition, AlertGraphDefinition)
        assert is_known_type(widget.definition.type)

    def test_unknown_type_keeps_payload(self):
        payload = {"type": "query_value", "precision": 2, "requests": [{"q": "avg:m{*}"}]}

        widget = Widget.model_validate({"definition": payload})

        assert isinstance(widget.definition, UnknownDefinition)
        assert not is_known_type("query_value")
        assert widget.model_dump(exclude_none=True)["definition"] == payload

    def test_missing_type_is_rejected(self):
        with pytest.raises(ValidationError):
            Widget.model_validate({"definition": {"content": "no type"}})

    def test_known_type_with_missing_field_is_rejected(self):
        with pytest.raises(ValidationError):
            Widget.model_validate({"definition": {"type": "note"}})

    def test_group_children(self):
        widget = Widget.model_validate({
            "id": 42,
            "definition": {
                "type": "group",
                "layout_type": "ordered",
                "title": "Group Widget",
                "widgets": [
                    {"id": 43, "definition": {"type": "note", "content": "inside"}},
                ],
            },
        })

        assert isinstance(widget.definition, GroupDefinition)
        assert isinstance(widget.definition.widgets[0], LeafWidget)
        assert widget.definition.widgets[0].id == 43

    def test_nested_group_is_rejected(self):
        with pytest.raises(ValidationError):
            Widget.model_validate({
                "definition": {
                    "type": "group",
                    "layout_type": "ordered",
                    "widgets": [{
                        "definition": {"type": "group", "layout_type": "ordered", "widgets": []},
                    }],
                },
            })

    def test_group_layout_type_is_checked(self):
        with pytest.raises(ValidationError):
            GroupDefinition(layout_type="grid")

    def test_instances_are_accepted(self):
        widget = Widget(definition=NoteDefinition(content="x"))

        assert widget.definition.type == "note"


class TestTimeseriesContract:
    """Test request fragments inside a timeseries definition."""

    def test_requests(self):
        definition = TimeseriesDefinition.model_validate({
            "type": "timeseries",
            "requests": [
                {"q": "avg:system.cpu.user{*}", "display_type": "line"},
                {"log_query": {"index": "main", "compute": {"aggregation": "count"}}},
            ],
        })

        assert definition.requests[0] == TimeseriesRequest(q="avg:system.cpu.user{*}", display_type="line")
        assert isinstance(definition.requests[1].log_query, ApmOrLogQuery)
        assert definition.requests[1].query_kind == "log_query"


class TestBoardContract:
    """Test the board entity."""

    def test_api_response(self):
        board = Board.model_validate({
            "id": "qc9-tuk-9kv",
            "title": "Ops",
            "layout_type": "ordered",
            "description": None,
            "is_read_only": True,
            "notify_list": None,
            "template_variables": [{"name": "env", "prefix": "env", "default": "prod"}],
            "widgets": [{"id": 1, "definition": {"type": "note", "content": "hi"}}],
            "url": "/dashboard/qc9-tuk-9kv/ops",
            "author_handle": "ops@example.com",
            "created_at": "2019-02-05T01:35:46.388000+00:00",
            "modified_at": "2019-02-05T01:35:46.388000+00:00",
        })

        assert board.notify_list == []
        assert board.template_variables[0].default == "prod"

        payload = board.to_payload()
        assert READ_ONLY_FIELDS.isdisjoint(payload)
        assert payload["widgets"] == [{"id": 1, "definition": {"type": "note", "content": "hi"}}]

    def test_layout_type_is_checked(self):
        with pytest.raises(ValidationError):
            Board(title="t", layout_type="grid")
