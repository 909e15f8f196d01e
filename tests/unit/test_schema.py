"""
Unit tests for the resource schema and its validation pass.
"""

import pytest

from dashform.exceptions import (
    ConfigurationError,
    InvalidFieldValueError,
    MissingRequiredFieldError,
)
from dashform.schema import (
    LEAF_DEFINITION_BLOCKS,
    Attribute,
    ValueType,
    dashboard_schema,
    group_definition_block,
    is_empty,
    non_group_widget_block,
    validate_config,
    widget_block,
)


class TestSchemaShape:
    """Test the constructed schema tree."""

    def test_constructors_return_equal_fresh_trees(self):
        assert dashboard_schema() == dashboard_schema()
        assert dashboard_schema() is not dashboard_schema()

    def test_blocks_are_read_only(self):
        schema = dashboard_schema()

        with pytest.raises(TypeError):
            schema.attributes["title"] = Attribute(ValueType.STRING)

    def test_widget_block_adds_group(self):
        assert "group_definition" in widget_block()
        assert "group_definition" not in non_group_widget_block()
        for key in LEAF_DEFINITION_BLOCKS:
            assert key in widget_block()
            assert key in non_group_widget_block()

    def test_group_children_use_non_group_schema(self):
        assert group_definition_block()["widget"].elem == non_group_widget_block()

    def test_definitions_are_single_blocks(self):
        attribute = widget_block()["note_definition"]

        assert attribute.type is ValueType.LIST
        assert attribute.max_items == 1

    def test_zero_values(self):
        schema = dashboard_schema()

        assert schema["title"].zero_value == ""
        assert schema["is_read_only"].zero_value is False
        assert schema["widget"].zero_value == []


class TestIsEmpty:
    @pytest.mark.parametrize("value", [None, "", [], {}])
    def test_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [False, 0, "x", [{}], {"a": ""}])
    def test_not_empty(self, value):
        assert not is_empty(value)


class TestValidateConfig:
    """Test validate_config against the dashboard schema."""

    def test_valid_configurations(self, ordered_dashboard_config, free_dashboard_config):
        validate_config(dashboard_schema(), ordered_dashboard_config)
        validate_config(dashboard_schema(), free_dashboard_config)

    def test_unknown_attribute(self):
        config = {"title": "t", "layout_type": "ordered", "colour": "red"}

        with pytest.raises(ConfigurationError, match="unsupported attribute 'colour'"):
            validate_config(dashboard_schema(), config)

    def test_missing_required(self):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_config(dashboard_schema(), {"title": "t"})

        assert exc_info.value.field == "layout_type"

    def test_allowed_values(self):
        with pytest.raises(InvalidFieldValueError, match="expected one of ordered, free"):
            validate_config(dashboard_schema(), {"title": "t", "layout_type": "grid"})

    def test_scalar_types(self):
        config = {"title": "t", "layout_type": "ordered", "is_read_only": "yes"}

        with pytest.raises(InvalidFieldValueError, match="expected bool"):
            validate_config(dashboard_schema(), config)

    def test_single_block_max_items(self):
        config = {
            "title": "t",
            "layout_type": "ordered",
            "widget": [{"note_definition": [{"content": "a"}, {"content": "b"}]}],
        }

        with pytest.raises(InvalidFieldValueError) as exc_info:
            validate_config(dashboard_schema(), config)

        assert exc_info.value.path == "widget.0"
        assert "at most 1 item(s) allowed" in str(exc_info.value)

    def test_nested_paths(self, ordered_dashboard_config):
        group = ordered_dashboard_config["widget"][1]["group_definition"][0]
        del group["widget"][1]["alert_graph_definition"][0]["viz_type"]

        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_config(dashboard_schema(), ordered_dashboard_config)

        assert exc_info.value.path == "widget.1.group_definition.0.widget.1.alert_graph_definition.0"

    def test_group_inside_group(self, ordered_dashboard_config):
        group = ordered_dashboard_config["widget"][1]["group_definition"][0]
        group["widget"].append(
            {"group_definition": [{"layout_type": "ordered", "widget": [{"note_definition": [{"content": "x"}]}]}]}
        )

        with pytest.raises(ConfigurationError, match="unsupported attribute 'group_definition'") as exc_info:
            validate_config(dashboard_schema(), ordered_dashboard_config)

        assert exc_info.value.path == "widget.1.group_definition.0.widget.2"

    def test_string_map_members(self, free_dashboard_config):
        free_dashboard_config["widget"][0]["layout"]["depth"] = "3"

        with pytest.raises(ConfigurationError, match="unsupported attribute 'depth'") as exc_info:
            validate_config(dashboard_schema(), free_dashboard_config)

        assert exc_info.value.path == "widget.0.layout"

    def test_string_map_required_member(self, free_dashboard_config):
        del free_dashboard_config["widget"][0]["layout"]["x"]

        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_config(dashboard_schema(), free_dashboard_config)

        assert exc_info.value.field == "x"

    def test_widget_conflicts_with_widget_json(self, free_dashboard_config):
        free_dashboard_config["widget_json"] = [{"definition": "{}"}]

        with pytest.raises(ConfigurationError, match="'widget' conflicts with 'widget_json'"):
            validate_config(dashboard_schema(), free_dashboard_config)

    def test_check_status_grouping(self):
        config = {
            "title": "t",
            "layout_type": "ordered",
            "widget": [{"check_status_definition": [{"check": "c", "grouping": "host"}]}],
        }

        with pytest.raises(InvalidFieldValueError) as exc_info:
            validate_config(dashboard_schema(), config)

        assert exc_info.value.field == "grouping"

    def test_string_encoded_scalars(self):
        config = {
            "title": "t",
            "layout_type": "ordered",
            "is_read_only": "true",
            "widget": [
                {"alert_value_definition": [{"alert_id": "1", "precision": "2"}]},
                {"note_definition": [{"content": "c", "show_tick": "False"}]},
            ],
        }

        validate_config(dashboard_schema(), config)

    def test_int_attributes_reject_floats(self):
        config = {
            "title": "t",
            "layout_type": "ordered",
            "widget": [{"alert_value_definition": [{"alert_id": "1", "precision": 2.5}]}],
        }

        with pytest.raises(InvalidFieldValueError, match="expected int"):
            validate_config(dashboard_schema(), config)
