"""
Pytest fixtures for dashform tests.

This module provides:
1. Settings fixtures (no environment or .env lookups leak into tests)
2. A mocked dashboard API client
3. Resource configurations shared across codec and resource tests
"""

from unittest.mock import MagicMock

import pytest

from dashform.client import DashboardClient
from dashform.config import Settings
from dashform.resource import DashboardResource
from dashform.serialization import load_config


# ==================== CONFIGURATION ====================

ORDERED_DASHBOARD_YAML = """
title: Acceptance Test Ordered Dashboard
description: Created using the dashform provider
layout_type: ordered
is_read_only: true
widget:
  - note_definition:
      - content: note text
        background_color: pink
        font_size: "14"
        text_align: center
  - group_definition:
      - layout_type: ordered
        title: Group Widget
        widget:
          - note_definition:
              - content: cluster note widget
                background_color: yellow
          - alert_graph_definition:
              - alert_id: "123"
                viz_type: toplist
                title: Alert Graph
                title_size: "16"
                title_align: right
                time:
                  live_span: 1h
template_variable:
  - name: var_1
    prefix: host
    default: aws
  - name: var_2
    prefix: service_name
    default: autoscaling
"""


# ==================== FIXTURES ====================


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, with fake credentials."""
    return Settings(
        _env_file=None,
        api_key="test-api-key",
        app_key="test-app-key",
    )


@pytest.fixture
def lenient_settings(settings: Settings) -> Settings:
    return settings.model_copy(update={"lenient_numeric_parsing": True})


@pytest.fixture
def mock_client() -> MagicMock:
    """Dashboard API client double; configure return values per test."""
    return MagicMock(spec=DashboardClient)


@pytest.fixture
def resource(mock_client, settings) -> DashboardResource:
    return DashboardResource(client=mock_client, settings=settings)


@pytest.fixture
def ordered_dashboard_config() -> dict:
    """Ordered dashboard with a note and a group holding two widgets."""
    return load_config(ORDERED_DASHBOARD_YAML)


@pytest.fixture
def free_dashboard_config() -> dict:
    """Free layout dashboard with a single positioned note."""
    return {
        "title": "Acceptance Test Dashboard",
        "layout_type": "free",
        "widget": [
            {
                "note_definition": [{"content": "note text", "background_color": "pink"}],
                "layout": {"x": "36", "y": "25", "width": "140", "height": "500"},
            }
        ],
    }
