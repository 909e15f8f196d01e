"""
Dashboard Contracts

The board entity exchanged with the dashboard API and its template variables.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .widgets import LayoutType, Widget

# Fields the API assigns; never sent back on create or update.
READ_ONLY_FIELDS = {"id", "url", "author_handle", "created_at", "modified_at"}


class TemplateVariable(BaseModel):
    """Named, prefix-scoped substitution value usable in widget queries."""

    name: str = Field(description="Variable name")
    prefix: str | None = Field(
        default=None,
        description="Tag prefix; only tags with this prefix appear in the dropdown",
    )
    default: str | None = Field(
        default=None, description="Value selected when the dashboard loads"
    )


class Board(BaseModel):
    """Dashboard entity."""

    id: str | None = Field(default=None, description="Dashboard ID assigned by the API")
    title: str = Field(description="Dashboard title")
    layout_type: LayoutType = Field(description="Either 'ordered' or 'free'")
    description: str | None = Field(default=None, description="Dashboard description")
    is_read_only: bool = Field(default=False, description="Whether only the author may edit")
    notify_list: list[str] = Field(
        default_factory=list, description="Handles notified when the dashboard changes"
    )
    template_variables: list[TemplateVariable] = Field(
        default_factory=list, description="Template variables, in declaration order"
    )
    widgets: list[Widget] = Field(
        default_factory=list, description="Widgets, in declaration order"
    )
    url: str | None = Field(default=None, description="Dashboard URL path")
    author_handle: str | None = Field(default=None, description="Creator handle")
    created_at: str | None = Field(default=None, description="Creation timestamp")
    modified_at: str | None = Field(default=None, description="Last modification timestamp")

    @field_validator("notify_list", "template_variables", "widgets", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        # The API reports unset lists as null.
        return [] if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """JSON body for create and update calls."""
        return self.model_dump(mode="json", exclude=READ_ONLY_FIELDS, exclude_none=True)
