"""Widget directive schema: the server-specified contextual overlay.

Backend wire format (personalization service):
    component_type  "popup" | "banner" | "sidepanel"
    title, body     strings
    cta_list        [{"label": str, "action": str}, ...]  (ordered)
    priority        "high" | "medium" | "low"
    position        "top" | "bottom" | "left" | "right"  (optional, default top)
    icon            string (optional, default glyph from settings)
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from waypoint.config import settings


class WidgetShape(str, Enum):
    OVERLAY = "popup"
    EDGE_BANNER = "banner"
    FLANKING_PANEL = "sidepanel"
    UNKNOWN = "unknown"  # present but unrecognized; rendered as an inert card


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class Edge(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


def _coerce_enum(enum_cls: type[Enum], value: Any, fallback: Enum) -> Enum:
    """Map a wire string onto a closed enum, sending unknown strings to the fallback arm."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise ValueError(f"expected a string, got {type(value).__name__}")
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        return fallback


class WidgetAction(BaseModel):
    """One call-to-action: visible label plus the opaque token it dispatches."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    label: str = Field(strict=True)
    token: str = Field(alias="action", strict=True)


class WidgetDirective(BaseModel):
    """Typed, validated directive. Build it with parse_widget_config, not directly from raw payloads."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    shape: WidgetShape = Field(alias="component_type")
    title: str = Field(strict=True)
    body: str = Field(strict=True)
    actions: tuple[WidgetAction, ...] = Field(alias="cta_list")
    priority: Priority
    edge: Edge = Field(default=Edge.TOP, alias="position")
    icon: str = Field(default_factory=lambda: settings.widget_default_icon)

    @field_validator("shape", mode="before")
    @classmethod
    def _shape(cls, v: Any) -> WidgetShape:
        return _coerce_enum(WidgetShape, v, WidgetShape.UNKNOWN)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority(cls, v: Any) -> Priority:
        return _coerce_enum(Priority, v, Priority.UNKNOWN)

    @field_validator("edge", mode="before")
    @classmethod
    def _edge(cls, v: Any) -> Edge:
        if v is None:
            return Edge.TOP
        return _coerce_enum(Edge, v, Edge.TOP)

    @field_validator("icon", mode="before")
    @classmethod
    def _icon(cls, v: Any) -> str:
        if v is None or v == "":
            return settings.widget_default_icon
        if not isinstance(v, str):
            raise ValueError("icon must be a string")
        return v

    @field_validator("actions", mode="before")
    @classmethod
    def _actions(cls, v: Any) -> Any:
        # A tuple is accepted too, but a bare string or mapping is not a sequence of actions.
        if not isinstance(v, (list, tuple)):
            raise ValueError("cta_list must be a list")
        return v
