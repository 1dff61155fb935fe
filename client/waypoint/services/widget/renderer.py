"""Widget variant renderer: pure mapping from a directive to a presentation shape.

    Overlay         full-viewport, centered, blocks the page until dismissed or acted on
    EdgeBanner      non-blocking strip pinned to the top or bottom edge
    FlankingPanel   non-blocking panel pinned left or right, upper-middle of the viewport
    fallback card   inert, in-flow card for an unrecognized shape

Priority only selects an emphasis tier; it never changes the variant or
dismissal behaviour.
"""

from dataclasses import dataclass, field
from enum import Enum

from waypoint.schemas.widget import Edge, Priority, WidgetDirective, WidgetShape


class Variant(str, Enum):
    OVERLAY = "overlay"
    EDGE_BANNER = "edge_banner"
    FLANKING_PANEL = "flanking_panel"
    FALLBACK_CARD = "fallback_card"


EMPHASIS_BY_PRIORITY: dict[Priority, str] = {
    Priority.HIGH: "primary",
    Priority.MEDIUM: "secondary",
    Priority.LOW: "muted",
}
DEFAULT_EMPHASIS = "neutral"

# Stacking layers: overlays sit above pinned variants
Z_OVERLAY = 50
Z_PINNED = 40


@dataclass(frozen=True)
class RenderedControl:
    """One activation control; ``primary`` marks the first action."""
    label: str
    token: str
    primary: bool = False

    def to_dict(self) -> dict:
        return {"label": self.label, "token": self.token, "primary": self.primary}


@dataclass(frozen=True)
class RenderedWidget:
    variant: Variant
    title: str
    body: str
    icon: str
    emphasis: str
    anchor: str                  # "center" | "top" | "bottom" | "left" | "right" | "inline"
    blocking: bool
    layer: int | None            # None for in-flow content
    region: str = "full"         # "full" | "upper_middle" | "inline"
    dismissible: bool = False
    controls: tuple[RenderedControl, ...] = field(default_factory=tuple)

    @property
    def primary_control(self) -> RenderedControl | None:
        return self.controls[0] if self.controls else None

    def to_dict(self) -> dict:
        return {
            "variant": self.variant.value,
            "title": self.title,
            "body": self.body,
            "icon": self.icon,
            "emphasis": self.emphasis,
            "anchor": self.anchor,
            "blocking": self.blocking,
            "layer": self.layer,
            "region": self.region,
            "dismissible": self.dismissible,
            "controls": [c.to_dict() for c in self.controls],
        }


def _controls(directive: WidgetDirective) -> tuple[RenderedControl, ...]:
    return tuple(
        RenderedControl(label=a.label, token=a.token, primary=(i == 0))
        for i, a in enumerate(directive.actions)
    )


def render_widget(directive: WidgetDirective | None, *, dismissible: bool = True) -> RenderedWidget | None:
    """Render ``directive``; ``dismissible`` is whether the page supplied a dismiss handler."""
    if directive is None:
        return None

    common = dict(
        title=directive.title,
        body=directive.body,
        icon=directive.icon,
        emphasis=EMPHASIS_BY_PRIORITY.get(directive.priority, DEFAULT_EMPHASIS),
        dismissible=dismissible,
        controls=_controls(directive),
    )

    if directive.shape is WidgetShape.OVERLAY:
        return RenderedWidget(
            variant=Variant.OVERLAY,
            anchor="center",
            blocking=True,
            layer=Z_OVERLAY,
            region="full",
            **common,
        )

    if directive.shape is WidgetShape.EDGE_BANNER:
        # Banners only pin to top or bottom; any non-top edge lands at the bottom
        anchor = Edge.TOP.value if directive.edge is Edge.TOP else Edge.BOTTOM.value
        return RenderedWidget(
            variant=Variant.EDGE_BANNER,
            anchor=anchor,
            blocking=False,
            layer=Z_PINNED,
            region="full",
            **common,
        )

    if directive.shape is WidgetShape.FLANKING_PANEL:
        anchor = Edge.RIGHT.value if directive.edge is Edge.RIGHT else Edge.LEFT.value
        return RenderedWidget(
            variant=Variant.FLANKING_PANEL,
            anchor=anchor,
            blocking=False,
            layer=Z_PINNED,
            region="upper_middle",
            **common,
        )

    return RenderedWidget(
        variant=Variant.FALLBACK_CARD,
        anchor="inline",
        blocking=False,
        layer=None,
        region="inline",
        **common,
    )
