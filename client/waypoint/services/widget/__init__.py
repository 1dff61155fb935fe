"""Contextual recommendation widgets.

Modules:
    parser      raw payload → WidgetDirective | None (never raises)
    fetcher     per-page tracking + directive retrieval, last-dispatched-wins
    renderer    WidgetDirective → RenderedWidget (overlay / edge banner / flanking panel / fallback card)
    router      (page × token) dispatch tables with acknowledgement fallback
    controller  pairs a fetcher with a router for one page mount

Pipeline:
    RecommendationFetcher → parse_widget_config → render_widget
    → WidgetController.dispatch_action → ActionRouter.handle → dismiss
"""
