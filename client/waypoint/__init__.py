"""Waypoint: contextual recommendation widgets and seat assignment for the booking client.

Modules:
    config              Settings loaded from environment / .env
    errors              Exception taxonomy (personalization degrades, transactions surface)
    services.widget     Directive parser, fetcher, renderer, action router
    services.checkin    Seat inventory state machine, recommendation matcher, check-in session
    pages               Per-page state and action tables
    sandbox             In-memory FastAPI backend for local development

Pipeline:
    RecommendationFetcher → parse_widget_config → render_widget
    → ActionRouter (page × token) → page state mutation / navigation
"""

__version__ = "0.1.0"
