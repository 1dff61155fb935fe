"""In-memory sandbox backend for local development and integration tests.

Serves the endpoints the client consumes (tracking, widget directives,
check-in find / select-seat) plus a login that issues JWTs.

    uvicorn waypoint.sandbox.main:app --port 8000
"""
