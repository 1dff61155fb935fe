"""Sandbox FastAPI application."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waypoint.sandbox.routers import ai, auth, checkin, tracking
from waypoint.sandbox.state import SandboxState, seed_state

logger = logging.getLogger(__name__)


def create_app(state: SandboxState | None = None) -> FastAPI:
    app = FastAPI(
        title="Waypoint Sandbox",
        description="In-memory booking backend for the waypoint client",
        version="0.1.0",
    )
    app.state.sandbox = state if state is not None else seed_state()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(tracking.router, prefix="/tracking", tags=["tracking"])
    app.include_router(ai.router, prefix="/ai", tags=["ai"])
    app.include_router(checkin.router, prefix="/checkin", tags=["checkin"])

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from waypoint.logging_config import configure_logging

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
