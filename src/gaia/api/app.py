"""
FastAPI application factory for the Gaia Sandbox API.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gaia.api.sessions import SessionManager
from gaia.api.routers import simulation, world, metrics, experiments

# Load .env — try project root first, then CWD
_project_root = Path(__file__).resolve().parents[3]  # src/gaia/api/app.py → project root
load_dotenv(_project_root / ".env")
load_dotenv(Path.cwd() / ".env")

logger = logging.getLogger(__name__)


def _max_sessions() -> int | None:
    raw = os.environ.get("GAIA_MAX_SESSIONS", "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer GAIA_MAX_SESSIONS=%r", raw)
        return None


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Gaia Sandbox API",
        description="Read-only state and statistics for running planet simulations",
        version="0.1.0",
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.session_manager = SessionManager(max_sessions=_max_sessions())

    application.include_router(simulation.router, prefix="/api/simulation", tags=["simulation"])
    application.include_router(world.router, prefix="/api/world", tags=["world"])
    application.include_router(metrics.router, prefix="/api/metrics", tags=["metrics"])
    application.include_router(experiments.router, prefix="/api/experiments", tags=["experiments"])

    @application.get("/api/health")
    def health_check():
        return {"status": "ok"}

    return application


app = create_app()
