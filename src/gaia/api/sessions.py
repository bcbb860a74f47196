"""
Session manager for world runs.

Each session wraps a World + MetricsCollector and supports step-by-step
execution. Sessions live in memory only. A per-session lock serializes
ticks, since a World must never be advanced by two callers at once.
"""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Any

from gaia.core.config import WorldConfig
from gaia.core.world import World
from gaia.metrics.collector import MetricsCollector

logger = logging.getLogger(__name__)


class SessionLimitError(RuntimeError):
    """Raised when creating a session would exceed the configured cap."""


@dataclass
class SimulationSession:
    """A running or completed world session."""

    id: str
    name: str
    config: WorldConfig
    world: World
    collector: MetricsCollector
    status: str = "created"  # created | running | completed
    current_tick: int = 0
    max_ticks: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


class SessionManager:
    """Manages multiple in-memory world sessions.

    Parameters
    ----------
    max_sessions : int | None
        Upper bound on concurrently held sessions. ``None`` means unbounded.
    """

    def __init__(self, max_sessions: int | None = None):
        self.sessions: dict[str, SimulationSession] = {}
        self.max_sessions = max_sessions

    def create_session(
        self,
        config: WorldConfig | None = None,
        name: str | None = None,
    ) -> SimulationSession:
        """Create a new session with an initialized world."""
        if self.max_sessions is not None and len(self.sessions) >= self.max_sessions:
            logger.warning(
                "Session limit reached (%d); refusing to create another",
                self.max_sessions,
            )
            raise SessionLimitError(f"Session limit of {self.max_sessions} reached")

        if config is None:
            config = WorldConfig()

        session_id = uuid.uuid4().hex[:8]
        world = World(config)
        session = SimulationSession(
            id=session_id,
            name=name or config.world_name,
            config=config,
            world=world,
            collector=MetricsCollector(config),
            max_ticks=config.ticks_to_run,
        )
        self.sessions[session_id] = session
        logger.info(
            "Created session %s (%dx%d, seed=%s)",
            session_id, config.width, config.height, config.random_seed,
        )
        return session

    def get_session(self, session_id: str) -> SimulationSession:
        """Get a session by ID. Raises KeyError if not found."""
        if session_id not in self.sessions:
            raise KeyError(f"Session '{session_id}' not found")
        return self.sessions[session_id]

    def list_sessions(self) -> list[dict[str, Any]]:
        return [
            {
                "id": s.id,
                "name": s.name,
                "status": s.status,
                "current_tick": s.current_tick,
                "max_ticks": s.max_ticks,
                "biomass_population": s.world.totals.population,
            }
            for s in self.sessions.values()
        ]

    def delete_session(self, session_id: str) -> None:
        if session_id not in self.sessions:
            raise KeyError(f"Session '{session_id}' not found")
        del self.sessions[session_id]

    def step(self, session_id: str, n: int = 1) -> SimulationSession:
        """Advance a session by N ticks, collecting statistics after each."""
        session = self.get_session(session_id)

        with session.lock:
            if session.status == "completed":
                return session

            session.status = "running"
            for _ in range(n):
                if session.current_tick >= session.max_ticks:
                    break
                report = session.world.tick()
                session.collector.collect(session.world, report)
                session.current_tick += 1

            if session.current_tick >= session.max_ticks:
                session.status = "completed"

        return session

    def run_full(self, session_id: str) -> SimulationSession:
        """Run a session to completion."""
        session = self.get_session(session_id)
        remaining = session.max_ticks - session.current_tick
        if remaining > 0:
            self.step(session_id, remaining)
        return session

    def reset_session(self, session_id: str) -> SimulationSession:
        """Rebuild the world from its config and discard collected stats."""
        session = self.get_session(session_id)
        with session.lock:
            session.world.initialize()
            session.collector = MetricsCollector(session.config)
            session.current_tick = 0
            session.status = "created"
        return session
