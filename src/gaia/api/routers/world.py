"""
World state API router — atmosphere, tiles, field maps and display colours.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from gaia.api.schemas import MapResponse, TileResponse
from gaia.api.serializers import color_grid, serialize_map, serialize_tile

router = APIRouter()

_MAP_FIELDS = ("altitude", "heat", "cover", "population", "luminosity")


def _get_session(request: Request, session_id: str):
    sm = request.app.state.session_manager
    try:
        return sm.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.get("/{session_id}/atmosphere")
def get_atmosphere(request: Request, session_id: str):
    """Global gas pools after the latest tick."""
    session = _get_session(request, session_id)
    world = session.world
    return {
        "tick": world.tick_count,
        "gases": world.atmosphere_totals(),
        "total": world.atmosphere.total(),
    }


@router.get("/{session_id}/tiles/{x}/{y}", response_model=TileResponse)
def get_tile(request: Request, session_id: str, x: int, y: int):
    session = _get_session(request, session_id)
    try:
        snapshot = session.world.tile_state(x, y)
    except IndexError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return serialize_tile(snapshot, session.config)


@router.get("/{session_id}/maps/{field_name}", response_model=MapResponse)
def get_map(request: Request, session_id: str, field_name: str):
    """One scalar field over the whole grid, as rows north to south."""
    session = _get_session(request, session_id)
    if field_name not in _MAP_FIELDS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown map field: '{field_name}'. Available: {list(_MAP_FIELDS)}",
        )
    grid = session.world.grid
    values = getattr(grid, f"{field_name}_map")()
    return {
        "field": field_name,
        "width": grid.width,
        "height": grid.height,
        "values": serialize_map(values),
    }


@router.get("/{session_id}/colors", response_model=MapResponse)
def get_colors(request: Request, session_id: str):
    """Display colour per tile for a renderer."""
    session = _get_session(request, session_id)
    grid = session.world.grid
    return {
        "field": "color",
        "width": grid.width,
        "height": grid.height,
        "values": color_grid(grid, session.config),
    }


@router.get("/{session_id}/biomass")
def get_biomass(request: Request, session_id: str):
    """Biomass sums from the latest local pass and over the live grid."""
    session = _get_session(request, session_id)
    world = session.world
    totals = world.biomass_totals()
    snapshot = world.snapshot()
    return {
        "tick": world.tick_count,
        "population": totals.population,
        "total": totals.total,
        "abiogenesis_events": totals.abiogenesis_events,
        "by_life_form": totals.by_life_form,
        "grid_population": snapshot.biomass_population,
        "grid_total": snapshot.biomass_total,
    }
