"""Per-tick statistics endpoints."""

from __future__ import annotations

from typing import Any

import numpy as np
from fastapi import APIRouter, HTTPException, Query, Request

from gaia.api.schemas import SummaryResponse, TimeSeriesResponse
from gaia.api.serializers import serialize_stats

router = APIRouter()


def _get_session(request: Request, session_id: str):
    mgr = request.app.state.session_manager
    try:
        return mgr.get_session(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")


@router.get("/{session_id}/ticks")
def get_ticks(
    session_id: str,
    request: Request,
    from_tick: int = Query(0, ge=0),
    to_tick: int | None = Query(None),
) -> list[dict[str, Any]]:
    session = _get_session(request, session_id)
    history = session.collector.stats_history
    end = to_tick if to_tick is not None else len(history)
    return [serialize_stats(s) for s in history[from_tick:end]]


@router.get("/{session_id}/time-series/{field_name}", response_model=TimeSeriesResponse)
def get_time_series(session_id: str, field_name: str, request: Request):
    session = _get_session(request, session_id)
    collector = session.collector
    try:
        values = collector.get_time_series(field_name)
    except AttributeError:
        raise HTTPException(status_code=400, detail=f"Unknown metric field: '{field_name}'")

    # Convert numpy types to Python scalars
    safe_values = []
    for v in values:
        if isinstance(v, np.ndarray):
            safe_values.append(v.tolist())
        elif isinstance(v, (np.integer, np.floating)):
            safe_values.append(v.item())
        else:
            safe_values.append(v)

    return {
        "field": field_name,
        "ticks": [s.tick for s in collector.stats_history],
        "values": safe_values,
    }


@router.get("/{session_id}/summary", response_model=SummaryResponse)
def get_summary(session_id: str, request: Request):
    session = _get_session(request, session_id)
    history = session.collector.stats_history
    if not history:
        atmosphere = session.world.atmosphere_totals()
        return {
            "total_ticks": 0,
            "final_carbon_dioxide": atmosphere["carbon_dioxide"],
            "final_oxygen": atmosphere["oxygen"],
            "final_biomass": 0.0,
            "peak_biomass": 0.0,
            "mean_heat": 0.0,
            "total_eruptions": 0,
            "total_abiogenesis_events": 0,
        }

    final = history[-1]
    return {
        "total_ticks": len(history),
        "final_carbon_dioxide": final.carbon_dioxide,
        "final_oxygen": final.oxygen,
        "final_biomass": final.biomass_population,
        "peak_biomass": max(s.biomass_population for s in history),
        "mean_heat": float(np.mean([s.mean_heat for s in history])),
        "total_eruptions": sum(1 for s in history if s.eruption is not None),
        "total_abiogenesis_events": sum(s.abiogenesis_events for s in history),
    }
