"""
Pydantic models for API request/response validation.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Any


# === Simulation ===

class CreateSessionRequest(BaseModel):
    config: dict[str, Any] | None = None
    preset: str | None = None
    name: str | None = None


class StepRequest(BaseModel):
    n: int = Field(1, ge=1, le=10_000)


class SessionSummary(BaseModel):
    id: str
    name: str
    status: str
    current_tick: int
    max_ticks: int
    biomass_population: float


class SessionResponse(BaseModel):
    id: str
    name: str
    status: str
    current_tick: int
    max_ticks: int
    width: int
    height: int
    config: dict[str, Any]


# === World ===

class TileResponse(BaseModel):
    x: int
    y: int
    altitude: float
    heat: float
    cover: str
    base_luminosity: float
    population: float
    total_biomass: float
    biomass: dict[str, float]
    color: str


class MapResponse(BaseModel):
    field: str
    width: int
    height: int
    values: list[list[Any]]


# === Metrics ===

class SummaryResponse(BaseModel):
    total_ticks: int
    final_carbon_dioxide: float
    final_oxygen: float
    final_biomass: float
    peak_biomass: float
    mean_heat: float
    total_eruptions: int
    total_abiogenesis_events: int


class TimeSeriesResponse(BaseModel):
    field: str
    ticks: list[int]
    values: list[Any]


# === Experiments ===

class PresetInfo(BaseModel):
    name: str
    config: dict[str, Any]
