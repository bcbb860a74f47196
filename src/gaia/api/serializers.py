"""
Serializers for converting world objects to JSON-safe dicts.

Also holds the display palette: the colour a renderer should paint a
tile given its cover, altitude and population.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from gaia.core.config import WorldConfig
from gaia.core.grid import Grid, TileCover
from gaia.core.world import TileSnapshot
from gaia.metrics.collector import WorldStats

# Hue a fully populated ocean shifts to.
_LIFE_HUE = 120


def hsl(h: float, s: float, l: float) -> str:
    """CSS hsl() string from a hue in degrees and fractional s, l."""
    return f"hsl({round(h)},{round(s * 100)}%,{round(l * 100)}%)"


def population_scale(config: WorldConfig) -> float:
    """Largest carrying capacity any tile can reach (equatorial, densest form)."""
    densest = max((f.biomass_per_energy for f in config.life_form_table), default=0.0)
    return config.full_luminosity_heat * densest


def tile_color(
    cover: TileCover,
    altitude: float,
    population: float,
    max_altitude: float,
    scale: float,
) -> str:
    if cover == TileCover.ROCK:
        return hsl(21, 0.55, altitude / max_altitude)
    elif cover == TileCover.WATER:
        fraction = min(population / scale, 1.0) if scale > 0 else 0.0
        return hsl(233 - (233 - _LIFE_HUE) * fraction, 0.84, 0.45)
    elif cover == TileCover.ICE:
        return hsl(0, 0, 1)
    return hsl(0, 0, 0)


def color_grid(grid: Grid, config: WorldConfig) -> list[list[str]]:
    scale = population_scale(config)
    rows: list[list[str]] = []
    for y in range(grid.height):
        rows.append([
            tile_color(t.cover, t.altitude, t.population, config.max_altitude, scale)
            for t in grid.row(y)
        ])
    return rows


def serialize_tile(snapshot: TileSnapshot, config: WorldConfig) -> dict[str, Any]:
    color = tile_color(
        snapshot.cover, snapshot.altitude, snapshot.population,
        config.max_altitude, population_scale(config),
    )
    return {
        "x": snapshot.x,
        "y": snapshot.y,
        "altitude": round(float(snapshot.altitude), 4),
        "heat": round(float(snapshot.heat), 4),
        "cover": snapshot.cover.value,
        "base_luminosity": round(float(snapshot.base_luminosity), 4),
        "population": round(float(snapshot.population), 4),
        "total_biomass": round(float(snapshot.total_biomass), 4),
        "biomass": {k: round(float(v), 4) for k, v in snapshot.biomass.items()},
        "color": color,
    }


def _plain(value: Any) -> Any:
    """Convert numpy scalars and arrays to Python values."""
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    return value


def serialize_map(values: np.ndarray) -> list[list[Any]]:
    return [[_plain(v) for v in row] for row in values]


def serialize_stats(stats: WorldStats) -> dict[str, Any]:
    return {
        "tick": stats.tick,
        "atmosphere": {
            "nitrogen": stats.nitrogen,
            "oxygen": stats.oxygen,
            "carbon_dioxide": stats.carbon_dioxide,
            "methane": stats.methane,
            "water_vapour": stats.water_vapour,
        },
        "heat_trapping_factor": stats.heat_trapping_factor,
        "heat": {
            "mean": stats.mean_heat,
            "min": stats.min_heat,
            "max": stats.max_heat,
            "equatorial": stats.equatorial_heat,
            "polar": stats.polar_heat,
            "meridional": stats.meridional_heat,
        },
        "terrain": {
            "mean_altitude": stats.mean_altitude,
            "max_altitude": stats.max_altitude,
            "land_fraction": stats.land_fraction,
        },
        "cover_counts": stats.cover_counts,
        "cover_changes": stats.cover_changes,
        "biomass": {
            "population": stats.biomass_population,
            "total": stats.biomass_total,
            "populated_tiles": stats.populated_tiles,
            "abiogenesis_events": stats.abiogenesis_events,
            "by_life_form": stats.population_by_life_form,
        },
        "eruption": stats.eruption,
    }
