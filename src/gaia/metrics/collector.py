"""
Metrics Collector — per-tick planetary statistics.

Reads scalar aggregates from a World after each tick: gas pools, heat
by latitude band, surface cover, terrain and biosphere totals. Provides
time series extraction and export for visualization.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

import numpy as np

from gaia.core.config import WorldConfig
from gaia.core.grid import COVER_CODES, TileCover
from gaia.core.world import TickReport, World


@dataclass
class WorldStats:
    """Statistics for a single tick."""

    tick: int

    # Atmosphere
    nitrogen: float
    oxygen: float
    carbon_dioxide: float
    methane: float
    water_vapour: float
    heat_trapping_factor: float

    # Heat
    mean_heat: float
    min_heat: float
    max_heat: float
    equatorial_heat: float  # mean over the equator row
    polar_heat: float       # mean over the northern edge row
    meridional_heat: float  # mean over the central column, pole to pole

    # Terrain
    mean_altitude: float
    max_altitude: float
    land_fraction: float

    # Cover
    cover_counts: dict[str, int]
    cover_fractions: dict[str, float]
    cover_changes: int  # tiles whose cover differs from the previous tick

    # Biosphere
    biomass_population: float
    biomass_total: float
    populated_tiles: int
    abiogenesis_events: int

    # Volcanism
    eruption: dict[str, Any] | None = None
    population_by_life_form: dict[str, float] = field(default_factory=dict)


STAT_FIELDS = frozenset(f.name for f in fields(WorldStats))


class MetricsCollector:
    """
    Collects and aggregates statistics across ticks.

    Works alongside the World, polled once after each ``tick()``.
    """

    def __init__(self, config: WorldConfig):
        self.config = config
        self.stats_history: list[WorldStats] = []
        self._previous_cover: np.ndarray | None = None

    def collect(self, world: World, report: TickReport) -> WorldStats:
        """Collect statistics for the tick that produced ``report``."""
        grid = world.grid
        atmosphere = world.atmosphere_totals()

        heat = grid.heat_map()
        altitude = grid.altitude_map()
        cover = grid.cover_map()
        population = grid.population_map()

        counts = {c.value: int(np.sum(cover == COVER_CODES[c])) for c in TileCover}
        area = grid.area
        fractions = {name: count / area for name, count in counts.items()}

        cover_changes = 0
        if self._previous_cover is not None:
            cover_changes = int(np.sum(cover != self._previous_cover))
        self._previous_cover = cover

        eruption = None
        if report.eruption is not None:
            e = report.eruption
            eruption = {
                "x": e.x, "y": e.y, "upthrust": e.upthrust,
                "carbon_vented": e.carbon_vented, "tiles_raised": e.tiles_raised,
            }

        stats = WorldStats(
            tick=report.tick,
            nitrogen=atmosphere["nitrogen"],
            oxygen=atmosphere["oxygen"],
            carbon_dioxide=atmosphere["carbon_dioxide"],
            methane=atmosphere["methane"],
            water_vapour=atmosphere["water_vapour"],
            heat_trapping_factor=report.heat_trapping_factor,
            mean_heat=float(heat.mean()),
            min_heat=float(heat.min()),
            max_heat=float(heat.max()),
            equatorial_heat=float(heat[grid.height // 2].mean()),
            polar_heat=float(heat[0].mean()),
            meridional_heat=float(heat[:, grid.width // 2].mean()),
            mean_altitude=float(altitude.mean()),
            max_altitude=float(altitude.max()),
            land_fraction=fractions[TileCover.ROCK.value],
            cover_counts=counts,
            cover_fractions=fractions,
            cover_changes=cover_changes,
            biomass_population=report.biomass_population,
            biomass_total=report.biomass_total,
            populated_tiles=int(np.sum(population > 0)),
            abiogenesis_events=report.abiogenesis_events,
            eruption=eruption,
            population_by_life_form=dict(report.events.get("by_life_form", {})),
        )

        self.stats_history.append(stats)
        return stats

    def get_time_series(self, field_name: str) -> list[Any]:
        """Extract a time series for a specific metric field."""
        if field_name not in STAT_FIELDS:
            raise AttributeError(f"Unknown metric field: '{field_name}'")
        return [getattr(s, field_name) for s in self.stats_history]

    def export_for_visualization(self) -> list[dict[str, Any]]:
        """Export all statistics as a list of JSON-serializable dicts."""
        result = []
        for s in self.stats_history:
            d: dict[str, Any] = {
                "tick": s.tick,
                "nitrogen": s.nitrogen,
                "oxygen": s.oxygen,
                "carbon_dioxide": s.carbon_dioxide,
                "methane": s.methane,
                "water_vapour": s.water_vapour,
                "heat_trapping_factor": s.heat_trapping_factor,
                "mean_heat": s.mean_heat,
                "min_heat": s.min_heat,
                "max_heat": s.max_heat,
                "equatorial_heat": s.equatorial_heat,
                "polar_heat": s.polar_heat,
                "meridional_heat": s.meridional_heat,
                "mean_altitude": s.mean_altitude,
                "max_altitude": s.max_altitude,
                "land_fraction": s.land_fraction,
                "cover_counts": s.cover_counts,
                "cover_fractions": s.cover_fractions,
                "cover_changes": s.cover_changes,
                "biomass_population": s.biomass_population,
                "biomass_total": s.biomass_total,
                "populated_tiles": s.populated_tiles,
                "abiogenesis_events": s.abiogenesis_events,
                "eruption": s.eruption,
                "population_by_life_form": s.population_by_life_form,
            }
            result.append(d)
        return result
