"""
World — the tick orchestrator.

Owns the grid, the atmosphere and the random generator for one run, and
advances them through a fixed phase order:

1. Volcanism (one eruption)
2. Atmosphere decay
3. Per-tile local pass in raster order: erosion, heat update, surface
   water count, biomass survival / abiogenesis / growth / gas exchange
4. Water vapour recompute from the surface water count
5. Heat diffusion
6. Biomass diffusion
7. Cover reclassification

``tick()`` is not reentrant. Callers poll the read-only accessors between
ticks.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from gaia.core.atmosphere import Atmosphere, Gas
from gaia.core.biomass import BiomassModel, BiomassTotals
from gaia.core.config import WorldConfig
from gaia.core.cover import CoverClassifier
from gaia.core.grid import Grid, TileCover
from gaia.core.thermal import ThermalModel
from gaia.core.volcanism import Eruption, VolcanismGenerator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Read-only views
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TileSnapshot:
    """State of one tile between ticks."""
    x: int
    y: int
    altitude: float
    heat: float
    cover: TileCover
    base_luminosity: float
    population: float
    total_biomass: float
    biomass: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class WorldSnapshot:
    """Whole-world state between ticks. Arrays are (height, width) copies."""
    tick: int
    atmosphere: dict[str, float]
    altitude: np.ndarray
    heat: np.ndarray
    cover: np.ndarray
    population: np.ndarray
    biomass_population: float
    biomass_total: float


@dataclass
class TickReport:
    """What happened during one tick."""
    tick: int
    eruption: Eruption | None
    heat_trapping_factor: float
    water_tiles: int
    biomass_population: float
    biomass_total: float
    abiogenesis_events: int
    events: dict[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class World:
    """
    One planet, advanced one tick at a time.

    The random generator can be injected; otherwise it is seeded from
    ``config.random_seed``. Either way ``initialize()`` restarts it from the
    state it had when the world was built, so a re-initialized world replays
    the same run. An injected generator is copied, never advanced.
    """

    def __init__(self, config: WorldConfig | None = None, rng: np.random.Generator | None = None):
        self.config = config or WorldConfig()
        self._rng_template = copy.deepcopy(rng) if rng is not None else None
        self.initialize()

    def initialize(self) -> None:
        """Rebuild the models from the config, then a zeroed grid and atmosphere."""
        self.config.validate()
        if self._rng_template is not None:
            self.rng = copy.deepcopy(self._rng_template)
        else:
            self.rng = np.random.default_rng(self.config.random_seed)

        self.volcanism = VolcanismGenerator(self.config)
        self.thermal = ThermalModel(self.config)
        self.biomass = BiomassModel(self.config)
        self.classifier = CoverClassifier(self.config)

        self.atmosphere = Atmosphere()
        self.grid = Grid(
            self.config.width,
            self.config.height,
            polar_luminosity=self.config.polar_luminosity,
            life_form_names=[f.name for f in self.biomass.life_forms],
        )
        self.tick_count = 0
        self.totals = BiomassTotals()
        self.last_report: TickReport | None = None
        logger.debug(
            "Initialized %dx%d world '%s' (seed=%s)",
            self.config.width, self.config.height,
            self.config.world_name, self.config.random_seed,
        )

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> TickReport:
        cfg = self.config
        grid = self.grid
        atmosphere = self.atmosphere
        area = grid.area
        self.totals.reset()

        # === Phase 1: Volcanism ===
        eruption = None
        if cfg.volcanism_enabled:
            eruption = self.volcanism.erupt(grid, atmosphere, self.rng)

        # === Phase 2: Atmosphere decay ===
        atmosphere.decay(cfg.atmosphere_loss_rate)
        trapping = self.thermal.heat_trapping_factor(atmosphere, area)

        # === Phase 3: Per-tile local pass ===
        water_tiles = 0
        for _x, _y, tile in grid.raster():
            tile.altitude = max(tile.altitude - cfg.erosion_rate, 0.0)
            self.thermal.update_heat(tile, trapping)
            if tile.cover == TileCover.WATER:
                water_tiles += 1
            if cfg.biomass_enabled:
                self.biomass.update_tile(tile, atmosphere, area, self.rng, self.totals)

        # === Phase 4: Water vapour replaces, never accumulates ===
        atmosphere.set(Gas.WATER_VAPOUR, water_tiles * cfg.vapour_per_water_tile)

        # === Phase 5-6: Diffusion ===
        self.thermal.diffuse(grid)
        if cfg.biomass_enabled:
            self.biomass.diffuse(grid, atmosphere)

        # === Phase 7: Reclassification ===
        self.classifier.reclassify(grid)

        report = TickReport(
            tick=self.tick_count,
            eruption=eruption,
            heat_trapping_factor=trapping,
            water_tiles=water_tiles,
            biomass_population=self.totals.population,
            biomass_total=self.totals.total,
            abiogenesis_events=self.totals.abiogenesis_events,
            events={"by_life_form": dict(self.totals.by_life_form)},
        )
        self.tick_count += 1
        self.last_report = report
        return report

    def run(self, ticks: int | None = None) -> list[TickReport]:
        """Advance the world by the given number of ticks."""
        ticks = ticks if ticks is not None else self.config.ticks_to_run
        return [self.tick() for _ in range(ticks)]

    # ------------------------------------------------------------------
    # External seeding
    # ------------------------------------------------------------------

    def seed_population(
        self, x: int, y: int, amount: float, life_form: str | None = None,
    ) -> None:
        """Place a population on a tile from outside the tick pipeline."""
        name = life_form or self.biomass.life_forms[0].name
        biomass = self.grid.tile(x, y).biomass[name]
        biomass.population = max(amount, 0.0)
        biomass.total = biomass.population

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    def atmosphere_totals(self) -> dict[str, float]:
        return self.atmosphere.to_dict()

    def tile_state(self, x: int, y: int) -> TileSnapshot:
        tile = self.grid.tile(x, y)
        return TileSnapshot(
            x=x,
            y=y,
            altitude=tile.altitude,
            heat=tile.heat,
            cover=tile.cover,
            base_luminosity=tile.base_luminosity,
            population=tile.population,
            total_biomass=tile.total_biomass,
            biomass={name: b.population for name, b in tile.biomass.items()},
        )

    def biomass_totals(self) -> BiomassTotals:
        """Sums accumulated during the most recent local pass."""
        return BiomassTotals(
            population=self.totals.population,
            total=self.totals.total,
            abiogenesis_events=self.totals.abiogenesis_events,
            by_life_form=dict(self.totals.by_life_form),
        )

    def snapshot(self) -> WorldSnapshot:
        population = self.grid.population_map()
        return WorldSnapshot(
            tick=self.tick_count,
            atmosphere=self.atmosphere_totals(),
            altitude=self.grid.altitude_map(),
            heat=self.grid.heat_map(),
            cover=self.grid.cover_map(),
            population=population,
            biomass_population=float(population.sum()),
            biomass_total=float(sum(t.total_biomass for t in self.grid.tiles)),
        )
