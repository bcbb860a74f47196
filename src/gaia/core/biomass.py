"""
Biomass model — abiogenesis, growth, gas exchange and population diffusion.

Life forms are data: every rule below is evaluated against a ``LifeForm``
record, and the model iterates over the configured table. The default
table holds a single microbe, for which ``total == population`` on every
tile.

Gas exchange writes straight into the global atmosphere while tiles are
visited in raster order, so each tile sees the pools as left by the tiles
before it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from gaia.core.atmosphere import Gas

if TYPE_CHECKING:
    from gaia.core.atmosphere import Atmosphere
    from gaia.core.config import LifeForm, WorldConfig
    from gaia.core.grid import Grid, Tile


@dataclass
class BiomassTotals:
    """Running sums over one tick's local pass. Reporting only."""
    population: float = 0.0
    total: float = 0.0
    abiogenesis_events: int = 0
    by_life_form: dict[str, float] = field(default_factory=dict)

    def reset(self) -> None:
        self.population = 0.0
        self.total = 0.0
        self.abiogenesis_events = 0
        self.by_life_form = {}


class BiomassModel:
    """Table-driven population dynamics over a set of life forms."""

    def __init__(self, config: WorldConfig):
        self.config = config
        self.life_forms: list[LifeForm] = config.life_form_table

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def is_habitable(
        self, tile: Tile, form: LifeForm, atmosphere: Atmosphere, area: int,
    ) -> bool:
        if tile.heat > form.unlivable_temperature:
            return False
        if tile.cover != form.habitat:
            return False
        return atmosphere.local_share(form.breathes, area) > form.min_breathable_share

    def carrying_capacity(self, tile: Tile, form: LifeForm) -> float:
        """Energy-limited ceiling on population."""
        return tile.base_luminosity * self.config.full_luminosity_heat * form.biomass_per_energy

    def can_spawn(self, tile: Tile, form: LifeForm) -> bool:
        return (
            tile.biomass[form.name].total == 0
            and tile.cover == form.habitat
            and form.min_abiogenesis_heat < tile.heat < form.unlivable_temperature
        )

    def growth_rate(self, form: LifeForm, atmosphere: Atmosphere, area: int) -> float:
        """Reproduction rate throttled by the available carbon share."""
        share = atmosphere.local_share(Gas.CARBON_DIOXIDE, area)
        return min(share * form.base_reproduction_rate, form.base_reproduction_rate)

    # ------------------------------------------------------------------
    # Local pass
    # ------------------------------------------------------------------

    def update_tile(
        self,
        tile: Tile,
        atmosphere: Atmosphere,
        area: int,
        rng: np.random.Generator,
        totals: BiomassTotals,
    ) -> None:
        """Run survival, abiogenesis, growth and gas exchange on one tile."""
        for form in self.life_forms:
            biomass = tile.biomass[form.name]

            # Death
            if not self.is_habitable(tile, form, atmosphere, area):
                biomass.clear()

            # Abiogenesis. A new colony does not reproduce on the tick it appears.
            spawned = False
            if self.can_spawn(tile, form) and rng.random() < form.abiogenesis_probability:
                biomass.population = 1.0
                biomass.total = 1.0
                spawned = True
                totals.abiogenesis_events += 1

            # Growth
            if not spawned and biomass.population > 0:
                rate = self.growth_rate(form, atmosphere, area)
                population = biomass.population + biomass.population * rate
                biomass.population = min(population, self.carrying_capacity(tile, form))
                biomass.total = biomass.population

            # Gas exchange
            if biomass.population > 0:
                atmosphere.add(Gas.CARBON_DIOXIDE, -biomass.population * form.carbon_per_biomass)
                atmosphere.add(Gas.OXYGEN, biomass.population * form.oxygen_per_biomass)

            totals.population += biomass.population
            totals.total += biomass.total
            totals.by_life_form[form.name] = (
                totals.by_life_form.get(form.name, 0.0) + biomass.population
            )

    # ------------------------------------------------------------------
    # Diffusion
    # ------------------------------------------------------------------

    def diffuse(self, grid: Grid, atmosphere: Atmosphere) -> None:
        """Pairwise-average populations with east and south neighbours.

        A pair only mixes when both tiles are habitable and at least one
        side exceeds the life form's diffusion threshold.
        """
        area = grid.area
        for form in self.life_forms:
            habitable = [
                self.is_habitable(t, form, atmosphere, area) for t in grid.tiles
            ]
            width = grid.width
            threshold = form.diffusion_threshold
            for x, y, tile in grid.raster():
                if not habitable[y * width + x]:
                    continue
                here = tile.biomass[form.name]

                avg_east = None
                east_index = y * width + (x + 1) % width
                if habitable[east_index]:
                    east = grid.tiles[east_index].biomass[form.name]
                    if here.population > threshold or east.population > threshold:
                        avg_east = (here.population + east.population) / 2
                        east.population = east.total = avg_east

                avg_south = None
                south_tile = grid.south(x, y)
                if south_tile is not None and habitable[(y + 1) * width + x]:
                    south = south_tile.biomass[form.name]
                    if here.population > threshold or south.population > threshold:
                        avg_south = (here.population + south.population) / 2
                        south.population = south.total = avg_south

                if avg_east is not None and avg_south is not None:
                    here.population = (avg_east + avg_south) / 2
                elif avg_east is not None:
                    here.population = avg_east
                elif avg_south is not None:
                    here.population = avg_south
                here.total = here.population
