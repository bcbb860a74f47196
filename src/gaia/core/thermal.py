"""
Thermal model — luminosity, greenhouse trapping, heat update and diffusion.

Heat responds to a per-tile target with exponential smoothing (thermal
inertia) and then spreads between neighbours in a single raster-order
scan that writes each average immediately. Tiles later in the scan read
neighbours that were already updated earlier in the same scan; that order
dependence is part of the model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from gaia.core.atmosphere import Gas
from gaia.core.grid import TileCover

if TYPE_CHECKING:
    from gaia.core.atmosphere import Atmosphere
    from gaia.core.config import WorldConfig
    from gaia.core.grid import Grid, Tile


class ThermalModel:
    """Per-tile heat balance plus neighbour diffusion."""

    def __init__(self, config: WorldConfig):
        self.config = config
        self._reflectivity: dict[TileCover, float] = {
            TileCover.WATER: config.water_reflectivity,
            TileCover.ICE: config.ice_reflectivity,
        }

    def heat_trapping_factor(self, atmosphere: Atmosphere, area: int) -> float:
        """Linear greenhouse multiplier from the local CO2 and vapour shares."""
        cfg = self.config
        return (
            atmosphere.local_share(Gas.CARBON_DIOXIDE, area) * cfg.carbon_heat_retention
            + atmosphere.local_share(Gas.WATER_VAPOUR, area) * cfg.vapour_heat_retention
        )

    def luminosity(self, tile: Tile) -> float:
        """Base luminosity less whatever the current cover reflects."""
        return tile.base_luminosity * (1.0 - self._reflectivity.get(tile.cover, 0.0))

    def target_heat(self, tile: Tile, heat_trapping_factor: float) -> float:
        return self.config.full_luminosity_heat * self.luminosity(tile) * (1.0 + heat_trapping_factor)

    def update_heat(self, tile: Tile, heat_trapping_factor: float) -> None:
        alpha = self.config.heat_smoothing
        target = self.target_heat(tile, heat_trapping_factor)
        tile.heat = alpha * target + (1.0 - alpha) * tile.heat

    # ------------------------------------------------------------------
    # Diffusion
    # ------------------------------------------------------------------

    def diffuse(self, grid: Grid) -> None:
        if self.config.heat_diffusion_mode == "buffered":
            self._diffuse_buffered(grid)
        else:
            self._diffuse_sequential(grid)

    def _diffuse_sequential(self, grid: Grid) -> None:
        for x, y, tile in grid.raster():
            east = grid.east(x, y)
            avg_east = (tile.heat + east.heat) / 2
            east.heat = avg_east

            south = grid.south(x, y)
            if south is None:
                tile.heat = avg_east
                continue
            avg_south = (tile.heat + south.heat) / 2
            south.heat = avg_south
            tile.heat = (avg_east + avg_south) / 2

    def _diffuse_buffered(self, grid: Grid) -> None:
        """Symmetric update from a frozen copy of the field.

        Each tile becomes the mean of itself and its existing neighbours
        (east and west always, north and south where the row exists).
        """
        heat = grid.heat_map()
        total = heat + np.roll(heat, 1, axis=1) + np.roll(heat, -1, axis=1)
        count = np.full(heat.shape, 3.0)
        total[1:, :] += heat[:-1, :]
        count[1:, :] += 1
        total[:-1, :] += heat[1:, :]
        count[:-1, :] += 1
        new_heat = (total / count).ravel()
        for tile, value in zip(grid.tiles, new_heat):
            tile.heat = float(value)
