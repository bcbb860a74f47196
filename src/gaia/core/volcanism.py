"""
Volcanism — stochastic, radially decaying altitude injection.

One eruption per tick, centred on a uniformly random tile. Upthrust falls
off linearly with distance inside a square of half-width ``h`` and is
purely additive. Offsets that land outside the grid are dropped: volcano
spread does not wrap horizontally even though heat and biomass diffusion do.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from gaia.core.atmosphere import Gas

if TYPE_CHECKING:
    from gaia.core.atmosphere import Atmosphere
    from gaia.core.config import WorldConfig
    from gaia.core.grid import Grid

logger = logging.getLogger(__name__)


@dataclass
class Eruption:
    """Record of a single eruption."""
    x: int
    y: int
    upthrust: float
    carbon_vented: float
    tiles_raised: int


def spread_kernel(half_width: int) -> np.ndarray:
    """Fractional upthrust for each (dy, dx) offset, shape (2h+1, 2h+1).

    ``kernel[dy + h, dx + h] = max(h - sqrt(dx^2 + dy^2), 0) / h``
    """
    size = 2 * half_width + 1
    kernel = np.zeros((size, size))
    for dy in range(-half_width, half_width + 1):
        for dx in range(-half_width, half_width + 1):
            dist = math.sqrt(dx * dx + dy * dy)
            kernel[dy + half_width, dx + half_width] = max(half_width - dist, 0.0) / half_width
    return kernel


class VolcanismGenerator:
    """Raises terrain and vents CO2 once per tick."""

    def __init__(self, config: WorldConfig):
        self.config = config
        self.half_width = config.volcano_half_width
        self._kernel = spread_kernel(self.half_width)

    def erupt(
        self, grid: Grid, atmosphere: Atmosphere, rng: np.random.Generator,
    ) -> Eruption:
        cfg = self.config
        base_x = int(rng.integers(0, grid.width))
        base_y = int(rng.integers(0, grid.height))
        upthrust = float(rng.uniform(
            cfg.volcano_min_upthrust,
            cfg.volcano_min_upthrust + cfg.volcano_upthrust_variation,
        ))
        carbon = float(rng.uniform(
            cfg.volcano_min_carbon_output,
            cfg.volcano_min_carbon_output + cfg.volcano_carbon_output_variation,
        ))

        h = self.half_width
        raised = 0
        for dy in range(-h, h + 1):
            for dx in range(-h, h + 1):
                x = base_x + dx
                y = base_y + dy
                if not grid.in_bounds(x, y):
                    continue
                contribution = upthrust * self._kernel[dy + h, dx + h]
                if contribution <= 0.0:
                    continue
                tile = grid.tile(x, y)
                tile.altitude = min(tile.altitude + contribution, cfg.max_altitude)
                raised += 1

        atmosphere.add(Gas.CARBON_DIOXIDE, carbon)

        logger.debug(
            "Eruption at (%d, %d): upthrust=%.1f carbon=%.1f tiles=%d",
            base_x, base_y, upthrust, carbon, raised,
        )
        return Eruption(
            x=base_x, y=base_y, upthrust=upthrust,
            carbon_vented=carbon, tiles_raised=raised,
        )
