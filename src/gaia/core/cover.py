"""
Surface cover classification.

Cover is never independent state: it is a pure function of altitude and
heat, recomputed for every tile as the last phase of each tick. Phases
earlier in a tick therefore see the previous tick's classification.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gaia.core.grid import TileCover

if TYPE_CHECKING:
    from gaia.core.config import WorldConfig
    from gaia.core.grid import Grid


class CoverClassifier:
    """Classifies tiles into rock, water or ice."""

    def __init__(self, config: WorldConfig):
        self.sea_level = config.sea_level
        self.freezing_point = config.freezing_point

    def classify(self, altitude: float, heat: float) -> TileCover:
        if altitude >= self.sea_level:
            return TileCover.ROCK
        elif heat > self.freezing_point:
            return TileCover.WATER
        else:
            return TileCover.ICE

    def reclassify(self, grid: Grid) -> None:
        """Recompute cover for every tile."""
        for tile in grid.tiles:
            tile.cover = self.classify(tile.altitude, tile.heat)
