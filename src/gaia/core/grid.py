"""
Planetary tile grid for the Gaia Sandbox.

A fixed W x H array of tiles stored row-major. The horizontal (x) axis
wraps around; the vertical (y) axis does not, so the northern and southern
edge rows have no neighbour beyond them.

Coordinate system: x is the column (0..W-1, west to east), y is the row
(0..H-1, north to south). The equator sits at y = H / 2. Storage order and
scan order differ: order-dependent passes walk ``raster()``, which visits
each column top to bottom before moving east.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

import numpy as np


class TileCover(str, Enum):
    """Surface cover derived from altitude and heat."""

    NOT_COMPUTED = "not_computed"
    ROCK = "rock"
    WATER = "water"
    ICE = "ice"


# Stable integer codes for cover maps handed to numpy consumers.
COVER_CODES: dict[TileCover, int] = {
    TileCover.NOT_COMPUTED: 0,
    TileCover.ROCK: 1,
    TileCover.WATER: 2,
    TileCover.ICE: 3,
}


@dataclass
class Biomass:
    """Population of one life form on one tile. total >= population >= 0."""

    population: float = 0.0
    total: float = 0.0

    def clear(self) -> None:
        self.population = 0.0
        self.total = 0.0


@dataclass
class Tile:
    """A single grid cell.

    Attributes:
        altitude: Height in [0, max_altitude].
        base_luminosity: Incoming energy fraction fixed by latitude at creation.
        heat: Smoothed surface heat. Unbounded.
        cover: Classification from the previous tick's reclassification pass.
        biomass: Per life form population, keyed by life form name.
    """

    base_luminosity: float
    altitude: float = 0.0
    heat: float = 0.0
    cover: TileCover = TileCover.NOT_COMPUTED
    biomass: dict[str, Biomass] = field(default_factory=dict)

    @property
    def population(self) -> float:
        """Population summed over every life form."""
        return sum(b.population for b in self.biomass.values())

    @property
    def total_biomass(self) -> float:
        return sum(b.total for b in self.biomass.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "altitude": self.altitude,
            "base_luminosity": self.base_luminosity,
            "heat": self.heat,
            "cover": self.cover.value,
            "biomass": {
                name: {"population": b.population, "total": b.total}
                for name, b in self.biomass.items()
            },
        }


def latitude_luminosity(y: int, height: int, polar_luminosity: float) -> float:
    """Base luminosity for row y: 1 at the equator, polar_luminosity at the poles."""
    half = height / 2
    equatorial_distance = abs(y - half) / half
    return 1.0 - (1.0 - polar_luminosity) * equatorial_distance


class Grid:
    """A cylinder of tiles: x wraps, y is bounded.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        tiles: Row-major list; tile (x, y) lives at index y * width + x.
    """

    def __init__(
        self,
        width: int,
        height: int,
        polar_luminosity: float = 0.5,
        life_form_names: list[str] | None = None,
    ):
        self.width = width
        self.height = height
        names = life_form_names or []
        self.tiles: list[Tile] = []
        for y in range(height):
            luminosity = latitude_luminosity(y, height, polar_luminosity)
            for _x in range(width):
                self.tiles.append(Tile(
                    base_luminosity=luminosity,
                    biomass={name: Biomass() for name in names},
                ))

    @property
    def area(self) -> int:
        return self.width * self.height

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"Tile ({x}, {y}) outside {self.width}x{self.height} grid")
        return self.tiles[y * self.width + x]

    def east(self, x: int, y: int) -> Tile:
        """Eastern neighbour, wrapping around the x axis."""
        return self.tiles[y * self.width + (x + 1) % self.width]

    def south(self, x: int, y: int) -> Tile | None:
        """Southern neighbour, or None on the southern edge row."""
        if y + 1 >= self.height:
            return None
        return self.tiles[(y + 1) * self.width + x]

    def raster(self) -> Iterator[tuple[int, int, Tile]]:
        """Yield (x, y, tile) column by column, north to south within a column."""
        width = self.width
        for x in range(width):
            for y in range(self.height):
                yield x, y, self.tiles[y * width + x]

    def row(self, y: int) -> list[Tile]:
        start = y * self.width
        return self.tiles[start:start + self.width]

    def column(self, x: int) -> list[Tile]:
        return self.tiles[x::self.width]

    # ------------------------------------------------------------------
    # Read-only array views
    # ------------------------------------------------------------------

    def _field_map(self, values: list[float]) -> np.ndarray:
        return np.array(values, dtype=float).reshape(self.height, self.width)

    def altitude_map(self) -> np.ndarray:
        return self._field_map([t.altitude for t in self.tiles])

    def heat_map(self) -> np.ndarray:
        return self._field_map([t.heat for t in self.tiles])

    def luminosity_map(self) -> np.ndarray:
        return self._field_map([t.base_luminosity for t in self.tiles])

    def population_map(self, life_form: str | None = None) -> np.ndarray:
        if life_form is None:
            return self._field_map([t.population for t in self.tiles])
        return self._field_map([t.biomass[life_form].population for t in self.tiles])

    def cover_map(self) -> np.ndarray:
        codes = [COVER_CODES[t.cover] for t in self.tiles]
        return np.array(codes, dtype=np.int8).reshape(self.height, self.width)

    def cover_counts(self) -> dict[str, int]:
        counts = {c.value: 0 for c in TileCover}
        for t in self.tiles:
            counts[t.cover.value] += 1
        return counts
