"""Tests for the surface cover classifier."""

from gaia.core.config import WorldConfig
from gaia.core.cover import CoverClassifier
from gaia.core.grid import Grid, TileCover


def _classifier(**overrides) -> CoverClassifier:
    return CoverClassifier(WorldConfig(**overrides))


class TestClassify:
    def test_high_ground_is_rock(self):
        c = _classifier()
        assert c.classify(1500.0, 200.0) == TileCover.ROCK
        assert c.classify(1500.0, -50.0) == TileCover.ROCK

    def test_sea_level_is_rock(self):
        assert _classifier().classify(1000.0, 200.0) == TileCover.ROCK

    def test_warm_low_ground_is_water(self):
        assert _classifier().classify(0.0, 121.0) == TileCover.WATER

    def test_freezing_point_is_ice(self):
        assert _classifier().classify(0.0, 120.0) == TileCover.ICE

    def test_cold_low_ground_is_ice(self):
        assert _classifier().classify(999.0, 0.0) == TileCover.ICE

    def test_thresholds_from_config(self):
        c = _classifier(sea_level=10.0, freezing_point=0.0)
        assert c.classify(10.0, 5.0) == TileCover.ROCK
        assert c.classify(9.0, 5.0) == TileCover.WATER


class TestReclassify:
    def test_reclassify_every_tile(self):
        grid = Grid(3, 1)
        grid.tile(0, 0).altitude = 2000.0
        grid.tile(1, 0).heat = 150.0
        grid.tile(2, 0).heat = 10.0
        _classifier().reclassify(grid)
        assert [t.cover for t in grid.tiles] == [
            TileCover.ROCK, TileCover.WATER, TileCover.ICE,
        ]
