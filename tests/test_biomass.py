"""
Tests for the biomass model.

Covers habitability, abiogenesis, carbon-throttled growth, carrying
capacity, gas exchange on the shared atmosphere, and population diffusion.
"""

import numpy as np
import pytest

from gaia.core.atmosphere import Atmosphere
from gaia.core.biomass import BiomassModel, BiomassTotals
from gaia.core.config import WorldConfig
from gaia.core.grid import Biomass, Grid, Tile, TileCover


def _make_config(**life_overrides) -> WorldConfig:
    config = WorldConfig(width=3, height=2, polar_luminosity=1.0, random_seed=42)
    if life_overrides:
        config.configure_life_form("microbe", **life_overrides)
    return config


def _water_tile(population: float = 0.0, heat: float = 150.0) -> Tile:
    return Tile(
        base_luminosity=1.0,
        heat=heat,
        cover=TileCover.WATER,
        biomass={"microbe": Biomass(population=population, total=population)},
    )


def _living_grid(populations: list[list[float]]) -> Grid:
    height = len(populations)
    width = len(populations[0])
    grid = Grid(width, height, polar_luminosity=1.0, life_form_names=["microbe"])
    for x, y, tile in grid.raster():
        tile.cover = TileCover.WATER
        tile.heat = 150.0
        tile.biomass["microbe"].population = populations[y][x]
        tile.biomass["microbe"].total = populations[y][x]
    return grid


def _populations(grid: Grid) -> np.ndarray:
    return grid.population_map("microbe")


class TestHabitability:
    def setup_method(self):
        self.model = BiomassModel(_make_config())
        self.form = self.model.life_forms[0]
        self.atm = Atmosphere(carbon_dioxide=10.0)

    def test_warm_water_with_carbon(self):
        assert self.model.is_habitable(_water_tile(), self.form, self.atm, 10)

    def test_too_hot(self):
        tile = _water_tile(heat=181.0)
        assert not self.model.is_habitable(tile, self.form, self.atm, 10)

    def test_unlivable_boundary_is_habitable(self):
        tile = _water_tile(heat=180.0)
        assert self.model.is_habitable(tile, self.form, self.atm, 10)

    def test_wrong_cover(self):
        tile = _water_tile()
        tile.cover = TileCover.ICE
        assert not self.model.is_habitable(tile, self.form, self.atm, 10)

    def test_no_carbon(self):
        assert not self.model.is_habitable(_water_tile(), self.form, Atmosphere(), 10)

    def test_carrying_capacity(self):
        tile = Tile(base_luminosity=0.5, cover=TileCover.WATER)
        assert self.model.carrying_capacity(tile, self.form) == pytest.approx(6.5)


class TestLocalPass:
    def _update(self, model, tile, atm, area=1, seed=0):
        totals = BiomassTotals()
        model.update_tile(tile, atm, area, np.random.default_rng(seed), totals)
        return totals

    def test_death_when_too_hot(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0, heat=200.0)
        self._update(model, tile, Atmosphere(carbon_dioxide=1.0))
        assert tile.biomass["microbe"].population == 0.0
        assert tile.biomass["microbe"].total == 0.0

    def test_death_on_ice(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0)
        tile.cover = TileCover.ICE
        self._update(model, tile, Atmosphere(carbon_dioxide=1.0))
        assert tile.population == 0.0

    def test_death_without_carbon(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0)
        self._update(model, tile, Atmosphere())
        assert tile.population == 0.0

    def test_abiogenesis_certain(self):
        model = BiomassModel(_make_config(abiogenesis_probability=1.0))
        tile = _water_tile()
        totals = self._update(model, tile, Atmosphere(carbon_dioxide=0.5))
        assert tile.biomass["microbe"].population == 1.0
        assert tile.biomass["microbe"].total == 1.0
        assert totals.abiogenesis_events == 1

    def test_abiogenesis_never(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile()
        for seed in range(50):
            self._update(model, tile, Atmosphere(carbon_dioxide=0.5), seed=seed)
        assert tile.population == 0.0

    def test_abiogenesis_needs_heat_band(self):
        model = BiomassModel(_make_config(abiogenesis_probability=1.0))
        cold = _water_tile(heat=125.0)
        self._update(model, cold, Atmosphere(carbon_dioxide=0.5))
        assert cold.population == 0.0

    def test_abiogenesis_needs_habitat(self):
        model = BiomassModel(_make_config(abiogenesis_probability=1.0))
        tile = _water_tile()
        tile.cover = TileCover.ROCK
        self._update(model, tile, Atmosphere(carbon_dioxide=0.5))
        assert tile.population == 0.0

    def test_growth_throttled_by_carbon(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0)
        atm = Atmosphere(carbon_dioxide=0.5)
        self._update(model, tile, atm)
        # rate = min(0.5 * 0.1, 0.1) = 0.05
        assert tile.biomass["microbe"].population == pytest.approx(5.25)
        assert tile.biomass["microbe"].total == pytest.approx(5.25)

    def test_growth_capped_at_base_rate(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0)
        self._update(model, tile, Atmosphere(carbon_dioxide=100.0))
        assert tile.population == pytest.approx(5.5)

    def test_clamped_to_carrying_capacity(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=20.0)
        self._update(model, tile, Atmosphere(carbon_dioxide=100.0))
        assert tile.population == pytest.approx(13.0)

    def test_gas_exchange(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        tile = _water_tile(population=5.0)
        atm = Atmosphere(carbon_dioxide=0.5)
        self._update(model, tile, atm)
        assert atm.carbon_dioxide == pytest.approx(0.5 - 5.25 * 0.005)
        assert atm.oxygen == pytest.approx(5.25 * 0.005)

    def test_gas_exchange_never_negative(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0, carbon_per_biomass=10.0))
        tile = _water_tile(population=5.0)
        atm = Atmosphere(carbon_dioxide=0.5)
        self._update(model, tile, atm)
        assert atm.carbon_dioxide == 0.0

    def test_order_dependence_on_shared_pool(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0, carbon_per_biomass=0.1))
        atm = Atmosphere(carbon_dioxide=1.0)
        first = _water_tile(population=5.0)
        second = _water_tile(population=5.0)
        totals = BiomassTotals()
        rng = np.random.default_rng(0)
        model.update_tile(first, atm, 1, rng, totals)
        model.update_tile(second, atm, 1, rng, totals)
        # The second tile grows on the carbon left by the first.
        assert second.population < first.population

    def test_totals_accumulate(self):
        model = BiomassModel(_make_config(abiogenesis_probability=0.0))
        atm = Atmosphere(carbon_dioxide=100.0)
        totals = BiomassTotals()
        rng = np.random.default_rng(0)
        for pop in (2.0, 4.0):
            model.update_tile(_water_tile(population=pop), atm, 1, rng, totals)
        assert totals.population == pytest.approx(2.2 + 4.4)
        assert totals.total == pytest.approx(totals.population)
        assert totals.by_life_form["microbe"] == pytest.approx(totals.population)

    def test_totals_reset(self):
        totals = BiomassTotals(population=3.0, total=3.0, abiogenesis_events=2)
        totals.reset()
        assert totals.population == 0.0
        assert totals.abiogenesis_events == 0


class TestDiffusion:
    def test_raster_scan_pairwise_average(self):
        grid = _living_grid([[10.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        model = BiomassModel(_make_config())
        model.diffuse(grid, Atmosphere(carbon_dioxide=60.0))
        np.testing.assert_array_equal(
            _populations(grid), [[3.75, 3.125, 2.96875], [2.34375, 1.875, 2.34375]],
        )

    def test_total_tracks_population(self):
        grid = _living_grid([[10.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        BiomassModel(_make_config()).diffuse(grid, Atmosphere(carbon_dioxide=60.0))
        for t in grid.tiles:
            assert t.biomass["microbe"].total == t.biomass["microbe"].population

    def test_below_threshold_does_not_spread(self):
        grid = _living_grid([[2.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        BiomassModel(_make_config()).diffuse(grid, Atmosphere(carbon_dioxide=60.0))
        np.testing.assert_array_equal(
            _populations(grid), [[2.0, 0.0, 0.0], [1.0, 0.0, 0.0]],
        )

    def test_uninhabitable_neighbour_excluded(self):
        grid = _living_grid([[10.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        grid.tile(1, 0).cover = TileCover.ROCK
        grid.tile(0, 1).heat = 500.0
        BiomassModel(_make_config()).diffuse(grid, Atmosphere(carbon_dioxide=60.0))
        assert grid.tile(1, 0).population == 0.0
        assert grid.tile(0, 1).population == 0.0

    def test_no_spread_without_carbon(self):
        grid = _living_grid([[10.0, 0.0, 0.0], [0.0, 0.0, 0.0]])
        BiomassModel(_make_config()).diffuse(grid, Atmosphere())
        assert grid.tile(0, 0).population == 10.0
        assert grid.tile(1, 0).population == 0.0

    def test_populations_stay_nonnegative(self):
        rng = np.random.default_rng(5)
        rows = rng.uniform(0, 13, size=(4, 6)).tolist()
        grid = _living_grid(rows)
        BiomassModel(_make_config()).diffuse(grid, Atmosphere(carbon_dioxide=60.0))
        assert np.all(_populations(grid) >= 0)
        assert np.all(_populations(grid) <= 13.0)


class TestMultipleLifeForms:
    def test_table_driven_dispatch(self):
        config = _make_config(abiogenesis_probability=0.0)
        config.life_forms.append({
            "name": "ice_algae",
            "habitat": "ice",
            "min_abiogenesis_heat": 50.0,
            "unlivable_temperature": 120.0,
            "breathes": "carbon_dioxide",
            "min_breathable_share": 0.0,
            "base_reproduction_rate": 0.2,
            "biomass_per_energy": 0.05,
            "carbon_per_biomass": 0.0,
            "oxygen_per_biomass": 0.0,
            "abiogenesis_probability": 0.0,
            "diffusion_threshold": 2.0,
        })
        model = BiomassModel(config)
        assert [f.name for f in model.life_forms] == ["microbe", "ice_algae"]

        tile = Tile(
            base_luminosity=1.0, heat=100.0, cover=TileCover.ICE,
            biomass={
                "microbe": Biomass(population=5.0, total=5.0),
                "ice_algae": Biomass(population=2.0, total=2.0),
            },
        )
        model.update_tile(tile, Atmosphere(carbon_dioxide=100.0), 1,
                          np.random.default_rng(0), BiomassTotals())
        assert tile.biomass["microbe"].population == 0.0
        assert tile.biomass["ice_algae"].population == pytest.approx(2.4)
