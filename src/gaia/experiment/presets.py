"""
World presets — pre-configured planet templates.

Each preset returns a WorldConfig with specific parameter settings
designed to explore a different climate or biosphere regime.
"""

from __future__ import annotations

from gaia.core.config import WorldConfig


def baseline() -> WorldConfig:
    """Standard baseline configuration with default parameters."""
    return WorldConfig(
        world_name="baseline",
        ticks_to_run=500,
    )


def barren() -> WorldConfig:
    """Volcanism and climate only — life never appears."""
    config = WorldConfig(
        world_name="barren",
        ticks_to_run=500,
    )
    config.configure_life_form("microbe", abiogenesis_probability=0.0)
    return config


def dormant() -> WorldConfig:
    """No volcanism and no biosphere: the atmosphere only drains away."""
    return WorldConfig(
        world_name="dormant",
        ticks_to_run=200,
        volcanism_enabled=False,
        biomass_enabled=False,
    )


def snowball() -> WorldConfig:
    """Dim sun and weak greenhouse — expect most oceans to freeze."""
    return WorldConfig(
        world_name="snowball",
        ticks_to_run=500,
        full_luminosity_heat=110.0,
        carbon_heat_retention=0.02,
    )


def hothouse() -> WorldConfig:
    """Vigorous volcanism and strong greenhouse retention."""
    return WorldConfig(
        world_name="hothouse",
        ticks_to_run=500,
        volcano_min_carbon_output=1500.0,
        volcano_carbon_output_variation=1000.0,
        carbon_heat_retention=0.1,
    )


def fertile() -> WorldConfig:
    """Frequent abiogenesis and fast reproduction."""
    config = WorldConfig(
        world_name="fertile",
        ticks_to_run=300,
    )
    config.configure_life_form(
        "microbe", abiogenesis_probability=0.01, base_reproduction_rate=0.3,
    )
    return config


PRESETS: dict[str, callable] = {
    "baseline": baseline,
    "barren": barren,
    "dormant": dormant,
    "snowball": snowball,
    "hothouse": hothouse,
    "fertile": fertile,
}


def get_preset(name: str) -> WorldConfig:
    """Get a preset config by name."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset: '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()


def list_presets() -> list[str]:
    """Return list of available preset names."""
    return list(PRESETS.keys())
