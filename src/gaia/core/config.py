"""
Master configuration for the Gaia Sandbox.

ALL tunable parameters live here. Nothing in the tick pipeline is hardcoded.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from typing import Any

from gaia.core.grid import TileCover


def _default_life_forms() -> list[dict[str, Any]]:
    return [
        {
            "name": "microbe",
            "habitat": "water",
            "min_abiogenesis_heat": 125.0,
            "unlivable_temperature": 180.0,
            "breathes": "carbon_dioxide",
            "min_breathable_share": 0.0,
            "base_reproduction_rate": 0.1,
            "biomass_per_energy": 0.1,
            "carbon_per_biomass": 0.005,
            "oxygen_per_biomass": 0.005,
            "abiogenesis_probability": 0.0001,
            "diffusion_threshold": 2.0,
        },
    ]


@dataclass(frozen=True)
class LifeForm:
    """
    Ecological parameters for one life form.

    The biomass model iterates survival, growth and diffusion over a table
    of these records, so adding a species is a config change.
    """

    name: str
    habitat: TileCover
    min_abiogenesis_heat: float
    unlivable_temperature: float
    breathes: str
    min_breathable_share: float
    base_reproduction_rate: float
    biomass_per_energy: float
    carbon_per_biomass: float
    oxygen_per_biomass: float
    abiogenesis_probability: float
    diffusion_threshold: float = 2.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> LifeForm:
        values = dict(d)
        values["habitat"] = TileCover(values["habitat"])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "habitat": self.habitat.value,
            "min_abiogenesis_heat": self.min_abiogenesis_heat,
            "unlivable_temperature": self.unlivable_temperature,
            "breathes": self.breathes,
            "min_breathable_share": self.min_breathable_share,
            "base_reproduction_rate": self.base_reproduction_rate,
            "biomass_per_energy": self.biomass_per_energy,
            "carbon_per_biomass": self.carbon_per_biomass,
            "oxygen_per_biomass": self.oxygen_per_biomass,
            "abiogenesis_probability": self.abiogenesis_probability,
            "diffusion_threshold": self.diffusion_threshold,
        }


@dataclass
class WorldConfig:
    """
    Master configuration for one planet run.

    Use ``to_dict()`` / ``from_dict()`` for serialization and comparison.
    """

    # === Run identity ===
    world_name: str = "default"
    random_seed: int | None = None
    ticks_to_run: int = 500

    # === Grid ===
    width: int = 100
    height: int = 100
    max_altitude: float = 5000.0
    erosion_rate: float = 4.0

    # === Atmosphere ===
    atmosphere_loss_rate: float = 0.01
    vapour_per_water_tile: float = 1.0

    # === Surface cover ===
    sea_level: float = 1000.0
    freezing_point: float = 120.0

    # === Volcanism ===
    volcanism_enabled: bool = True
    volcano_half_width: int = 4
    volcano_min_upthrust: float = 1000.0
    volcano_upthrust_variation: float = 1000.0
    volcano_min_carbon_output: float = 500.0
    volcano_carbon_output_variation: float = 500.0

    # === Thermal ===
    full_luminosity_heat: float = 130.0
    polar_luminosity: float = 0.5
    ice_reflectivity: float = 0.4
    water_reflectivity: float = 0.1
    carbon_heat_retention: float = 0.06  # per unit of local share
    vapour_heat_retention: float = 0.02
    heat_smoothing: float = 0.2  # weight of the new target each tick
    heat_diffusion_mode: str = "sequential"  # 'sequential' or 'buffered'

    # === Biosphere ===
    biomass_enabled: bool = True
    life_forms: list[dict[str, Any]] = field(default_factory=_default_life_forms)

    # ------------------------------------------------------------------
    # Derived
    # ------------------------------------------------------------------
    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def life_form_table(self) -> list[LifeForm]:
        return [LifeForm.from_dict(d) for d in self.life_forms]

    def validate(self) -> None:
        """Raise ValueError if the config cannot drive a run."""
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Grid must be non-empty, got {self.width}x{self.height}")
        if self.max_altitude <= 0:
            raise ValueError("max_altitude must be positive")
        if self.volcano_half_width < 1:
            raise ValueError("volcano_half_width must be at least 1")
        for name in ("atmosphere_loss_rate", "heat_smoothing", "ice_reflectivity",
                     "water_reflectivity", "polar_luminosity"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")
        if self.heat_diffusion_mode not in ("sequential", "buffered"):
            raise ValueError(f"Unknown heat_diffusion_mode: '{self.heat_diffusion_mode}'")
        names = [d.get("name") for d in self.life_forms]
        if len(set(names)) != len(names):
            raise ValueError(f"Life form names must be unique: {names}")

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = copy.deepcopy(v)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> WorldConfig:
        """Deserialize from a dict."""
        return cls(**{k: v for k, v in d.items() if not k.startswith("_")})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> WorldConfig:
        return cls.from_dict(json.loads(s))

    def configure_life_form(self, name: str, **kwargs: Any) -> None:
        """Update parameters of a named life form."""
        for d in self.life_forms:
            if d["name"] == name:
                d.update(kwargs)
                return
        raise KeyError(f"Unknown life form: '{name}'")

    def diff(self, other: WorldConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        for k in self.to_dict():
            v1 = getattr(self, k)
            v2 = getattr(other, k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
