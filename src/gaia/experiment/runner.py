"""
Experiment Runner — comparisons, parameter sweeps, and multi-seed batches.

Provides tools for running a world for a fixed number of ticks and
collecting its statistics across multiple configurations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np

from gaia.core.config import WorldConfig
from gaia.core.world import TickReport, World
from gaia.metrics.collector import MetricsCollector, WorldStats


@dataclass
class ExperimentResult:
    """Result of a single world run."""
    config: WorldConfig
    reports: list[TickReport]
    stats: list[WorldStats]
    final_atmosphere: dict[str, float]
    final_biomass: float
    mean_heat: float
    peak_biomass: float
    total_abiogenesis_events: int


@dataclass
class ComparisonResult:
    """Result of comparing two or more runs."""
    results: dict[str, ExperimentResult]
    config_diffs: dict[str, Any]


class ExperimentRunner:
    """
    Run, compare, and sweep world configurations.
    """

    def run_experiment(self, config: WorldConfig, ticks: int | None = None) -> ExperimentResult:
        """Run a single world and return its results."""
        world = World(config)
        collector = MetricsCollector(config)
        ticks = ticks if ticks is not None else config.ticks_to_run

        reports: list[TickReport] = []
        for _ in range(ticks):
            report = world.tick()
            collector.collect(world, report)
            reports.append(report)

        stats = collector.stats_history
        final = world.snapshot()
        return ExperimentResult(
            config=config,
            reports=reports,
            stats=stats,
            final_atmosphere=final.atmosphere,
            final_biomass=final.biomass_population,
            mean_heat=float(np.mean([s.mean_heat for s in stats])) if stats else 0.0,
            peak_biomass=max((s.biomass_population for s in stats), default=0.0),
            total_abiogenesis_events=sum(r.abiogenesis_events for r in reports),
        )

    def compare_experiments(
        self, configs: dict[str, WorldConfig], ticks: int | None = None,
    ) -> ComparisonResult:
        """Run multiple worlds and compare results."""
        results: dict[str, ExperimentResult] = {}
        for name, config in configs.items():
            results[name] = self.run_experiment(config, ticks)

        config_names = list(configs.keys())
        diffs: dict[str, Any] = {}
        if len(config_names) >= 2:
            base = configs[config_names[0]]
            for name in config_names[1:]:
                diffs[f"{config_names[0]}_vs_{name}"] = base.diff(configs[name])

        return ComparisonResult(results=results, config_diffs=diffs)

    def run_parameter_sweep(
        self,
        base_config: WorldConfig,
        param_name: str,
        values: list[Any],
        ticks: int | None = None,
    ) -> dict[str, ExperimentResult]:
        """
        Sweep a single parameter across multiple values.

        Args:
            base_config: Base configuration to modify
            param_name: Name of the parameter to sweep (attribute on WorldConfig)
            values: List of values to test
            ticks: Ticks per run (defaults to each config's ticks_to_run)

        Returns:
            Dict mapping value label -> ExperimentResult
        """
        if param_name not in base_config.to_dict():
            raise KeyError(f"Unknown parameter: '{param_name}'")

        results: dict[str, ExperimentResult] = {}
        for val in values:
            config_dict = base_config.to_dict()
            config_dict[param_name] = val
            config_dict["world_name"] = f"sweep_{param_name}={val}"
            config = WorldConfig.from_dict(config_dict)

            label = f"{param_name}={val}"
            results[label] = self.run_experiment(config, ticks)

        return results

    def run_multi_seed(
        self, config: WorldConfig, seeds: list[int], ticks: int | None = None,
    ) -> list[ExperimentResult]:
        """
        Run the same configuration with multiple random seeds.

        Useful for measuring variance in outcomes.
        """
        results: list[ExperimentResult] = []
        for seed in seeds:
            config_dict = config.to_dict()
            config_dict["random_seed"] = seed
            config_dict["world_name"] = f"{config.world_name}_seed{seed}"
            results.append(self.run_experiment(WorldConfig.from_dict(config_dict), ticks))
        return results
