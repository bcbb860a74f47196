#!/usr/bin/env python3
"""Run a baseline Gaia Sandbox world and print per-tick statistics."""

import logging

from gaia.core.config import WorldConfig
from gaia.core.world import World
from gaia.metrics.collector import MetricsCollector


def main():
    logging.basicConfig(level=logging.INFO)

    config = WorldConfig(
        world_name="baseline",
        ticks_to_run=200,
        random_seed=42,
    )

    print(f"=== Gaia Sandbox: {config.world_name} ===")
    print(f"Grid: {config.width}x{config.height}")
    print(f"Ticks: {config.ticks_to_run}")
    print(f"Life forms: {[f['name'] for f in config.life_forms]}")
    print()

    world = World(config)
    collector = MetricsCollector(config)

    print(f"{'Tick':>5} {'CO2':>10} {'O2':>9} {'H2O':>7} {'EqHeat':>7} "
          f"{'PolHeat':>7} {'Land%':>6} {'Water%':>6} {'Ice%':>6} {'Biomass':>9}")
    print("-" * 82)

    for _ in range(config.ticks_to_run):
        report = world.tick()
        stats = collector.collect(world, report)
        if stats.tick % 10 == 0:
            cf = stats.cover_fractions
            print(
                f"{stats.tick:5d} {stats.carbon_dioxide:10.1f} {stats.oxygen:9.1f} "
                f"{stats.water_vapour:7.0f} {stats.equatorial_heat:7.1f} "
                f"{stats.polar_heat:7.1f} {cf['rock'] * 100:6.1f} "
                f"{cf['water'] * 100:6.1f} {cf['ice'] * 100:6.1f} "
                f"{stats.biomass_population:9.1f}"
            )

    final = collector.stats_history[-1]
    print()
    print(f"=== Final State (Tick {final.tick}) ===")
    print(f"Carbon dioxide: {final.carbon_dioxide:.1f}")
    print(f"Oxygen: {final.oxygen:.1f}")
    print(f"Mean heat: {final.mean_heat:.2f}")
    print(f"Populated tiles: {final.populated_tiles}")
    print(f"Total abiogenesis events: "
          f"{sum(collector.get_time_series('abiogenesis_events'))}")

    print(f"\nCover distribution:")
    for cover, count in sorted(final.cover_counts.items()):
        print(f"  {cover:14s}: {count:5d} ({final.cover_fractions[cover] * 100:5.1f}%)")


if __name__ == "__main__":
    main()
