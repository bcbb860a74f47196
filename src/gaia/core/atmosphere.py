"""
Global atmosphere: five well-mixed gas pools shared by every tile.

There is no spatial gradient. Each tile sees the same local share,
``quantity / area``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Gas(str, Enum):
    NITROGEN = "nitrogen"
    OXYGEN = "oxygen"
    CARBON_DIOXIDE = "carbon_dioxide"
    METHANE = "methane"
    WATER_VAPOUR = "water_vapour"


# Water vapour is recomputed from surface water every tick instead of decaying.
DECAYING_GASES: tuple[Gas, ...] = (
    Gas.NITROGEN,
    Gas.OXYGEN,
    Gas.CARBON_DIOXIDE,
    Gas.METHANE,
)


@dataclass
class Atmosphere:
    """Nonnegative global gas quantities."""

    nitrogen: float = 0.0
    oxygen: float = 0.0
    carbon_dioxide: float = 0.0
    methane: float = 0.0
    water_vapour: float = 0.0

    def get(self, gas: Gas | str) -> float:
        return getattr(self, Gas(gas).value)

    def set(self, gas: Gas | str, amount: float) -> None:
        """Replace a pool, clamped at zero."""
        setattr(self, Gas(gas).value, max(amount, 0.0))

    def add(self, gas: Gas | str, amount: float) -> None:
        """Add (or with a negative amount, remove) gas, clamped at zero."""
        self.set(gas, self.get(gas) + amount)

    def decay(self, loss_rate: float) -> None:
        """Lose a fixed fraction of every pool except water vapour."""
        for gas in DECAYING_GASES:
            quantity = self.get(gas)
            self.set(gas, quantity - quantity * loss_rate)

    def local_share(self, gas: Gas | str, area: int) -> float:
        return self.get(gas) / area

    def total(self) -> float:
        return sum(self.get(g) for g in Gas)

    def to_dict(self) -> dict[str, float]:
        return {g.value: self.get(g) for g in Gas}

    def copy(self) -> Atmosphere:
        return Atmosphere(**self.to_dict())
