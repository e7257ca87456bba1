"""Balance constants — all tuning knobs in one place.

All upgrade costs follow: base_cost * (growth_rate ^ owned)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for coffee generation and spending."""

    # Coffees per tap before any tap upgrade
    base_coffees_per_tap: float = 1.0

    # Upgrade cost scaling per kind: cost = base * (growth ^ owned)
    tap_cost_growth: float = 1.15
    idle_cost_growth: float = 1.15
    multiplier_cost_growth: float = 1.20

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
    )


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    economy: EconomyBalance = field(default_factory=EconomyBalance)

    # Seconds between idle production ticks
    tick_interval_s: float = 1.0


# Singleton — import this everywhere
BALANCE = GameBalance()
