"""Upgrade definitions — the fixed catalog of purchasable upgrades."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from barista.data.balance import BALANCE


class UpgradeKind(Enum):
    """Which derived stat an upgrade modifies."""

    TAP = "tap"                  # +coffees per tap
    IDLE = "idle"                # +coffees per second
    MULTIPLIER = "multiplier"    # +global multiplier

    @property
    def cost_growth(self) -> float:
        bal = BALANCE.economy
        if self is UpgradeKind.TAP:
            return bal.tap_cost_growth
        if self is UpgradeKind.IDLE:
            return bal.idle_cost_growth
        return bal.multiplier_cost_growth


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single upgrade."""

    id: int  # unique within its kind only
    name: str
    kind: UpgradeKind
    base_cost: float
    # Per tap / per second increase, or the multiplier value
    magnitude: float


# ── Tap upgrades ────────────────────────────────────────────────

TAP_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(1, "Better Beans", UpgradeKind.TAP, base_cost=20, magnitude=1),
    UpgradeDef(2, "Foam Art Skills", UpgradeKind.TAP, base_cost=200, magnitude=5),
    UpgradeDef(3, "Signature Recipies", UpgradeKind.TAP, base_cost=2_000, magnitude=25),
    UpgradeDef(4, "Secret Ingredient", UpgradeKind.TAP, base_cost=20_000, magnitude=100),
)

# ── Idle upgrades ───────────────────────────────────────────────

IDLE_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(1, "Hire Barista", UpgradeKind.IDLE, base_cost=50, magnitude=1),
    UpgradeDef(2, "Espresso Machine", UpgradeKind.IDLE, base_cost=500, magnitude=10),
    UpgradeDef(3, "Roasting Station", UpgradeKind.IDLE, base_cost=5_000, magnitude=100),
    UpgradeDef(4, "Drive-Thru Window", UpgradeKind.IDLE, base_cost=50_000, magnitude=1_000),
    UpgradeDef(5, "Coffee Factory", UpgradeKind.IDLE, base_cost=500_000, magnitude=10_000),
)

# ── Multiplier upgrades ─────────────────────────────────────────

MULTIPLIER_UPGRADES: tuple[UpgradeDef, ...] = (
    UpgradeDef(1, "Happy Hour", UpgradeKind.MULTIPLIER, base_cost=5_000, magnitude=2.0),
    UpgradeDef(2, "Premium Beans", UpgradeKind.MULTIPLIER, base_cost=50_000, magnitude=5.0),
    UpgradeDef(3, "Franchise Model", UpgradeKind.MULTIPLIER, base_cost=500_000, magnitude=10.0),
    UpgradeDef(4, "Global Brand", UpgradeKind.MULTIPLIER, base_cost=5_000_000, magnitude=50.0),
)

# ── Catalog by kind ─────────────────────────────────────────────

CATALOG: dict[UpgradeKind, tuple[UpgradeDef, ...]] = {
    UpgradeKind.TAP: TAP_UPGRADES,
    UpgradeKind.IDLE: IDLE_UPGRADES,
    UpgradeKind.MULTIPLIER: MULTIPLIER_UPGRADES,
}
