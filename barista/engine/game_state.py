"""Game state — single source of truth for the current run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from barista.data.upgrades import CATALOG, UpgradeDef, UpgradeKind


@dataclass
class Upgrade:
    """An upgrade definition plus how many the player owns."""

    definition: UpgradeDef
    owned: int = 0

    @property
    def id(self) -> int:
        return self.definition.id

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def kind(self) -> UpgradeKind:
        return self.definition.kind


def _build(kind: UpgradeKind) -> list[Upgrade]:
    return [Upgrade(udef) for udef in CATALOG[kind]]


@dataclass
class RunStats:
    """Tracked metrics for the current run (display only)."""

    total_taps: int = 0
    total_ticks: int = 0
    total_coffees_earned: float = 0.0
    total_coffees_spent: float = 0.0
    purchases: int = 0
    run_start_time: float = field(default_factory=time.time)

    @property
    def run_duration_s(self) -> float:
        return time.time() - self.run_start_time


@dataclass
class GameState:
    """Complete mutable state for one run."""

    # ── Core resource ────────────────────────────────────
    coffees: float = 0.0

    # ── Upgrades, in fixed catalog order ─────────────────
    tap_upgrades: list[Upgrade] = field(default_factory=lambda: _build(UpgradeKind.TAP))
    idle_upgrades: list[Upgrade] = field(default_factory=lambda: _build(UpgradeKind.IDLE))
    multiplier_upgrades: list[Upgrade] = field(
        default_factory=lambda: _build(UpgradeKind.MULTIPLIER)
    )

    # ── Stats ────────────────────────────────────────────
    stats: RunStats = field(default_factory=RunStats)

    # ── Derived (recomputed after every purchase) ────────
    coffees_per_tap: float = 1.0
    coffees_per_second: float = 0.0
    global_multiplier: float = 1.0

    def upgrades_of(self, kind: UpgradeKind) -> list[Upgrade]:
        """Return the upgrade collection for one kind."""
        if kind is UpgradeKind.TAP:
            return self.tap_upgrades
        if kind is UpgradeKind.IDLE:
            return self.idle_upgrades
        return self.multiplier_upgrades

    def upgrade_at(self, kind: UpgradeKind, index: int) -> Upgrade:
        """Return one upgrade by position. Negative indices are rejected."""
        upgrades = self.upgrades_of(kind)
        if not 0 <= index < len(upgrades):
            raise IndexError(f"no {kind.value} upgrade at index {index}")
        return upgrades[index]

    def owned_counts(self) -> dict[UpgradeKind, list[int]]:
        return {kind: [u.owned for u in self.upgrades_of(kind)] for kind in UpgradeKind}
