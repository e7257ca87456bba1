"""Economy engine — coffee generation, spending, and number formatting."""

from __future__ import annotations

from barista.data.balance import BALANCE
from barista.data.upgrades import UpgradeKind
from barista.engine.game_state import GameState, Upgrade


def compute_derived(state: GameState) -> None:
    """Recompute derived stats from current upgrade ownership.

    Call this after any purchase. Safe to call repeatedly.
    """
    # ── Coffees per tap ──────────────────────────────────
    cpt = BALANCE.economy.base_coffees_per_tap
    for upgrade in state.tap_upgrades:
        cpt += upgrade.owned * upgrade.definition.magnitude
    state.coffees_per_tap = cpt

    # ── Coffees per second ───────────────────────────────
    cps = 0.0
    for upgrade in state.idle_upgrades:
        cps += upgrade.owned * upgrade.definition.magnitude
    state.coffees_per_second = cps

    # ── Global multiplier ────────────────────────────────
    # Each owned multiplier adds (value - 1), so two Happy Hours give 3x, not 4x
    mult = 1.0
    for upgrade in state.multiplier_upgrades:
        mult += upgrade.owned * (upgrade.definition.magnitude - 1.0)
    state.global_multiplier = mult


def effective_per_tap(state: GameState) -> float:
    return state.coffees_per_tap * state.global_multiplier


def effective_per_second(state: GameState) -> float:
    return state.coffees_per_second * state.global_multiplier


def handle_tap(state: GameState) -> float:
    """Handle a single tap. Returns coffees earned."""
    earned = effective_per_tap(state)
    state.coffees += earned
    state.stats.total_coffees_earned += earned
    state.stats.total_taps += 1
    return earned


def tick_idle(state: GameState) -> float:
    """Apply one production tick. Returns coffees earned."""
    earned = effective_per_second(state)
    state.stats.total_ticks += 1
    if earned > 0:
        state.coffees += earned
        state.stats.total_coffees_earned += earned
    return earned


def get_upgrade_cost(upgrade: Upgrade) -> float:
    """Calculate the cost of the next unit of an upgrade."""
    udef = upgrade.definition
    return udef.base_cost * (udef.kind.cost_growth ** upgrade.owned)


def can_afford_upgrade(state: GameState, upgrade: Upgrade) -> bool:
    """Check if the player can afford an upgrade."""
    return state.coffees >= get_upgrade_cost(upgrade)


def purchase_upgrade(state: GameState, kind: UpgradeKind, index: int) -> bool:
    """Attempt to purchase an upgrade. Returns True if successful.

    Raises IndexError if ``index`` is not a valid position for ``kind``.
    """
    upgrade = state.upgrade_at(kind, index)

    cost = get_upgrade_cost(upgrade)
    if state.coffees < cost:
        return False

    state.coffees -= cost
    upgrade.owned += 1
    state.stats.total_coffees_spent += cost
    state.stats.purchases += 1

    # Recompute derived values
    compute_derived(state)

    return True


def format_number(n: float) -> str:
    """Format a number with suffixes for readability."""
    if n < 0:
        return f"-{format_number(-n)}"

    for threshold, suffix in reversed(BALANCE.economy.suffixes):
        if n >= threshold:
            return f"{n / threshold:.2f}{suffix}"

    return f"{n:.0f}"
