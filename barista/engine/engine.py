"""GameEngine — the single writer for all game state.

Timer ticks and user actions may arrive on different threads (the web
server ticks from a background thread while serving requests), so every
mutation goes through one lock. Listeners are notified after the lock is
released so they can read the engine freely.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from typing import Callable

from barista.data.upgrades import UpgradeKind
from barista.engine.economy import (
    compute_derived,
    format_number,
    get_upgrade_cost,
    handle_tap,
    purchase_upgrade,
    tick_idle,
)
from barista.engine.game_state import GameState, RunStats

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


@dataclass(frozen=True)
class UpgradeView:
    """Read-only snapshot of one upgrade for rendering layers."""

    kind: UpgradeKind
    index: int
    id: int
    name: str
    magnitude: float
    owned: int
    current_cost: float


@dataclass(frozen=True)
class EngineSnapshot:
    """Consistent read-only copy of everything a rendering layer shows."""

    coffees: float
    coffees_per_tap: float
    coffees_per_second: float
    global_multiplier: float
    upgrades: dict[UpgradeKind, list[UpgradeView]]
    stats: RunStats


class GameEngine:
    """Owns the game state and serializes every mutation."""

    def __init__(self, state: GameState | None = None) -> None:
        self._state = state if state is not None else GameState()
        self._lock = threading.RLock()
        self._listeners: list[Listener] = []
        compute_derived(self._state)

    # ── Observation ──────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def coffees(self) -> float:
        return self._state.coffees

    @property
    def coffees_per_tap(self) -> float:
        return self._state.coffees_per_tap

    @property
    def coffees_per_second(self) -> float:
        return self._state.coffees_per_second

    @property
    def global_multiplier(self) -> float:
        return self._state.global_multiplier

    def upgrades(self, kind: UpgradeKind) -> list[UpgradeView]:
        """Snapshot the upgrades of one kind, in catalog order."""
        with self._lock:
            return [
                UpgradeView(
                    kind=kind,
                    index=i,
                    id=u.id,
                    name=u.name,
                    magnitude=u.definition.magnitude,
                    owned=u.owned,
                    current_cost=get_upgrade_cost(u),
                )
                for i, u in enumerate(self._state.upgrades_of(kind))
            ]

    def snapshot(self) -> EngineSnapshot:
        """Copy coffees, stats and every upgrade under one lock acquisition."""
        with self._lock:
            s = self._state
            return EngineSnapshot(
                coffees=s.coffees,
                coffees_per_tap=s.coffees_per_tap,
                coffees_per_second=s.coffees_per_second,
                global_multiplier=s.global_multiplier,
                upgrades={kind: self.upgrades(kind) for kind in UpgradeKind},
                stats=replace(s.stats),
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self._state)

    # ── Actions ──────────────────────────────────────

    def tap(self) -> float:
        """Brew by hand. Returns coffees earned."""
        with self._lock:
            earned = handle_tap(self._state)
        logger.debug("tap: +%s", format_number(earned))
        self._notify()
        return earned

    def tick(self) -> float:
        """Apply one idle production tick. Returns coffees earned."""
        with self._lock:
            earned = tick_idle(self._state)
        if earned > 0:
            logger.debug("tick: +%s", format_number(earned))
            self._notify()
        return earned

    def purchase(self, kind: UpgradeKind, index: int) -> bool:
        """Buy one unit of an upgrade. Returns False if it can't be afforded."""
        with self._lock:
            upgrade = self._state.upgrade_at(kind, index)
            cost = get_upgrade_cost(upgrade)
            bought = purchase_upgrade(self._state, kind, index)
            owned = upgrade.owned
        if not bought:
            logger.debug("can't afford %s (%s)", upgrade.name, format_number(cost))
            return False
        logger.info("bought %s for %s (owned: %d)", upgrade.name, format_number(cost), owned)
        self._notify()
        return True

    def recompute_stats(self) -> None:
        """Re-derive per-tap, per-second and multiplier from ownership."""
        with self._lock:
            compute_derived(self._state)
        self._notify()
