"""Tests for the GameEngine wrapper: actions, snapshots and change listeners."""

from __future__ import annotations

import threading

import pytest

from barista.data.upgrades import UpgradeKind
from barista.engine.engine import GameEngine
from barista.engine.game_state import GameState


def test_new_engine_starts_fresh():
    engine = GameEngine()
    assert engine.coffees == 0
    assert engine.coffees_per_tap == 1
    assert engine.coffees_per_second == 0
    assert engine.global_multiplier == 1


def test_single_tap_scenario():
    engine = GameEngine()
    assert engine.tap() == 1
    assert engine.coffees == 1


def test_tap_changes_nothing_else():
    engine = GameEngine()
    owned = engine.state.owned_counts()
    engine.tap()
    assert engine.state.owned_counts() == owned
    assert engine.coffees_per_tap == 1
    assert engine.global_multiplier == 1


def test_buy_then_fail_scenario():
    engine = GameEngine()
    engine.state.coffees = 20

    assert engine.purchase(UpgradeKind.TAP, 0)
    assert engine.coffees == 0
    assert engine.state.tap_upgrades[0].owned == 1
    assert engine.coffees_per_tap == 2

    # Broke again: silently refused
    assert not engine.purchase(UpgradeKind.TAP, 0)
    assert engine.state.tap_upgrades[0].owned == 1
    assert engine.coffees == 0


def test_tick_adds_idle_income():
    engine = GameEngine()
    engine.state.coffees = 50
    assert engine.purchase(UpgradeKind.IDLE, 0)
    assert engine.tick() == 1
    assert engine.coffees == 1


def test_engine_accepts_existing_state():
    state = GameState()
    state.tap_upgrades[1].owned = 2
    engine = GameEngine(state)
    # Derived stats are computed on construction
    assert engine.coffees_per_tap == 11
    assert engine.state is state


def test_recompute_stats_is_idempotent():
    engine = GameEngine()
    engine.state.idle_upgrades[0].owned = 3
    engine.recompute_stats()
    engine.recompute_stats()
    assert engine.coffees_per_second == 3


def test_upgrade_views():
    engine = GameEngine()
    views = engine.upgrades(UpgradeKind.IDLE)
    assert [v.id for v in views] == [1, 2, 3, 4, 5]
    assert views[0].name == "Hire Barista"
    assert views[0].current_cost == 50
    assert views[0].owned == 0
    assert views[4].index == 4


def test_upgrade_view_reflects_purchase():
    engine = GameEngine()
    engine.state.coffees = 5_000
    assert engine.purchase(UpgradeKind.MULTIPLIER, 0)
    view = engine.upgrades(UpgradeKind.MULTIPLIER)[0]
    assert view.owned == 1
    assert view.current_cost == pytest.approx(6_000)
    assert engine.global_multiplier == 2


def test_listeners_notified_on_tap_and_purchase():
    engine = GameEngine()
    calls: list[float] = []
    engine.subscribe(lambda state: calls.append(state.coffees))

    engine.tap()
    engine.state.coffees = 20
    engine.purchase(UpgradeKind.TAP, 0)

    assert calls == [1, 0]


def test_listeners_not_notified_on_failed_purchase_or_empty_tick():
    engine = GameEngine()
    calls: list[GameState] = []
    engine.subscribe(calls.append)

    engine.purchase(UpgradeKind.TAP, 3)
    engine.tick()

    assert calls == []


def test_unsubscribe_stops_notifications():
    engine = GameEngine()
    calls: list[GameState] = []
    unsubscribe = engine.subscribe(calls.append)
    engine.tap()
    unsubscribe()
    engine.tap()
    assert len(calls) == 1
    # Calling again is harmless
    unsubscribe()


def test_out_of_range_purchase_raises():
    engine = GameEngine()
    with pytest.raises(IndexError):
        engine.purchase(UpgradeKind.IDLE, 5)


def test_negative_index_purchase_raises():
    engine = GameEngine()
    engine.state.coffees = 1e9
    with pytest.raises(IndexError):
        engine.purchase(UpgradeKind.TAP, -1)
    assert engine.state.tap_upgrades[-1].owned == 0
    assert engine.coffees == 1e9


def test_second_purchase_pays_pre_purchase_cost():
    engine = GameEngine()
    engine.state.tap_upgrades[0].owned = 1
    engine.recompute_stats()
    engine.state.coffees = 23
    assert engine.purchase(UpgradeKind.TAP, 0)
    assert engine.coffees == pytest.approx(0)
    assert engine.state.tap_upgrades[0].owned == 2


def test_recompute_stats_notifies_listeners():
    engine = GameEngine()
    seen: list[float] = []
    engine.subscribe(lambda state: seen.append(state.coffees_per_second))
    engine.state.idle_upgrades[0].owned = 2
    engine.recompute_stats()
    assert seen == [2]


def test_snapshot_is_detached_from_live_state():
    engine = GameEngine()
    engine.state.coffees = 50
    assert engine.purchase(UpgradeKind.IDLE, 0)
    snap = engine.snapshot()

    engine.tap()
    engine.tick()

    assert snap.coffees == 0
    assert snap.coffees_per_second == 1
    assert snap.stats.total_taps == 0
    assert snap.stats.purchases == 1
    assert snap.upgrades[UpgradeKind.IDLE][0].owned == 1
    assert snap.upgrades[UpgradeKind.IDLE][0].current_cost == pytest.approx(57.5)
    assert len(snap.upgrades[UpgradeKind.TAP]) == 4
    assert engine.coffees == 2


def test_concurrent_taps_are_serialized():
    engine = GameEngine()

    def tap_many() -> None:
        for _ in range(1_000):
            engine.tap()

    threads = [threading.Thread(target=tap_many) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert engine.coffees == 4_000
    assert engine.state.stats.total_taps == 4_000
