"""Barista — Main Textual Application.

Wires the game engine to the UI: forwards taps and purchases into the
engine and redraws whenever the engine reports a change.
"""

from __future__ import annotations

from typing import Callable

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Header, Footer
from textual.timer import Timer

from barista.data.balance import BALANCE
from barista.data.upgrades import UpgradeKind
from barista.engine.engine import GameEngine
from barista.engine.game_state import GameState
from barista.ui.hud import HUD
from barista.ui.upgrade_panel import UpgradePanel


class BaristaApp(App):
    """The coffee clicker TUI application."""

    TITLE = "Barista"
    SUB_TITLE = "Tap. Brew. Expand."

    BINDINGS = [
        Binding("space", "tap", "Tap", show=True, priority=True),
        Binding("enter", "tap", "Tap", show=False),
        Binding("t", "select_kind('tap')", "Tap Power", show=True),
        Binding("i", "select_kind('idle')", "Auto Earn", show=True),
        Binding("m", "select_kind('multiplier')", "Multipliers", show=True),
        Binding("1", "buy(0)", "Buy #1", show=False),
        Binding("2", "buy(1)", "Buy #2", show=False),
        Binding("3", "buy(2)", "Buy #3", show=False),
        Binding("4", "buy(3)", "Buy #4", show=False),
        Binding("5", "buy(4)", "Buy #5", show=False),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, engine: GameEngine | None = None) -> None:
        super().__init__()
        self._engine: GameEngine = engine if engine is not None else GameEngine()
        self._kind: UpgradeKind = UpgradeKind.TAP
        self._tick_timer: Timer | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield UpgradePanel(id="upgrade-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Subscribe to the engine and start the production timer."""
        self._unsubscribe = self._engine.subscribe(self._on_engine_change)
        self._tick_timer = self.set_interval(BALANCE.tick_interval_s, self._production_tick)
        self._sync_ui()

    def on_unmount(self) -> None:
        if self._tick_timer is not None:
            self._tick_timer.stop()
            self._tick_timer = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _production_tick(self) -> None:
        self._engine.tick()

    def _on_engine_change(self, state: GameState) -> None:
        self._sync_ui()

    def _sync_ui(self) -> None:
        """Push game state to all UI widgets."""
        hud = self.query_one("#hud-panel", HUD)
        hud.update_from_state(self._engine.state)

        panel = self.query_one("#upgrade-panel", UpgradePanel)
        panel.update_from_views(
            self._kind, self._engine.upgrades(self._kind), self._engine.coffees
        )

    # ── Actions ──────────────────────────────────────

    def action_tap(self) -> None:
        self._engine.tap()

    def action_select_kind(self, kind: str) -> None:
        self._kind = UpgradeKind(kind)
        self._sync_ui()

    def action_buy(self, index: int) -> None:
        """Purchase the upgrade at ``index`` (0-based) of the selected kind."""
        views = self._engine.upgrades(self._kind)
        if index >= len(views):
            return

        if self._engine.purchase(self._kind, index):
            self.notify(f"Bought {views[index].name}!", severity="information", timeout=1)
        else:
            self.notify("Can't afford that upgrade.", severity="error", timeout=1)
