"""HUD widget — coffee counter, production rates, run stats."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from barista.engine.economy import effective_per_second, effective_per_tap, format_number
from barista.engine.game_state import GameState


class HUD(Widget):
    """Heads-up display showing core game stats."""

    DEFAULT_CSS = """
    HUD {
        width: 40;
        height: 100%;
        padding: 1;
    }
    """

    coffees: reactive[str] = reactive("0")
    per_tap: reactive[str] = reactive("1.0")
    per_second: reactive[str] = reactive("0.0")
    multiplier: reactive[str] = reactive("1.0x")
    taps: reactive[int] = reactive(0)
    purchases: reactive[int] = reactive(0)
    total_earned: reactive[str] = reactive("0")

    def render(self) -> Text:
        text = Text()
        text.append("  === Coffee Shop ===\n\n", style="bold yellow")

        text.append("  Coffees Made:\n", style="dim")
        text.append(f"  {self.coffees}\n\n", style="bold green")

        text.append("  Per Tap: ", style="dim")
        text.append(f"{self.per_tap}\n", style="green")
        text.append("  Per Second: ", style="dim")
        text.append(f"{self.per_second}\n", style="green")
        text.append("  Multiplier: ", style="dim")
        text.append(f"{self.multiplier}\n", style="bold magenta")

        text.append("\n")
        text.append(f"  Taps: {self.taps}\n", style="dim")
        text.append(f"  Upgrades bought: {self.purchases}\n", style="dim")
        text.append(f"  Lifetime brewed: {self.total_earned}\n", style="dim")

        text.append("\n")
        text.append("  [Space] Tap  [1-5] Buy\n", style="dim italic")
        text.append("  [T]ap [I]dle [M]ultiplier\n", style="dim italic")
        text.append("  [Q] Quit\n", style="dim italic")

        return text

    def update_from_state(self, state: GameState) -> None:
        """Sync HUD with game state."""
        self.coffees = format_number(state.coffees)
        self.per_tap = f"{effective_per_tap(state):.1f}"
        self.per_second = f"{effective_per_second(state):.1f}"
        self.multiplier = f"{state.global_multiplier:.1f}x"
        self.taps = state.stats.total_taps
        self.purchases = state.stats.purchases
        self.total_earned = format_number(state.stats.total_coffees_earned)
