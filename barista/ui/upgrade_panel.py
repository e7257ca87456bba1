"""Upgrade panel — lists one kind of upgrade and its costs."""

from __future__ import annotations

from rich.text import Text
from textual.widget import Widget
from textual.reactive import reactive

from barista.data.upgrades import UpgradeKind
from barista.engine.engine import UpgradeView
from barista.engine.economy import format_number

_TITLES: dict[UpgradeKind, tuple[str, str]] = {
    UpgradeKind.TAP: ("Tap Upgrades", "Increase coffees earned per tap"),
    UpgradeKind.IDLE: ("Idle Upgrades", "Earn coffees automatically"),
    UpgradeKind.MULTIPLIER: ("Multiplier Upgrades", "Boost all coffee production"),
}


def _effect_summary(view: UpgradeView) -> str:
    """Human-readable effect of one unit."""
    if view.kind is UpgradeKind.TAP:
        return f"+{format_number(view.magnitude)} per tap"
    if view.kind is UpgradeKind.IDLE:
        return f"+{format_number(view.magnitude)} per second"
    return f"+{view.magnitude - 1:.0f}x multiplier"


class UpgradePanel(Widget):
    """Displays the upgrades of the selected kind with cost and affordability."""

    DEFAULT_CSS = """
    UpgradePanel {
        width: 1fr;
        height: 100%;
        padding: 1;
        overflow-y: auto;
    }
    """

    # Serialized upgrade data for reactivity
    upgrades_text: reactive[str] = reactive("")

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._kind: UpgradeKind = UpgradeKind.TAP
        self._views: list[UpgradeView] = []
        self._coffees: float = 0.0

    def render(self) -> Text:
        title, description = _TITLES[self._kind]
        text = Text()
        text.append(f"  ═══ {title} ═══\n", style="bold magenta")
        text.append(f"  {description}\n\n", style="dim italic")

        for view in self._views:
            affordable = self._coffees >= view.current_cost

            text.append(f"  [{view.index + 1}] ", style="bold")
            name_style = "bold green" if affordable else "bold red"
            text.append(f"{view.name} ", style=name_style)
            text.append(f"Owned: {view.owned}\n", style="dim")

            text.append(f"      {_effect_summary(view)}\n", style="cyan")

            cost_style = "green" if affordable else "red"
            text.append(f"      Cost: {format_number(view.current_cost)}\n", style=cost_style)
            text.append("\n")

        return text

    def update_from_views(
        self, kind: UpgradeKind, views: list[UpgradeView], coffees: float
    ) -> None:
        """Sync panel with the engine's upgrade snapshot."""
        self._kind = kind
        self._views = views
        self._coffees = coffees
        # Trigger re-render via reactive
        self.upgrades_text = "|".join(
            f"{v.id}:{v.owned}" for v in views
        ) + f"|{kind.value}|c:{coffees:.0f}"
