"""Shop panel — next tech upgrade, boosts, tours and platforms."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from encore.engine.boosts import (
    boost_remaining_ms,
    can_activate_boost,
    get_boost_cost,
    list_active_boosts,
    list_available_boosts,
)
from encore.engine.economy import format_duration, format_money
from encore.engine.game_state import GameState
from encore.engine.infrastructure import list_available_platforms
from encore.engine.prestige import can_prestige, legacy_income_rate, next_experience_multiplier
from encore.engine.tech import can_purchase_upgrade, list_available_upgrades
from encore.engine.tours import active_tour_count, can_start_tour, max_active_tours, tour_income_rate

# Boosts bound to number keys, in display order
BOOST_HOTKEYS = "123456789"


class ShopPanel(Widget):
    """Lists what the player can buy right now."""

    DEFAULT_CSS = """
    ShopPanel {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    content: reactive[Text] = reactive(Text, always_update=True)

    def render(self) -> Text:
        return self.content

    def update_from_state(self, state: GameState, now: float) -> None:
        text = Text()

        # Tech
        text.append("  Tech Upgrade [U]\n", style="bold white")
        upgrades = list_available_upgrades(state)
        if upgrades:
            udef = upgrades[0]
            style = "green" if can_purchase_upgrade(state, udef.id) else "dim"
            text.append(f"    {udef.name} — {format_money(udef.cost)}\n", style=style)
            text.append(f"    {udef.description}\n", style="dim italic")
        else:
            text.append("    All upgrades owned\n", style="dim")
        text.append("\n")

        # Boosts
        text.append("  Boosts\n", style="bold white")
        for key, bdef in zip(BOOST_HOTKEYS, list_available_boosts(state)):
            cost = get_boost_cost(state, bdef.id)
            style = "green" if can_activate_boost(state, bdef.id) else "dim"
            text.append(
                f"    [{key}] {bdef.name} — {format_money(cost)} "
                f"({bdef.income_multiplier:g}x $, {bdef.fan_multiplier:g}x fans)\n",
                style=style,
            )
        for boost in list_active_boosts(state, now):
            text.append(
                f"    ▶ {boost.name} {format_duration(boost_remaining_ms(boost, now))}\n",
                style="bold yellow",
            )
        text.append("\n")

        # Tours
        if state.unlocked.tours:
            text.append("  Tours [T]\n", style="bold white")
            text.append(
                f"    {active_tour_count(state)}/{max_active_tours(state)} running, "
                f"next earns {format_money(tour_income_rate(state))}/s\n",
                style="green" if can_start_tour(state) else "white",
            )
            text.append("\n")

        # Platforms
        if state.unlocked.platform_ownership:
            text.append("  Platforms [O]\n", style="bold white")
            for pdef in list_available_platforms(state)[:3]:
                style = "green" if state.money >= pdef.cost else "dim"
                text.append(f"    {pdef.name} — {format_money(pdef.cost)}\n", style=style)
            text.append("\n")

        # Prestige
        if can_prestige(state):
            text.append("  Prestige [P]\n", style="bold white")
            text.append(
                f"    Retire for {format_money(legacy_income_rate(state))}/s legacy income, "
                f"{next_experience_multiplier(state):.1f}x experience\n",
                style="yellow",
            )

        self.content = text
