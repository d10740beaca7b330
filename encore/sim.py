"""Headless simulation harness: python -m encore.sim

Builds a fresh game, drives a GameEngine with a simulated clock and prints a
Rich summary. A simple autopilot can queue songs and buy the cheapest
available upgrade so balance changes can be eyeballed without the TUI.
"""

from __future__ import annotations

import argparse
import logging
import random

from rich.console import Console
from rich.table import Table

from encore.data.balance import BALANCE
from encore.engine.albums import total_album_revenue
from encore.engine.control import display_control
from encore.engine.economy import format_duration, format_money, format_number, total_income_rate
from encore.engine.engine import GameEngine
from encore.engine.fans import total_fan_rate
from encore.engine.game_state import GameState, new_game
from encore.engine.tech import list_available_upgrades, song_cost

logger = logging.getLogger(__name__)


class SimClock:
    """A manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


def autopilot(engine: GameEngine) -> None:
    """Keep the queue busy and buy the cheapest affordable upgrade."""
    state = engine.state
    if len(state.song_queue) < 5:
        cost = song_cost(state)
        affordable = 10 if cost == 0 else int(state.money // cost)
        if affordable > 0:
            engine.enqueue_songs(min(affordable, 10))
    upgrades = sorted(list_available_upgrades(state), key=lambda u: u.cost)
    if upgrades and state.money >= upgrades[0].cost:
        engine.purchase_upgrade(upgrades[0].id)


def simulate(
    seconds: float,
    seed: int | None = None,
    auto: bool = True,
    tick_ms: float | None = None,
) -> GameState:
    """Run the engine for ``seconds`` of simulated time and return the state."""
    tick = tick_ms or BALANCE.engine.tick_ms
    clock = SimClock()
    rng = random.Random(seed)
    state = new_game(now=clock(), artist_name="Sim Artist")
    engine = GameEngine(state, clock=clock, rng=rng)

    elapsed = 0.0
    total = seconds * 1000
    while elapsed < total:
        if auto:
            autopilot(engine)
        step = min(tick, total - elapsed)
        clock.advance(step)
        engine.step()
        elapsed += step
    logger.info("Simulated %.0f ms: %d songs, %s", total, state.song_count, format_money(state.money))
    return state


def summary_table(state: GameState, elapsed_ms: float) -> Table:
    now = state.last_update
    table = Table(title=f"Encore after {format_duration(elapsed_ms)}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")

    table.add_row("Money", format_money(state.money))
    table.add_row("Income", f"{format_money(total_income_rate(state, now))}/s")
    table.add_row("Fans", format_number(state.fans))
    table.add_row("Fan rate", f"{format_number(total_fan_rate(state, now))}/s")
    table.add_row("Songs", str(state.song_count))
    table.add_row("Queued", str(len(state.song_queue)))
    table.add_row("Tech", f"{state.tech_tier}.{state.tech_sub_tier} ({len(state.upgrades)} upgrades)")
    table.add_row("Phase", str(state.phase))
    table.add_row("Albums", f"{len(state.albums)} ({format_money(total_album_revenue(state))})")
    table.add_row("Tours", str(len(state.tours)))
    table.add_row("Industry control", f"{display_control(state):.0f}%")
    unlocked = [name for name, on in state.unlocked.as_dict().items() if on]
    table.add_row("Unlocked", ", ".join(unlocked) or "-")
    return table


def main() -> None:
    parser = argparse.ArgumentParser(description="Encore — headless simulation")
    parser.add_argument("--seconds", type=float, default=600, help="Simulated seconds (default: 600)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for names and genres")
    parser.add_argument("--idle", action="store_true", help="Disable the autopilot")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    state = simulate(args.seconds, seed=args.seed, auto=not args.idle)
    Console().print(summary_table(state, args.seconds * 1000))


if __name__ == "__main__":
    main()
