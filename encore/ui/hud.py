"""HUD widget — money, fans, catalog, phase and industry control."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widget import Widget

from encore.data.balance import BALANCE
from encore.engine.control import display_control
from encore.engine.economy import format_duration, format_money, format_number, total_income_rate
from encore.engine.fans import total_fan_rate
from encore.engine.game_state import GameState
from encore.engine.songs import queue_progress
from encore.engine.trends import trend_bonus, trend_remaining_ms


class HUD(Widget):
    """Heads-up display showing core empire stats."""

    DEFAULT_CSS = """
    HUD {
        width: 100%;
        height: 100%;
        padding: 1;
    }
    """

    money: reactive[str] = reactive("$0")
    income: reactive[str] = reactive("$0/s")
    fans: reactive[str] = reactive("0")
    fan_rate: reactive[str] = reactive("0/s")
    songs: reactive[int] = reactive(0)
    queued: reactive[int] = reactive(0)
    queue_pct: reactive[float] = reactive(0.0)
    artist: reactive[str] = reactive("")
    phase: reactive[int] = reactive(1)
    tech: reactive[str] = reactive("1.0")
    trend: reactive[str] = reactive("")
    control_pct: reactive[float] = reactive(0.0)
    prestige_count: reactive[int] = reactive(0)

    def render(self) -> Text:
        text = Text()

        phase_desc = dict(BALANCE.progression.phases)[self.phase].description
        text.append(f"  === Phase {self.phase} ===\n", style="bold cyan")
        text.append(f"  {phase_desc}\n\n", style="cyan")

        text.append("  Artist: ", style="dim")
        text.append(f"{self.artist}\n", style="bold magenta")
        if self.prestige_count:
            text.append(f"  Prestige: {self.prestige_count}\n", style="yellow")
        text.append("\n")

        text.append("  Money: ", style="dim")
        text.append(f"{self.money}\n", style="bold green")
        text.append("  Income: ", style="dim")
        text.append(f"{self.income}\n", style="green")
        text.append("  Fans: ", style="dim")
        text.append(f"{self.fans}", style="bold cyan")
        text.append(f" (+{self.fan_rate})\n", style="cyan")
        text.append("\n")

        text.append("  Songs: ", style="dim")
        text.append(f"{self.songs}\n", style="bold white")
        if self.queued:
            bar_width = 16
            filled = int(self.queue_pct * bar_width)
            bar = "#" * filled + "." * (bar_width - filled)
            text.append(f"  Queue: {self.queued}  [{bar}]\n", style="green")
        text.append("  Tech: ", style="dim")
        text.append(f"tier {self.tech}\n", style="white")
        if self.trend:
            text.append("  Trending: ", style="dim")
            text.append(f"{self.trend}\n", style="bold yellow")
        text.append("\n")

        text.append("  Industry Control: ", style="dim")
        style = "bold red" if self.control_pct >= 100 else "bold white"
        text.append(f"{self.control_pct:.0f}%\n", style=style)
        bar_width = 20
        filled = int(self.control_pct / 100 * bar_width)
        text.append(f"  [{'#' * filled}{'.' * (bar_width - filled)}]\n", style="red")

        return text

    def update_from_state(self, state: GameState, now: float) -> None:
        """Sync HUD with game state."""
        self.money = format_money(state.money)
        self.income = f"{format_money(total_income_rate(state, now))}/s"
        self.fans = format_number(state.fans)
        self.fan_rate = f"{format_number(total_fan_rate(state, now))}/s"
        self.songs = state.song_count
        self.queued = len(state.song_queue)
        self.queue_pct = queue_progress(state)
        self.artist = state.current_artist.name
        self.phase = state.phase
        self.tech = f"{state.tech_tier}.{state.tech_sub_tier}"
        self.control_pct = display_control(state)
        self.prestige_count = state.prestige_count
        if state.trending_genre:
            remaining = format_duration(trend_remaining_ms(state, now))
            self.trend = f"{state.trending_genre} {trend_bonus(state, now):.2f}x ({remaining})"
        else:
            self.trend = ""
