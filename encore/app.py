"""Encore — Main Textual Application.

Wires the game engine into a playable TUI. The app's interval timer drives
``GameEngine.step()``; autosave runs through the engine's on_save hook.
"""

from __future__ import annotations

from pathlib import Path

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.timer import Timer
from textual.widgets import Footer, Header

from encore.data.balance import BALANCE
from encore.engine.boosts import list_available_boosts
from encore.engine.control import has_won
from encore.engine.engine import GameEngine, disk_saver, run_offline_progress
from encore.engine.economy import format_duration, format_money
from encore.engine.game_state import GameState, new_game, now_ms
from encore.engine.infrastructure import list_available_platforms
from encore.engine.results import ActionResult
from encore.engine.save import load_game
from encore.engine.tech import list_available_upgrades
from encore.engine.unlocks import UNLOCK_MESSAGES
from encore.ui.hud import HUD
from encore.ui.shop import BOOST_HOTKEYS, ShopPanel


class EncoreApp(App):
    """The Encore TUI game application."""

    TITLE = "Encore — AI Music Empire"
    SUB_TITLE = "Generate. Exploit. Control."

    CSS = """
    #game-container { height: 1fr; }
    #hud-panel { width: 45%; }
    #shop-panel { width: 55%; }
    """

    BINDINGS = [
        Binding("space", "make_song", "Make Song", show=True, priority=True),
        Binding("m", "make_ten", "Make 10", show=True),
        Binding("u", "buy_upgrade", "Upgrade", show=True),
        Binding("r", "research_trend", "Trend", show=True),
        Binding("t", "start_tour", "Tour", show=True),
        Binding("o", "buy_platform", "Platform", show=False),
        Binding("p", "prestige", "Prestige", show=True),
        Binding("q", "quit_game", "Quit", show=True),
        *[Binding(key, f"boost({i})", f"Boost {key}", show=False) for i, key in enumerate(BOOST_HOTKEYS)],
    ]

    def __init__(self, save_dir: Path | None = None) -> None:
        super().__init__()
        now = now_ms()
        saved = load_game(save_dir)
        state: GameState = saved if saved is not None else new_game(now)
        self._offline_ms = run_offline_progress(state, now) if saved is not None else 0.0
        self._engine = GameEngine(state)
        self._engine.on_save(disk_saver(save_dir))
        self._known_unlocks = {k for k, v in state.unlocked.as_dict().items() if v}
        self._announced_win = has_won(state)
        self._tick_timer: Timer | None = None

    @property
    def state(self) -> GameState:
        return self._engine.state

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="game-container"):
            yield HUD(id="hud-panel")
            yield ShopPanel(id="shop-panel")
        yield Footer()

    def on_mount(self) -> None:
        """Start the game loop timer."""
        interval = BALANCE.engine.tick_ms / 1000.0
        self._tick_timer = self.set_interval(interval, self._game_tick)
        if self._offline_ms > 0:
            self.notify(f"Welcome back! {format_duration(self._offline_ms)} of progress credited.", timeout=4)
        self._sync_ui()

    def _game_tick(self) -> None:
        self._engine.step()
        self._announce_unlocks()
        self._sync_ui()

    def _announce_unlocks(self) -> None:
        current = {k for k, v in self.state.unlocked.as_dict().items() if v}
        for flag in sorted(current - self._known_unlocks):
            self.notify(UNLOCK_MESSAGES[flag], severity="information", timeout=4)
        self._known_unlocks = current
        if not self._announced_win and has_won(self.state):
            self._announced_win = True
            self.notify("You control the music industry. Total victory.", severity="warning", timeout=10)

    def _sync_ui(self) -> None:
        """Push game state to all UI widgets."""
        now = self._engine.clock()
        self.query_one("#hud-panel", HUD).update_from_state(self.state, now)
        self.query_one("#shop-panel", ShopPanel).update_from_state(self.state, now)

    def _report(self, result: ActionResult, success_timeout: float = 2) -> None:
        if result:
            self.notify(result.message, severity="information", timeout=success_timeout)
        else:
            self.notify(result.message, severity="error", timeout=2)
        self._sync_ui()

    # ── Actions ──────────────────────────────────────────

    def action_make_song(self) -> None:
        self._report(self._engine.enqueue_songs(1), success_timeout=1)

    def action_make_ten(self) -> None:
        self._report(self._engine.enqueue_songs(10), success_timeout=1)

    def action_buy_upgrade(self) -> None:
        upgrades = list_available_upgrades(self.state)
        if not upgrades:
            self.notify("Nothing left to research.", severity="information", timeout=2)
            return
        self._report(self._engine.purchase_upgrade(upgrades[0].id))

    def action_boost(self, index: int) -> None:
        boosts = list_available_boosts(self.state)
        if index >= len(boosts):
            return
        self._report(self._engine.activate_boost(boosts[index].id))

    def action_research_trend(self) -> None:
        self._report(self._engine.research_trend())

    def action_start_tour(self) -> None:
        self._report(self._engine.start_tour())

    def action_buy_platform(self) -> None:
        platforms = list_available_platforms(self.state)
        if not platforms:
            self.notify("No platforms available.", severity="error", timeout=2)
            return
        self._report(self._engine.purchase_platform(platforms[0].id))

    def action_prestige(self) -> None:
        result = self._engine.prestige()
        if result:
            legacy = result.value
            self.notify(
                f"{legacy.name} retired — legacy income {format_money(legacy.income_per_second)}/s",
                severity="warning",
                timeout=4,
            )
            self._sync_ui()
        else:
            self._report(result)

    def action_quit_game(self) -> None:
        """Save and quit."""
        self._engine.save()
        self.notify("Game saved!", severity="information", timeout=2)
        self.exit()
