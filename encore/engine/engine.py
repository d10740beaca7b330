"""Game engine — the fixed-rate scheduler that advances the simulation.

Every tick runs the update pipeline in a fixed order::

    queue → income → fans → prune boosts → albums → tours
          → cross-promotion → unlocks/phase → industry control

The engine can be driven two ways: a host calls ``step()`` from its own
timer (the Textual app does this), or ``start()`` runs a background thread
that ticks at 10 Hz (the web server does this). Either way only one tick
runs at a time, and every mutation entry point on the engine takes the same
lock.
"""

from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from encore.data.balance import BALANCE
from encore.engine import albums, boosts, infrastructure, prestige, songs, tech, tours, trends
from encore.engine.control import update_industry_control
from encore.engine.economy import apply_income
from encore.engine.fans import apply_cross_promotion, apply_fans
from encore.engine.game_state import GameState, now_ms
from encore.engine.results import ActionResult
from encore.engine.save import SaveError, save_game
from encore.engine.unlocks import check_phase, check_unlocks

logger = logging.getLogger(__name__)

TickCallback = Callable[[GameState, float], None]
SaveCallback = Callable[[GameState], None]


# ── Pipeline ─────────────────────────────────────────────────────


def run_pipeline(
    state: GameState,
    delta_ms: float,
    now: float,
    rng: random.Random | None = None,
) -> None:
    """Advance ``state`` by ``delta_ms`` ending at ``now``. No I/O."""
    songs.advance_queue(state, delta_ms, now, rng=rng)
    apply_income(state, delta_ms, now)
    apply_fans(state, delta_ms, now)
    boosts.prune_boosts(state, now)
    albums.process_albums(state, now, rng=rng)
    tours.process_tours(state, now)
    apply_cross_promotion(state, delta_ms)
    check_unlocks(state)
    check_phase(state)
    update_industry_control(state)
    state.last_update = now


def run_offline_progress(
    state: GameState,
    now: float,
    rng: random.Random | None = None,
) -> float:
    """Credit time elapsed since ``state.last_update``, capped, in max-delta chunks.

    Returns the milliseconds credited.
    """
    bal = BALANCE.engine
    elapsed = now - state.last_update
    if elapsed <= 0:
        return 0.0
    credited = min(elapsed, bal.offline_cap_hours * 3_600_000)
    t = now - credited
    remaining = credited
    while remaining > 0:
        chunk = min(bal.max_delta_ms, remaining)
        t += chunk
        remaining -= chunk
        run_pipeline(state, chunk, t, rng=rng)
    state.last_update = now
    logger.info("Offline progress: credited %.0f ms of %.0f ms away", credited, elapsed)
    return credited


def disk_saver(save_dir: Path | None = None) -> SaveCallback:
    """An on_save callback that writes to disk and logs (not raises) failures."""

    def _save(state: GameState) -> None:
        try:
            save_game(state, save_dir)
        except SaveError:
            logger.exception("Autosave failed")

    return _save


# ── Scheduler ────────────────────────────────────────────────────


class GameEngine:
    """Owns a GameState and ticks it at a fixed logical rate."""

    def __init__(
        self,
        state: GameState,
        clock: Callable[[], float] = now_ms,
        rng: random.Random | None = None,
    ) -> None:
        self.state = state
        self.clock = clock
        self.rng = rng
        self._tick_callbacks: list[TickCallback] = []
        self._save_callbacks: list[SaveCallback] = []
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._running = False
        self._last_tick = clock()
        self._last_save = self._last_tick

    # ── Observers ────────────────────────────────────────

    def on_tick(self, callback: TickCallback) -> None:
        self._tick_callbacks.append(callback)

    def on_save(self, callback: SaveCallback) -> None:
        self._save_callbacks.append(callback)

    @property
    def running(self) -> bool:
        return self._running

    # ── Ticking ──────────────────────────────────────────

    def step(self) -> float:
        """Run one tick. Returns the (clamped) delta applied, in ms.

        Exceptions raised by observers propagate to the caller.
        """
        bal = BALANCE.engine
        with self._lock:
            now = self.clock()
            delta = now - self._last_tick
            if delta <= 0:
                logger.warning("Clock went backwards or stalled (delta %.1f ms)", delta)
                delta = bal.tick_ms
                self._last_save = now
            elif delta > bal.max_delta_ms:
                logger.warning("Clamping tick delta %.0f ms to %.0f ms", delta, bal.max_delta_ms)
                delta = bal.max_delta_ms
            self._last_tick = now

            run_pipeline(self.state, delta, now, rng=self.rng)

            for callback in self._tick_callbacks:
                callback(self.state, delta)

            if now - self._last_save >= bal.autosave_interval_ms:
                self._last_save = now
                self.save()
            return delta

    def save(self) -> None:
        """Invoke every on_save callback with the current state."""
        with self._lock:
            for callback in self._save_callbacks:
                callback(self.state)

    def start(self) -> None:
        """Tick on a background thread until ``stop()``."""
        if self._running:
            logger.warning("Engine already running")
            return
        self._running = True
        self._last_tick = self.clock()
        self._last_save = self._last_tick
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="encore-engine", daemon=True)
        self._thread.start()
        logger.info("Engine started")

    def stop(self) -> None:
        """Stop ticking, wait for the current tick, then save."""
        if not self._running:
            logger.warning("Engine is not running")
            return
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self._running = False
        self.save()
        logger.info("Engine stopped")

    def _run(self) -> None:
        interval = BALANCE.engine.tick_ms / 1000.0
        while not self._stop_event.wait(interval):
            try:
                self.step()
            except Exception:
                logger.exception("Tick failed")

    # ── Mutations (locked, stamped with the engine clock) ─

    def apply(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``fn(state, *args, **kwargs)`` between ticks."""
        with self._lock:
            return fn(self.state, *args, **kwargs)

    def enqueue_songs(self, count: int = 1) -> ActionResult:
        return self.apply(songs.enqueue_songs, count)

    def purchase_upgrade(self, upgrade_id: str) -> ActionResult:
        return self.apply(tech.purchase_upgrade, upgrade_id, self.clock())

    def activate_boost(self, boost_id: str) -> ActionResult:
        return self.apply(boosts.activate_boost, boost_id, self.clock())

    def research_trend(self) -> ActionResult:
        return self.apply(trends.research_trend, self.clock(), rng=self.rng)

    def start_tour(self) -> ActionResult:
        return self.apply(tours.start_tour, self.clock(), rng=self.rng)

    def purchase_platform(self, platform_id: str) -> ActionResult:
        return self.apply(infrastructure.purchase_platform, platform_id, self.clock())

    def rerelease_album(self, album_id: str) -> ActionResult:
        return self.apply(albums.rerelease_album, album_id, self.clock())

    def prestige(self) -> ActionResult:
        return self.apply(prestige.perform_prestige, self.clock(), rng=self.rng)
