"""Tests for the scheduler, the tick pipeline and offline progress."""

import logging
import random

import pytest

from encore.engine.engine import GameEngine, run_offline_progress, run_pipeline
from encore.engine.game_state import GameState, LegacyArtist, Song
from encore.engine.songs import enqueue_songs


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def earning_state(rate: float = 1.0) -> GameState:
    state = GameState(money=0)
    state.songs = [Song("s", "S", "pop", 0, rate, 0.0)]
    return state


# ── Delta handling ───────────────────────────────────────────────────────────

def test_step_applies_elapsed_time():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)
    clock.now = 250
    assert engine.step() == 250
    assert engine.state.money == pytest.approx(0.25)
    assert engine.state.last_update == 250


def test_step_clamps_long_gaps():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)
    clock.now = 60_000
    assert engine.step() == 5_000
    assert engine.state.money == pytest.approx(5.0)


def test_baseline_follows_real_time_after_clamp():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)
    clock.now = 60_000
    engine.step()
    clock.now = 60_100
    assert engine.step() == 100


def test_non_positive_delta_uses_nominal_tick():
    clock = FakeClock(1_000)
    engine = GameEngine(earning_state(), clock=clock)
    assert engine.step() == 100
    clock.now = 900
    assert engine.step() == 100


# ── Pipeline ─────────────────────────────────────────────────────────────────

def test_pipeline_completes_songs_and_pays_them():
    state = GameState(money=10)
    enqueue_songs(state, 1)
    run_pipeline(state, 30_000, now=30_000, rng=random.Random(0))
    assert state.song_count == 1
    # The song completes before income is credited for the tick
    assert state.money == pytest.approx(8 + 0.001 * 30)
    assert state.fans == pytest.approx(0.1 * 30)


def test_pipeline_adds_cross_promotion():
    state = GameState()
    state.legacy_artists = [LegacyArtist("Old", 1_000_000, 0, 0, 0, 0)]
    run_pipeline(state, 1_000, now=1_000)
    assert state.fans == pytest.approx(10)
    assert state.current_artist.fans == pytest.approx(10)


# ── Observers and autosave ───────────────────────────────────────────────────

def test_tick_observers_receive_state_and_delta():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)
    seen = []
    engine.on_tick(lambda state, delta: seen.append((state, delta)))
    clock.now = 100
    engine.step()
    assert seen == [(engine.state, 100)]


def test_observer_errors_propagate():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)

    def boom(state, delta):
        raise RuntimeError("observer failed")

    engine.on_tick(boom)
    clock.now = 100
    with pytest.raises(RuntimeError):
        engine.step()


def test_autosave_every_ten_seconds():
    clock = FakeClock()
    engine = GameEngine(earning_state(), clock=clock)
    saves = []
    engine.on_save(saves.append)

    for t in range(100, 10_000, 100):
        clock.now = t
        engine.step()
    assert saves == []

    clock.now = 10_000
    engine.step()
    assert len(saves) == 1

    for t in range(10_100, 20_000, 100):
        clock.now = t
        engine.step()
    assert len(saves) == 1
    clock.now = 20_000
    engine.step()
    assert len(saves) == 2


def test_autosave_resumes_after_clock_goes_backwards():
    clock = FakeClock(100_000)
    engine = GameEngine(earning_state(), clock=clock)
    saves = []
    engine.on_save(saves.append)

    clock.now = 1_000
    engine.step()
    clock.now = 10_999
    engine.step()
    assert saves == []
    clock.now = 11_000
    engine.step()
    assert len(saves) == 1


# ── Start / stop ─────────────────────────────────────────────────────────────

def test_stop_without_start_warns(caplog):
    engine = GameEngine(earning_state(), clock=FakeClock())
    saves = []
    engine.on_save(saves.append)
    with caplog.at_level(logging.WARNING):
        engine.stop()
    assert "not running" in caplog.text
    assert saves == []


def test_start_stop_saves_once():
    engine = GameEngine(earning_state())
    saves = []
    engine.on_save(saves.append)
    engine.start()
    assert engine.running
    engine.stop()
    assert not engine.running
    assert saves == [engine.state]


def test_double_start_warns(caplog):
    engine = GameEngine(earning_state())
    engine.start()
    try:
        with caplog.at_level(logging.WARNING):
            engine.start()
        assert "already running" in caplog.text
    finally:
        engine.stop()


def test_engine_actions_use_engine_clock():
    clock = FakeClock(5_000)
    state = GameState(money=1_000)
    engine = GameEngine(state, clock=clock)
    assert engine.activate_boost("bot_streams")
    assert state.active_boosts[0].activated_at == 5_000
    assert engine.purchase_upgrade("tier1_basic")
    assert state.upgrades["tier1_basic"] == 5_000


# ── Offline progress ─────────────────────────────────────────────────────────

def test_offline_progress_credits_elapsed_time():
    state = earning_state()
    state.last_update = 0
    credited = run_offline_progress(state, now=60_000)
    assert credited == 60_000
    assert state.money == pytest.approx(60)
    assert state.last_update == 60_000


def test_offline_progress_is_capped():
    state = earning_state()
    state.last_update = 0
    ten_hours = 10 * 3_600_000
    credited = run_offline_progress(state, now=ten_hours)
    assert credited == 4 * 3_600_000
    assert state.money == pytest.approx(4 * 3_600)
    assert state.last_update == ten_hours


def test_no_offline_progress_when_clock_is_behind():
    state = earning_state()
    state.last_update = 10_000
    assert run_offline_progress(state, now=5_000) == 0.0
    assert state.money == 0
