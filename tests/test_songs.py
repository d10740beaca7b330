"""Tests for the production queue and song baking."""

import random

import pytest

from encore.engine.game_state import GameState
from encore.engine.results import Failure
from encore.engine.songs import advance_queue, create_song, enqueue_songs, queue_progress
from encore.engine.tech import purchase_upgrade


def rng():
    return random.Random(7)


# ── Enqueue ──────────────────────────────────────────────────────────────────

def test_enqueue_charges_per_song():
    state = GameState(money=10)
    result = enqueue_songs(state, 3)
    assert result
    assert state.money == pytest.approx(4)
    assert len(state.song_queue) == 3
    assert all(q.progress_ms == 0 and q.total_ms == 30_000 for q in state.song_queue)


def test_enqueue_rejects_unaffordable_batch():
    state = GameState(money=5)
    result = enqueue_songs(state, 3)
    assert result.failure is Failure.INSUFFICIENT_FUNDS
    assert state.money == 5
    assert state.song_queue == []


def test_enqueue_requires_positive_count():
    state = GameState(money=100)
    assert enqueue_songs(state, 0).failure is Failure.PRECONDITION_NOT_MET
    assert state.money == 100


def test_songs_are_free_after_lifetime_license():
    state = GameState(money=10_000)
    for uid in ("tier1_basic", "tier1_improved", "tier1_advanced", "tier2_basic"):
        assert purchase_upgrade(state, uid, now=0)
    state.money = 0
    assert enqueue_songs(state, 5)
    assert state.money == 0
    assert state.song_queue[0].total_ms == 12_000


# ── Advance ──────────────────────────────────────────────────────────────────

def test_empty_queue_is_a_noop():
    state = GameState()
    assert advance_queue(state, 5_000, now=5_000) == []


def test_only_head_makes_progress():
    state = GameState(money=10)
    enqueue_songs(state, 2)
    advance_queue(state, 10_000, now=10_000, rng=rng())
    assert state.song_queue[0].progress_ms == 10_000
    assert state.song_queue[1].progress_ms == 0
    assert queue_progress(state) == pytest.approx(1 / 3)


def test_queue_completes_in_fifo_order():
    state = GameState(money=10)
    enqueue_songs(state, 3)
    ids = [q.id for q in state.song_queue]
    r = rng()
    for t in (30_000, 60_000, 90_000):
        advance_queue(state, 30_000, now=t, rng=r)
    assert [s.id for s in state.songs] == ids
    assert state.song_queue == []
    assert state.current_artist.songs == 3


def test_leftover_time_carries_into_next_song():
    state = GameState(money=10)
    enqueue_songs(state, 3)
    done = advance_queue(state, 70_000, now=70_000, rng=rng())
    assert len(done) == 2
    assert len(state.song_queue) == 1
    assert state.song_queue[0].progress_ms == pytest.approx(10_000)


# ── Baking ───────────────────────────────────────────────────────────────────

def test_baked_rates_survive_later_upgrades():
    state = GameState(money=100_000)
    first = create_song(state, now=0, rng=rng())
    assert first.income_per_second == pytest.approx(0.001)

    for uid in ("tier1_basic", "tier1_improved", "tier1_advanced", "tier2_basic", "tier2_improved"):
        assert purchase_upgrade(state, uid, now=0)

    second = create_song(state, now=1, rng=rng())
    assert first.income_per_second == pytest.approx(0.001)
    assert second.income_per_second == pytest.approx(0.0015)


def test_experience_is_baked_into_new_songs():
    state = GameState()
    state.experience_multiplier = 1.2
    song = create_song(state, now=0, rng=rng())
    assert song.income_per_second == pytest.approx(0.0012)
    assert song.fan_rate == pytest.approx(0.12)


def test_trending_bonus_is_baked_at_completion():
    state = GameState()
    state.trending_genre = "rock"
    state.trend_discovered_at = 0

    hot = create_song(state, now=0, rng=rng())
    assert hot.genre == "rock"
    assert hot.is_trending
    assert hot.income_per_second == pytest.approx(0.002)

    faded = create_song(state, now=300_000, rng=rng())
    assert not faded.is_trending
    assert faded.income_per_second == pytest.approx(0.001)
    # The earlier song keeps its bonus
    assert hot.income_per_second == pytest.approx(0.002)
