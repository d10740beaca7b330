"""Tests for prestige (retiring the current artist)."""

import random

import pytest

from encore.engine.economy import song_income
from encore.engine.game_state import ActiveBoost, GameState, Platform, QueuedSong, Song
from encore.engine.prestige import (
    can_prestige,
    legacy_income_rate,
    next_experience_multiplier,
    perform_prestige,
)
from encore.engine.results import Failure


def prestige_ready() -> GameState:
    state = GameState(money=5_000, fans=50_000)
    state.unlocked.prestige = True
    state.unlocked.physical_albums = True
    state.upgrades = {"tier1_basic": 0}
    state.songs = [
        Song(id=f"s{i}", name="S", genre="pop", created_at=0, income_per_second=2.5, fan_rate=1)
        for i in range(4)
    ]
    state.song_queue = [QueuedSong("q", 100, 1_000)]
    state.active_boosts = [ActiveBoost("b", "bot_streams", "Bot", 0, 30_000, 3, 1.5)]
    state.platforms = [Platform("p", "streaming", "P", 0, 0, 0, 15)]
    state.current_artist.name = "First Artist"
    state.current_artist.fans = 50_000
    state.current_artist.peak_fans = 60_000
    state.current_artist.songs = 4
    return state


def test_prestige_locked():
    state = GameState()
    assert not can_prestige(state)
    assert perform_prestige(state, now=0).failure is Failure.PRECONDITION_NOT_MET
    assert state.prestige_count == 0


def test_legacy_income_is_catalog_income_times_ratio():
    state = prestige_ready()
    catalog = song_income(state)
    assert catalog == pytest.approx(10.0)
    expected = legacy_income_rate(state)

    legacy = perform_prestige(state, now=1_000, new_artist_name="Second Artist").value
    assert legacy.income_per_second == pytest.approx(catalog * 0.8)
    assert legacy.income_per_second == pytest.approx(expected)
    assert legacy.peak_fans == 60_000
    assert legacy.songs == 4
    assert legacy.prestiged_at == 1_000


def test_prestige_resets_session_resources():
    state = prestige_ready()
    perform_prestige(state, now=1_000, new_artist_name="Second Artist")
    assert state.money == 10
    assert state.songs == []
    assert state.song_queue == []
    assert state.active_boosts == []
    assert state.current_artist.name == "Second Artist"
    assert state.current_artist.fans == 0


def test_prestige_keeps_progress():
    state = prestige_ready()
    perform_prestige(state, now=1_000)
    assert state.fans == 50_000
    assert state.upgrades == {"tier1_basic": 0}
    assert state.unlocked.prestige and state.unlocked.physical_albums
    assert len(state.platforms) == 1


def test_prestige_counter_and_experience():
    state = prestige_ready()
    assert next_experience_multiplier(state) == pytest.approx(1.1)
    perform_prestige(state, now=1_000)
    assert state.prestige_count == 1
    assert state.experience_multiplier == pytest.approx(1.1)
    # 15 from the platform, 2 per prestige
    assert state.industry_control == pytest.approx(17)


def test_only_three_legacy_artists_kept():
    state = prestige_ready()
    for i in range(4):
        perform_prestige(state, now=i, new_artist_name=f"Artist {i}")
    assert state.prestige_count == 4
    assert [a.name for a in state.legacy_artists] == ["Artist 0", "Artist 1", "Artist 2"]


def test_new_artist_name_follows_seeded_rng():
    first, second = prestige_ready(), prestige_ready()
    perform_prestige(first, now=1_000, rng=random.Random(11))
    perform_prestige(second, now=1_000, rng=random.Random(11))
    assert first.current_artist.name == second.current_artist.name
