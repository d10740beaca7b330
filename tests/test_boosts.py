"""Tests for boosts: cost scaling, phase gating, expiry and tour scarcity."""

import pytest

from encore.engine.boosts import (
    activate_boost,
    boost_remaining_ms,
    can_activate_boost,
    get_boost_cost,
    list_active_boosts,
    list_available_boosts,
    prune_boosts,
)
from encore.engine.economy import total_income_rate
from encore.engine.game_state import GameState, Song, Tour
from encore.engine.results import Failure


def income_song(rate: float = 1.0) -> Song:
    return Song(id="s", name="S", genre="pop", created_at=0, income_per_second=rate, fan_rate=0.0)


# ── Cost ─────────────────────────────────────────────────────────────────────

def test_boost_cost_scales_and_floors():
    state = GameState()
    assert get_boost_cost(state, "bot_streams") == 100
    state.boost_usage["bot_streams"] = 1
    assert get_boost_cost(state, "bot_streams") == 150
    state.boost_usage["bot_streams"] = 3
    assert get_boost_cost(state, "bot_streams") == 337  # floor(337.5)


def test_activation_charges_and_counts_usage():
    state = GameState(money=1_000)
    result = activate_boost(state, "bot_streams", now=500)
    assert result
    assert state.money == 900
    assert state.boost_usage["bot_streams"] == 1
    boost = state.active_boosts[0]
    assert boost.activated_at == 500
    assert boost.income_multiplier == 3.0
    assert get_boost_cost(state, "bot_streams") == 150


def test_same_type_can_stack():
    state = GameState(money=1_000)
    assert activate_boost(state, "bot_streams", now=0)
    assert activate_boost(state, "bot_streams", now=0)
    state.songs = [income_song(1.0)]
    assert total_income_rate(state, 1_000) == pytest.approx(9.0)


# ── Failures ─────────────────────────────────────────────────────────────────

def test_unknown_boost_not_found():
    state = GameState(money=1_000)
    assert activate_boost(state, "time_travel", now=0).failure is Failure.NOT_FOUND


def test_unaffordable_boost_leaves_state_alone():
    state = GameState(money=50)
    result = activate_boost(state, "bot_streams", now=0)
    assert result.failure is Failure.INSUFFICIENT_FUNDS
    assert state.money == 50
    assert state.active_boosts == []
    assert state.boost_usage == {}


def test_boost_gated_by_phase():
    state = GameState(money=1_000_000)
    result = activate_boost(state, "limited_variants", now=0)
    assert result.failure is Failure.PRECONDITION_NOT_MET
    state.phase = 2
    assert activate_boost(state, "limited_variants", now=0)


def test_available_boosts_follow_phase():
    state = GameState()
    ids = {b.id for b in list_available_boosts(state)}
    assert ids == {"bot_streams", "playlist_placement", "social_media"}
    state.phase = 4
    assert len(list_available_boosts(state)) == 11


# ── Expiry ───────────────────────────────────────────────────────────────────

def test_boost_applies_until_just_before_expiry():
    state = GameState(money=1_000)
    state.songs = [income_song(1.0)]
    activate_boost(state, "bot_streams", now=1_000)  # 30 s
    end = 1_000 + 30_000

    assert prune_boosts(state, end - 1) == []
    assert total_income_rate(state, end - 1) == pytest.approx(3.0)
    assert boost_remaining_ms(state.active_boosts[0], end - 1) == 1


def test_boost_pruned_just_after_expiry():
    state = GameState(money=1_000)
    state.songs = [income_song(1.0)]
    activate_boost(state, "bot_streams", now=1_000)
    end = 1_000 + 30_000

    expired = prune_boosts(state, end + 1)
    assert [b.type for b in expired] == ["bot_streams"]
    assert state.active_boosts == []
    assert total_income_rate(state, end + 1) == pytest.approx(1.0)


def test_prune_at_exact_expiry():
    state = GameState(money=1_000)
    activate_boost(state, "bot_streams", now=0)
    assert list_active_boosts(state, 30_000) == []
    assert len(prune_boosts(state, 30_000)) == 1


# ── Scarcity ─────────────────────────────────────────────────────────────────

def test_limit_tickets_boosts_running_tours_once():
    state = GameState(money=1_000_000, phase=3)
    state.tours = [
        Tour("t1", "Running", started_at=0, income_per_second=100.0),
        Tour("t2", "Finished", started_at=0, income_per_second=100.0, completed_at=1),
    ]
    assert activate_boost(state, "limit_tickets", now=10)
    assert state.tours[0].uses_scarcity
    assert state.tours[0].income_per_second == pytest.approx(150.0)
    assert state.tours[1].income_per_second == 100.0

    # A second activation does not compound on the same tour
    assert activate_boost(state, "limit_tickets", now=20)
    assert state.tours[0].income_per_second == pytest.approx(150.0)


def test_can_activate_boost_checks_phase_and_funds():
    state = GameState(money=150)
    assert can_activate_boost(state, "bot_streams")
    assert not can_activate_boost(state, "playlist_placement")
    assert not can_activate_boost(state, "limit_tickets")
    assert not can_activate_boost(state, "nope")
