"""Tests for concert tours."""

import random

import pytest

from encore.engine.economy import compute_base_income
from encore.engine.game_state import GameState, Song
from encore.engine.results import Failure
from encore.engine.tours import (
    can_start_tour,
    max_active_tours,
    process_tours,
    start_tour,
    tour_income_rate,
    tour_remaining_ms,
    tour_stats,
)


def touring_state(money: float = 200_000) -> GameState:
    state = GameState(money=money)
    state.unlocked.tours = True
    return state


def test_tour_locked_by_default():
    state = GameState(money=1_000_000)
    assert start_tour(state, now=0).failure is Failure.PRECONDITION_NOT_MET
    assert state.money == 1_000_000


def test_tour_requires_funds():
    state = touring_state(money=49_999)
    assert start_tour(state, now=0).failure is Failure.INSUFFICIENT_FUNDS
    assert state.tours == []


def test_tour_income_fixed_at_start():
    state = touring_state()
    state.fans = 20_000
    state.songs = [
        Song(id=f"s{i}", name="S", genre="pop", created_at=0, income_per_second=0, fan_rate=0)
        for i in range(3)
    ]
    state.experience_multiplier = 1.5
    # (10 + 20_000 * 0.001 + 3 * 100) * 1.5
    assert tour_income_rate(state) == pytest.approx(495.0)

    tour = start_tour(state, now=0).value
    assert state.money == 150_000
    assert tour.income_per_second == pytest.approx(495.0)

    state.fans = 1_000_000
    assert tour.income_per_second == pytest.approx(495.0)


def test_capacity_follows_tech_tier():
    state = touring_state(money=1_000_000)
    assert max_active_tours(state) == 1
    assert start_tour(state, now=0)
    assert start_tour(state, now=0).failure is Failure.PRECONDITION_NOT_MET

    state.tech_tier = 4
    assert max_active_tours(state) == 2
    assert start_tour(state, now=0)
    state.tech_tier = 5
    assert max_active_tours(state) == 3


def test_tour_completes_after_duration():
    state = touring_state()
    tour = start_tour(state, now=1_000).value
    assert process_tours(state, 180_999) == []
    assert tour_remaining_ms(tour, 180_999) == 1

    assert process_tours(state, 181_000) == [tour]
    assert tour.completed_at == 181_000
    assert compute_base_income(state) == 0
    assert tour_remaining_ms(tour, 181_000) == 0


def test_tour_stats():
    state = touring_state()
    tour = start_tour(state, now=0).value
    process_tours(state, 180_000)
    stats = tour_stats(state)
    assert stats["total"] == 1
    assert stats["completed"] == 1
    assert stats["active"] == 0
    assert stats["revenue"] == pytest.approx(tour.income_per_second * 180)


def test_can_start_tour():
    assert not can_start_tour(GameState(money=1_000_000))
    state = touring_state()
    assert can_start_tour(state)
    start_tour(state, now=0)
    assert not can_start_tour(state)


def test_tour_names_follow_seeded_rng():
    first = start_tour(touring_state(), now=0, rng=random.Random(7)).value
    second = start_tour(touring_state(), now=0, rng=random.Random(7)).value
    assert first.name == second.name
