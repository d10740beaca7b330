"""Tours — time-boxed, high-income events.

A tour's income is computed once, at start, from fans and catalog size and
the experience multiplier. It runs for a fixed duration and then simply
stops counting toward income (``completed_at`` is set).
"""

from __future__ import annotations

import logging
import random

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState, Tour
from encore.engine.naming import generate_tour_name
from encore.engine.results import ActionResult, Failure, insufficient_funds

logger = logging.getLogger(__name__)


def max_active_tours(state: GameState) -> int:
    """Concurrent tour capacity, a step function of tech tier."""
    capacity = 1
    for min_tier, cap in BALANCE.tours.capacity_by_tier:
        if state.tech_tier >= min_tier:
            capacity = cap
    return capacity


def active_tour_count(state: GameState) -> int:
    return sum(1 for t in state.tours if t.completed_at is None)


def tour_income_rate(state: GameState) -> float:
    """Income per second a tour started now would earn."""
    bal = BALANCE.tours
    rate = bal.base_income + state.fans * bal.income_per_fan + state.song_count * bal.income_per_song
    return rate * state.experience_multiplier


def can_start_tour(state: GameState) -> bool:
    return (
        state.unlocked.tours
        and active_tour_count(state) < max_active_tours(state)
        and state.money >= BALANCE.tours.cost
    )


def start_tour(state: GameState, now: float, rng: random.Random | None = None) -> ActionResult:
    if not state.unlocked.tours:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Tours are locked")
    if active_tour_count(state) >= max_active_tours(state):
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Tour capacity reached")
    cost = BALANCE.tours.cost
    if state.money < cost:
        return insufficient_funds(cost, state.money)

    state.money -= cost
    tour = Tour(
        id=state.new_id("tour"),
        name=generate_tour_name(state.current_artist.name, rng),
        started_at=now,
        income_per_second=tour_income_rate(state),
    )
    state.tours.append(tour)
    logger.info("Tour started: %s ($%.2f/s)", tour.name, tour.income_per_second)
    return ActionResult.success(tour, f"{tour.name} is on the road!")


def process_tours(state: GameState, now: float) -> list[Tour]:
    """Mark finished tours complete. Returns the tours completed this call."""
    finished: list[Tour] = []
    for tour in state.tours:
        if tour.completed_at is None and now - tour.started_at >= BALANCE.tours.duration_ms:
            tour.completed_at = now
            finished.append(tour)
    return finished


def enable_scarcity(state: GameState) -> int:
    """Apply scarcity pricing to running tours that don't have it yet."""
    count = 0
    for tour in state.tours:
        if tour.completed_at is None and not tour.uses_scarcity:
            tour.uses_scarcity = True
            tour.income_per_second *= BALANCE.tours.scarcity_multiplier
            count += 1
    return count


def tour_remaining_ms(tour: Tour, now: float) -> float:
    if tour.completed_at is not None:
        return 0.0
    return max(0.0, tour.started_at + BALANCE.tours.duration_ms - now)


def tour_stats(state: GameState) -> dict:
    completed = [t for t in state.tours if t.completed_at is not None]
    revenue = sum(t.income_per_second * (t.completed_at - t.started_at) / 1000 for t in completed)
    return {
        "total": len(state.tours),
        "active": active_tour_count(state),
        "completed": len(completed),
        "revenue": revenue,
        "max_active": max_active_tours(state),
    }
