"""Trend research — pay to discover which genre is hot right now."""

from __future__ import annotations

import logging
import random

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState
from encore.engine.multipliers import trending_multiplier
from encore.engine.results import ActionResult, Failure, insufficient_funds

logger = logging.getLogger(__name__)


def research_trend(state: GameState, now: float, rng: random.Random | None = None) -> ActionResult:
    """Pick a new trending genre (never the current one) and restart its fade."""
    if not state.unlocked.trend_research:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Trend research is locked")
    cost = BALANCE.economy.trend_research_cost
    if state.money < cost:
        return insufficient_funds(cost, state.money)

    r = rng or random
    choices = [g for g in BALANCE.economy.genres if g != state.trending_genre]
    state.money -= cost
    state.trending_genre = r.choice(choices)
    state.trend_discovered_at = now
    logger.info("Trend discovered: %s", state.trending_genre)
    return ActionResult.success(state.trending_genre, f"{state.trending_genre} is trending!")


def trend_bonus(state: GameState, now: float) -> float:
    return trending_multiplier(state, now)


def trend_remaining_ms(state: GameState, now: float) -> float:
    """Time left before the current trend's bonus has fully faded."""
    if state.trend_discovered_at is None:
        return 0.0
    return max(0.0, state.trend_discovered_at + BALANCE.economy.trend_fade_ms - now)
