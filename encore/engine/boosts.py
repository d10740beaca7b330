"""Boosts — temporary, stackable income and fan multipliers.

Lifecycle: activate → active while ``now < activated_at + duration`` →
pruned. There is no cancel and no cooldown; repeat use only costs more.
"""

from __future__ import annotations

import logging
import math

from encore.data.boosts import ALL_BOOSTS, SCARCITY_BOOST_ID, BoostDef
from encore.engine.game_state import ActiveBoost, GameState
from encore.engine.results import ActionResult, Failure, insufficient_funds
from encore.engine.tours import enable_scarcity

logger = logging.getLogger(__name__)


def get_boost_cost(state: GameState, boost_id: str) -> float:
    """floor(base_cost * cost_scaling ^ times_used)."""
    bdef = ALL_BOOSTS[boost_id]
    used = state.boost_usage.get(boost_id, 0)
    return math.floor(bdef.base_cost * bdef.cost_scaling ** used)


def can_activate_boost(state: GameState, boost_id: str) -> bool:
    bdef = ALL_BOOSTS.get(boost_id)
    if bdef is None or state.phase < bdef.min_phase:
        return False
    return state.money >= get_boost_cost(state, boost_id)


def activate_boost(state: GameState, boost_id: str, now: float) -> ActionResult:
    """Pay for a boost and start it at ``now``."""
    bdef = ALL_BOOSTS.get(boost_id)
    if bdef is None:
        return ActionResult.fail(Failure.NOT_FOUND, f"Unknown boost {boost_id!r}")
    if state.phase < bdef.min_phase:
        return ActionResult.fail(
            Failure.PRECONDITION_NOT_MET,
            f"{bdef.name} unlocks in phase {bdef.min_phase}",
        )
    cost = get_boost_cost(state, boost_id)
    if state.money < cost:
        return insufficient_funds(cost, state.money)

    state.money -= cost
    boost = ActiveBoost(
        id=state.new_id("boost"),
        type=bdef.id,
        name=bdef.name,
        activated_at=now,
        duration_ms=bdef.duration_ms,
        income_multiplier=bdef.income_multiplier,
        fan_multiplier=bdef.fan_multiplier,
    )
    state.active_boosts.append(boost)
    state.boost_usage[boost_id] = state.boost_usage.get(boost_id, 0) + 1

    if boost_id == SCARCITY_BOOST_ID:
        enable_scarcity(state)

    logger.info("Activated %s for %.0f ms (cost %s)", boost_id, bdef.duration_ms, cost)
    return ActionResult.success(boost, f"{bdef.name} active!")


def prune_boosts(state: GameState, now: float) -> list[ActiveBoost]:
    """Drop boosts whose time is up. Returns the expired instances."""
    expired = [b for b in state.active_boosts if now - b.activated_at >= b.duration_ms]
    if expired:
        state.active_boosts = [b for b in state.active_boosts if now - b.activated_at < b.duration_ms]
    return expired


def list_active_boosts(state: GameState, now: float) -> list[ActiveBoost]:
    return [b for b in state.active_boosts if b.is_active(now)]


def list_available_boosts(state: GameState) -> list[BoostDef]:
    """Boost types the current phase allows, affordable or not."""
    return [b for b in ALL_BOOSTS.values() if state.phase >= b.min_phase]


def boost_remaining_ms(boost: ActiveBoost, now: float) -> float:
    return max(0.0, boost.expires_at - now)
