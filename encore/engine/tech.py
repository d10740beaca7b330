"""Tech progression — upgrade purchases and the effects derived from them.

Effects are never copied into the state: song cost, generation time and the
income multiplier are recomputed from the set of purchased upgrade ids.
"""

from __future__ import annotations

import logging

from encore.data.balance import BALANCE
from encore.data.upgrades import ALL_UPGRADES, SUB_TIER_NAMES, TIER_NAMES, UpgradeDef
from encore.engine.game_state import GameState
from encore.engine.multipliers import tier_income_multiplier
from encore.engine.prerequisites import (
    missing_prerequisites,
    prerequisites_met,
    validate_prerequisite_graph,
)
from encore.engine.results import ActionResult, Failure, insufficient_funds
from encore.engine.unlocks import check_unlocks

logger = logging.getLogger(__name__)

validate_prerequisite_graph({u.id: u.prerequisites for u in ALL_UPGRADES.values()})


# ── Derived effects ──────────────────────────────────────────────


def song_cost(state: GameState) -> float:
    """Cost of one queued song: the lowest cost any owned upgrade sets."""
    costs = [
        ALL_UPGRADES[uid].song_cost
        for uid in state.upgrades
        if uid in ALL_UPGRADES and ALL_UPGRADES[uid].song_cost is not None
    ]
    return min(costs) if costs else BALANCE.economy.base_song_cost


def generation_time_ms(state: GameState) -> float:
    """Time to generate one song: the fastest speed any owned upgrade sets."""
    speeds = [
        ALL_UPGRADES[uid].song_speed_ms
        for uid in state.upgrades
        if uid in ALL_UPGRADES and ALL_UPGRADES[uid].song_speed_ms is not None
    ]
    base = BALANCE.economy.base_generation_ms
    return min([base, *speeds])


def compute_tech_tier(purchased: set[str] | dict[str, float]) -> tuple[int, int]:
    """Return (tier, sub_tier) for a set of purchased upgrade ids.

    Tier is the highest tier with any purchase (1 when nothing is owned);
    sub-tier counts purchases in that tier, capped at 2.
    """
    per_tier: dict[int, int] = {}
    for uid in purchased:
        udef = ALL_UPGRADES.get(uid)
        if udef:
            per_tier[udef.tier] = per_tier.get(udef.tier, 0) + 1
    if not per_tier:
        return 1, 0
    tier = max(per_tier)
    return tier, min(per_tier[tier] - 1, 2)


# ── Purchases ────────────────────────────────────────────────────


def can_purchase_upgrade(state: GameState, upgrade_id: str) -> bool:
    udef = ALL_UPGRADES.get(upgrade_id)
    if udef is None or upgrade_id in state.upgrades:
        return False
    return state.money >= udef.cost and prerequisites_met(udef.prerequisites, state.upgrades)


def purchase_upgrade(state: GameState, upgrade_id: str, now: float) -> ActionResult:
    """Buy a tech upgrade. Unlock flags it grants are evaluated immediately."""
    udef = ALL_UPGRADES.get(upgrade_id)
    if udef is None:
        return ActionResult.fail(Failure.NOT_FOUND, f"Unknown upgrade {upgrade_id!r}")
    if upgrade_id in state.upgrades:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, f"{udef.name} already owned")
    missing = missing_prerequisites(udef.prerequisites, state.upgrades)
    if missing:
        return ActionResult.fail(
            Failure.PRECONDITION_NOT_MET,
            f"{udef.name} requires {', '.join(missing)}",
        )
    if state.money < udef.cost:
        return insufficient_funds(udef.cost, state.money)

    state.money -= udef.cost
    state.upgrades[upgrade_id] = now
    state.tech_tier, state.tech_sub_tier = compute_tech_tier(state.upgrades)
    logger.info("Purchased %s (tier %d.%d)", upgrade_id, state.tech_tier, state.tech_sub_tier)

    check_unlocks(state)
    return ActionResult.success(udef, f"Purchased {udef.name}")


def list_available_upgrades(state: GameState) -> list[UpgradeDef]:
    """Unowned upgrades whose prerequisites are owned (affordable or not)."""
    return [
        udef for udef in ALL_UPGRADES.values()
        if udef.id not in state.upgrades
        and prerequisites_met(udef.prerequisites, state.upgrades)
    ]


def tech_summary(state: GameState) -> dict:
    """Snapshot of tech progression for display."""
    available = list_available_upgrades(state)
    purchased = len(state.upgrades)
    total = len(ALL_UPGRADES)
    return {
        "tier": state.tech_tier,
        "sub_tier": state.tech_sub_tier,
        "tier_name": TIER_NAMES[state.tech_tier],
        "sub_tier_name": SUB_TIER_NAMES[state.tech_sub_tier],
        "purchased": purchased,
        "total": total,
        "progress_pct": purchased / total * 100,
        "next_upgrade": available[0].id if available else None,
        "song_cost": song_cost(state),
        "generation_ms": generation_time_ms(state),
        "income_multiplier": tier_income_multiplier(state),
    }
