"""Platform ownership — buy industry infrastructure outright.

Owned platforms are immutable: their income and control share are copied
from the definition at purchase and never recomputed.
"""

from __future__ import annotations

import logging

from encore.data.platforms import ALL_PLATFORMS, PlatformDef
from encore.engine.control import update_industry_control
from encore.engine.game_state import GameState, Platform
from encore.engine.prerequisites import (
    missing_prerequisites,
    prerequisites_met,
    validate_prerequisite_graph,
)
from encore.engine.results import ActionResult, Failure, insufficient_funds

logger = logging.getLogger(__name__)

validate_prerequisite_graph({p.id: p.prerequisites for p in ALL_PLATFORMS.values()})


def owned_platform_ids(state: GameState) -> set[str]:
    return {p.id for p in state.platforms}


def purchase_platform(state: GameState, platform_id: str, now: float) -> ActionResult:
    pdef = ALL_PLATFORMS.get(platform_id)
    if pdef is None:
        return ActionResult.fail(Failure.NOT_FOUND, f"Unknown platform {platform_id!r}")
    if not state.unlocked.platform_ownership:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Platform ownership is locked")
    owned = owned_platform_ids(state)
    if platform_id in owned:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, f"{pdef.name} already owned")
    missing = missing_prerequisites(pdef.prerequisites, owned)
    if missing:
        return ActionResult.fail(
            Failure.PRECONDITION_NOT_MET,
            f"{pdef.name} requires {', '.join(missing)}",
        )
    if state.money < pdef.cost:
        return insufficient_funds(pdef.cost, state.money)

    state.money -= pdef.cost
    platform = Platform(
        id=pdef.id,
        type=pdef.type,
        name=pdef.name,
        cost=pdef.cost,
        acquired_at=now,
        income_per_second=pdef.income_per_second,
        control_contribution=pdef.control_contribution,
    )
    state.platforms.append(platform)
    logger.info("Acquired %s", pdef.name)

    update_industry_control(state)
    return ActionResult.success(platform, f"You now own {pdef.name}!")


def list_available_platforms(state: GameState) -> list[PlatformDef]:
    """Unowned platforms whose prerequisites are owned."""
    owned = owned_platform_ids(state)
    return [
        pdef for pdef in ALL_PLATFORMS.values()
        if pdef.id not in owned and prerequisites_met(pdef.prerequisites, owned)
    ]


def total_platform_investment(state: GameState) -> float:
    return sum(p.cost for p in state.platforms)


def platform_progress(state: GameState) -> dict:
    owned = len(state.platforms)
    total = len(ALL_PLATFORMS)
    return {
        "owned": owned,
        "total": total,
        "percentage": owned / total * 100 if total else 0.0,
    }
