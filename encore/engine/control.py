"""Industry control — the win-condition score.

Five independent axes feed it: fans, tech tier, phase, prestige count and
owned platforms. The score is always recomputed from scratch, so calling
``compute_industry_control`` twice on the same state gives the same value.

The stored value is not clamped (it may exceed 100 late in the game);
``display_control`` and ``has_won`` clamp at the win threshold.
"""

from __future__ import annotations

from collections.abc import Iterable

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState


def _step_total(value: float, steps: Iterable[tuple[float, float]]) -> float:
    """Sum contributions of every threshold ``value`` has reached."""
    return sum(points for threshold, points in steps if value >= threshold)


def control_breakdown(state: GameState) -> dict[str, float]:
    bal = BALANCE.control
    return {
        "fans": _step_total(state.fans, bal.fan_steps),
        "tech": _step_total(state.tech_tier, bal.tech_steps),
        "phase": _step_total(state.phase, bal.phase_steps),
        "prestige": state.prestige_count * bal.per_prestige,
        "platforms": sum(p.control_contribution for p in state.platforms),
    }


def compute_industry_control(state: GameState) -> float:
    return sum(control_breakdown(state).values())


def update_industry_control(state: GameState) -> float:
    state.industry_control = compute_industry_control(state)
    return state.industry_control


def display_control(state: GameState) -> float:
    return min(state.industry_control, BALANCE.control.win_threshold)


def has_won(state: GameState) -> bool:
    return state.industry_control >= BALANCE.control.win_threshold
