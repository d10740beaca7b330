"""Fan growth — mirrors the income pipeline for audience size.

Fans come from the catalog's baked fan rates, scaled by active boosts'
fan multipliers. Retired artists also funnel fans to the current one
(cross-promotion).
"""

from __future__ import annotations

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState
from encore.engine.multipliers import boost_multiplier, integrate_boost_multiplier


def compute_base_fan_rate(state: GameState) -> float:
    return sum(s.fan_rate for s in state.songs)


def total_fan_rate(state: GameState, now: float) -> float:
    """Fans per second right now, including active boosts."""
    return compute_base_fan_rate(state) * boost_multiplier(state.active_boosts, now, "fan")


def apply_fans(state: GameState, delta_ms: float, now: float) -> float:
    """Credit fans for [now - delta_ms, now). Returns fans gained."""
    if delta_ms <= 0:
        return 0.0
    base = compute_base_fan_rate(state)
    weighted_ms = integrate_boost_multiplier(state.active_boosts, now - delta_ms, now, "fan")
    gained = base * weighted_ms / 1000.0
    if gained > 0:
        state.record_fans(gained)
    return gained


# ── Legacy cross-promotion ───────────────────────────────────────


def cross_promotion_rate(state: GameState) -> float:
    rate = BALANCE.prestige.cross_promotion_rate
    return sum(a.peak_fans * rate for a in state.legacy_artists)


def apply_cross_promotion(state: GameState, delta_ms: float) -> float:
    """Legacy artists send a trickle of fans to the current artist."""
    if delta_ms <= 0:
        return 0.0
    gained = cross_promotion_rate(state) * delta_ms / 1000.0
    if gained > 0:
        state.record_fans(gained)
    return gained
