"""Multiplier composition — pure functions, no mutation.

Two layers exist:

* **Baked** multipliers (tier, experience, trending) are folded into a song's
  rates once, when the song completes.
* **Dynamic** multipliers (active boosts) are applied every tick to the sum
  of all current sources and are never stored.
"""

from __future__ import annotations

from collections.abc import Iterable

from encore.data.balance import BALANCE
from encore.data.upgrades import ALL_UPGRADES
from encore.engine.game_state import ActiveBoost, GameState


# ── Baked layer ──────────────────────────────────────────────────


def tier_income_multiplier(state: GameState) -> float:
    """Highest income multiplier among purchased upgrades (1.0 if none)."""
    best = 1.0
    for uid in state.upgrades:
        udef = ALL_UPGRADES.get(uid)
        if udef and udef.income_multiplier is not None and udef.income_multiplier > best:
            best = udef.income_multiplier
    return best


def experience_multiplier(prestige_count: int) -> float:
    """Permanent cross-run multiplier: 1 + resets * increment."""
    return 1.0 + prestige_count * BALANCE.prestige.multiplier_per_reset


def trending_multiplier(state: GameState, now: float) -> float:
    """Current trending bonus, fading linearly from its peak to 1.0."""
    if state.trending_genre is None or state.trend_discovered_at is None:
        return 1.0
    bal = BALANCE.economy
    elapsed = max(0.0, now - state.trend_discovered_at)
    if elapsed >= bal.trend_fade_ms:
        return 1.0
    fade = elapsed / bal.trend_fade_ms
    return bal.trending_multiplier - (bal.trending_multiplier - 1.0) * fade


# ── Dynamic layer ────────────────────────────────────────────────


def boost_multiplier(boosts: Iterable[ActiveBoost], now: float, kind: str = "income") -> float:
    """Product of the ``kind`` multiplier over boosts active at ``now``."""
    attr = f"{kind}_multiplier"
    result = 1.0
    for boost in boosts:
        if boost.is_active(now):
            result *= getattr(boost, attr)
    return result


def integrate_boost_multiplier(
    boosts: Iterable[ActiveBoost],
    start: float,
    end: float,
    kind: str = "income",
) -> float:
    """Integral of the dynamic multiplier over [start, end), in milliseconds.

    The multiplier is piecewise constant between boost activations and
    expiries, so summing each piece's product times its width is exact.
    With no boosts this is simply ``end - start``.
    """
    if end <= start:
        return 0.0
    boosts = list(boosts)
    cuts = {start, end}
    for boost in boosts:
        for edge in (boost.activated_at, boost.expires_at):
            if start < edge < end:
                cuts.add(edge)
    points = sorted(cuts)

    total = 0.0
    for lo, hi in zip(points, points[1:]):
        total += boost_multiplier(boosts, lo, kind) * (hi - lo)
    return total
