"""Economy engine — income from every source, plus number formatting.

Income = (songs + legacy artists + platforms + running tours) × boosts.
Tier, experience and trending multipliers are already baked into each song
and tour, so only the dynamic boost layer is applied here.
"""

from __future__ import annotations

import math

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState
from encore.engine.multipliers import boost_multiplier, integrate_boost_multiplier


# ── Income sources ───────────────────────────────────────────────


def song_income(state: GameState) -> float:
    return sum(s.income_per_second for s in state.songs)


def legacy_income(state: GameState) -> float:
    return sum(a.income_per_second for a in state.legacy_artists)


def platform_income(state: GameState) -> float:
    return sum(p.income_per_second for p in state.platforms)


def tour_income(state: GameState) -> float:
    return sum(t.income_per_second for t in state.tours if t.completed_at is None)


def compute_base_income(state: GameState) -> float:
    """Sum of all current per-second income sources, before boosts."""
    return song_income(state) + legacy_income(state) + platform_income(state) + tour_income(state)


def apply_dynamic_multiplier(state: GameState, base_rate: float, now: float) -> float:
    return base_rate * boost_multiplier(state.active_boosts, now, "income")


def total_income_rate(state: GameState, now: float) -> float:
    """Income per second right now, including active boosts."""
    return apply_dynamic_multiplier(state, compute_base_income(state), now)


def apply_income(state: GameState, delta_ms: float, now: float) -> float:
    """Credit income for the interval [now - delta_ms, now). Returns money earned.

    Boosts are integrated over the interval, so the result is independent
    of how the interval is split into ticks.
    """
    if delta_ms <= 0:
        return 0.0
    base = compute_base_income(state)
    weighted_ms = integrate_boost_multiplier(state.active_boosts, now - delta_ms, now, "income")
    earned = base * weighted_ms / 1000.0
    state.money += earned
    return earned


# ── Formatting ───────────────────────────────────────────────────


def _trim(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_number(n: float) -> str:
    """Format a number with K/M/B/T suffixes for readability."""
    if not math.isfinite(n):
        return "0"
    if n < 0:
        return f"-{format_number(-n)}"

    for threshold, suffix in reversed(BALANCE.economy.suffixes):
        if n >= threshold:
            return f"{_trim(n / threshold)}{suffix}"

    if n == int(n):
        return str(int(n))
    return _trim(n)


def format_money(amount: float) -> str:
    """Format a dollar amount, e.g. ``$1.5M`` or ``-$12.25``."""
    if not math.isfinite(amount):
        return "$0"
    if amount < 0:
        return f"-{format_money(-amount)}"
    return f"${format_number(amount)}"


def format_duration(ms: float) -> str:
    """Format a duration using its largest sensible unit: ``1.5m``, ``2h``."""
    if not math.isfinite(ms) or ms <= 0:
        return "0s"
    seconds = ms / 1000
    for size, unit in ((86_400, "d"), (3_600, "h"), (60, "m")):
        if seconds >= size:
            return f"{seconds / size:.1f}".removesuffix(".0") + unit
    return f"{seconds:.1f}".removesuffix(".0") + "s"
