"""Unlock gate — one-way latches for gated systems and the phase ordinal.

Every gate needs an upgrade that declares the flag in its ``unlocks`` tuple.
Some gates add thresholds on top (albums, fans, completed tours). Gates only
ever set flags; nothing in this module clears one.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from encore.data.balance import BALANCE
from encore.data.upgrades import ALL_UPGRADES
from encore.engine.game_state import GameState

logger = logging.getLogger(__name__)


def _tours_ready(state: GameState) -> bool:
    bal = BALANCE.progression
    return len(state.albums) >= bal.tours_min_albums and state.fans >= bal.tours_min_fans


def _platforms_ready(state: GameState) -> bool:
    bal = BALANCE.progression
    return (
        state.completed_tours >= bal.platforms_min_completed_tours
        and state.fans >= bal.platforms_min_fans
    )


# Extra conditions beyond owning the granting upgrade
_EXTRA_GATES: dict[str, Callable[[GameState], bool]] = {
    "tours": _tours_ready,
    "platform_ownership": _platforms_ready,
}

UNLOCK_MESSAGES: dict[str, str] = {
    "trend_research": "Trend Research unlocked: discover trending genres for bonus income and fans.",
    "physical_albums": "Physical Albums unlocked: albums release automatically for big payouts.",
    "gpu": "GPU Resources unlocked: run AI models on your own hardware.",
    "prestige": "Prestige unlocked: retire your artist for permanent bonuses.",
    "tours": "Tours unlocked: run stadium tours for massive income.",
    "platform_ownership": "Platform Ownership unlocked: buy the music industry.",
    "monopoly": "Monopoly unlocked: total industry control is within reach.",
}


def granted_flags(state: GameState) -> set[str]:
    """Flags declared by the upgrades the player owns."""
    flags: set[str] = set()
    for uid in state.upgrades:
        udef = ALL_UPGRADES.get(uid)
        if udef:
            flags.update(udef.unlocks)
    return flags


def gate_open(state: GameState, flag: str) -> bool:
    """True when every condition for ``flag`` currently holds."""
    if flag not in granted_flags(state):
        return False
    extra = _EXTRA_GATES.get(flag)
    return extra is None or extra(state)


def check_unlocks(state: GameState) -> list[str]:
    """Latch any newly satisfied flags. Returns the flags flipped this call."""
    granted = granted_flags(state)
    flipped: list[str] = []
    for flag in state.unlocked.as_dict():
        if flag not in granted:
            continue
        extra = _EXTRA_GATES.get(flag)
        if extra is not None and not extra(state):
            continue
        if state.unlocked.unlock(flag):
            logger.info("System unlocked: %s", flag)
            flipped.append(flag)
    return flipped


# ── Phases ───────────────────────────────────────────────────────


def phase_requirements_met(state: GameState, phase: int) -> bool:
    req = dict(BALANCE.progression.phases).get(phase)
    if req is None:
        return False
    return (
        state.fans >= req.min_fans
        and state.song_count >= req.min_songs
        and state.tech_tier >= req.min_tech_tier
    )


def check_phase(state: GameState) -> int | None:
    """Advance the phase ordinal as far as requirements allow. Never goes back."""
    start = state.phase
    max_phase = max(p for p, _ in BALANCE.progression.phases)
    while state.phase < max_phase and phase_requirements_met(state, state.phase + 1):
        state.phase += 1
    if state.phase != start:
        logger.info("Entered phase %d", state.phase)
        return state.phase
    return None
