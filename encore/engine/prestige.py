"""Prestige — retire the current artist for permanent bonuses.

The retiring artist becomes a legacy artist earning a fixed share of the
catalog's income forever. Each prestige also raises the experience
multiplier applied to every future song and tour.

Reset: money, catalog, queue, active boosts and the current artist.
Kept: total fans, unlock flags, upgrades, platforms, albums and tours.
"""

from __future__ import annotations

import logging
import random

from encore.data.balance import BALANCE
from encore.engine.control import update_industry_control
from encore.engine.economy import song_income
from encore.engine.game_state import Artist, GameState, LegacyArtist
from encore.engine.multipliers import experience_multiplier
from encore.engine.naming import generate_artist_name
from encore.engine.results import ActionResult, Failure

logger = logging.getLogger(__name__)


def can_prestige(state: GameState) -> bool:
    return state.unlocked.prestige


def legacy_income_rate(state: GameState) -> float:
    """Income a legacy artist would earn if the current one retired now."""
    return song_income(state) * BALANCE.prestige.legacy_income_ratio


def next_experience_multiplier(state: GameState) -> float:
    return experience_multiplier(state.prestige_count + 1)


def perform_prestige(
    state: GameState,
    now: float,
    new_artist_name: str | None = None,
    rng: random.Random | None = None,
) -> ActionResult:
    """Retire the current artist and start over with a new one."""
    if not can_prestige(state):
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Prestige is locked")

    bal = BALANCE.prestige
    artist = state.current_artist
    legacy = LegacyArtist(
        name=artist.name,
        peak_fans=artist.peak_fans,
        songs=artist.songs,
        income_per_second=legacy_income_rate(state),
        created_at=artist.created_at,
        prestiged_at=now,
    )
    state.legacy_artists.append(legacy)
    # Oldest legacy artists fall off the end
    del state.legacy_artists[:-bal.max_legacy_artists]

    state.prestige_count += 1
    state.experience_multiplier = experience_multiplier(state.prestige_count)

    state.money = BALANCE.economy.initial_money
    state.songs = []
    state.song_queue = []
    state.active_boosts = []
    state.last_album_song_count = 0
    state.current_artist = Artist(
        name=new_artist_name or generate_artist_name(rng),
        created_at=now,
    )

    update_industry_control(state)
    logger.info(
        "Prestige #%d: %s retired ($%.2f/s legacy), experience now %.1fx",
        state.prestige_count, legacy.name, legacy.income_per_second, state.experience_multiplier,
    )
    return ActionResult.success(legacy, f"{legacy.name} joins your legacy roster")
