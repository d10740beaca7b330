"""Physical albums — one-shot payouts released automatically.

An album drops when the catalog crosses a new multiple of
``songs_per_album`` since the last release, at least ``min_songs`` exist
and the cooldown has passed. Payout scales with tracks, fans and the number
of variants (Standard, Deluxe, Vinyl, Limited Edition).
"""

from __future__ import annotations

import logging
import random

from encore.data.balance import BALANCE
from encore.engine.game_state import Album, GameState
from encore.engine.naming import generate_album_name
from encore.engine.results import ActionResult, Failure

logger = logging.getLogger(__name__)


def variant_count(fans: float) -> int:
    """Number of variants pressed, a step function of fans."""
    count = 1
    for min_fans, variants, _name in BALANCE.albums.variant_thresholds:
        if fans >= min_fans:
            count = variants
    return count


def variant_names(fans: float) -> list[str]:
    return [name for min_fans, _v, name in BALANCE.albums.variant_thresholds if fans >= min_fans]


def album_payout(song_count: int, fans: float, variants: int) -> float:
    """(capped tracks × per-track + fans × per-fan) × variants."""
    bal = BALANCE.albums
    tracks = min(song_count, bal.max_tracks)
    return (tracks * bal.payout_per_song + fans * bal.payout_per_fan) * variants


def album_ready(state: GameState, now: float) -> bool:
    """True when an automatic release should fire at ``now``."""
    bal = BALANCE.albums
    if not state.unlocked.physical_albums:
        return False
    count = state.song_count
    if count < bal.min_songs:
        return False
    last = state.last_album_release_at
    if last is not None and now - last < bal.release_cooldown_ms:
        return False
    return count // bal.songs_per_album > state.last_album_song_count // bal.songs_per_album


def release_album(state: GameState, now: float, rng: random.Random | None = None) -> Album:
    """Press and sell an album from the current catalog."""
    tracks = min(state.song_count, BALANCE.albums.max_tracks)
    variants = variant_count(state.fans)
    album = Album(
        id=state.new_id("album"),
        name=generate_album_name(rng),
        song_count=tracks,
        released_at=now,
        payout=album_payout(tracks, state.fans, variants),
        variant_count=variants,
    )
    state.albums.append(album)
    state.money += album.payout
    state.last_album_release_at = now
    state.last_album_song_count = state.song_count
    logger.info("Released album %s for $%.2f", album.name, album.payout)
    return album


def process_albums(state: GameState, now: float, rng: random.Random | None = None) -> Album | None:
    """Auto-release check, run once per tick."""
    if album_ready(state, now):
        return release_album(state, now, rng)
    return None


def rerelease_album(state: GameState, album_id: str, now: float) -> ActionResult:
    """Re-press an earlier album at half of what a fresh release would pay today."""
    if not state.unlocked.physical_albums:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Physical albums are locked")
    original = next((a for a in state.albums if a.id == album_id), None)
    if original is None:
        return ActionResult.fail(Failure.NOT_FOUND, f"Unknown album {album_id!r}")

    variants = variant_count(state.fans)
    fresh = album_payout(original.song_count, state.fans, variants)
    album = Album(
        id=state.new_id("album"),
        name=f"{original.name} (Remastered)",
        song_count=original.song_count,
        released_at=now,
        payout=fresh * BALANCE.albums.rerelease_fraction,
        variant_count=variants,
        is_rerelease=True,
    )
    state.albums.append(album)
    state.money += album.payout
    logger.info("Re-released %s for $%.2f", original.name, album.payout)
    return ActionResult.success(album, f"{album.name} re-released!")


def total_album_revenue(state: GameState) -> float:
    return sum(a.payout for a in state.albums)
