"""Production queue — songs are generated strictly one at a time, FIFO.

A song's rates are baked when it *completes*, using the multipliers in force
at that instant. Later purchases never touch an existing song.
"""

from __future__ import annotations

import logging
import random

from encore.data.balance import BALANCE
from encore.engine.game_state import GameState, QueuedSong, Song
from encore.engine.multipliers import trending_multiplier, tier_income_multiplier
from encore.engine.naming import generate_song_name
from encore.engine.results import ActionResult, Failure, insufficient_funds
from encore.engine.tech import generation_time_ms, song_cost

logger = logging.getLogger(__name__)


def queue_cost(state: GameState, count: int) -> float:
    return song_cost(state) * count


def enqueue_songs(state: GameState, count: int = 1) -> ActionResult:
    """Pay for and queue ``count`` songs at the current generation time."""
    if count < 1:
        return ActionResult.fail(Failure.PRECONDITION_NOT_MET, "Must queue at least one song")
    cost = queue_cost(state, count)
    if state.money < cost:
        return insufficient_funds(cost, state.money)

    state.money -= cost
    total_ms = generation_time_ms(state)
    queued = [QueuedSong(id=state.new_id("song"), progress_ms=0.0, total_ms=total_ms) for _ in range(count)]
    state.song_queue.extend(queued)
    return ActionResult.success(queued, f"Queued {count} song(s)")


def create_song(
    state: GameState,
    now: float,
    song_id: str | None = None,
    rng: random.Random | None = None,
) -> Song:
    """Bake a new song from the current multipliers and add it to the catalog."""
    r = rng or random
    bal = BALANCE.economy

    genre = state.trending_genre or r.choice(bal.genres)
    trend = trending_multiplier(state, now) if genre == state.trending_genre else 1.0
    experience = state.experience_multiplier

    song = Song(
        id=song_id or state.new_id("song"),
        name=generate_song_name(genre, r),
        genre=genre,
        created_at=now,
        income_per_second=bal.base_income_per_song * tier_income_multiplier(state) * experience * trend,
        fan_rate=bal.base_fan_rate * experience * trend,
        is_trending=trend > 1.0,
    )
    state.songs.append(song)
    state.current_artist.songs += 1
    return song


def advance_queue(
    state: GameState,
    delta_ms: float,
    now: float,
    rng: random.Random | None = None,
) -> list[Song]:
    """Feed ``delta_ms`` of work into the queue. Returns songs completed.

    Only the head accumulates progress. Leftover time after a completion
    flows into the next entry, so several songs may finish in one call.
    """
    completed: list[Song] = []
    remaining = delta_ms
    while state.song_queue and remaining > 0:
        head = state.song_queue[0]
        needed = head.total_ms - head.progress_ms
        if remaining < needed:
            head.progress_ms += remaining
            break
        remaining -= needed
        state.song_queue.pop(0)
        completed.append(create_song(state, now, song_id=head.id, rng=rng))
    if completed:
        logger.debug("Completed %d song(s)", len(completed))
    return completed


def queue_progress(state: GameState) -> float:
    """Fraction complete of the song at the head of the queue (0 when idle)."""
    if not state.song_queue:
        return 0.0
    head = state.song_queue[0]
    if head.total_ms <= 0:
        return 1.0
    return min(head.progress_ms / head.total_ms, 1.0)
