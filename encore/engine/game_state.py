"""Game state — single source of truth for one empire.

All timestamps and durations are milliseconds. All rates are per second.
The state is plain data: everything here serialises to JSON via
``encore.engine.save``.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field, fields

from encore.data.balance import BALANCE


def now_ms() -> float:
    """Wall-clock time in milliseconds."""
    return time.time() * 1000.0


# ── Catalog ──────────────────────────────────────────────────────


@dataclass
class Song:
    """A finished song. Its rates are baked at completion and never change."""

    id: str
    name: str
    genre: str
    created_at: float
    income_per_second: float
    fan_rate: float
    is_trending: bool = False


@dataclass
class QueuedSong:
    """A song waiting in (or at the head of) the production queue."""

    id: str
    progress_ms: float
    total_ms: float


# ── Artists ──────────────────────────────────────────────────────


@dataclass
class Artist:
    """The artist currently releasing music."""

    name: str
    songs: int = 0
    fans: float = 0.0
    peak_fans: float = 0.0
    created_at: float = 0.0


@dataclass
class LegacyArtist:
    """A retired artist whose catalog keeps paying after prestige."""

    name: str
    peak_fans: float
    songs: int
    income_per_second: float
    created_at: float
    prestiged_at: float


# ── Timed events ─────────────────────────────────────────────────


@dataclass
class ActiveBoost:
    """A running boost instance. Active on [activated_at, activated_at + duration)."""

    id: str
    type: str
    name: str
    activated_at: float
    duration_ms: float
    income_multiplier: float
    fan_multiplier: float

    @property
    def expires_at(self) -> float:
        return self.activated_at + self.duration_ms

    def is_active(self, now: float) -> bool:
        return self.activated_at <= now < self.expires_at


@dataclass
class Album:
    """A physical album release (one-shot payout record)."""

    id: str
    name: str
    song_count: int
    released_at: float
    payout: float
    variant_count: int
    is_rerelease: bool = False


@dataclass
class Tour:
    """A concert tour. Income is fixed at start; running while completed_at is None."""

    id: str
    name: str
    started_at: float
    income_per_second: float
    completed_at: float | None = None
    uses_scarcity: bool = False

    @property
    def is_active(self) -> bool:
        return self.completed_at is None


@dataclass
class Platform:
    """An owned piece of industry infrastructure."""

    id: str
    type: str
    name: str
    cost: float
    acquired_at: float
    income_per_second: float
    control_contribution: float


# ── Progression ──────────────────────────────────────────────────


@dataclass
class UnlockedSystems:
    """One-way feature flags. Only ``unlock`` should flip them."""

    trend_research: bool = False
    physical_albums: bool = False
    tours: bool = False
    platform_ownership: bool = False
    monopoly: bool = False
    prestige: bool = False
    gpu: bool = False

    def unlock(self, name: str) -> bool:
        """Set a flag. Returns True only if it was previously off."""
        if getattr(self, name):
            return False
        setattr(self, name, True)
        return True

    def as_dict(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class GameState:
    """Complete mutable state for one game."""

    # ── Core resources ───────────────────────────────────
    money: float = BALANCE.economy.initial_money
    fans: float = BALANCE.economy.initial_fans
    songs: list[Song] = field(default_factory=list)

    # ── Progression ──────────────────────────────────────
    phase: int = 1
    industry_control: float = 0.0

    # ── Artists ──────────────────────────────────────────
    current_artist: Artist = field(default_factory=lambda: Artist(name="Unknown Artist"))
    legacy_artists: list[LegacyArtist] = field(default_factory=list)

    # ── Song generation ──────────────────────────────────
    song_queue: list[QueuedSong] = field(default_factory=list)
    trending_genre: str | None = None
    trend_discovered_at: float | None = None

    # ── Tech: upgrade id → purchase timestamp ────────────
    tech_tier: int = 1
    tech_sub_tier: int = 0
    upgrades: dict[str, float] = field(default_factory=dict)

    # ── Boosts ───────────────────────────────────────────
    active_boosts: list[ActiveBoost] = field(default_factory=list)
    boost_usage: dict[str, int] = field(default_factory=dict)

    # ── Albums & tours ───────────────────────────────────
    albums: list[Album] = field(default_factory=list)
    last_album_release_at: float | None = None
    last_album_song_count: int = 0
    tours: list[Tour] = field(default_factory=list)

    # ── Platforms ────────────────────────────────────────
    platforms: list[Platform] = field(default_factory=list)

    # ── Prestige ─────────────────────────────────────────
    prestige_count: int = 0
    experience_multiplier: float = 1.0

    unlocked: UnlockedSystems = field(default_factory=UnlockedSystems)

    # ── Metadata ─────────────────────────────────────────
    last_update: float = 0.0
    created_at: float = 0.0
    version: str = BALANCE.version
    next_id: int = 1

    def new_id(self, prefix: str) -> str:
        """Allocate a unique id such as ``song-12``."""
        ident = f"{prefix}-{self.next_id}"
        self.next_id += 1
        return ident

    def record_fans(self, amount: float) -> None:
        """Credit fans to the total and the current artist, tracking the peak."""
        self.fans += amount
        artist = self.current_artist
        artist.fans += amount
        if artist.fans > artist.peak_fans:
            artist.peak_fans = artist.fans

    @property
    def song_count(self) -> int:
        return len(self.songs)

    @property
    def completed_tours(self) -> int:
        return sum(1 for t in self.tours if t.completed_at is not None)


def new_game(now: float | None = None, artist_name: str | None = None) -> GameState:
    """Create a fresh game stamped at ``now`` (defaults to wall time)."""
    from encore.engine.naming import generate_artist_name

    if now is None:
        now = now_ms()
    artist = Artist(name=artist_name or generate_artist_name(), created_at=now)
    return GameState(
        current_artist=artist,
        last_update=now,
        created_at=now,
    )
