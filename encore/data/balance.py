"""Balance constants — all tuning knobs in one place.

Tweak these to adjust pacing and the shape of the economy.
All durations are in milliseconds; all rates are per second.
Scaling costs follow: base_cost * (growth_rate ^ times_used)
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EngineBalance:
    """Tuning for the scheduler."""

    # Fixed logical tick (10 Hz)
    tick_ms: float = 100.0
    # A single catch-up tick never credits more than this
    max_delta_ms: float = 5_000.0
    # Persistence callback period, measured in real time
    autosave_interval_ms: float = 10_000.0
    # Offline progress is credited up to this many hours
    offline_cap_hours: float = 4.0


@dataclass(frozen=True)
class EconomyBalance:
    """Tuning for songs, fans and trends."""

    initial_money: float = 10.0
    initial_fans: float = 0.0

    # Streaming income per song per second (before baked multipliers)
    base_income_per_song: float = 0.001
    # Fans gained per song per second
    base_fan_rate: float = 0.1

    # Cost per queued song before any upgrade
    base_song_cost: float = 2.0
    # Time to generate a song before any upgrade
    base_generation_ms: float = 30_000.0

    # Trending bonus: starts at peak and fades linearly to 1.0
    trending_multiplier: float = 2.0
    trend_fade_ms: float = 300_000.0
    trend_research_cost: float = 10_000.0

    genres: tuple[str, ...] = (
        "pop",
        "hip-hop",
        "rock",
        "electronic",
        "country",
        "jazz",
        "classical",
        "indie",
    )

    # Large number formatting thresholds
    suffixes: tuple[tuple[float, str], ...] = (
        (1e3, "K"),
        (1e6, "M"),
        (1e9, "B"),
        (1e12, "T"),
    )


@dataclass(frozen=True)
class PhaseRequirement:
    """Requirements to enter a progression phase."""

    min_fans: float
    min_songs: int
    min_tech_tier: int
    description: str


@dataclass(frozen=True)
class ProgressionBalance:
    """Phase ladder: (phase ordinal, requirement)."""

    phases: tuple[tuple[int, PhaseRequirement], ...] = (
        (1, PhaseRequirement(0, 0, 1, "Streaming — generate songs and earn from streams")),
        (2, PhaseRequirement(1_000, 10, 2, "Physical Albums — one-time payouts")),
        (3, PhaseRequirement(10_000, 50, 4, "Tours & Concerts — massive income")),
        (4, PhaseRequirement(100_000, 200, 6, "Platform Ownership — buy the industry")),
        (5, PhaseRequirement(1_000_000, 1_000, 7, "Total Automation — AI runs everything")),
    )

    # Unlock gate thresholds that go beyond an upgrade purchase
    tours_min_albums: int = 10
    tours_min_fans: float = 100_000
    platforms_min_completed_tours: int = 50
    platforms_min_fans: float = 1_000_000


@dataclass(frozen=True)
class AlbumBalance:
    """Tuning for physical album releases."""

    payout_per_song: float = 100.0
    payout_per_fan: float = 0.01
    min_songs: int = 5
    # A new album auto-releases each time the catalog crosses a multiple of this
    songs_per_album: int = 10
    # Tracks counted towards a single album's payout
    max_tracks: int = 10
    release_cooldown_ms: float = 120_000.0
    rerelease_fraction: float = 0.5

    # (min fans, variant count, variant name)
    variant_thresholds: tuple[tuple[float, int, str], ...] = (
        (0, 1, "Standard"),
        (50_000, 2, "Deluxe"),
        (200_000, 3, "Vinyl"),
        (1_000_000, 4, "Limited Edition"),
    )


@dataclass(frozen=True)
class TourBalance:
    """Tuning for concert tours."""

    cost: float = 50_000.0
    duration_ms: float = 180_000.0
    base_income: float = 10.0
    income_per_fan: float = 0.001
    income_per_song: float = 100.0
    scarcity_multiplier: float = 1.5

    # (min tech tier, max concurrent tours)
    capacity_by_tier: tuple[tuple[int, int], ...] = (
        (1, 1),
        (4, 2),
        (5, 3),
    )


@dataclass(frozen=True)
class PrestigeBalance:
    """Tuning for the artist reset."""

    # Experience multiplier: 1 + resets * multiplier_per_reset
    multiplier_per_reset: float = 0.1
    max_legacy_artists: int = 3
    # Fraction of catalog income a retired artist keeps earning
    legacy_income_ratio: float = 0.8
    # Fans per second funnelled to the new artist per legacy peak fan
    cross_promotion_rate: float = 0.00001


@dataclass(frozen=True)
class ControlBalance:
    """Industry control contributions. Tables are cumulative."""

    fan_steps: tuple[tuple[float, float], ...] = (
        (100_000, 5.0),
        (1_000_000, 5.0),
        (10_000_000, 5.0),
        (100_000_000, 5.0),
    )
    tech_steps: tuple[tuple[int, float], ...] = (
        (3, 5.0),
        (5, 5.0),
        (7, 10.0),
    )
    phase_steps: tuple[tuple[int, float], ...] = (
        (2, 5.0),
        (3, 5.0),
        (4, 5.0),
        (5, 5.0),
    )
    per_prestige: float = 2.0
    win_threshold: float = 100.0


@dataclass(frozen=True)
class GameBalance:
    """Top-level container for all balance constants."""

    engine: EngineBalance = field(default_factory=EngineBalance)
    economy: EconomyBalance = field(default_factory=EconomyBalance)
    progression: ProgressionBalance = field(default_factory=ProgressionBalance)
    albums: AlbumBalance = field(default_factory=AlbumBalance)
    tours: TourBalance = field(default_factory=TourBalance)
    prestige: PrestigeBalance = field(default_factory=PrestigeBalance)
    control: ControlBalance = field(default_factory=ControlBalance)

    # Save schema tag
    version: str = "1.0.0"


# Shared instance, import this everywhere
BALANCE = GameBalance()
