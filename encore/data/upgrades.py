"""Tech upgrade definitions — the seven-tier technology ladder.

Each tier has three sub-levels (basic → improved → advanced). Every upgrade
requires the previous one, so the table forms a single prerequisite chain.
Effects are "best purchased wins": the fastest generation time, the lowest
song cost and the highest income multiplier among owned upgrades apply.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UpgradeDef:
    """Definition of a single tech upgrade."""

    id: str
    tier: int
    name: str
    description: str
    cost: float
    # Effects (None = this upgrade does not touch the value)
    song_speed_ms: float | None = None
    song_cost: float | None = None
    income_multiplier: float | None = None
    # Unlock-flag names this upgrade enables (see engine.unlocks)
    unlocks: tuple[str, ...] = ()
    prerequisites: tuple[str, ...] = ()


TIER_NAMES: dict[int, str] = {
    1: "Third-party Web Services",
    2: "Lifetime Licenses",
    3: "Local AI Models",
    4: "Fine-tuned Models",
    5: "Train Your Own Models",
    6: "Build Your Own Software",
    7: "AI Agent Automation",
}

SUB_TIER_NAMES: tuple[str, ...] = ("basic", "improved", "advanced")


# ── Upgrade table ────────────────────────────────────────────────

_UPGRADE_LIST: list[UpgradeDef] = [
    # Tier 1: web services
    UpgradeDef(
        id="tier1_basic", tier=1, name="Suno/Udio Account",
        description="Basic web-based AI music generation. Songs take 30s.",
        cost=10, song_speed_ms=30_000, song_cost=2,
    ),
    UpgradeDef(
        id="tier1_improved", tier=1, name="Premium Subscription",
        description="Faster queue and better quality. Songs take 20s.",
        cost=50, song_speed_ms=20_000, song_cost=1.5,
        prerequisites=("tier1_basic",),
    ),
    UpgradeDef(
        id="tier1_advanced", tier=1, name="Multi-Account Management",
        description="Run accounts in parallel. Songs take 15s. Unlocks trend research.",
        cost=200, song_speed_ms=15_000, song_cost=1,
        unlocks=("trend_research",),
        prerequisites=("tier1_improved",),
    ),
    # Tier 2: lifetime licenses
    UpgradeDef(
        id="tier2_basic", tier=2, name="Lifetime License",
        description="Unlimited generation. Songs are now FREE!",
        cost=500, song_speed_ms=12_000, song_cost=0,
        prerequisites=("tier1_advanced",),
    ),
    UpgradeDef(
        id="tier2_improved", tier=2, name="API Access",
        description="Direct API integration. Songs take 10s. Unlocks physical albums.",
        cost=2_000, song_speed_ms=10_000, income_multiplier=1.5,
        unlocks=("physical_albums",),
        prerequisites=("tier2_basic",),
    ),
    UpgradeDef(
        id="tier2_advanced", tier=2, name="Batch Processing",
        description="Generate songs in batches. Songs take 8s.",
        cost=5_000, song_speed_ms=8_000, income_multiplier=2.0,
        prerequisites=("tier2_improved",),
    ),
    # Tier 3: local models
    UpgradeDef(
        id="tier3_basic", tier=3, name="Download Open Models",
        description="Run AI locally. Songs take 6s. Unlocks GPU and prestige.",
        cost=10_000, song_speed_ms=6_000,
        unlocks=("gpu", "prestige"),
        prerequisites=("tier2_advanced",),
    ),
    UpgradeDef(
        id="tier3_improved", tier=3, name="Optimized Inference",
        description="Quantization and optimization. Songs take 5s.",
        cost=25_000, song_speed_ms=5_000, income_multiplier=2.5,
        prerequisites=("tier3_basic",),
    ),
    UpgradeDef(
        id="tier3_advanced", tier=3, name="Multi-GPU Setup",
        description="Parallel processing across GPUs. Songs take 4s. Enables tours.",
        cost=50_000, song_speed_ms=4_000, income_multiplier=3.0,
        unlocks=("tours",),
        prerequisites=("tier3_improved",),
    ),
    # Tier 4: fine-tuned models
    UpgradeDef(
        id="tier4_basic", tier=4, name="Fine-tune on Hit Songs",
        description="Train on popular music. Songs take 3s.",
        cost=100_000, song_speed_ms=3_000, income_multiplier=4.0,
        prerequisites=("tier3_advanced",),
    ),
    UpgradeDef(
        id="tier4_improved", tier=4, name="Genre Specialists",
        description="Separate models per genre. Songs take 2.5s.",
        cost=250_000, song_speed_ms=2_500, income_multiplier=5.0,
        prerequisites=("tier4_basic",),
    ),
    UpgradeDef(
        id="tier4_advanced", tier=4, name="Trend Prediction Models",
        description="AI predicts the next trend. Songs take 2s.",
        cost=500_000, song_speed_ms=2_000, income_multiplier=6.0,
        prerequisites=("tier4_improved",),
    ),
    # Tier 5: own models
    UpgradeDef(
        id="tier5_basic", tier=5, name="Custom Architecture",
        description="Build models from scratch. Songs take 1.5s.",
        cost=1_000_000, song_speed_ms=1_500, income_multiplier=8.0,
        prerequisites=("tier4_advanced",),
    ),
    UpgradeDef(
        id="tier5_improved", tier=5, name="Scrape Training Data",
        description="Collect massive datasets. Songs take 1s.",
        cost=2_500_000, song_speed_ms=1_000, income_multiplier=10.0,
        prerequisites=("tier5_basic",),
    ),
    UpgradeDef(
        id="tier5_advanced", tier=5, name="Distributed Training",
        description="Train across data centers. Songs take 0.8s.",
        cost=5_000_000, song_speed_ms=800, income_multiplier=12.0,
        prerequisites=("tier5_improved",),
    ),
    # Tier 6: own software
    UpgradeDef(
        id="tier6_basic", tier=6, name="Custom Inference Engine",
        description="Optimized code from scratch. Songs take 0.6s. Enables platform ownership.",
        cost=10_000_000, song_speed_ms=600, income_multiplier=15.0,
        unlocks=("platform_ownership",),
        prerequisites=("tier5_advanced",),
    ),
    UpgradeDef(
        id="tier6_improved", tier=6, name="Hardware Acceleration",
        description="CUDA/Metal optimization. Songs take 0.4s.",
        cost=25_000_000, song_speed_ms=400, income_multiplier=20.0,
        prerequisites=("tier6_basic",),
    ),
    UpgradeDef(
        id="tier6_advanced", tier=6, name="Proprietary Format",
        description="Control the entire stack. Songs take 0.3s. Unlocks monopoly.",
        cost=50_000_000, song_speed_ms=300, income_multiplier=25.0,
        unlocks=("monopoly",),
        prerequisites=("tier6_improved",),
    ),
    # Tier 7: agents
    UpgradeDef(
        id="tier7_basic", tier=7, name="AI Marketing Agent",
        description="Agents handle all promotion. Songs take 0.2s.",
        cost=100_000_000, song_speed_ms=200, income_multiplier=30.0,
        prerequisites=("tier6_advanced",),
    ),
    UpgradeDef(
        id="tier7_improved", tier=7, name="AI A&R Agent",
        description="Agents decide what music to make. Songs take 0.15s.",
        cost=250_000_000, song_speed_ms=150, income_multiplier=40.0,
        prerequisites=("tier7_basic",),
    ),
    UpgradeDef(
        id="tier7_advanced", tier=7, name="Full Automation",
        description="The AI runs everything. You just watch. Songs take 0.1s.",
        cost=500_000_000, song_speed_ms=100, income_multiplier=50.0,
        prerequisites=("tier7_improved",),
    ),
]

# ── All upgrades registry ────────────────────────────────────────

ALL_UPGRADES: dict[str, UpgradeDef] = {u.id: u for u in _UPGRADE_LIST}
