"""Boost definitions — temporary exploitation abilities.

Boosts cost money, last a fixed time and multiply income and fan growth while
active. Every activation makes the next one of the same type pricier:
cost = floor(base_cost * cost_scaling ^ times_used).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoostDef:
    """Definition of a single boost type."""

    id: str
    name: str
    description: str
    base_cost: float
    duration_ms: float
    income_multiplier: float
    fan_multiplier: float
    cost_scaling: float = 1.5
    # Earliest progression phase at which the boost can be activated
    min_phase: int = 1


# ── Phase 1: streaming exploitation ──────────────────────────────

BOT_STREAMS = BoostDef(
    id="bot_streams",
    name="Bot Streams",
    description="Deploy streaming bots to inflate play counts. Ethically dubious but effective.",
    base_cost=100,
    duration_ms=30_000,
    income_multiplier=3.0,
    fan_multiplier=1.5,
)

PLAYLIST_PLACEMENT = BoostDef(
    id="playlist_placement",
    name="Playlist Payola",
    description="Pay playlist curators for placement. Modern payola.",
    base_cost=500,
    duration_ms=60_000,
    income_multiplier=2.5,
    fan_multiplier=3.0,
)

SOCIAL_MEDIA = BoostDef(
    id="social_media",
    name="Viral Marketing Campaign",
    description="Astroturfing and fake engagement for artificial virality.",
    base_cost=1_000,
    duration_ms=45_000,
    income_multiplier=2.0,
    fan_multiplier=5.0,
)

# ── Phase 2: physical album exploitation ─────────────────────────

LIMITED_VARIANTS = BoostDef(
    id="limited_variants",
    name="Limited Edition Variants",
    description="Release 47 different vinyl colors. Collectors must buy them all.",
    base_cost=5_000,
    duration_ms=60_000,
    income_multiplier=4.0,
    fan_multiplier=1.2,
    min_phase=2,
)

SHUT_DOWN_COMPETITORS = BoostDef(
    id="shut_down_competitors",
    name="Shut Down Competitors",
    description="DMCA takedowns and frivolous lawsuits against other artists.",
    base_cost=10_000,
    duration_ms=90_000,
    income_multiplier=3.5,
    fan_multiplier=0.8,
    min_phase=2,
)

EXCLUSIVE_DEALS = BoostDef(
    id="exclusive_deals",
    name="Exclusive Retailer Deals",
    description="Force fans to shop at specific stores for different bonus tracks.",
    base_cost=7_500,
    duration_ms=60_000,
    income_multiplier=3.0,
    fan_multiplier=1.5,
    min_phase=2,
)

# ── Phase 3: tour exploitation ───────────────────────────────────

SCALP_RECORDS = BoostDef(
    id="scalp_records",
    name="Scalp Your Own Records",
    description="Buy your own limited releases and resell at markup. Peak capitalism.",
    base_cost=25_000,
    duration_ms=120_000,
    income_multiplier=5.0,
    fan_multiplier=0.5,
    min_phase=3,
)

LIMIT_TICKETS = BoostDef(
    id="limit_tickets",
    name="Artificial Ticket Scarcity",
    description="Hold back tickets to create false demand and urgency.",
    base_cost=50_000,
    duration_ms=90_000,
    income_multiplier=4.5,
    fan_multiplier=1.1,
    min_phase=3,
)

SCALP_TICKETS = BoostDef(
    id="scalp_tickets",
    name="Scalp Your Own Tickets",
    description="Partner with scalpers to resell your own tickets at 10x markup.",
    base_cost=100_000,
    duration_ms=120_000,
    income_multiplier=6.0,
    fan_multiplier=0.3,
    min_phase=3,
)

FOMO_MARKETING = BoostDef(
    id="fomo_marketing",
    name="FOMO Marketing",
    description='"Last chance ever" claims and countdown timers. Repeat monthly.',
    base_cost=75_000,
    duration_ms=60_000,
    income_multiplier=3.5,
    fan_multiplier=2.5,
    min_phase=3,
)

# ── Phase 4: platform exploitation ───────────────────────────────

DYNAMIC_PRICING = BoostDef(
    id="dynamic_pricing",
    name="Dynamic Pricing",
    description="Surge pricing for your own shows on your own platform. Beautiful synergy.",
    base_cost=250_000,
    duration_ms=180_000,
    income_multiplier=8.0,
    fan_multiplier=0.2,
    min_phase=4,
)


# ── All boosts registry ──────────────────────────────────────────

ALL_BOOSTS: dict[str, BoostDef] = {b.id: b for b in [
    BOT_STREAMS,
    PLAYLIST_PLACEMENT,
    SOCIAL_MEDIA,
    LIMITED_VARIANTS,
    SHUT_DOWN_COMPETITORS,
    EXCLUSIVE_DEALS,
    SCALP_RECORDS,
    LIMIT_TICKETS,
    SCALP_TICKETS,
    FOMO_MARKETING,
    DYNAMIC_PRICING,
]}

# Boost that flags running tours as scarce
SCARCITY_BOOST_ID = LIMIT_TICKETS.id
