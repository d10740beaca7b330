"""Platform definitions — industry infrastructure the player can buy outright.

Platforms pay a fixed passive income forever and add a fixed share to
industry control. Later platforms require earlier ones.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformDef:
    """Definition of a purchasable platform."""

    id: str
    type: str
    name: str
    description: str
    cost: float
    income_per_second: float
    control_contribution: float
    prerequisites: tuple[str, ...] = ()


ALL_PLATFORMS: dict[str, PlatformDef] = {p.id: p for p in [
    PlatformDef(
        id="streaming_service",
        type="streaming",
        name="Major Streaming Platform",
        description="Own a major music streaming service. Every stream pays YOU.",
        cost=100_000_000,
        income_per_second=50_000,
        control_contribution=15,
    ),
    PlatformDef(
        id="algorithm_control",
        type="algorithm",
        name="Algorithm Control",
        description="Control the recommendation algorithms. Decide what billions hear.",
        cost=250_000_000,
        income_per_second=100_000,
        control_contribution=20,
        prerequisites=("streaming_service",),
    ),
    PlatformDef(
        id="ticketing_monopoly",
        type="ticketing",
        name="Ticketing Monopoly",
        description="Own the dominant ticketing platform. Every ticket pays a fee.",
        cost=150_000_000,
        income_per_second=75_000,
        control_contribution=12,
    ),
    PlatformDef(
        id="venue_chain",
        type="venue",
        name="Global Venue Chain",
        description="Own venues worldwide. Every concert happens on your terms.",
        cost=200_000_000,
        income_per_second=80_000,
        control_contribution=10,
        prerequisites=("ticketing_monopoly",),
    ),
    PlatformDef(
        id="billboard_charts",
        type="billboard",
        name="Billboard Charts",
        description='Own the most influential charts. Decide what counts as a "hit."',
        cost=500_000_000,
        income_per_second=200_000,
        control_contribution=18,
        prerequisites=("streaming_service", "algorithm_control"),
    ),
    PlatformDef(
        id="grammy_awards",
        type="grammys",
        name="The Recording Academy",
        description="Own the Grammys. Control industry recognition and legacy.",
        cost=750_000_000,
        income_per_second=300_000,
        control_contribution=15,
        prerequisites=("billboard_charts",),
    ),
    PlatformDef(
        id="training_data_monopoly",
        type="training_data",
        name="AI Training Data Monopoly",
        description="Every song ever made trains your models. Nobody else gets the data.",
        cost=1_000_000_000,
        income_per_second=500_000,
        control_contribution=25,
        prerequisites=("algorithm_control",),
    ),
]}
