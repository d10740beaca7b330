"""Tests for tech upgrades and trend research."""

import random

import pytest

from encore.data.upgrades import ALL_UPGRADES
from encore.engine.game_state import GameState
from encore.engine.results import Failure
from encore.engine.tech import (
    can_purchase_upgrade,
    compute_tech_tier,
    generation_time_ms,
    list_available_upgrades,
    purchase_upgrade,
    song_cost,
    tech_summary,
)
from encore.engine.trends import research_trend, trend_remaining_ms

TIER1 = ("tier1_basic", "tier1_improved", "tier1_advanced")


def buy_all(state: GameState, ids) -> None:
    for uid in ids:
        assert purchase_upgrade(state, uid, now=0), uid


# ── Upgrade table ────────────────────────────────────────────────────────────

def test_table_has_seven_tiers_of_three():
    assert len(ALL_UPGRADES) == 21
    for tier in range(1, 8):
        assert sum(1 for u in ALL_UPGRADES.values() if u.tier == tier) == 3


def test_compute_tech_tier():
    assert compute_tech_tier(set()) == (1, 0)
    assert compute_tech_tier({"tier1_basic"}) == (1, 0)
    assert compute_tech_tier(set(TIER1)) == (1, 2)
    assert compute_tech_tier({*TIER1, "tier2_basic"}) == (2, 0)


# ── Purchases ────────────────────────────────────────────────────────────────

def test_purchase_updates_tier_and_effects():
    state = GameState(money=1_000)
    buy_all(state, TIER1)
    assert state.money == pytest.approx(1_000 - 260)
    assert (state.tech_tier, state.tech_sub_tier) == (1, 2)
    assert song_cost(state) == 1
    assert generation_time_ms(state) == 15_000


def test_purchase_requires_prerequisites():
    state = GameState(money=1_000_000)
    result = purchase_upgrade(state, "tier2_basic", now=0)
    assert result.failure is Failure.PRECONDITION_NOT_MET
    assert "tier1_advanced" in result.message
    assert state.money == 1_000_000


def test_purchase_twice_rejected():
    state = GameState(money=1_000)
    buy_all(state, ["tier1_basic"])
    assert purchase_upgrade(state, "tier1_basic", now=0).failure is Failure.PRECONDITION_NOT_MET


def test_unknown_upgrade():
    assert purchase_upgrade(GameState(money=1e12), "tier9_basic", now=0).failure is Failure.NOT_FOUND


def test_upgrade_unlocks_flag_immediately():
    state = GameState(money=1_000)
    buy_all(state, TIER1)
    assert state.unlocked.trend_research


def test_available_upgrades_walk_the_chain():
    state = GameState(money=1_000)
    assert [u.id for u in list_available_upgrades(state)] == ["tier1_basic"]
    buy_all(state, ["tier1_basic"])
    assert [u.id for u in list_available_upgrades(state)] == ["tier1_improved"]


def test_tech_summary():
    state = GameState(money=1_000)
    buy_all(state, ["tier1_basic"])
    summary = tech_summary(state)
    assert summary["purchased"] == 1
    assert summary["total"] == 21
    assert summary["next_upgrade"] == "tier1_improved"
    assert summary["tier_name"] == "Third-party Web Services"


# ── Trend research ───────────────────────────────────────────────────────────

def test_trend_research_locked():
    state = GameState(money=100_000)
    assert research_trend(state, now=0).failure is Failure.PRECONDITION_NOT_MET


def test_trend_research_picks_a_new_genre():
    state = GameState(money=100_000)
    state.unlocked.trend_research = True
    state.trending_genre = "pop"
    result = research_trend(state, now=5_000, rng=random.Random(3))
    assert result
    assert state.trending_genre != "pop"
    assert state.trend_discovered_at == 5_000
    assert state.money == 90_000
    assert trend_remaining_ms(state, 5_000) == 300_000


def test_trend_research_costs_money():
    state = GameState(money=9_999)
    state.unlocked.trend_research = True
    assert research_trend(state, now=0).failure is Failure.INSUFFICIENT_FUNDS
    assert state.trending_genre is None


def test_can_purchase_upgrade():
    state = GameState(money=100)
    assert can_purchase_upgrade(state, "tier1_basic")
    assert not can_purchase_upgrade(state, "tier1_improved")
    assert not can_purchase_upgrade(state, "tier9_basic")
