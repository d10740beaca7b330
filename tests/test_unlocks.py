"""Tests for unlock gates and phase progression."""

from encore.engine.engine import run_pipeline
from encore.engine.game_state import Album, GameState, Song, Tour
from encore.engine.unlocks import check_phase, check_unlocks, gate_open


def songs(count: int) -> list[Song]:
    return [
        Song(id=f"s{i}", name="S", genre="pop", created_at=0, income_per_second=0, fan_rate=0)
        for i in range(count)
    ]


# ── Flags ────────────────────────────────────────────────────────────────────

def test_flags_require_granting_upgrade():
    state = GameState()
    assert check_unlocks(state) == []
    state.upgrades["tier3_basic"] = 0
    assert sorted(check_unlocks(state)) == ["gpu", "prestige"]
    # Already latched: nothing new
    assert check_unlocks(state) == []


def test_tours_need_albums_and_fans():
    state = GameState()
    state.upgrades["tier3_advanced"] = 0
    assert not gate_open(state, "tours")

    state.albums = [Album(f"a{i}", "A", 10, 0, 0, 1) for i in range(10)]
    state.fans = 99_999
    check_unlocks(state)
    assert not state.unlocked.tours

    state.fans = 100_000
    assert "tours" in check_unlocks(state)


def test_platforms_need_completed_tours_and_fans():
    state = GameState(fans=1_000_000)
    state.upgrades["tier6_basic"] = 0
    state.tours = [Tour(f"t{i}", "T", 0, 0, completed_at=1) for i in range(49)]
    check_unlocks(state)
    assert not state.unlocked.platform_ownership

    state.tours.append(Tour("t49", "T", 0, 0, completed_at=1))
    check_unlocks(state)
    assert state.unlocked.platform_ownership


def test_flags_never_turn_off():
    state = GameState(fans=100_000)
    state.upgrades["tier3_advanced"] = 0
    state.albums = [Album(f"a{i}", "A", 10, 0, 0, 1) for i in range(10)]
    check_unlocks(state)
    assert state.unlocked.tours

    # Conditions no longer hold, flag stays
    state.fans = 0
    state.albums = []
    state.upgrades = {}
    for i in range(1, 11):
        run_pipeline(state, 100, now=i * 100)
    assert state.unlocked.tours


# ── Phases ───────────────────────────────────────────────────────────────────

def test_phase_advances_when_requirements_met():
    state = GameState(fans=1_000)
    state.songs = songs(10)
    state.tech_tier = 2
    assert check_phase(state) == 2
    assert state.phase == 2


def test_phase_can_jump_several_steps():
    state = GameState(fans=100_000)
    state.songs = songs(200)
    state.tech_tier = 6
    assert check_phase(state) == 4


def test_phase_never_goes_back():
    state = GameState(fans=1_000)
    state.songs = songs(10)
    state.tech_tier = 2
    check_phase(state)
    state.songs = []
    state.fans = 0
    assert check_phase(state) is None
    assert state.phase == 2
