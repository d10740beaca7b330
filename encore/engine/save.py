"""Save/load — persists the game to disk with a rolling backup.

Layout under the save directory (``~/.encore`` by default)::

    save.json     current save
    backup.json   the previous save.json, copied before every write

A save file is ``{"state": {...}, "saved_at": <ms>, "version": "..."}``.
Loading validates the required fields and falls back to the backup, then
to ``None`` (start fresh).
"""

from __future__ import annotations

import json
import logging
import math
import shutil
from dataclasses import asdict
from pathlib import Path
from typing import Any

from encore.data.balance import BALANCE
from encore.engine.game_state import (
    ActiveBoost,
    Album,
    Artist,
    GameState,
    LegacyArtist,
    Platform,
    QueuedSong,
    Song,
    Tour,
    UnlockedSystems,
    now_ms,
)

logger = logging.getLogger(__name__)

SAVE_DIR = Path.home() / ".encore"
SAVE_FILE_NAME = "save.json"
BACKUP_FILE_NAME = "backup.json"


class InvalidPersistedState(ValueError):
    """A save payload failed structural validation."""


class SaveError(OSError):
    """Writing the save file failed."""


# ── Serialisation helpers ────────────────────────────────────────


def state_to_dict(state: GameState) -> dict:
    s = state
    return {
        "money": s.money,
        "fans": s.fans,
        "songs": [asdict(song) for song in s.songs],
        "phase": s.phase,
        "industry_control": s.industry_control,
        "current_artist": asdict(s.current_artist),
        "legacy_artists": [asdict(a) for a in s.legacy_artists],
        "song_queue": [asdict(q) for q in s.song_queue],
        "trending_genre": s.trending_genre,
        "trend_discovered_at": s.trend_discovered_at,
        "tech_tier": s.tech_tier,
        "tech_sub_tier": s.tech_sub_tier,
        "upgrades": dict(s.upgrades),
        "active_boosts": [asdict(b) for b in s.active_boosts],
        "boost_usage": dict(s.boost_usage),
        "albums": [asdict(a) for a in s.albums],
        "last_album_release_at": s.last_album_release_at,
        "last_album_song_count": s.last_album_song_count,
        "tours": [asdict(t) for t in s.tours],
        "platforms": [asdict(p) for p in s.platforms],
        "prestige_count": s.prestige_count,
        "experience_multiplier": s.experience_multiplier,
        "unlocked": s.unlocked.as_dict(),
        "last_update": s.last_update,
        "created_at": s.created_at,
        "version": s.version,
        "next_id": s.next_id,
    }


def dict_to_state(d: dict) -> GameState:
    """Rebuild a GameState from ``state_to_dict`` output. Call ``validate_state`` first."""
    unlocked_d = d.get("unlocked", {})
    unlocked = UnlockedSystems(**{
        name: bool(unlocked_d.get(name, False)) for name in UnlockedSystems().as_dict()
    })
    return GameState(
        money=d["money"],
        fans=d["fans"],
        songs=[Song(**song) for song in d["songs"]],
        phase=d["phase"],
        industry_control=d["industry_control"],
        current_artist=Artist(**d["current_artist"]),
        legacy_artists=[LegacyArtist(**a) for a in d["legacy_artists"]],
        song_queue=[QueuedSong(**q) for q in d["song_queue"]],
        trending_genre=d.get("trending_genre"),
        trend_discovered_at=d.get("trend_discovered_at"),
        tech_tier=d["tech_tier"],
        tech_sub_tier=d["tech_sub_tier"],
        upgrades=dict(d["upgrades"]),
        active_boosts=[ActiveBoost(**b) for b in d["active_boosts"]],
        boost_usage=dict(d.get("boost_usage", {})),
        albums=[Album(**a) for a in d["albums"]],
        last_album_release_at=d.get("last_album_release_at"),
        last_album_song_count=d.get("last_album_song_count", 0),
        tours=[Tour(**t) for t in d["tours"]],
        platforms=[Platform(**p) for p in d["platforms"]],
        prestige_count=d["prestige_count"],
        experience_multiplier=d["experience_multiplier"],
        unlocked=unlocked,
        last_update=d["last_update"],
        created_at=d["created_at"],
        version=d["version"],
        next_id=d.get("next_id", 1),
    )


# ── Validation ───────────────────────────────────────────────────

_NUMBER_FIELDS = (
    "money", "fans", "phase", "industry_control", "tech_tier", "tech_sub_tier",
    "prestige_count", "experience_multiplier", "last_update", "created_at",
)
_LIST_FIELDS = (
    "songs", "legacy_artists", "song_queue", "active_boosts", "albums", "tours", "platforms",
)
_ARTIST_FIELDS = ("songs", "fans", "peak_fans", "created_at")
_OPTIONAL_NUMBER_FIELDS = ("trend_discovered_at", "last_album_release_at")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def validate_state(state: Any) -> None:
    """Raise InvalidPersistedState unless ``state`` looks like a serialised GameState."""
    if not isinstance(state, dict):
        raise InvalidPersistedState("state is not an object")
    for name in _NUMBER_FIELDS:
        if not _is_number(state.get(name)):
            raise InvalidPersistedState(f"{name} must be a finite number")
    if not isinstance(state.get("version"), str):
        raise InvalidPersistedState("version must be a string")
    for name in _LIST_FIELDS:
        if not isinstance(state.get(name), list):
            raise InvalidPersistedState(f"{name} must be a list")

    artist = state.get("current_artist")
    if not isinstance(artist, dict) or not isinstance(artist.get("name"), str):
        raise InvalidPersistedState("current_artist is malformed")
    for name in _ARTIST_FIELDS:
        if not _is_number(artist.get(name)):
            raise InvalidPersistedState(f"current_artist.{name} must be a finite number")

    if not isinstance(state.get("upgrades"), dict):
        raise InvalidPersistedState("upgrades must be an object")
    unlocked = state.get("unlocked")
    if not isinstance(unlocked, dict):
        raise InvalidPersistedState("unlocked must be an object")
    for name in UnlockedSystems().as_dict():
        if not isinstance(unlocked.get(name), bool):
            raise InvalidPersistedState(f"unlocked.{name} must be a boolean")

    genre = state.get("trending_genre")
    if genre is not None and not isinstance(genre, str):
        raise InvalidPersistedState("trending_genre must be a string or null")
    for name in _OPTIONAL_NUMBER_FIELDS:
        value = state.get(name)
        if value is not None and not _is_number(value):
            raise InvalidPersistedState(f"{name} must be a finite number or null")
    if not _is_count(state.get("last_album_song_count", 0)):
        raise InvalidPersistedState("last_album_song_count must be a non-negative integer")
    if not _is_count(state.get("next_id", 1)):
        raise InvalidPersistedState("next_id must be a non-negative integer")
    usage = state.get("boost_usage", {})
    if not isinstance(usage, dict) or not all(
        isinstance(k, str) and _is_count(v) for k, v in usage.items()
    ):
        raise InvalidPersistedState("boost_usage must map boost ids to counts")

    max_phase = max(p for p, _ in BALANCE.progression.phases)
    if not 1 <= state["phase"] <= max_phase:
        raise InvalidPersistedState(f"phase {state['phase']} out of range")
    if not 1 <= state["tech_tier"] <= 7:
        raise InvalidPersistedState(f"tech_tier {state['tech_tier']} out of range")
    if not 0 <= state["tech_sub_tier"] <= 2:
        raise InvalidPersistedState(f"tech_sub_tier {state['tech_sub_tier']} out of range")


def validate_save(data: Any) -> None:
    """Validate a whole save file payload (wrapper plus state)."""
    if not isinstance(data, dict):
        raise InvalidPersistedState("save is not an object")
    if not _is_number(data.get("saved_at")) or not isinstance(data.get("version"), str):
        raise InvalidPersistedState("save header is malformed")
    validate_state(data.get("state"))


def parse_save(text: str) -> GameState:
    """Parse and validate save JSON without touching disk. Raises InvalidPersistedState."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidPersistedState(f"not valid JSON: {exc}") from exc
    validate_save(data)
    try:
        return dict_to_state(data["state"])
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidPersistedState(f"state records are malformed: {exc}") from exc


# ── Public API ───────────────────────────────────────────────────


def _paths(save_dir: Path | None) -> tuple[Path, Path]:
    base = save_dir or SAVE_DIR
    return base / SAVE_FILE_NAME, base / BACKUP_FILE_NAME


def save_game(state: GameState, save_dir: Path | None = None, now: float | None = None) -> Path:
    """Write the save, keeping the previous one as backup. Raises SaveError."""
    save_file, backup_file = _paths(save_dir)
    payload = {
        "state": state_to_dict(state),
        "saved_at": now if now is not None else now_ms(),
        "version": BALANCE.version,
    }
    try:
        save_file.parent.mkdir(parents=True, exist_ok=True)
        if save_file.exists():
            try:
                shutil.copyfile(save_file, backup_file)
            except OSError:
                logger.warning("Could not write backup %s, saving anyway", backup_file)
        save_file.write_text(json.dumps(payload))
    except OSError as exc:
        raise SaveError(f"could not write {save_file}: {exc}") from exc
    return save_file


def _load_file(path: Path) -> GameState:
    try:
        text = path.read_text()
    except OSError as exc:
        raise InvalidPersistedState(f"could not read {path}: {exc}") from exc
    return parse_save(text)


def load_backup(save_dir: Path | None = None) -> GameState | None:
    _, backup_file = _paths(save_dir)
    if not backup_file.exists():
        logger.warning("No backup save found")
        return None
    try:
        state = _load_file(backup_file)
    except InvalidPersistedState as exc:
        logger.error("Backup save is also invalid: %s", exc)
        return None
    logger.info("Loaded backup save")
    return state


def load_game(save_dir: Path | None = None) -> GameState | None:
    """Load the save. Returns None if none exists or nothing valid remains."""
    save_file, _ = _paths(save_dir)
    if not save_file.exists():
        return None
    try:
        return _load_file(save_file)
    except InvalidPersistedState as exc:
        logger.warning("Save file is invalid (%s), trying backup", exc)
        return load_backup(save_dir)


def delete_save(save_dir: Path | None = None) -> None:
    """Remove both the save and its backup."""
    for path in _paths(save_dir):
        try:
            path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not delete %s", path)


def export_save(save_dir: Path | None = None) -> str | None:
    """Return the current save as pretty-printed JSON, or None if absent/invalid."""
    save_file, _ = _paths(save_dir)
    if not save_file.exists():
        return None
    try:
        data = json.loads(save_file.read_text())
        validate_save(data)
    except (OSError, json.JSONDecodeError, InvalidPersistedState) as exc:
        logger.error("Cannot export save: %s", exc)
        return None
    return json.dumps(data, indent=2)


def import_save(text: str, save_dir: Path | None = None) -> GameState | None:
    """Validate ``text`` and install it as the current save (old save → backup)."""
    try:
        state = parse_save(text)
    except InvalidPersistedState as exc:
        logger.error("Imported save is invalid: %s", exc)
        return None
    save_file, backup_file = _paths(save_dir)
    try:
        save_file.parent.mkdir(parents=True, exist_ok=True)
        if save_file.exists():
            shutil.copyfile(save_file, backup_file)
        save_file.write_text(text)
    except OSError as exc:
        raise SaveError(f"could not write {save_file}: {exc}") from exc
    return state
