"""Encore Web — Flask server that wraps the game engine.

Exposes a JSON API for game actions. Unlike the TUI, the engine ticks on
its own background thread; request handlers read snapshots and call the
engine's locked mutation methods.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from flask import Flask, jsonify, request

from encore.data.balance import BALANCE
from encore.engine.boosts import get_boost_cost, list_available_boosts
from encore.engine.control import control_breakdown, display_control, has_won
from encore.engine.economy import total_income_rate
from encore.engine.engine import GameEngine, disk_saver, run_offline_progress
from encore.engine.fans import total_fan_rate
from encore.engine.game_state import GameState, new_game, now_ms
from encore.engine.infrastructure import list_available_platforms, platform_progress
from encore.engine.results import ActionResult, Failure
from encore.engine.save import (
    InvalidPersistedState,
    SaveError,
    export_save,
    import_save,
    load_game,
    parse_save,
    save_game,
    state_to_dict,
)
from encore.engine.tech import list_available_upgrades, tech_summary
from encore.engine.tours import tour_stats

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

app = Flask(__name__)

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_engine: GameEngine | None = None
_save_dir: Path | None = None
_run_thread: bool = True


def configure(save_dir: Path | None = None, run_thread: bool = True) -> None:
    """Set where saves live and whether the engine ticks in the background.

    Drops any running session so the next request starts from disk.
    """
    global _engine, _save_dir, _run_thread
    with _lock:
        if _engine is not None:
            if _engine.running:
                _engine.stop()
            else:
                _engine.save()
        _engine = None
        _save_dir = save_dir
        _run_thread = run_thread


def _ensure_game() -> GameEngine:
    """Initialise the game if not yet started."""
    global _engine
    with _lock:
        if _engine is not None:
            return _engine
        now = now_ms()
        saved = load_game(_save_dir)
        if saved is not None:
            credited = run_offline_progress(saved, now)
            logger.info("Resumed saved game (%.0f ms offline progress)", credited)
            state = saved
        else:
            state = new_game(now)
            logger.info("Started a new game")
        _engine = GameEngine(state)
        _engine.on_save(disk_saver(_save_dir))
        if _run_thread:
            _engine.start()
        return _engine


def _state_json(engine: GameEngine) -> dict:
    def build(state: GameState) -> dict:
        now = engine.clock()
        data = state_to_dict(state)
        data["income_per_second"] = total_income_rate(state, now)
        data["fans_per_second"] = total_fan_rate(state, now)
        data["industry_control_display"] = display_control(state)
        data["control_breakdown"] = control_breakdown(state)
        data["won"] = has_won(state)
        data["tech"] = tech_summary(state)
        data["tour_stats"] = tour_stats(state)
        data["platform_progress"] = platform_progress(state)
        data["available_upgrades"] = [
            {"id": u.id, "name": u.name, "cost": u.cost, "description": u.description}
            for u in list_available_upgrades(state)
        ]
        data["available_boosts"] = [
            {"id": b.id, "name": b.name, "cost": get_boost_cost(state, b.id),
             "duration_ms": b.duration_ms, "income_multiplier": b.income_multiplier,
             "fan_multiplier": b.fan_multiplier}
            for b in list_available_boosts(state)
        ]
        data["available_platforms"] = [
            {"id": p.id, "name": p.name, "cost": p.cost}
            for p in list_available_platforms(state)
        ]
        return data

    return engine.apply(build)


_FAILURE_STATUS = {
    Failure.NOT_FOUND: 404,
    Failure.PRECONDITION_NOT_MET: 409,
    Failure.INSUFFICIENT_FUNDS: 409,
}


def _action_response(engine: GameEngine, result: ActionResult):
    data = {
        "ok": result.ok,
        "failure": result.failure.name if result.failure else None,
        "message": result.message,
        "state": _state_json(engine),
    }
    status = 200 if result.ok else _FAILURE_STATUS[result.failure]
    return jsonify(data), status


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@app.route("/")
def index():
    return jsonify({
        "name": "encore",
        "version": BALANCE.version,
        "endpoints": sorted(str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/api")),
    })


@app.route("/api/state")
def api_state():
    return jsonify(_state_json(_ensure_game()))


@app.route("/api/action/songs", methods=["POST"])
def action_songs():
    engine = _ensure_game()
    payload = request.get_json(silent=True) or {}
    try:
        count = int(payload.get("count", 1))
    except (TypeError, ValueError):
        return jsonify({"ok": False, "message": "count must be an integer"}), 400
    return _action_response(engine, engine.enqueue_songs(count))


@app.route("/api/action/upgrade/<upgrade_id>", methods=["POST"])
def action_upgrade(upgrade_id: str):
    engine = _ensure_game()
    return _action_response(engine, engine.purchase_upgrade(upgrade_id))


@app.route("/api/action/boost/<boost_id>", methods=["POST"])
def action_boost(boost_id: str):
    engine = _ensure_game()
    return _action_response(engine, engine.activate_boost(boost_id))


@app.route("/api/action/trend", methods=["POST"])
def action_trend():
    engine = _ensure_game()
    return _action_response(engine, engine.research_trend())


@app.route("/api/action/tour", methods=["POST"])
def action_tour():
    engine = _ensure_game()
    return _action_response(engine, engine.start_tour())


@app.route("/api/action/platform/<platform_id>", methods=["POST"])
def action_platform(platform_id: str):
    engine = _ensure_game()
    return _action_response(engine, engine.purchase_platform(platform_id))


@app.route("/api/action/rerelease/<album_id>", methods=["POST"])
def action_rerelease(album_id: str):
    engine = _ensure_game()
    return _action_response(engine, engine.rerelease_album(album_id))


@app.route("/api/action/prestige", methods=["POST"])
def action_prestige():
    engine = _ensure_game()
    return _action_response(engine, engine.prestige())


@app.route("/api/action/save", methods=["POST"])
def action_save():
    engine = _ensure_game()
    try:
        path = engine.apply(save_game, _save_dir)
    except SaveError:
        logger.exception("Manual save failed")
        return jsonify({"saved": False}), 500
    return jsonify({"saved": True, "path": str(path)})


@app.route("/api/export")
def api_export():
    text = export_save(_save_dir)
    if text is None:
        return jsonify({"ok": False, "message": "No valid save to export"}), 404
    return app.response_class(text, mimetype="application/json")


@app.route("/api/import", methods=["POST"])
def api_import():
    text = request.get_data(as_text=True)
    try:
        parse_save(text)
    except InvalidPersistedState as exc:
        logger.warning("Rejected imported save: %s", exc)
        return jsonify({"ok": False, "message": "Invalid save file"}), 400

    # Stopping the session saves it, so the import backs up the latest state
    configure(_save_dir, _run_thread)
    try:
        import_save(text, _save_dir)
    except SaveError:
        logger.exception("Import failed")
        return jsonify({"ok": False, "message": "Could not write save file"}), 500
    return jsonify({"ok": True, "state": _state_json(_ensure_game())})


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False, save_dir: Path | None = None) -> None:
    """Start the Flask development server."""
    configure(save_dir)
    try:
        app.run(host=host, port=port, debug=debug, use_reloader=False)
    finally:
        if _engine is not None and _engine.running:
            _engine.stop()
