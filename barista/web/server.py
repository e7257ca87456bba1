"""Barista Web — Flask server that wraps the Python game engine.

Serves a single-page game UI and exposes a JSON API for game actions.
Production ticks run on a background ProductionLoop; the engine
serializes them with request-driven taps and purchases.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from flask import Flask, jsonify, render_template

from barista.data.upgrades import UpgradeKind
from barista.engine.economy import format_number
from barista.engine.engine import GameEngine
from barista.engine.scheduler import ProductionLoop

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Flask app
# ---------------------------------------------------------------------------

_DIR = Path(__file__).parent
app = Flask(__name__, template_folder=str(_DIR / "templates"))

# Disable static file caching during development
app.config["SEND_FILE_MAX_AGE_DEFAULT"] = 0
app.config["TEMPLATES_AUTO_RELOAD"] = True

# ---------------------------------------------------------------------------
# In-memory game session (single-player)
# ---------------------------------------------------------------------------

_lock = threading.Lock()
_engine: GameEngine | None = None
_loop: ProductionLoop | None = None


def _ensure_game() -> GameEngine:
    """Initialise the game and its production loop if not yet started."""
    global _engine, _loop
    with _lock:
        if _engine is None:
            _engine = GameEngine()
            _loop = ProductionLoop(_engine.tick)
            _loop.start()
            logger.info("new game started")
        return _engine


def _stop_game() -> None:
    global _loop
    with _lock:
        if _loop is not None:
            _loop.stop()
            _loop = None


def _parse_kind(kind: str) -> UpgradeKind | None:
    try:
        return UpgradeKind(kind)
    except ValueError:
        return None


def _state_json(engine: GameEngine) -> dict:
    """Build the JSON blob sent to the frontend."""
    s = engine.snapshot()

    upgrades: dict[str, list[dict]] = {}
    for kind in UpgradeKind:
        upgrades[kind.value] = [
            {
                "index": v.index,
                "id": v.id,
                "name": v.name,
                "owned": v.owned,
                "cost": format_number(v.current_cost),
                "cost_raw": v.current_cost,
                "can_afford": s.coffees >= v.current_cost,
            }
            for v in s.upgrades[kind]
        ]

    return {
        "coffees": format_number(s.coffees),
        "coffees_raw": s.coffees,
        "coffees_per_tap": s.coffees_per_tap,
        "coffees_per_second": s.coffees_per_second,
        "global_multiplier": s.global_multiplier,
        "per_tap": f"{s.coffees_per_tap * s.global_multiplier:.1f}",
        "per_second": f"{s.coffees_per_second * s.global_multiplier:.1f}",
        "multiplier": f"{s.global_multiplier:.1f}x",
        "upgrades": upgrades,
        "stats": {
            "total_taps": s.stats.total_taps,
            "total_ticks": s.stats.total_ticks,
            "total_earned": format_number(s.stats.total_coffees_earned),
            "total_spent": format_number(s.stats.total_coffees_spent),
            "purchases": s.stats.purchases,
            "run_duration": s.stats.run_duration_s,
        },
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/")
def index():
    return render_template("game.html")


@app.route("/api/state")
def api_state():
    engine = _ensure_game()
    return jsonify(_state_json(engine))


@app.route("/api/action/tap", methods=["POST"])
def action_tap():
    engine = _ensure_game()
    earned = engine.tap()
    data = _state_json(engine)
    data["earned"] = earned
    return jsonify(data)


@app.route("/api/action/buy/<kind>/<int:idx>", methods=["POST"])
def action_buy(kind: str, idx: int):
    engine = _ensure_game()
    upgrade_kind = _parse_kind(kind)
    if upgrade_kind is None:
        return jsonify({"error": f"Unknown upgrade kind: {kind}"}), 404
    if idx >= len(engine.state.upgrades_of(upgrade_kind)):
        return jsonify({"error": f"No {kind} upgrade at index {idx}"}), 404

    result = engine.purchase(upgrade_kind, idx)
    data = _state_json(engine)
    data["purchase_result"] = result
    return jsonify(data)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run_server(host: str = "127.0.0.1", port: int = 5000, debug: bool = False) -> None:
    """Start the Flask development server."""
    _ensure_game()
    try:
        app.run(host=host, port=port, debug=debug, use_reloader=False)
    finally:
        _stop_game()
