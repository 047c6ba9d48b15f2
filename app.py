from __future__ import annotations

import atexit
import logging
import os
import sys
import threading
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, send_from_directory

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        Config,
        GameSession,
        RoundOutcome,
        RoundSnapshot,
        CellOccupiedError,
        MoveError,
        format_clock,
        cell_from_point,
    )
except ImportError:
    from game import (  # type: ignore
        Config,
        GameSession,
        RoundOutcome,
        RoundSnapshot,
        CellOccupiedError,
        MoveError,
        format_clock,
        cell_from_point,
    )

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)

_session: Optional[GameSession] = None
_session_lock = threading.Lock()


def get_session() -> GameSession:
    """Returns the process-wide session, creating it (and its countdown) on first use."""
    global _session
    with _session_lock:
        if _session is None:
            _session = GameSession(Config)
            atexit.register(_session.close)
            app.logger.info("Started game session (clock mode: %s)", Config.CLOCK_MODE)
        return _session


def set_session(session: Optional[GameSession]) -> Optional[GameSession]:
    """Swaps the process-wide session (tests use this to inject a manual clock). Returns the old one."""
    global _session
    with _session_lock:
        old, _session = _session, session
    return old


def _scores_to_json(scores: Dict[int, int]) -> Dict[str, int]:
    return {str(pid): int(score) for pid, score in scores.items()}


def state_to_json(s: RoundSnapshot) -> Dict[str, Any]:
    return {
        "grid": [[int(cell) for cell in column] for column in s.grid],
        "activePlayer": int(s.active_player),
        "timeLeft": int(s.time_remaining),
        "clock": format_clock(s.time_remaining),
        "round": int(s.round_number),
        "scores": _scores_to_json(s.scores),
    }


def outcome_to_json(o: Optional[RoundOutcome]) -> Optional[Dict[str, Any]]:
    if o is None:
        return None
    return {
        "winner": o.winner,
        "reason": o.reason,
        "scores": _scores_to_json(o.scores),
        "round": int(o.round_number),
    }


def _body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    return body if isinstance(body, dict) else {}


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


@app.get("/static/<path:filename>")
def static_files(filename: str) -> Any:
    return send_from_directory(app.static_folder, filename)


# ---------- Game API (used by main.js) ----------

@app.get("/api/state")
def api_state() -> Any:
    session = get_session()
    return jsonify({
        "ok": True,
        "state": state_to_json(session.view()),
        "lastOutcome": outcome_to_json(session.last_outcome),
        "clientClock": session.client_clock,
    })


@app.post("/api/move")
def api_move() -> Any:
    body = _body()
    try:
        if "column" in body or "row" in body:
            column = body["column"]
            row = body["row"]
        else:
            # Raw pointer position on the client surface
            column, row = cell_from_point(
                float(body["x"]), float(body["y"]), float(body["width"]), float(body["height"])
            )
    except KeyError:
        return jsonify({"ok": False, "error": "column and row (or x, y, width, height) required"}), 400
    except (TypeError, ValueError) as e:
        return jsonify({"ok": False, "error": f"bad pointer position: {e}"}), 400
    session = get_session()
    try:
        outcome = session.move(column, row)
    except CellOccupiedError as e:
        return jsonify({"ok": False, "error": str(e), "state": state_to_json(session.view())}), 409
    except MoveError as e:
        return jsonify({"ok": False, "error": str(e), "state": state_to_json(session.view())}), 400
    return jsonify({
        "ok": True,
        "state": state_to_json(session.view()),
        "outcome": outcome_to_json(outcome),
    })


@app.post("/api/tick")
def api_tick() -> Any:
    body = _body()
    session = get_session()
    try:
        outcome = session.tick(body.get("times", 1))
    except RuntimeError as e:
        return jsonify({"ok": False, "error": str(e)}), 409
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    return jsonify({
        "ok": True,
        "state": state_to_json(session.view()),
        "outcome": outcome_to_json(outcome),
    })


@app.post("/api/new")
def api_new() -> Any:
    session = get_session()
    outcome = session.restart()
    return jsonify({
        "ok": True,
        "state": state_to_json(session.view()),
        "outcome": outcome_to_json(outcome),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT, datefmt=Config.LOG_DATEFMT)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    port = int(os.getenv("PORT", "5000"))
    # The reloader would start a second process with its own countdown thread
    app.run(host="127.0.0.1", port=port, debug=debug, use_reloader=False)
