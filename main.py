"""
main.py — AlgoVision Flask App
================================
JSON API in front of the trace generators and the playback engine.  A
renderer (browser, notebook, terminal) polls these routes and draws
`snapshot` + `code_line`; nothing here renders pixels.

Routes:
  GET  /api/algorithms         – registry cards incl. pseudocode
  GET  /api/graph/default      – the demo graph
  POST /api/selection          – choose algorithm / inputs (resets playback)
  POST /api/array/random       – fresh random array (resets playback)
  POST /api/array/<preset>     – current values "sorted" or "reversed"
  POST /api/graph/weight       – re-weight one edge of the session graph
  POST /api/graph/reset        – back to the demo graph
  GET  /api/trace              – full trace for the current selection
  GET  /api/state              – cursor, progress, current snapshot
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N
  POST /api/step/play          – toggle play/pause
  POST /api/step/tick          – one auto-advance tick while playing
  POST /api/step/reset         – back to step 0
  POST /api/config/speed       – ms, preset name or 1–10 level

State management:
  The Flask session holds only the Selection (as plain JSON) and the
  playback cursor: step, is_playing, speed_ms.  Traces are regenerated
  per request; generation is deterministic, so the same selection always
  yields the same trace and the cursor stays meaningful.  The client
  drives auto-play by calling /api/step/tick every `speed_ms`.
"""

import logging
import secrets

from flask import Flask, jsonify, request, session

from graph import Graph, create_default_graph
from algorithms import CATEGORIES, get_algorithm, list_algorithms
from algorithms.trace import TraceError
from engine import Player, Selection, build_trace, export, preset_array, random_array, speed_for_level
from engine.recorder import DEFAULT_ARRAY, DEFAULT_TARGET, MAX_ARRAY_SIZE
from engine.stepper import DEFAULT_SPEED_MS

log = logging.getLogger(__name__)


app = Flask(__name__)
app.config.update(
    DEFAULT_SPEED_MS=DEFAULT_SPEED_MS,
    MAX_ARRAY_SIZE=MAX_ARRAY_SIZE,
    DEFAULT_ARRAY=list(DEFAULT_ARRAY),
    DEFAULT_TARGET=DEFAULT_TARGET,
    LOG_LEVEL="INFO",
)
app.config.from_prefixed_env("ALGOVISION")
if not app.config.get("SECRET_KEY"):
    app.config["SECRET_KEY"] = secrets.token_hex(32)


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_graph() -> Graph:
    """Deserialise graph from session, or create default."""
    if "graph" not in session:
        session["graph"] = create_default_graph().to_dict()
    return Graph.from_dict(session["graph"])


def save_graph(graph: Graph):
    session["graph"] = graph.to_dict()


def get_selection() -> Selection:
    return Selection(
        algorithm=session.get("algorithm", "bubble_sort"),
        values=session.get("values", app.config["DEFAULT_ARRAY"]),
        target=session.get("target", app.config["DEFAULT_TARGET"]),
        graph=get_graph(),
        start=session.get("start", 0),
        end=session.get("end", 5),
    )


def save_selection(sel: Selection):
    set_state(
        algorithm=sel.algorithm,
        values=list(sel.values),
        target=sel.target,
        start=sel.start,
        end=sel.end,
    )
    save_graph(sel.graph)


def set_state(**kwargs):
    for k, v in kwargs.items():
        session[k] = v


def load_player() -> Player:
    """Rebuild the Player for the session's selection and restore its cursor."""
    trace  = build_trace(get_selection(), app.config["MAX_ARRAY_SIZE"])
    player = Player(trace, speed_ms=session.get("speed_ms", app.config["DEFAULT_SPEED_MS"]))
    player.jump_to(session.get("step", 0))
    if session.get("is_playing", False):
        player.play()
    return player


def save_player(player: Player):
    set_state(step=player.step, is_playing=player.is_playing, speed_ms=player.speed_ms)


def player_state(player: Player) -> dict:
    return {
        "algorithm":   player.trace.algorithm,
        "step":        player.step,
        "state":       player.state.value,
        "is_playing":  player.is_playing,
        "progress":    player.progress,
        "total_steps": player.total_steps,
        "speed":       player.speed_ms,
        "snapshot":    player.current.to_dict(),
        "code_line":   player.current_line,
    }


def apply_selection(sel: Selection):
    """Validate, store, and reset the cursor for a changed selection."""
    sel.validate(app.config["MAX_ARRAY_SIZE"])
    save_selection(sel)
    set_state(step=0, is_playing=False)
    player = load_player()
    log.info("selection changed: %s", sel.algorithm)
    info = get_algorithm(sel.algorithm)
    if "graph" in info.inputs and not info.supports_negative and sel.graph.has_negative_edges():
        log.warning("%s does not support negative edge weights; results may be wrong", info.label)
    return jsonify(player_state(player))


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(ValueError)
def handle_bad_input(err):
    # InvalidGraph is a ValueError too
    log.warning("rejected %s %s: %s", request.method, request.path, err)
    return jsonify({"error": str(err)}), 400


@app.errorhandler(TraceError)
def handle_trace_error(err):
    log.error("trace contract violated: %s", err)
    return jsonify({"error": str(err)}), 500


# ---------------------------------------------------------------------------
# API: Catalogue
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({
        "categories": list(CATEGORIES),
        "algorithms": [info.to_dict() for info in list_algorithms()],
    })


@app.route("/api/graph/default")
def api_graph_default():
    return jsonify(create_default_graph().to_dict())


# ---------------------------------------------------------------------------
# API: Selection & Inputs
# ---------------------------------------------------------------------------
@app.route("/api/selection", methods=["GET"])
def api_selection_get():
    return jsonify(get_selection().to_dict())


@app.route("/api/selection", methods=["POST"])
def api_selection():
    data = json_body()
    changes = {k: data[k] for k in ("algorithm", "values", "target", "start", "end") if k in data}
    if "values" in changes and not isinstance(changes["values"], list):
        raise ValueError("values must be a list of numbers")
    return apply_selection(get_selection().replace(**changes))


@app.route("/api/array/random", methods=["POST"])
def api_array_random():
    data   = request.get_json(silent=True) or {}
    length = data.get("length", 15)
    if isinstance(length, bool) or not isinstance(length, int):
        raise ValueError("length must be an integer")
    return apply_selection(get_selection().replace(values=random_array(length)))


@app.route("/api/array/<preset>", methods=["POST"])
def api_array_preset(preset):
    sel = get_selection()
    return apply_selection(sel.replace(values=preset_array(sel.values, preset)))


@app.route("/api/graph/weight", methods=["POST"])
def api_graph_weight():
    data = json_body()
    edge = data.get("edge")
    if isinstance(edge, bool) or not isinstance(edge, int):
        raise ValueError("edge must be an integer edge index")
    sel = get_selection()
    return apply_selection(sel.replace(graph=sel.graph.with_weight(edge, data.get("weight"))))


@app.route("/api/graph/reset", methods=["POST"])
def api_graph_reset():
    return apply_selection(get_selection().replace(graph=create_default_graph()))


# ---------------------------------------------------------------------------
# API: Trace & State
# ---------------------------------------------------------------------------
@app.route("/api/trace")
def api_trace():
    sel = get_selection()
    return jsonify(export(sel, build_trace(sel, app.config["MAX_ARRAY_SIZE"])))


@app.route("/api/state")
def api_state():
    return jsonify(player_state(load_player()))


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    player = load_player()
    player.next()
    save_player(player)
    return jsonify(player_state(player))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    player = load_player()
    player.prev()
    save_player(player)
    return jsonify(player_state(player))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    player = load_player()
    idx    = json_body().get("index")
    if not player.jump_to(idx) and idx != player.step:
        return jsonify({"error": "Invalid step index"}), 400
    save_player(player)
    return jsonify(player_state(player))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    player = load_player()
    player.toggle_play()
    save_player(player)
    return jsonify(player_state(player))


@app.route("/api/step/tick", methods=["POST"])
def api_step_tick():
    player = load_player()
    player.tick()
    save_player(player)
    return jsonify(player_state(player))


@app.route("/api/step/reset", methods=["POST"])
def api_step_reset():
    player = load_player()
    player.reset()
    save_player(player)
    return jsonify(player_state(player))


# ---------------------------------------------------------------------------
# API: Config Changes
# ---------------------------------------------------------------------------
@app.route("/api/config/speed", methods=["POST"])
def api_config_speed():
    data   = json_body()
    player = load_player()
    if "preset" in data:
        player.set_speed_preset(data["preset"])
    elif "level" in data:
        player.set_speed(speed_for_level(data["level"]))
    else:
        player.set_speed(data.get("speed_ms", app.config["DEFAULT_SPEED_MS"]))
    save_player(player)
    return jsonify({"speed": player.speed_ms})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("AlgoVision API on http://localhost:5000")
    app.run(debug=app.config.get("DEBUG", False))
