"""
main.py — Algorithm Trace Visualizer Flask App
===============================================
The web server that exposes the tracers, the catalog and playback.

Routes:
  GET  /                       – catalog index, grouped by category
  GET  /api/algorithms         – catalog entries (?type=sorting|search|graph|tree)
  GET  /api/algorithms/<id>    – one catalog entry + its tracer card
  POST /api/samples/array      – random (optionally sorted) array
  POST /api/samples/graph      – random connected graph
  POST /api/run                – run an algorithm, keep the trace
  POST /api/step/next          – advance one frame
  POST /api/step/prev          – rewind one frame
  POST /api/step/goto          – jump to frame N
  POST /api/step/play          – toggle play/pause (optional speed preset)
  GET  /api/export             – the whole recorded run
  POST /api/compare            – run two algorithms on the same input

State management:
  Traces hold tree snapshots and graph references, too large for the
  cookie session.  The session only stores a run id; the Recorder for
  that id lives in `_RUNS` in process memory.  At most `Config.max_runs`
  runs are kept; the oldest is dropped first.
"""

import logging
import os
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, Iterable, Optional

from flask import Flask, jsonify, render_template_string, request, session

from algorithms import CATEGORIES, AlgoInfo, get_algorithm
from algorithms.samples import (
    DEFAULT_TREE_KEYS,
    random_array,
    random_connected_graph,
    random_sorted_array,
)
from config import Config
from engine import (
    Catalog,
    InvalidInputError,
    Recorder,
    UnknownAlgorithmError,
    VisualizerError,
    compare,
)
from engine import validation

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = Config.secret_key


_RUNS: "OrderedDict[str, Recorder]" = OrderedDict()
_RUNS_LOCK = threading.Lock()


# ---------------------------------------------------------------------------
# Start-up
# ---------------------------------------------------------------------------
def _configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, str(Config.log_level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_catalog() -> Catalog:
    """
    Build a fresh catalog: the configured file (if any) first, then the
    built-ins it is missing.  Replaces the module-level `catalog`.
    """
    global catalog
    fresh = Catalog()
    path = Config.catalog_file
    if path and os.path.exists(path):
        fresh.load_json(path)
    added = fresh.seed()
    if path and added:
        fresh.save_json(path)
    catalog = fresh
    return fresh


init_catalog()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(VisualizerError)
def handle_visualizer_error(exc: VisualizerError):
    return jsonify({"error": str(exc)}), exc.status_code


# ---------------------------------------------------------------------------
# Session run helpers
# ---------------------------------------------------------------------------
def _store_run(rec: Recorder) -> str:
    run_id = uuid.uuid4().hex
    with _RUNS_LOCK:
        old = session.get("run_id")
        if old:
            _RUNS.pop(old, None)
        _RUNS[run_id] = rec
        while len(_RUNS) > max(1, Config.max_runs):
            evicted, _ = _RUNS.popitem(last=False)
            logger.debug("evicted run %s", evicted)
    session["run_id"] = run_id
    return run_id


def _current_run() -> Recorder:
    run_id = session.get("run_id")
    with _RUNS_LOCK:
        rec = _RUNS.get(run_id) if run_id else None
    if rec is None:
        raise InvalidInputError("Run an algorithm first")
    return rec


def _frame_payload(rec: Recorder) -> Dict[str, Any]:
    stepper = rec.stepper
    frame = stepper.current_frame
    return {
        "frame":        frame.to_dict() if frame is not None else None,
        "currentStep":  stepper.current_idx,
        "totalFrames":  stepper.total_frames,
        "state":        stepper.state.value,
    }


def _json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _seed(data: Dict[str, Any]) -> Optional[int]:
    raw = data.get("seed")
    return None if raw is None else validation.parse_node_id(raw, "seed")


# ---------------------------------------------------------------------------
# Input assembly
# ---------------------------------------------------------------------------
def _lookup(key: Any) -> AlgoInfo:
    info = get_algorithm(str(key))
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm: {key}")
    return info


def _select_algorithm(data: Dict[str, Any]) -> AlgoInfo:
    """By registry key, by catalog id, or by (type, name)."""
    if data.get("algo_key"):
        return _lookup(data["algo_key"])
    if data.get("id"):
        config = catalog.get(str(data["id"]))
        if config is None:
            raise UnknownAlgorithmError(f"Unknown catalog id: {data['id']}")
        return catalog.resolve(config)
    if data.get("type") and data.get("name"):
        config = catalog.find(str(data["type"]), str(data["name"]))
        if config is None:
            raise UnknownAlgorithmError(f"Unknown {data['type']} algorithm: {data['name']}")
        return catalog.resolve(config)
    raise InvalidInputError("Choose an algorithm (algo_key, id, or type and name)")


def _build_inputs(infos: Iterable[AlgoInfo], data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Parse every input the given tracers need, once, so two algorithms in
    comparison mode see exactly the same array / graph / keys.
    """
    infos = list(infos)
    needed = {name for info in infos for name in info.inputs}
    inputs: Dict[str, Any] = {}

    if "values" in needed:
        if data.get("array") is not None:
            inputs["values"] = validation.parse_array(data["array"], max_size=Config.max_array_size)
        elif any(info.key == "binary_search" for info in infos):
            inputs["values"] = random_sorted_array(Config.default_array_size, Config.default_max_value)
        else:
            inputs["values"] = random_array(Config.default_array_size, Config.default_max_value)

    if "keys" in needed:
        raw_keys = data.get("keys")
        inputs["keys"] = (
            list(DEFAULT_TREE_KEYS) if raw_keys is None
            else validation.parse_keys(raw_keys, max_size=Config.max_array_size)
        )

    if "target" in needed:
        if data.get("target") is None:
            raise InvalidInputError("A target value is required")
        inputs["target"] = validation.parse_number(data["target"], "target")

    if "graph" in needed:
        if data.get("graph") is not None:
            graph = validation.parse_graph(data["graph"])
        else:
            graph = random_connected_graph(Config.default_graph_nodes, Config.default_edge_density)
        start = validation.parse_node_id(data["start"], "start node") \
            if data.get("start") is not None else graph.node_ids()[0]
        end: Optional[int] = None
        if "end" in needed and data.get("end") is not None:
            end = validation.parse_node_id(data["end"], "end node")
        validation.require_nodes(graph, start, end)
        if any(info.key == "dijkstra" for info in infos):
            validation.require_non_negative(graph)
        inputs.update(graph=graph, start=start)
        if "end" in needed:
            inputs["end"] = end

    return inputs


def _run(info: AlgoInfo, inputs: Dict[str, Any]) -> Recorder:
    rec = Recorder()
    rec.start(info.key, **inputs)
    rec.run_to_completion()
    return rec


# ---------------------------------------------------------------------------
# Index
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    groups = [(category, catalog.by_type(category)) for category in CATEGORIES]
    return render_template_string(INDEX_TEMPLATE, groups=groups)


# ---------------------------------------------------------------------------
# API: Catalog
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    type_ = request.args.get("type")
    if type_ and type_ not in CATEGORIES:
        raise InvalidInputError(f"Unknown algorithm type: {type_}")
    entries = catalog.by_type(type_) if type_ else catalog.list()
    return jsonify({"algorithms": [c.to_dict() for c in entries]})


@app.route("/api/algorithms/<config_id>")
def api_algorithm(config_id: str):
    config = catalog.get(config_id)
    if config is None:
        raise UnknownAlgorithmError(f"Unknown catalog id: {config_id}")
    try:
        tracer = catalog.resolve(config).to_dict()
    except UnknownAlgorithmError:
        # entries loaded from a catalog file may have no tracer behind them
        tracer = None
    return jsonify({"algorithm": config.to_dict(), "tracer": tracer})


# ---------------------------------------------------------------------------
# API: Sample data
# ---------------------------------------------------------------------------
@app.route("/api/samples/array", methods=["POST"])
def api_samples_array():
    data = _json_body()
    size = validation.parse_bounded_int(
        data.get("size", Config.default_array_size), "size", 1, Config.max_array_size
    )
    max_value = validation.parse_bounded_int(
        data.get("max_value", Config.default_max_value), "max value", 1, 1_000_000
    )
    seed = _seed(data)
    make = random_sorted_array if data.get("sorted") else random_array
    return jsonify({"array": make(size, max_value, seed=seed)})


@app.route("/api/samples/graph", methods=["POST"])
def api_samples_graph():
    data = _json_body()
    nodes = validation.parse_bounded_int(
        data.get("nodes", Config.default_graph_nodes), "node count", 1, 50
    )
    density = validation.parse_probability(data.get("density", Config.default_edge_density))
    graph = random_connected_graph(nodes, density, seed=_seed(data))
    return jsonify({"graph": graph.to_dict()})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json_body()
    info = _select_algorithm(data)
    inputs = _build_inputs([info], data)

    rec = _run(info, inputs)
    _store_run(rec)

    payload = _frame_payload(rec)
    payload.update(
        algoKey=info.key,
        label=info.label,
        pseudocode=list(info.pseudocode),
        metrics=rec.metrics.to_dict() if rec.metrics else {},
    )
    if "graph" in inputs:
        payload["graph"] = inputs["graph"].to_dict()
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    rec = _current_run()
    if not rec.stepper.next_step():
        raise InvalidInputError("Already at last step")
    return jsonify(_frame_payload(rec))


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    rec = _current_run()
    if not rec.stepper.prev_step():
        raise InvalidInputError("Already at first step")
    return jsonify(_frame_payload(rec))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    rec = _current_run()
    idx = validation.parse_node_id(_json_body().get("index", 0), "step index")
    if not rec.stepper.goto_step(idx):
        raise InvalidInputError("Invalid step index")
    return jsonify(_frame_payload(rec))


@app.route("/api/step/play", methods=["POST"])
def api_step_play():
    rec = _current_run()
    speed = _json_body().get("speed")
    if speed is not None:
        if speed not in Config.speed_presets:
            raise InvalidInputError(f"Unknown speed: {speed}")
        rec.stepper.set_speed(speed)
    rec.stepper.toggle_play()
    return jsonify({
        "isPlaying": rec.stepper.is_playing,
        "state":     rec.stepper.state.value,
        "speed":     rec.stepper.speed,
    })


# ---------------------------------------------------------------------------
# API: Export & Comparison
# ---------------------------------------------------------------------------
@app.route("/api/export")
def api_export():
    return jsonify(_current_run().export())


@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json_body()
    if not data.get("left") or not data.get("right"):
        raise InvalidInputError("Comparison needs a left and a right algorithm key")
    left, right = _lookup(data["left"]), _lookup(data["right"])
    if left.category != right.category:
        raise InvalidInputError(
            f"Cannot compare a {left.category} algorithm with a {right.category} algorithm"
        )
    inputs = _build_inputs([left, right], data)
    result = compare(_run(left, inputs), _run(right, inputs))
    return jsonify(result.to_dict())


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Algorithm Trace Visualizer</title>
</head>
<body>
  <h1>Algorithm Trace Visualizer</h1>
  {% for category, entries in groups %}
    <h2>{{ category|capitalize }}</h2>
    <ul>
    {% for entry in entries %}
      <li><strong>{{ entry.name }}</strong> – {{ entry.description }}</li>
    {% else %}
      <li>No algorithms yet.</li>
    {% endfor %}
    </ul>
  {% endfor %}
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    Config.load_env()
    _configure_logging()
    app.secret_key = Config.secret_key
    init_catalog()
    logger.info("starting on http://%s:%d", Config.host, Config.port)
    app.run(debug=Config.debug, host=Config.host, port=Config.port)
