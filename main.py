"""
main.py — Dry-Run Algorithm Visualizer Flask App
=================================================
JSON API over one Workbench: a graph, a BST, a linked list, the active
stepper and the player that drives it.

Routes:
  GET  /                        – algorithm catalogue
  GET  /api/state               – everything a renderer needs for one frame
  POST /api/graph/import        – replace the graph from adjacency-list text
  POST /api/graph/node/add      – add a node at (x, y)
  POST /api/graph/node/remove   – remove a node (ids above it shift down)
  POST /api/graph/node/move     – reposition a node (not an undoable edit)
  POST /api/graph/edge/add      – add an edge
  POST /api/graph/edge/remove   – remove an edge
  POST /api/graph/directed      – set or toggle orientation
  POST /api/graph/undo          – undo the last graph edit
  POST /api/tree/load           – rebuild the BST from keys
  POST /api/list/load           – rebuild the linked list from values
  POST /api/list/doubly         – switch singly / doubly
  POST /api/run                 – start an animated run (auto-play unless "manual")
  POST /api/step                – one manual tick (stops auto-play first)
  POST /api/play | /api/pause   – auto-play control
  POST /api/tick                – poll the auto-play scheduler
  POST /api/speed               – preset name or interval in seconds
  POST /api/reset               – drop the active run
  POST /api/record              – run to completion on a copy, return every step
  POST /api/compare             – record two algorithms on copies of one model
  POST /api/instant/<kind>      – non-animated tree answers (traversals, search, insert, delete)

State management:
  One Workbench per app, kept in app.extensions.  Requests are
  serialised with the workbench lock, so the models are only ever touched
  by one request (and hence one tick) at a time.
"""

from flask import Flask, current_app, request, jsonify
from functools import wraps
import logging
import random
import secrets
import sys
import os
import threading

# add project root to path so imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from graph import Graph
from structures import BinaryTree, LinkedList, InvalidInput
from algorithms import get_algorithm, list_algorithms, AlgoInfo
from engine import Player, Recorder, History, compare, HISTORY_CAPACITY

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Workbench — the models plus the active run
# ---------------------------------------------------------------------------
class Workbench:
    def __init__(self, speed: str = "medium", history: int = HISTORY_CAPACITY):
        self.graph   = Graph()
        self.tree    = BinaryTree()
        self.lst     = LinkedList()
        self.player  = Player(speed=speed)
        self.history = History(history)
        self.lock    = threading.Lock()

    def model(self, kind: str):
        return {"graph": self.graph, "tree": self.tree, "list": self.lst}[kind]

    def model_copy(self, kind: str):
        """Independent copy, so recorded runs never touch the live model."""
        if kind == "graph":
            return Graph.from_dict(self.graph.to_dict())
        if kind == "tree":
            # re-inserting in pre-order rebuilds the same shape
            return BinaryTree.from_keys(self.tree.preorder())
        return LinkedList(self.lst.values(), doubly=self.lst.doubly)

    def remember_graph(self) -> None:
        self.history.push(self.graph.to_dict())

    def state(self) -> dict:
        stepper = self.player.stepper
        step = self.player.current_step
        return {
            "graph":      self.graph.to_dict(),
            "tree":       self.tree.to_dict(),
            "list":       self.lst.to_dict(),
            "player":     self.player.to_dict(),
            "step":       step.to_dict() if step else None,
            "pseudocode": stepper.pseudocode.as_list() if stepper else [],
            "undo":       len(self.history),
        }


def get_workbench() -> Workbench:
    return current_app.extensions["workbench"]


def locked(view):
    """Run the view while holding the workbench lock."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        with get_workbench().lock:
            return view(*args, **kwargs)
    return wrapper


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------
def _payload() -> dict:
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


def _int(data: dict, name: str) -> int:
    if name not in data or data[name] is None or data[name] == "":
        raise InvalidInput(f"Missing field: {name}")
    raw = data[name]
    if isinstance(raw, bool):
        raise InvalidInput(f"{name} must be an integer")
    try:
        return int(str(raw).strip())
    except ValueError:
        raise InvalidInput(f"{name} must be an integer, got {raw!r}") from None


def _int_list(data: dict, name: str) -> list:
    """Accepts a JSON list or a comma/space separated string."""
    raw = data.get(name, [])
    if isinstance(raw, str):
        raw = raw.replace(",", " ").split()
    elif not isinstance(raw, (list, tuple)):
        raise InvalidInput(f"{name} must be a list of integers")
    values = []
    for item in raw:
        try:
            values.append(int(str(item).strip()))
        except ValueError:
            raise InvalidInput(f"Not a number: {item!r}") from None
    return values


def _params(info: AlgoInfo, data: dict) -> dict:
    return {name: _int(data, name) for name in info.params}


def _algorithm(key) -> AlgoInfo:
    info = get_algorithm(key)
    if info is None:
        raise InvalidInput(f"Unknown algorithm: {key}")
    return info


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config=None) -> Flask:
    app = Flask(__name__)
    app.config.update(
        SECRET_KEY=os.environ.get("SECRET_KEY", secrets.token_hex(32)),
        ALGOVIZ_SPEED=os.environ.get("ALGOVIZ_SPEED", "medium"),
        ALGOVIZ_HISTORY=int(os.environ.get("ALGOVIZ_HISTORY", HISTORY_CAPACITY)),
        ALGOVIZ_LOG_LEVEL=os.environ.get("ALGOVIZ_LOG_LEVEL", "INFO"),
    )
    if config:
        app.config.update(config)

    logging.basicConfig(
        level=app.config["ALGOVIZ_LOG_LEVEL"].upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.extensions["workbench"] = Workbench(
        speed=app.config["ALGOVIZ_SPEED"],
        history=app.config["ALGOVIZ_HISTORY"],
    )

    @app.errorhandler(InvalidInput)
    def handle_invalid_input(e):
        log.warning("rejected request to %s: %s", request.path, e)
        return jsonify({"error": str(e)}), 400

    register_routes(app)
    return app


def register_routes(app: Flask) -> None:

    @app.route("/")
    def index():
        return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})

    @app.route("/api/state")
    @locked
    def api_state():
        return jsonify(get_workbench().state())

    # -----------------------------------------------------------------------
    # API: Graph editing
    # -----------------------------------------------------------------------
    @app.route("/api/graph/import", methods=["POST"])
    @locked
    def api_graph_import():
        wb = get_workbench()
        data = _payload()
        text = data.get("text", "")
        if not isinstance(text, str):
            raise InvalidInput("text must be adjacency-list text")
        g = Graph.from_adjacency_list(text, directed=bool(data.get("directed", False)))
        wb.remember_graph()
        wb.graph.restore(g.to_dict())
        log.info("imported %r", wb.graph)
        return jsonify(wb.state())

    @app.route("/api/graph/node/add", methods=["POST"])
    @locked
    def api_node_add():
        wb = get_workbench()
        data = _payload()
        try:
            x, y = float(data.get("x", 0.0)), float(data.get("y", 0.0))
        except (TypeError, ValueError):
            raise InvalidInput("Node coordinates must be numbers") from None
        snapshot = wb.graph.to_dict()
        node = wb.graph.add_node(x, y)
        wb.history.push(snapshot)
        return jsonify({"node": node.to_dict(), **wb.state()})

    @app.route("/api/graph/node/remove", methods=["POST"])
    @locked
    def api_node_remove():
        wb = get_workbench()
        node_id = _int(_payload(), "id")
        if not wb.graph.has_node(node_id):
            raise InvalidInput(f"No node with id {node_id}")
        wb.remember_graph()
        wb.graph.remove_node(node_id)
        return jsonify(wb.state())

    @app.route("/api/graph/node/move", methods=["POST"])
    @locked
    def api_node_move():
        wb = get_workbench()
        data = _payload()
        node_id = _int(data, "id")
        if not wb.graph.has_node(node_id):
            raise InvalidInput(f"No node with id {node_id}")
        try:
            x, y = float(data["x"]), float(data["y"])
        except (KeyError, TypeError, ValueError):
            raise InvalidInput("Node coordinates must be numbers") from None
        wb.graph.move_node(node_id, x, y)
        return jsonify(wb.state())

    @app.route("/api/graph/edge/add", methods=["POST"])
    @locked
    def api_edge_add():
        wb = get_workbench()
        data = _payload()
        u, v = _int(data, "u"), _int(data, "v")
        if not (wb.graph.has_node(u) and wb.graph.has_node(v)):
            raise InvalidInput(f"Edge ({u}, {v}) references an unknown node")
        snapshot = wb.graph.to_dict()
        if wb.graph.add_edge(u, v) is not None:
            wb.history.push(snapshot)
        return jsonify(wb.state())

    @app.route("/api/graph/edge/remove", methods=["POST"])
    @locked
    def api_edge_remove():
        wb = get_workbench()
        data = _payload()
        snapshot = wb.graph.to_dict()
        if wb.graph.remove_edge(_int(data, "u"), _int(data, "v")):
            wb.history.push(snapshot)
        return jsonify(wb.state())

    @app.route("/api/graph/directed", methods=["POST"])
    @locked
    def api_graph_directed():
        wb = get_workbench()
        data = _payload()
        directed = data.get("directed", not wb.graph.directed)
        if not isinstance(directed, bool):
            raise InvalidInput("directed must be true or false")
        if directed != wb.graph.directed:
            rng = random.Random(_int(data, "seed")) if data.get("seed") is not None else None
            wb.remember_graph()
            wb.graph.set_directed(directed, rng=rng)
        return jsonify(wb.state())

    @app.route("/api/graph/undo", methods=["POST"])
    @locked
    def api_graph_undo():
        wb = get_workbench()
        previous = wb.history.pop()
        if previous is None:
            raise InvalidInput("Nothing to undo")
        wb.graph.restore(previous)
        return jsonify(wb.state())

    # -----------------------------------------------------------------------
    # API: Tree & list models
    # -----------------------------------------------------------------------
    @app.route("/api/tree/load", methods=["POST"])
    @locked
    def api_tree_load():
        wb = get_workbench()
        keys = _int_list(_payload(), "keys")
        wb.tree.clear()
        for k in keys:
            wb.tree.insert(k)
        return jsonify(wb.state())

    @app.route("/api/list/load", methods=["POST"])
    @locked
    def api_list_load():
        wb = get_workbench()
        wb.lst.load(_int_list(_payload(), "values"))
        return jsonify(wb.state())

    @app.route("/api/list/doubly", methods=["POST"])
    @locked
    def api_list_doubly():
        wb = get_workbench()
        wb.lst.set_doubly(bool(_payload().get("doubly", True)))
        return jsonify(wb.state())

    # -----------------------------------------------------------------------
    # API: Animated runs
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    @locked
    def api_run():
        wb = get_workbench()
        data = _payload()
        info = _algorithm(data.get("algo"))
        params = _params(info, data)
        if info.kind == "graph" and not wb.graph.has_node(params["start"]):
            raise InvalidInput(f"Start node {params['start']} does not exist")

        stepper = info.factory(wb.model(info.kind), *params.values())
        wb.player.load(stepper)
        if not data.get("manual", False):
            wb.player.play()
        log.info("run %s with %s", info.key, params)
        return jsonify(wb.state())

    @app.route("/api/step", methods=["POST"])
    @locked
    def api_step():
        wb = get_workbench()
        if wb.player.stepper is None:
            raise InvalidInput("No algorithm loaded")
        tick = wb.player.step()
        return jsonify({"proceed": tick.proceed if tick else False, **wb.state()})

    @app.route("/api/play", methods=["POST"])
    @locked
    def api_play():
        wb = get_workbench()
        wb.player.play()
        return jsonify(wb.state())

    @app.route("/api/pause", methods=["POST"])
    @locked
    def api_pause():
        wb = get_workbench()
        wb.player.pause()
        return jsonify(wb.state())

    @app.route("/api/tick", methods=["POST"])
    @locked
    def api_tick():
        wb = get_workbench()
        now = _payload().get("now")
        if now is not None:
            try:
                now = float(now)
            except (TypeError, ValueError):
                raise InvalidInput("now must be a number of seconds") from None
        ticked = wb.player.poll(now)
        return jsonify({"ticked": ticked, **wb.state()})

    @app.route("/api/speed", methods=["POST"])
    @locked
    def api_speed():
        wb = get_workbench()
        data = _payload()
        if "interval" in data:
            try:
                wb.player.set_interval(float(data["interval"]))
            except (TypeError, ValueError):
                raise InvalidInput("interval must be a number of seconds") from None
        else:
            wb.player.set_speed(data.get("speed", "medium"))
        return jsonify(wb.player.to_dict())

    @app.route("/api/reset", methods=["POST"])
    @locked
    def api_reset():
        wb = get_workbench()
        wb.player.reset()
        return jsonify(wb.state())

    # -----------------------------------------------------------------------
    # API: Recording & comparison (run on copies)
    # -----------------------------------------------------------------------
    @app.route("/api/record", methods=["POST"])
    @locked
    def api_record():
        wb = get_workbench()
        data = _payload()
        info = _algorithm(data.get("algo"))
        rec = Recorder()
        rec.start(info.key, wb.model_copy(info.kind), **_params(info, data))
        rec.run_to_completion()
        return jsonify(rec.export())

    @app.route("/api/compare", methods=["POST"])
    @locked
    def api_compare():
        wb = get_workbench()
        data = _payload()
        left, right = _algorithm(data.get("left")), _algorithm(data.get("right"))
        if left.kind != right.kind:
            raise InvalidInput("Only algorithms over the same structure can be compared")
        recorders = []
        for info in (left, right):
            rec = Recorder()
            rec.start(info.key, wb.model_copy(info.kind), **_params(info, data))
            rec.run_to_completion()
            recorders.append(rec)
        result = compare(*recorders)
        return jsonify({
            "left":         result.left.__dict__,
            "right":        result.right.__dict__,
            "winner_ticks": result.winner_ticks,
            "same_order":   result.same_order,
        })

    # -----------------------------------------------------------------------
    # API: Instant (non-animated) tree operations
    # -----------------------------------------------------------------------
    @app.route("/api/instant/<kind>", methods=["POST"])
    @locked
    def api_instant(kind):
        wb = get_workbench()
        tree = wb.tree
        if kind in ("inorder", "preorder", "postorder"):
            return jsonify({"kind": kind, "keys": getattr(tree, kind)()})
        if kind == "search":
            key = _int(_payload(), "key")
            return jsonify({
                "kind": kind, "key": key, "found": tree.contains(key),
                "path": [n.key for n in tree.search_path(key)],
            })
        if kind == "insert":
            key = _int(_payload(), "key")
            return jsonify({"kind": kind, "key": key, "changed": tree.insert(key), **wb.state()})
        if kind == "delete":
            key = _int(_payload(), "key")
            return jsonify({"kind": kind, "key": key, "changed": tree.delete(key), **wb.state()})
        raise InvalidInput(f"Unknown instant operation: {kind}")


app = create_app()


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("=" * 60)
    print("  Dry-Run Algorithm Visualizer")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
