"""
main.py — Grid Pathfinding Visualizer Flask App
=================================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – tick the player, return grid + flags (polled)
  POST /api/grid/reset         – new empty grid {rows, cols}
  POST /api/grid/wall          – paint / erase a wall {row, col, wall}
  POST /api/grid/move          – move an endpoint {which, row, col}
  POST /api/grid/clear_walls   – remove every wall
  POST /api/grid/clear_path    – remove visited / path / frontier
  POST /api/grid/maze          – random walls {wall_prob, seed}
  POST /api/config/algo        – info card + pseudocode for an algorithm
  POST /api/run                – search and start the animation {algorithm, speed}
  POST /api/pause              – pause the animation
  POST /api/resume             – resume the animation
  POST /api/stop               – cancel the animation
  POST /api/compare            – metrics for two algorithms {left, right}

State management:
  One in-process Workspace (grid, player, last metrics).  Flask's dev
  server handles requests on several threads, so every route takes the
  workspace lock.  The player has no thread of its own: the page polls
  /api/state and each poll fires whatever frames are due.

  Grid edits are refused with 409 while an animation is running or
  paused.
"""

import logging
import threading
import time
from typing import Callable

from flask import Flask, render_template_string, request, jsonify

from config import Config
from grid import Grid, Pos
from algorithms import get_algorithm, list_algorithms, resolve_algorithm
from engine import Frame, Player, clamp_speed, compare, record_run
from ui import (
    render_grid,
    render_legend,
    playback_controls,
    algorithm_selector,
    speed_control,
    grid_tools,
    algorithm_info,
    pseudocode_viewer,
    analytics_panel,
    comparison_panel,
    mode_toggle,
)


app = Flask(__name__)


# ---------------------------------------------------------------------------
# Workspace — everything the page is showing
# ---------------------------------------------------------------------------
class Workspace:
    def __init__(self, config: Config, clock: Callable[[], float] = time.monotonic):
        self.config = config
        self.lock = threading.Lock()
        self.grid = Grid(config.rows, config.cols)
        self.algorithm = resolve_algorithm(config.algorithm).key
        self.speed = clamp_speed(config.speed)
        self.metrics = None
        self.comparison = None
        self.player = Player(
            on_frame=self._apply_frame,
            on_start=self._on_start,
            on_end=self._on_end,
            on_pause_change=self._on_pause_change,
            clock=clock,
        )

    def _apply_frame(self, frame: Frame) -> None:
        self.grid.apply_frame(frame)

    def _on_start(self) -> None:
        app.logger.info("visualization started: %s at speed %d", self.algorithm, self.speed)

    def _on_end(self) -> None:
        app.logger.info("visualization completed: %s", self.algorithm)

    def _on_pause_change(self, is_paused: bool, can_pause: bool) -> None:
        app.logger.debug("pause state: paused=%s can_pause=%s", is_paused, can_pause)


workspace = Workspace(Config.from_env())


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _payload() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _cell_from(data: dict, grid: Grid) -> Pos:
    pos = (int(data["row"]), int(data["col"]))
    if not grid.in_bounds(pos):
        raise ValueError(f"cell {pos} is outside a {grid.rows}x{grid.cols} grid")
    return pos


def _is_dark() -> bool:
    return request.args.get("dark", "0") in ("1", "true")


def _busy():
    return jsonify({"error": "animation in progress; stop it first"}), 409


def _state_payload(ws: Workspace) -> dict:
    player = ws.player
    return {
        "state":        player.state.value,
        "is_running":   player.is_running,
        "is_paused":    player.is_paused,
        "can_pause":    player.can_pause,
        "progress":     player.progress,
        "frames_fired": player.frames_fired,
        "total_frames": player.total_frames,
        "algorithm":    ws.algorithm,
        "speed":        ws.speed,
        "grid":         ws.grid.to_dict(),
        "metrics":      ws.metrics.to_dict() if ws.metrics else None,
        "svg":          render_grid(ws.grid, dark=_is_dark()),
        "playback":     playback_controls(player.is_running, player.is_paused,
                                          player.can_pause, player.progress),
        "analytics":    analytics_panel(ws.metrics),
    }


@app.errorhandler(ValueError)
@app.errorhandler(KeyError)
@app.errorhandler(TypeError)
def bad_request(e):
    app.logger.debug("rejected request to %s: %s", request.path, e)
    return jsonify({"error": str(e)}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@app.route("/")
def index():
    ws = workspace
    dark = _is_dark()
    with ws.lock:
        ws.player.tick()
        info = get_algorithm(ws.algorithm)
        html = render_template_string(INDEX_TEMPLATE,
            dark=dark,
            svg=render_grid(ws.grid, dark=dark),
            legend=render_legend(dark=dark),
            mode_toggle=mode_toggle(dark),
            algo_selector=algorithm_selector(list_algorithms(), ws.algorithm),
            speed=speed_control(ws.speed),
            tools=grid_tools(ws.grid.rows, ws.config.min_size, ws.config.max_size,
                             ws.config.maze_wall_prob),
            playback=playback_controls(ws.player.is_running, ws.player.is_paused,
                                       ws.player.can_pause, ws.player.progress),
            info=algorithm_info(info),
            pseudocode=pseudocode_viewer(info.pseudocode if info else []),
            analytics=analytics_panel(ws.metrics),
            comparison=comparison_panel(list_algorithms(), ws.comparison),
        )
    return html


@app.route("/api/state")
def api_state():
    ws = workspace
    with ws.lock:
        ws.player.tick()
        return jsonify(_state_payload(ws))


# ---------------------------------------------------------------------------
# API: Grid Editing
# ---------------------------------------------------------------------------
@app.route("/api/grid/reset", methods=["POST"])
def api_grid_reset():
    data = _payload()
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        rows = ws.config.clamp_size(data.get("rows", ws.grid.rows))
        cols = ws.config.clamp_size(data.get("cols", rows))
        ws.grid = Grid(rows, cols)
        ws.metrics = None
        return jsonify(_state_payload(ws))


@app.route("/api/grid/wall", methods=["POST"])
def api_grid_wall():
    data = _payload()
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        pos = _cell_from(data, ws.grid)
        changed = ws.grid.set_wall(pos, bool(data.get("wall", True)))
        payload = _state_payload(ws)
        payload["changed"] = changed
        return jsonify(payload)


@app.route("/api/grid/move", methods=["POST"])
def api_grid_move():
    data = _payload()
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        pos = _cell_from(data, ws.grid)
        which = data.get("which")
        if which == "start":
            ws.grid.move_start(pos)
        elif which == "end":
            ws.grid.move_end(pos)
        else:
            return jsonify({"error": "which must be 'start' or 'end'"}), 400
        return jsonify(_state_payload(ws))


@app.route("/api/grid/clear_walls", methods=["POST"])
def api_grid_clear_walls():
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        ws.grid.clear_walls()
        return jsonify(_state_payload(ws))


@app.route("/api/grid/clear_path", methods=["POST"])
def api_grid_clear_path():
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        ws.grid.clear_path()
        return jsonify(_state_payload(ws))


@app.route("/api/grid/maze", methods=["POST"])
def api_grid_maze():
    data = _payload()
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        wall_prob = float(data.get("wall_prob", ws.config.maze_wall_prob))
        if not 0.0 <= wall_prob <= 1.0:
            raise ValueError(f"wall_prob must be in [0, 1], got {wall_prob}")
        seed = data.get("seed")
        old = ws.grid
        ws.grid = Grid.generate_maze(old.rows, old.cols, wall_prob=wall_prob,
                                     seed=seed, start=old.start, end=old.end)
        ws.metrics = None
        return jsonify(_state_payload(ws))


# ---------------------------------------------------------------------------
# API: Config
# ---------------------------------------------------------------------------
@app.route("/api/config/algo", methods=["POST"])
def api_config_algo():
    data = _payload()
    ws = workspace
    with ws.lock:
        info = resolve_algorithm(data.get("algorithm"))
        ws.algorithm = info.key
    return jsonify({
        "algorithm":  info.key,
        "info":       algorithm_info(info),
        "pseudocode": pseudocode_viewer(info.pseudocode),
    })


# ---------------------------------------------------------------------------
# API: Run & Playback
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _payload()
    ws = workspace
    with ws.lock:
        if ws.player.is_active:
            return _busy()
        ws.algorithm = resolve_algorithm(data.get("algorithm", ws.algorithm)).key
        ws.speed = clamp_speed(data.get("speed", ws.speed))

        ws.grid.clear_path()
        result, ws.metrics = record_run(ws.grid, algorithm=ws.algorithm)
        ws.player.start(result, ws.speed)
        ws.player.tick()
        return jsonify(_state_payload(ws))


@app.route("/api/pause", methods=["POST"])
def api_pause():
    ws = workspace
    with ws.lock:
        ws.player.tick()
        if not ws.player.pause():
            return jsonify({"error": f"cannot pause while {ws.player.state.value}"}), 409
        app.logger.info("visualization paused at frame %d", ws.player.frames_fired)
        return jsonify(_state_payload(ws))


@app.route("/api/resume", methods=["POST"])
def api_resume():
    ws = workspace
    with ws.lock:
        if not ws.player.resume():
            return jsonify({"error": f"cannot resume while {ws.player.state.value}"}), 409
        ws.player.tick()
        return jsonify(_state_payload(ws))


@app.route("/api/stop", methods=["POST"])
def api_stop():
    ws = workspace
    with ws.lock:
        ws.player.tick()
        if ws.player.stop():
            app.logger.info("visualization stopped")
        return jsonify(_state_payload(ws))


# ---------------------------------------------------------------------------
# API: Comparison
# ---------------------------------------------------------------------------
@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _payload()
    ws = workspace
    with ws.lock:
        left_key  = resolve_algorithm(data.get("left", "bfs")).key
        right_key = resolve_algorithm(data.get("right", "astar")).key
        _, left  = record_run(ws.grid, algorithm=left_key)
        _, right = record_run(ws.grid, algorithm=right_key)
        ws.comparison = compare(left, right)
        comp = ws.comparison
        return jsonify({
            "comparison": comp.to_dict(),
            "html":       comparison_panel(list_algorithms(), comp),
        })


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Pathfinding Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg: #f3f4f6;
      --bg-panel: #ffffff;
      --border: #d1d5db;
      --text-primary: #111827;
      --text-secondary: #6b7280;
      --accent: #0ea5e9;
      --accent-emerald: #10b981;
    }
    body.dark {
      --bg: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
      background: var(--bg);
      color: var(--text-primary);
      display: flex;
      min-height: 100vh;
    }

    #sidebar {
      width: 320px;
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 14px;
    }

    #main {
      flex: 1;
      display: flex;
      flex-direction: column;
      align-items: center;
      padding: 20px;
      gap: 16px;
    }

    #canvas-svg { user-select: none; cursor: crosshair; }

    .panel {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }
    .panel h3 {
      font-size: 13px;
      text-transform: uppercase;
      letter-spacing: 0.5px;
      margin-bottom: 10px;
    }

    .button-row { display: flex; flex-wrap: wrap; gap: 6px; margin: 8px 0; }

    button {
      background: var(--accent);
      color: #fff;
      border: none;
      padding: 8px 12px;
      border-radius: 6px;
      cursor: pointer;
      font-size: 13px;
      font-weight: 600;
    }
    button:disabled { opacity: 0.4; cursor: not-allowed; }
    .btn-primary { background: var(--accent-emerald); }
    .btn-secondary { background: var(--text-secondary); }

    select, input[type="range"] { width: 100%; margin: 6px 0; }
    label { display: block; font-size: 12px; color: var(--text-secondary); margin-top: 6px; }

    .step-info { font-size: 13px; color: var(--text-secondary); }
    .paused-badge {
      background: #f59e0b; color: #fff; padding: 2px 8px;
      border-radius: 4px; font-size: 11px; font-weight: 700;
    }

    .legend { display: flex; flex-wrap: wrap; gap: 12px; font-size: 13px; }
    .legend-item { display: flex; align-items: center; gap: 6px; }
    .swatch { width: 14px; height: 14px; border: 1px solid var(--border); display: inline-block; }

    .bottom { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; width: 100%; max-width: 1000px; }
    .code-block {
      font-family: 'JetBrains Mono', 'Courier New', monospace;
      font-size: 12px; line-height: 1.6; white-space: pre;
      background: var(--bg-panel); border: 1px solid var(--border);
      border-radius: 8px; padding: 12px; overflow-x: auto;
    }

    table { width: 100%; font-size: 13px; border-collapse: collapse; }
    table td, table th { padding: 4px; text-align: left; }
    .hint, .placeholder { font-size: 11px; color: var(--text-secondary); margin-top: 6px; }
    ul { margin-left: 18px; font-size: 13px; }
  </style>
</head>
<body class="{{ 'dark' if dark else '' }}">
  <div id="sidebar">
    <div id="mode-toggle">{{ mode_toggle|safe }}</div>
    <div id="algo">{{ algo_selector|safe }}</div>
    <div id="speed-panel">{{ speed|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="tools">{{ tools|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
    <div id="comparison">{{ comparison|safe }}</div>
  </div>

  <div id="main">
    {{ legend|safe }}
    <div id="canvas-svg">{{ svg|safe }}</div>
    <div class="bottom">
      <div id="info">{{ info|safe }}</div>
      <div id="pseudocode">{{ pseudocode|safe }}</div>
    </div>
  </div>

  <script>
    let dark = {{ 'true' if dark else 'false' }};
    let polling = false;

    async function post(url, data) {
      const res = await fetch(url + '?dark=' + (dark ? 1 : 0), {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function render(data) {
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.playback) document.getElementById('playback').innerHTML = data.playback;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      if (data.is_running) startPolling();
    }

    async function poll() {
      const res = await fetch('/api/state?dark=' + (dark ? 1 : 0));
      const data = await res.json();
      render(data);
      return data.is_running;
    }

    function startPolling() {
      if (polling) return;
      polling = true;
      const loop = async () => {
        const running = await poll();
        if (running) { setTimeout(loop, 30); } else { polling = false; }
      };
      setTimeout(loop, 30);
    }

    // Playback (buttons are re-rendered, so delegate)
    document.getElementById('playback').addEventListener('click', async (e) => {
      const id = e.target.id;
      if (id === 'btn-run') {
        render(await post('/api/run', {
          algorithm: document.getElementById('algo-select').value,
          speed: +document.getElementById('speed').value,
        }));
      } else if (id === 'btn-pause') {
        const paused = e.target.textContent.includes('Resume');
        render(await post(paused ? '/api/resume' : '/api/pause'));
      } else if (id === 'btn-stop') {
        render(await post('/api/stop'));
      }
    });

    // Grid tools
    document.getElementById('btn-maze').addEventListener('click', async () => {
      render(await post('/api/grid/maze', {wall_prob: +document.getElementById('wall-prob').value}));
    });
    document.getElementById('btn-clear-walls').addEventListener('click', async () => {
      render(await post('/api/grid/clear_walls'));
    });
    document.getElementById('btn-clear-path').addEventListener('click', async () => {
      render(await post('/api/grid/clear_path'));
    });
    document.getElementById('btn-reset').addEventListener('click', async () => {
      const n = +document.getElementById('grid-size').value;
      render(await post('/api/grid/reset', {rows: n, cols: n}));
    });
    document.getElementById('grid-size').addEventListener('input', (e) => {
      document.getElementById('size-val').textContent = e.target.value;
      document.getElementById('size-val-2').textContent = e.target.value;
    });
    document.getElementById('grid-size').addEventListener('change', async (e) => {
      const n = +e.target.value;
      render(await post('/api/grid/reset', {rows: n, cols: n}));
    });
    document.getElementById('wall-prob').addEventListener('input', (e) => {
      document.getElementById('wall-prob-val').textContent = e.target.value;
    });
    document.getElementById('speed').addEventListener('input', (e) => {
      document.getElementById('speed-val').textContent = e.target.value;
    });

    // Algorithm selector
    document.getElementById('algo-select').addEventListener('change', async (e) => {
      const data = await post('/api/config/algo', {algorithm: e.target.value});
      if (data.info) document.getElementById('info').innerHTML = data.info;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
    });

    // Comparison
    document.getElementById('comparison').addEventListener('click', async (e) => {
      if (e.target.id !== 'btn-compare') return;
      const data = await post('/api/compare', {
        left: document.getElementById('compare-left').value,
        right: document.getElementById('compare-right').value,
      });
      if (data.html) document.getElementById('comparison').innerHTML = data.html;
    });

    // Dark mode
    document.getElementById('dark-mode-toggle').addEventListener('change', async (e) => {
      dark = e.target.checked;
      document.body.classList.toggle('dark', dark);
      await poll();
    });

    // Mouse wall drawing
    let drawing = false;
    let paintWall = true;
    const canvas = document.getElementById('canvas-svg');

    function cellOf(target) {
      if (!target.classList || !target.classList.contains('cell')) return null;
      return {row: +target.dataset.row, col: +target.dataset.col, kind: target.classList[1]};
    }

    canvas.addEventListener('mousedown', async (e) => {
      const cell = cellOf(e.target);
      if (!cell) return;
      e.preventDefault();
      if (e.shiftKey || e.altKey) {
        render(await post('/api/grid/move', {which: e.shiftKey ? 'start' : 'end', row: cell.row, col: cell.col}));
        return;
      }
      if (cell.kind === 'start' || cell.kind === 'end') return;
      drawing = true;
      paintWall = cell.kind !== 'wall';
      render(await post('/api/grid/wall', {row: cell.row, col: cell.col, wall: paintWall}));
    });
    canvas.addEventListener('mouseover', async (e) => {
      if (!drawing) return;
      const cell = cellOf(e.target);
      if (!cell || cell.kind === 'start' || cell.kind === 'end') return;
      render(await post('/api/grid/wall', {row: cell.row, col: cell.col, wall: paintWall}));
    });
    document.addEventListener('mouseup', () => { drawing = false; });
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    cfg = workspace.config
    logging.basicConfig(
        level=logging.DEBUG if cfg.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.logger.info("Pathfinding Visualizer on http://%s:%d", cfg.host, cfg.port)
    app.run(debug=cfg.debug, host=cfg.host, port=cfg.port, threaded=True)
