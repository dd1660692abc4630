"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls   – visualize / pause-resume / stop + progress
  • algorithm_selector  – dropdown of every registered algorithm
  • speed_control       – 1-10 slider
  • grid_tools          – size slider, maze, clear walls/path, reset
  • algorithm_info      – pros / cons / complexity card
  • pseudocode_viewer   – the selected algorithm's pseudocode
  • analytics_panel     – cells visited, path length, wall time, …
  • comparison_panel    – side-by-side metrics of two runs
  • mode_toggle         – light / dark

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).
  - The main app stitches them together.
"""

from typing import List, Optional

from algorithms import AlgoInfo
from engine import RunMetrics, ComparisonResult, MIN_SPEED, MAX_SPEED


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    is_running: bool = False,
    is_paused: bool = False,
    can_pause: bool = False,
    progress: float = 0.0,
) -> str:
    busy = is_running or is_paused
    pause_label = "▶ Resume" if is_paused else "⏸ Pause"

    return f"""
    <div class="panel playback-controls">
      <h3>⏯ Playback</h3>
      <div class="button-row">
        <button id="btn-run" class="btn-primary" {'disabled' if busy else ''}>▶ Visualize</button>
        <button id="btn-pause" {'' if can_pause else 'disabled'}>{pause_label}</button>
        <button id="btn-stop" class="btn-secondary" {'' if busy else 'disabled'}>■ Stop</button>
      </div>
      <div class="step-info">
        Progress <span id="progress">{int(progress * 100)}</span>%
        {' <span class="paused-badge">PAUSED</span>' if is_paused else ''}
      </div>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Selector
# ---------------------------------------------------------------------------
def algorithm_selector(algorithms: List[AlgoInfo], selected_key: str = "bfs") -> str:
    options = []
    for algo in algorithms:
        sel = 'selected' if algo.key == selected_key else ''
        options.append(f'<option value="{algo.key}" {sel}>{algo.label}</option>')

    return f"""
    <div class="panel algorithm-selector">
      <h3>🧠 Algorithm</h3>
      <select id="algo-select">
        {''.join(options)}
      </select>
    </div>
    """


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def speed_control(speed: int = 5) -> str:
    return f"""
    <div class="panel speed-control">
      <h3>⚡ Speed</h3>
      <input type="range" id="speed" min="{MIN_SPEED}" max="{MAX_SPEED}" step="1" value="{speed}">
      <span id="speed-val">{speed}</span>
    </div>
    """


# ---------------------------------------------------------------------------
# Grid Tools
# ---------------------------------------------------------------------------
def grid_tools(size: int = 20, min_size: int = 10, max_size: int = 25, wall_prob: float = 0.3) -> str:
    return f"""
    <div class="panel grid-tools">
      <h3>🧱 Grid</h3>
      <label>Size: <span id="size-val">{size}</span> × <span id="size-val-2">{size}</span></label>
      <input type="range" id="grid-size" min="{min_size}" max="{max_size}" step="1" value="{size}">
      <label>Wall %: <span id="wall-prob-val">{wall_prob}</span></label>
      <input type="range" id="wall-prob" min="0" max="0.6" step="0.05" value="{wall_prob}">
      <div class="button-row">
        <button id="btn-maze" class="btn-secondary">Maze</button>
        <button id="btn-clear-walls" class="btn-secondary">Clear Walls</button>
        <button id="btn-clear-path" class="btn-secondary">Clear Path</button>
        <button id="btn-reset" class="btn-secondary">Reset</button>
      </div>
      <p class="hint">Click or drag to draw walls. Shift-click moves the start, Alt-click moves the end.</p>
    </div>
    """


# ---------------------------------------------------------------------------
# Algorithm Info Card
# ---------------------------------------------------------------------------
def algorithm_info(info: Optional[AlgoInfo]) -> str:
    if info is None:
        return '<div class="panel algorithm-info"><p class="placeholder">Select an algorithm.</p></div>'

    pros = "".join(f"<li>{_escape(p)}</li>" for p in info.pros)
    cons = "".join(f"<li>{_escape(c)}</li>" for c in info.cons)
    badge = "✅ Shortest path" if info.optimal else "⚠️ Not always shortest"

    return f"""
    <div class="panel algorithm-info">
      <h3>📘 {info.label}</h3>
      <p>{_escape(info.description)}</p>
      <p class="badge">{badge}</p>
      <table>
        <tr><td>Time:</td><td>{info.complexity_time}</td></tr>
        <tr><td>Space:</td><td>{info.complexity_space}</td></tr>
      </table>
      <div class="pros"><strong>Pros</strong><ul>{pros}</ul></div>
      {f'<div class="cons"><strong>Cons</strong><ul>{cons}</ul></div>' if cons else ''}
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str]) -> str:
    if not pseudocode_lines:
        return """
        <div class="code-block">
          <div class="placeholder">Select an algorithm to view pseudocode</div>
        </div>
        """

    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        lines_html.append(f'<div class="code-line" data-line="{i}">{_escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>📊 Analytics</h3>
          <p class="placeholder">Run an algorithm to see metrics.</p>
        </div>
        """

    path_status = "✅ Found" if metrics.success else "❌ Not Found"

    return f"""
    <div class="panel analytics-panel">
      <h3>📊 Analytics — {metrics.algo_label}</h3>
      <table>
        <tr><td>Cells Visited:</td><td><strong>{metrics.visited_count}</strong></td></tr>
        <tr><td>Unique Cells:</td><td><strong>{metrics.unique_visited}</strong></td></tr>
        <tr><td>Path Length:</td><td><strong>{metrics.path_length} steps</strong></td></tr>
        <tr><td>Search Time:</td><td><strong>{metrics.wall_time_ms:.2f} ms</strong></td></tr>
        <tr><td>Path:</td><td><strong>{path_status}</strong></td></tr>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Comparison Panel (side-by-side)
# ---------------------------------------------------------------------------
def comparison_panel(
    algorithms: List[AlgoInfo],
    comp: Optional[ComparisonResult] = None,
) -> str:
    def picker(el_id: str, selected: str) -> str:
        opts = "".join(
            f'<option value="{a.key}" {"selected" if a.key == selected else ""}>{a.label}</option>'
            for a in algorithms
        )
        return f'<select id="{el_id}">{opts}</select>'

    left_key  = comp.left.algo_key  if comp else "bfs"
    right_key = comp.right.algo_key if comp else "astar"
    pickers = f"""
      {picker("compare-left", left_key)}
      {picker("compare-right", right_key)}
      <button id="btn-compare" class="btn-secondary">Compare</button>
    """

    if not comp:
        return f"""
        <div class="panel comparison-panel">
          <h3>⚖️ Compare</h3>
          {pickers}
          <p class="placeholder">Run two algorithms on the same grid to compare.</p>
        </div>
        """

    left, right = comp.left, comp.right

    def winner_badge(winner_label):
        if winner_label == "tie":
            return "🟰 Tie"
        return f"👑 {winner_label}"

    def path_cell(m: RunMetrics) -> str:
        return str(m.path_length) if m.success else "—"

    return f"""
    <div class="panel comparison-panel">
      <h3>⚖️ {left.algo_label} vs {right.algo_label}</h3>
      {pickers}
      <table class="comparison-table">
        <thead>
          <tr><th>Metric</th><th>{left.algo_label}</th><th>{right.algo_label}</th><th>Winner</th></tr>
        </thead>
        <tbody>
          <tr>
            <td>Cells Visited</td>
            <td>{left.visited_count}</td>
            <td>{right.visited_count}</td>
            <td>{winner_badge(comp.winner_visited)}</td>
          </tr>
          <tr>
            <td>Path Length</td>
            <td>{path_cell(left)}</td>
            <td>{path_cell(right)}</td>
            <td>{winner_badge(comp.winner_path)}</td>
          </tr>
          <tr>
            <td>Search Time</td>
            <td>{left.wall_time_ms:.2f} ms</td>
            <td>{right.wall_time_ms:.2f} ms</td>
            <td>—</td>
          </tr>
        </tbody>
      </table>
    </div>
    """


# ---------------------------------------------------------------------------
# Mode Toggle (light / dark)
# ---------------------------------------------------------------------------
def mode_toggle(dark: bool = False) -> str:
    return f"""
    <div class="panel mode-toggle">
      <label>
        <input type="checkbox" id="dark-mode-toggle" {'checked' if dark else ''}>
        Dark Mode
      </label>
    </div>
    """
