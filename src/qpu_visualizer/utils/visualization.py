"""
Explainer Visualization Tools
=============================

Matplotlib renderings of every explainer view, plus a frame scheduler that
drives the transport animation from a figure canvas timer.

Key Functions
-------------
- plot_pulse_comparison(): Bloch sphere with single vs composite trajectories
- plot_error_sweep(): endpoint error vs calibration error for both pulses
- plot_decay_curve(): stretched-exponential fit with measured points
- plot_rb_curves(): RB / IRB scatter with fit curves
- plot_roi_frames(), plot_readout_histograms(): weighted imaging readout
- plot_array_loading(): occupation map of the tweezer grid
- TransportView / animate_transport(): live AOD/SLM handover animation
"""

import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Circle

from ..bloch.geometry import ScreenPoint, sphere_wireframe
from ..bloch.pulse_trajectories import PulseComparison, compare_pulses, endpoint_error_sweep
from ..benchmarking.decay_curves import DecaySample, measured_points
from ..benchmarking.randomized_benchmarking import RBDataset
from ..configurations import TransportConfig
from ..constants import SPHERE_RADIUS, VIEWPORT_WIDTH, VIEWPORT_HEIGHT
from ..imaging.array_loading import ArrayLoadingResult
from ..imaging.readout import ReadoutComparison
from ..transport.engine import FrameScheduler, TransportEngine, TransportFrame
from ..transport.schedule import PATH_DIAGONAL, PATH_SEQUENTIAL, normalize_path_policy


COLOR_SINGLE = "#ef4444"
COLOR_COMPOSITE = "#10b981"
COLOR_SLM = "#6366f1"
COLOR_AOD = "#f59e0b"
COLOR_ATOM = "#22d3ee"


def _xy(points: Sequence[ScreenPoint]) -> Tuple[List[float], List[float]]:
    return [p.cx for p in points], [p.cy for p in points]


# =============================================================================
# BLOCH SPHERE
# =============================================================================

def plot_bloch_wireframe(ax: plt.Axes, radius: float = SPHERE_RADIUS) -> plt.Axes:
    """Outline, equator, meridian, pole axis and |0⟩/|1⟩ labels in screen space."""
    frame = sphere_wireframe(radius)
    center = frame["center"]

    ax.add_patch(Circle((center.cx, center.cy), radius, fill=False,
                        edgecolor="0.6", linewidth=1.0))
    ax.plot(*_xy(frame["equator"]), color="0.7", linewidth=0.8, linestyle="--")
    ax.plot(*_xy(frame["meridian"]), color="0.8", linewidth=0.6, linestyle=":")

    north, south = frame["north"], frame["south"]
    ax.plot([north.cx, south.cx], [north.cy, south.cy], color="0.5", linewidth=0.8)
    ax.annotate("|0⟩", (north.cx, north.cy), textcoords="offset points", xytext=(6, -10))
    ax.annotate("|1⟩", (south.cx, south.cy), textcoords="offset points", xytext=(6, 4))

    ax.set_xlim(0, VIEWPORT_WIDTH)
    # screen y points down
    ax.set_ylim(VIEWPORT_HEIGHT, 0)
    ax.set_aspect("equal")
    ax.axis("off")
    return ax


def plot_pulse_comparison(
    comparison: Optional[PulseComparison] = None,
    calibration_error: float = 0.1,
    ax: Optional[plt.Axes] = None,
    figsize: Tuple[float, float] = (6, 5),
) -> plt.Axes:
    """
    Draw both pulse trajectories on the projected Bloch sphere.

    Parameters
    ----------
    comparison : PulseComparison, optional
        Precomputed trajectories. Computed from ``calibration_error`` if None.
    calibration_error : float
        Fractional rotation error ε used when ``comparison`` is None.
    ax : plt.Axes, optional
        Axes to plot on. If None, creates new figure.

    Returns
    -------
    plt.Axes
    """
    if comparison is None:
        comparison = compare_pulses(calibration_error)
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    plot_bloch_wireframe(ax)

    sx, sy = _xy(comparison.single_points)
    cx, cy = _xy(comparison.composite_points)
    ax.plot(sx, sy, color=COLOR_SINGLE, linewidth=2,
            label=f"Single pulse (error {comparison.single_error:.1f})")
    ax.plot(cx, cy, color=COLOR_COMPOSITE, linewidth=2,
            label=f"Composite (error {comparison.composite_error:.1f})")
    ax.scatter([sx[-1], cx[-1]], [sy[-1], cy[-1]],
               c=[COLOR_SINGLE, COLOR_COMPOSITE], s=40, zorder=5)

    ax.set_title(f"Calibration error ε = {comparison.calibration_error:+.0%}", fontsize=12)
    ax.legend(loc="upper left", fontsize=8)
    return ax


def plot_error_sweep(
    errors: Optional[np.ndarray] = None,
    ax: Optional[plt.Axes] = None,
    figsize: Tuple[float, float] = (7, 4),
) -> plt.Axes:
    """Endpoint distance from |1⟩ (in sphere radii) versus calibration error."""
    errors, single, composite = endpoint_error_sweep(errors)
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    ax.plot(errors * 100, single / SPHERE_RADIUS, color=COLOR_SINGLE, linewidth=2,
            label="Single pulse")
    ax.plot(errors * 100, composite / SPHERE_RADIUS, color=COLOR_COMPOSITE, linewidth=2,
            label="Composite pulse")

    ax.set_xlabel("Calibration error (%)", fontsize=12)
    ax.set_ylabel("Endpoint error (R)", fontsize=12)
    ax.grid(True, alpha=0.3)
    ax.set_axisbelow(True)
    ax.legend()
    plt.tight_layout()
    return ax


# =============================================================================
# BENCHMARKING CHARTS
# =============================================================================

def plot_decay_curve(
    samples: Sequence[DecaySample],
    ax: Optional[plt.Axes] = None,
    label: str = "Fit",
    time_unit: str = "s",
    title: Optional[str] = None,
    figsize: Tuple[float, float] = (7, 4),
) -> Optional[plt.Axes]:
    """Filled fit curve with the sparse measured points on top. None if ``samples`` is empty."""
    if not samples:
        print("No samples to plot!")
        return None
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    times = [s.time for s in samples]
    fits = [s.fit for s in samples]
    ax.fill_between(times, fits, color=COLOR_COMPOSITE, alpha=0.2)
    ax.plot(times, fits, color=COLOR_COMPOSITE, linewidth=2, label=label)

    mt, mv = measured_points(samples)
    ax.scatter(mt, mv, color="#eab308", s=20, zorder=5, label="Measured Data")

    ax.set_xlabel(f"Time ({time_unit})", fontsize=12)
    ax.set_ylabel("Population", fontsize=12)
    if title is not None:
        ax.set_title(title, fontsize=14)
    ax.set_ylim(-0.05, 1.1)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")
    plt.tight_layout()
    return ax


def plot_rb_curves(
    dataset: RBDataset,
    ax: Optional[plt.Axes] = None,
    figsize: Tuple[float, float] = (7, 4),
) -> plt.Axes:
    """Scatter of sequence outcomes with the reference (and interleaved) fit."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    scatter_color = COLOR_AOD if dataset.mode == "interleaved" else COLOR_SLM
    ax.scatter([s.length for s in dataset.scatter], [s.y for s in dataset.scatter],
               color=scatter_color, s=8, alpha=0.4, edgecolors="none",
               label=f"{dataset.mode.capitalize()} sequences")

    ax.plot([p.length for p in dataset.reference_fit],
            [p.fit for p in dataset.reference_fit],
            color=COLOR_SLM, linewidth=2, label="Standard RB fit")
    if dataset.interleaved_fit:
        ax.plot([p.length for p in dataset.interleaved_fit],
                [p.fit for p in dataset.interleaved_fit],
                color=COLOR_AOD, linewidth=2, linestyle="--", label="Interleaved fit")

    ax.set_xlabel("Sequence length m", fontsize=12)
    ax.set_ylabel("Return probability", fontsize=12)
    ax.set_ylim(0.45, 1.02)
    ax.grid(True, alpha=0.3)
    ax.set_axisbelow(True)
    ax.legend(loc="upper right")
    plt.tight_layout()
    return ax


# =============================================================================
# IMAGING
# =============================================================================

def plot_roi_frames(
    raw: np.ndarray,
    weights: np.ndarray,
    axes: Optional[Sequence[plt.Axes]] = None,
    figsize: Tuple[float, float] = (9, 3),
) -> Sequence[plt.Axes]:
    """Raw ROI, weight matrix and weighted ROI side by side."""
    if axes is None:
        fig, axes = plt.subplots(1, 3, figsize=figsize)

    panels = [
        (raw, "Raw (S)", "Blues"),
        (weights, "Weight (W)", "Greens"),
        (raw * weights, "Weighted (S·W)", "Purples"),
    ]
    for ax, (data, title, cmap) in zip(axes, panels):
        ax.imshow(np.clip(data, 0, 1), cmap=cmap, vmin=0, vmax=1)
        ax.set_title(title, fontsize=10)
        ax.set_xticks([])
        ax.set_yticks([])
    return axes


def plot_readout_histograms(
    comparison: ReadoutComparison,
    axes: Optional[Sequence[plt.Axes]] = None,
    figsize: Tuple[float, float] = (10, 3.5),
) -> Sequence[plt.Axes]:
    """Unweighted and weighted photon-count histograms, threshold on the weighted one."""
    if axes is None:
        fig, axes = plt.subplots(1, 2, figsize=figsize, sharey=True)

    panels = [
        (comparison.unweighted, "Unweighted Distribution", comparison.unweighted_overlap, False),
        (comparison.weighted, "Weighted Distribution", comparison.weighted_overlap, True),
    ]
    for ax, (records, title, overlap, show_threshold) in zip(axes, panels):
        counts = [r["counts"] for r in records]
        for key, color, name in (("background", COLOR_SINGLE, "Background"),
                                 ("atom", COLOR_COMPOSITE, "Atom")):
            values = [r[key] for r in records]
            ax.fill_between(counts, values, color=color, alpha=0.2)
            ax.plot(counts, values, color=color, linewidth=2, label=name)
        if show_threshold:
            ax.axvline(comparison.threshold, color="0.6", linestyle="--", label="Threshold")
        ax.set_title(f"{title} (overlap {overlap:.1%})", fontsize=10)
        ax.set_xlabel("Photon counts", fontsize=10)
        ax.legend(fontsize=8)

    plt.tight_layout()
    return axes


def plot_array_loading(
    result: ArrayLoadingResult,
    ax: Optional[plt.Axes] = None,
    figsize: Tuple[float, float] = (6, 4),
) -> plt.Axes:
    """Occupation map: loaded sites bright, empty traps faint."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    empty = ~result.loaded
    ax.scatter(result.x[empty], result.y[empty], s=6, color="0.3", alpha=0.4)
    ax.scatter(result.x[result.loaded], result.y[result.loaded], s=10, color=COLOR_ATOM)

    ax.set_title(f"{result.loaded_count} loaded ({result.fill_fraction:.0%}), "
                 f"{result.scaled_qubits} qubits (scaled)", fontsize=11)
    ax.invert_yaxis()
    ax.set_aspect("equal")
    ax.axis("off")
    return ax


# =============================================================================
# TRANSPORT ANIMATION
# =============================================================================

class MatplotlibFrameScheduler(FrameScheduler):
    """
    Frame scheduler backed by single-shot canvas timers.

    Parameters
    ----------
    canvas : FigureCanvasBase
        Canvas providing ``new_timer``.
    interval_ms : int
        Delay before each requested frame fires.
    clock : callable
        Timestamp source in seconds.
    """

    def __init__(self, canvas, interval_ms: int = 16,
                 clock: Callable[[], float] = time.perf_counter):
        self.canvas = canvas
        self.interval_ms = interval_ms
        self.clock = clock
        self._timers: Dict[int, Tuple[object, Callable[[float], None]]] = {}
        self._next_id = 0

    @property
    def pending(self) -> int:
        return len(self._timers)

    def request_frame(self, callback: Callable[[float], None]) -> int:
        handle = self._next_id
        self._next_id += 1

        timer = self.canvas.new_timer(interval=self.interval_ms)
        timer.single_shot = True
        timer.add_callback(self._fire, handle)
        self._timers[handle] = (timer, callback)
        timer.start()
        return handle

    def cancel_frame(self, handle) -> None:
        entry = self._timers.pop(handle, None)
        if entry is not None:
            entry[0].stop()

    def _fire(self, handle: int) -> None:
        entry = self._timers.pop(handle, None)
        if entry is None:
            return
        entry[1](self.clock())


class TransportView:
    """
    Three-panel transport figure: side view, 2-D path inset, trap waveforms.

    Call :meth:`update` with each TransportFrame.
    """

    def __init__(self, config: Optional[TransportConfig] = None,
                 path_policy: str = PATH_DIAGONAL, figsize: Tuple[float, float] = (10, 6)):
        self.config = config if config is not None else TransportConfig()
        self.fig = plt.figure(figsize=figsize)
        grid = self.fig.add_gridspec(2, 3)
        self.ax_side = self.fig.add_subplot(grid[0, :2])
        self.ax_path = self.fig.add_subplot(grid[0, 2])
        self.ax_wave = self.fig.add_subplot(grid[1, :])

        self._build_side()
        self._build_path(path_policy)
        self._build_waveforms()

    def _build_side(self):
        c = self.config
        ax = self.ax_side
        ax.set_xlim(0, c.start_x + c.end_x)
        ax.set_ylim(0, 200)
        ax.axis("off")
        for site in (c.start_x, c.end_x):
            ax.plot([site, site], [0, 100], color="0.85", linewidth=1)

        self.slm_trap, = ax.plot([c.start_x, c.start_x], [0, 100], color=COLOR_SLM, linewidth=6)
        self.aod_trap, = ax.plot([c.start_x, c.start_x], [100, 200], color=COLOR_AOD, linewidth=6)
        self.atom = Circle((c.start_x, 100), 10, color=COLOR_ATOM, zorder=5)
        ax.add_patch(self.atom)
        self.ring, = ax.plot([], [], color="white", linewidth=2, zorder=6)
        self.title = ax.set_title("", fontsize=12)

    def _build_path(self, path_policy: str):
        c = self.config
        ax = self.ax_path
        (x0, y0), (x1, y1) = c.start_xy, c.end_xy
        ax.set_xlim(0, 150)
        ax.set_ylim(150, 0)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.scatter([x0, x1], [y0, y1], s=60, facecolors="none", edgecolors=COLOR_SLM)
        self.path_line, = ax.plot([], [], color="0.6", linestyle="--")
        self.path_atom, = ax.plot([x0], [y0], "o", color=COLOR_ATOM)
        self.set_path_policy(path_policy)

    def _build_waveforms(self):
        ax = self.ax_wave
        ax.set_xlim(0, self.config.cycle_duration)
        ax.set_ylim(-0.05, 1.1)
        ax.set_xlabel("Time (s)", fontsize=11)
        ax.set_ylabel("Trap depth", fontsize=11)
        ax.grid(True, alpha=0.3)
        self.slm_wave, = ax.plot([], [], color=COLOR_SLM, linewidth=2, label="SLM")
        self.aod_wave, = ax.plot([], [], color=COLOR_AOD, linewidth=2, label="AOD")
        self.cursor = ax.axvline(0.0, color="0.4", linestyle=":")
        ax.legend(loc="upper right")

    def set_path_policy(self, path_policy: str) -> None:
        """Redraw the dashed reference path for a policy."""
        path_policy = normalize_path_policy(path_policy)
        (x0, y0), (x1, y1) = self.config.start_xy, self.config.end_xy
        if path_policy == PATH_SEQUENTIAL:
            self.path_line.set_data([x0, x1, x1], [y0, y0, y1])
        else:
            self.path_line.set_data([x0, x1], [y0, y1])

    def update(self, frame: TransportFrame) -> None:
        state = frame.state

        self.slm_trap.set_xdata([state.slm_x, state.slm_x])
        self.slm_trap.set_alpha(max(state.slm_power, 0.05))
        self.aod_trap.set_xdata([state.x, state.x])
        self.aod_trap.set_alpha(max(state.aod_power, 0.05))

        self.atom.center = (state.x, 100)
        angle = np.deg2rad(frame.ring_angle)
        self.ring.set_data([state.x, state.x + 10 * np.cos(angle)],
                           [100, 100 + 10 * np.sin(angle)])
        self.title.set_text(state.label)

        self.path_atom.set_data([state.position[0]], [state.position[1]])

        self.slm_wave.set_data(*zip(*frame.waveforms.slm))
        self.aod_wave.set_data(*zip(*frame.waveforms.aod))
        self.cursor.set_xdata([frame.cursor_time, frame.cursor_time])


def animate_transport(
    path_policy: str = PATH_DIAGONAL,
    config: Optional[TransportConfig] = None,
    interval_ms: int = 16,
    verbose: bool = False,
) -> Tuple[TransportEngine, TransportView]:
    """
    Start a live transport animation on a new figure.

    The engine keeps running until ``engine.stop()`` or the figure closes.
    Call ``plt.show()`` to display it.
    """
    view = TransportView(config=config, path_policy=path_policy)
    scheduler = MatplotlibFrameScheduler(view.fig.canvas, interval_ms=interval_ms)

    def _draw(frame: TransportFrame) -> None:
        view.update(frame)
        view.fig.canvas.draw_idle()

    engine = TransportEngine(config=view.config, path_policy=path_policy,
                             scheduler=scheduler, on_frame=_draw, verbose=verbose)
    view.fig.canvas.mpl_connect("close_event", lambda event: engine.stop())
    engine.start()
    return engine, view
