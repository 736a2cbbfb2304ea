"""
Transport Animation Engine
==========================

Frame-driven loop around the pure handover schedule in ``schedule``.

The engine separates WHAT the scene looks like at time t (a pure function,
``TransportEngine.frame_at``) from HOW OFTEN it is sampled (a frame
scheduler). Each frame:

    1. latches the start timestamp on the first frame after ``start()``
    2. folds the elapsed time into a cycle fraction t ∈ [0, 1)
    3. derives the TransportState and both trap waveforms from t
    4. hands the TransportFrame to ``on_frame``
    5. requests the next frame from the scheduler

``stop()`` cancels the pending frame request; nothing else needs tearing
down. ``start()`` after ``stop()`` begins again at t = 0.

Schedulers
----------
A scheduler only needs two methods:

    request_frame(callback) -> handle     callback(timestamp) is called once
    cancel_frame(handle)                  drop a pending request

``ManualFrameScheduler`` fires callbacks when ``advance(timestamp)`` is
called, for tests and offline rendering. ``MatplotlibFrameScheduler`` in
``utils.visualization`` binds the loop to a figure canvas timer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import count
from typing import Callable, Dict, Iterable, List, Optional

from ..configurations import TransportConfig
from ..constants import PHASE_RING_RATE
from .schedule import (
    PATH_DIAGONAL,
    TransportState,
    WaveformSeries,
    cursor_time,
    generate_waveforms,
    normalize_path_policy,
    normalized_time,
    transport_state,
)


FrameCallback = Callable[[float], None]


# =============================================================================
# SCHEDULERS
# =============================================================================

class FrameScheduler(ABC):
    """Source of animation frames (one callback per request)."""

    @abstractmethod
    def request_frame(self, callback: FrameCallback):
        """Schedule ``callback(timestamp)`` for the next frame; return a handle."""
        pass

    @abstractmethod
    def cancel_frame(self, handle) -> None:
        """Cancel a pending request. Unknown or fired handles are ignored."""
        pass


class ManualFrameScheduler(FrameScheduler):
    """
    Scheduler driven by explicit timestamps.

    Example
    -------
    >>> scheduler = ManualFrameScheduler()
    >>> engine = TransportEngine(scheduler=scheduler)
    >>> engine.start()
    >>> scheduler.advance(0.0)
    1
    >>> engine.last_frame.state.stage
    'handover_start'
    """

    def __init__(self):
        self._pending: Dict[int, FrameCallback] = {}
        self._ids = count()

    @property
    def pending(self) -> int:
        """Number of outstanding frame requests."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel_frame(self, handle) -> None:
        self._pending.pop(handle, None)

    def advance(self, timestamp: float) -> int:
        """
        Fire every request pending before this call with ``timestamp``.

        Requests made by the callbacks themselves wait for the next advance.

        Returns
        -------
        int
            Number of callbacks fired.
        """
        due = list(self._pending.items())
        self._pending.clear()
        for _, callback in due:
            callback(timestamp)
        return len(due)


# =============================================================================
# ENGINE
# =============================================================================

@dataclass
class TransportFrame:
    """
    Everything the transport view draws for one frame.

    Attributes
    ----------
    timestamp : float
        Clock value of the frame (seconds).
    elapsed : float
        Seconds since the first frame of the current run.
    state : TransportState
        Scene state at the current cycle time.
    waveforms : WaveformSeries
        Both trap-depth waveforms over one cycle.
    cursor_time : float
        Position of the "now" marker on the waveform time axis (seconds).
    ring_angle : float
        Rotation of the qubit phase ring drawn on the atom (degrees).
    """
    timestamp: float
    elapsed: float
    state: TransportState
    waveforms: WaveformSeries
    cursor_time: float
    ring_angle: float


class TransportEngine:
    """
    Self-rescheduling transport animation.

    Parameters
    ----------
    config : TransportConfig, optional
        Cycle timing and geometry.
    path_policy : str
        "diagonal" or "sequential" (aliases accepted).
    scheduler : FrameScheduler, optional
        Frame source. Defaults to a ManualFrameScheduler.
    on_frame : callable, optional
        Called with every TransportFrame.
    verbose : bool
        Print start/stop messages.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        path_policy: str = PATH_DIAGONAL,
        scheduler: Optional[FrameScheduler] = None,
        on_frame: Optional[Callable[[TransportFrame], None]] = None,
        verbose: bool = False,
    ):
        self.config = config if config is not None else TransportConfig()
        self.path_policy = normalize_path_policy(path_policy)
        self.scheduler = scheduler if scheduler is not None else ManualFrameScheduler()
        self.on_frame = on_frame
        self.verbose = verbose

        self.last_frame: Optional[TransportFrame] = None
        self._handle = None
        self._start_timestamp: Optional[float] = None

    @property
    def running(self) -> bool:
        return self._handle is not None

    def set_path_policy(self, path_policy: str) -> None:
        """Switch path policy; applies from the next frame."""
        self.path_policy = normalize_path_policy(path_policy)

    def start(self) -> None:
        """Begin a fresh run at t = 0. No-op if already running."""
        if self.running:
            return
        self._start_timestamp = None
        self.last_frame = None
        self._handle = self.scheduler.request_frame(self._on_frame)
        if self.verbose:
            print(f"Transport animation started ({self.path_policy} path, "
                  f"{self.config.cycle_duration:.1f} s cycle)")

    def stop(self) -> None:
        """Cancel the pending frame. Safe to call repeatedly."""
        if self._handle is None:
            return
        self.scheduler.cancel_frame(self._handle)
        self._handle = None
        if self.verbose:
            print("Transport animation stopped")

    def frame_at(self, timestamp: float, start_timestamp: float = 0.0) -> TransportFrame:
        """
        Pure frame computation for a clock value.

        Parameters
        ----------
        timestamp : float
            Current clock value (seconds).
        start_timestamp : float
            Clock value of the first frame. Earlier timestamps clamp to t = 0.
        """
        elapsed = timestamp - start_timestamp
        t = normalized_time(elapsed, self.config)
        return TransportFrame(
            timestamp=timestamp,
            elapsed=max(0.0, elapsed),
            state=transport_state(t, self.path_policy, self.config),
            waveforms=generate_waveforms(self.config),
            cursor_time=cursor_time(t, self.config),
            ring_angle=(timestamp * PHASE_RING_RATE) % 360.0,
        )

    def _on_frame(self, timestamp: float) -> None:
        handle = self._handle
        if handle is None:
            return
        if self._start_timestamp is None:
            self._start_timestamp = timestamp

        frame = self.frame_at(timestamp, self._start_timestamp)
        self.last_frame = frame
        if self.on_frame is not None:
            self.on_frame(frame)

        # on_frame may have stopped or restarted the engine; a restart owns
        # its own request
        if self._handle is handle:
            self._handle = self.scheduler.request_frame(self._on_frame)


def render_frames(timestamps: Iterable[float],
                  config: Optional[TransportConfig] = None,
                  path_policy: str = PATH_DIAGONAL) -> List[TransportFrame]:
    """
    Run a fresh engine offline over ``timestamps`` and collect its frames.

    The first timestamp becomes t = 0.
    """
    scheduler = ManualFrameScheduler()
    frames: List[TransportFrame] = []
    engine = TransportEngine(config=config, path_policy=path_policy,
                             scheduler=scheduler, on_frame=frames.append)
    engine.start()
    for timestamp in timestamps:
        scheduler.advance(timestamp)
    engine.stop()
    return frames
