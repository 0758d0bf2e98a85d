"""Click-to-retarget motion state machine.

The controller owns the active segment (per-axis cubic coefficients), the
sampled path buffer, the path cursor and the segment clock. Each frame it
receives the current time and the drained input events and decides, in this
order:

1. Quit: stop; nothing else is processed and nothing should be drawn.
2. Click: retarget from the current position with the current velocity,
   so the glide stays velocity-continuous.
3. Completion: the segment duration has elapsed; hold at the target on a
   stationary segment. This is a pure timeout, not an arrival test.
4. Tick: advance normalized time.

Afterwards the entity position is evaluated, the cursor is advanced past path
points already travelled and the point under the cursor is replaced by the
live position, so the drawn polyline always starts at the entity.

Example:
    >>> ctl = MotionController((512.0, 360.0), start_time=0.0)
    >>> ctl.update(0.25, [Click(100.0, 100.0)])
    True
    >>> ctl.update(1.25, [])
    True
    >>> ctl.position
    array([100., 100.])
"""

from __future__ import annotations
from typing import Iterable, Tuple
import logging
import numpy as np

from .events import Click, Event, Quit
from .sampler import sample_path, sample_times
from .solver import compute_coefs, evaluate, evaluate_derivative, stationary_coefs

log = logging.getLogger(__name__)


class MotionController:
    """Owns all motion state for a single entity.

    Attributes:
        segment_duration: Seconds a segment takes to reach t=1.
        resolution: Number of points in the path buffer (N).
    """

    def __init__(
        self,
        origin: Tuple[float, float],
        *,
        segment_duration: float = 1.0,
        resolution: int = 100,
        start_time: float = 0.0
    ):
        if segment_duration <= 0:
            raise ValueError(f"segment_duration must be positive, got {segment_duration}")
        if resolution < 1:
            raise ValueError(f"resolution must be at least 1, got {resolution}")

        self.segment_duration = float(segment_duration)
        self.resolution = int(resolution)

        self._target = np.array(origin, dtype=np.float64)
        self._coefs = stationary_coefs(self._target)
        self._times = sample_times(self.resolution)
        self._path = np.empty((self.resolution, 2), dtype=np.float64)
        self._position = self._target.copy()
        self._segment_start = float(start_time)
        self._t = 0.0
        self._cursor = 0
        self._resample()

    # -------------------- Read-only state --------------------

    @property
    def position(self) -> np.ndarray:
        """Entity position as of the last frame."""
        return self._position.copy()

    @property
    def target(self) -> np.ndarray:
        return self._target.copy()

    @property
    def velocity(self) -> np.ndarray:
        """Derivative of the active segment at the current t (units per segment)."""
        return evaluate_derivative(self._coefs, self._t)

    @property
    def coefs(self) -> np.ndarray:
        """Active ``(2, 4)`` coefficients; row 0 is x, row 1 is y."""
        return self._coefs.copy()

    @property
    def t(self) -> float:
        return self._t

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def path(self) -> np.ndarray:
        """The whole path buffer (read-only view)."""
        view = self._path.view()
        view.flags.writeable = False
        return view

    @property
    def render_window(self) -> np.ndarray:
        """Path points from the cursor onward, starting at the entity."""
        view = self._path[self._cursor:]
        view.flags.writeable = False
        return view

    # -------------------- Transitions --------------------

    def retarget(self, point: Tuple[float, float], now: float) -> None:
        """Start a new segment toward ``point`` from the current motion state."""
        t_now = min(self._elapsed(now), self.segment_duration) / self.segment_duration
        start = evaluate(self._coefs, t_now)
        velocity = evaluate_derivative(self._coefs, t_now)

        self._target[0] = point[0]
        self._target[1] = point[1]
        self._coefs = compute_coefs(start, self._target, velocity)
        log.debug("Retarget to (%.1f, %.1f) from (%.1f, %.1f), velocity (%.1f, %.1f)",
                  self._target[0], self._target[1], start[0], start[1], velocity[0], velocity[1])
        self._begin_segment(now)

    def complete(self, now: float) -> None:
        """Hold at the target on a stationary segment."""
        self._coefs = stationary_coefs(self._target)
        log.debug("Segment complete, holding at (%.1f, %.1f)", self._target[0], self._target[1])
        self._begin_segment(now)

    def update(self, now: float, events: Iterable[Event]) -> bool:
        """Run one frame.

        Args:
            now: Monotonic clock reading in seconds.
            events: Events drained for this frame, oldest first.

        Returns:
            ``False`` when a Quit was received (the frame must not be drawn),
            ``True`` otherwise.
        """
        events = list(events)
        if any(isinstance(event, Quit) for event in events):
            return False

        clicked = False
        for event in events:
            if isinstance(event, Click):
                self.retarget((event.x, event.y), now)
                clicked = True

        if not clicked:
            elapsed = self._elapsed(now)
            if elapsed >= self.segment_duration:
                self.complete(now)
            else:
                self._t = elapsed / self.segment_duration

        self._advance()
        return True

    # -------------------- Internals --------------------

    def _elapsed(self, now: float) -> float:
        return now - self._segment_start

    def _begin_segment(self, now: float) -> None:
        self._segment_start = float(now)
        self._t = 0.0
        self._cursor = 0
        self._resample()

    def _resample(self) -> None:
        sample_path(self._coefs[0], self._coefs[1], self.resolution, out=self._path, times=self._times)

    def _advance(self) -> None:
        self._position[:] = evaluate(self._coefs, self._t)

        step = 1.0 / self.resolution
        while self._cursor + 1 < self.resolution and self._cursor * step < self._t:
            self._cursor += 1

        # Join the drawn path to the live entity position
        self._path[self._cursor] = self._position
