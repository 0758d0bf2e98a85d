"""Discretize a solved segment into a fixed number of path points."""

from __future__ import annotations
from typing import Optional
import numpy as np

from .solver import evaluate


def sample_times(n: int) -> np.ndarray:
    """Normalized sample times ``[0, 1/n, ..., (n-1)/n]``.

    t=1 is not sampled; the last point sits one step short of the target.
    """
    if n < 1:
        raise ValueError(f"Path resolution must be at least 1, got {n}")
    return np.arange(n, dtype=np.float64) / n


def sample_path(
    coefs_x: np.ndarray,
    coefs_y: np.ndarray,
    n: int,
    out: Optional[np.ndarray] = None,
    *,
    times: Optional[np.ndarray] = None
) -> np.ndarray:
    """Sample both axes of a segment at ``n`` evenly spaced times.

    Args:
        coefs_x: ``[a0, a1, a2, a3]`` for the x axis.
        coefs_y: ``[a0, a1, a2, a3]`` for the y axis.
        n: Number of points.
        out: Optional ``(n, 2)`` buffer to fill in place.
        times: Precomputed ``sample_times(n)``, to skip rebuilding it.

    Returns:
        ``(n, 2)`` array of positions; ``out`` itself when one was given.

    Example:
        >>> from glidepath.solver import compute_coefs
        >>> pts = sample_path(compute_coefs(0, 10, 0), compute_coefs(0, 0, 0), 4)
        >>> pts.shape
        (4, 2)
    """
    if times is None:
        times = sample_times(n)
    elif len(times) != n:
        raise ValueError(f"Expected {n} sample times, got {len(times)}")

    if out is None:
        out = np.empty((n, 2), dtype=np.float64)
    elif out.shape != (n, 2):
        raise ValueError(f"Path buffer must have shape {(n, 2)}, got {out.shape}")

    out[:, 0] = evaluate(coefs_x, times)
    out[:, 1] = evaluate(coefs_y, times)
    return out
