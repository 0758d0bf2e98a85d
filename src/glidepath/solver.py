"""Cubic trajectory math for the glide path.

A segment is a cubic polynomial per axis in normalized time t ∈ [0, 1]:

    p(t) = a3·t³ + a2·t² + a1·t + a0

Coefficients are stored lowest order first, ``[a0, a1, a2, a3]``, on the last
array axis. The boundary conditions are always:

- p(0) = start, p'(0) = start velocity
- p(1) = end,   p'(1) = 0

so every segment arrives at rest. The x and y axes are solved independently;
passing per-axis arrays simply broadcasts the same formulas.
"""

from __future__ import annotations
from typing import Union
import numpy as np

ArrayLike = Union[float, np.ndarray]


def compute_coefs(
    start: ArrayLike,
    end: ArrayLike,
    start_velocity: ArrayLike
) -> np.ndarray:
    """Solve the cubic that leaves ``start`` with ``start_velocity`` and stops at ``end``.

    Args:
        start: Start position (scalar, or one value per axis).
        end: End position, same shape as ``start``.
        start_velocity: Velocity at t=0 in units per segment.

    Returns:
        Array of shape ``(..., 4)`` holding ``[a0, a1, a2, a3]``.

    Example:
        >>> compute_coefs(0.0, 1.0, 0.0)
        array([ 0.,  0.,  3., -2.])
    """
    s = np.asarray(start, dtype=np.float64)
    e = np.asarray(end, dtype=np.float64)
    v = np.asarray(start_velocity, dtype=np.float64)

    a0 = s
    a1 = v
    a2 = -3.0 * s + 3.0 * e - 2.0 * v
    a3 = 2.0 * s - 2.0 * e + v
    return np.stack(np.broadcast_arrays(a0, a1, a2, a3), axis=-1)


def stationary_coefs(position: ArrayLike) -> np.ndarray:
    """Coefficients of a segment that holds ``position`` for all t."""
    return compute_coefs(position, position, np.zeros_like(np.asarray(position, dtype=np.float64)))


def evaluate(coefs: np.ndarray, t: ArrayLike) -> ArrayLike:
    """Position on the cubic at normalized time ``t``.

    Args:
        coefs: ``[a0, a1, a2, a3]`` for one axis, or ``(axes, 4)`` for several.
        t: Normalized time. A scalar evaluates every axis at the same t;
           an array evaluates a single-axis ``coefs`` at each t.

    Returns:
        The evaluated position(s).
    """
    c = np.asarray(coefs)
    return ((c[..., 3] * t + c[..., 2]) * t + c[..., 1]) * t + c[..., 0]


def evaluate_derivative(coefs: np.ndarray, t: ArrayLike) -> ArrayLike:
    """Velocity (dp/dt, units per segment) at normalized time ``t``."""
    c = np.asarray(coefs)
    return (3.0 * c[..., 3] * t + 2.0 * c[..., 2]) * t + c[..., 1]
