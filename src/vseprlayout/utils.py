"""Shared vector and angle utilities for vseprlayout."""

from __future__ import annotations

import numpy as np

EPS = 1e-6  # substituted for zero lengths so directions stay finite


def safe_norm(v: np.ndarray) -> float:
    """Euclidean length, never below ``EPS``."""
    return max(float(np.linalg.norm(v)), EPS)


def unit(v: np.ndarray) -> np.ndarray:
    """Direction of ``v``; the zero vector stays zero instead of becoming NaN."""
    v = np.asarray(v, dtype=float)
    return v / safe_norm(v)


def norm_deg(a: float) -> float:
    """Normalize an angle to [0, 360).

    Examples
    --------
    >>> norm_deg(-90)
    270.0
    >>> norm_deg(720)
    0.0
    """
    r = float(a) % 360.0
    return 0.0 if r >= 360.0 else r


def angular_distance(a: float, b: float) -> float:
    """Smallest absolute difference between two angles (degrees), in [0, 180]."""
    d = abs(norm_deg(a - b))
    return d if d <= 180.0 else 360.0 - d


def vector_angle(u: np.ndarray, v: np.ndarray) -> float:
    """Angle between two vectors in degrees."""
    c = float(np.dot(u, v)) / (safe_norm(u) * safe_norm(v))
    return float(np.degrees(np.arccos(np.clip(c, -1.0, 1.0))))


def as_tuple(p: np.ndarray) -> tuple[float, ...]:
    """numpy row → plain float tuple (stable, JSON-friendly)."""
    return tuple(float(x) for x in np.asarray(p, dtype=float).tolist())
