"""Enclosure geometry and 2D vector helpers.

Example:
    >>> import numpy as np
    >>> from bounce_core.geometry import Box
    >>> box = Box(100.0, 100.0, 400.0, 300.0)
    >>> box.contains(np.array([500.0, 250.0]))
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

Vector = NDArray[np.float64]

WALL_LEFT = "left"
WALL_RIGHT = "right"
WALL_TOP = "top"
WALL_BOTTOM = "bottom"


def as_point(p: Sequence[float] | Vector) -> Vector:
    v = np.asarray(p, dtype=float)
    if v.shape != (2,):
        raise ValueError(f"Expected a 2D point, got shape {v.shape}")
    return v


def heading(v: Vector) -> float:
    """Angle of a 2D vector in radians, measured with atan2(dy, dx)."""

    vv = np.asarray(v, dtype=float)
    return float(np.arctan2(vv[1], vv[0]))


@dataclass(frozen=True)
class Box:
    """Axis-aligned enclosure with walls at x, x+w, y, y+h.

    Canvas convention: y grows downward, so ``top`` is the wall at ``y``.
    """

    x: float
    y: float
    w: float
    h: float

    def __post_init__(self) -> None:
        vals = (self.x, self.y, self.w, self.h)
        if not all(np.isfinite(v) for v in vals):
            raise ValueError(f"Box values must be finite, got {vals}")
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f"Box width and height must be > 0, got w={self.w}, h={self.h}")

    @property
    def left(self) -> float:
        return float(self.x)

    @property
    def right(self) -> float:
        return float(self.x + self.w)

    @property
    def top(self) -> float:
        return float(self.y)

    @property
    def bottom(self) -> float:
        return float(self.y + self.h)

    def bounds(self) -> Tuple[float, float, float, float]:
        return self.left, self.right, self.top, self.bottom

    def contains(self, point: Vector, eps: float = 0.0) -> bool:
        p = as_point(point)
        return (
            self.left - eps <= p[0] <= self.right + eps
            and self.top - eps <= p[1] <= self.bottom + eps
        )

    def clamp(self, point: Vector) -> Vector:
        p = as_point(point)
        return np.array([min(max(float(p[0]), self.left), self.right), min(max(float(p[1]), self.top), self.bottom)])

    def resized(self, w: float, h: float) -> "Box":
        return Box(self.x, self.y, float(w), float(h))

    def recentered(self, canvas_w: float, canvas_h: float) -> "Box":
        return Box.centered(canvas_w, canvas_h, self.w, self.h)

    @classmethod
    def centered(cls, canvas_w: float, canvas_h: float, w: float, h: float) -> "Box":
        """Box of size (w, h) centred in a canvas of size (canvas_w, canvas_h)."""

        return cls((canvas_w - w) / 2.0, (canvas_h - h) / 2.0, float(w), float(h))
