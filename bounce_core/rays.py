"""Ray configuration records and the divergence expander.

Example:
    >>> import numpy as np
    >>> from bounce_core.rays import RayConfig, expand_directions
    >>> cfg = RayConfig.from_drag([10.0, 10.0], [20.0, 10.0])
    >>> dirs = expand_directions(cfg.direction, np.pi / 60, pair_count=1)
    >>> len(dirs)
    3
    >>> RayConfig.from_drag([5.0, 5.0], [5.0, 5.0]) is None
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from bounce_core.geometry import Vector, as_point, heading

DEFAULT_SPEED = 10.0


@dataclass(frozen=True, eq=False)
class RayConfig:
    """Origin + direction retained so a ray can be re-simulated later."""

    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        origin = as_point(self.origin).copy()
        direction = as_point(self.direction).copy()
        origin.flags.writeable = False
        direction.flags.writeable = False
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction)

    @classmethod
    def from_drag(cls, start: Sequence[float], end: Sequence[float]) -> Optional["RayConfig"]:
        """Build a config from a drag gesture; None when the drag has zero length."""

        s = as_point(start)
        d = as_point(end) - s
        if not np.any(d):
            return None
        return cls(origin=s, direction=d)


def expand_directions(
    base: Vector,
    angle_step: float,
    pair_count: int,
    speed: float = DEFAULT_SPEED,
) -> List[Vector]:
    """Fan of velocity vectors around ``base``.

    Order is [base, base - step, base + step, base - 2 step, base + 2 step, ...]
    and every vector has magnitude ``speed``.
    """

    if pair_count < 0:
        raise ValueError(f"pair_count must be >= 0, got {pair_count}")
    b = as_point(base)
    if not np.any(b):
        raise ValueError("Cannot expand a zero-magnitude direction")

    base_angle = heading(b)
    angles = [base_angle]
    for i in range(1, pair_count + 1):
        angles.append(base_angle - angle_step * i)
        angles.append(base_angle + angle_step * i)
    return [np.array([np.cos(a) * speed, np.sin(a) * speed]) for a in angles]
