"""Fixed-step ray bounce simulation inside an axis-aligned box.

Example:
    >>> from bounce_core.geometry import Box
    >>> from bounce_core.tracer import simulate_ray
    >>> box = Box(100.0, 100.0, 400.0, 300.0)
    >>> path = simulate_ray([100.0, 250.0], [10.0, 0.0], box, max_bounces=2)
    >>> len(path.segments), path.segments[0][-1].tolist(), path.segments[1][-1].tolist()
    (2, [500.0, 250.0], [100.0, 250.0])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from bounce_core.geometry import WALL_BOTTOM, WALL_LEFT, WALL_RIGHT, WALL_TOP, Box, Vector, as_point
from bounce_core.rays import RayConfig, expand_directions

if TYPE_CHECKING:
    from bounce_core.params import SimulationParams

DEFAULT_MAX_STEPS = 4000

Segment = NDArray[np.float64]


@dataclass(frozen=True, eq=False)
class Path:
    segments: Tuple[Segment, ...]
    meta: Dict[str, object] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return len(self.segments) == 0

    def points(self) -> NDArray[np.float64]:
        """All visited positions in order, impact points not repeated."""

        if not self.segments:
            return np.empty((0, 2), dtype=float)
        parts = [self.segments[0]] + [s[1:] for s in self.segments[1:]]
        return np.concatenate(parts, axis=0)


class _SegmentBuilder:
    """Accumulates points of the open segment and freezes closed ones."""

    def __init__(self, start: Tuple[float, float]):
        self._closed: List[Segment] = []
        self._open: List[Tuple[float, float]] = [start]

    def append(self, point: Tuple[float, float]) -> None:
        self._open.append(point)

    def close(self) -> None:
        last = self._open[-1]
        self._flush()
        self._open = [last]

    def finish(self) -> Tuple[Segment, ...]:
        self._flush()
        self._open = []
        return tuple(self._closed)

    def _flush(self) -> None:
        if len(self._open) < 2:
            return
        seg = np.array(self._open, dtype=np.float64)
        seg.flags.writeable = False
        self._closed.append(seg)


def simulate_ray(
    origin: Sequence[float] | Vector,
    velocity: Sequence[float] | Vector,
    box: Box,
    max_bounces: int,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> Path:
    """Advance a ray step by step and split its trajectory at wall contacts.

    Each step moves by ``velocity``. The X axis is checked first (left, else
    right) then the Y axis (top, else bottom); a contacted axis is clamped to
    the wall and its velocity component negated. A corner contact counts as a
    single bounce. The loop stops at ``max_bounces`` bounces or ``max_steps``
    steps, whichever comes first. Segments with fewer than two points are
    dropped.
    """

    if max_bounces < 0:
        raise ValueError(f"max_bounces must be >= 0, got {max_bounces}")
    if max_steps <= 0:
        raise ValueError(f"max_steps must be > 0, got {max_steps}")

    o = as_point(origin)
    v = as_point(velocity)
    left, right, top, bottom = box.bounds()

    x, y = float(o[0]), float(o[1])
    vx, vy = float(v[0]), float(v[1])
    builder = _SegmentBuilder((x, y))
    impacts: List[Tuple[str, ...]] = []
    bounces = 0
    steps = 0

    while bounces < max_bounces and steps < max_steps:
        x += vx
        y += vy
        steps += 1

        walls: List[str] = []
        if x <= left:
            x = left
            vx = -vx
            walls.append(WALL_LEFT)
        elif x >= right:
            x = right
            vx = -vx
            walls.append(WALL_RIGHT)

        if y <= top:
            y = top
            vy = -vy
            walls.append(WALL_TOP)
        elif y >= bottom:
            y = bottom
            vy = -vy
            walls.append(WALL_BOTTOM)

        # overshoot guard for large steps
        x = min(max(x, left), right)
        y = min(max(y, top), bottom)

        builder.append((x, y))

        if walls:
            builder.close()
            impacts.append(tuple(walls))
            bounces += 1

    segments = builder.finish()
    return Path(
        segments=segments,
        meta={
            "bounce_count": bounces,
            "steps": steps,
            "stop_reason": "bounce_limit" if bounces >= max_bounces else "step_limit",
            "impacts": impacts,
            "origin": (float(o[0]), float(o[1])),
            "velocity": (float(v[0]), float(v[1])),
        },
    )


def trace_config(config: RayConfig, params: "SimulationParams") -> List[Path]:
    """Expand one retained config into its fan and simulate every ray."""

    directions = expand_directions(config.direction, params.angle_step, params.pair_count, speed=params.speed)
    return [simulate_ray(config.origin, d, params.box, params.max_bounces, params.max_steps) for d in directions]


def trace_configs(configs: Iterable[RayConfig], params: "SimulationParams") -> List[Path]:
    paths: List[Path] = []
    for cfg in configs:
        paths.extend(trace_config(cfg, params))
    return paths
