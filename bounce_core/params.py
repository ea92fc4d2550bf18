"""Simulation parameters passed explicitly to every trace call.

Example:
    >>> from bounce_core.params import SimulationParams
    >>> p = SimulationParams.from_mapping({"divergence_deg": 6, "pair_count": 2})
    >>> round(p.divergence_deg, 6), p.pair_count, p.max_bounces
    (6.0, 2, 10)
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
import json
from pathlib import Path
from typing import Any, Dict, Mapping

import numpy as np

from bounce_core.geometry import Box
from bounce_core.rays import DEFAULT_SPEED
from bounce_core.tracer import DEFAULT_MAX_STEPS


def default_box() -> Box:
    return Box(0.0, 0.0, 1200.0, 800.0)


@dataclass(frozen=True)
class SimulationParams:
    """Everything needed to turn retained ray configs into paths.

    box: enclosure used for every ray.
    angle_step: divergence between neighbouring fan rays, radians.
    pair_count: number of symmetric side-ray pairs around the base ray.
    max_bounces: reflection events per ray.
    speed: distance per simulation step.
    max_steps: hard ceiling on steps per ray.
    decay_rate: per-segment opacity falloff, used by rendering only.
    """

    box: Box = field(default_factory=default_box)
    angle_step: float = float(np.deg2rad(3.0))
    pair_count: int = 1
    max_bounces: int = 10
    speed: float = DEFAULT_SPEED
    max_steps: int = DEFAULT_MAX_STEPS
    decay_rate: float = 0.0

    def __post_init__(self) -> None:
        if not isinstance(self.box, Box):
            raise ValueError(f"box must be a Box, got {type(self.box).__name__}")
        for name in ("pair_count", "max_bounces", "max_steps"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.pair_count < 0:
            raise ValueError(f"pair_count must be >= 0, got {self.pair_count}")
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be >= 0, got {self.max_bounces}")
        if self.max_steps <= 0:
            raise ValueError(f"max_steps must be > 0, got {self.max_steps}")
        if not self.speed > 0:
            raise ValueError(f"speed must be > 0, got {self.speed}")
        if self.decay_rate < 0:
            raise ValueError(f"decay_rate must be >= 0, got {self.decay_rate}")

    @property
    def divergence_deg(self) -> float:
        return float(np.rad2deg(self.angle_step))

    @property
    def rays_per_config(self) -> int:
        return 1 + 2 * self.pair_count

    def replace(self, **changes: Any) -> "SimulationParams":
        if "divergence_deg" in changes:
            changes["angle_step"] = float(np.deg2rad(changes.pop("divergence_deg")))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "box": {"x": self.box.x, "y": self.box.y, "w": self.box.w, "h": self.box.h},
            "angle_step": self.angle_step,
            "pair_count": self.pair_count,
            "max_bounces": self.max_bounces,
            "speed": self.speed,
            "max_steps": self.max_steps,
            "decay_rate": self.decay_rate,
        }

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "SimulationParams":
        data = dict(mapping)
        kwargs: Dict[str, Any] = {}
        if "box" in data:
            b = data.pop("box")
            kwargs["box"] = b if isinstance(b, Box) else Box(float(b["x"]), float(b["y"]), float(b["w"]), float(b["h"]))
        if "divergence_deg" in data:
            kwargs["angle_step"] = float(np.deg2rad(float(data.pop("divergence_deg"))))
        for name in ("angle_step", "speed", "decay_rate"):
            if name in data:
                kwargs[name] = float(data.pop(name))
        for name in ("pair_count", "max_bounces", "max_steps"):
            if name in data:
                kwargs[name] = int(data.pop(name))
        if data:
            raise ValueError(f"Unknown simulation parameters: {sorted(data)}")
        return cls(**kwargs)


def load_params_json(path: str) -> SimulationParams:
    with open(Path(path), "r", encoding="utf-8") as f:
        return SimulationParams.from_mapping(json.load(f))
