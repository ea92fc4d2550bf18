"""Common scenario helpers."""

from __future__ import annotations

from typing import Any, List, Mapping

from bounce_core.params import SimulationParams
from bounce_core.rays import RayConfig
from bounce_core.tracer import Path, trace_config

SIM_KEYS = ("box", "angle_step", "divergence_deg", "pair_count", "max_bounces", "speed", "max_steps", "decay_rate")


def make_params(params: Mapping[str, Any]) -> SimulationParams:
    """Pick the simulation keys out of a sweep-case dict."""

    return SimulationParams.from_mapping({k: params[k] for k in SIM_KEYS if k in params})


def run_drag_case(params: Mapping[str, Any]) -> tuple[SimulationParams, List[Path]]:
    sim = make_params(params)
    cfg = RayConfig.from_drag(params["start"], params["end"])
    if cfg is None:
        return sim, []
    return sim, trace_config(cfg, sim)
