"""Ray aimed exactly at the box corners; each corner contact is one bounce."""

from __future__ import annotations

from bounce_core.tracer import simulate_ray
from scenarios.common import make_params


def build_sweep_params():
    return [
        {
            "case_id": "s1_diag",
            "box": {"x": 0.0, "y": 0.0, "w": 400.0, "h": 400.0},
            "origin": [200.0, 200.0],
            "velocity": [10.0, 10.0],
            "max_bounces": 2,
            "expect_segments": 2,
            "expect_ends": [[400.0, 400.0], [0.0, 0.0]],
            "expect_corner_hits": 2,
        }
    ]


def run_case(params):
    sim = make_params(params)
    path = simulate_ray(params["origin"], params["velocity"], sim.box, sim.max_bounces, sim.max_steps)
    return sim, [path]
