"""Divergence fan from one drag, swept over the number of side-ray pairs."""

from __future__ import annotations

from scenarios.common import run_drag_case


def build_sweep_params():
    box = {"x": 0.0, "y": 0.0, "w": 1200.0, "h": 800.0}
    return [
        {
            "case_id": f"s2_pairs{n}",
            "box": box,
            "start": [600.0, 400.0],
            "end": [690.0, 430.0],
            "divergence_deg": 3.0,
            "pair_count": n,
            "max_bounces": 10,
            "decay_rate": 0.08,
            "expect_paths": 1 + 2 * n,
        }
        for n in (0, 1, 3)
    ]


def run_case(params):
    return run_drag_case(params)
