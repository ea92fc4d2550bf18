"""Horizontal ray launched from the left wall, bouncing back and forth."""

from __future__ import annotations

from scenarios.common import run_drag_case


def build_sweep_params():
    box = {"x": 100.0, "y": 100.0, "w": 400.0, "h": 300.0}
    return [
        {
            "case_id": "s0_b2",
            "box": box,
            "start": [100.0, 250.0],
            "end": [140.0, 250.0],
            "pair_count": 0,
            "max_bounces": 2,
            "expect_segments": 2,
            "expect_ends": [[500.0, 250.0], [100.0, 250.0]],
        },
        {
            "case_id": "s0_b5",
            "box": box,
            "start": [100.0, 250.0],
            "end": [140.0, 250.0],
            "pair_count": 0,
            "max_bounces": 5,
            "expect_segments": 5,
        },
    ]


def run_case(params):
    return run_drag_case(params)
