"""Slow ray in a wide box: the step ceiling ends the run before the bounce limit."""

from __future__ import annotations

from scenarios.common import run_drag_case


def build_sweep_params():
    return [
        {
            "case_id": "s3_slow",
            "box": {"x": 0.0, "y": 0.0, "w": 1200.0, "h": 800.0},
            "start": [600.0, 400.0],
            "end": [601.0, 400.0],
            "pair_count": 0,
            "speed": 0.5,
            "max_bounces": 50,
            "max_steps": 4000,
            "expect_segments": 3,
            "expect_stop_reason": "step_limit",
        }
    ]


def run_case(params):
    return run_drag_case(params)
