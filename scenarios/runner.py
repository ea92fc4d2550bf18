"""Scenario sweep runner + auto plot + validation report."""

from __future__ import annotations

from importlib import import_module
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import numpy as np

from analysis.path_stats import contained, corner_hits, same_paths, summarize_paths
from bounce_core.params import SimulationParams
from bounce_core.tracer import Path as BouncePath
from bounce_io.hdf5_io import CaseData, save_paths_hdf5
from plots import render

logger = logging.getLogger(__name__)

SCENARIO_MODULES = {
    "S0": "scenarios.S0_axis_return",
    "S1": "scenarios.S1_corner",
    "S2": "scenarios.S2_fan",
    "S3": "scenarios.S3_step_ceiling",
}


def check_case(params: Mapping[str, Any], sim: SimulationParams, paths: Sequence[BouncePath], rerun: Sequence[BouncePath]) -> List[str]:
    """Automatic failure checks for one sweep case; returns failure messages."""

    case_id = params["case_id"]
    failures: List[str] = []
    for i, p in enumerate(paths):
        if not contained(p, sim.box):
            failures.append(f"{case_id}: path {i} leaves the box")
        if len(p.segments) > sim.max_bounces + 1:
            failures.append(f"{case_id}: path {i} has {len(p.segments)} segments for max_bounces={sim.max_bounces}")
        if int(p.meta.get("steps", 0)) > sim.max_steps:
            failures.append(f"{case_id}: path {i} exceeded max_steps")
    if not same_paths(paths, rerun):
        failures.append(f"{case_id}: re-simulation is not bit-identical")

    if "expect_paths" in params and len(paths) != params["expect_paths"]:
        failures.append(f"{case_id}: expected {params['expect_paths']} paths, got {len(paths)}")
    if paths and "expect_segments" in params and len(paths[0].segments) != params["expect_segments"]:
        failures.append(f"{case_id}: expected {params['expect_segments']} segments, got {len(paths[0].segments)}")
    if paths and "expect_ends" in params:
        ends = [s[-1].tolist() for s in paths[0].segments]
        if not np.allclose(np.asarray(ends, dtype=float).reshape(-1, 2), np.asarray(params["expect_ends"], dtype=float).reshape(-1, 2)):
            failures.append(f"{case_id}: segment ends {ends} != {params['expect_ends']}")
    if paths and "expect_corner_hits" in params and corner_hits(paths[0]) != params["expect_corner_hits"]:
        failures.append(f"{case_id}: expected {params['expect_corner_hits']} corner hits, got {corner_hits(paths[0])}")
    if paths and "expect_stop_reason" in params and paths[0].meta.get("stop_reason") != params["expect_stop_reason"]:
        failures.append(f"{case_id}: stop_reason {paths[0].meta.get('stop_reason')} != {params['expect_stop_reason']}")
    return failures


def run_all(out_h5: str = "artifacts/bounce_sweep.h5", out_plot_dir: str = "artifacts/plots") -> str:
    payload: Dict[str, Dict[str, CaseData]] = {}
    report_lines: List[str] = [
        "# Validation Report",
        "",
        "- checks: containment, `segments <= max_bounces + 1`, step ceiling, bit-identical re-run",
        "- coordinates: canvas pixels, y grows downward",
        "",
    ]
    failures: List[str] = []
    all_bounces: List[int] = []

    for sid, mod_name in SCENARIO_MODULES.items():
        mod = import_module(mod_name)
        payload[sid] = {}
        report_lines.append(f"## {sid}")
        for p in mod.build_sweep_params():
            case_id = p["case_id"]
            sim, paths = mod.run_case(p)
            _, rerun = mod.run_case(p)
            logger.info("%s/%s: %d paths", sid, case_id, len(paths))
            payload[sid][case_id] = CaseData(params=dict(p), box=sim.box, paths=paths)
            failures.extend(check_case(p, sim, paths, rerun))

            if not paths:
                report_lines.append(f"- case `{case_id}`: paths=0")
                continue

            summary = summarize_paths(paths)
            all_bounces.extend(int(x.meta.get("bounce_count", 0)) for x in paths)
            case_dir = str(Path(out_plot_dir) / sid / case_id)
            drag = (p["start"], p["end"]) if "start" in p and "end" in p else None
            scene_png = render.render_scene(sim.box, paths, case_dir, "scene", decay_rate=sim.decay_rate, drag=drag)

            report_lines.append(
                f"- case `{case_id}`: paths={summary['n_paths']}, segments={summary['n_segments']}, "
                f"bounce_dist={summary['bounce_dist']}"
            )
            report_lines.append(
                f"  - length mean={summary['mean_length']:.2f}px, max={summary['max_length']:.2f}px, "
                f"step_limited={summary['step_limited']}, corner_hits={summary['corner_hits']}"
            )
            report_lines.append(f"  - wall hits: {summary['wall_hits']}")
            report_lines.append(f"  - plots: [scene]({scene_png})")

        report_lines.append("")

    Path(out_h5).parent.mkdir(parents=True, exist_ok=True)
    save_paths_hdf5(out_h5, payload)
    if all_bounces:
        render.plot_bounce_histogram(np.asarray(all_bounces, dtype=int), out_plot_dir)

    report_lines.append("## Failure Checks")
    if failures:
        for msg in failures:
            logger.warning("FAIL: %s", msg)
            report_lines.append(f"- FAIL: {msg}")
    else:
        report_lines.append("- PASS: No automatic failure checks triggered.")

    report_path = Path(out_plot_dir).parent / "report.md"
    report_path.write_text("\n".join(report_lines), encoding="utf-8")
    return str(report_path)


if __name__ == "__main__":
    print(run_all())
