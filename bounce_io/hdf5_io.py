"""HDF5 export of bounce-path sweep results.

The file stores multiple scenarios and multiple sweep cases per scenario.
Segments are stored flattened; offset arrays recover the nesting.

Structure:
    /
      meta                       (attrs: created_at, coordinate_frame)
      scenarios/{scenario_id}/cases/{case_id}/
          params_json            (scalar utf-8 JSON)
          box                    (4,) x, y, w, h
          paths/
              points             (P,2) all segment points, concatenated
              segment_offsets    (S+1,) row offsets into points
              path_offsets       (L+1,) offsets into segments
              bounce_count       (L,)
              steps              (L,)
              stop_reason        (L,) variable-length UTF-8
              impacts            (L,) variable-length UTF-8 ("|" between bounces, "+" inside a corner)
              origin             (L,2)
              velocity           (L,2)

Example:
    >>> from bounce_core.geometry import Box
    >>> from bounce_core.tracer import simulate_ray
    >>> box = Box(0.0, 0.0, 100.0, 50.0)
    >>> p = simulate_ray([50.0, 25.0], [3.0, 1.0], box, max_bounces=2)
    >>> payload = {"S0": {"case0": CaseData(params={"max_bounces": 2}, box=box, paths=[p])}}
    >>> save_paths_hdf5("/tmp/bounce_example.h5", payload)
    >>> loaded, meta = load_paths_hdf5("/tmp/bounce_example.h5")
    >>> len(loaded["S0"]["case0"].paths[0].segments)
    2
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
import json
import logging
from typing import Any, Dict, List, Mapping, Tuple

import h5py
import numpy as np

from bounce_core.geometry import Box
from bounce_core.tracer import Path

logger = logging.getLogger(__name__)


@dataclass
class CaseData:
    params: Dict[str, Any]
    box: Box
    paths: List[Path]


@dataclass
class Hdf5Meta:
    created_at: str
    coordinate_frame: str


def _json_default(obj: Any) -> Any:
    if isinstance(obj, (np.integer, np.floating)):
        return obj.item()
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, Box):
        return {"x": obj.x, "y": obj.y, "w": obj.w, "h": obj.h}
    raise TypeError(f"Unsupported JSON type: {type(obj)}")


def _impacts_to_str(impacts: List[Tuple[str, ...]]) -> str:
    return "|".join("+".join(walls) for walls in impacts)


def _impacts_from_str(s: str) -> List[Tuple[str, ...]]:
    if not s:
        return []
    return [tuple(part.split("+")) for part in s.split("|")]


def _decode(s: Any) -> str:
    return s.decode() if isinstance(s, bytes) else str(s)


def save_paths_hdf5(
    filepath: str,
    scenarios: Mapping[str, Mapping[str, CaseData]],
    coordinate_frame: str = "canvas (y down)",
) -> None:
    """Save sweep results using the fixed schema above."""

    with h5py.File(filepath, "w") as h5:
        meta = h5.create_group("meta")
        meta.attrs["created_at"] = datetime.now(timezone.utc).isoformat()
        meta.attrs["coordinate_frame"] = coordinate_frame
        g_scenarios = h5.create_group("scenarios")

        for scenario_id, cases in scenarios.items():
            g_cases = g_scenarios.create_group(str(scenario_id)).create_group("cases")
            for case_id, case in cases.items():
                g_case = g_cases.create_group(str(case_id))
                g_case.create_dataset("params_json", data=json.dumps(case.params, default=_json_default))
                g_case.create_dataset("box", data=np.array([case.box.x, case.box.y, case.box.w, case.box.h], dtype=np.float64))

                paths = case.paths
                segments = [s for p in paths for s in p.segments]
                seg_lens = [len(s) for s in segments]
                points = np.concatenate(segments, axis=0) if segments else np.empty((0, 2), dtype=np.float64)
                segment_offsets = np.concatenate([[0], np.cumsum(seg_lens)]).astype(np.int64)
                path_offsets = np.concatenate([[0], np.cumsum([len(p.segments) for p in paths])]).astype(np.int64)

                g_paths = g_case.create_group("paths")
                dt = h5py.string_dtype(encoding="utf-8")
                g_paths.create_dataset("points", data=np.asarray(points, dtype=np.float64))
                g_paths.create_dataset("segment_offsets", data=segment_offsets)
                g_paths.create_dataset("path_offsets", data=path_offsets)
                g_paths.create_dataset("bounce_count", data=np.array([int(p.meta.get("bounce_count", 0)) for p in paths], dtype=np.int32))
                g_paths.create_dataset("steps", data=np.array([int(p.meta.get("steps", 0)) for p in paths], dtype=np.int64))
                g_paths.create_dataset("stop_reason", data=np.asarray([str(p.meta.get("stop_reason", "")) for p in paths], dtype=dt))
                g_paths.create_dataset("impacts", data=np.asarray([_impacts_to_str(p.meta.get("impacts", [])) for p in paths], dtype=dt))
                g_paths.create_dataset("origin", data=np.array([p.meta.get("origin", (np.nan, np.nan)) for p in paths], dtype=np.float64).reshape(-1, 2))
                g_paths.create_dataset("velocity", data=np.array([p.meta.get("velocity", (np.nan, np.nan)) for p in paths], dtype=np.float64).reshape(-1, 2))
    logger.info("wrote %s", filepath)


def load_paths_hdf5(filepath: str) -> Tuple[Dict[str, Dict[str, CaseData]], Hdf5Meta]:
    """Load a sweep file and rebuild cases and paths."""

    scenarios: Dict[str, Dict[str, CaseData]] = {}
    with h5py.File(filepath, "r") as h5:
        meta = Hdf5Meta(
            created_at=str(h5["meta"].attrs.get("created_at", "")),
            coordinate_frame=str(h5["meta"].attrs.get("coordinate_frame", "")),
        )
        for scenario_id, g_scenario in h5["scenarios"].items():
            scenarios[scenario_id] = {}
            for case_id, g_case in g_scenario["cases"].items():
                params = json.loads(_decode(g_case["params_json"][()]))
                bx, by, bw, bh = (float(v) for v in g_case["box"][()])
                g_paths = g_case["paths"]

                points = np.asarray(g_paths["points"][()], dtype=np.float64).reshape(-1, 2)
                seg_off = np.asarray(g_paths["segment_offsets"][()], dtype=np.int64)
                path_off = np.asarray(g_paths["path_offsets"][()], dtype=np.int64)
                bounce_count = np.asarray(g_paths["bounce_count"][()], dtype=np.int32)
                steps = np.asarray(g_paths["steps"][()], dtype=np.int64)
                stop_reason = [_decode(s) for s in g_paths["stop_reason"][()]]
                impacts = [_impacts_from_str(_decode(s)) for s in g_paths["impacts"][()]]
                origin = np.asarray(g_paths["origin"][()], dtype=np.float64)
                velocity = np.asarray(g_paths["velocity"][()], dtype=np.float64)

                segments: List[np.ndarray] = []
                for i in range(len(seg_off) - 1):
                    seg = points[seg_off[i] : seg_off[i + 1]].copy()
                    seg.flags.writeable = False
                    segments.append(seg)

                paths: List[Path] = []
                for i in range(len(path_off) - 1):
                    paths.append(
                        Path(
                            segments=tuple(segments[path_off[i] : path_off[i + 1]]),
                            meta={
                                "bounce_count": int(bounce_count[i]),
                                "steps": int(steps[i]),
                                "stop_reason": stop_reason[i],
                                "impacts": impacts[i],
                                "origin": tuple(float(v) for v in origin[i]),
                                "velocity": tuple(float(v) for v in velocity[i]),
                            },
                        )
                    )
                scenarios[scenario_id][case_id] = CaseData(params=params, box=Box(bx, by, bw, bh), paths=paths)

    return scenarios, meta
