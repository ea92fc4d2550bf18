"""Per-path and per-case statistics for traced bounce paths."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

import numpy as np

from bounce_core.geometry import Box
from bounce_core.tracer import Path


def segment_lengths(path: Path) -> np.ndarray:
    return np.array([float(np.sum(np.linalg.norm(np.diff(s, axis=0), axis=1))) for s in path.segments], dtype=float)


def path_length(path: Path) -> float:
    return float(np.sum(segment_lengths(path)))


def impact_points(path: Path) -> np.ndarray:
    """Wall contact positions, i.e. the end of every segment closed by a bounce."""

    n = int(path.meta.get("bounce_count", 0))
    ends = [s[-1] for s in path.segments[:n]]
    return np.array(ends, dtype=float).reshape(-1, 2)


def wall_hit_counts(paths: Sequence[Path]) -> Dict[str, int]:
    out: Dict[str, int] = {}
    for p in paths:
        for walls in p.meta.get("impacts", []):
            for w in walls:
                out[w] = out.get(w, 0) + 1
    return out


def corner_hits(path: Path) -> int:
    return sum(1 for walls in path.meta.get("impacts", []) if len(walls) > 1)


def contained(path: Path, box: Box, eps: float = 0.0) -> bool:
    pts = path.points()
    if not len(pts):
        return True
    left, right, top, bottom = box.bounds()
    return bool(
        np.all(pts[:, 0] >= left - eps)
        and np.all(pts[:, 0] <= right + eps)
        and np.all(pts[:, 1] >= top - eps)
        and np.all(pts[:, 1] <= bottom + eps)
    )


def same_paths(a: Sequence[Path], b: Sequence[Path]) -> bool:
    """Bit-for-bit equality of two path sets."""

    if len(a) != len(b):
        return False
    for pa, pb in zip(a, b):
        if len(pa.segments) != len(pb.segments):
            return False
        if not all(np.array_equal(sa, sb) for sa, sb in zip(pa.segments, pb.segments)):
            return False
    return True


def summarize_paths(paths: Sequence[Path]) -> Dict[str, Any]:
    bounce = np.array([int(p.meta.get("bounce_count", 0)) for p in paths], dtype=int)
    n_segments = np.array([len(p.segments) for p in paths], dtype=int)
    lengths = np.array([path_length(p) for p in paths], dtype=float)
    stop: List[str] = [str(p.meta.get("stop_reason", "")) for p in paths]
    values, counts = np.unique(bounce, return_counts=True)
    return {
        "n_paths": len(paths),
        "n_segments": int(n_segments.sum()),
        "bounce_dist": {int(v): int(c) for v, c in zip(values, counts)},
        "mean_length": float(lengths.mean()) if len(lengths) else 0.0,
        "max_length": float(lengths.max()) if len(lengths) else 0.0,
        "step_limited": int(sum(1 for s in stop if s == "step_limit")),
        "corner_hits": int(sum(corner_hits(p) for p in paths)),
        "wall_hits": wall_hit_counts(paths),
    }
