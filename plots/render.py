"""Matplotlib rendering of the enclosure and traced bounce paths."""

from __future__ import annotations

from pathlib import Path as FsPath
from typing import Sequence, Tuple
import warnings

import matplotlib.pyplot as plt
from matplotlib.patches import FancyArrow, Rectangle
import numpy as np

from bounce_core.geometry import Box
from bounce_core.tracer import Path

BACKGROUND = "#1a1a1a"
BOX_COLOR = "#00ffcc"


def _save(fig: plt.Figure, outdir: str, name: str) -> str:
    FsPath(outdir).mkdir(parents=True, exist_ok=True)
    png = FsPath(outdir) / f"{name}.png"
    pdf = FsPath(outdir) / f"{name}.pdf"
    fig.savefig(png, dpi=150, bbox_inches="tight", facecolor=fig.get_facecolor())
    try:
        fig.savefig(pdf, bbox_inches="tight", facecolor=fig.get_facecolor())
    except PermissionError:
        warnings.warn(
            f"Could not write '{pdf}' (permission denied). Saved PNG only.",
            RuntimeWarning,
            stacklevel=2,
        )
    plt.close(fig)
    return str(png)


def segment_alpha(index: int, decay_rate: float) -> float:
    """Opacity of the index-th segment of a path (0 = first)."""

    return max(0.0, 1.0 - index * decay_rate)


def draw_box(ax: plt.Axes, box: Box) -> None:
    ax.add_patch(Rectangle((box.x, box.y), box.w, box.h, fill=False, edgecolor=BOX_COLOR, linewidth=2.0))


def draw_drag_arrow(ax: plt.Axes, start: Sequence[float], end: Sequence[float]) -> None:
    dx = float(end[0]) - float(start[0])
    dy = float(end[1]) - float(start[1])
    if dx == 0.0 and dy == 0.0:
        return
    ax.add_patch(
        FancyArrow(
            float(start[0]), float(start[1]), dx, dy,
            width=1.0, head_width=8.0, head_length=10.0,
            length_includes_head=True, color="white", alpha=0.8,
        )
    )


def draw_paths(ax: plt.Axes, paths: Sequence[Path], decay_rate: float = 0.0, color: str = "white") -> int:
    """Draw every segment with its decay alpha; returns the number drawn."""

    drawn = 0
    for path in paths:
        for i, seg in enumerate(path.segments):
            alpha = segment_alpha(i, decay_rate)
            if alpha <= 0.0:
                continue
            ax.plot(seg[:, 0], seg[:, 1], color=color, alpha=alpha, linewidth=1.0, solid_capstyle="round")
            drawn += 1
    return drawn


def render_scene(
    box: Box,
    paths: Sequence[Path],
    outdir: str,
    name: str = "scene",
    decay_rate: float = 0.0,
    drag: Tuple[Sequence[float], Sequence[float]] | None = None,
) -> str:
    fig, ax = plt.subplots(figsize=(8, 8 * box.h / box.w))
    fig.patch.set_facecolor(BACKGROUND)
    ax.set_facecolor(BACKGROUND)
    draw_box(ax, box)
    draw_paths(ax, paths, decay_rate)
    if drag is not None:
        draw_drag_arrow(ax, drag[0], drag[1])
    pad = 0.02 * max(box.w, box.h)
    ax.set_xlim(box.left - pad, box.right + pad)
    # canvas coordinates: y grows downward
    ax.set_ylim(box.bottom + pad, box.top - pad)
    ax.set_aspect("equal")
    ax.axis("off")
    return _save(fig, outdir, name)


def plot_bounce_histogram(bounce_count: np.ndarray, outdir: str, name: str = "bounces") -> str:
    fig, ax = plt.subplots()
    b = np.asarray(bounce_count, dtype=int)
    bins = np.arange(b.min(initial=0), b.max(initial=0) + 2) - 0.5
    ax.hist(b, bins=bins)
    ax.set_xlabel("bounce count")
    ax.set_ylabel("paths")
    ax.set_title("Bounces per path")
    return _save(fig, outdir, name)
