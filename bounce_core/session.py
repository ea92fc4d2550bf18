"""In-memory ray session: retained drag configs and the current path set.

Example:
    >>> from bounce_core.geometry import Box
    >>> from bounce_core.params import SimulationParams
    >>> from bounce_core.session import RaySession
    >>> s = RaySession(SimulationParams(box=Box(0, 0, 400, 300), pair_count=1, max_bounces=3))
    >>> cfg = s.commit_drag([200, 150], [230, 160])
    >>> len(s.configs), len(s.paths)
    (1, 3)
    >>> _ = s.update_params(pair_count=0)
    >>> len(s.paths)
    1
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from bounce_core.geometry import as_point
from bounce_core.params import SimulationParams
from bounce_core.rays import RayConfig
from bounce_core.tracer import Path, trace_config, trace_configs

logger = logging.getLogger(__name__)


class RaySession:
    """Holds RayConfigs until reset and regenerates paths on parameter changes.

    ``paths`` is replaced wholesale on every recompute, never edited in place.
    """

    def __init__(self, params: SimulationParams | None = None):
        self._params = params or SimulationParams()
        self._configs: Tuple[RayConfig, ...] = ()
        self._paths: Tuple[Path, ...] = ()

    @property
    def params(self) -> SimulationParams:
        return self._params

    @property
    def configs(self) -> Tuple[RayConfig, ...]:
        return self._configs

    @property
    def paths(self) -> Tuple[Path, ...]:
        return self._paths

    def _accept_drag(self, start: Sequence[float], end: Sequence[float]) -> Optional[RayConfig]:
        if not self._params.box.contains(as_point(start)):
            logger.debug("drag start %s outside box, ignored", list(start))
            return None
        cfg = RayConfig.from_drag(start, end)
        if cfg is None:
            logger.debug("zero-length drag at %s, no ray created", list(start))
        return cfg

    def preview_drag(self, start: Sequence[float], end: Sequence[float]) -> List[Path]:
        """Paths for an in-progress drag; nothing is retained."""

        cfg = self._accept_drag(start, end)
        if cfg is None:
            return []
        return trace_config(cfg, self._params)

    def commit_drag(self, start: Sequence[float], end: Sequence[float]) -> Optional[RayConfig]:
        cfg = self._accept_drag(start, end)
        if cfg is None:
            return None
        new_paths = trace_config(cfg, self._params)
        self._configs = self._configs + (cfg,)
        self._paths = self._paths + tuple(new_paths)
        logger.debug("committed ray config #%d (%d paths)", len(self._configs), len(new_paths))
        return cfg

    def _fit_to_box(self, cfg: RayConfig) -> RayConfig:
        """Retained origins left outside by a box resize are moved onto the nearest wall."""

        box = self._params.box
        if box.contains(cfg.origin):
            return cfg
        return RayConfig(origin=box.clamp(cfg.origin), direction=cfg.direction)

    def recompute(self) -> Tuple[Path, ...]:
        self._paths = tuple(trace_configs([self._fit_to_box(c) for c in self._configs], self._params))
        logger.debug("recomputed %d configs -> %d paths", len(self._configs), len(self._paths))
        return self._paths

    def update_params(self, **changes: Any) -> Tuple[Path, ...]:
        """Apply parameter changes and regenerate every retained config."""

        new_params = self._params.replace(**changes)
        if new_params == self._params:
            return self._paths
        self._params = new_params
        return self.recompute()

    def resize_box(self, w: float, h: float, canvas: Tuple[float, float] | None = None) -> Tuple[Path, ...]:
        box = self._params.box.resized(w, h)
        if canvas is not None:
            box = box.recentered(*canvas)
        return self.update_params(box=box)

    def reset(self) -> None:
        logger.info("session reset (%d configs dropped)", len(self._configs))
        self._configs = ()
        self._paths = ()
